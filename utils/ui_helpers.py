import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def _book_status(b: Any) -> str:
    if b.is_available:
        return "Available"
    due = b.due_date.strftime("%Y-%m-%d") if b.due_date else "?"
    return f"Borrowed by {b.borrower} until {due}"

def print_book_list(books: List[Any], empty_message: str = "No books in library.") -> None:
    """Kitap listesini mevcut çıktı moduna göre yazdır.
    - plain: 'ID - Title by Author [status] ★avg' satırları
    - json: Book.to_dict() nesnelerinin JSON dizisi
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if not books:
        print(empty_message)
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Genre", style="white")
        table.add_column("Year", justify="right")
        table.add_column("Status", style="green")
        table.add_column("Rating", justify="right")
        for b in books:
            table.add_row(b.id, b.title, b.author, b.genre, str(b.publication_year),
                          _book_status(b), f"★{b.average_rating:.1f} ({b.rating_count})")
        _console.print(table)
    else:
        for b in books:
            status = "Available" if b.is_available else "Borrowed"
            print(f"{b.id} - {b.title} by {b.author} [{status}] ★{b.average_rating:.1f}")

def print_book_details(book: Any) -> None:
    mode = get_output_mode()
    if mode == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
        return

    lines = [
        f"ID: {book.id}",
        f"Title: {book.title}",
        f"Author: {book.author}",
        f"Genre: {book.genre}",
        f"Year: {book.publication_year}",
        f"Status: {_book_status(book)}",
        f"Rating: {book.average_rating:.1f} ({book.rating_count} ratings)",
    ]

    if mode == "rich":
        _console.print(Panel.fit("\n".join(lines), title="📖 Book Details", border_style="green"))
    else:
        print("\n".join(lines))

def print_user_list(users: List[Any]) -> None:
    mode = get_output_mode()

    if not users:
        print("No users.")
        return

    if mode == "json":
        payload = [
            {k: v for k, v in u.to_dict().items() if k != "password"}
            for u in users
        ]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="👥 Users", show_lines=True, header_style="bold cyan")
        table.add_column("Username", style="magenta", no_wrap=True)
        table.add_column("Full Name", style="white")
        table.add_column("Email", style="white")
        table.add_column("Role", style="white")
        table.add_column("Status", style="green")
        table.add_column("Borrowed", justify="right")
        for u in users:
            table.add_row(u.username, u.full_name, u.email, "Admin" if u.is_admin else "User",
                          "Active" if u.is_active else "Inactive", str(len(u.borrowed_books)))
        _console.print(table)
    else:
        for u in users:
            role = "Admin" if u.is_admin else "User"
            status = "Active" if u.is_active else "Inactive"
            print(f"{u.username} ({role}) - {status} - {len(u.borrowed_books)} borrowed")

def print_stats_result(stats: Dict[str, Any]) -> None:
    """Statistikleri mevcut çıktı moduna göre yazdır."""
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    labels = {
        "total_books": "Total Books",
        "available_books": "Available Books",
        "borrowed_books": "Borrowed Books",
        "total_users": "Total Users",
        "admins": "Admins",
        "total_ratings": "Total Ratings",
    }

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = "\n".join(f"[bold]{label}:[/] {stats.get(key, 0)}" for key, label in labels.items())
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        for key, label in labels.items():
            print(f"{label}: {stats.get(key, 0)}")
