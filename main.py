import logging
from typing import Optional

import typer
from rich.console import Console

from config import settings
from library import Library
from session import ADMIN_REQUIRED, Session
from utils.ui_helpers import (
    set_output_mode,
    print_book_list,
    print_book_details,
    print_user_list,
    print_stats_result,
)
from utils.validators import RatingValidator, TextValidator, YearValidator

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.WARNING))

console = Console()

app = typer.Typer(help=f"{settings.app_name} CLI")

# Kimlik doğrulama seçenekleri; eksikse sorulur
UsernameOption = typer.Option(..., "--username", "-u", prompt=True, help="Kullanıcı adı")
PasswordOption = typer.Option(..., "--password", "-p", prompt=True, hide_input=True, help="Parola")


def _get_library() -> Library:
    return Library()


def _login(lib: Library, username: str, password: str) -> Session:
    session = lib.open_session(username, password)
    if session is None:
        print("Invalid login!")
        raise typer.Exit(code=1)
    return session


def _require_admin(session: Session) -> None:
    if not session.is_admin:
        print(ADMIN_REQUIRED)
        raise typer.Exit(code=1)


def _warn_if_unsaved(lib: Library) -> None:
    # Kaydetme hataları hizmet katmanında yutulur; operatöre burada bildir
    if lib.last_save_error:
        console.print(f"[bold yellow]Warning:[/] changes were not saved ({lib.last_save_error})")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Çıktı formatı: plain | json | rich (varsayılan: plain)",
    )
):
    """CLI için genel seçenekler (ör. çıktı modu)."""
    if output:
        set_output_mode(output)


# --- Catalog ---
@app.command("list")
def cli_list():
    """List every book in catalog order."""
    print_book_list(_get_library().get_all_books())


@app.command("search")
def cli_search(query: str = typer.Argument("", help="Matches title, author, genre or ID")):
    """Case-insensitive search; an empty query lists everything."""
    books = _get_library().search_books(query)
    print_book_list(books, empty_message=f"No books match '{query}'.")


@app.command("details")
def cli_details(book_id: str):
    """Show one book with its loan state and rating."""
    book = _get_library().find_book(book_id)
    if not book:
        print("Book not found!")
        return
    print_book_details(book)


@app.command("stats")
def cli_stats():
    """Show library statistics."""
    print_stats_result(_get_library().get_statistics())


@app.command("export")
def cli_export(directory: Optional[str] = typer.Option(None, "--dir", "-d", help="Output directory")):
    """Write the admins, books and users text exports."""
    lib = _get_library()
    written = lib.export_data_to_text_files(directory)
    if len(written) == 3:
        print("Data exported to text files!")
    else:
        print(f"Export incomplete: {len(written)} of 3 files written.")
    for path in written:
        print(f"  {path}")


# --- Accounts ---
@app.command("register")
def cli_register(
    username: str = typer.Argument(...),
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True,
                                 confirmation_prompt=True),
    full_name: str = typer.Option("", "--full-name", "-n"),
    email: str = typer.Option("", "--email", "-e"),
    admin: bool = typer.Option(False, "--admin", help="Grant admin privileges"),
):
    """Create a new account."""
    if not TextValidator.validate_username(username):
        print("Invalid username!")
        return
    lib = _get_library()
    if lib.register(username, password, full_name, email, admin):
        print("Registration successful!")
        _warn_if_unsaved(lib)
    else:
        print("Username already exists!")


@app.command("passwd")
def cli_passwd(
    username: str = UsernameOption,
    password: str = PasswordOption,
    new_password: str = typer.Option(..., "--new-password", prompt=True, hide_input=True,
                                     confirmation_prompt=True),
):
    """Change your own password."""
    lib = _get_library()
    session = _login(lib, username, password)
    session.change_password(new_password)
    print("Password changed!")
    _warn_if_unsaved(lib)


@app.command("update-info")
def cli_update_info(
    username: str = UsernameOption,
    password: str = PasswordOption,
    full_name: Optional[str] = typer.Option(None, "--full-name", "-n"),
    email: Optional[str] = typer.Option(None, "--email", "-e"),
):
    """Update your display name and/or email."""
    lib = _get_library()
    session = _login(lib, username, password)
    session.update_info(
        full_name if full_name is not None else session.user.full_name,
        email if email is not None else session.user.email,
    )
    print("Information updated!")
    _warn_if_unsaved(lib)


@app.command("my-books")
def cli_my_books(username: str = UsernameOption, password: str = PasswordOption):
    """List the books you currently have on loan."""
    session = _login(_get_library(), username, password)
    print_book_list(session.my_books(), empty_message="You have no borrowed books.")


# --- Loans & ratings ---
@app.command("borrow")
def cli_borrow(book_id: str, username: str = UsernameOption, password: str = PasswordOption):
    """Borrow a book for the loan period."""
    lib = _get_library()
    session = _login(lib, username, password)
    print(session.borrow(book_id))
    _warn_if_unsaved(lib)


@app.command("return")
def cli_return(book_id: str, username: str = UsernameOption, password: str = PasswordOption):
    """Return a book you borrowed."""
    lib = _get_library()
    session = _login(lib, username, password)
    print(session.return_book(book_id))
    _warn_if_unsaved(lib)


@app.command("rate")
def cli_rate(book_id: str, rating: int, username: str = UsernameOption, password: str = PasswordOption):
    """Rate a book from 1 to 5 stars; rating again replaces your earlier rating."""
    if not RatingValidator.is_valid_rating(rating):
        print(f"Rating must be between {RatingValidator.MIN_RATING} and {RatingValidator.MAX_RATING}!")
        return
    lib = _get_library()
    session = _login(lib, username, password)
    result = session.rate(book_id, rating)
    if result == "Rating submitted!":
        print("Thank you for your rating!")
        print(f"Your Rating: {'★' * session.my_rating(book_id)}")
    else:
        print(result)
    _warn_if_unsaved(lib)


# --- Admin ---
@app.command("add")
def cli_add(
    book_id: str,
    title: str,
    author: str,
    genre: str,
    year: str,
    username: str = UsernameOption,
    password: str = PasswordOption,
):
    """Add a book to the catalog (admin)."""
    lib = _get_library()
    session = _login(lib, username, password)
    _require_admin(session)
    parsed_year = YearValidator.parse_year(year)
    if parsed_year is None:
        print("Invalid year!")
        return
    if session.add_book(book_id, title, author, genre, parsed_year):
        print("Book added!")
        _warn_if_unsaved(lib)
    else:
        print("Book ID already exists!")


@app.command("remove")
def cli_remove(
    book_id: str,
    username: str = UsernameOption,
    password: str = PasswordOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Onay istemeden sil"),
):
    """Remove a book from the catalog (admin)."""
    lib = _get_library()
    session = _login(lib, username, password)
    _require_admin(session)
    if not yes and not typer.confirm(f"Remove book {book_id}?", default=False):
        print("Removal cancelled.")
        return
    if session.remove_book(book_id):
        print("Book removed successfully!")
        _warn_if_unsaved(lib)
    else:
        print("Failed to remove book!")


@app.command("users")
def cli_users(username: str = UsernameOption, password: str = PasswordOption):
    """List all accounts (admin)."""
    session = _login(_get_library(), username, password)
    _require_admin(session)
    print_user_list(session.users())


@app.command("toggle-user")
def cli_toggle_user(target: str, username: str = UsernameOption, password: str = PasswordOption):
    """Activate or deactivate an account (admin)."""
    lib = _get_library()
    session = _login(lib, username, password)
    _require_admin(session)
    active = session.toggle_user(target)
    if active is None:
        print("User not found!")
        return
    print(f"{target} is now {'Active' if active else 'Inactive'}.")
    _warn_if_unsaved(lib)


@app.command("reset-password")
def cli_reset_password(
    target: str,
    new_password: str = typer.Option(..., "--new-password", prompt=True, hide_input=True),
    username: str = UsernameOption,
    password: str = PasswordOption,
):
    """Set another account's password (admin)."""
    lib = _get_library()
    session = _login(lib, username, password)
    _require_admin(session)
    if session.reset_password(target, new_password):
        print("Password updated!")
        _warn_if_unsaved(lib)
    else:
        print("User not found!")


if __name__ == "__main__":
    app()
