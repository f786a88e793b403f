"""Human-readable text exports of the library.

Three comma-delimited files, one header row each. These are one-way
snapshots for inspection and are never read back.
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from book import Book
from config import settings
from user import User

logger = logging.getLogger(__name__)

ADMIN_HEADER = ["Username", "Password", "Full Name", "Email", "Active"]
BOOK_HEADER = ["ID", "Title", "Author", "Genre", "Year", "Available", "Borrower", "Due Date",
               "Average Rating", "Rating Count"]
USER_HEADER = ["Username", "Password", "Full Name", "Email", "Active", "Borrowed Books"]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def admin_rows(users: Iterable[User]) -> List[list]:
    return [
        [u.username, u.password, u.full_name, u.email, _flag(u.is_active)]
        for u in users if u.is_admin
    ]


def book_rows(books: Iterable[Book]) -> List[list]:
    rows = []
    for b in books:
        rows.append([
            b.id,
            b.title,
            b.author,
            b.genre,
            b.publication_year,
            _flag(b.is_available),
            b.borrower or "",
            b.due_date.strftime("%Y-%m-%d") if b.due_date else "",
            f"{b.average_rating:.2f}",
            b.rating_count,
        ])
    return rows


def user_rows(users: Iterable[User]) -> List[list]:
    return [
        [u.username, u.password, u.full_name, u.email, _flag(u.is_active), ";".join(u.borrowed_books)]
        for u in users if not u.is_admin
    ]


def _write(path: Path, header: list, rows: List[list]) -> bool:
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerow(header)
            writer.writerows(rows)
    except OSError as e:
        logger.error(f"Export to {path} failed: {e}")
        return False
    logger.info(f"Exported {len(rows)} rows to {path}")
    return True


def export_all(books: List[Book], users: List[User], directory: Optional[str] = None) -> List[Path]:
    """Write the admins, books and users files; return the paths written.

    Each file is written independently, so one failing does not stop the others.
    """
    target = Path(directory or settings.export_dir)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create export directory {target}: {e}")
        return []
    jobs = [
        (target / settings.admins_export_file, ADMIN_HEADER, admin_rows(users)),
        (target / settings.books_export_file, BOOK_HEADER, book_rows(books)),
        (target / settings.users_export_file, USER_HEADER, user_rows(users)),
    ]
    return [path for path, header, rows in jobs if _write(path, header, rows)]
