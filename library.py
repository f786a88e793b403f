import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Dict, Any

import database
import exporter
from book import Book
from config import settings
from session import Session
from user import User

logger = logging.getLogger(__name__)

MAX_BOOKS_PER_USER = settings.max_books_per_user
LOAN_PERIOD_DAYS = settings.loan_period_days


class Library:
    """Owns the book catalog and user accounts and persists them on every change."""

    def __init__(self, data_file: Optional[str] = None) -> None:
        # Tests (and callers) may point a Library at its own data file;
        # otherwise database.DATA_FILE is read at construction time.
        self.data_file = database.DATA_FILE if data_file is None else data_file
        self.last_save_error: Optional[str] = None
        self.books: List[Book]
        self.users: List[User]
        self.books, self.users = database.load_library(self.data_file)

        if not self.users:
            self.users.append(User(
                settings.default_admin_username,
                settings.default_admin_password,
                settings.default_admin_name,
                settings.default_admin_email,
                is_admin=True,
            ))
            logger.info(f"Seeded default admin account '{settings.default_admin_username}'")
            self._save()

    # ------------------------- Accounts ------------------------- #
    def login(self, username: str, password: str) -> Optional[User]:
        """Return the active user with matching credentials, or None."""
        for user in self.users:
            if user.username == username and user.password == password and user.is_active:
                return user
        return None

    def open_session(self, username: str, password: str) -> Optional[Session]:
        """Log in and wrap the user in a Session, or return None."""
        user = self.login(username, password)
        if user is None:
            logger.warning(f"Failed login for '{username}'")
            return None
        return Session(self, user)

    def register(self, username: str, password: str, full_name: str, email: str, is_admin: bool = False) -> bool:
        if self.find_user(username):
            return False
        self.users.append(User(username, password, full_name, email, is_admin))
        self._save()
        logger.info(f"Registered {'admin' if is_admin else 'user'} '{username}'")
        return True

    def set_user_active(self, username: str, active: bool) -> bool:
        user = self.find_user(username)
        if not user:
            return False
        user.is_active = active
        self._save()
        logger.info(f"User '{username}' is now {'active' if active else 'inactive'}")
        return True

    def toggle_user_status(self, username: str) -> Optional[bool]:
        """Flip a user's active flag. Returns the new flag, or None if unknown."""
        user = self.find_user(username)
        if not user:
            return None
        self.set_user_active(username, not user.is_active)
        return user.is_active

    def change_password(self, username: str, new_password: str) -> bool:
        user = self.find_user(username)
        if not user:
            return False
        user.password = new_password
        self._save()
        return True

    def update_user_info(self, username: str, full_name: str, email: str) -> bool:
        user = self.find_user(username)
        if not user:
            return False
        user.full_name = full_name
        user.email = email
        self._save()
        return True

    # ------------------------- Catalog ------------------------- #
    def search_books(self, query: str) -> List[Book]:
        """Case-insensitive match on title, author, genre or id, in catalog order."""
        q = (query or "").lower()
        return [
            b for b in self.books
            if q in b.title.lower() or q in b.author.lower() or q in b.genre.lower() or q in b.id.lower()
        ]

    def add_book(self, id: str, title: str, author: str, genre: str, year: int) -> bool:
        if self.find_book(id):
            return False
        self.books.append(Book(id, title, author, genre, year))
        self._save()
        logger.info(f"Added book {id} '{title}'")
        return True

    def remove_book(self, book_id: str) -> bool:
        book = self.find_book(book_id)
        if not book:
            return False
        # Kaydedilen ödünç alan yerine tüm kullanıcılardan temizle
        for user in self.users:
            user.remove_borrowed_book(book_id)
        self.books.remove(book)
        self._save()
        logger.info(f"Removed book {book_id}")
        return True

    def find_book(self, book_id: str) -> Optional[Book]:
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def find_user(self, username: str) -> Optional[User]:
        for user in self.users:
            if user.username == username:
                return user
        return None

    # ------------------------- Loans & ratings ------------------------- #
    def borrow_book(self, book_id: str, username: str) -> str:
        book = self.find_book(book_id)
        user = self.find_user(username)

        if book is None:
            return "Book not found!"
        if user is None:
            return "User not found!"
        if not book.is_available:
            return "Book already borrowed!"
        if len(user.borrowed_books) >= MAX_BOOKS_PER_USER:
            logger.warning(f"'{username}' hit the borrow limit of {MAX_BOOKS_PER_USER}")
            return "Borrow limit reached!"

        due = datetime.now() + timedelta(days=LOAN_PERIOD_DAYS)
        book.mark_borrowed(username, due)
        user.add_borrowed_book(book_id)
        self._save()
        logger.info(f"'{username}' borrowed {book_id}, due {due:%Y-%m-%d}")
        return f"Book borrowed! Due: {due:%Y-%m-%d}"

    def return_book(self, book_id: str) -> str:
        book = self.find_book(book_id)
        if book is None:
            return "Book not found!"
        if book.is_available:
            return "Book wasn't borrowed!"

        borrower = self.find_user(book.borrower)
        if borrower is not None:
            borrower.remove_borrowed_book(book_id)

        logger.info(f"{book_id} returned by '{book.borrower}'")
        book.mark_returned()
        self._save()
        return "Book returned successfully!"

    def rate_book(self, book_id: str, username: str, rating: int) -> str:
        book = self.find_book(book_id)
        if book is None:
            return "Book not found!"
        book.add_rating(username, rating)
        self._save()
        return "Rating submitted!"

    def get_borrowed_books(self, username: str) -> List[Book]:
        return [b for b in self.books if not b.is_available and b.borrower == username]

    # ------------------------- Snapshots ------------------------- #
    def get_all_books(self) -> List[Book]:
        return list(self.books)

    def get_all_users(self) -> List[User]:
        return list(self.users)

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        borrowed = sum(1 for b in self.books if not b.is_available)
        return {
            "total_books": len(self.books),
            "available_books": len(self.books) - borrowed,
            "borrowed_books": borrowed,
            "total_users": len(self.users),
            "admins": sum(1 for u in self.users if u.is_admin),
            "total_ratings": sum(b.rating_count for b in self.books),
        }

    def export_data_to_text_files(self, directory: Optional[str] = None) -> List[Path]:
        return exporter.export_all(self.get_all_books(), self.get_all_users(), directory)

    # ------------------------- Persistence ------------------------- #
    def _save(self) -> None:
        if database.save_library(self.books, self.users, self.data_file):
            self.last_save_error = None
        else:
            self.last_save_error = f"Could not write {self.data_file}"
