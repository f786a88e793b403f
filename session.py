from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from book import Book
from user import User

if TYPE_CHECKING:
    from library import Library

ADMIN_REQUIRED = "Admin privileges required!"


@dataclass
class Session:
    """A logged-in user acting on a Library.

    Every action runs as ``user``; admin-only actions are refused for
    regular accounts.
    """

    library: "Library"
    user: User

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    # --- Any account ---
    def borrow(self, book_id: str) -> str:
        return self.library.borrow_book(book_id, self.username)

    def return_book(self, book_id: str) -> str:
        book = self.library.find_book(book_id)
        if book is not None and not book.is_available and book.borrower != self.username:
            return "You did not borrow this book!"
        return self.library.return_book(book_id)

    def rate(self, book_id: str, rating: int) -> str:
        return self.library.rate_book(book_id, self.username, rating)

    def my_rating(self, book_id: str) -> Optional[int]:
        book = self.library.find_book(book_id)
        return book.get_user_rating(self.username) if book else None

    def my_books(self) -> List[Book]:
        return self.library.get_borrowed_books(self.username)

    def change_password(self, new_password: str) -> bool:
        return self.library.change_password(self.username, new_password)

    def update_info(self, full_name: str, email: str) -> bool:
        return self.library.update_user_info(self.username, full_name, email)

    # --- Admin only ---
    def add_book(self, id: str, title: str, author: str, genre: str, year: int) -> bool:
        if not self.is_admin:
            return False
        return self.library.add_book(id, title, author, genre, year)

    def remove_book(self, book_id: str) -> bool:
        if not self.is_admin:
            return False
        return self.library.remove_book(book_id)

    def toggle_user(self, username: str) -> Optional[bool]:
        if not self.is_admin:
            return None
        return self.library.toggle_user_status(username)

    def reset_password(self, username: str, new_password: str) -> bool:
        if not self.is_admin:
            return False
        return self.library.change_password(username, new_password)

    def users(self) -> List[User]:
        if not self.is_admin:
            return []
        return self.library.get_all_users()
