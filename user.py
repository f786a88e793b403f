from __future__ import annotations


class User:
    """A library account. Passwords are kept as given (plain text)."""

    def __init__(self, username: str, password: str, full_name: str, email: str,
                 is_admin: bool = False, is_active: bool = True,
                 borrowed_books: list | None = None) -> None:
        self.username = username
        self.password = password
        self.full_name = full_name
        self.email = email
        self.is_admin = is_admin
        self.is_active = is_active
        # Ödünç alma sırasına göre kitap kimlikleri
        self.borrowed_books: list[str] = list(borrowed_books or [])

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.username} ({'Admin' if self.is_admin else 'User'})"

    def add_borrowed_book(self, book_id: str) -> None:
        self.borrowed_books.append(book_id)

    def remove_borrowed_book(self, book_id: str) -> None:
        if book_id in self.borrowed_books:
            self.borrowed_books.remove(book_id)

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "password": self.password,
            "full_name": self.full_name,
            "email": self.email,
            "is_admin": self.is_admin,
            "is_active": self.is_active,
            "borrowed_books": list(self.borrowed_books),
        }

    @staticmethod
    def from_dict(data: dict) -> "User":
        return User(
            username=data["username"],
            password=data["password"],
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            is_admin=data.get("is_admin", False),
            is_active=data.get("is_active", True),
            borrowed_books=data.get("borrowed_books"),
        )
