from __future__ import annotations

from datetime import datetime


class Book:
    """Represents a single catalog entry, its loan state and its ratings."""

    def __init__(self, id: str, title: str, author: str, genre: str, publication_year: int,
                 is_available: bool = True, borrower: str | None = None, due_date: datetime | None = None,
                 # Puanlama alanları
                 user_ratings: dict | None = None, average_rating: float = 0.0,
                 rating_count: int = 0) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.genre = genre
        self.publication_year = publication_year
        self.is_available = is_available
        self.borrower = borrower
        self.due_date = due_date

        # Puanlama alanları
        self.user_ratings: dict[str, int] = dict(user_ratings or {})
        self.average_rating = average_rating
        self.rating_count = rating_count

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        status = "Available" if self.is_available else "Borrowed"
        return f"{self.title} - {self.author} ({status}) ★{self.average_rating:.1f}"

    def get_user_rating(self, username: str) -> int | None:
        return self.user_ratings.get(username)

    def add_rating(self, username: str, rating: int) -> None:
        """Record ``username``'s rating and update the running average in place.

        Ratings outside 1..5 are ignored. A repeat rating replaces the user's
        previous contribution without changing the count.
        """
        if rating < 1 or rating > 5:
            return

        previous = self.user_ratings.get(username)
        self.user_ratings[username] = rating

        if previous is not None:
            self.average_rating = (self.average_rating * self.rating_count - previous + rating) / self.rating_count
        else:
            self.average_rating = (self.average_rating * self.rating_count + rating) / (self.rating_count + 1)
            self.rating_count += 1

    def mark_borrowed(self, username: str, due_date: datetime) -> None:
        self.is_available = False
        self.borrower = username
        self.due_date = due_date

    def mark_returned(self) -> None:
        self.is_available = True
        self.borrower = None
        self.due_date = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "publication_year": self.publication_year,
            "is_available": self.is_available,
            "borrower": self.borrower,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            # Puanlama alanları
            "user_ratings": dict(self.user_ratings),
            "average_rating": self.average_rating,
            "rating_count": self.rating_count,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        # Tarih, JSON'dan dize olarak ya da şemadan datetime olarak gelebilir
        due = data.get("due_date")
        if isinstance(due, str):
            due = datetime.fromisoformat(due) if due else None

        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            genre=data.get("genre", ""),
            publication_year=data.get("publication_year", 0),
            is_available=data.get("is_available", True),
            borrower=data.get("borrower"),
            due_date=due,
            # Puanlama alanları
            user_ratings=data.get("user_ratings"),
            average_rating=data.get("average_rating", 0.0),
            rating_count=data.get("rating_count", 0),
        )
