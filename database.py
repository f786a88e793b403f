import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from book import Book
from config import settings
from user import User

logger = logging.getLogger(__name__)

# Varsayılan veri dosyası.
# Öncelik:
# 1) LIBRARY_DB_FILE (açık geçersiz kılma)
# 2) settings.data_file (LIBRARY_DATA_FILE, config.py/.env)
DATA_FILE = os.environ.get("LIBRARY_DB_FILE") or settings.data_file


class LibraryDataError(Exception):
    """Raised when a stored snapshot cannot be decoded."""


class BookRecord(BaseModel):
    id: str
    title: str
    author: str
    genre: str
    publication_year: int
    is_available: bool = True
    borrower: Optional[str] = None
    due_date: Optional[datetime] = None
    user_ratings: Dict[str, int] = Field(default_factory=dict)
    average_rating: float = 0.0
    rating_count: int = 0


class UserRecord(BaseModel):
    username: str
    password: str
    full_name: str
    email: str
    is_admin: bool = False
    is_active: bool = True
    borrowed_books: List[str] = Field(default_factory=list)


class LibrarySnapshot(BaseModel):
    """The whole persisted state: every book and every user."""
    books: List[BookRecord] = Field(default_factory=list)
    users: List[UserRecord] = Field(default_factory=list)


def encode_snapshot(books: List[Book], users: List[User]) -> str:
    snapshot = LibrarySnapshot(
        books=[BookRecord.model_validate(book.to_dict()) for book in books],
        users=[UserRecord.model_validate(user.to_dict()) for user in users],
    )
    return snapshot.model_dump_json(indent=2)


def decode_snapshot(raw: str) -> Tuple[List[Book], List[User]]:
    try:
        snapshot = LibrarySnapshot.model_validate_json(raw)
    except (ValidationError, json.JSONDecodeError, ValueError) as e:
        raise LibraryDataError(f"Invalid library data: {e}") from e
    books = [Book.from_dict(record.model_dump()) for record in snapshot.books]
    users = [User.from_dict(record.model_dump()) for record in snapshot.users]
    return books, users


def load_library(path: Optional[str] = None) -> Tuple[List[Book], List[User]]:
    """Read the saved books and users.

    A missing file means first run and yields empty collections. Any other
    read or decode failure is logged and also yields empty collections.
    """
    path = path or DATA_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError:
        logger.info(f"No library data at {path}, starting empty")
        return [], []
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read library data from {path}: {e}")
        return [], []

    try:
        books, users = decode_snapshot(raw)
    except LibraryDataError as e:
        logger.error(f"{path} could not be parsed, starting empty: {e}")
        return [], []

    logger.info(f"Loaded {len(books)} books and {len(users)} users from {path}")
    return books, users


def save_library(books: List[Book], users: List[User], path: Optional[str] = None) -> bool:
    """Overwrite the data file with the full current state.

    Returns False (after logging) if the write fails; never raises for I/O.
    """
    path = path or DATA_FILE
    try:
        payload = encode_snapshot(books, users)
        with open(path, "w", encoding="utf-8") as f:
            f.write(payload)
        return True
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to save library data to {path}: {e}")
        return False
