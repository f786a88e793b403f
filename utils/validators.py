from typing import Optional

class YearValidator:
    """Parses publication years typed at the CLI."""

    @staticmethod
    def parse_year(raw: Optional[str]) -> Optional[int]:
        """Return the year as an int, or None if it is not a whole number."""
        if raw is None:
            return None
        t = raw.strip()
        if t.startswith(("-", "+")):
            sign, digits = t[0], t[1:]
        else:
            sign, digits = "", t
        if not digits.isdigit():
            return None
        return int(sign + digits)

class RatingValidator:
    MIN_RATING = 1
    MAX_RATING = 5

    @staticmethod
    def is_valid_rating(rating: int) -> bool:
        return RatingValidator.MIN_RATING <= rating <= RatingValidator.MAX_RATING

class TextValidator:
    """Very basic text validations for account and catalog fields."""

    @staticmethod
    def is_blank(text: Optional[str]) -> bool:
        return text is None or not text.strip()

    @staticmethod
    def validate_username(username: Optional[str]) -> bool:
        # no whitespace; exports and lookups treat usernames as single tokens
        if TextValidator.is_blank(username):
            return False
        return not any(c.isspace() for c in username)
