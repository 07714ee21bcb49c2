"""Input validation helpers.

Functions:
- validate_email(email) -> bool: Basic email format check
- validate_session_slot(date, time) -> None: Check booking date/time format
- clean_text(value) -> str | None: Strip whitespace, blank -> None
"""

import re
from datetime import date as date_type
from datetime import time as time_type

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


class InvalidSlotError(ValueError):
    """Raised when a session date or time can't be parsed."""

    pass


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if the address looks valid, False otherwise
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def validate_session_slot(date: str, time: str) -> None:
    """Check that a booking uses ISO date (YYYY-MM-DD) and HH:MM time.

    These are the formats sent by HTML date/time inputs.

    Raises:
        InvalidSlotError: If either value is malformed
    """
    try:
        date_type.fromisoformat(date)
    except ValueError as e:
        raise InvalidSlotError(f"Invalid date '{date}', expected YYYY-MM-DD") from e

    try:
        time_type.fromisoformat(time)
    except ValueError as e:
        raise InvalidSlotError(f"Invalid time '{time}', expected HH:MM") from e


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None
