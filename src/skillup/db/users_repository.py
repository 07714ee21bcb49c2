"""Repository functions for users table.

Provides account creation, credential checks, and the few updates a
user record ever receives (progress counters and subscription tier).
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any, Literal

import structlog

from skillup.core.security import hash_password, verify_password
from skillup.db.database import get_db

logger = structlog.get_logger(__name__)

ProgressTrack = Literal["coding", "aptitude", "comm"]
SubscriptionTier = Literal["free", "premium"]

# Progress track -> column
PROGRESS_COLUMNS: dict[str, str] = {
    "coding": "coding_progress",
    "aptitude": "aptitude_progress",
    "comm": "comm_progress",
}


class DuplicateEmailError(Exception):
    """Raised when an account with the same email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already exists: {email}")


@dataclass
class UserRecord:
    """User record from database."""

    id: int
    name: str
    email: str
    department: str | None
    coding_progress: int
    aptitude_progress: int
    comm_progress: int
    subscription: str
    password_hash: str | None = None

    def progress_for(self, track: str) -> int:
        """Current value of one progress counter."""
        return getattr(self, PROGRESS_COLUMNS[track])

    def to_public_dict(self) -> dict[str, Any]:
        """Serializable view without credential material."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "coding_progress": self.coding_progress,
            "aptitude_progress": self.aptitude_progress,
            "comm_progress": self.comm_progress,
            "subscription": self.subscription,
        }


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


def create_user(name: str, email: str, password: str, department: str | None) -> UserRecord:
    """Create a new account.

    Args:
        name: Display name
        email: Login email (unique)
        password: Plaintext password, hashed before storage
        department: Academic department (CSE, ECE, MBA, ...)

    Returns:
        The created UserRecord

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    email = normalize_email(email)
    try:
        with get_db() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (name, email, password_hash, department)
                VALUES (?, ?, ?, ?)
                """,
                (name, email, hash_password(password), department),
            )
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
    except sqlite3.IntegrityError as e:
        logger.info("users.duplicate_email")
        raise DuplicateEmailError(email) from e

    logger.info("users.created", user_id=row["id"], department=department)
    return _row_to_record(row)


def get_user_by_id(user_id: int) -> UserRecord | None:
    """Get user by ID."""
    with get_db() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def get_user_by_email(email: str) -> UserRecord | None:
    """Get user by email."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE email = ?", (normalize_email(email),)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def authenticate(email: str, password: str) -> UserRecord | None:
    """Check credentials.

    Returns:
        The matching UserRecord, or None when the email is unknown or the
        password does not match
    """
    user = get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("users.login_failed")
        return None

    logger.info("users.login", user_id=user.id)
    return user


def count_users() -> int:
    """Number of registered accounts."""
    with get_db() as conn:
        row = conn.execute("SELECT COUNT(*) AS count FROM users").fetchone()
    return row["count"]


def update_progress(user_id: int, track: ProgressTrack, value: int) -> UserRecord | None:
    """Set one progress counter to an absolute value.

    Args:
        user_id: User to update
        track: "coding", "aptitude" or "comm"
        value: New counter value

    Returns:
        Updated UserRecord, or None if the user doesn't exist

    Raises:
        ValueError: If the track is unknown
    """
    column = PROGRESS_COLUMNS.get(track)
    if column is None:
        raise ValueError(f"Unknown progress track: {track}")

    with get_db() as conn:
        # column comes from the fixed PROGRESS_COLUMNS mapping
        cursor = conn.execute(
            f"UPDATE users SET {column} = ? WHERE id = ?", (value, user_id)
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()

    logger.info("users.progress_updated", user_id=user_id, track=track, value=value)
    return _row_to_record(row)


def update_subscription(user_id: int, tier: SubscriptionTier) -> UserRecord | None:
    """Change a user's subscription tier.

    Returns:
        Updated UserRecord, or None if the user doesn't exist
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE users SET subscription = ? WHERE id = ?", (tier, user_id)
        )
        if cursor.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()

    logger.info("users.subscription_updated", user_id=user_id, tier=tier)
    return _row_to_record(row)


def _row_to_record(row) -> UserRecord:
    """Convert database row to UserRecord."""
    return UserRecord(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        department=row["department"],
        coding_progress=row["coding_progress"] or 0,
        aptitude_progress=row["aptitude_progress"] or 0,
        comm_progress=row["comm_progress"] or 0,
        subscription=row["subscription"] or "free",
        password_hash=row["password_hash"],
    )
