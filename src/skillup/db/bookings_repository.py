"""Repository functions for mentorship sessions and feedback.

Both tables are append-only: rows are created and read, never updated.
Session bookings are not checked for overlaps.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog

from skillup.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class SessionBooking:
    """A booked mentorship session."""

    id: int
    user_id: int
    mentor_name: str
    date: str
    time: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class FeedbackEntry:
    """A piece of user feedback."""

    id: int
    user_id: int
    content: str
    created_at: str


def book_session(user_id: int, mentor_name: str, date: str, time: str) -> SessionBooking:
    """Record a session booking."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO sessions (user_id, mentor_name, date, time) VALUES (?, ?, ?, ?)",
            (user_id, mentor_name, date, time),
        )
        booking_id = cursor.lastrowid

    logger.info(
        "sessions.booked",
        session_id=booking_id,
        user_id=user_id,
        mentor=mentor_name,
    )
    return SessionBooking(
        id=booking_id,
        user_id=user_id,
        mentor_name=mentor_name,
        date=date,
        time=time,
    )


def list_sessions(user_id: int) -> list[SessionBooking]:
    """Bookings made by one user, in date order."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM sessions WHERE user_id = ? ORDER BY date, time, id",
            (user_id,),
        ).fetchall()

    return [
        SessionBooking(
            id=row["id"],
            user_id=row["user_id"],
            mentor_name=row["mentor_name"],
            date=row["date"],
            time=row["time"],
        )
        for row in rows
    ]


def add_feedback(user_id: int, content: str) -> FeedbackEntry:
    """Store a feedback message."""
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO feedback (user_id, content) VALUES (?, ?)",
            (user_id, content),
        )
        row = conn.execute(
            "SELECT * FROM feedback WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.info("feedback.received", feedback_id=row["id"], user_id=user_id)
    return FeedbackEntry(
        id=row["id"],
        user_id=row["user_id"],
        content=row["content"],
        created_at=row["created_at"],
    )


def list_feedback(user_id: int | None = None) -> list[FeedbackEntry]:
    """Feedback entries, newest first, optionally for one user."""
    with get_db() as conn:
        if user_id is None:
            rows = conn.execute(
                "SELECT * FROM feedback ORDER BY id DESC"
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM feedback WHERE user_id = ? ORDER BY id DESC",
                (user_id,),
            ).fetchall()

    return [
        FeedbackEntry(
            id=row["id"],
            user_id=row["user_id"],
            content=row["content"],
            created_at=row["created_at"],
        )
        for row in rows
    ]
