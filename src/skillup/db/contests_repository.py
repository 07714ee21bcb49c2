"""Repository functions for contests, registrations and questions.

Question options are stored as a JSON-encoded list and decoded on read;
the decoded list keeps the inserted order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import structlog

from skillup.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class ContestRecord:
    """Contest record from database."""

    id: int
    title: str
    date: str | None
    description: str | None


@dataclass
class QuestionRecord:
    """Contest question with decoded options."""

    id: int
    contest_id: int
    question: str
    options: list[str]
    correct_option: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "contest_id": self.contest_id,
            "question": self.question,
            "options": list(self.options),
            "correct_option": self.correct_option,
        }


def encode_options(options: list[str]) -> str:
    """Serialize an option list for storage."""
    return json.dumps(list(options))


def decode_options(raw: str | None) -> list[str]:
    """Deserialize a stored option list."""
    if not raw:
        return []
    return json.loads(raw)


def list_contests() -> list[ContestRecord]:
    """All contests, earliest first."""
    with get_db() as conn:
        rows = conn.execute("SELECT * FROM contests ORDER BY date, id").fetchall()

    return [_row_to_contest(row) for row in rows]


def get_contest_by_id(contest_id: int) -> ContestRecord | None:
    """Get contest by ID."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM contests WHERE id = ?", (contest_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_contest(row)


def registered_contest_ids(user_id: int) -> set[int]:
    """IDs of contests a user registered for."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT contest_id FROM contest_registrations WHERE user_id = ?",
            (user_id,),
        ).fetchall()

    return {row["contest_id"] for row in rows}


def register(user_id: int, contest_id: int) -> bool:
    """Register a user for a contest.

    Returns:
        True if newly registered, False if already registered
    """
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO contest_registrations (user_id, contest_id) VALUES (?, ?)",
            (user_id, contest_id),
        )

    created = cursor.rowcount > 0
    logger.info(
        "contests.register",
        user_id=user_id,
        contest_id=contest_id,
        created=created,
    )
    return created


def add_question(
    contest_id: int, question: str, options: list[str], correct_option: int
) -> QuestionRecord:
    """Attach a multiple-choice question to a contest.

    Raises:
        ValueError: If correct_option doesn't index into options
    """
    if not 0 <= correct_option < len(options):
        raise ValueError(
            f"correct_option {correct_option} out of range for {len(options)} options"
        )

    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO questions (contest_id, question, options, correct_option)
            VALUES (?, ?, ?, ?)
            """,
            (contest_id, question, encode_options(options), correct_option),
        )
        row = conn.execute(
            "SELECT * FROM questions WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.debug("questions.inserted", question_id=row["id"], contest_id=contest_id)
    return _row_to_question(row)


def get_questions(contest_id: int) -> list[QuestionRecord]:
    """Questions of a contest in insertion order, options decoded."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM questions WHERE contest_id = ? ORDER BY id",
            (contest_id,),
        ).fetchall()

    return [_row_to_question(row) for row in rows]


def _row_to_contest(row) -> ContestRecord:
    """Convert database row to ContestRecord."""
    return ContestRecord(
        id=row["id"],
        title=row["title"],
        date=row["date"],
        description=row["description"],
    )


def _row_to_question(row) -> QuestionRecord:
    """Convert database row to QuestionRecord."""
    return QuestionRecord(
        id=row["id"],
        contest_id=row["contest_id"],
        question=row["question"],
        options=decode_options(row["options"]),
        correct_option=row["correct_option"],
    )
