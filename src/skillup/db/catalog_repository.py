"""Repository functions for courses and enrollments tables."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog

from skillup.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class CourseRecord:
    """Course record from database."""

    id: int
    title: str
    description: str | None
    department: str | None
    instructor: str | None
    image: str | None
    notes_url: str | None
    video_url: str | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def list_courses(department: str | None = None) -> list[CourseRecord]:
    """List courses, optionally restricted to one department.

    Args:
        department: Exact department name; None or "" returns every course
    """
    with get_db() as conn:
        if department:
            rows = conn.execute(
                "SELECT * FROM courses WHERE department = ? ORDER BY id",
                (department,),
            ).fetchall()
        else:
            rows = conn.execute("SELECT * FROM courses ORDER BY id").fetchall()

    return [_row_to_record(row) for row in rows]


def get_course_by_id(course_id: int) -> CourseRecord | None:
    """Get course by ID."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM courses WHERE id = ?", (course_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def list_departments() -> list[str]:
    """Distinct departments that have at least one course."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT DISTINCT department FROM courses WHERE department IS NOT NULL ORDER BY department"
        ).fetchall()
    return [row["department"] for row in rows]


def enroll(user_id: int, course_id: int) -> bool:
    """Enroll a user in a course.

    Returns:
        True if a new enrollment was created, False if the user was
        already enrolled
    """
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO enrollments (user_id, course_id) VALUES (?, ?)",
            (user_id, course_id),
        )

    created = cursor.rowcount > 0
    logger.info(
        "enrollments.enroll",
        user_id=user_id,
        course_id=course_id,
        created=created,
    )
    return created


def list_enrolled_courses(user_id: int) -> list[CourseRecord]:
    """Courses a user is enrolled in."""
    with get_db() as conn:
        rows = conn.execute(
            """
            SELECT c.* FROM courses c
            JOIN enrollments e ON e.course_id = c.id
            WHERE e.user_id = ?
            ORDER BY c.id
            """,
            (user_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def count_enrollments(user_id: int, course_id: int) -> int:
    """Number of enrollment rows for a (user, course) pair."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS count FROM enrollments WHERE user_id = ? AND course_id = ?",
            (user_id, course_id),
        ).fetchone()
    return row["count"]


def _row_to_record(row) -> CourseRecord:
    """Convert database row to CourseRecord."""
    return CourseRecord(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        department=row["department"],
        instructor=row["instructor"],
        image=row["image"],
        notes_url=row["notes_url"],
        video_url=row["video_url"],
    )
