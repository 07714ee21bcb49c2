"""Ordered, idempotent schema migrations.

Each migration runs at most once per database and is recorded in the
schema_migrations table. Column additions check PRAGMA table_info first,
so databases created by older releases (without the migrations table)
are brought up to date without data loss.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Callable

import structlog

from skillup.core.security import hash_password
from skillup.db.database import get_db, table_columns
from skillup.db.users_repository import normalize_email

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Migration:
    """A single schema migration step."""

    version: int
    name: str
    apply: Callable[[sqlite3.Connection], None]


def _base_schema(conn: sqlite3.Connection) -> None:
    """Create all platform tables."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT,
            department TEXT,
            coding_progress INTEGER NOT NULL DEFAULT 0,
            aptitude_progress INTEGER NOT NULL DEFAULT 0,
            comm_progress INTEGER NOT NULL DEFAULT 0,
            subscription TEXT NOT NULL DEFAULT 'free'
        );

        CREATE TABLE IF NOT EXISTS courses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            description TEXT,
            department TEXT,
            instructor TEXT,
            image TEXT,
            notes_url TEXT,
            video_url TEXT
        );

        CREATE TABLE IF NOT EXISTS enrollments (
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            course_id INTEGER NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
            PRIMARY KEY (user_id, course_id)
        );

        -- seller_id has no FK: seed listings reference sellers by id only
        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            price REAL NOT NULL DEFAULT 0,
            seller_id INTEGER,
            department TEXT,
            image TEXT,
            location TEXT,
            stock INTEGER NOT NULL DEFAULT 1
        );

        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            mentor_name TEXT NOT NULL,
            date TEXT NOT NULL,
            time TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS feedback (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            content TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS contests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            date TEXT,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS contest_registrations (
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            contest_id INTEGER NOT NULL REFERENCES contests(id) ON DELETE CASCADE,
            PRIMARY KEY (user_id, contest_id)
        );

        -- options: JSON-encoded list of strings
        CREATE TABLE IF NOT EXISTS questions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            contest_id INTEGER NOT NULL REFERENCES contests(id) ON DELETE CASCADE,
            question TEXT NOT NULL,
            options TEXT NOT NULL,
            correct_option INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_courses_department ON courses(department);
        CREATE INDEX IF NOT EXISTS idx_books_seller ON books(seller_id);
        CREATE INDEX IF NOT EXISTS idx_questions_contest ON questions(contest_id);
        """
    )


def _add_column_if_missing(
    conn: sqlite3.Connection, table: str, column: str, definition: str
) -> bool:
    """ALTER TABLE ... ADD COLUMN unless the column already exists."""
    if column in table_columns(conn, table):
        return False
    conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {definition}")
    logger.info("migrations.column_added", table=table, column=column)
    return True


def _books_location_stock(conn: sqlite3.Connection) -> None:
    _add_column_if_missing(conn, "books", "location", "TEXT")
    _add_column_if_missing(conn, "books", "stock", "INTEGER DEFAULT 1")


def _courses_media_links(conn: sqlite3.Connection) -> None:
    _add_column_if_missing(conn, "courses", "notes_url", "TEXT")
    _add_column_if_missing(conn, "courses", "video_url", "TEXT")


def _users_password_hash(conn: sqlite3.Connection) -> None:
    """Replace legacy plaintext passwords with salted hashes."""
    _add_column_if_missing(conn, "users", "password_hash", "TEXT")

    if "password" not in table_columns(conn, "users"):
        return

    rows = conn.execute(
        "SELECT id, password FROM users WHERE password IS NOT NULL"
    ).fetchall()
    for row in rows:
        conn.execute(
            "UPDATE users SET password_hash = ?, password = NULL WHERE id = ?",
            (hash_password(row["password"]), row["id"]),
        )

    if rows:
        logger.info("migrations.passwords_rehashed", count=len(rows))


def _users_email_lowercase(conn: sqlite3.Connection) -> None:
    """Store emails in the lowercase form that signup and login look up.

    A row whose lowercase address is already taken (legacy rows differing
    only by case) is left unchanged and reported.
    """
    rows = conn.execute(
        "SELECT id, email FROM users WHERE email != lower(trim(email)) ORDER BY id"
    ).fetchall()

    updated = 0
    for row in rows:
        canonical = normalize_email(row["email"])
        taken = conn.execute(
            "SELECT id FROM users WHERE email = ?", (canonical,)
        ).fetchone()
        if taken is not None:
            logger.warning(
                "migrations.email_collision",
                user_id=row["id"],
                kept_user_id=taken["id"],
            )
            continue
        conn.execute("UPDATE users SET email = ? WHERE id = ?", (canonical, row["id"]))
        updated += 1

    if updated:
        logger.info("migrations.emails_lowercased", count=updated)


MIGRATIONS: list[Migration] = [
    Migration(1, "base_schema", _base_schema),
    Migration(2, "books_location_stock", _books_location_stock),
    Migration(3, "courses_media_links", _courses_media_links),
    Migration(4, "users_password_hash", _users_password_hash),
    Migration(5, "users_email_lowercase", _users_email_lowercase),
]


def _ensure_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            applied_at TEXT NOT NULL DEFAULT (datetime('now'))
        )
        """
    )


def _applied_versions(conn: sqlite3.Connection) -> set[int]:
    rows = conn.execute("SELECT version FROM schema_migrations").fetchall()
    return {row["version"] for row in rows}


def run_migrations(conn: sqlite3.Connection) -> int:
    """Apply every pending migration in version order.

    Args:
        conn: Open database connection

    Returns:
        Number of migrations applied in this call
    """
    _ensure_migrations_table(conn)
    done = _applied_versions(conn)

    applied = 0
    for migration in sorted(MIGRATIONS, key=lambda m: m.version):
        if migration.version in done:
            continue

        migration.apply(conn)
        conn.execute(
            "INSERT INTO schema_migrations (version, name) VALUES (?, ?)",
            (migration.version, migration.name),
        )
        conn.commit()
        applied += 1
        logger.info(
            "migrations.applied",
            version=migration.version,
            name=migration.name,
        )

    return applied


def applied_migrations() -> list[tuple[int, str, str]]:
    """List recorded migrations as (version, name, applied_at)."""
    with get_db() as conn:
        _ensure_migrations_table(conn)
        rows = conn.execute(
            "SELECT version, name, applied_at FROM schema_migrations ORDER BY version"
        ).fetchall()

    return [(row["version"], row["name"], row["applied_at"]) for row in rows]


def current_version() -> int:
    """Highest applied migration version (0 for a fresh database)."""
    versions = [version for version, _, _ in applied_migrations()]
    return max(versions, default=0)
