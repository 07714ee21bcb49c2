"""SQLite database connection and schema management.

Provides connection management and startup initialization (migrations
plus first-run seed data) for the platform database.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/platform.db")

# Current database file (module-level, set by init_db)
_db_path: Path | None = None


def init_db(db_path: Path | None = None, seed: bool = True) -> None:
    """Initialize database: apply pending migrations and seed empty tables.

    Safe to call on every process start.

    Args:
        db_path: Path to database file. Defaults to db/platform.db
        seed: Insert catalogue seed data into empty tables
    """
    # Imported here: both modules use get_db() from this one
    from skillup.db.migrations import run_migrations
    from skillup.db.seed import seed_database

    global _db_path
    _db_path = Path(db_path) if db_path else DEFAULT_DB_PATH

    # Ensure directory exists
    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        applied = run_migrations(conn)
        if seed:
            seed_database(conn)

    logger.info("database.initialized", path=str(_db_path), migrations_applied=applied)


def get_db_path() -> Path:
    """Return the database file currently in use."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            cursor = conn.execute("SELECT * FROM books")
            rows = cursor.fetchall()
    """
    db_path = get_db_path()

    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    """Return the column names of a table (empty if it doesn't exist)."""
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return {row["name"] for row in rows}
