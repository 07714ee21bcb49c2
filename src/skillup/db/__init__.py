"""Database module for SQLite persistence.

Provides:
- Database connection management
- Versioned schema migrations
- First-run seed data
- Repository functions per table group (users, catalog, books,
  bookings, contests)
"""

from skillup.db.database import get_db, init_db

__all__ = ["get_db", "init_db"]
