"""Tests for database initialization, migrations and seed data (F1)."""

import sqlite3

import pytest

from skillup.core.security import verify_password
from skillup.db.database import get_db, init_db, table_columns
from skillup.db.migrations import MIGRATIONS, applied_migrations, current_version, run_migrations
from skillup.db.seed import BOOKS, CONTESTS, COURSES, seed_database
from skillup.db.users_repository import (
    DuplicateEmailError,
    authenticate,
    create_user,
    get_user_by_email,
)


def _count(table: str) -> int:
    with get_db() as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestInitDb:
    """Tests for init_db."""

    def test_creates_all_tables(self, db_path):
        """Every platform table exists after init."""
        with get_db() as conn:
            rows = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        tables = {row["name"] for row in rows}

        for table in (
            "users",
            "courses",
            "enrollments",
            "books",
            "sessions",
            "feedback",
            "contests",
            "contest_registrations",
            "questions",
            "schema_migrations",
        ):
            assert table in tables

    def test_creates_parent_directory(self, tmp_path):
        """Database directory is created if missing."""
        path = tmp_path / "nested" / "dir" / "platform.db"
        init_db(path)
        assert path.exists()

    def test_all_migrations_recorded(self, db_path):
        """Fresh database ends at the latest version."""
        versions = [v for v, _, _ in applied_migrations()]
        assert versions == [m.version for m in MIGRATIONS]
        assert current_version() == MIGRATIONS[-1].version

    def test_second_init_applies_nothing(self, db_path):
        """Re-running migrations on an up-to-date database is a no-op."""
        with get_db() as conn:
            assert run_migrations(conn) == 0

        init_db(db_path)
        assert len(applied_migrations()) == len(MIGRATIONS)

    def test_users_have_password_hash_not_password(self, db_path):
        """New schema stores only hashed credentials."""
        with get_db() as conn:
            columns = table_columns(conn, "users")
        assert "password_hash" in columns
        assert "password" not in columns

    def test_table_columns_unknown_table(self, db_path):
        """Unknown table yields no columns."""
        with get_db() as conn:
            assert table_columns(conn, "nope") == set()


class TestSeed:
    """Tests for first-run seed data."""

    def test_seed_counts(self, db_path):
        """Catalogue tables are populated on first run."""
        assert _count("courses") == len(COURSES) == 18
        assert _count("books") == len(BOOKS) == 4
        assert _count("contests") == len(CONTESTS) == 2
        assert _count("questions") == 12

    def test_seed_not_repeated(self, db_path):
        """Restarting doesn't duplicate catalogue rows."""
        init_db(db_path)
        with get_db() as conn:
            assert seed_database(conn) == {}
        assert _count("courses") == 18
        assert _count("questions") == 12

    def test_questions_reference_their_contest(self, db_path):
        """Each contest gets exactly its own questions."""
        with get_db() as conn:
            rows = conn.execute(
                "SELECT contest_id, COUNT(*) AS n FROM questions GROUP BY contest_id ORDER BY contest_id"
            ).fetchall()
        assert [row["n"] for row in rows] == [8, 4]

    def test_no_seed_option(self, tmp_path):
        """seed=False leaves catalogue empty."""
        init_db(tmp_path / "empty.db", seed=False)
        assert _count("courses") == 0
        assert _count("books") == 0

    def test_seed_book_out_of_stock(self, db_path):
        """One seeded listing starts sold out."""
        with get_db() as conn:
            row = conn.execute(
                "SELECT stock FROM books WHERE title = 'Introduction to Algorithms'"
            ).fetchone()
        assert row["stock"] == 0


class TestLegacyUpgrade:
    """Databases created before versioned migrations are upgraded in place."""

    @pytest.fixture
    def legacy_db(self, tmp_path):
        path = tmp_path / "legacy.db"
        conn = sqlite3.connect(path)
        conn.executescript(
            """
            CREATE TABLE users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT,
                email TEXT UNIQUE,
                password TEXT,
                department TEXT,
                coding_progress INTEGER DEFAULT 0,
                aptitude_progress INTEGER DEFAULT 0,
                comm_progress INTEGER DEFAULT 0,
                subscription TEXT DEFAULT 'free'
            );
            CREATE TABLE books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT,
                price REAL,
                seller_id INTEGER,
                department TEXT,
                image TEXT
            );
            CREATE TABLE courses (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT,
                description TEXT,
                department TEXT,
                instructor TEXT,
                image TEXT
            );
            INSERT INTO users (name, email, password, department)
            VALUES ('Old User', 'Old@Example.com', 'plain-pass', 'ECE');
            INSERT INTO books (title, price, seller_id, department)
            VALUES ('Old Book', 100, 1, 'ECE');
            """
        )
        conn.commit()
        conn.close()
        return path

    def test_missing_columns_added(self, legacy_db):
        """Old books/courses tables gain their new columns."""
        init_db(legacy_db)
        with get_db() as conn:
            assert {"location", "stock"} <= table_columns(conn, "books")
            assert {"notes_url", "video_url"} <= table_columns(conn, "courses")

    def test_existing_rows_kept(self, legacy_db):
        """Upgrade keeps data and doesn't reseed non-empty tables."""
        init_db(legacy_db)
        assert _count("books") == 1
        assert _count("courses") == len(COURSES)

    def test_plaintext_passwords_rehashed(self, legacy_db):
        """Legacy plaintext passwords become hashes and still log in."""
        init_db(legacy_db)

        with get_db() as conn:
            row = conn.execute(
                "SELECT password, password_hash FROM users WHERE email = 'old@example.com'"
            ).fetchone()
        assert row["password"] is None
        assert row["password_hash"] != "plain-pass"
        assert verify_password("plain-pass", row["password_hash"])

        user = authenticate("old@example.com", "plain-pass")
        assert user is not None
        assert user.name == "Old User"
        assert get_user_by_email("old@example.com").department == "ECE"

    def test_mixed_case_email_lowercased(self, legacy_db):
        """Legacy mixed-case addresses still log in after the upgrade."""
        init_db(legacy_db)

        with get_db() as conn:
            emails = [row["email"] for row in conn.execute("SELECT email FROM users")]
        assert emails == ["old@example.com"]

        user = authenticate("Old@Example.com", "plain-pass")
        assert user is not None
        assert user.name == "Old User"

    def test_upgraded_email_stays_unique(self, legacy_db):
        init_db(legacy_db)

        with pytest.raises(DuplicateEmailError):
            create_user("Copycat", "old@example.com", "other", "CSE")
        assert _count("users") == 1

    def test_case_collision_left_unchanged(self, legacy_db):
        """Rows differing only by case keep one owner of the address."""
        conn = sqlite3.connect(legacy_db)
        conn.execute(
            "INSERT INTO users (name, email, password) VALUES ('Twin', 'OLD@example.com', 'twin-pass')"
        )
        conn.commit()
        conn.close()

        init_db(legacy_db)

        with get_db() as conn:
            emails = {row["email"] for row in conn.execute("SELECT email FROM users")}
        assert emails == {"old@example.com", "OLD@example.com"}
        assert authenticate("old@example.com", "plain-pass").name == "Old User"
        assert current_version() == MIGRATIONS[-1].version
