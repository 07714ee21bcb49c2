"""Repository functions for books table.

Provides CRUD operations for marketplace listings plus the atomic
stock decrement used by purchases.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import structlog

from skillup.db.database import get_db

logger = structlog.get_logger(__name__)


class BookNotFoundError(Exception):
    """Raised when a listing doesn't exist."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book not found: {book_id}")


class OutOfStockError(Exception):
    """Raised when purchasing a listing with no stock left."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book out of stock: {book_id}")


class NotBookOwnerError(Exception):
    """Raised when someone other than the seller modifies a listing."""

    def __init__(self, book_id: int, user_id: int):
        self.book_id = book_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not the seller of book {book_id}")


@dataclass
class BookRecord:
    """Book record from database."""

    id: int
    title: str
    price: float
    seller_id: int | None
    department: str | None
    image: str | None
    location: str | None
    stock: int

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def insert_book(
    title: str,
    price: float,
    seller_id: int,
    department: str | None = None,
    image: str | None = None,
    location: str | None = None,
    stock: int | None = None,
) -> BookRecord:
    """Insert a new listing.

    Args:
        title: Book title
        price: Asking price
        seller_id: User offering the book
        department: Department the book is relevant to
        image: Cover image URL
        location: Pickup location on campus
        stock: Copies available; missing or 0 means a single copy

    Returns:
        The created BookRecord
    """
    with get_db() as conn:
        cursor = conn.execute(
            """
            INSERT INTO books (
                title, price, seller_id, department, image, location, stock
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (title, price, seller_id, department, image, location, stock or 1),
        )
        row = conn.execute(
            "SELECT * FROM books WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()

    logger.info("books.inserted", book_id=row["id"], seller_id=seller_id)
    return _row_to_record(row)


def get_book_by_id(book_id: int) -> BookRecord | None:
    """Get book by ID.

    Args:
        book_id: Listing identifier

    Returns:
        BookRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM books WHERE id = ?", (book_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def get_all_books(department: str | None = None) -> list[BookRecord]:
    """Get all listings, newest first.

    Args:
        department: Optional exact department filter
    """
    with get_db() as conn:
        if department:
            rows = conn.execute(
                "SELECT * FROM books WHERE department = ? ORDER BY id DESC",
                (department,),
            ).fetchall()
        else:
            rows = conn.execute("SELECT * FROM books ORDER BY id DESC").fetchall()

    return [_row_to_record(row) for row in rows]


def purchase_book(book_id: int) -> BookRecord:
    """Take one copy of a listing.

    The decrement is a single conditional UPDATE, so concurrent buyers of
    the last copy cannot both succeed and stock never goes negative.

    Args:
        book_id: Listing identifier

    Returns:
        The listing after the decrement

    Raises:
        BookNotFoundError: If the listing doesn't exist
        OutOfStockError: If no copies are left
    """
    with get_db() as conn:
        cursor = conn.execute(
            "UPDATE books SET stock = stock - 1 WHERE id = ? AND stock > 0",
            (book_id,),
        )
        row = conn.execute(
            "SELECT * FROM books WHERE id = ?", (book_id,)
        ).fetchone()

    if cursor.rowcount == 0:
        if row is None:
            raise BookNotFoundError(book_id)
        logger.info("books.out_of_stock", book_id=book_id)
        raise OutOfStockError(book_id)

    logger.info("books.purchased", book_id=book_id, stock_left=row["stock"])
    return _row_to_record(row)


def delete_book(book_id: int, user_id: int) -> None:
    """Delete a listing on behalf of its seller.

    Args:
        book_id: Listing identifier
        user_id: Authenticated user requesting the deletion

    Raises:
        BookNotFoundError: If the listing doesn't exist
        NotBookOwnerError: If the user is not the seller
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT seller_id FROM books WHERE id = ?", (book_id,)
        ).fetchone()

        if row is None:
            logger.info("books.delete_missing", book_id=book_id)
            raise BookNotFoundError(book_id)

        if row["seller_id"] != user_id:
            logger.warning(
                "books.delete_unauthorized",
                book_id=book_id,
                seller_id=row["seller_id"],
                user_id=user_id,
            )
            raise NotBookOwnerError(book_id, user_id)

        conn.execute(
            "DELETE FROM books WHERE id = ? AND seller_id = ?", (book_id, user_id)
        )

    logger.info("books.deleted", book_id=book_id)


def _row_to_record(row) -> BookRecord:
    """Convert database row to BookRecord."""
    return BookRecord(
        id=row["id"],
        title=row["title"],
        price=row["price"],
        seller_id=row["seller_id"],
        department=row["department"],
        image=row["image"],
        location=row["location"],
        stock=row["stock"] if row["stock"] is not None else 0,
    )
