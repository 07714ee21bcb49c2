"""Cart totals and checkout for the book marketplace.

Totals are plain sums of listing prices: no tax, shipping or discounts.
The list price (M.R.P.) shown on single-item checkout is a cosmetic 15%
markup over the asking price.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import structlog

from skillup.core.scoring import round_half_up
from skillup.db.books_repository import (
    BookNotFoundError,
    OutOfStockError,
    purchase_book,
)

logger = structlog.get_logger(__name__)

LIST_PRICE_MARKUP = 1.15


def cart_total(prices: Iterable[float]) -> float:
    """Sum of item prices."""
    return sum(prices, 0.0)


def list_price(price: float) -> int:
    """Struck-through M.R.P. displayed next to the asking price."""
    return round_half_up(price * LIST_PRICE_MARKUP)


@dataclass
class CheckoutLine:
    """Outcome for one cart item."""

    book_id: int
    purchased: bool
    price: float = 0.0
    title: str | None = None
    message: str | None = None


@dataclass
class CheckoutResult:
    """Outcome of a whole checkout."""

    lines: list[CheckoutLine] = field(default_factory=list)

    @property
    def purchased(self) -> list[CheckoutLine]:
        return [line for line in self.lines if line.purchased]

    @property
    def failed(self) -> list[CheckoutLine]:
        return [line for line in self.lines if not line.purchased]

    @property
    def total(self) -> float:
        """Amount due: only items actually purchased are charged."""
        return cart_total(line.price for line in self.purchased)


def checkout(book_ids: Iterable[int]) -> CheckoutResult:
    """Purchase every item in a cart, one copy per entry.

    Items that are missing or sold out are reported per line and don't
    stop the rest of the cart from being bought.

    Args:
        book_ids: Listing ids in cart order (repeats buy extra copies)

    Returns:
        CheckoutResult with one line per cart entry
    """
    result = CheckoutResult()

    for book_id in book_ids:
        try:
            book = purchase_book(book_id)
        except BookNotFoundError:
            result.lines.append(
                CheckoutLine(book_id=book_id, purchased=False, message="Book not found")
            )
            continue
        except OutOfStockError:
            result.lines.append(
                CheckoutLine(book_id=book_id, purchased=False, message="Out of stock")
            )
            continue

        result.lines.append(
            CheckoutLine(
                book_id=book_id,
                purchased=True,
                price=book.price,
                title=book.title,
            )
        )

    logger.info(
        "cart.checkout",
        items=len(result.lines),
        purchased=len(result.purchased),
        total=result.total,
    )
    return result
