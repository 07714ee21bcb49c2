"""Book marketplace endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from skillup.core.cart import checkout, list_price
from skillup.db.books_repository import (
    BookNotFoundError,
    BookRecord,
    NotBookOwnerError,
    OutOfStockError,
    delete_book,
    get_all_books,
    insert_book,
    purchase_book,
)
from skillup.db.users_repository import UserRecord
from skillup.utils.validators import clean_text
from skillup.web.deps import get_current_user
from skillup.web.schemas import (
    ActionResponse,
    BookCreate,
    BookCreatedResponse,
    BookResponse,
    CheckoutLineResponse,
    CheckoutRequest,
    CheckoutResponse,
    PurchaseRequest,
    PurchaseResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/books", tags=["books"])


def _to_response(book: BookRecord) -> BookResponse:
    return BookResponse(**book.to_dict(), list_price=list_price(book.price))


@router.get("", response_model=list[BookResponse])
async def list_books(department: str | None = None) -> list[BookResponse]:
    """List all listings, newest first."""
    books = get_all_books(department or None)
    logger.info("books_list", count=len(books), department=department)
    return [_to_response(b) for b in books]


@router.post("", response_model=BookCreatedResponse)
async def create_book(
    data: BookCreate,
    user: UserRecord = Depends(get_current_user),
) -> BookCreatedResponse:
    """List a book for sale; the seller is the authenticated user."""
    book = insert_book(
        title=data.title,
        price=data.price,
        seller_id=user.id,
        department=clean_text(data.department),
        image=clean_text(data.image),
        location=clean_text(data.location),
        stock=data.stock,
    )
    return BookCreatedResponse(success=True, book=_to_response(book))


@router.post("/buy", response_model=PurchaseResponse)
async def buy_book(
    data: PurchaseRequest,
    user: UserRecord = Depends(get_current_user),
) -> PurchaseResponse:
    """Buy one copy of a listing."""
    try:
        book = purchase_book(data.book_id)
    except BookNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found",
        )
    except OutOfStockError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Out of stock",
        )

    logger.info("books_bought", book_id=book.id, buyer_id=user.id)
    return PurchaseResponse(success=True, book_id=book.id, stock=book.stock)


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout_cart(
    data: CheckoutRequest,
    user: UserRecord = Depends(get_current_user),
) -> CheckoutResponse:
    """Buy every item in the cart; unavailable items are reported per line."""
    result = checkout(data.book_ids)

    logger.info(
        "books_checkout",
        buyer_id=user.id,
        purchased=len(result.purchased),
        failed=len(result.failed),
        total=result.total,
    )

    return CheckoutResponse(
        success=not result.failed,
        items=[
            CheckoutLineResponse(
                book_id=line.book_id,
                purchased=line.purchased,
                title=line.title,
                price=line.price,
                message=line.message,
            )
            for line in result.lines
        ],
        purchased_count=len(result.purchased),
        total=result.total,
    )


@router.delete(
    "/{book_id}",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def remove_book(
    book_id: int,
    user: UserRecord = Depends(get_current_user),
) -> ActionResponse:
    """Delete a listing; only its seller may do so."""
    try:
        delete_book(book_id, user.id)
    except BookNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Book not found",
        )
    except NotBookOwnerError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized",
        )

    return ActionResponse(success=True)
