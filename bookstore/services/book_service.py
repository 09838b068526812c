import logging
from typing import List, Optional

from fastapi import HTTPException
from sqlmodel import Session

from bookstore.dto import book_dto
from bookstore.models.book import Book
from bookstore.repositories import book_repository
from bookstore.schemas.book_schemas import BookCreate, BookUpdate, StockCheckResult, StockLine
from bookstore.utils.dates import utc_now

logger = logging.getLogger(__name__)


def get_all_books(
    session: Session,
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    limit: int = 12,
    sort_by: str = "title",
    sort_order: str = "asc",
):
    if category == "all":
        category = None

    result = book_repository.find_all(
        session,
        search=search,
        category=category,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    categories = book_repository.get_categories(session)

    return book_dto.to_list_response(result, categories)


def get_book_or_404(session: Session, book_id: int) -> Book:
    book = book_repository.find_by_id(session, book_id)
    if not book:
        raise HTTPException(404, "Book not found")
    return book


def get_book_by_id(session: Session, book_id: int):
    return book_dto.to_public_response(get_book_or_404(session, book_id))


def create_book(session: Session, payload: BookCreate):
    data = book_dto.to_create_data(payload)

    if data.get("isbn") and book_repository.find_by_isbn(session, data["isbn"]):
        raise HTTPException(400, "Book with this ISBN already exists")

    book = book_repository.create(session, Book(**data))
    logger.info(f"Created book {book.id} ({book.title})")
    return book_dto.to_admin_response(book)


def update_book(session: Session, book_id: int, payload: BookUpdate):
    book = get_book_or_404(session, book_id)
    data = payload.model_dump(exclude_unset=True)

    # required columns cannot be cleared
    for field in ("title", "author", "price", "stock", "category"):
        if field in data and data[field] is None:
            data.pop(field)

    if "isbn" in data and not data["isbn"]:
        data["isbn"] = None

    new_isbn = data.get("isbn")
    if new_isbn and new_isbn != book.isbn:
        if book_repository.find_by_isbn(session, new_isbn):
            raise HTTPException(400, "Book with this ISBN already exists")

    for key, value in data.items():
        setattr(book, key, value)
    book.updated_at = utc_now()

    book = book_repository.save(session, book)
    logger.info(f"Updated book {book.id}: {sorted(data)}")
    return book_dto.to_admin_response(book)


def delete_book(session: Session, book_id: int):
    book = get_book_or_404(session, book_id)
    book_repository.delete(session, book)
    logger.info(f"Deleted book {book_id}")
    return {"message": "Book deleted successfully"}


def get_categories(session: Session) -> List[str]:
    return book_repository.get_categories(session)


def search_books(session: Session, term: str):
    return book_dto.from_list(book_repository.search_books(session, term))


def get_books_by_category(session: Session, category: str):
    return book_dto.from_list(book_repository.find_by_category(session, category))


def get_low_stock_books(session: Session, threshold: int):
    books = book_repository.find_low_stock(session, threshold)
    return [book_dto.to_admin_response(book) for book in books]


def check_stock(session: Session, book_id: int, quantity: int) -> bool:
    book = book_repository.find_by_id(session, book_id)
    return book is not None and book.stock >= quantity


def update_stock(session: Session, book_id: int, delta: int):
    """Apply a signed stock change and commit it."""
    book = get_book_or_404(session, book_id)

    if delta < 0:
        changed = book_repository.decrement_stock(session, book_id, -delta)
    else:
        changed = book_repository.increment_stock(session, book_id, delta)

    if not changed:
        session.rollback()
        raise HTTPException(400, "Stock cannot go below zero")

    session.commit()
    session.refresh(book)
    logger.info(f"Stock of book {book_id} changed by {delta}, now {book.stock}")
    return book_dto.to_admin_response(book)


def validate_book_order(session: Session, lines: List[StockLine]) -> List[StockCheckResult]:
    results = []

    for line in lines:
        book = book_repository.find_by_id(session, line.book_id)

        if not book:
            results.append(StockCheckResult(
                book_id=line.book_id,
                valid=False,
                error="Book not found",
            ))
            continue

        if book.stock < line.quantity:
            results.append(StockCheckResult(
                book_id=line.book_id,
                title=book.title,
                valid=False,
                error=f"Insufficient stock. Available: {book.stock}, Requested: {line.quantity}",
            ))
            continue

        results.append(StockCheckResult(
            book_id=line.book_id,
            title=book.title,
            author=book.author,
            price=book.price,
            valid=True,
            available_stock=book.stock,
        ))

    return results
