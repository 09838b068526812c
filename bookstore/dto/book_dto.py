from typing import Iterable, List

from bookstore.config import settings
from bookstore.models.book import Book
from bookstore.schemas.book_schemas import (
    BookAdmin,
    BookCreate,
    BookList,
    BookPublic,
)


def to_public_response(book: Book) -> BookPublic:
    return BookPublic(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        price=book.price,
        stock=book.stock,
        category=book.category,
        description=book.description,
        image_url=book.image_url,
        is_available=book.in_stock,
    )


def to_admin_response(book: Book) -> BookAdmin:
    public = to_public_response(book)
    return BookAdmin(
        **public.model_dump(),
        created_at=book.created_at,
        updated_at=book.updated_at,
        low_stock=book.stock < settings.low_stock_threshold,
    )


def from_list(books: Iterable[Book]) -> List[BookPublic]:
    return [to_public_response(book) for book in books]


def to_list_response(page: dict, categories: List[str]) -> BookList:
    return BookList(
        books=from_list(page["results"]),
        pagination=page["pagination"],
        categories=categories,
    )


def to_create_data(payload: BookCreate) -> dict:
    data = payload.model_dump(exclude_none=True)
    # blank isbn is stored as NULL so it never collides with another blank
    if not data.get("isbn"):
        data.pop("isbn", None)
    if not data.get("image_url"):
        data.pop("image_url", None)
    return data
