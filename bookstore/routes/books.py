from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlmodel import Session
from bookstore.config import settings
from bookstore.database import get_session
from bookstore.dependencies.admin import require_admin
from bookstore.models.user import User
from bookstore.schemas.book_schemas import (
    BookAdmin,
    BookCreate,
    BookList,
    BookMessage,
    BookPublic,
    BookUpdate,
    StockCheckResult,
    StockLine,
)
from bookstore.services import book_service

router = APIRouter()


class StockAdjust(BaseModel):
    delta: int


# ---------- PUBLIC ----------

@router.get("", response_model=BookList, summary="List books with search, filter and pagination")
def list_books(
    search: Optional[str] = Query(None, description="Search books by title, author, or description"),
    category: Optional[str] = Query(None, description="Filter by category, 'all' for every category"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort_by: Literal["title", "author", "price", "stock", "category", "created_at"] = "title",
    sort_order: Literal["asc", "desc"] = "asc",
    session: Session = Depends(get_session),
):
    return book_service.get_all_books(
        session,
        search=search,
        category=category,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/categories/list", response_model=List[str])
def list_categories(session: Session = Depends(get_session)):
    return book_service.get_categories(session)


@router.get("/category/{category}", response_model=List[BookPublic])
def books_by_category(category: str, session: Session = Depends(get_session)):
    return book_service.get_books_by_category(session, category)


@router.get("/search/query", response_model=List[BookPublic], summary="Search books by title, author or description")
def search_books(
    q: str = Query(..., min_length=1, description="Search term"),
    session: Session = Depends(get_session),
):
    return book_service.search_books(session, q)


@router.post("/validate", response_model=List[StockCheckResult])
def validate_lines(lines: List[StockLine], session: Session = Depends(get_session)):
    return book_service.validate_book_order(session, lines)


@router.get("/{book_id}/availability")
def check_availability(
    book_id: int,
    quantity: int = Query(1, ge=1),
    session: Session = Depends(get_session),
):
    return {
        "book_id": book_id,
        "quantity": quantity,
        "available": book_service.check_stock(session, book_id, quantity),
    }


@router.get("/{book_id}", response_model=BookPublic)
def get_book(book_id: int, session: Session = Depends(get_session)):
    return book_service.get_book_by_id(session, book_id)


# ---------- ADMIN ----------

@router.get("/admin/low-stock", response_model=List[BookAdmin])
def low_stock_books(
    threshold: Optional[int] = Query(None, ge=1),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return book_service.get_low_stock_books(session, threshold or settings.low_stock_threshold)


@router.post("", response_model=BookMessage, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    book = book_service.create_book(session, payload)
    return {"message": "Book created successfully", "book": book}


@router.put("/{book_id}", response_model=BookMessage)
def update_book(
    book_id: int,
    payload: BookUpdate,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    book = book_service.update_book(session, book_id, payload)
    return {"message": "Book updated successfully", "book": book}


@router.patch("/{book_id}/stock", response_model=BookMessage)
def adjust_stock(
    book_id: int,
    payload: StockAdjust,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    book = book_service.update_stock(session, book_id, payload.delta)
    return {"message": "Stock updated successfully", "book": book}


@router.delete("/{book_id}")
def delete_book(
    book_id: int,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return book_service.delete_book(session, book_id)
