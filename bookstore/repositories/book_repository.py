from typing import List, Optional
from sqlalchemy import update
from sqlmodel import Session, select, or_
from bookstore.models.book import Book
from bookstore.models.order_item import OrderItem
from bookstore.utils.pagination import paginate

SORTABLE_FIELDS = {
    "title": Book.title,
    "author": Book.author,
    "price": Book.price,
    "stock": Book.stock,
    "category": Book.category,
    "created_at": Book.created_at,
}


def _search_clause(term: str):
    like = f"%{term}%"
    return or_(
        Book.title.ilike(like),
        Book.author.ilike(like),
        Book.description.ilike(like),
    )


def find_all(
    session: Session,
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    limit: int = 12,
    sort_by: str = "title",
    sort_order: str = "asc",
):
    query = select(Book)

    if search:
        query = query.where(_search_clause(search))

    if category:
        query = query.where(Book.category == category)

    column = SORTABLE_FIELDS.get(sort_by, Book.title)
    order = column.desc() if sort_order == "desc" else column.asc()
    query = query.order_by(order, Book.id)

    return paginate(session=session, query=query, page=page, limit=limit)


def find_by_id(session: Session, book_id: int) -> Optional[Book]:
    return session.get(Book, book_id)


def find_by_isbn(session: Session, isbn: str) -> Optional[Book]:
    return session.exec(select(Book).where(Book.isbn == isbn)).first()


def find_by_category(session: Session, category: str) -> List[Book]:
    return session.exec(
        select(Book).where(Book.category == category).order_by(Book.title)
    ).all()


def find_low_stock(session: Session, threshold: int) -> List[Book]:
    return session.exec(
        select(Book).where(Book.stock < threshold).order_by(Book.stock, Book.title)
    ).all()


def search_books(session: Session, term: str) -> List[Book]:
    return session.exec(
        select(Book).where(_search_clause(term)).order_by(Book.title)
    ).all()


def get_categories(session: Session) -> List[str]:
    return list(session.exec(
        select(Book.category).distinct().order_by(Book.category)
    ).all())


def create(session: Session, book: Book) -> Book:
    session.add(book)
    session.commit()
    session.refresh(book)
    return book


def save(session: Session, book: Book) -> Book:
    session.add(book)
    session.commit()
    session.refresh(book)
    return book


def delete(session: Session, book: Book):
    # order items keep their snapshot but lose the link to the removed book
    session.exec(
        update(OrderItem)
        .where(OrderItem.book_id == book.id)
        .values(book_id=None)
        .execution_options(synchronize_session="fetch")
    )
    session.delete(book)
    session.commit()


def decrement_stock(session: Session, book_id: int, quantity: int) -> bool:
    """Take ``quantity`` copies off the shelf unless that would go below zero.

    Runs as a single conditional UPDATE so two orders racing for the last
    copies cannot both succeed. Returns False when no row was changed.
    Does not commit.
    """
    result = session.exec(
        update(Book)
        .where(Book.id == book_id, Book.stock >= quantity)
        .values(stock=Book.stock - quantity)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount == 1


def increment_stock(session: Session, book_id: int, quantity: int) -> bool:
    """Put ``quantity`` copies back. Does not commit."""
    result = session.exec(
        update(Book)
        .where(Book.id == book_id)
        .values(stock=Book.stock + quantity)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount == 1
