from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, ForeignKey, Integer
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from bookstore.models.order import Order


class OrderItem(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)

    # NULL once the book is removed from the catalog; the snapshot stays
    book_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer,
            ForeignKey("book.id", ondelete="SET NULL"),
            nullable=True
        )
    )

    # snapshot taken when the order is placed
    title: str
    author: str
    price: float
    quantity: int
    subtotal: float

    order: Optional["Order"] = Relationship(back_populates="items")
