from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint
from typing import Optional
from datetime import datetime

from bookstore.utils.dates import TIMESTAMP, utc_now

DEFAULT_COVER = (
    "https://images.unsplash.com/photo-1544947950-fa07a98d237f"
    "?w=300&h=400&fit=crop"
)


class Book(SQLModel, table=True):
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_book_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_book_price_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    author: str = Field(index=True)
    isbn: Optional[str] = Field(default=None, unique=True)

    #Shop Details
    price: float
    stock: int = Field(default=0)
    category: str = Field(index=True)

    description: Optional[str] = None
    image_url: str = Field(default=DEFAULT_COVER)

    #timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)

    @property
    def in_stock(self) -> bool:
        return self.stock is not None and self.stock > 0
