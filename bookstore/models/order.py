from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime

from bookstore.utils.dates import TIMESTAMP, utc_now

from bookstore.models.order_item import OrderItem
from bookstore.models.user import User


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    total_amount: float
    status: str = Field(default="pending", index=True)
    shipping_address: str
    notes: Optional[str] = None

    order_date: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    created_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=TIMESTAMP)

    user: Optional["User"] = Relationship()
    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"order_by": "OrderItem.id"}
    )
