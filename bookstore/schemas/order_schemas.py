from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

from bookstore.constants.order_status import OrderStatus
from bookstore.schemas.book_schemas import Pagination


class OrderItemCreate(BaseModel):
    book_id: int
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    items: List[OrderItemCreate] = Field(..., min_length=1)
    shipping_address: str = Field(..., min_length=1)
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: int
    book_id: Optional[int]
    title: str
    author: str
    price: float
    quantity: int
    subtotal: float


class Customer(BaseModel):
    id: int
    name: str
    email: str


class OrderPublic(BaseModel):
    id: int
    items: List[OrderItemResponse]
    total_amount: float
    status: str
    status_display: str
    status_color: str
    shipping_address: str
    order_date: datetime
    notes: Optional[str]
    item_count: int
    can_cancel: bool


class OrderAdmin(BaseModel):
    id: int
    customer: Optional[Customer]
    items: List[OrderItemResponse]
    total_amount: float
    status: str
    status_display: str
    status_color: str
    shipping_address: str
    order_date: datetime
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
    item_count: int
    can_update_status: bool


class OrderSummary(BaseModel):
    id: int
    total_amount: float
    status: str
    status_display: str
    status_color: str
    item_count: int
    order_date: datetime


class StatusStat(BaseModel):
    status: str
    count: int
    total_amount: float


class OrderList(BaseModel):
    orders: List[OrderPublic]
    pagination: Pagination
    stats: List[StatusStat] = []


class AdminOrderList(BaseModel):
    orders: List[OrderAdmin]
    pagination: Pagination
    stats: List[StatusStat] = []


class OrderCreated(BaseModel):
    message: str
    order: OrderPublic


class OrderStatusUpdated(BaseModel):
    message: str
    order: OrderAdmin


class LineValidation(BaseModel):
    book_id: int
    valid: bool
    title: Optional[str] = None
    author: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    subtotal: Optional[float] = None
    error: Optional[str] = None


class OrderValidation(BaseModel):
    is_valid: bool
    items: List[LineValidation]
    total_amount: float


class OrderStatsSummary(BaseModel):
    total_orders: int
    total_revenue: float


class OrderStats(BaseModel):
    status_stats: List[StatusStat]
    total_revenue: float
    summary: OrderStatsSummary
