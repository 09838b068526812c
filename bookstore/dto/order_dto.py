"""Response shaping for orders.

Customers get the public view; admins get the admin view which adds the
customer block and bookkeeping timestamps.
"""
from typing import List, Optional

from bookstore.constants.order_status import (
    STATUS_COLOR,
    STATUS_DISPLAY,
    UPDATABLE_STATUSES,
)
from bookstore.models.order import Order
from bookstore.schemas.order_schemas import (
    AdminOrderList,
    Customer,
    OrderAdmin,
    OrderItemResponse,
    OrderList,
    OrderPublic,
    OrderSummary,
)


def get_status_display(status: str) -> str:
    return STATUS_DISPLAY.get(status, status)


def get_status_color(status: str) -> str:
    return STATUS_COLOR.get(status, "gray")


def _items(order: Order) -> List[OrderItemResponse]:
    return [
        OrderItemResponse(
            id=item.id,
            book_id=item.book_id,
            title=item.title,
            author=item.author,
            price=item.price,
            quantity=item.quantity,
            subtotal=item.subtotal,
        )
        for item in order.items
    ]


def _item_count(order: Order) -> int:
    return sum(item.quantity for item in order.items)


def _customer(order: Order) -> Optional[Customer]:
    user = order.user
    if user is None:
        return None
    return Customer(id=user.id, name=user.full_name, email=user.email)


def to_public_response(order: Order) -> OrderPublic:
    return OrderPublic(
        id=order.id,
        items=_items(order),
        total_amount=order.total_amount,
        status=order.status,
        status_display=get_status_display(order.status),
        status_color=get_status_color(order.status),
        shipping_address=order.shipping_address,
        order_date=order.order_date,
        notes=order.notes,
        item_count=_item_count(order),
        can_cancel=order.status == "pending",
    )


def to_admin_response(order: Order) -> OrderAdmin:
    return OrderAdmin(
        id=order.id,
        customer=_customer(order),
        items=_items(order),
        total_amount=order.total_amount,
        status=order.status,
        status_display=get_status_display(order.status),
        status_color=get_status_color(order.status),
        shipping_address=order.shipping_address,
        order_date=order.order_date,
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
        item_count=_item_count(order),
        can_update_status=order.status in UPDATABLE_STATUSES,
    )


def to_order_summary(order: Order) -> OrderSummary:
    return OrderSummary(
        id=order.id,
        total_amount=order.total_amount,
        status=order.status,
        status_display=get_status_display(order.status),
        status_color=get_status_color(order.status),
        item_count=len(order.items),
        order_date=order.order_date,
    )


def to_list_response(page: dict, stats: Optional[list] = None, is_admin: bool = False):
    if is_admin:
        return AdminOrderList(
            orders=[to_admin_response(o) for o in page["results"]],
            pagination=page["pagination"],
            stats=stats or [],
        )
    return OrderList(
        orders=[to_public_response(o) for o in page["results"]],
        pagination=page["pagination"],
        stats=stats or [],
    )
