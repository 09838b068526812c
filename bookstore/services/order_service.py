"""Order placement and stock reconciliation.

Placing an order, cancelling it and moving it to ``cancelled`` through an
admin status change all touch book stock. Each of these runs inside a single
session transaction: the order rows and every stock change commit together
or not at all.

Stock changes and status flips are conditional UPDATEs
(``stock >= quantity``, ``status = <expected>``) so concurrent requests
cannot oversell a book or restore the same order's stock twice.
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException
from sqlmodel import Session

from bookstore.constants.order_status import can_transition
from bookstore.dto import order_dto
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem
from bookstore.models.user import User
from bookstore.repositories import book_repository, order_repository
from bookstore.schemas.order_schemas import (
    LineValidation,
    OrderCreate,
    OrderCreated,
    OrderItemCreate,
    OrderStats,
    OrderStatusUpdated,
    OrderValidation,
)

logger = logging.getLogger(__name__)


def _merge_lines(items: List[OrderItemCreate]) -> Dict[int, int]:
    merged: Dict[int, int] = {}
    for item in items:
        merged[item.book_id] = merged.get(item.book_id, 0) + item.quantity
    return merged


def create_order(session: Session, payload: OrderCreate, user: User) -> OrderCreated:
    lines = _merge_lines(payload.items)

    order_items = []
    total_amount = 0.0

    for book_id, quantity in lines.items():
        book = book_repository.find_by_id(session, book_id)

        if not book:
            raise HTTPException(400, f"Book with ID {book_id} not found")

        if book.stock < quantity:
            raise HTTPException(
                400,
                f'Insufficient stock for "{book.title}". '
                f"Available: {book.stock}, Requested: {quantity}"
            )

        subtotal = round(book.price * quantity, 2)
        total_amount += subtotal

        order_items.append(OrderItem(
            book_id=book.id,
            title=book.title,
            author=book.author,
            price=book.price,
            quantity=quantity,
            subtotal=subtotal,
        ))

    order = Order(
        user_id=user.id,
        total_amount=round(total_amount, 2),
        status="pending",
        shipping_address=payload.shipping_address,
        notes=payload.notes or None,
    )

    try:
        session.add(order)
        session.flush()

        for item in order_items:
            item.order_id = order.id
            session.add(item)

            if not book_repository.decrement_stock(session, item.book_id, item.quantity):
                raise HTTPException(
                    409,
                    f'Insufficient stock for "{item.title}". '
                    f"Requested: {item.quantity}"
                )

        session.commit()

    except Exception as e:
        logger.error(f"Error placing order for user {user.id}: {e}")
        session.rollback()
        raise

    session.refresh(order)
    logger.info(
        f"Order {order.id} placed by user {user.id}: "
        f"{len(order_items)} line(s), total {order.total_amount}"
    )

    return OrderCreated(
        message="Order created successfully",
        order=order_dto.to_public_response(order),
    )


def get_order_or_404(session: Session, order_id: int) -> Order:
    order = order_repository.find_by_id(session, order_id)
    if not order:
        raise HTTPException(404, "Order not found")
    return order


def _check_access(order: Order, user: User):
    if not user.is_admin and order.user_id != user.id:
        raise HTTPException(403, "Access denied")


def get_order_by_id(session: Session, order_id: int, user: User):
    order = get_order_or_404(session, order_id)
    _check_access(order, user)

    if user.is_admin:
        return order_dto.to_admin_response(order)
    return order_dto.to_public_response(order)


def get_user_orders(session: Session, user: User, *, page: int = 1, limit: int = 10):
    result = order_repository.find_by_user_id(session, user.id, page=page, limit=limit)
    return order_dto.to_list_response(result, is_admin=False)


def get_all_orders(
    session: Session,
    *,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
):
    if status == "all":
        status = None

    result = order_repository.find_all(
        session,
        status=status,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    stats = order_repository.get_order_stats(session)
    return order_dto.to_list_response(result, stats=stats, is_admin=True)


def _restock(session: Session, order: Order):
    for item in order.items:
        if item.book_id is None:
            logger.warning(
                f"Order {order.id}: book for item {item.id} ({item.title}) "
                f"no longer exists, skipping restock"
            )
            continue

        if not book_repository.increment_stock(session, item.book_id, item.quantity):
            logger.warning(
                f"Order {order.id}: book {item.book_id} not found, skipping restock"
            )


def _cancel_and_restock(session: Session, order: Order, current_status: str):
    """Flip ``current_status`` -> cancelled and give the stock back.

    Only the request that wins the flip restores stock.
    """
    try:
        if not order_repository.transition_status(
            session, order.id, current_status, "cancelled"
        ):
            raise HTTPException(409, "Order was updated by another request")

        _restock(session, order)
        session.commit()

    except Exception as e:
        logger.error(f"Error cancelling order {order.id}: {e}")
        session.rollback()
        raise

    logger.info(f"Order {order.id} cancelled from {current_status}, stock restored")


def cancel_order(session: Session, order_id: int, user: User):
    order = get_order_or_404(session, order_id)
    _check_access(order, user)

    if order.status != "pending":
        raise HTTPException(400, "Only pending orders can be cancelled")

    _cancel_and_restock(session, order, "pending")
    return {"message": "Order cancelled successfully"}


def update_order_status(session: Session, order_id: int, status: str) -> OrderStatusUpdated:
    order = get_order_or_404(session, order_id)
    current = order.status

    if status != current:
        if not can_transition(current, status):
            raise HTTPException(
                400, f"Cannot change order status from {current} to {status}"
            )

        if status == "cancelled":
            _cancel_and_restock(session, order, current)
        else:
            try:
                if not order_repository.transition_status(session, order.id, current, status):
                    raise HTTPException(409, "Order was updated by another request")
                session.commit()
            except Exception as e:
                logger.error(f"Error updating status of order {order.id}: {e}")
                session.rollback()
                raise

            logger.info(f"Order {order.id} status {current} -> {status}")

        session.refresh(order)

    return OrderStatusUpdated(
        message="Order status updated successfully",
        order=order_dto.to_admin_response(order),
    )


def get_order_stats(session: Session) -> OrderStats:
    stats = order_repository.get_order_stats(session)
    total_revenue = order_repository.get_total_revenue(session)

    return OrderStats(
        status_stats=stats,
        total_revenue=total_revenue,
        summary={
            "total_orders": sum(stat["count"] for stat in stats),
            "total_revenue": total_revenue,
        },
    )


def get_recent_orders(session: Session, limit: int = 5):
    orders = order_repository.get_recent_orders(session, limit)
    return [order_dto.to_order_summary(order) for order in orders]


def get_pending_orders(session: Session):
    orders = order_repository.find_by_status(session, "pending")
    return [order_dto.to_admin_response(order) for order in orders]


def validate_order_items(session: Session, items: List[OrderItemCreate]) -> OrderValidation:
    results = []

    for book_id, quantity in _merge_lines(items).items():
        book = book_repository.find_by_id(session, book_id)

        if not book:
            results.append(LineValidation(
                book_id=book_id,
                quantity=quantity,
                valid=False,
                error="Book not found",
            ))
            continue

        if book.stock < quantity:
            results.append(LineValidation(
                book_id=book_id,
                title=book.title,
                quantity=quantity,
                valid=False,
                error=f"Insufficient stock. Available: {book.stock}, Requested: {quantity}",
            ))
            continue

        results.append(LineValidation(
            book_id=book_id,
            title=book.title,
            author=book.author,
            price=book.price,
            quantity=quantity,
            subtotal=round(book.price * quantity, 2),
            valid=True,
        ))

    total_amount = round(sum(r.subtotal for r in results if r.valid), 2)

    return OrderValidation(
        is_valid=all(r.valid for r in results),
        items=results,
        total_amount=total_amount,
    )
