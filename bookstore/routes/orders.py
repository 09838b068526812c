from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from bookstore.database import get_session
from bookstore.dependencies.admin import require_admin
from bookstore.models.user import User
from bookstore.schemas.order_schemas import (
    AdminOrderList,
    OrderAdmin,
    OrderCreate,
    OrderCreated,
    OrderItemCreate,
    OrderList,
    OrderStats,
    OrderStatusUpdate,
    OrderStatusUpdated,
    OrderSummary,
    OrderValidation,
)
from bookstore.services import order_service
from bookstore.utils.token import get_current_user

router = APIRouter()


# -------- CUSTOMER ORDERS --------

@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return order_service.create_order(session, payload, current_user)


@router.post("/validate", response_model=OrderValidation)
def validate_order(
    items: List[OrderItemCreate],
    session: Session = Depends(get_session),
    _: User = Depends(get_current_user),
):
    return order_service.validate_order_items(session, items)


@router.get("/my", response_model=OrderList)
def my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return order_service.get_user_orders(session, current_user, page=page, limit=limit)


# -------- ADMIN ORDERS --------

@router.get("", response_model=AdminOrderList)
def list_orders(
    status: Optional[str] = Query(None, description="Order status, 'all' for every status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Literal["created_at", "order_date", "total_amount", "status"] = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return order_service.get_all_orders(
        session,
        status=status,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/admin/stats", response_model=OrderStats)
def order_stats(
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return order_service.get_order_stats(session)


@router.get("/admin/recent", response_model=List[OrderSummary])
def recent_orders(
    limit: int = Query(5, ge=1, le=50),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return order_service.get_recent_orders(session, limit)


@router.get("/admin/pending", response_model=List[OrderAdmin])
def pending_orders(
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return order_service.get_pending_orders(session)


@router.put("/{order_id}/status", response_model=OrderStatusUpdated)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin),
):
    return order_service.update_order_status(session, order_id, payload.status.value)


# -------- SINGLE ORDER --------

@router.get("/{order_id}")
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return order_service.get_order_by_id(session, order_id, current_user)


@router.delete("/{order_id}")
def cancel_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return order_service.cancel_order(session, order_id, current_user)
