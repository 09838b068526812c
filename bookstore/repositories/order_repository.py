from typing import List, Optional
from sqlalchemy import func, update
from sqlmodel import Session, select
from bookstore.models.order import Order
from bookstore.utils.dates import utc_now
from bookstore.utils.pagination import paginate

SORTABLE_FIELDS = {
    "created_at": Order.created_at,
    "order_date": Order.order_date,
    "total_amount": Order.total_amount,
    "status": Order.status,
}


def find_all(
    session: Session,
    *,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    sort_by: str = "created_at",
    sort_order: str = "desc",
):
    query = select(Order)

    if status:
        query = query.where(Order.status == status)

    column = SORTABLE_FIELDS.get(sort_by, Order.created_at)
    order = column.desc() if sort_order == "desc" else column.asc()
    query = query.order_by(order, Order.id.desc())

    return paginate(session=session, query=query, page=page, limit=limit)


def find_by_id(session: Session, order_id: int) -> Optional[Order]:
    return session.get(Order, order_id)


def find_by_user_id(session: Session, user_id: int, *, page: int = 1, limit: int = 10):
    query = (
        select(Order)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    return paginate(session=session, query=query, page=page, limit=limit)


def exists_for_user(session: Session, user_id: int) -> bool:
    return session.exec(
        select(Order.id).where(Order.user_id == user_id)
    ).first() is not None


def find_by_status(session: Session, status: str) -> List[Order]:
    return session.exec(
        select(Order)
        .where(Order.status == status)
        .order_by(Order.created_at.desc(), Order.id.desc())
    ).all()


def get_recent_orders(session: Session, limit: int = 5) -> List[Order]:
    return session.exec(
        select(Order)
        .order_by(Order.created_at.desc(), Order.id.desc())
        .limit(limit)
    ).all()


def get_order_stats(session: Session) -> List[dict]:
    rows = session.exec(
        select(
            Order.status,
            func.count(Order.id),
            func.coalesce(func.sum(Order.total_amount), 0),
        )
        .group_by(Order.status)
        .order_by(Order.status)
    ).all()

    return [
        {"status": status, "count": count, "total_amount": round(total, 2)}
        for status, count, total in rows
    ]


def get_total_revenue(session: Session) -> float:
    total = session.exec(
        select(func.coalesce(func.sum(Order.total_amount), 0))
        .where(Order.status != "cancelled")
    ).one()
    return round(total, 2)


def transition_status(session: Session, order_id: int, current: str, new: str) -> bool:
    """Move an order from ``current`` to ``new`` only if it is still ``current``.

    Returns False when another request changed the status first.
    Does not commit.
    """
    result = session.exec(
        update(Order)
        .where(Order.id == order_id, Order.status == current)
        .values(status=new, updated_at=utc_now())
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount == 1
