from datetime import datetime, timezone

from bookstore.constants.order_status import can_transition
from bookstore.dto import book_dto, order_dto, user_dto
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem
from bookstore.models.user import User
from bookstore.schemas.book_schemas import BookCreate
from bookstore.schemas.user_schemas import UserUpdate
from bookstore.utils.pagination import build_pagination, normalize_page


def make_book(**kwargs):
    data = dict(
        id=1, title="Dune", author="Frank Herbert", price=9.5, stock=0,
        category="Science Fiction", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
    )
    data.update(kwargs)
    return Book(**data)


def test_book_views():
    sold_out = book_dto.to_public_response(make_book())
    assert sold_out.is_available is False

    admin = book_dto.to_admin_response(make_book(stock=12))
    assert admin.is_available is True
    assert admin.low_stock is False
    assert admin.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert book_dto.to_admin_response(make_book(stock=9)).low_stock is True


def test_book_create_data_drops_blank_optionals():
    payload = BookCreate(title="X", author="Y", price=1, category="Z", isbn="  ", image_url="")
    assert book_dto.to_create_data(payload) == {
        "title": "X",
        "author": "Y",
        "price": 1.0,
        "stock": 0,
        "category": "Z",
    }


def test_order_views():
    user = User(id=7, username="ann", email="ann@example.com", password="x",
                first_name="Ann", last_name="Lee")
    order = Order(
        id=3, user_id=7, total_amount=30.0, status="shipped",
        shipping_address="Somewhere", order_date=datetime(2024, 5, 1, tzinfo=timezone.utc),
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
    )
    order.user = user
    order.items = [
        OrderItem(id=1, order_id=3, book_id=1, title="A", author="B", price=10.0, quantity=2, subtotal=20.0),
        OrderItem(id=2, order_id=3, book_id=2, title="C", author="D", price=10.0, quantity=1, subtotal=10.0),
    ]

    public = order_dto.to_public_response(order)
    assert public.item_count == 3
    assert public.can_cancel is False
    assert public.status_display == "Shipped"
    assert public.status_color == "purple"

    admin = order_dto.to_admin_response(order)
    assert admin.customer.name == "Ann Lee"
    assert admin.can_update_status is True

    summary = order_dto.to_order_summary(order)
    assert summary.item_count == 2
    assert summary.status_color == "purple"


def test_status_helpers():
    assert order_dto.get_status_display("pending") == "Pending"
    assert order_dto.get_status_display("mystery") == "mystery"
    assert order_dto.get_status_color("cancelled") == "red"
    assert order_dto.get_status_color("mystery") == "gray"

    assert can_transition("pending", "cancelled")
    assert can_transition("shipped", "delivered")
    assert not can_transition("delivered", "shipped")
    assert not can_transition("cancelled", "pending")
    assert not can_transition("confirmed", "pending")


def test_user_update_data_normalizes():
    data = user_dto.to_update_data(UserUpdate(email="Me@Example.COM", username=" MixedCase "))
    assert data == {"email": "me@example.com", "username": "mixedcase"}

    assert user_dto.to_update_data(UserUpdate()) == {}


def test_pagination_helpers():
    assert normalize_page(0, 0) == (1, 10)
    assert normalize_page(3, 5) == (3, 5)

    assert build_pagination(total=0, page=1, limit=10) == {
        "current_page": 1,
        "total_pages": 0,
        "total_items": 0,
        "limit": 10,
        "has_next": False,
        "has_prev": False,
    }
    page = build_pagination(total=25, page=2, limit=10)
    assert page["total_pages"] == 3
    assert page["has_next"] is True
    assert page["has_prev"] is True
