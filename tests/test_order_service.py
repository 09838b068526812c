import pytest
from fastapi import HTTPException
from sqlmodel import select

from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem
from bookstore.repositories import book_repository, order_repository
from bookstore.schemas.order_schemas import OrderCreate
from bookstore.services import order_service


def order_payload(*lines):
    return OrderCreate(
        items=[{"book_id": book_id, "quantity": qty} for book_id, qty in lines],
        shipping_address="1 Main Street",
    )


def test_decrement_stock_is_conditional(session, make_book):
    book = make_book("Thin Stock", stock=2)

    assert book_repository.decrement_stock(session, book.id, 3) is False
    assert book_repository.decrement_stock(session, book.id, 2) is True
    session.commit()

    session.refresh(book)
    assert book.stock == 0
    assert book_repository.decrement_stock(session, book.id, 1) is False


def test_lost_stock_race_rolls_back_the_whole_order(session, customer, make_book, monkeypatch):
    plenty = make_book("Plenty", stock=10)
    contested = make_book("Contested", stock=1)

    real_decrement = book_repository.decrement_stock

    def racing_decrement(session_, book_id, quantity):
        # another checkout grabbed the last copy after our stock check
        if book_id == contested.id:
            return False
        return real_decrement(session_, book_id, quantity)

    monkeypatch.setattr(book_repository, "decrement_stock", racing_decrement)

    with pytest.raises(HTTPException) as exc:
        order_service.create_order(
            session, order_payload((plenty.id, 3), (contested.id, 1)), customer
        )

    assert exc.value.status_code == 409
    assert session.exec(select(Order)).all() == []
    assert session.exec(select(OrderItem)).all() == []

    session.refresh(plenty)
    assert plenty.stock == 10


def test_lost_cancel_race_does_not_restock_twice(session, customer, make_book):
    book = make_book("Race", stock=5)
    created = order_service.create_order(session, order_payload((book.id, 2)), customer)
    order = session.get(Order, created.order.id)

    # a concurrent request already flipped the order to cancelled
    assert order_repository.transition_status(session, order.id, "pending", "cancelled")
    book_repository.increment_stock(session, book.id, 2)
    session.commit()

    with pytest.raises(HTTPException) as exc:
        order_service._cancel_and_restock(session, order, "pending")

    assert exc.value.status_code == 409
    session.refresh(book)
    assert book.stock == 5


def test_transition_status_requires_expected_status(session, customer, make_book):
    book = make_book("Flow", stock=5)
    created = order_service.create_order(session, order_payload((book.id, 1)), customer)

    assert order_repository.transition_status(session, created.order.id, "confirmed", "shipped") is False
    assert order_repository.transition_status(session, created.order.id, "pending", "confirmed") is True
    session.commit()

    assert session.get(Order, created.order.id).status == "confirmed"


def test_totals_reconcile_with_items(session, customer, make_book):
    a = make_book("A", price=0.1, stock=100)
    b = make_book("B", price=0.2, stock=100)

    created = order_service.create_order(session, order_payload((a.id, 3), (b.id, 7)), customer)

    order = session.get(Order, created.order.id)
    assert order.total_amount == round(sum(item.subtotal for item in order.items), 2)
    assert order.total_amount == 1.7
    assert [item.subtotal for item in order.items] == [0.3, 1.4]


def test_stock_constraint_rejects_negative_values(session, make_book):
    from sqlalchemy.exc import IntegrityError

    book = make_book("Guarded", stock=1)
    book.stock = -1
    session.add(book)

    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()

    assert session.get(Book, book.id).stock == 1


def test_cancel_does_not_restock_a_book_that_reused_a_deleted_id(session, customer, make_book):
    gone = make_book("Gone", stock=5)
    created = order_service.create_order(session, order_payload((gone.id, 2)), customer)

    book_repository.delete(session, gone)
    order = session.get(Order, created.order.id)
    assert order.items[0].book_id is None

    # sqlite hands the freed rowid to the next insert
    newcomer = make_book("Newcomer", stock=5)

    order_service.cancel_order(session, order.id, customer)

    session.refresh(newcomer)
    assert newcomer.stock == 5
    assert session.get(Order, order.id).status == "cancelled"
