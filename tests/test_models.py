from datetime import timezone

import pytest

from bookstore.models import Book, Order, User


@pytest.mark.parametrize("model", [User, Book, Order])
def test_timestamp_columns_are_timezone_aware(model):
    columns = [c for c in model.__table__.columns if c.name.endswith(("_at", "_date"))]
    assert columns
    assert all(column.type.timezone for column in columns)


def test_default_timestamps_are_utc():
    book = Book(title="Dune", author="Frank Herbert", price=9.5, category="Science Fiction")
    assert book.created_at.tzinfo is timezone.utc
    assert book.updated_at.tzinfo is timezone.utc


def test_timestamps_survive_insert(session, make_user, make_book):
    user = make_user("carol")
    book = make_book("Persisted")

    assert user.created_at is not None
    assert book.updated_at is not None
