from sqlmodel import select

from bookstore.models.book import Book
from bookstore.models.user import User
from bookstore.seed import SAMPLE_BOOKS, seed_admin, seed_books
from bookstore.utils.hash import verify_password


def test_seed_books_only_fills_an_empty_catalog(session):
    assert seed_books(session) == len(SAMPLE_BOOKS)
    assert seed_books(session) == 0
    assert len(session.exec(select(Book)).all()) == len(SAMPLE_BOOKS)


def test_seed_admin(session):
    assert seed_admin(session, " Root@Example.com ", "changeme1") is True
    assert seed_admin(session, "root@example.com", "other") is False

    admin = session.exec(select(User)).one()
    assert admin.email == "root@example.com"
    assert admin.role == "admin"
    assert verify_password("changeme1", admin.password)


def test_seed_admin_skips_when_username_is_taken(session, make_user):
    make_user("root")

    assert seed_admin(session, "root@store.example", "changeme1") is False

    users = session.exec(select(User)).all()
    assert [u.email for u in users] == ["root@example.com"]
    assert users[0].role == "user"
