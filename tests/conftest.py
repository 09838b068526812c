import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DB_URL"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from bookstore.database import enable_sqlite_foreign_keys, get_session
from bookstore.main import app
from bookstore.models.book import Book
from bookstore.models.user import User
from bookstore.utils.hash import hash_password
from bookstore.utils.token import create_access_token


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: Session):
    def _make_user(username: str, role: str = "user", password: str = "secret123") -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            password=hash_password(password),
            first_name=username.capitalize(),
            last_name="Tester",
            role=role,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def customer(make_user) -> User:
    return make_user("alice")


@pytest.fixture
def other_customer(make_user) -> User:
    return make_user("bob")


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin", role="admin")


def auth_headers(user: User) -> dict:
    token = create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer: User) -> dict:
    return auth_headers(customer)


@pytest.fixture
def other_headers(other_customer: User) -> dict:
    return auth_headers(other_customer)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_headers(admin)


@pytest.fixture
def make_book(session: Session):
    def _make_book(title: str, **kwargs) -> Book:
        data = {
            "author": "Some Author",
            "price": 10.0,
            "stock": 10,
            "category": "Fiction",
        }
        data.update(kwargs)
        book = Book(title=title, **data)
        session.add(book)
        session.commit()
        session.refresh(book)
        return book

    return _make_book


@pytest.fixture
def books(make_book):
    return [
        make_book("1984", author="George Orwell", price=13.99, stock=40,
                  isbn="978-0-452-28423-4", description="A dystopian novel."),
        make_book("The Martian", author="Andy Weir", price=17.99, stock=20,
                  category="Science Fiction", description="Stranded on Mars."),
        make_book("The Hobbit", author="J.R.R. Tolkien", price=14.5, stock=3,
                  category="Fantasy", description="A dragon and a burglar."),
    ]
