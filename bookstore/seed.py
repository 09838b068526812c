"""Load a starter catalog and an admin account.

    python -m bookstore.seed
"""
import logging

from sqlmodel import Session, select

from bookstore.config import settings
from bookstore.database import create_db_and_tables, engine
from bookstore.models.book import Book
from bookstore.models.user import User
from bookstore.repositories import user_repository
from bookstore.utils.hash import hash_password

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {
        "title": "1984",
        "author": "George Orwell",
        "isbn": "978-0-452-28423-4",
        "price": 13.99,
        "stock": 40,
        "category": "Fiction",
        "description": "A dystopian novel about totalitarianism.",
    },
    {
        "title": "The Martian",
        "author": "Andy Weir",
        "isbn": "978-0-8041-3902-1",
        "price": 17.99,
        "stock": 20,
        "category": "Science Fiction",
        "description": "A stranded astronaut on Mars uses science to survive.",
    },
    {
        "title": "The Da Vinci Code",
        "author": "Dan Brown",
        "isbn": "978-0-385-50420-8",
        "price": 16.00,
        "stock": 25,
        "category": "Mystery",
        "description": "A symbologist uncovers a secret society.",
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "isbn": "978-0-14-143951-8",
        "price": 9.99,
        "stock": 30,
        "category": "Romance",
        "description": "Elizabeth Bennet and Mr. Darcy navigate manners and marriage.",
    },
    {
        "title": "Steve Jobs",
        "author": "Walter Isaacson",
        "isbn": "978-1-4516-4853-9",
        "price": 21.50,
        "stock": 12,
        "category": "Biography",
        "description": "The life of the Apple co-founder.",
    },
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "978-0-13-235088-4",
        "price": 37.99,
        "stock": 8,
        "category": "Programming",
        "description": "A handbook of agile software craftsmanship.",
    },
    {
        "title": "Sapiens",
        "author": "Yuval Noah Harari",
        "isbn": "978-0-06-231609-7",
        "price": 19.99,
        "stock": 35,
        "category": "History",
        "description": "A brief history of humankind.",
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "isbn": "978-0-547-92822-7",
        "price": 14.99,
        "stock": 5,
        "category": "Fantasy",
        "description": "Bilbo Baggins joins a quest to reclaim a dragon's treasure.",
    },
]


def seed_books(session: Session) -> int:
    if session.exec(select(Book)).first():
        logger.info("Books already present, skipping catalog seed")
        return 0

    for data in SAMPLE_BOOKS:
        session.add(Book(**data))
    session.commit()

    logger.info(f"Inserted {len(SAMPLE_BOOKS)} books")
    return len(SAMPLE_BOOKS)


def seed_admin(session: Session, email: str, password: str) -> bool:
    email = email.strip().lower()
    username = email.split("@")[0]

    existing = user_repository.find_by_email_or_username(session, email, username)
    if existing:
        if existing.email == email:
            logger.info(f"Admin {email} already exists")
        else:
            logger.warning(f"Username {username} is taken by {existing.email}, admin not created")
        return False

    admin = User(
        username=username,
        email=email,
        password=hash_password(password),
        first_name="Store",
        last_name="Admin",
        role="admin",
    )
    session.add(admin)
    session.commit()

    logger.info(f"Created admin {email}")
    return True


def main():
    logging.basicConfig(level=settings.log_level)
    create_db_and_tables()

    with Session(engine) as session:
        seed_books(session)
        if settings.admin_email and settings.admin_password:
            seed_admin(session, settings.admin_email, settings.admin_password)
        else:
            logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, no admin created")


if __name__ == "__main__":
    main()
