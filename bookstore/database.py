from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session
from bookstore.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def enable_sqlite_foreign_keys(engine):
    """SQLite only enforces FOREIGN KEY / ON DELETE when asked per connection."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,      # checks dead connections
    pool_recycle=1800        # refresh every 30 min
)

if settings.database_url.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)


def create_db_and_tables(bind=None):
    from bookstore.models import user, book, order, order_item  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    with Session(engine) as session:
        yield session
