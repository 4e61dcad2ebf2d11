from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from config import settings

_IS_SQLITE = settings.database_url.startswith("sqlite:")

engine = create_engine(
    settings.database_url,
    # sqlite3 timeout is in seconds
    connect_args={"check_same_thread": False, "timeout": 30} if _IS_SQLITE else {},
    pool_pre_ping=True,
)


if _IS_SQLITE:
    @event.listens_for(engine, "connect")
    def _ratings_store_pragmas(dbapi_connection, _connection_record) -> None:
        # Scoring only reads; WAL keeps those reads off the loader's write lock.
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA busy_timeout=30000;")
        cur.close()

SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


@contextmanager
def session_scope() -> Session:
    """Read-only unit of work: always rolled back, never committed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


def get_db() -> Session:
    """Request-scoped session for the read endpoints."""
    with session_scope() as db:
        yield db
