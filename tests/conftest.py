"""Shared fixtures: an in-memory ratings store per test."""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base, Rating, RatingCategory, Ticket

# The categories used throughout the tests (id, name, weight).
DEFAULT_CATEGORIES = [
    (1, "Spelling", 1.0),
    (2, "Grammar", 0.7),
    (3, "GDPR", 1.2),
    (4, "Randomness", 0.0),
]


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, future=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class RatingsStore:
    """Small helper to populate the in-memory store."""

    def __init__(self, db) -> None:
        self.db = db

    def categories(self, rows=DEFAULT_CATEGORIES) -> "RatingsStore":
        for cid, name, weight in rows:
            self.db.add(RatingCategory(id=cid, name=name, weight=weight))
        self.db.commit()
        return self

    def rating(self, ticket_id: int, category_id: int, rating: int, created_at: str) -> "RatingsStore":
        if self.db.get(Ticket, ticket_id) is None:
            self.db.add(Ticket(id=ticket_id, subject=f"Ticket {ticket_id}", created_at=created_at))
        self.db.add(
            Rating(ticket_id=ticket_id, rating_category_id=category_id, rating=rating, created_at=created_at)
        )
        self.db.commit()
        return self


@pytest.fixture()
def store(db_session) -> RatingsStore:
    return RatingsStore(db_session)
