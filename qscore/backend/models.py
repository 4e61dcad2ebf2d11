from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class RatingCategory(Base):
    __tablename__ = "rating_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    # 0 is allowed: the category is listed but has no influence on weighted scores.
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)


class Ticket(Base):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str | None] = mapped_column(String(19), nullable=True)

    ratings: Mapped[list["Rating"]] = relationship(back_populates="ticket")


class Rating(Base):
    """
    One reviewer's 1..5 rating of one ticket in one category.
    created_at is kept as 'YYYY-MM-DDTHH:MM:SS' text so range filters are plain string comparisons.
    """

    __tablename__ = "ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    ticket_id: Mapped[int] = mapped_column(Integer, ForeignKey("tickets.id"), nullable=False, index=True)
    rating_category_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    reviewer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reviewee_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[str] = mapped_column(String(19), nullable=False, index=True)

    ticket: Mapped[Ticket] = relationship(back_populates="ratings")
