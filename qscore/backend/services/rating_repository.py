"""Read-only queries against the ratings store.

Every method returns plain frozen rows and wraps driver errors as an
UPSTREAM_FAILURE :class:`ScoreError`. Bounds are inclusive
``YYYY-MM-DDTHH:MM:SS`` strings compared against ``ratings.created_at``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from sqlalchemy import String, case, func, literal, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Rating, RatingCategory
from services.errors import ScoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CategoryRow:
    id: int
    name: str
    weight: float


@dataclass(frozen=True)
class AggregatedBucketRow:
    period_label: str
    category_id: int
    frequency: int
    average_rating: float


@dataclass(frozen=True)
class RawRatingRow:
    ticket_id: int
    category_id: int
    rating: int


class RatingRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _run(self, operation: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except SQLAlchemyError as e:
            logger.exception("Database query failed: %s", operation)
            raise ScoreError.upstream("Failed to retrieve data from database", e) from e

    def list_all_categories(self) -> list[CategoryRow]:
        def _q() -> list[CategoryRow]:
            rows = self.db.execute(
                select(RatingCategory.id, RatingCategory.name, RatingCategory.weight).order_by(RatingCategory.id.asc())
            ).all()
            return [CategoryRow(id=int(i), name=str(n), weight=float(w or 0.0)) for (i, n, w) in rows]

        return self._run("list_all_categories", _q)

    def find_daily_aggregates(self, start_date: str, end_date: str) -> list[AggregatedBucketRow]:
        day = func.date(Rating.created_at, type_=String)

        def _q() -> list[AggregatedBucketRow]:
            rows = self.db.execute(
                select(day.label("date"), Rating.rating_category_id, func.count(), func.avg(Rating.rating))
                .where(Rating.created_at.between(start_date, end_date))
                .group_by(day, Rating.rating_category_id)
                .order_by(day.asc(), Rating.rating_category_id.asc())
            ).all()
            return [
                AggregatedBucketRow(period_label=str(d), category_id=int(c), frequency=int(n), average_rating=float(a))
                for (d, c, n, a) in rows
            ]

        return self._run("find_daily_aggregates", _q)

    def find_weekly_aggregates(self, start_date: str, end_date: str) -> list[AggregatedBucketRow]:
        """
        Buckets by SQLite's '%Y-%W' week key. Label is '<first day> to <last day>',
        the last day capped at the calendar day of *end_date*.
        """
        day = func.date(Rating.created_at, type_=String)
        week_key = func.strftime("%Y-%W", Rating.created_at)
        end_day = literal(end_date[:10])
        last_day = case((func.max(day) > end_day, end_day), else_=func.max(day))
        week_range = func.min(day).concat(" to ").concat(last_day).label("week_range")

        def _q() -> list[AggregatedBucketRow]:
            rows = self.db.execute(
                select(week_range, Rating.rating_category_id, func.count(), func.avg(Rating.rating))
                .where(Rating.created_at.between(start_date, end_date))
                .group_by(week_key, Rating.rating_category_id)
                .order_by(func.min(day).asc(), Rating.rating_category_id.asc())
            ).all()
            return [
                AggregatedBucketRow(period_label=str(w), category_id=int(c), frequency=int(n), average_rating=float(a))
                for (w, c, n, a) in rows
            ]

        return self._run("find_weekly_aggregates", _q)

    def find_ratings_in_period(self, start_date: str, end_date: str) -> list[RawRatingRow]:
        def _q() -> list[RawRatingRow]:
            rows = self.db.execute(
                select(Rating.ticket_id, Rating.rating_category_id, Rating.rating)
                .where(Rating.created_at.between(start_date, end_date))
                .order_by(Rating.id.asc())
            ).all()
            return [RawRatingRow(ticket_id=int(t), category_id=int(c), rating=int(r)) for (t, c, r) in rows]

        return self._run("find_ratings_in_period", _q)
