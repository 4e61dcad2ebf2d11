from __future__ import annotations

import logging
from typing import Callable, Mapping, TypeVar

from sqlalchemy.orm import Session

from services.aggregation import CategoryRatingResult, aggregate_category_ratings
from services.category_directory import CategoryDirectory
from services.errors import ScoreError, ScoreResult
from services.period_comparator import PeriodComparator, WeightedScores
from services.periods import Granularity, choose_granularity, validate_range
from services.rating_repository import RatingRepository
from services.ticket_scores import TicketCategoryScore, fill_missing_categories, ticket_category_scores
from services.weighted_score import validate_ratings, weighted_score

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_include_previous(value: bool | str | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if value in ("true", "false"):
        return value == "true"
    logger.warning("Invalid value for includePreviousPeriod: %s", value)
    raise ScoreError.invalid_input("Invalid value for includePreviousPeriod. Must be true or false.")


class ScoringService:
    """
    Entry point for the three scoring views plus the single-ticket weighted score.
    Every method returns a ScoreResult; engine failures never escape as exceptions.
    """

    def _guard(self, view: str, fn: Callable[[], T]) -> ScoreResult[T]:
        try:
            value = fn()
        except ScoreError as e:
            logger.info("%s failed: %s: %s", view, e.kind.value, e.message)
            return ScoreResult.failure(e)
        logger.info("%s computed successfully", view)
        return ScoreResult.success(value)

    def aggregated_scores(
        self, db: Session, start_date: str | None, end_date: str | None
    ) -> ScoreResult[list[CategoryRatingResult]]:
        """Category trends per day (short single-month ranges) or per week (everything else)."""
        logger.info("Aggregated scores requested for startDate=%s endDate=%s", start_date, end_date)

        def _run() -> list[CategoryRatingResult]:
            period = validate_range(start_date, end_date)
            repo = RatingRepository(db)
            if choose_granularity(period.start, period.end) is Granularity.WEEKLY:
                rows = repo.find_weekly_aggregates(period.start, period.end)
            else:
                rows = repo.find_daily_aggregates(period.start, period.end)
            directory = CategoryDirectory.load(repo)
            return aggregate_category_ratings(rows, directory, period.end)

        return self._guard("aggregated_scores", _run)

    def ticket_category_scores(
        self, db: Session, start_date: str | None, end_date: str | None
    ) -> ScoreResult[list[TicketCategoryScore]]:
        logger.info("Ticket category scores requested for startDate=%s endDate=%s", start_date, end_date)

        def _run() -> list[TicketCategoryScore]:
            period = validate_range(start_date, end_date)
            repo = RatingRepository(db)
            rows = repo.find_ratings_in_period(period.start, period.end)
            if not rows:
                raise ScoreError.no_data("No ratings found for the specified period.")
            directory = CategoryDirectory.load(repo)
            return fill_missing_categories(ticket_category_scores(rows, directory), directory)

        return self._guard("ticket_category_scores", _run)

    def weighted_scores(
        self,
        db: Session,
        start_date: str | None,
        end_date: str | None,
        include_previous_period: bool | str | None = False,
    ) -> ScoreResult[WeightedScores]:
        logger.info(
            "Weighted scores requested for startDate=%s endDate=%s includePreviousPeriod=%s",
            start_date,
            end_date,
            include_previous_period,
        )

        def _run() -> WeightedScores:
            include_previous = parse_include_previous(include_previous_period)
            period = validate_range(start_date, end_date)
            repo = RatingRepository(db)
            comparator = PeriodComparator(repo.find_ratings_in_period, CategoryDirectory.load(repo))
            scores = comparator.compare(period, include_previous=include_previous)
            previous = scores.previous_period_score
            if not scores.current_period_score.has_data and (previous is None or not previous.has_data):
                raise ScoreError.no_data("No ratings found for the specified periods.")
            return scores

        return self._guard("weighted_scores", _run)

    def calculate_score(self, db: Session, ratings: Mapping[str, int] | None) -> ScoreResult[float]:
        """Weighted score of a single ticket's category-name -> rating map."""

        def _run() -> float:
            validate_ratings(ratings)
            directory = CategoryDirectory.load(RatingRepository(db))
            return weighted_score(ratings, directory.weights_by_name())

        return self._guard("calculate_score", _run)
