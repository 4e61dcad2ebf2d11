"""Overall weighted score of a period, optionally compared with the period before it.

A period's score is the unweighted mean of its tickets' weighted scores. Ratings
are always >= 1, so a mean of exactly 0 can only mean "no ratings" and is
reported with the ``N/A`` marker instead of as a real score.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from services.category_directory import CategoryDirectory
from services.periods import Period, previous_period
from services.rating_math import format_score, round2
from services.rating_repository import RawRatingRow
from services.ticket_scores import group_ratings_by_ticket, latest_rating_per_category
from services.weighted_score import weighted_score

logger = logging.getLogger(__name__)

NOT_APPLICABLE = "N/A"

FetchRatings = Callable[[str, str], list[RawRatingRow]]


@dataclass(frozen=True)
class PeriodScore:
    period: str
    average_score_percentage: float
    message: str | None = None

    @property
    def has_data(self) -> bool:
        return self.message is None


@dataclass(frozen=True)
class ScoreChange:
    value: float | None = None
    message: str | None = None


@dataclass(frozen=True)
class WeightedScores:
    current_period_score: PeriodScore
    previous_period_score: PeriodScore | None = None
    score_change: ScoreChange | None = None


def period_weighted_average(rows: Iterable[RawRatingRow], directory: CategoryDirectory) -> float:
    """Raw (unrounded) mean of per-ticket weighted scores; 0.0 when there are no ratings."""
    per_ticket = latest_rating_per_category(group_ratings_by_ticket(rows, directory))
    if not per_ticket:
        return 0.0
    weights = directory.weights_by_name()
    scores = [weighted_score(ratings, weights) for ratings in per_ticket.values()]
    return sum(scores) / len(scores)


def to_period_score(period: Period, raw_average: float) -> PeriodScore:
    return PeriodScore(
        period=period.label,
        average_score_percentage=format_score(raw_average),
        message=NOT_APPLICABLE if raw_average == 0 else None,
    )


def score_change(current_raw: float, previous_raw: float) -> ScoreChange:
    if current_raw != 0 and previous_raw != 0:
        return ScoreChange(value=round2(current_raw - previous_raw))
    return ScoreChange(message=NOT_APPLICABLE)


class PeriodComparator:
    def __init__(self, fetch_ratings: FetchRatings, directory: CategoryDirectory) -> None:
        self.fetch_ratings = fetch_ratings
        self.directory = directory

    def _average(self, period: Period) -> float:
        rows = self.fetch_ratings(period.start, period.end)
        avg = period_weighted_average(rows, self.directory)
        logger.debug("Period %s: %d ratings, raw average %s", period.label, len(rows), avg)
        return avg

    def compare(self, period: Period, *, include_previous: bool = False) -> WeightedScores:
        current_raw = self._average(period)
        current = to_period_score(period, current_raw)
        if not include_previous:
            return WeightedScores(current_period_score=current)

        prev_period = previous_period(period.start, period.end)
        previous_raw = self._average(prev_period)
        return WeightedScores(
            current_period_score=current,
            previous_period_score=to_period_score(prev_period, previous_raw),
            score_change=score_change(current_raw, previous_raw),
        )
