from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _FromEngine(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PeriodBucketScoreOut(_FromEngine):
    period: str
    average_score_percentage: float


class CategoryRatingResultOut(_FromEngine):
    category_name: str
    frequency: int
    overall_average_score_percentage: float
    period_scores: list[PeriodBucketScoreOut]


class TicketCategoryScoreOut(_FromEngine):
    ticket_id: int
    category_scores: dict[str, float]


class PeriodScoreOut(_FromEngine):
    period: str
    average_score_percentage: float
    message: str | None = None


class ScoreChangeOut(_FromEngine):
    value: float | None = None
    message: str | None = None


class WeightedScoresOut(_FromEngine):
    current_period_score: PeriodScoreOut
    previous_period_score: PeriodScoreOut | None = None
    score_change: ScoreChangeOut | None = None
