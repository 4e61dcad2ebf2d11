"""Per-category trend aggregation over daily or weekly buckets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from services.category_directory import CategoryDirectory
from services.rating_math import rating_percentage, round2
from services.rating_repository import AggregatedBucketRow

_RANGE_SEP = " to "


@dataclass(frozen=True)
class PeriodBucketScore:
    period: str
    average_score_percentage: float


@dataclass(frozen=True)
class CategoryRatingResult:
    category_name: str
    frequency: int
    overall_average_score_percentage: float
    period_scores: tuple[PeriodBucketScore, ...]


def adjust_period_for_end_date(period: str, end_date: str) -> str:
    # Week labels ending exactly on the request end are rebuilt as "<start> to <end_date>".
    if _RANGE_SEP in period:
        first, last = period.split(_RANGE_SEP, 1)
        if last == end_date:
            return f"{first}{_RANGE_SEP}{end_date}"
    return period


def result_from_row(row: AggregatedBucketRow, category_name: str, end_date: str) -> CategoryRatingResult:
    pct = rating_percentage(row.average_rating)
    return CategoryRatingResult(
        category_name=category_name,
        frequency=row.frequency,
        overall_average_score_percentage=pct,
        period_scores=(PeriodBucketScore(adjust_period_for_end_date(row.period_label, end_date), pct),),
    )


def merge_results(a: CategoryRatingResult, b: CategoryRatingResult) -> CategoryRatingResult:
    """
    Frequency-weighted merge: period scores are concatenated in encounter order,
    frequencies summed, and the overall percentage re-weighted by frequency.
    """
    total = a.frequency + b.frequency
    if total == 0:
        overall = 0.0
    else:
        weighted = a.overall_average_score_percentage * a.frequency + b.overall_average_score_percentage * b.frequency
        overall = round2(weighted / total)
    return CategoryRatingResult(
        category_name=a.category_name,
        frequency=total,
        overall_average_score_percentage=overall,
        period_scores=a.period_scores + b.period_scores,
    )


def aggregate_category_ratings(
    rows: Iterable[AggregatedBucketRow],
    directory: CategoryDirectory,
    end_date: str,
) -> list[CategoryRatingResult]:
    by_name: dict[str, CategoryRatingResult] = {}
    for row in rows:
        name = directory.name_by_id(row.category_id)
        result = result_from_row(row, name, end_date)
        prev = by_name.get(name)
        by_name[name] = result if prev is None else merge_results(prev, result)
    return list(by_name.values())
