from __future__ import annotations

import logging
from typing import Mapping

from services.errors import ScoreError
from services.rating_math import MAX_RATING, MIN_RATING, round2

logger = logging.getLogger(__name__)


def validate_ratings(ratings: Mapping[str, int] | None) -> None:
    if not ratings:
        logger.warning("Ratings map is null or empty")
        raise ScoreError.invalid_input("Ratings map must not be null or empty")
    for name, value in ratings.items():
        if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
            logger.warning("Invalid rating value for category: %s", name)
            raise ScoreError.invalid_input(f"Invalid rating value for category: {name}")


def weighted_score(ratings: Mapping[str, int] | None, weights: Mapping[str, float]) -> float:
    """
    Weighted 0..100 score of one ticket's category ratings.

    Only categories present in both *ratings* and *weights* count:
    ``round2(sum(rating * w) / (sum(w) * 5) * 100)``. A zero total weight
    (no overlap, or only zero-weight categories) scores 0.
    """
    validate_ratings(ratings)

    total_weight = 0.0
    weighted_sum = 0.0
    for name, weight in weights.items():
        if name not in ratings:
            continue
        total_weight += weight
        weighted_sum += ratings[name] * weight

    if total_weight == 0:
        logger.warning("Total weight is zero, unable to calculate score")
        return 0.0

    return round2((weighted_sum / (total_weight * MAX_RATING)) * 100)
