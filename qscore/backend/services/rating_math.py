from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal

MAX_RATING = 5
MIN_RATING = 1

_TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round half-up to 2 decimals, starting from the shortest decimal repr of *value*
    (so 66.665 -> 66.67 and -123.456 -> -123.46).
    Used after every arithmetic step of the engine.
    """
    return float(Decimal(repr(float(value))).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def format_score(value: float) -> float:
    """
    Fixed two-decimal display of a period score (half-even on the exact binary value).
    Only applied when a raw mean leaves the engine.
    """
    return float(Decimal(float(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_EVEN))


def rating_percentage(average_rating: float) -> float:
    """Map a 1..5 (average) rating onto 0..100."""
    return round2((average_rating / MAX_RATING) * 100)
