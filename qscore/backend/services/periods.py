"""Timestamp handling and period bucketing.

All timestamps are naive ``YYYY-MM-DDTHH:MM:SS`` strings interpreted as UTC;
nothing here consults the host time zone.
"""
from __future__ import annotations

import datetime as dt
import enum
import logging
import re
from dataclasses import dataclass

from services.errors import ScoreError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")

# Spans longer than this many days are always reported per week.
MAX_DAILY_SPAN_DAYS = 31


class Granularity(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class Period:
    start: str
    end: str

    @property
    def label(self) -> str:
        return f"{self.start} to {self.end}"


def parse_timestamp(value: str | None, *, field: str = "date") -> dt.datetime:
    if not value or not _TIMESTAMP_RE.fullmatch(value):
        raise ScoreError.invalid_input(
            f"Invalid {field} format: {value!r}. Please use the format yyyy-MM-dd'T'HH:mm:ss."
        )
    try:
        return dt.datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ScoreError.invalid_input(f"Invalid {field}: {value!r} ({e})") from e


def format_timestamp(value: dt.datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def validate_range(start_date: str | None, end_date: str | None) -> Period:
    """Parse both bounds, reject start > end, and return them re-formatted."""
    s = parse_timestamp(start_date, field="startDate")
    e = parse_timestamp(end_date, field="endDate")
    if s > e:
        logger.warning("Start date %s is after end date %s", start_date, end_date)
        raise ScoreError.invalid_input("Start date must be earlier than or equal to end date.")
    return Period(start=format_timestamp(s), end=format_timestamp(e))


def _as_date(value: str | dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    # Only the calendar day matters for bucketing; the time part is ignored.
    return dt.date.fromisoformat(value[:10])


def days_between(start: str | dt.date, end: str | dt.date) -> int:
    """Exclusive day count between the calendar days of *start* and *end*."""
    return (_as_date(end) - _as_date(start)).days


def is_different_month_or_year(start: str | dt.date, end: str | dt.date) -> bool:
    s, e = _as_date(start), _as_date(end)
    return s.month != e.month or s.year != e.year


def choose_granularity(start: str | dt.date, end: str | dt.date) -> Granularity:
    if days_between(start, end) > MAX_DAILY_SPAN_DAYS or is_different_month_or_year(start, end):
        return Granularity.WEEKLY
    return Granularity.DAILY


def previous_period(start: str | dt.date, end: str | dt.date) -> Period:
    """
    The window of equal day-length that ends the day before *start*:
    ``[start - (n+1) days 00:00:00, start - 1 day 23:59:59]`` with n = days_between(start, end).
    """
    s = _as_date(start)
    n = days_between(start, end)
    prev_start = dt.datetime.combine(s - dt.timedelta(days=n + 1), dt.time(0, 0, 0))
    prev_end = dt.datetime.combine(s - dt.timedelta(days=1), dt.time(23, 59, 59))
    return Period(start=format_timestamp(prev_start), end=format_timestamp(prev_end))
