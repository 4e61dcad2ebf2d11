from __future__ import annotations

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from services.errors import ScoreError, ScoreErrorKind
from services.rating_repository import AggregatedBucketRow, CategoryRow, RatingRepository, RawRatingRow


def test_list_all_categories(store, db_session):
    store.categories()

    rows = RatingRepository(db_session).list_all_categories()

    assert rows[0] == CategoryRow(id=1, name="Spelling", weight=1.0)
    assert [r.name for r in rows] == ["Spelling", "Grammar", "GDPR", "Randomness"]


def test_daily_aggregates_group_by_day_and_category(store, db_session):
    (
        store.categories()
        .rating(1, 1, 5, "2023-01-01T09:00:00")
        .rating(2, 1, 4, "2023-01-01T18:30:00")
        .rating(2, 2, 3, "2023-01-01T18:30:00")
        .rating(3, 1, 2, "2023-01-02T10:00:00")
        .rating(4, 1, 1, "2023-01-03T10:00:00")  # outside the range
    )

    rows = RatingRepository(db_session).find_daily_aggregates("2023-01-01T00:00:00", "2023-01-02T23:59:59")

    assert rows == [
        AggregatedBucketRow("2023-01-01", 1, 2, 4.5),
        AggregatedBucketRow("2023-01-01", 2, 1, 3.0),
        AggregatedBucketRow("2023-01-02", 1, 1, 2.0),
    ]


def test_bounds_are_inclusive(store, db_session):
    store.categories().rating(1, 1, 5, "2023-01-01T00:00:00").rating(2, 1, 3, "2023-01-02T00:00:00")

    rows = RatingRepository(db_session).find_ratings_in_period("2023-01-01T00:00:00", "2023-01-02T00:00:00")

    assert rows == [RawRatingRow(1, 1, 5), RawRatingRow(2, 1, 3)]


def test_weekly_aggregates_label_first_and_last_day(store, db_session):
    # 2023-01-30 is a Monday; 2023-02-06 starts the next week
    (
        store.categories()
        .rating(1, 1, 4, "2023-01-30T08:00:00")
        .rating(2, 1, 2, "2023-02-02T08:00:00")
        .rating(3, 1, 5, "2023-02-06T08:00:00")
        .rating(3, 3, 5, "2023-02-07T08:00:00")
    )

    rows = RatingRepository(db_session).find_weekly_aggregates("2023-01-30T00:00:00", "2023-02-07T12:00:00")

    assert rows == [
        AggregatedBucketRow("2023-01-30 to 2023-02-02", 1, 2, 3.0),
        AggregatedBucketRow("2023-02-06 to 2023-02-06", 1, 1, 5.0),
        AggregatedBucketRow("2023-02-07 to 2023-02-07", 3, 1, 5.0),
    ]


def test_driver_errors_become_upstream_failures(db_session):
    repo = RatingRepository(db_session)
    boom = OperationalError("SELECT 1", {}, Exception("database is locked"))

    with patch.object(db_session, "execute", side_effect=boom):
        with pytest.raises(ScoreError) as exc:
            repo.find_ratings_in_period("2023-01-01T00:00:00", "2023-01-02T00:00:00")

    assert exc.value.kind is ScoreErrorKind.UPSTREAM_FAILURE
    assert exc.value.cause is boom
