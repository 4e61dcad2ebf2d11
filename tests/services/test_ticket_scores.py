from __future__ import annotations

from services.category_directory import UNKNOWN_CATEGORY, CategoryDirectory
from services.rating_repository import CategoryRow, RawRatingRow
from services.ticket_scores import (
    TicketCategoryScore,
    fill_missing_categories,
    group_ratings_by_ticket,
    latest_rating_per_category,
    ticket_category_scores,
)

DIRECTORY = CategoryDirectory(
    categories=(
        CategoryRow(1, "Spelling", 1.0),
        CategoryRow(2, "Grammar", 0.7),
        CategoryRow(3, "GDPR", 1.2),
    )
)


def test_grouping_is_two_level_and_keeps_row_order():
    rows = [
        RawRatingRow(10, 1, 4),
        RawRatingRow(11, 2, 3),
        RawRatingRow(10, 1, 2),
        RawRatingRow(10, 3, 5),
    ]

    grouped = group_ratings_by_ticket(rows, DIRECTORY)

    assert grouped == {10: {"Spelling": [4, 2], "GDPR": [5]}, 11: {"Grammar": [3]}}
    assert latest_rating_per_category(grouped) == {10: {"Spelling": 2, "GDPR": 5}, 11: {"Grammar": 3}}


def test_ticket_scores_average_each_category():
    rows = [RawRatingRow(10, 1, 4), RawRatingRow(10, 1, 3), RawRatingRow(10, 2, 5)]

    scores = ticket_category_scores(rows, DIRECTORY)

    assert scores == [TicketCategoryScore(ticket_id=10, category_scores={"Spelling": 70.0, "Grammar": 100.0})]


def test_fill_missing_categories_sorts_and_zero_fills():
    internal = [
        TicketCategoryScore(12, {"GDPR": 60.0}),
        TicketCategoryScore(3, {"Spelling": 80.0, UNKNOWN_CATEGORY: 40.0}),
    ]

    external = fill_missing_categories(internal, DIRECTORY)

    assert [s.ticket_id for s in external] == [3, 12]
    assert external[0].category_scores == {
        "Spelling": 80.0,
        "Grammar": 0.0,
        "GDPR": 0.0,
        UNKNOWN_CATEGORY: 40.0,
    }
    assert external[1].category_scores == {"Spelling": 0.0, "Grammar": 0.0, "GDPR": 60.0}
    # internal view is untouched: absent stays absent
    assert internal[0].category_scores == {"GDPR": 60.0}
