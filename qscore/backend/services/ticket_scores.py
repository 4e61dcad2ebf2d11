"""Per-ticket grouping of raw ratings and the per-category ticket breakdown."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from services.category_directory import CategoryDirectory
from services.rating_math import round2
from services.rating_repository import RawRatingRow

# 1..5 -> 20..100
_PERCENT_PER_POINT = 20


@dataclass(frozen=True)
class TicketCategoryScore:
    ticket_id: int
    # Only categories the ticket was actually rated in.
    category_scores: dict[str, float]


def group_ratings_by_ticket(
    rows: Iterable[RawRatingRow], directory: CategoryDirectory
) -> dict[int, dict[str, list[int]]]:
    """ticket_id -> category name -> ratings, in row order. Built in one pass."""
    grouped: dict[int, dict[str, list[int]]] = defaultdict(lambda: defaultdict(list))
    for row in rows:
        grouped[row.ticket_id][directory.name_by_id(row.category_id)].append(row.rating)
    return {ticket_id: dict(by_cat) for ticket_id, by_cat in grouped.items()}


def latest_rating_per_category(grouped: dict[int, dict[str, list[int]]]) -> dict[int, dict[str, int]]:
    """Collapse to one rating per (ticket, category); a later rating replaces an earlier one."""
    return {ticket_id: {name: ratings[-1] for name, ratings in by_cat.items()} for ticket_id, by_cat in grouped.items()}


def ticket_category_scores(rows: Iterable[RawRatingRow], directory: CategoryDirectory) -> list[TicketCategoryScore]:
    grouped = group_ratings_by_ticket(rows, directory)
    out: list[TicketCategoryScore] = []
    for ticket_id, by_cat in grouped.items():
        scores = {name: round2(sum(r) / len(r) * _PERCENT_PER_POINT) for name, r in by_cat.items()}
        out.append(TicketCategoryScore(ticket_id=ticket_id, category_scores=scores))
    return out


def fill_missing_categories(scores: list[TicketCategoryScore], directory: CategoryDirectory) -> list[TicketCategoryScore]:
    """
    External view: sorted by ticket id, every directory category present (0.0 when unrated).
    Names outside the directory (the unknown-category sentinel) are kept after the directory ones.
    """
    names = directory.names()
    out: list[TicketCategoryScore] = []
    for s in sorted(scores, key=lambda x: x.ticket_id):
        filled = {name: s.category_scores.get(name, 0.0) for name in names}
        for name, value in s.category_scores.items():
            filled.setdefault(name, value)
        out.append(TicketCategoryScore(ticket_id=s.ticket_id, category_scores=filled))
    return out
