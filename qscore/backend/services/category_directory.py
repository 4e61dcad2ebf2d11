from __future__ import annotations

import logging
from dataclasses import dataclass, field

from services.rating_repository import CategoryRow, RatingRepository

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown Category"


@dataclass(frozen=True)
class CategoryDirectory:
    """
    Snapshot of rating categories, loaded once per request.
    Lookups by id fall back to UNKNOWN_CATEGORY (logged, never raised).
    """

    categories: tuple[CategoryRow, ...]
    _by_id: dict[int, CategoryRow] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {c.id: c for c in self.categories})

    @classmethod
    def load(cls, repo: RatingRepository) -> "CategoryDirectory":
        return cls(categories=tuple(repo.list_all_categories()))

    def list_categories(self) -> list[CategoryRow]:
        return list(self.categories)

    def names(self) -> list[str]:
        return [c.name for c in self.categories]

    def weights_by_name(self) -> dict[str, float]:
        return {c.name: c.weight for c in self.categories}

    def name_by_id(self, category_id: int) -> str:
        row = self._by_id.get(category_id)
        if row is None:
            logger.warning("Category ID %s not found in rating categories", category_id)
            return UNKNOWN_CATEGORY
        return row.name
