"""Error taxonomy shared by every scoring view.

Engine code raises :class:`ScoreError`; :class:`services.scoring_service.ScoringService`
turns it into a :class:`ScoreResult` so the REST layer (and the CLI) can map the
kind to a status without catching exceptions itself.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ScoreErrorKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    NO_DATA = "no_data"
    UPSTREAM_FAILURE = "upstream_failure"


@dataclass(eq=False)
class ScoreError(Exception):
    kind: ScoreErrorKind
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:  # pragma: no cover
        base = f"{self.kind.value}: {self.message}"
        if self.cause is not None:
            base += f" ({type(self.cause).__name__}: {self.cause})"
        return base

    @classmethod
    def invalid_input(cls, message: str) -> "ScoreError":
        return cls(ScoreErrorKind.INVALID_INPUT, message)

    @classmethod
    def no_data(cls, message: str) -> "ScoreError":
        return cls(ScoreErrorKind.NO_DATA, message)

    @classmethod
    def upstream(cls, message: str, cause: BaseException | None = None) -> "ScoreError":
        return cls(ScoreErrorKind.UPSTREAM_FAILURE, message, cause)


@dataclass(frozen=True)
class ScoreResult(Generic[T]):
    ok: bool
    value: T | None = None
    error: ScoreError | None = None

    @classmethod
    def success(cls, value: T) -> "ScoreResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ScoreError) -> "ScoreResult[T]":
        return cls(ok=False, error=error)
