from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import require_api_key
from database import get_db
from schemas import CategoryRatingResultOut, TicketCategoryScoreOut, WeightedScoresOut
from services.errors import ScoreErrorKind, ScoreResult
from services.scoring_service import ScoringService

router = APIRouter(prefix="/api/v1/scores", tags=["scores"], dependencies=[Depends(require_api_key)])
tickets_router = APIRouter(prefix="/api/v1/tickets", tags=["tickets"], dependencies=[Depends(require_api_key)])

_STATUS_BY_KIND = {
    ScoreErrorKind.INVALID_INPUT: 400,
    ScoreErrorKind.NO_DATA: 404,
    ScoreErrorKind.UPSTREAM_FAILURE: 500,
}


def _svc() -> ScoringService:
    return ScoringService()


def _unwrap(result: ScoreResult):
    if not result.ok:
        err = result.error
        raise HTTPException(status_code=_STATUS_BY_KIND[err.kind], detail=err.message)
    return result.value


@router.get("/aggregated", response_model=list[CategoryRatingResultOut])
def aggregated_scores(startDate: str | None = None, endDate: str | None = None, db: Session = Depends(get_db)):
    """Per-category scores bucketed by day or week over [startDate, endDate]."""
    results = _unwrap(_svc().aggregated_scores(db, startDate, endDate))
    return [CategoryRatingResultOut.model_validate(r) for r in results]


@tickets_router.get("/category-scores", response_model=list[TicketCategoryScoreOut])
def ticket_category_scores(startDate: str | None = None, endDate: str | None = None, db: Session = Depends(get_db)):
    scores = _unwrap(_svc().ticket_category_scores(db, startDate, endDate))
    return [TicketCategoryScoreOut.model_validate(s) for s in scores]


@tickets_router.get("/weighted-scores", response_model=WeightedScoresOut, response_model_exclude_none=True)
def weighted_scores(
    startDate: str | None = None,
    endDate: str | None = None,
    includePreviousPeriod: str = "false",
    db: Session = Depends(get_db),
):
    """
    Overall weighted score for the period; with includePreviousPeriod=true also the
    equally long period right before it and the signed change between the two.
    """
    scores = _unwrap(_svc().weighted_scores(db, startDate, endDate, includePreviousPeriod))
    return WeightedScoresOut.model_validate(scores)
