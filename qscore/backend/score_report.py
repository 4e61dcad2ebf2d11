#!/usr/bin/env python3
"""Print one scoring view as JSON.

    qscore-report --start 2019-03-01T00:00:00 --end 2019-03-31T23:59:59 --view weighted --include-previous
    qscore-report --view ticket-score --rating Spelling=4 --rating GDPR=5
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from config import settings
from database import session_scope
from services.scoring_service import ScoringService

VIEWS = ("aggregated", "tickets", "weighted", "ticket-score")


def _category_rating(text: str) -> tuple[str, int]:
    name, sep, value = text.rpartition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected CATEGORY=RATING, got {text!r}")
    try:
        return name, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"rating for {name!r} is not an integer: {value!r}") from None


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="qscore-report", description="Ticket quality scores for a date range")
    p.add_argument("--start", help="yyyy-MM-ddTHH:mm:ss")
    p.add_argument("--end", help="yyyy-MM-ddTHH:mm:ss")
    p.add_argument("--view", choices=VIEWS, default="aggregated")
    p.add_argument("--include-previous", action="store_true", help="weighted view only")
    p.add_argument(
        "--rating",
        action="append",
        type=_category_rating,
        default=[],
        metavar="CATEGORY=RATING",
        help="ticket-score view only; repeat per category",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=settings.log_level)

    svc = ScoringService()
    with session_scope() as db:
        if args.view == "aggregated":
            res = svc.aggregated_scores(db, args.start, args.end)
        elif args.view == "tickets":
            res = svc.ticket_category_scores(db, args.start, args.end)
        elif args.view == "weighted":
            res = svc.weighted_scores(db, args.start, args.end, args.include_previous)
        else:
            res = svc.calculate_score(db, dict(args.rating))

    if not res.ok:
        print(f"{res.error.kind.value}: {res.error.message}", file=sys.stderr)
        return 1

    value = res.value
    if isinstance(value, float):
        payload = {"weighted_score": value}
    elif isinstance(value, list):
        payload = [asdict(v) for v in value]
    else:
        payload = asdict(value)
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
