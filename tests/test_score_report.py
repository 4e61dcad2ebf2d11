from __future__ import annotations

import json
from contextlib import contextmanager
from unittest.mock import patch

import score_report


@contextmanager
def _scope(db):
    yield db


def test_prints_weighted_view_as_json(store, db_session, capsys):
    store.categories().rating(1, 1, 5, "2023-01-02T08:00:00")

    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(
            ["--start", "2023-01-01T00:00:00", "--end", "2023-01-05T00:00:00", "--view", "weighted"]
        )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["current_period_score"]["average_score_percentage"] == 100.0
    assert payload["previous_period_score"] is None


def test_reports_errors_on_stderr(store, db_session, capsys):
    store.categories()

    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(
            ["--start", "2023-01-01T00:00:00", "--end", "2023-01-05T00:00:00", "--view", "tickets"]
        )

    assert code == 1
    assert capsys.readouterr().err.strip() == "no_data: No ratings found for the specified period."


def test_ticket_score_view_uses_directory_weights(store, db_session, capsys):
    store.categories()

    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(["--view", "ticket-score", "--rating", "Spelling=5", "--rating", "Randomness=1"])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {"weighted_score": 100.0}


def test_ticket_score_view_rejects_out_of_range_rating(store, db_session, capsys):
    store.categories()

    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(["--view", "ticket-score", "--rating", "Spelling=7"])

    assert code == 1
    assert capsys.readouterr().err.strip() == "invalid_input: Invalid rating value for category: Spelling"


def test_ticket_score_view_without_ratings_is_invalid(store, db_session, capsys):
    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(["--view", "ticket-score"])

    assert code == 1
    assert capsys.readouterr().err.startswith("invalid_input:")


def test_date_views_need_both_bounds(store, db_session, capsys):
    store.categories()

    with patch("score_report.session_scope", lambda: _scope(db_session)):
        code = score_report.main(["--view", "aggregated", "--start", "2023-01-01T00:00:00"])

    assert code == 1
    assert capsys.readouterr().err.startswith("invalid_input:")
