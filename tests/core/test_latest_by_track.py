from __future__ import annotations

from datetime import datetime, timezone

from hrvalidation.core import latest_by_track
from hrvalidation.schemas import ReviewType, ValidationRecord


def build(review_type: str, decision: str, day: int, record_id: str) -> ValidationRecord:
    return ValidationRecord(
        review_type=review_type,
        decision=decision,
        timestamp=datetime(2024, 5, day, tzinfo=timezone.utc),
        record_id=record_id,
    )


def test_empty_history_has_no_tracks():
    assert latest_by_track([]) == {}


def test_picks_latest_per_track_independently():
    records = [
        build("sales", "approved", 3, "s-3"),
        build("tech", "rejected", 1, "t-1"),
        build("sales", "rejected", 5, "s-5"),
        build("tech", "approved", 4, "t-4"),
        build("sales", "approved", 2, "s-2"),
    ]

    latest = latest_by_track(records)

    assert latest[ReviewType.SALES].record_id == "s-5"
    assert latest[ReviewType.TECH].record_id == "t-4"


def test_tie_keeps_first_encountered_record():
    records = [
        build("sales", "approved", 7, "first"),
        build("sales", "rejected", 7, "second"),
    ]

    assert latest_by_track(records)[ReviewType.SALES].record_id == "first"


def test_single_track_only():
    latest = latest_by_track([build("tech", "approved", 1, "t-1")])

    assert ReviewType.SALES not in latest
    assert latest[ReviewType.TECH].record_id == "t-1"
