from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from hrvalidation.schemas import (
    CandidateRecord,
    CandidateStatus,
    Decision,
    ReviewType,
    ValidationRecord,
    ValidationSubmission,
)


def test_validation_record_accepts_storage_field_names():
    record = ValidationRecord.model_validate(
        {
            "id": "v-1",
            "candidate_id": "C-1",
            "user_id": "u-1",
            "type": "tech",
            "status": "rejected",
            "justification": "Not enough Kubernetes experience",
            "created_at": "2024-02-03T10:00:00Z",
            "user_profile": {"full_name": "Alex Martin", "role": "Tech"},
        }
    )

    assert record.record_id == "v-1"
    assert record.reviewer_id == "u-1"
    assert record.review_type is ReviewType.TECH
    assert record.decision is Decision.REJECTED
    assert record.timestamp == datetime(2024, 2, 3, 10, tzinfo=timezone.utc)


def test_validation_record_is_immutable():
    record = ValidationRecord(
        review_type="sales",
        decision="approved",
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )

    with pytest.raises(ValidationError):
        record.decision = Decision.REJECTED  # type: ignore[misc]


def test_validation_record_rejects_unknown_track():
    with pytest.raises(ValidationError):
        ValidationRecord(review_type="legal", decision="approved", timestamp="2024-01-01T00:00:00Z")


def test_validation_record_requires_decision():
    with pytest.raises(ValidationError):
        ValidationRecord(review_type="sales", timestamp="2024-01-01T00:00:00Z")  # type: ignore[call-arg]


def test_naive_timestamp_is_treated_as_utc():
    record = ValidationRecord(review_type="sales", decision="approved", timestamp="2024-01-01T08:30:00")

    assert record.timestamp.tzinfo is timezone.utc


def test_submission_strips_justification_and_builds_record():
    submission = ValidationSubmission(
        reviewer_id="u-2",
        review_type="sales",
        decision="rejected",
        justification="  salary mismatch \n",
    )
    fallback = datetime(2024, 4, 1, tzinfo=timezone.utc)

    record = submission.to_record(candidate_id="C-9", timestamp=fallback)

    assert submission.justification == "salary mismatch"
    assert record.timestamp == fallback
    assert record.candidate_id == "C-9"
    assert record.reviewer_id == "u-2"


def test_submission_forbids_unknown_fields():
    with pytest.raises(ValidationError):
        ValidationSubmission(reviewer_id="u", review_type="sales", decision="approved", score=3)  # type: ignore[call-arg]


def test_candidate_record_defaults_and_extras():
    candidate = CandidateRecord.model_validate(
        {"id": "C-3", "first_name": "Camille", "expected_salary": 48000}
    )

    assert candidate.candidate_id == "C-3"
    assert candidate.status is CandidateStatus.DRAFT
    assert candidate.is_technical_position is False
    assert candidate.validations == []

    payload = candidate.to_payload()
    assert payload["first_name"] == "Camille"
    assert payload["status"] == "draft"
