from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ReviewType(str, Enum):
    """Review track a validation belongs to."""

    SALES = "sales"
    TECH = "tech"


class Decision(str, Enum):
    """Reviewer decision."""

    APPROVED = "approved"
    REJECTED = "rejected"


class ResolvedStatus(str, Enum):
    """Pipeline status computed from a validation history."""

    PENDING_TECH = "pending_tech"
    PENDING_SALES = "pending_sales"
    VALIDATED = "validated"
    REJECTED = "rejected"
    PENDING = "pending"


class CandidateStatus(str, Enum):
    """Every status a candidate can carry, including ones set outside validation."""

    DRAFT = "draft"
    PENDING = "pending"
    PENDING_SALES = "pending_sales"
    PENDING_TECH = "pending_tech"
    VALIDATED = "validated"
    REJECTED = "rejected"
    HIRED = "hired"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ValidationRecord(BaseModel):
    """A single reviewer decision on a candidate.

    Records are immutable. The storage layer names the fields ``type``,
    ``status``, ``created_at``, ``user_id`` and ``id``; both spellings are
    accepted on input.
    """

    review_type: ReviewType = Field(validation_alias=AliasChoices("review_type", "type"))
    decision: Decision = Field(validation_alias=AliasChoices("decision", "status"))
    timestamp: datetime = Field(validation_alias=AliasChoices("timestamp", "created_at"))
    justification: str | None = None
    record_id: str | None = Field(default=None, validation_alias=AliasChoices("record_id", "id"))
    candidate_id: str | None = None
    reviewer_id: str | None = Field(
        default=None, validation_alias=AliasChoices("reviewer_id", "user_id")
    )

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("timestamp")
    @classmethod
    def _naive_timestamps_are_utc(cls, value: datetime) -> datetime:
        # mixed naive/aware values would not be comparable
        return _as_utc(value)


class ValidationSubmission(BaseModel):
    """A reviewer action that has not been recorded yet."""

    reviewer_id: str
    review_type: ReviewType
    decision: Decision
    justification: str | None = None
    timestamp: datetime | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("justification")
    @classmethod
    def _strip_justification(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()

    @field_validator("timestamp")
    @classmethod
    def _naive_timestamps_are_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None

    def to_record(self, *, candidate_id: str, timestamp: datetime) -> ValidationRecord:
        return ValidationRecord(
            review_type=self.review_type,
            decision=self.decision,
            justification=self.justification or None,
            timestamp=self.timestamp or timestamp,
            candidate_id=candidate_id,
            reviewer_id=self.reviewer_id,
        )


class CandidateRecord(BaseModel):
    """Candidate entity as stored by the candidate store."""

    candidate_id: str = Field(validation_alias=AliasChoices("candidate_id", "id"))
    name: str | None = None
    position: str | None = None
    is_technical_position: bool = False
    status: CandidateStatus = CandidateStatus.DRAFT
    validations: list[ValidationRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
