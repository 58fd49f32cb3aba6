"\"\"\"Validation submission workflow.\"\"\""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

import pendulum
import structlog

from ..schemas import (
    CandidateRecord,
    CandidateStatus,
    Decision,
    ResolvedStatus,
    ValidationRecord,
    ValidationSubmission,
)
from .resolver import StatusResolver


@runtime_checkable
class TransitionSink(Protocol):
    """Receives audit entries for accepted submissions."""

    def append(self, record: dict) -> None:
        """Persist a single audit entry."""


@dataclass
class WorkflowConfig:
    """Policy switches applied before a submission is recorded."""

    require_justification_on_reject: bool = True
    prevent_duplicate_reviews: bool = True
    locked_statuses: tuple[CandidateStatus, ...] = (
        CandidateStatus.VALIDATED,
        CandidateStatus.REJECTED,
        CandidateStatus.HIRED,
    )

    def __post_init__(self) -> None:
        self.locked_statuses = tuple(CandidateStatus(s) for s in self.locked_statuses)


@dataclass(slots=True, frozen=True)
class StatusTransition:
    """Status before and after a resolution."""

    candidate_id: str
    previous: CandidateStatus
    current: ResolvedStatus

    @property
    def changed(self) -> bool:
        return self.previous.value != self.current.value


@dataclass(slots=True)
class SubmissionOutcome:
    """Result of an accepted submission."""

    candidate: CandidateRecord
    record: ValidationRecord
    transition: StatusTransition
    audit_entry: dict[str, Any] = field(default_factory=dict)


class ValidationSubmissionError(ValueError):
    """Raised when a submission is refused by the workflow policy."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class ValidationWorkflow:
    """Records reviewer submissions and re-resolves the candidate status."""

    def __init__(
        self,
        *,
        resolver: StatusResolver | None = None,
        config: WorkflowConfig | None = None,
        sink: TransitionSink | None = None,
    ) -> None:
        self._resolver = resolver or StatusResolver()
        self._config = config or WorkflowConfig()
        self._sink = sink
        self._logger = structlog.get_logger(__name__)

    def submit(
        self,
        candidate: CandidateRecord,
        submission: ValidationSubmission,
        *,
        sink: TransitionSink | None = None,
    ) -> SubmissionOutcome:
        try:
            self._check(candidate, submission)
        except ValidationSubmissionError as exc:
            self._logger.warning(
                "submission.refused",
                candidate_id=candidate.candidate_id,
                reviewer_id=submission.reviewer_id,
                review_type=submission.review_type.value,
                code=exc.code,
            )
            raise

        record = submission.to_record(
            candidate_id=candidate.candidate_id,
            timestamp=pendulum.now("UTC"),
        )
        validations = [*candidate.validations, record]
        status = self._resolver.resolve(validations, candidate.is_technical_position)
        transition = StatusTransition(
            candidate_id=candidate.candidate_id,
            previous=candidate.status,
            current=status,
        )
        updated = candidate.model_copy(
            update={
                "validations": validations,
                "status": CandidateStatus(status.value),
            }
        )
        audit_entry = build_audit_entry(record, transition)

        target = sink or self._sink
        if target is not None:
            target.append(audit_entry)

        self._logger.info(
            "submission.recorded",
            candidate_id=candidate.candidate_id,
            review_type=record.review_type.value,
            decision=record.decision.value,
            previous_status=transition.previous.value,
            status=transition.current.value,
        )
        return SubmissionOutcome(
            candidate=updated,
            record=record,
            transition=transition,
            audit_entry=audit_entry,
        )

    def _check(self, candidate: CandidateRecord, submission: ValidationSubmission) -> None:
        if candidate.status is CandidateStatus.DRAFT:
            raise ValidationSubmissionError(
                "candidate_not_submitted",
                f"Candidate {candidate.candidate_id!r} is still a draft and cannot be validated",
            )

        if candidate.status in self._config.locked_statuses:
            raise ValidationSubmissionError(
                "candidate_locked",
                f"Candidate {candidate.candidate_id!r} is {candidate.status.value}; "
                "no further validations are accepted",
            )

        if (
            self._config.require_justification_on_reject
            and submission.decision is Decision.REJECTED
            and not submission.justification
        ):
            raise ValidationSubmissionError(
                "justification_required",
                "A justification is required when rejecting a candidate",
            )

        if self._config.prevent_duplicate_reviews and _has_reviewed(
            candidate.validations, submission
        ):
            raise ValidationSubmissionError(
                "duplicate_review",
                f"Reviewer {submission.reviewer_id!r} already submitted a "
                f"{submission.review_type.value} validation for {candidate.candidate_id!r}",
            )


def _has_reviewed(records: Iterable[ValidationRecord], submission: ValidationSubmission) -> bool:
    return any(
        record.reviewer_id == submission.reviewer_id
        and record.review_type is submission.review_type
        for record in records
    )


def build_audit_entry(record: ValidationRecord, transition: StatusTransition) -> dict[str, Any]:
    """Audit log entry for an accepted validation."""
    action = (
        "validate_candidate"
        if record.decision is Decision.APPROVED
        else "reject_candidate"
    )
    return {
        "action_type": action,
        "entity_type": "candidate",
        "entity_id": transition.candidate_id,
        "user_id": record.reviewer_id,
        "details": {
            "validation_type": record.review_type.value,
            "justification": record.justification or "",
            "previous_status": transition.previous.value,
            "status": transition.current.value,
        },
        "created_at": record.timestamp.isoformat(),
    }
