"\"\"\"Batch status resolution and submission replay.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from .core import (
    StatusResolver,
    StatusTransition,
    TransitionSink,
    ValidationSubmissionError,
    ValidationWorkflow,
)
from .schemas import CandidateRecord, CandidateStatus, ValidationSubmission
from . import __version__

# statuses assigned by steps that never go through validation
UNRESOLVED_STATUSES = frozenset({CandidateStatus.DRAFT, CandidateStatus.HIRED})


class SubmissionEntry(BaseModel):
    """One line of a submissions file."""

    candidate_id: str
    submission: ValidationSubmission

    model_config = ConfigDict(extra="forbid")


class RecordLoadError(ValueError):
    """Raised when a JSONL file contains invalid records."""

    label = "record"

    def __init__(self, errors: list[str], partial: list[Any]):
        super().__init__(f"{self.label.capitalize()} loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.label.capitalize()} loading failed: {self.errors}"


class CandidateLoadError(RecordLoadError):
    label = "candidate"


class SubmissionLoadError(RecordLoadError):
    label = "submission"


def _load_jsonl(path: Path, model: type[BaseModel]) -> tuple[list[Any], list[str]]:
    items: list[Any] = []
    errors: list[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for idx, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                record = json.loads(raw)
            except json.JSONDecodeError as exc:
                errors.append(f"line {idx}: invalid JSON ({exc})")
                continue
            try:
                items.append(model.model_validate(record))
            except ValidationError as exc:
                errors.append(f"line {idx}: {exc}")
    return items, errors


class CandidateLoader:
    """Load candidate records from JSON lines."""

    def load(self, path: Path) -> list[CandidateRecord]:
        candidates, errors = _load_jsonl(path, CandidateRecord)
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class SubmissionLoader:
    """Load pending reviewer submissions from JSON lines."""

    def load(self, path: Path) -> list[SubmissionEntry]:
        entries, errors = _load_jsonl(path, SubmissionEntry)
        if errors:
            raise SubmissionLoadError(errors, entries)
        return entries


class OutputWriter:
    """Persist pipeline results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class StatusPipeline:
    """Recompute candidate statuses from their validation histories."""

    def __init__(
        self,
        *,
        resolver: StatusResolver,
        workflow: ValidationWorkflow,
        candidate_loader: CandidateLoader | None = None,
        submission_loader: SubmissionLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._resolver = resolver
        self._workflow = workflow
        self._candidates = candidate_loader or CandidateLoader()
        self._submissions = submission_loader or SubmissionLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def resolve_all(
        self,
        *,
        candidates_path: Path,
        output_path: Path,
        audit_logger: TransitionSink | None = None,
    ) -> list[dict]:
        candidates, errors = self._load_candidates(candidates_path)

        results: list[dict] = []
        for candidate in candidates:
            if candidate.status in UNRESOLVED_STATUSES:
                self._logger.debug(
                    "status.skipped",
                    candidate_id=candidate.candidate_id,
                    status=candidate.status.value,
                )
                results.append(candidate.to_payload())
                continue

            status = self._resolver.resolve(
                candidate.validations, candidate.is_technical_position
            )
            transition = StatusTransition(
                candidate_id=candidate.candidate_id,
                previous=candidate.status,
                current=status,
            )
            self._logger.info(
                "status.resolved",
                candidate_id=candidate.candidate_id,
                previous_status=transition.previous.value,
                status=transition.current.value,
                changed=transition.changed,
            )
            if transition.changed and audit_logger:
                audit_logger.append(_transition_entry(transition))

            resolved = candidate.model_copy(update={"status": CandidateStatus(status.value)})
            results.append(resolved.to_payload())

        self._writer.write(output_path, _with_metadata(results, errors))
        return results

    def apply_submissions(
        self,
        *,
        candidates_path: Path,
        submissions_path: Path,
        output_path: Path,
        audit_logger: TransitionSink | None = None,
    ) -> list[dict]:
        candidates, errors = self._load_candidates(candidates_path)
        try:
            entries = self._submissions.load(submissions_path)
        except SubmissionLoadError as exc:
            entries = exc.partial
            errors.extend(exc.errors)
            self._logger.warning("submissions.partial_load", errors=exc.errors)

        # submissions go to the first occurrence of an id
        positions: dict[str, int] = {}
        for index, candidate in enumerate(candidates):
            if candidate.candidate_id in positions:
                errors.append(
                    f"candidate {index + 1}: duplicate candidate id '{candidate.candidate_id}'"
                )
                continue
            positions[candidate.candidate_id] = index

        for position, entry in enumerate(entries, start=1):
            index = positions.get(entry.candidate_id)
            if index is None:
                errors.append(f"submission {position}: unknown candidate '{entry.candidate_id}'")
                continue
            try:
                outcome = self._workflow.submit(
                    candidates[index], entry.submission, sink=audit_logger
                )
            except ValidationSubmissionError as exc:
                errors.append(f"submission {position}: {exc.code} ({exc})")
                continue
            candidates[index] = outcome.candidate

        results = [candidate.to_payload() for candidate in candidates]
        self._writer.write(output_path, _with_metadata(results, errors))
        return results

    def _load_candidates(self, path: Path) -> tuple[list[CandidateRecord], list[str]]:
        try:
            return self._candidates.load(path), []
        except CandidateLoadError as exc:
            self._logger.warning("candidates.partial_load", errors=exc.errors)
            return exc.partial, list(exc.errors)


def _transition_entry(transition: StatusTransition) -> dict[str, Any]:
    return {
        "action_type": "update_candidate",
        "entity_type": "candidate",
        "entity_id": transition.candidate_id,
        "details": {
            "previous_status": transition.previous.value,
            "status": transition.current.value,
        },
        "created_at": pendulum.now("UTC").to_iso8601_string(),
    }


def _with_metadata(results: list[dict], errors: list[str]) -> dict[str, Any]:
    return {
        "metadata": {
            "candidate_count": len(results),
            "errors": errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        },
        "results": results,
    }
