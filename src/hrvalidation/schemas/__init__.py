"\"\"\"Pydantic schema definitions for candidates and reviewer validations.\"\"\""

from __future__ import annotations

from .validation import (
    CandidateRecord,
    CandidateStatus,
    Decision,
    ResolvedStatus,
    ReviewType,
    ValidationRecord,
    ValidationSubmission,
)

__all__ = [
    "CandidateRecord",
    "CandidateStatus",
    "Decision",
    "ResolvedStatus",
    "ReviewType",
    "ValidationRecord",
    "ValidationSubmission",
]
