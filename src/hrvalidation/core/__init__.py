"\"\"\"Status resolution and validation workflow.\"\"\""

from __future__ import annotations

from .resolver import StatusResolver, initial_status, latest_by_track, resolve_status
from .workflow import (
    StatusTransition,
    SubmissionOutcome,
    TransitionSink,
    ValidationSubmissionError,
    ValidationWorkflow,
    WorkflowConfig,
)

__all__ = [
    "StatusResolver",
    "StatusTransition",
    "SubmissionOutcome",
    "TransitionSink",
    "ValidationSubmissionError",
    "ValidationWorkflow",
    "WorkflowConfig",
    "initial_status",
    "latest_by_track",
    "resolve_status",
]
