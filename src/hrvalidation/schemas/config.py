"\"\"\"Pydantic configuration schema for CLI YAML input.\"\"\""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .validation import CandidateStatus


class WorkflowSettings(BaseModel):
    require_justification_on_reject: bool | None = None
    prevent_duplicate_reviews: bool | None = None
    locked_statuses: list[CandidateStatus] | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        workflow_settings = self.workflow.model_dump(mode="json", exclude_none=True)
        if workflow_settings:
            settings["workflow"] = workflow_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise TypeError("Config must be a mapping")
    return AppConfig.model_validate(raw)
