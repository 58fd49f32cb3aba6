"\"\"\"Dependency injection container for validation status tracking.\"\"\""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import StatusResolver, ValidationWorkflow, WorkflowConfig
from .pipeline import CandidateLoader, StatusPipeline, SubmissionLoader


class ValidationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    resolver = providers.Singleton(StatusResolver)

    workflow_config = providers.Singleton(WorkflowConfig)

    workflow = providers.Singleton(
        ValidationWorkflow,
        resolver=resolver,
        config=workflow_config,
    )

    candidate_loader = providers.Singleton(CandidateLoader)
    submission_loader = providers.Singleton(SubmissionLoader)

    pipeline = providers.Factory(
        StatusPipeline,
        resolver=resolver,
        workflow=workflow,
        candidate_loader=candidate_loader,
        submission_loader=submission_loader,
    )


def create_container(*, settings: dict | None = None) -> ValidationContainer:
    """Instantiate container with optional overrides."""

    container = ValidationContainer()

    if not settings:
        return container

    workflow_settings = settings.get("workflow", {}) if isinstance(settings, dict) else {}
    if workflow_settings:
        container.workflow_config.override(
            providers.Singleton(WorkflowConfig, **workflow_settings)
        )

    return container
