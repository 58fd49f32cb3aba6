from __future__ import annotations

import pytest
from pydantic import ValidationError

from hrvalidation.container import create_container
from hrvalidation.schemas import CandidateStatus
from hrvalidation.schemas.config import AppConfig, load_config


def test_create_container_defaults():
    container = create_container()

    workflow = container.workflow()
    pipeline = container.pipeline()

    assert workflow._config.require_justification_on_reject is True
    assert workflow._config.locked_statuses == (
        CandidateStatus.VALIDATED,
        CandidateStatus.REJECTED,
        CandidateStatus.HIRED,
    )
    assert pipeline._workflow is workflow
    assert pipeline._resolver is container.resolver()


def test_create_container_with_workflow_overrides():
    container = create_container(
        settings={
            "workflow": {
                "prevent_duplicate_reviews": False,
                "locked_statuses": ["hired"],
            }
        }
    )

    config = container.workflow()._config

    assert config.prevent_duplicate_reviews is False
    assert config.require_justification_on_reject is True
    assert config.locked_statuses == (CandidateStatus.HIRED,)


def test_load_config_validation():
    app_config = load_config(
        {"workflow": {"require_justification_on_reject": False, "locked_statuses": ["validated"]}}
    )

    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings == {
        "workflow": {
            "require_justification_on_reject": False,
            "locked_statuses": ["validated"],
        }
    }


def test_empty_config_produces_no_settings():
    assert load_config({}).to_settings() == {}


def test_load_config_rejects_unknown_status():
    with pytest.raises(ValidationError):
        load_config({"workflow": {"locked_statuses": ["archived"]}})


def test_load_config_requires_mapping():
    with pytest.raises(TypeError):
        load_config(["workflow"])
