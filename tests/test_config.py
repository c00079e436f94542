"""Unit tests for settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from murajaa.config import MurajaaSettings, configure, get_settings
from murajaa.exceptions import ConfigurationError, MurajaaError, ProgressionError


def test_defaults(settings: MurajaaSettings) -> None:
    assert settings.default_strictness == 1
    assert settings.pass_threshold == 70
    assert settings.repetition_count == 80
    assert settings.unit_repetition_count is None
    assert settings.total_pages == 602
    assert settings.refinement_enabled is False
    assert settings.openai_model == "gpt-4o-mini"

    hours = settings.stage_hours()
    assert (hours.stage1, hours.stage2, hours.stage3) == (24, 48, 48)


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MURAJAA_PASS_THRESHOLD", "85")
    monkeypatch.setenv("MURAJAA_REFINEMENT_ENABLED", "true")
    monkeypatch.setenv("MURAJAA_OPENAI_API_KEY", "sk-env")

    settings = MurajaaSettings(_env_file=None)

    assert settings.pass_threshold == 85
    assert settings.refinement_enabled is True
    assert settings.openai_api_key.get_secret_value() == "sk-env"
    assert "sk-env" not in repr(settings)


def test_invalid_strictness_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("MURAJAA_DEFAULT_STRICTNESS", "5")

    with pytest.raises(ValidationError):
        MurajaaSettings(_env_file=None)


def test_configure_replaces_cached_settings() -> None:
    configured = configure(_env_file=None, pass_threshold=90)

    assert get_settings() is configured
    assert get_settings().pass_threshold == 90


def test_error_context_is_rendered() -> None:
    error = ProgressionError("Line out of range", page=3, line=16)

    assert isinstance(error, MurajaaError)
    assert str(error) == "Line out of range (page=3, line=16)"
    assert str(ConfigurationError("Bad level", setting_name="level")) == "Bad level (setting=level)"
