"""Shared fixtures."""

from __future__ import annotations

import pytest

from murajaa.config import MurajaaSettings, reset_settings


@pytest.fixture
def settings() -> MurajaaSettings:
    """Settings with library defaults, ignoring any .env file."""
    return MurajaaSettings(_env_file=None)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()
