"""
Configuration for Murajaa library.

Settings are read from environment variables prefixed with ``MURAJAA_``
(for example ``MURAJAA_PASS_THRESHOLD=80``). Build a settings object once per
process and pass it to the components that need it; ``get_settings()``
returns a cached instance built from the environment.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from murajaa.models.progression import StageHours


class MurajaaSettings(BaseSettings):
    """
    Library-wide settings.

    Attributes:
        default_strictness: Hafz level used when a caller does not pass one (1-3)
        pass_threshold: Minimum score (0-100) for a recitation to count as passed
        repetition_count: Repetitions required for a task (lesson default 80)
        unit_repetition_count: Override for line-by-line stages (None = repetition_count)
        stage1_hours: Deadline window for the first learning stage
        stage2_hours: Deadline window for join/second learning stages
        stage3_hours: Deadline window for the full-page stage
        total_pages: Number of pages in the Mushaf
        refinement_enabled: Whether verification calls use semantic refinement by default
        openai_api_key: API key for the chat-completions endpoint
        openai_model: Model used for refinement
        openai_base_url: Base URL of the OpenAI-compatible API
        refinement_timeout: Timeout (seconds) for one refinement request
        credential_ttl: How long (seconds) a fetched API key stays cached
    """

    model_config = SettingsConfigDict(
        env_prefix="MURAJAA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_strictness: int = Field(default=1, ge=1, le=3)
    pass_threshold: int = Field(default=70, ge=0, le=100)

    repetition_count: int = Field(default=80, ge=1)
    unit_repetition_count: Optional[int] = Field(default=None, ge=1)
    stage1_hours: float = Field(default=24.0, gt=0)
    stage2_hours: float = Field(default=48.0, gt=0)
    stage3_hours: float = Field(default=48.0, gt=0)
    total_pages: int = Field(default=602, ge=1)

    refinement_enabled: bool = False
    openai_api_key: Optional[SecretStr] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    refinement_timeout: float = Field(default=30.0, gt=0)
    credential_ttl: float = Field(default=300.0, ge=0)

    def stage_hours(self) -> StageHours:
        """Deadline windows per stage group."""
        return StageHours(
            stage1=self.stage1_hours,
            stage2=self.stage2_hours,
            stage3=self.stage3_hours,
        )


_settings: Optional[MurajaaSettings] = None


def get_settings() -> MurajaaSettings:
    """
    Get the process-wide settings.

    Built from the environment on first use and cached; use ``configure()``
    to replace them or construct ``MurajaaSettings(...)`` directly and pass
    it explicitly.
    """
    global _settings
    if _settings is None:
        _settings = MurajaaSettings()
    return _settings


def configure(**kwargs) -> MurajaaSettings:
    """
    Replace the process-wide settings.

    Example:
        configure(pass_threshold=80, refinement_enabled=True)
    """
    global _settings
    _settings = MurajaaSettings(**kwargs)
    return _settings


def reset_settings() -> None:
    """Forget the cached settings; the next ``get_settings()`` re-reads the environment."""
    global _settings
    _settings = None
