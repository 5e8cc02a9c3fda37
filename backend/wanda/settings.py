"""Settings for the Wanda trust and moderation engine."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Canonical author identity for content ingested from official external sources.
SYSTEM_OFFICIAL_ID = UUID("00000000-0000-0000-0000-000000000000")


def _env_field(default, *env_names: str):
    if env_names:
        alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
        return Field(default=default, validation_alias=alias)
    return Field(default=default)


class Settings(BaseSettings):
    environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
    service_name: str = _env_field("wanda-engine", "SERVICE_NAME")
    git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA")
    log_level: str = _env_field("INFO", "LOG_LEVEL")
    log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")
    moderation_config_path: Optional[str] = _env_field(None, "MODERATION_CONFIG_PATH")
    system_author_id: UUID = _env_field(SYSTEM_OFFICIAL_ID, "SYSTEM_AUTHOR_ID")
    default_trust_score: int = _env_field(50, "DEFAULT_TRUST_SCORE")
    high_reliability_score: int = _env_field(80, "HIGH_RELIABILITY_SCORE")
    sync_interval_seconds: float = _env_field(900.0, "SYNC_INTERVAL_SECONDS")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    def _normalise_level(cls, value):  # type: ignore[override]
        if value in (None, ""):
            return "INFO"
        return str(value).strip().upper()

    @field_validator("default_trust_score", "high_reliability_score")
    def _bounded_score(cls, value: int) -> int:  # type: ignore[override]
        if not 0 <= value <= 100:
            raise ValueError("score settings must be within 0..100")
        return value


settings = Settings()
