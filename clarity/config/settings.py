"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Clarity Snapshot"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @model_validator(mode="after")
    def validate_limits_positive(self) -> "Settings":
        for field_name in (
            "narrative_timeout",
            "enrichment_deadline",
            "enrichment_source_timeout",
            "snippet_max_chars",
            "response_cache_max_size",
            "response_cache_ttl",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'], consider restricting in production"
            )
        return self

    # Snapshot
    snapshot_version: str = "1.0.0"

    # Anthropic (narrative panes)
    anthropic_api_key: str | None = None
    narrative_model: str = "claude-sonnet-4-5"
    narrative_temperature: float = 0.75
    narrative_max_tokens: int = 1200
    narrative_timeout: float = 20.0
    narrative_max_retries: int = 2

    # Enrichment
    enrichment_deadline: float = 5.0
    enrichment_source_timeout: float = 3.0
    enrichment_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    snippet_max_chars: int = 150

    # Response cache
    response_cache_max_size: int = 100
    response_cache_ttl: int = 86400

    # CORS
    allowed_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
