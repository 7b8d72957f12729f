from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    service_name: str = Field(
        default="sanctuary-relay",
        validation_alias=AliasChoices("SERVICE_NAME", "service_name"),
        description="Name reported by the health check and the root banner.",
    )
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="Listening port used by `python -m app`.",
    )

    # HTTP surface
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Origins allowed for cross-origin requests (JSON list).",
    )
    max_body_bytes: int = Field(
        default=2 * 1024 * 1024,
        ge=1024,
        validation_alias=AliasChoices("MAX_BODY_BYTES", "max_body_bytes"),
        description="Largest accepted request body (bytes).",
    )

    # Upstream completion provider (OpenAI-compatible)
    # Prompts carry personal questions and birth data; they are never logged.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API key (required for /magicball and /astro).",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Base URL for OpenAI API (override for proxies/emulators).",
    )
    openai_default_model: str = Field(
        default="gpt-4.1",
        validation_alias=AliasChoices("OPENAI_DEFAULT_MODEL", "openai_default_model"),
        description="Global fallback model identifier.",
    )
    openai_model_chat: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_MODEL_CHAT", "openai_model_chat"),
        description="Chat model used by both endpoints unless overridden.",
    )
    openai_model_astro: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_MODEL_ASTRO", "openai_model_astro"),
        description="Model override for /astro.",
    )

    # /magicball generation bounds
    magicball_max_tokens: int = Field(
        default=1400,
        ge=16,
        validation_alias=AliasChoices("MAGICBALL_MAX_TOKENS", "magicball_max_tokens"),
    )
    magicball_temperature: float = Field(
        default=0.85,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("MAGICBALL_TEMPERATURE", "magicball_temperature"),
    )
    magicball_timeout_seconds: float = Field(
        default=25.0,
        ge=10.0,
        validation_alias=AliasChoices("MAGICBALL_TIMEOUT_SECONDS", "magicball_timeout_seconds"),
        description="Upper bound on the wait for an oracle completion (seconds).",
    )

    # /astro generation bounds (longer output, so larger budgets)
    astro_max_tokens: int = Field(
        default=2600,
        ge=16,
        validation_alias=AliasChoices("ASTRO_MAX_TOKENS", "astro_max_tokens"),
    )
    astro_temperature: float = Field(
        default=0.65,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("ASTRO_TEMPERATURE", "astro_temperature"),
    )
    astro_timeout_seconds: float = Field(
        default=60.0,
        ge=10.0,
        validation_alias=AliasChoices("ASTRO_TIMEOUT_SECONDS", "astro_timeout_seconds"),
        description="Upper bound on the wait for a chart interpretation (seconds).",
    )
    astro_max_planets: int = Field(
        default=20,
        ge=1,
        validation_alias=AliasChoices("ASTRO_MAX_PLANETS", "astro_max_planets"),
        description="Planet entries forwarded upstream; extra entries are dropped.",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
