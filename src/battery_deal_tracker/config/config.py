# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, STORE__URL.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "battery-deal-tracker"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/deal_tracker.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class StoreSettings(BaseSettings):
    """Remote deal store (PostgREST / Supabase REST) configuration (from env STORE__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["postgrest", "memory"] = Field(
        default="postgrest",
        description="Where deals live: the hosted PostgREST store or a process-local store.",
    )
    url: Optional[str] = Field(
        default=None,
        description="Project base URL, e.g. https://xyz.supabase.co (REST path is appended).",
    )
    anon_key: Optional[str] = Field(
        default=None,
        description="Public anon API key sent as apikey and bearer token.",
    )
    table: str = Field(default="deals", description="Table holding the deals.")
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum number of attempts for retryable failures.",
    )


class DealListSettings(BaseSettings):
    """Deal history list behaviour (from env DEAL_LIST__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    page_size: int = Field(default=20, ge=1, le=500, description="Deals fetched per page.")
    search_debounce_seconds: float = Field(
        default=0.3,
        ge=0.0,
        le=10.0,
        description="Quiet window before a search change triggers a reload.",
    )
    recent_deals_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of recent deals shown on the dashboard.",
    )


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, STORE__ANON_KEY.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    deal_list: DealListSettings = Field(default_factory=DealListSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(store={"backend": "memory"})
        - from_env(deal_list={"page_size": 50})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from battery_deal_tracker.config import get_settings

        settings = get_settings()
        page_size = settings.deal_list.page_size
        store_url = settings.store.url
    """
    return Settings()
