from __future__ import annotations

from functools import lru_cache
from typing import Any

from loguru import logger
from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

console = Console()
log = logger.bind(module="config")

# Country codes where the remote storefront is offered when the region gate is on.
DEFAULT_REGION_ALLOWED_COUNTRIES: tuple[str, ...] = (
    "RU",
    "BY",
    "KZ",
    "KG",
    "TJ",
    "UZ",
    "AZ",
    "AM",
    "MD",
)


class Settings(BaseSettings):
    """Centralised application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="Shopfront", alias="APP_NAME")
    environment: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    remote_config_url: str | None = Field(default=None, alias="REMOTE_CONFIG_URL")
    remote_config_key: str = Field(default="url", alias="REMOTE_CONFIG_KEY")
    remote_config_timeout_seconds: float = Field(default=5.0, alias="REMOTE_CONFIG_TIMEOUT_SECONDS")

    connectivity_probe_url: str = Field(
        default="https://connectivitycheck.gstatic.com/generate_204",
        alias="CONNECTIVITY_PROBE_URL",
    )
    connectivity_timeout_seconds: float = Field(default=3.0, alias="CONNECTIVITY_TIMEOUT_SECONDS")

    state_database_url: str = Field(default="sqlite:///shopfront_state.db", alias="STATE_DATABASE_URL")
    state_db_echo: bool = Field(default=False, alias="STATE_DB_ECHO")

    region_gate_enabled: bool = Field(default=False, alias="REGION_GATE_ENABLED")
    region_allowed_countries_raw: str = Field(
        default=",".join(DEFAULT_REGION_ALLOWED_COUNTRIES),
        alias="REGION_ALLOWED_COUNTRIES",
    )
    region_country_code: str | None = Field(default=None, alias="REGION_COUNTRY_CODE")

    http_user_agent: str = Field(default="shopfront", alias="HTTP_USER_AGENT")

    @field_validator("remote_config_url", "region_country_code", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @computed_field(return_type=tuple[str, ...])
    @property
    def region_allowed_countries(self) -> tuple[str, ...]:
        """Return the allowed country codes, upper-cased and de-duplicated."""
        seen: list[str] = []
        for part in (self.region_allowed_countries_raw or "").split(","):
            code = part.strip().upper()
            if code and code not in seen:
                seen.append(code)
        return tuple(seen)

    def export_safe(self) -> dict[str, Any]:
        """Return non-sensitive settings for debugging/logging."""
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "remote_config_url": self.remote_config_url,
            "remote_config_key": self.remote_config_key,
            "remote_config_timeout_seconds": self.remote_config_timeout_seconds,
            "connectivity_probe_url": self.connectivity_probe_url,
            "region_gate_enabled": self.region_gate_enabled,
            "region_allowed_countries": list(self.region_allowed_countries),
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""
    settings = Settings()
    console.log(
        f"[bold green]Loaded settings[/] env={settings.environment!r} "
        f"remote_config_url={settings.remote_config_url!r}",
    )
    log.info("Settings initialised: {}", settings.export_safe())
    return settings
