"""Client configuration using pydantic-settings."""

import logging

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Rentverse"
    app_version: str = "0.1.0"
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # Remote services (Cloudflare tunnel hosts in production)
    core_api_host: str = "rentverse-api.daviddmpp.my.id"
    ai_api_host: str = "rentverse-ai.daviddmpp.my.id"
    api_scheme: str = "https"

    # Timeouts in seconds; AI predictions are slower
    core_api_timeout: float = 30.0
    ai_api_timeout: float = 60.0

    # Token storage
    token_key: str = "auth_token"

    # Currency (Malaysian Ringgit)
    currency_code: str = "MYR"
    currency_symbol: str = "RM"

    @model_validator(mode="after")
    def _normalize_log_level(self) -> "Settings":
        """Upper-case the log level and reject names logging doesn't know."""
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        self.log_level = level
        return self

    @property
    def core_api_url(self) -> str:
        """Mobile endpoints of the core service (``/api/v1/m``)."""
        return f"{self.api_scheme}://{self.core_api_host}/api/v1/m"

    @property
    def core_api_base_url(self) -> str:
        """Non-mobile endpoints of the core service, e.g. ``POST /properties``."""
        return f"{self.api_scheme}://{self.core_api_host}/api/v1"

    @property
    def ai_api_url(self) -> str:
        return f"{self.api_scheme}://{self.ai_api_host}"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger so all rentverse.* loggers write to stderr."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
