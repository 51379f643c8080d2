from typing import Optional
from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class RelaySettings(BaseSettings):
    """Process configuration, read once from the environment and .env, then injected into the app."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    google_script_url: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/app.log"
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("google_script_url", "log_file", mode="before")
    @classmethod
    def empty_is_unset(cls, value):
        # An exported-but-empty variable means "not configured"
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, value):
        return str(value).upper()

def setup_logging(settings: RelaySettings) -> Optional[int]:
    """Attach the rotating file sink; returns the loguru handler id."""
    if not settings.log_file:
        return None
    handler_id = logger.add(
        settings.log_file,
        rotation="1 day",
        retention="7 days",
        level=settings.log_level,
    )
    logger.info(f"Logging to {settings.log_file} at {settings.log_level}")
    return handler_id
