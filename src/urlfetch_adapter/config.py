"""Runtime configuration for the URL fetch adapter (Pydantic v2)."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)

# Load .env if present (non-fatal if missing)
load_dotenv(dotenv_path=Path(".env"), override=False)

# Name of the runtime service that performs fetches.
SERVICE_NAME: Final[str] = "urlfetch"
# Remote call invoked on the fetch service.
FETCH_CALL: Final[str] = "Fetch"

LOG_LEVELS: Final[set[str]] = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Runtime settings loaded from env with sane defaults (Pydantic v2)."""

    model_config = SettingsConfigDict(
        env_prefix="URLFETCH_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level for the package loggers.")

    # Runtime API endpoint
    api_url: str = Field(
        default="http://localhost:8080/urlfetch-relay",
        description="Endpoint of a relay speaking this package's JSON call envelope.",
    )
    api_timeout: float = Field(default=60.0, gt=0.0)   # used when the request has no deadline
    deadline_slack: float = Field(default=5.0, ge=0.0)  # added on top of a request deadline

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            log.warning("Unknown log level %r, falling back to INFO", v)
            return "INFO"
        return level


@lru_cache()
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
