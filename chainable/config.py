"""Library settings loaded from environment variables."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Chainable configuration.

    Values are read from environment variables (or a `.env` file).
    """

    # Supabase (only needed by the Supabase date source)
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_http_max_connections: int = 100
    supabase_http_max_keepalive_connections: int = 50
    supabase_postgrest_timeout_seconds: int = 30

    log_level: str = "INFO"
    slow_query_log_threshold_ms: int = 0

    # Reference zone used to turn timestamps into calendar days
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @property
    def has_supabase(self) -> bool:
        """Return True when Supabase connection settings are present."""
        return bool(self.supabase_url and self.supabase_service_key)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
