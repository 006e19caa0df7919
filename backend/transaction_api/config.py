"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - The partner registry is read once at startup and never reloaded

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - `partners` accepts JSON from the PARTNERS env var (complex field), defaulting
      to the fixed partner table shipped with the service
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PARTNERS: dict[str, str] = {
    "Admin": "Admin",
    "FG-00001": "FAKEPASSWORD1234",
    "FG-00002": "FAKEPASSWORD4578",
}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Partners (key -> shared secret)
    partners: dict[str, str] = DEFAULT_PARTNERS

    # Authentication
    freshness_window_seconds: int = 300
    privileged_partner_marker: str = "admin"

    @field_validator("freshness_window_seconds")
    @classmethod
    def non_negative_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError("freshness_window_seconds must be >= 0")
        return v

    # API
    cors_origins: list[str] = []

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
