from typing import Literal, Optional

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttpClientSettings(BaseSettings):

    # ---- transport ----
    base_url: Optional[AnyHttpUrl] = None  # joined onto relative resource URIs
    timeout: Optional[float] = 10.0  # seconds, passed straight to requests
    verify_ssl: bool = True  # True -> certifi CA bundle

    # ---- runtime ----
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="JSONAPI_",      # JSONAPI_BASE_URL, JSONAPI_TIMEOUT, etc.
        extra = "ignore"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        # JSONAPI_LOG_LEVEL=debug is as good as DEBUG
        return value.upper() if isinstance(value, str) else value


def get_settings() -> HttpClientSettings:
    """Read transport settings from the environment (and .env if present)."""
    return HttpClientSettings()
