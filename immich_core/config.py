# =============================================================================
# immich_core/config.py  -  Process Settings
# =============================================================================
#
# Settings are read once, at start-up, from the environment (and a .env file
# at the project root when one exists):
#
#   IMMICH_INSTANCE_URL  - base URL of the Immich server (required)
#   IMMICH_API_KEY       - API key sent as the X-API-Key header (required)
#   CACHE_TTL            - lifetime of cached GET responses, in seconds
#   REQUEST_TIMEOUT      - per-request timeout, in seconds (uploads ignore it)
#   LOG_LEVEL            - logging level for the stderr handler
#
# Changing any of these requires a restart: get_settings() caches the first
# successful load for the life of the process.
# =============================================================================

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from immich_core.errors import ConfigurationError

ROOT_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Immich connection ---
    immich_instance_url: str = Field(..., min_length=1)
    immich_api_key: str = Field(..., min_length=1)

    # --- Transport behaviour ---
    cache_ttl: float = Field(300, ge=0)
    request_timeout: float = Field(30.0, gt=0)

    log_level: str = "INFO"

    @field_validator("immich_instance_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment, once per process.

    Raises:
        ConfigurationError: if a required variable is missing or a value is
            out of range.  The message names every offending field.
    """
    load_dotenv(ROOT_DIR / ".env")
    try:
        return Settings()
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]).upper() for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid or missing settings: {fields}") from exc
