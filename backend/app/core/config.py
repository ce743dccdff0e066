import logging
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment
load_dotenv(find_dotenv())

logger = logging.getLogger("mgnrega.config")

DEFAULT_DATASET_URL = "https://api.data.gov.in/resource/ee03643a-ee4c-48c2-ac30-9f2ff26ab722"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    API_KEY: Optional[str] = None
    DATASET_URL: str = DEFAULT_DATASET_URL
    HOST: str = "0.0.0.0"
    PORT: int = 6001
    CACHE_TTL_SECONDS: float = 600.0
    RECORD_LIMIT: int = 1000
    REQUEST_TIMEOUT: float = 30.0
    LOG_LEVEL: str = "INFO"
    # comma-separated
    ALLOWED_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_ignore_empty=True, extra="ignore", frozen=True)

    @field_validator("PORT", "CACHE_TTL_SECONDS", "RECORD_LIMIT", "REQUEST_TIMEOUT", mode="before")
    @classmethod
    def fall_back_on_bad_number(cls, v, info):
        default = cls.model_fields[info.field_name].default
        if v is None or (isinstance(v, str) and not v.strip()):
            return default
        cast = int if isinstance(default, int) else float
        try:
            return cast(v.strip()) if isinstance(v, str) else cast(v)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s=%r, using %r", info.field_name, v, default)
            return default

    @field_validator("API_KEY", mode="before")
    @classmethod
    def blank_key_is_none(cls, v):
        return v or None

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return str(v or "INFO").upper()

    @property
    def allowed_origins(self) -> List[str]:
        items = [item.strip() for item in self.ALLOWED_ORIGINS.split(",") if item.strip()]
        return items or ["*"]


def load_settings():
    """Build settings from the process environment (and .env, if any)."""
    return Settings()


@lru_cache
def get_settings():
    return load_settings()


settings = get_settings()
