# thaikick/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BRAND_NAME, DEFAULT_MAX_BOOKING_DAYS, DEFAULT_MAX_PRIVATE_WEEKS


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    app_name: str = BRAND_NAME
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Deployment environment name",
    )
    is_testing: bool = False  # Set to True when running tests

    database_url: str = Field(
        default="sqlite:///./thaikick.db",
        alias="DATABASE_URL",
        description="SQLAlchemy URL of the primary database",
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    # Sized for a transaction pooler shared by several workers
    database_pool_size: int = Field(default=3, ge=1, alias="DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(default=5, ge=0, alias="DATABASE_MAX_OVERFLOW")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_prefix: str = "/api/v1"

    # Money is stored in whole currency units; no sub-unit currency is used.
    currency: str = Field(default="THB", alias="CURRENCY")

    referral_capture_days: int = Field(
        default=30,
        ge=1,
        alias="REFERRAL_CAPTURE_DAYS",
        description="Days a captured referral code remains eligible for commission",
    )

    # Longest range one checkout may cover; each covered date is a row
    max_booking_days: int = Field(default=DEFAULT_MAX_BOOKING_DAYS, ge=1, alias="MAX_BOOKING_DAYS")
    max_private_weeks: int = Field(default=DEFAULT_MAX_PRIVATE_WEEKS, ge=1, alias="MAX_PRIVATE_WEEKS")

    slow_operation_threshold_seconds: float = Field(default=1.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = (value or "INFO").strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    def is_production_database(self, url: str | None = None) -> bool:
        """Return True when the URL looks like a hosted production database."""
        candidate = (url or self.database_url).lower()
        production_indicators = ("supabase.co", "supabase.com", "amazonaws.com", "neon.tech")
        return any(indicator in candidate for indicator in production_indicators)


settings = Settings()
