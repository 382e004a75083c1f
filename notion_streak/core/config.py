import logging

from pydantic import AliasChoices, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from notion_streak.core.errors import ConfigurationMissingError

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False
    PORT: int = 3000

    # Notion data source
    NOTION_TOKEN: Optional[str] = None
    NOTION_DATABASE_ID: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NOTION_DATABASE_ID", "DATABASE_ID"),
    )
    NOTION_API_URL: str = "https://api.notion.com/v1"
    NOTION_VERSION: str = "2022-06-28"
    NOTION_TIMEOUT_SECONDS: float = 10.0
    NOTION_PAGE_SIZE: int = 100  # Notion caps page_size at 100

    # Streak evaluation
    STREAK_PROPERTY: str = "On Track?"
    STREAK_DATE_PROPERTY: str = "Date"
    STREAK_MISSING_PROPERTY_POLICY: str = "break"  # "break" | "skip"
    STREAK_CACHE_TTL_SECONDS: int = 3600

    # Widget
    DISPLAY_TIMEZONE: str = "America/New_York"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("NOTION_PAGE_SIZE")
    @classmethod
    def _clamp_page_size(cls, value: int) -> int:
        return max(1, min(100, value))

    @field_validator("DISPLAY_TIMEZONE")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ValueError(f"DISPLAY_TIMEZONE {value!r} is not a known time zone") from exc
        return value

    @field_validator("STREAK_MISSING_PROPERTY_POLICY")
    @classmethod
    def _check_policy(cls, value: str) -> str:
        policy = value.strip().lower()
        if policy not in ("break", "skip"):
            raise ValueError("STREAK_MISSING_PROPERTY_POLICY must be 'break' or 'skip'")
        return policy


def get_settings() -> Settings:
    return Settings()


REQUIRED_KEYS = ("NOTION_TOKEN", "NOTION_DATABASE_ID")


def missing_config(settings_obj: Settings) -> List[str]:
    """Names of required settings that are unset or blank."""
    return [key for key in REQUIRED_KEYS if not getattr(settings_obj, key, None)]


def validate_config(settings_obj: Settings, strict: Optional[bool] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate required configuration.

    In strict mode raise ConfigurationMissingError; otherwise emit warnings only.
    Secrets are not logged, only missing keys.
    """
    log = logger or logging.getLogger("notion_streak")
    strict_mode = strict if strict is not None else getattr(settings_obj, "CONFIG_STRICT", False)

    missing = missing_config(settings_obj)
    if missing:
        if strict_mode:
            raise ConfigurationMissingError(missing)
        log.warning(f"Missing required configuration: {', '.join(missing)}")
        return False

    return True
