# tourhub/core/config.py
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from TOURHUB_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="TOURHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(default="sqlite:///./tourhub.db")
    database_echo: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # IANA zone name; aware timestamps are shifted into it before bucketing
    report_timezone: Optional[str] = Field(default=None)

    top_combo_limit: int = Field(default=3, ge=1)
    image_base_url: str = Field(default="http://localhost:5002/images")
    default_image_url: str = Field(default="/static/img/default-combo.jpg")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("report_timezone")
    @classmethod
    def check_timezone(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {v}")
        return v

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.report_timezone) if self.report_timezone else None


@lru_cache
def get_settings() -> Settings:
    return Settings()
