"""
Logbridge Configuration.

Settings are read from `LOGBRIDGE_*` environment variables (and `.env`).
Every handler factory also accepts an explicit `settings=` override.

Usage:
    from logbridge.config import get_settings

    get_settings().structlog_enabled  # True
    get_settings().platform_logging  # PlatformLogging.AUTO
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlatformLogging(str, Enum):
    AUTO = "auto"
    ON = "on"
    OFF = "off"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LogBridgeSettings(BaseSettings):
    """Backend availability and console rendering configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOGBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    structlog_enabled: bool = Field(default=True, description="Offer structlog during default selection")
    platform_logging: PlatformLogging = Field(
        default=PlatformLogging.AUTO,
        description="Google Cloud Logging availability (auto detects the runtime)",
    )
    gcloud_project: str | None = Field(default=None, description="GCP project ID for Cloud Logging")
    gcloud_log_name: str = Field(default="logbridge", description="Log name for Cloud Logging")
    console_format: LogFormat = Field(default=LogFormat.CONSOLE, description="Console handler output format")
    console_color: bool = Field(default=True, description="Colorize console output on TTY streams")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_level_width: int = Field(default=7, description="Console level column width")
    console_origin_width: int = Field(default=32, description="Console subsystem/category column width")
    console_separator: str = Field(default=" | ", description="Console column separator")


@lru_cache(maxsize=1)
def get_settings() -> LogBridgeSettings:
    return LogBridgeSettings()
