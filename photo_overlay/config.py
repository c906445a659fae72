# photo_overlay/config.py
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_ASSET_FETCH_TIMEOUT_SECONDS,
    DEFAULT_COMPOSITE_QUALITY,
    DEFAULT_PACKAGE_MAX_HEIGHT,
    DEFAULT_PACKAGE_MAX_WIDTH,
    DEFAULT_PACKAGE_QUALITY,
    MAX_OVERLAYS,
)
from .enums import LogLevel


class Settings(BaseSettings):
    environment: str = "development"

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    # Compositing
    composite_quality: int = Field(
        default=DEFAULT_COMPOSITE_QUALITY,
        ge=1,
        le=100,
        description="JPEG quality of the composited image",
    )

    # Packaging (size normalization applied to both artifacts)
    package_max_width: int = Field(
        default=DEFAULT_PACKAGE_MAX_WIDTH,
        ge=64,
        le=16384,
        description="Maximum width of a packaged artifact in pixels",
    )
    package_max_height: int = Field(
        default=DEFAULT_PACKAGE_MAX_HEIGHT,
        ge=64,
        le=16384,
        description="Maximum height of a packaged artifact in pixels",
    )
    package_quality: int = Field(
        default=DEFAULT_PACKAGE_QUALITY,
        ge=1,
        le=100,
        description="JPEG quality of packaged artifacts",
    )

    # Overlay assets
    asset_fetch_timeout_seconds: float = Field(
        default=DEFAULT_ASSET_FETCH_TIMEOUT_SECONDS,
        gt=0,
        le=120,
        description="Timeout for fetching an overlay asset over HTTP",
    )
    allow_local_assets: bool = Field(
        default=False,
        description="Allow file:// overlay URLs to be read from the local disk",
    )

    # Authoring
    max_overlays: int = Field(
        default=MAX_OVERLAYS,
        ge=1,
        le=MAX_OVERLAYS,
        description="Maximum overlays per upload link",
    )

    @property
    def is_development(self) -> bool:
        """Whether programmer errors should fail loudly."""
        return self.environment == "development"

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> LogLevel:
        """Validate log level is one of the allowed values"""
        if isinstance(v, LogLevel):
            return v
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values"""
        allowed_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(allowed_envs)}"
            )
        return v_lower

    model_config = SettingsConfigDict(
        env_prefix="PHOTO_OVERLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
