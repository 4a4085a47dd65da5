# backend/entity_icons/config.py
import copy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MASTER_HEIGHT,
    DEFAULT_MASTER_WIDTH,
    DEFAULT_REMOTE_TIMEOUT_SECONDS,
    DEFAULT_SITE_ICON_SIZES,
    ICON_CACHE_EXPIRES_SECONDS,
)
from .enums import LogLevel


class Settings(BaseSettings):
    environment: str = "development"

    # API
    api_host: str = Field(default="0.0.0.0", description="API host to bind to")
    api_port: int = Field(
        default=8000, ge=1, le=65535, description="API port to bind to"
    )
    api_reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    # CORS - use Union to handle both string and list inputs
    # Can be set via CORS_ORIGINS env var as comma-separated string
    cors_origins: Union[str, List[str]] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins. Can be comma-separated string.",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert cors_origins to a list of strings"""
        if isinstance(self.cors_origins, str):
            return [origin.strip() for origin in self.cors_origins.split(",")]
        return self.cors_origins

    # ============= PATH CONFIGURATION =============
    # All filestore operations resolve relative to data_directory

    data_directory: str = "./data"

    @property
    def data_path(self) -> Path:
        """Get data directory as Path object"""
        return Path(self.data_directory)

    @property
    def filestore_directory(self) -> str:
        """Binary object store root"""
        return str(self.data_path / "filestore")

    @property
    def uploads_directory(self) -> str:
        """Staging directory for uploaded icon sources"""
        return str(self.data_path / "uploads")

    @property
    def logs_directory(self) -> str:
        """Logs subdirectory path"""
        return str(self.data_path / "logs")

    def ensure_directories(self):
        """Create all required directories if they don't exist"""
        directories = [
            self.data_path,
            Path(self.filestore_directory),
            Path(self.uploads_directory),
            Path(self.logs_directory),
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    # Icons
    icon_sizes: Dict[str, Dict[str, Any]] = Field(
        default_factory=lambda: copy.deepcopy(DEFAULT_SITE_ICON_SIZES),
        description="Site-wide icon size table for entities without a built-in table",
    )
    icon_jpeg_quality: int = Field(
        default=DEFAULT_JPEG_QUALITY,
        ge=1,
        le=95,
        description="JPEG quality for encoded icon variants",
    )
    icon_master_width: int = Field(
        default=DEFAULT_MASTER_WIDTH,
        ge=1,
        description="Width of the pre-crop bound when no master size is configured",
    )
    icon_master_height: int = Field(
        default=DEFAULT_MASTER_HEIGHT,
        ge=1,
        description="Height of the pre-crop bound when no master size is configured",
    )
    icon_cache_expires_seconds: int = Field(
        default=ICON_CACHE_EXPIRES_SECONDS,
        ge=0,
        description="Lifetime of served icons for the Expires header",
    )
    icon_remote_timeout_seconds: Union[int, float] = Field(
        default=DEFAULT_REMOTE_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout when downloading a remote icon source",
    )
    honor_upscale_flag: bool = Field(
        default=False,
        description="Allow fit-inside variants flagged 'upscale' to enlarge small sources",
    )
    serve_legacy_jpg_path: bool = Field(
        default=True,
        description="Serve icons from icons/<guid><size>.jpg regardless of mimetype",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Union[str, LogLevel]) -> LogLevel:
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
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


# Global settings instance
settings = Settings()
