# backend/photo_cdn/config.py
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import LogLevel
from .exceptions import ConfigurationError


class Settings(BaseSettings):
    environment: str = "development"

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional, rotated by size)"
    )

    # Variant generation
    max_concurrent_transforms: int = Field(
        default=6,
        ge=1,
        le=32,
        description="Worker threads used for one photo's variant fan-out",
    )
    max_upload_size_mb: int = Field(
        default=50, ge=1, le=500, description="Largest accepted upload in megabytes"
    )

    # Cloudflare R2 (S3-compatible object storage)
    r2_account_id: str = Field(default="", description="Cloudflare account ID")
    r2_access_key_id: str = Field(default="", description="R2 access key ID")
    r2_secret_access_key: str = Field(default="", description="R2 secret access key")
    r2_bucket_name: str = Field(default="", description="R2 bucket holding albums")

    @property
    def r2_endpoint(self) -> str:
        """S3 API endpoint for the configured account"""
        return f"https://{self.r2_account_id}.r2.cloudflarestorage.com"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def require_r2(self) -> None:
        """Raise ConfigurationError unless every R2 credential is set"""
        required = {
            "R2_ACCOUNT_ID": self.r2_account_id,
            "R2_ACCESS_KEY_ID": self.r2_access_key_id,
            "R2_SECRET_ACCESS_KEY": self.r2_secret_access_key,
            "R2_BUCKET_NAME": self.r2_bucket_name,
        }
        missing: List[str] = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

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
        allowed_envs = ["development", "staging", "production", "test"]
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
