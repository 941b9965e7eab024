"""
Configuration management for the attendance & payroll backend
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    DATABASE_URL: str = Field(
        default="sqlite:///./attendance_payroll.db",
        description="SQLAlchemy database URL (PostgreSQL in production)",
    )
    JWT_SECRET_KEY: str = Field(default="change-me", description="JWT secret key for token signing")

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=120, description="JWT token expiration in minutes")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # Reference timezone: work dates are midnight-normalized in this zone, storage stays UTC
    REFERENCE_TZ: str = Field(default="Asia/Kolkata", description="Reference timezone for attendance work dates")

    HALF_DAY_THRESHOLD_MINUTES: int = Field(
        default=240,
        ge=1,
        description="Net work minutes below which a checked-out shift is a half-day",
    )
    HISTORY_LIMIT: int = Field(default=30, ge=1, description="Records returned by attendance history")

    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("REFERENCE_TZ")
    @classmethod
    def validate_tz(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            if len(self.JWT_SECRET_KEY) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be at least 32 characters in production environment"
                )

    @property
    def reference_tz(self) -> ZoneInfo:
        return ZoneInfo(self.REFERENCE_TZ)


settings = Settings()

if settings.APP_ENV == "prod":
    settings.validate_production()
