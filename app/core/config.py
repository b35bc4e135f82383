"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List, Optional, Union
import os

from app.core.constants import (
    ACCESS_TOKEN_EXPIRE_MINUTES as DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES,
    DEFAULT_MANAGER_ROLES,
    DEFAULT_PAGE_SIZE as DEFAULT_LIST_PAGE_SIZE,
    MAX_PAGE_SIZE as DEFAULT_MAX_PAGE_SIZE,
    TOKEN_CODE_LENGTH as DEFAULT_TOKEN_CODE_LENGTH,
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database - Support both full URL and individual components
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: Optional[str] = None
    POSTGRES_DB: Optional[str] = None

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES

    # Roles allowed to issue tokens and edit attendance
    MANAGER_ROLES: Union[List[str], str] = DEFAULT_MANAGER_ROLES

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]  # In production, specify your domain

    @field_validator('CORS_ORIGINS', 'MANAGER_ROLES', mode='before')
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse a comma-separated string into a list."""
        if isinstance(v, str):
            # Split by comma and strip whitespace
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    # Application
    APP_TITLE: str = "Chapter Attendance Service"
    APP_DESCRIPTION: str = "QR/token check-in and attendance records for chapter events"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Display timezone for timestamps returned by the API
    TIMEZONE: str = "Asia/Jakarta"

    # Attendance tokens
    TOKEN_CODE_LENGTH: int = DEFAULT_TOKEN_CODE_LENGTH

    # Pagination
    DEFAULT_PAGE_SIZE: int = DEFAULT_LIST_PAGE_SIZE
    MAX_PAGE_SIZE: int = DEFAULT_MAX_PAGE_SIZE

    # Database Connection Pool Configuration
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    def get_database_url(self) -> str:
        """
        Get database URL from either DATABASE_URL or individual components.
        Priority: DATABASE_URL > individual components > default (dev only)
        """
        if self.DATABASE_URL:
            if self.DATABASE_URL.startswith("postgres://"):
                # Handle Heroku's postgres:// URL format
                return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
            return self.DATABASE_URL

        # Build from individual components if provided
        if all([self.POSTGRES_USER, self.POSTGRES_PASSWORD,
                self.POSTGRES_HOST, self.POSTGRES_DB]):
            port = self.POSTGRES_PORT or "5432"
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_HOST}:{port}/{self.POSTGRES_DB}"
            )

        # Development fallback only
        if self.ENVIRONMENT == "development":
            return "sqlite:///./attendance.db"

        # Production should always provide database credentials
        raise ValueError(
            "Database configuration missing. Provide either DATABASE_URL or "
            "all of: POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_DB"
        )

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT == "production":
            issues = []

            if self.SECRET_KEY == "your-secret-key-change-in-production":
                issues.append("SECRET_KEY must be changed from default value")

            if self.CORS_ORIGINS == ["*"]:
                issues.append("CORS_ORIGINS should be restricted to specific domains")

            if not self.MANAGER_ROLES:
                issues.append("MANAGER_ROLES must name at least one role")

            if issues:
                raise ValueError(
                    "Production configuration errors:\n" +
                    "\n".join(f"  - {issue}" for issue in issues)
                )


settings = Settings()

# Validate production configuration on startup
if os.getenv("ENVIRONMENT") == "production":
    settings.validate_production_config()
