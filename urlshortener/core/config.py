"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import string
from typing import Optional, List, Union
from enum import Enum

from pydantic import AliasChoices, Field, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here. Database and server fields also accept the shorter
    DB_* / DOMAIN / PORT variable names.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Get-or-create URL shortening service"

    # API Configuration
    BASE_URL: str = "http://localhost:8000/"  # Prefix for generated short URLs
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Server bind settings
    SERVER_HOST: str = Field(default="0.0.0.0", validation_alias=AliasChoices("SERVER_HOST", "DOMAIN"))
    SERVER_PORT: int = Field(default=8000, validation_alias=AliasChoices("SERVER_PORT", "PORT"))

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # URL Shortening Configuration
    URL_CODE_LENGTH: int = 6  # Length of generated short codes
    URL_CODE_CHARS: str = string.ascii_letters + string.digits  # Characters used for short codes
    URL_CODE_MAX_ATTEMPTS: int = 5  # Insert attempts before giving up on code collisions

    # PostgreSQL settings
    POSTGRES_SERVER: str = Field(default="localhost", validation_alias=AliasChoices("POSTGRES_SERVER", "DB_HOST"))
    POSTGRES_PORT: int = Field(default=5432, validation_alias=AliasChoices("POSTGRES_PORT", "DB_PORT"))
    POSTGRES_USER: str = Field(default="postgres", validation_alias=AliasChoices("POSTGRES_USER", "DB_USER"))
    POSTGRES_PASSWORD: str = Field(
        default="postgres", validation_alias=AliasChoices("POSTGRES_PASSWORD", "DB_USER_PASSWORD")
    )
    POSTGRES_DB: str = Field(default="url_shortener", validation_alias=AliasChoices("POSTGRES_DB", "DB_NAME"))
    POSTGRES_SSLMODE: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("POSTGRES_SSLMODE", "DB_SSLMODE")
    )
    DATABASE_URL: Optional[str] = None  # Full SQLAlchemy URL, overrides the POSTGRES_* fields

    # PostgreSQL pool settings
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_POOL_MAX_OVERFLOW: int = 10
    POSTGRES_POOL_TIMEOUT: int = 30
    POSTGRES_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = True  # Create missing tables on startup

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True  # Enable request logging middleware

    # Validators
    @field_validator("BASE_URL")
    def ensure_trailing_slash(cls, v: str) -> str:
        """Short URLs are built as BASE_URL + code, so the prefix must end with '/'."""
        if not v.endswith("/"):
            return v + "/"
        return v

    @field_validator("URL_CODE_LENGTH", "URL_CODE_MAX_ATTEMPTS")
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("POSTGRES_SSLMODE", mode="before")
    def empty_sslmode_to_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator("CORS_ORIGINS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    # Computed fields
    @computed_field
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the SQLAlchemy database URI from settings or use override."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def bind_address(self) -> str:
        """host:port the HTTP server listens on."""
        return f"{self.SERVER_HOST}:{self.SERVER_PORT}"


# Create a singleton instance of the settings
settings = Settings()
