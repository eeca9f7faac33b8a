"""Application configuration module.

This module contains settings for the scanlink application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.
    
    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT
    
    # App Information
    APP_NAME: str = "Scanlink"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short links with scan tracking and analytics"
    
    # API Configuration
    API_PREFIX: str = "/api"
    SHORT_URL_DOMAIN: str = "http://localhost:8000"  # Base of every tracking URL
    DEBUG: bool = False
    
    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]
    
    # Scanner address resolution
    TRUST_PROXY_HEADERS: bool = False  # Use X-Forwarded-For when behind a proxy
    
    # Identifier issuance
    ID_LENGTH: int = 8
    ID_MAX_ATTEMPTS: int = 5
    
    # Analytics
    ANALYTICS_RECENT_SCANS: int = 100
    LIST_DEFAULT_LIMIT: int = 50
    LIST_MAX_LIMIT: int = 500
    
    # Storage backend: "sqlite", "postgres" or "auto"
    # "auto" picks postgres when REMOTE_DATABASE_URL is set
    STORAGE_BACKEND: str = "auto"
    DATABASE_PATH: str = "./scanlink.sqlite"
    REMOTE_DATABASE_URL: Optional[str] = None
    
    # Remote pool settings
    DB_POOL_SIZE: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False
    
    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    SCAN_LOG_ENABLED: bool = True
    REQUEST_LOGGING_ENABLED: bool = True
    
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
    
    @field_validator("SHORT_URL_DOMAIN")
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
    
    @field_validator("REMOTE_DATABASE_URL", mode="before")
    def empty_remote_url_is_none(cls, v: Any) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v
    
    @field_validator("STORAGE_BACKEND")
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("auto", "sqlite", "postgres"):
            raise ValueError(f"Unknown storage backend: {v}")
        return v


# Create a singleton instance of the settings
settings = Settings()
