"""
maidly/core/config.py

Application Configuration Loader

Loads and manages application settings from environment variables
using Pydantic's BaseSettings with `.env` support.
Provides strict type validation and environment-specific handling.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------
# Logger Configuration
# ---------------------------------------------------
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Base Directory Calculation
# ---------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_DOTENV_PATH = BASE_DIR / ".env"


# ---------------------------------------------------
# Settings Definition
# ---------------------------------------------------
class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables.
    """

    # --- Pydantic Settings Configuration ---
    model_config = SettingsConfigDict(
        env_file=str(DEFAULT_DOTENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- General Application Settings ---
    APP_NAME: str
    DEBUG: bool
    LOG_LEVEL: str

    # --- Database Settings ---
    DATABASE_URL: str
    TEST_DATABASE_URL: str

    # --- JWT Authentication Settings ---
    SECRET_KEY: str
    ALGORITHM: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int

    # --- Redis Settings ---
    REDIS_HOST: str
    REDIS_PORT: int
    REDIS_DB: int

    # --- Rate Limiting Settings ---
    RATE_LIMIT_ENABLED: bool = True

    # --- CORS Settings ---
    CORS_ALLOWED_ORIGINS: str

    # --- Calculated Properties ---
    @property
    def cors_origins(self) -> list[str]:
        """Parses the CORS_ALLOWED_ORIGINS string into a list."""
        if not self.CORS_ALLOWED_ORIGINS:
            return []
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def db_url(self) -> str:
        """
        Returns the appropriate database URL as a STRING based on the testing environment.
        """
        is_testing = os.getenv("PYTEST_CURRENT_TEST") is not None
        url_str = str(self.TEST_DATABASE_URL if is_testing else self.DATABASE_URL)
        if self.DEBUG:
            logger.debug(f"[CONFIG] Using DATABASE URL: {url_str}")
        return url_str

    @property
    def redis_url(self) -> str:
        """Constructs Redis URL from individual components if needed elsewhere."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# ---------------------------------------------------
# Instantiate Settings Globally
# ---------------------------------------------------

if TYPE_CHECKING:
    # Stub settings for type hinting and editor assistance
    settings = Settings(
        # General Application Settings
        APP_NAME="",
        DEBUG=False,
        LOG_LEVEL="",
        # Database Settings
        DATABASE_URL="",
        TEST_DATABASE_URL="",
        # JWT Authentication Settings
        SECRET_KEY="",
        ALGORITHM="",
        ACCESS_TOKEN_EXPIRE_MINUTES=0,
        # Redis Settings
        REDIS_HOST="",
        REDIS_PORT=0,
        REDIS_DB=0,
        # CORS Settings
        CORS_ALLOWED_ORIGINS="",
    )
else:
    settings = Settings()
