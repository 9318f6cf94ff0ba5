"""
Application settings module.

This module provides configuration settings for the application, including
API metadata, logging, error tracking and the assessment engine with its
optional external collaborators.
"""

# Standard Library Imports
import logging
import os
from pathlib import Path
from typing import Self

# Third-Party Imports
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings using Pydantic for validation and environment variable loading."""

    # API Information
    API_TITLE: str = "MindCheck Assessment API"
    API_DESCRIPTION: str = "Adaptive mental health self-assessment engine"
    API_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Environment
    TESTING: bool = False  # Flag to indicate when running in test environment
    ENVIRONMENT: str = "development"  # development, staging, production, test

    # Server Settings
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8000
    UVICORN_WORKERS: int = 1  # sessions live in process memory

    # CORS Settings
    CORS_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

    # Monitoring and Error Tracking (Sentry)
    SENTRY_DSN: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = Field(default=0.2, ge=0.0, le=1.0)

    # Assessment Engine
    QUESTION_CATALOG_PATH: str | None = None  # bundled catalog when unset
    SCORE_SCALE_FACTOR: float = Field(default=3.33, gt=0)
    MULTI_SELECT_CONCERN_THRESHOLD: int = Field(default=2, ge=1)
    SESSION_MAX_AGE_MINUTES: int = Field(default=120, gt=0)  # older sessions are pruned, complete or not

    # Follow-up question generation (Ollama-compatible)
    FOLLOW_UP_GENERATION_ENABLED: bool = False
    QUESTION_GENERATOR_URL: str = "http://localhost:11434"
    QUESTION_GENERATOR_MODEL: str = "mistral"
    QUESTION_GENERATOR_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)

    # Voice journal transcription (OpenAI-compatible Whisper endpoint)
    TRANSCRIPTION_ENABLED: bool = False
    TRANSCRIPTION_URL: str = "http://localhost:9000"
    TRANSCRIPTION_MODEL: str = "whisper-1"
    TRANSCRIPTION_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is one of the valid levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @model_validator(mode="after")
    def check_catalog_path(self) -> Self:
        """Fail fast when a catalog override points at a missing file."""
        if self.QUESTION_CATALOG_PATH and not Path(self.QUESTION_CATALOG_PATH).is_file():
            raise ValueError(f"QUESTION_CATALOG_PATH does not exist: {self.QUESTION_CATALOG_PATH}")

        if self.ENVIRONMENT == "test":
            self.TESTING = True
        return self


# Create a global settings instance
settings = Settings()


def get_settings() -> Settings:
    """
    Factory function to get the application settings.

    This function enables dependency injection of settings in FastAPI.
    Under pytest the external collaborators and Sentry are switched off so
    that no test reaches the network.

    Returns:
        The application settings instance
    """
    if os.environ.get("ENVIRONMENT") == "test" or os.environ.get("PYTEST_CURRENT_TEST"):
        settings.TESTING = True
        settings.ENVIRONMENT = "test"
        settings.SENTRY_DSN = None
        settings.FOLLOW_UP_GENERATION_ENABLED = False
        settings.TRANSCRIPTION_ENABLED = False
        settings.LOG_TO_FILE = False
    return settings
