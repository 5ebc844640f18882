"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]
DEFAULT_COLUMN_TITLES = ["To Do", "In Progress", "Done"]


def _split_csv(value, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        if not value.strip():
            return list(default)
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Optional[str] = Field(default=None, description="Overrides the level implied by debug")

    # API Configuration
    api_title: str = Field(default="Taskboard API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database
    database_url: str = Field(
        default=f"sqlite:///{BASE_DIR / 'taskboard.db'}",
        description="SQLAlchemy database URL"
    )
    database_echo: bool = Field(default=False, description="Log SQL statements")
    auto_create_tables: bool = Field(default=True, description="Create missing tables on startup")

    # CORS
    cors_origins: str | List[str] = Field(default=",".join(DEFAULT_CORS_ORIGINS))
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Board defaults
    default_board_color: str = Field(default="#4f46e5")
    default_label_color: str = Field(default="#6b7280")
    create_default_columns: bool = Field(default=True)
    default_column_titles: str | List[str] = Field(default=",".join(DEFAULT_COLUMN_TITLES))
    create_default_labels: bool = Field(default=True)

    # Ordering
    append_conflict_retries: int = Field(
        default=3,
        ge=0,
        description="How often an append that lost an order race is retried"
    )

    # Activity
    activity_feed_limit: int = Field(default=50, gt=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        return _split_csv(v, DEFAULT_CORS_ORIGINS)

    @field_validator("default_column_titles", mode="before")
    @classmethod
    def parse_default_column_titles(cls, v):
        """Parse default column titles from comma-separated string or list."""
        return _split_csv(v, DEFAULT_COLUMN_TITLES)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    return Settings()


# Create a global settings instance
settings = get_settings()
