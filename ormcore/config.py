"""Configuration management for ormcore."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import Environment


def setup_database_url(environment: Environment, db_path: Path | None = None) -> str:
    """Construct the default database URL for an environment.

    Args:
        environment: Environment type
        db_path: Optional custom SQLite database path

    Returns:
        Database connection URL
    """
    if environment == Environment.TESTING:
        return "sqlite://"

    if db_path is None:
        if environment == Environment.PRODUCTION:
            db_path = Path("db", "ormcore.db")
        else:
            db_path = Path("db", "ormcore.dev.db")

    return f"sqlite:///{db_path}"


class Settings(BaseModel):
    """Runtime settings."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )
    database_url: str = Field(
        default="",
        description="Database URL; derived from the environment when empty",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    quote_identifiers: bool = Field(
        default=True, description="Quote table, column and index names in DDL"
    )
    echo_sql: bool = Field(
        default=False, description="Log every executed statement at INFO level"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.database_url:
            self.database_url = setup_database_url(self.environment)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes", "on"]


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    return Settings(
        environment=Environment(os.getenv("ORMCORE_ENV", "development")),
        database_url=os.getenv("ORMCORE_DATABASE_URL", ""),
        log_level=os.getenv("ORMCORE_LOG_LEVEL", "INFO").upper(),
        quote_identifiers=_env_flag("ORMCORE_QUOTE_IDENTIFIERS", "true"),
        echo_sql=_env_flag("ORMCORE_ECHO_SQL", "false"),
    )


# Global settings instance
settings = load_settings()
