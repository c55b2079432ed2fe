# afterschool/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).resolve().parents[2] / ".env"
    logger.debug("[CONFIG] Looking for .env at: %s (exists=%s)", env_path, env_path.exists())
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Deployment environment name",
    )
    database_url: str = Field(
        default="sqlite:///./afterschool.db",
        alias="DATABASE_URL",
        description="SQLAlchemy URL of the lesson/order store",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")
    frontend_url: str = Field(
        default="*",
        alias="FRONTEND_URL",
        description="Allowed CORS origin (comma separated); '*' allows every origin",
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Insert the sample lesson catalogue on startup when the store is empty",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    slow_request_ms: float = Field(
        default=100.0,
        description="Requests slower than this are logged as warnings",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = (value or "INFO").strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    @property
    def cors_origins(self) -> list[str]:
        """Parsed list of allowed CORS origins."""
        origins = [origin.strip() for origin in self.frontend_url.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
