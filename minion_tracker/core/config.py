import os
import yaml
from pathlib import Path
from typing import Dict, Any
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_tracker_config() -> Dict[str, Any]:
    """Load server configuration from config.yml"""
    config_path = Path(os.getenv("MINION_CONFIG", "config.yml"))
    if not config_path.exists():
        # Fallback to the file shipped next to the package for development
        config_path = Path(__file__).resolve().parents[2] / "config.yml"

    if config_path.exists():
        with open(config_path, "r") as f:
            return yaml.safe_load(f) or {}
    return {}


# Load server config from YAML
tracker_config = load_tracker_config()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database settings
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "sqlite+aiosqlite:///./minions.db"
    )
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "").lower() in ("true", "1", "yes")

    # Server settings from config.yml with fallbacks
    HOST: str = os.getenv(
        "HOST", str(tracker_config.get("server", {}).get("host", "127.0.0.1"))
    )
    PORT: int = int(
        os.getenv("PORT", str(tracker_config.get("server", {}).get("port", 8080)))
    )

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """The store runs on SQLAlchemy's asyncio extension, so the driver must be async."""
        sync_prefixes = ("sqlite://", "postgresql://")
        if self.DATABASE_URL.startswith(sync_prefixes):
            raise ValueError(
                "DATABASE_URL must name an async driver, e.g. "
                "'sqlite+aiosqlite:///./minions.db' or 'postgresql+asyncpg://...'."
            )
        return self


settings = Settings()
