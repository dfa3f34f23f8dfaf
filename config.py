"""Application configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DATABASE_PATH = Path.home() / ".calorie_tracker" / "calorie_tracker.db"
DEFAULT_STORAGE_KEY = 'foodItems'
DEFAULT_PORT = 5001

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Config:
    """Settings loaded from environment variables."""

    database_path: Path = DEFAULT_DATABASE_PATH
    storage_key: str = DEFAULT_STORAGE_KEY
    log_level: int = logging.WARNING
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        if environ is None:
            environ = os.environ

        database_path = environ.get('CALORIE_TRACKER_DB')
        path = Path(database_path).expanduser() if database_path else DEFAULT_DATABASE_PATH

        key = environ.get('CALORIE_TRACKER_KEY', DEFAULT_STORAGE_KEY).strip()
        if not key:
            raise ConfigError("CALORIE_TRACKER_KEY must not be empty")

        level_name = environ.get('CALORIE_TRACKER_LOG_LEVEL', 'WARNING').strip().upper()
        if level_name not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level '{level_name}'")

        try:
            port = int(environ.get('PORT', DEFAULT_PORT))
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got '{environ['PORT']}'") from None

        return cls(
            database_path=path,
            storage_key=key,
            log_level=getattr(logging, level_name),
            port=port,
        )
