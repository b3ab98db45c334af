"""Settings read from the environment (a local .env file is picked up too)."""

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Self

from dotenv import find_dotenv, load_dotenv

from src.core.exceptions import ConfigError

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    # None keeps games in a plain dict. Any SQLAlchemy URL switches to the SQL store.
    database_url: Optional[str] = None
    # None means finished games are kept for the lifetime of the process
    retention: Optional[timedelta] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> Self:
        if load_dotenv_file:
            load_dotenv(find_dotenv(usecwd=True))

        database_url = os.getenv("TICTACTOE_DATABASE_URL") or None
        log_level = os.getenv("TICTACTOE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Unknown log level: {log_level!r}")

        return cls(
            database_url=database_url,
            retention=_parse_retention(os.getenv("TICTACTOE_RETENTION_SECONDS")),
            log_level=log_level,
        )


def _parse_retention(raw: Optional[str]) -> Optional[timedelta]:
    if raw is None or raw.strip() == "":
        return None
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"TICTACTOE_RETENTION_SECONDS must be a number, got {raw!r}") from exc
    if seconds < 0:
        raise ConfigError(f"TICTACTOE_RETENTION_SECONDS cannot be negative, got {raw!r}")
    return timedelta(seconds=seconds)
