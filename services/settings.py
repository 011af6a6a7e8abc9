"""
Runtime configuration.

Values come from the environment, with a `.env` file in the project root
loaded first. Every variable is optional:

- TICKETS_MACHINE_ID: 10-bit machine id for transaction ids (default 1)
- TICKETS_EPOCH_MS: custom epoch for transaction ids (default Twitter's epoch)
- MAX_TICKETS_PER_ORDER: order size limit (default 25)
- LOG_LEVEL: root log level (default INFO)
- LOG_DIR: when set, log files are written to this directory
- TICKETS_ENV: "test" silences logging
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.ticket import MAX_TICKETS_PER_ORDER
from domain.transaction_id import TWITTER_EPOCH_MS

# Look for .env in the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True, slots=True)
class Settings:
    machine_id: int = 1
    epoch_ms: int = TWITTER_EPOCH_MS
    max_tickets_per_order: int = MAX_TICKETS_PER_ORDER
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    environment: str = "development"

    @property
    def is_test(self) -> bool:
        return self.environment == "test"


def _int_from_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(
            f"Invalid environment variable: {name}={raw!r}. "
            f"Set {name} to an integer."
        ) from None
    if value < minimum:
        raise RuntimeError(
            f"Invalid environment variable: {name}={value}. "
            f"{name} must be >= {minimum}."
        )
    return value


def load_settings() -> Settings:
    """Read settings from the environment."""

    log_dir = os.getenv("LOG_DIR")
    return Settings(
        machine_id=_int_from_env("TICKETS_MACHINE_ID", 1),
        epoch_ms=_int_from_env("TICKETS_EPOCH_MS", TWITTER_EPOCH_MS),
        max_tickets_per_order=_int_from_env("MAX_TICKETS_PER_ORDER", MAX_TICKETS_PER_ORDER, minimum=1),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=Path(log_dir) if log_dir else None,
        environment=os.getenv("TICKETS_ENV", "development").lower(),
    )


__all__ = ["Settings", "load_settings"]
