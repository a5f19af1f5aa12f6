"""
Configuration - Engine settings read from the environment.

Environment variables:
    FORGOD_SEED                  seed for the default dice roller
    FORGOD_MAX_PLAYERS           roster limit (default 6)
    FORGOD_STARTING_REVELATIONS  cards each hero draws at creation (default 0)
    FORGOD_MAX_STEPS             simulation step cap (default 2000)
    FORGOD_LOG_LEVEL             logging level name (default INFO)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import os


def _int_env(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


@dataclass(frozen=True)
class EngineConfig:
    seed: int | None = None
    max_players: int = 6
    starting_revelations: int = 0
    max_steps: int = 2000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> EngineConfig:
        return cls(
            seed=_int_env("FORGOD_SEED", None),
            max_players=_int_env("FORGOD_MAX_PLAYERS", 6),
            starting_revelations=_int_env("FORGOD_STARTING_REVELATIONS", 0),
            max_steps=_int_env("FORGOD_MAX_STEPS", 2000),
            log_level=os.getenv("FORGOD_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO"):
    """Install a basic stream handler. Only call from entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
