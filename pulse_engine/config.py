"""Runtime settings for the report CLI and demo UI.

Settings come from environment variables, optionally seeded from a ``.env``
file in the working directory or the repository root. The analytics
functions never read settings themselves; entry points pass values in.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class EngineConfig:
    """Settings container"""

    data_path: str = "examples/sample_snapshot.json"
    trend_months: int = 12
    podium_size: int = 3
    leaderboard_range: str = "quarter"
    compare_mode: str = "month"
    log_level: str = "INFO"


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from exc
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def load_config() -> EngineConfig:
    """Build an ``EngineConfig`` from the environment (and ``.env`` if present)."""

    env_paths = [
        Path.cwd() / ".env",
        Path(__file__).resolve().parent.parent / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded .env from: {env_path}")
            break

    defaults = EngineConfig()
    return EngineConfig(
        data_path=os.getenv("PULSE_DATA_PATH", defaults.data_path),
        trend_months=_int_setting("PULSE_TREND_MONTHS", defaults.trend_months),
        podium_size=_int_setting("PULSE_PODIUM_SIZE", defaults.podium_size),
        leaderboard_range=os.getenv("PULSE_LEADERBOARD_RANGE", defaults.leaderboard_range),
        compare_mode=os.getenv("PULSE_COMPARE_MODE", defaults.compare_mode),
        log_level=os.getenv("PULSE_LOG_LEVEL", defaults.log_level).upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
