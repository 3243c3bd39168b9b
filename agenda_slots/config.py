"""
Centralized configuration with environment variable overrides.

Working-day defaults and the booking grid step live here so the
engine never hardcodes them.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^\d{2}:\d{2}$")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class GridConfig:
    """Day bounds used when a schedule omits them, and the slot step."""

    default_start_time: str = os.getenv("DEFAULT_START_TIME", "08:00")
    default_end_time: str = os.getenv("DEFAULT_END_TIME", "18:00")
    step_minutes: int = _safe_int("GRID_STEP_MINUTES", "15")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    grid: GridConfig = field(default_factory=GridConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    agenda_name: str = os.getenv("AGENDA_NAME", "Agenda")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    step = config.grid.step_minutes
    if step < 1 or 60 % step != 0:
        raise ValueError(
            f"GRID_STEP_MINUTES must be a positive divisor of 60, got {step}"
        )

    for var_name, value in [
        ("DEFAULT_START_TIME", config.grid.default_start_time),
        ("DEFAULT_END_TIME", config.grid.default_end_time),
    ]:
        if not _CLOCK_RE.match(value):
            raise ValueError(f"{var_name} must be HH:MM, got {value!r}")

    if config.grid.default_start_time > config.grid.default_end_time:
        raise ValueError(
            "DEFAULT_START_TIME must not be after DEFAULT_END_TIME, "
            f"got {config.grid.default_start_time} > {config.grid.default_end_time}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.agenda_name)
    return config


# Singleton instance
settings = load_config()
