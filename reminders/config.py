"""
Projection engine settings.

Built-in defaults are layered with an optional YAML file and then with
environment variable overrides:

    REMINDERS_CONFIG                   path to a YAML settings file
    REMINDERS_MAX_OCCURRENCES          per-series iteration cap (default 100)
    REMINDERS_DEFAULT_TIME_WINDOW_DAYS look-ahead when a schedule has no time buffer (30)
    REMINDERS_DEFAULT_MILEAGE_BUFFER   look-ahead when a schedule has no mileage buffer (1000)
    REMINDERS_DEFAULT_PAGE_SIZE        page size when a query does not give one (20)
    REMINDERS_LOG_LEVEL                logging level for entry points (WARNING)
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

logger = logging.getLogger("reminders.config")

_DEFAULTS: Dict[str, Any] = {
    "max_occurrences": 100,
    "default_time_window_days": 30,
    "default_mileage_buffer": 1000,
    "default_page_size": 20,
    "log_level": "WARNING",
}

_INT_KEYS = ("max_occurrences", "default_time_window_days", "default_page_size")
_FLOAT_KEYS = ("default_mileage_buffer",)


@dataclass
class Settings:
    """Tunable limits and defaults for a projection run."""

    max_occurrences: int = 100
    default_time_window_days: int = 30
    default_mileage_buffer: float = 1000
    default_page_size: int = 20
    log_level: str = "WARNING"
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    def __post_init__(self):
        if self.max_occurrences < 1:
            raise ValueError("max_occurrences must be at least 1")
        if self.default_time_window_days < 0:
            raise ValueError("default_time_window_days cannot be negative")
        if self.default_mileage_buffer < 0:
            raise ValueError("default_mileage_buffer cannot be negative")
        if self.default_page_size < 1:
            raise ValueError("default_page_size must be at least 1")


def _coerce(key: str, value: Any) -> Any:
    if key in _INT_KEYS:
        return int(value)
    if key in _FLOAT_KEYS:
        return float(value)
    return str(value)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Build Settings from defaults, an optional YAML file and the environment."""
    values = dict(_DEFAULTS)

    path = path or os.environ.get("REMINDERS_CONFIG")
    if path:
        with open(path, "r") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
        for key, value in data.items():
            if key not in _DEFAULTS:
                logger.warning("Ignoring unknown setting '%s' in %s", key, path)
                continue
            values[key] = value

    for key in _DEFAULTS:
        env_value = os.environ.get(f"REMINDERS_{key.upper()}")
        if env_value is not None:
            values[key] = env_value

    try:
        coerced = {key: _coerce(key, value) for key, value in values.items()}
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid reminder settings: {e}") from e
    return Settings(**coerced)
