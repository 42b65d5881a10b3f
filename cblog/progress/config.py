"""
Progress Configuration Module

Configuration dataclass for the progress console with thread-safe global access.
"""

import logging
from dataclasses import dataclass
from threading import RLock

logger = logging.getLogger(__name__)


@dataclass
class ProgressConfig:
    """Configuration settings for progress consoles."""

    # Banner timestamps (strftime format)
    date_time_format: str = "%Y-%m-%d %H:%M:%S"

    # Placed between the prefix label and the line text
    prefix_separator: str = " | "

    # Seconds between auto-print heartbeats
    auto_print_interval: float = 1.0


# Global configuration instance
_config = ProgressConfig()
_config_lock = RLock()


def get_config() -> ProgressConfig:
    """Get the current global progress configuration."""
    with _config_lock:
        return _config


def set_config(config: ProgressConfig) -> None:
    """Set the global progress configuration."""
    global _config
    with _config_lock:
        _config = config


def update_config(**kwargs) -> None:
    """Update specific configuration values."""
    with _config_lock:
        for key, value in kwargs.items():
            if hasattr(_config, key):
                setattr(_config, key, value)
                logger.debug(f"Progress config updated: {key}={value!r}")
            else:
                raise ValueError(f"Unknown configuration option: {key}")
