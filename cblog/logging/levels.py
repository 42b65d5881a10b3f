"""
Log Levels and Colours

Severity levels in decreasing order of importance, mapped onto the standard
library's numeric levels, plus the ANSI colours accepted for stdout output.
"""

import logging
from enum import IntEnum

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")


class LogLevel(IntEnum):
    """Configured severity threshold; a logger emits its level and everything above."""
    CRITICAL = 1
    ERROR = 2
    WARNING = 3
    NOTICE = 4
    INFO = 5
    DEBUG = 6

    def to_logging(self) -> int:
        """Equivalent standard library level number."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Parse a case-insensitive level name such as ``"info"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


_STDLIB_LEVELS = {
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.NOTICE: NOTICE,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class Color(IntEnum):
    """ANSI foreground colour codes."""
    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    WHITE = 37

    @property
    def rich_style(self) -> str:
        return self.name.lower()
