"""cblog - Console progress reporting and multi-destination logging"""

# Exceptions (centralized)
from cblog.exceptions import CblogError, LoggerSetupError, LoggerCloseError, LoggerPanic

# Progress
from cblog.progress import ProgressConsole, ProgressMode, ProgressConfig, create_progress_console

# Logging
from cblog.logging import Logger, LoggerConfig, LogLevel, Color, CallerLocation

__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "CblogError",
    "LoggerSetupError",
    "LoggerCloseError",
    "LoggerPanic",
    # Progress
    "ProgressConsole",
    "ProgressMode",
    "ProgressConfig",
    "create_progress_console",
    # Logging
    "Logger",
    "LoggerConfig",
    "LogLevel",
    "Color",
    "CallerLocation",
]
