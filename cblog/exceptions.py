"""
cblog - Exceptions

Centralized exception hierarchy for logger setup and teardown errors.
Progress printing never raises for sink failures, so nothing here covers it.
"""


class CblogError(Exception):
    """Base exception for all cblog errors."""
    pass


class LoggerSetupError(CblogError):
    """Exception for logger construction errors.

    Raised when:
    - The log file cannot be opened or created
    - The log file's parent directory cannot be created
    """
    pass


class LoggerCloseError(CblogError):
    """Exception for errors while closing logger destinations.

    The message holds one line per destination that failed to close.
    """
    pass


class LoggerPanic(CblogError):
    """Raised by Logger.panic() after the message has been logged."""
    pass
