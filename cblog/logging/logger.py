"""
Logger - Category Based Multi-Destination Logging

Wraps a standard library logger whose single handler fans out to a log file,
the console, a Unix domain socket and any caller supplied writers.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from rich.console import Console

from cblog.exceptions import LoggerCloseError, LoggerPanic, LoggerSetupError
from cblog.logging.formatter import DEFAULT_FORMAT, PlaceholderFormatter
from cblog.logging.handlers import WriterHandler
from cblog.logging.levels import NOTICE, LogLevel
from cblog.logging.stack import CallerLocation, stack
from cblog.logging.writers import ConsoleWriter, MultipleWriter, UnixSocketWriter, open_log_file

INIT_CATEGORY = "CBLOG"
PRINT_CATEGORY = "PRINT"


@dataclass
class LoggerConfig:
    """Destinations and formatting for a Logger."""

    log_level: LogLevel = LogLevel.INFO
    format: str = DEFAULT_FORMAT

    # File destination
    log_to_file: bool = False
    file_path: Optional[Union[str, Path]] = None
    file_perm: int = 0o777

    # Console destination
    log_to_stdout: bool = True
    stdout_color: int = 0
    console: Optional[Console] = None

    # Unix domain socket destination
    log_to_unix_socket: bool = False
    unix_socket_path: Optional[Union[str, Path]] = None

    # Extra writers; the *_closers ones are also closed by Logger.close()
    additional_writers: List[Any] = field(default_factory=list)
    additional_writer_closers: List[Any] = field(default_factory=list)


def default_logger_config() -> LoggerConfig:
    return LoggerConfig()


class Logger:
    """
    Category based logger writing to every configured destination.

    Every entry carries a category string next to its severity. Messages are
    %-formatted only when arguments are supplied, so a literal ``%`` in an
    argument-less message is safe.

    A Logger is also a writer (``write``), so it can be handed to anything
    that expects an output stream, such as a ProgressConsole.
    """

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        """
        Initialize logger and open its destinations.

        Args:
            config: Logger configuration (default: stdout at INFO)

        Raises:
            LoggerSetupError: If a destination is misconfigured or the log
                file cannot be opened
        """
        self.config = config or default_logger_config()
        self._closers: List[Any] = []

        if self.config.log_to_file and self.config.file_path is None:
            raise LoggerSetupError("log_to_file is set but file_path is empty")
        if self.config.log_to_unix_socket and self.config.unix_socket_path is None:
            raise LoggerSetupError("log_to_unix_socket is set but unix_socket_path is empty")

        writers: List[Any] = []

        if self.config.log_to_file:
            log_file = open_log_file(self.config.file_path, self.config.file_perm)
            self._closers.append(log_file)
            writers.append(log_file)

        if self.config.log_to_stdout:
            writers.append(ConsoleWriter(self.config.console, self.config.stdout_color))

        if self.config.log_to_unix_socket:
            socket_writer = UnixSocketWriter(self.config.unix_socket_path)
            self._closers.append(socket_writer)
            writers.append(socket_writer)

        writers.extend(self.config.additional_writers)

        for writer in self.config.additional_writer_closers:
            self._closers.append(writer)
            writers.append(writer)

        self.writer = MultipleWriter(*writers)

        self._handler = WriterHandler(self.writer)
        self._handler.setFormatter(PlaceholderFormatter(self.config.format))

        self._logger = logging.Logger(f"cblog.{id(self):x}")
        self._logger.setLevel(self.config.log_level.to_logging())
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

        self.info(INIT_CATEGORY, "Logger initialised")

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped standard library logger."""
        return self._logger

    def _log(
        self,
        level: int,
        category: str,
        fmt: str,
        args: tuple,
        location: Optional[CallerLocation],
    ) -> None:
        extra = {"category": category}
        if location is not None:
            extra["caller_location"] = location
        # stacklevel 3: _log -> public method -> caller
        self._logger.log(level, fmt, *args, extra=extra, stacklevel=3)

    def critical(self, category: str, fmt: str, *args: Any,
                 location: Optional[CallerLocation] = None) -> None:
        self._log(logging.CRITICAL, category, fmt, args, location)

    def error(self, category: str, fmt: str, *args: Any,
              location: Optional[CallerLocation] = None) -> None:
        self._log(logging.ERROR, category, fmt, args, location)

    def warning(self, category: str, fmt: str, *args: Any,
                location: Optional[CallerLocation] = None) -> None:
        self._log(logging.WARNING, category, fmt, args, location)

    def notice(self, category: str, fmt: str, *args: Any,
               location: Optional[CallerLocation] = None) -> None:
        self._log(NOTICE, category, fmt, args, location)

    def info(self, category: str, fmt: str, *args: Any,
             location: Optional[CallerLocation] = None) -> None:
        self._log(logging.INFO, category, fmt, args, location)

    def debug(self, category: str, fmt: str, *args: Any,
              location: Optional[CallerLocation] = None) -> None:
        self._log(logging.DEBUG, category, fmt, args, location)

    def fatal(self, category: str, fmt: str, *args: Any,
              location: Optional[CallerLocation] = None) -> None:
        """Log at CRITICAL and exit the process with status 1."""
        self._log(logging.CRITICAL, category, fmt, args, location)
        sys.exit(1)

    def panic(self, category: str, fmt: str, *args: Any,
              location: Optional[CallerLocation] = None) -> None:
        """Log at CRITICAL and raise LoggerPanic with the message."""
        self._log(logging.CRITICAL, category, fmt, args, location)
        raise LoggerPanic(fmt % args if args else fmt)

    def stack_as_error(self, category: str, message: str = "") -> None:
        """Log the current call stack at ERROR."""
        self._log(logging.ERROR, category, self._stack_message(message), (), None)

    def stack_as_critical(self, category: str, message: str = "") -> None:
        """Log the current call stack at CRITICAL."""
        self._log(logging.CRITICAL, category, self._stack_message(message), (), None)

    @staticmethod
    def _stack_message(message: str) -> str:
        # skip: _stack_message and the stack_as_* method
        return (message or "Stack info") + "\n" + stack(skip=2)

    def write(self, data: Union[bytes, str]) -> int:
        """Log a raw payload at INFO, one entry per call."""
        text = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
        text = text.rstrip("\n")
        if text:
            self._log(logging.INFO, PRINT_CATEGORY, text, (), None)
        return len(data)

    def flush(self) -> None:
        self._handler.flush()

    def print(self, *values: Any) -> None:
        self._log(logging.INFO, PRINT_CATEGORY, " ".join(str(v) for v in values), (), None)

    def close(self) -> None:
        """
        Close every destination that owns a resource.

        Raises:
            LoggerCloseError: One line per destination that failed to close
        """
        self._logger.removeHandler(self._handler)
        self._handler.close()

        errors = []
        for closer in self._closers:
            try:
                closer.close()
            except Exception as e:
                errors.append(str(e))
        self._closers.clear()

        if errors:
            raise LoggerCloseError("\n".join(errors))

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
