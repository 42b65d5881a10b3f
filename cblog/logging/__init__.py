"""
Logging Module - Multi-Destination Category Logging

Thin layer over the standard library ``logging`` package. A Logger writes
each entry, tagged with a category and a severity, to every configured
destination: a log file, the console (through rich), a Unix domain socket
and any additional writers.

Usage:
    from cblog.logging import Logger, LoggerConfig, LogLevel

    config = LoggerConfig(log_level=LogLevel.DEBUG, log_to_file=True,
                          file_path="logs/app.log")
    with Logger(config) as log:
        log.info("DB", "Connected to %s", host)
        log.stack_as_error("DB", "Unexpected state")
"""

from cblog.logging.levels import NOTICE, LogLevel, Color
from cblog.logging.formatter import DEFAULT_FORMAT, DEFAULT_TIME_FORMAT, PlaceholderFormatter
from cblog.logging.handlers import WriterHandler
from cblog.logging.writers import MultipleWriter, UnixSocketWriter, ConsoleWriter, open_log_file
from cblog.logging.stack import CallerLocation, stack
from cblog.logging.logger import Logger, LoggerConfig, default_logger_config

__all__ = [
    'NOTICE',
    'LogLevel',
    'Color',
    'DEFAULT_FORMAT',
    'DEFAULT_TIME_FORMAT',
    'PlaceholderFormatter',
    'WriterHandler',
    'MultipleWriter',
    'UnixSocketWriter',
    'ConsoleWriter',
    'open_log_file',
    'CallerLocation',
    'stack',
    'Logger',
    'LoggerConfig',
    'default_logger_config',
]
