"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration.
"""

import os
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from cblog.logging.levels import Color, LogLevel
from cblog.progress.console import ProgressMode

logger = logging.getLogger(__name__)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _env_flag(name: str) -> bool:
    """Read a boolean environment variable, warning on unrecognised values."""
    value = os.getenv(name, '').strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value not in _FALSE_VALUES:
        logger.warning(f"Invalid {name} value '{value}', using default false")
    return False


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments and load environment configuration.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - log_level_resolved: LogLevel
            - log_color_resolved: int
    """
    # Load environment variables from .env file (if present)
    load_dotenv()

    # Get environment variables with defaults
    env_prefix = os.getenv('CBLOG_PREFIX', '')
    env_mode = os.getenv('CBLOG_MODE', 'auto')
    env_log_file = os.getenv('CBLOG_LOG_FILE')
    env_log_level = os.getenv('CBLOG_LOG_LEVEL', 'info')
    env_log_socket = os.getenv('CBLOG_LOG_SOCKET')
    env_log_color = os.getenv('CBLOG_LOG_COLOR', '')

    # Validate display mode
    valid_modes = [mode.value for mode in ProgressMode]
    if env_mode not in valid_modes:
        logger.warning(f"Invalid CBLOG_MODE value '{env_mode}', using default 'auto'")
        env_mode = 'auto'

    # Validate log level
    try:
        LogLevel.parse(env_log_level)
    except ValueError:
        logger.warning(f"Invalid CBLOG_LOG_LEVEL value '{env_log_level}', using default 'info'")
        env_log_level = 'info'

    # Validate colour name
    valid_colors = [color.name.lower() for color in Color]
    if env_log_color and env_log_color.lower() not in valid_colors:
        logger.warning(f"Invalid CBLOG_LOG_COLOR value '{env_log_color}', using no colour")
        env_log_color = ''

    parser = argparse.ArgumentParser(
        description='Report each input line as one unit of progress'
    )
    parser.add_argument(
        '--input',
        type=Path,
        default=None,
        help='File to read lines from (default: stdin)'
    )
    parser.add_argument(
        '--prefix',
        type=str,
        default=env_prefix,
        help='Label prepended to every progress line'
    )
    parser.add_argument(
        '--mode',
        type=str,
        choices=valid_modes,
        default=env_mode,
        help=f'Line display mode (default: {env_mode})'
    )
    parser.add_argument(
        '--limit',
        action='store_true',
        default=_env_flag('CBLOG_LIMIT'),
        help='Print at most one progress line per second'
    )
    parser.add_argument(
        '--track',
        action='store_true',
        default=_env_flag('CBLOG_TRACK'),
        help='Annotate lines with elapsed time, count and throughput'
    )
    parser.add_argument(
        '--auto-print',
        action='store_true',
        help='Refresh the progress line every second even without input'
    )
    parser.add_argument(
        '--no-stats',
        action='store_true',
        help='Skip the summary line at the end'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path(env_log_file) if env_log_file and env_log_file.strip() else None,
        help='Append log entries to this file'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        choices=[level.name.lower() for level in LogLevel],
        default=env_log_level.lower(),
        help=f'Minimum severity written to the log (default: {env_log_level.lower()})'
    )
    parser.add_argument(
        '--log-socket',
        type=Path,
        default=Path(env_log_socket) if env_log_socket and env_log_socket.strip() else None,
        help='Also send log entries to this Unix domain socket'
    )
    parser.add_argument(
        '--log-stdout',
        action='store_true',
        default=_env_flag('CBLOG_LOG_STDOUT'),
        help='Also write log entries to stdout'
    )
    parser.add_argument(
        '--log-color',
        type=str,
        choices=valid_colors,
        default=env_log_color.lower() or None,
        help='Colour for log entries written to stdout'
    )

    args = parser.parse_args(argv)

    args.log_level_resolved = LogLevel.parse(args.log_level)
    args.log_color_resolved = Color[args.log_color.upper()].value if args.log_color else 0

    return args
