"""
Progress Utilities

Helper functions for setting up progress consoles.
"""

import logging
import sys
from typing import Optional, TextIO

from .console import ProgressConsole, ProgressMode

logger = logging.getLogger(__name__)


def parse_progress_mode(mode_str: str) -> ProgressMode:
    """Parse a mode string, falling back to AUTO on invalid input."""
    try:
        return ProgressMode(mode_str.lower())
    except ValueError:
        logger.warning(f"Invalid progress mode '{mode_str}', using 'auto'")
        return ProgressMode.AUTO


def create_progress_console(
    mode_str: str = "auto",
    limit: bool = False,
    track_progress: bool = False,
    writer: Optional[TextIO] = None,
) -> ProgressConsole:
    """
    Create a progress console with the specified display mode.

    In auto mode lines are replaced in place only when the sink is a terminal,
    so redirected output stays one line per print.

    Args:
        mode_str: Display mode string ("auto", "replace", "append")
        limit: Rate-limit to one line per second
        track_progress: Count prints and show throughput
        writer: Output sink (default: sys.stdout)

    Returns:
        ProgressConsole instance
    """
    mode = parse_progress_mode(mode_str)
    sink = writer if writer is not None else sys.stdout

    if mode == ProgressMode.AUTO:
        isatty = getattr(sink, "isatty", None)
        replace = bool(isatty and isatty())
    else:
        replace = mode == ProgressMode.REPLACE

    logger.debug(f"Progress console: mode={mode.value} replace={replace} limit={limit}")
    return ProgressConsole(
        replace=replace,
        limit=limit,
        track_progress=track_progress,
        writer=sink,
    )
