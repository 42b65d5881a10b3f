"""
Progress Formatting Helpers

Timestamp and duration rendering shared by the progress console.
"""

import time
from typing import Optional

from tqdm import tqdm

from cblog.progress.config import get_config


def format_timestamp(seconds: float, fmt: Optional[str] = None) -> str:
    """Format an epoch timestamp in local time using the configured format."""
    return time.strftime(fmt or get_config().date_time_format, time.localtime(seconds))


def format_elapsed(seconds: float) -> str:
    """Elapsed running time rounded to whole seconds, e.g. ``01:05``."""
    return tqdm.format_interval(max(0, round(seconds)))


def _decimal(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(ns: int) -> str:
    """
    Render a nanosecond duration compactly and exactly.

    Sub-second values use the largest unit below them (``350ns``, ``1.5µs``,
    ``999.999999ms``); longer values are split into hours, minutes and
    seconds (``2.5s``, ``1m5s``, ``1h0m3s``). Fractions are never rounded, so
    a value just under a unit boundary never reads as the next unit.

    Args:
        ns: Duration in nanoseconds

    Returns:
        Human readable duration string
    """
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_decimal(ns, 1_000)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_decimal(ns, 1_000_000)}ms"

    hours, rem = divmod(ns, 3_600_000_000_000)
    minutes, rem = divmod(rem, 60_000_000_000)

    text = sign
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return text + f"{_decimal(rem, 1_000_000_000)}s"
