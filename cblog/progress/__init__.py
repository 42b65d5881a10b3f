"""
Progress Module

Console progress printing with in-place line replacement, per-second rate
limiting and throughput statistics.
"""

from cblog.progress.console import ProgressConsole, ProgressMode, AtomicCounter
from cblog.progress.config import ProgressConfig, get_config, set_config, update_config
from cblog.progress.formatting import format_duration, format_elapsed, format_timestamp
from cblog.progress.utils import create_progress_console, parse_progress_mode

__all__ = [
    'ProgressConsole',
    'ProgressMode',
    'AtomicCounter',
    'ProgressConfig',
    'get_config',
    'set_config',
    'update_config',
    'format_duration',
    'format_elapsed',
    'format_timestamp',
    'create_progress_console',
    'parse_progress_mode',
]
