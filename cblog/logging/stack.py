"""
Call Stack Helpers

Stack text for diagnostic log entries and explicit call-site capture.
"""

import sys
import traceback
from typing import NamedTuple

STACK_HEADER = "Stack (most recent call last):"


def stack(skip: int = 0) -> str:
    """
    Return the current call stack as text.

    The innermost frame (this function) is always omitted.

    Args:
        skip: Number of additional innermost frames to omit

    Returns:
        Header line followed by one entry per frame, outermost first
    """
    frames = traceback.format_stack(sys._getframe(1 + skip))
    return STACK_HEADER + "\n" + "".join(frames).rstrip("\n")


class CallerLocation(NamedTuple):
    """Source position reported for a log entry instead of the logging call itself."""
    file: str
    line: int
    function: str

    @classmethod
    def capture(cls, depth: int = 1) -> "CallerLocation":
        """
        Capture the location of a caller.

        Args:
            depth: 1 for the function calling capture(), 2 for its caller, ...
        """
        frame = sys._getframe(depth)
        return cls(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)
