"""
Progress Console Module

In-place updating terminal status lines with optional rate limiting and
throughput statistics. Safe for concurrent printers on one instance.
"""

import logging
import sys
import threading
import time
from enum import Enum
from threading import Lock
from typing import Any, Callable, Optional, TextIO

from cblog.progress.config import get_config
from cblog.progress.formatting import format_duration, format_elapsed, format_timestamp

logger = logging.getLogger(__name__)

NANOSECONDS_PER_SECOND = 1_000_000_000


def substitute(template: str, args: tuple) -> str:
    """
    %-format a message template without ever raising.

    A template that does not match its arguments is kept as-is with the
    arguments appended, so a bad format string cannot break a print.
    """
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError, KeyError) as e:
        logger.debug(f"Cannot format progress message {template!r}: {e}")
        newline = template.endswith("\n")
        text = " ".join([template.rstrip("\n"), *(str(arg) for arg in args)])
        return text + "\n" if newline else text


class ProgressMode(Enum):
    """Progress line display modes."""
    AUTO = "auto"          # Replace when the sink is a terminal
    REPLACE = "replace"    # Overwrite the previous line in place
    APPEND = "append"      # One line per print


class AtomicCounter:
    """Integer counter whose updates are never lost between threads."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = Lock()

    def add(self, delta: int = 1) -> int:
        with self._lock:
            self._value += delta
            return self._value

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = value


class ProgressConsole:
    """
    Console progress printer for one logical task stream.

    Lines are written to a text sink (stdout by default). Depending on the
    flags each print can overwrite the previous line, be dropped when another
    line was already accepted in the same wall-clock second, or be annotated
    with elapsed time, a completion count and throughput.

    Thread safety: print/println/tick may be called from many threads. The
    rate-limit check and the sink write each hold their own lock. The flag
    attributes and start/finish are owned by a single session owner; changing
    them while other threads print is the caller's responsibility.
    """

    def __init__(
        self,
        replace: bool = False,
        limit: bool = False,
        track_progress: bool = False,
        writer: Optional[TextIO] = None,
        message_provider: Optional[Callable[[], str]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize progress console.

        Args:
            replace: Overwrite the previous line instead of appending
            limit: Accept at most one print per wall-clock second
            track_progress: Count prints and annotate lines with throughput
            writer: Text sink (default: sys.stdout)
            message_provider: Produces the line text for empty prints
            clock: Wall-clock source in seconds
        """
        self.replace = replace
        self.limit = limit
        self.track_progress = track_progress
        self.prefix = ""

        self._writer = writer if writer is not None else sys.stdout
        self._message_provider = message_provider
        self._clock = clock

        self._lock = Lock()
        self._write_lock = Lock()

        self._start: Optional[float] = None
        self._last_print = 0
        self._last_print_len = 0
        self._progress = AtomicCounter()
        self._last_progress = AtomicCounter()
        self._first_tick = False
        self._finished = threading.Event()

    @property
    def count(self) -> int:
        """Units completed in the current session."""
        return self._progress.load()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    @property
    def start_time(self) -> Optional[float]:
        return self._start

    def set_message_provider(self, provider: Optional[Callable[[], str]]) -> None:
        self._message_provider = provider

    def set_writer(self, writer: TextIO) -> None:
        with self._write_lock:
            self._writer = writer

    def start(self, prefix: str = "") -> None:
        """Begin a reporting session and print the start banner."""
        self._finished.clear()
        self._start = self._clock()
        self.prefix = prefix

        self._emit(f"Start: {format_timestamp(self._start)}\n")

        self._progress.store(0)
        self._last_progress.store(0)

    def finish(self, print_stats: bool = False, *extra: Any) -> None:
        """
        End the session.

        Args:
            print_stats: Print a summary line when progress is tracked
            *extra: Optional closing message template followed by its args;
                    ignored when a message provider is set
        """
        self._finished.set()

        if print_stats and self.track_progress:
            self._print_summary()

        closing = self._closing_message(extra)
        if closing is not None:
            self._emit(f"Finish: {closing}\n")

        with self._lock:
            self._last_print = 0
        self._progress.store(0)

    def tick(self) -> None:
        """Heartbeat print; elapsed time is measured from the first tick."""
        if not self._first_tick:
            self._first_tick = True
            if self.track_progress:
                self._start = self._clock()
        self.print()

    def print(self, message: str = "", *args: Any) -> None:
        """
        Print a status line.

        Args:
            message: %-style template, or empty to use the message provider
            *args: Values substituted into the template
        """
        if self.track_progress:
            if self._start is None:
                self._start = self._clock()
            self._progress.add(1)

        now_f = self._clock()
        now = int(now_f)
        if self.limit:
            with self._lock:
                if now <= self._last_print:
                    return
                self._last_print = now

        if message == "" and not args and self._message_provider is not None:
            message = self._message_provider()

        text = substitute(message, args)

        if self.track_progress:
            text = self._annotate(text, now_f)

        self._emit(text)

        if self.track_progress:
            self._last_progress.store(self._progress.load())

    def println(self, message: str = "", *args: Any) -> None:
        """Print a status line that always ends with a newline."""
        self.print(message + "\n", *args)

    def new_line(self) -> None:
        """Move the terminal cursor to a fresh line."""
        self._write("\n")

    def auto_print(self) -> threading.Thread:
        """
        Start a background heartbeat that prints once per interval until finish().

        The counter is decremented before each heartbeat print so the
        heartbeat itself is not counted as a completed unit.

        Returns:
            The started daemon thread
        """
        thread = threading.Thread(
            target=self._auto_print_loop,
            name="progress-auto-print",
            daemon=True,
        )
        thread.start()
        return thread

    def _auto_print_loop(self) -> None:
        interval = get_config().auto_print_interval
        while not self._finished.wait(interval):
            if self.track_progress:
                self._progress.add(-1)
            self.print()

    def _annotate(self, text: str, now_f: float) -> str:
        newline = text.endswith("\n")
        if newline:
            text = text[:-1]

        start = self._start if self._start is not None else now_f
        count = self._progress.load()
        delta = count - self._last_progress.load()

        avg_per_second = 0
        if int(start) < int(now_f):
            avg_per_second = count // (int(now_f) - int(start))

        text = (
            f"Running {format_elapsed(now_f - start)} | {count} | {text}"
            f" | {delta}/s Avg {avg_per_second}/s"
        )
        return text + "\n" if newline else text

    def _print_summary(self) -> None:
        now = self._clock()
        stamp = format_timestamp(now)
        count = self._progress.load()

        if count == 0:
            self._emit(f"Finish: {stamp} | 0 units complete\n")
            return

        start = self._start if self._start is not None else now
        total_ns = int((now - start) * NANOSECONDS_PER_SECOND)
        avg_ns = max(total_ns // count, 1)

        self._emit(
            f"Finish: {stamp} | {count} units complete in {format_elapsed(now - start)}"
            f" | avg {format_duration(avg_ns)} per unit"
            f" | avg {NANOSECONDS_PER_SECOND // avg_ns}/s\n"
        )

    def _closing_message(self, extra: tuple) -> Optional[str]:
        if self._message_provider is not None:
            return self._message_provider()
        if extra and isinstance(extra[0], str):
            return substitute(extra[0], extra[1:])
        return None

    def _emit(self, text: str) -> None:
        """Apply prefix and line replacement, then write. Never rate limited."""
        if self.prefix:
            text = f"{self.prefix}{get_config().prefix_separator}{text}"

        newline = text.endswith("\n")
        if self.replace:
            if not text.startswith("\r"):
                text = "\r" + text
            if len(text) <= self._last_print_len:
                body = (text[:-1] if newline else text).rstrip(" \t")
                # Pad past the end of the previous line so none of it survives
                body += " " * (self._last_print_len - len(body.strip()) + 1)
                text = body + "\n" if newline else body
        elif not newline:
            text += "\n"

        self._last_print_len = 0 if newline else len(text.strip())
        self._write(text)

    def _write(self, text: str) -> None:
        with self._write_lock:
            try:
                self._writer.write(text)
                flush = getattr(self._writer, "flush", None)
                if flush is not None:
                    flush()
            except (OSError, ValueError) as e:
                logger.debug(f"Progress output dropped: {e}")
