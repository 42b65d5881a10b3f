"""
Log Writers

Byte-oriented destinations for the logger: fan-out to several writers,
a reconnecting Unix domain socket, a rich console and append-mode files.
"""

import logging
import os
import socket
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from rich.console import Console
from rich.text import Text

from cblog.exceptions import LoggerSetupError
from cblog.logging.levels import Color

logger = logging.getLogger(__name__)


class MultipleWriter:
    """
    Write the same bytes to several writers in order.

    The first writer that raises stops the fan-out: its exception propagates
    and the writers after it receive nothing.
    """

    def __init__(self, *writers: Any) -> None:
        self.writers = list(writers)

    def write(self, data: bytes) -> int:
        written = 0
        for writer in self.writers:
            written = writer.write(data)
        return written


class UnixSocketWriter:
    """
    Write newline-terminated messages to a Unix domain socket.

    The socket is dialled on first use. When it cannot be dialled the message
    is dropped. A failed write triggers one redial and one retry.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        self._socket: Optional[socket.socket] = None

    @property
    def connected(self) -> bool:
        return self._socket is not None

    def write(self, data: bytes) -> int:
        if self._socket is None:
            self._connect()
        if self._socket is None:
            return 0

        payload = bytes(data) + b"\n"
        try:
            self._socket.sendall(payload)
        except OSError as e:
            logger.debug(f"Write to {self.path} failed, reconnecting: {e}")
            self._connect()
            if self._socket is None:
                return 0
            self._socket.sendall(payload)
        return len(payload)

    def _connect(self) -> None:
        self.close()
        conn = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            conn.connect(self.path)
        except OSError as e:
            conn.close()
            logger.debug(f"Cannot dial unix socket {self.path}: {e}")
            return
        self._socket = conn

    def close(self) -> None:
        if self._socket is not None:
            sock, self._socket = self._socket, None
            sock.close()


class ConsoleWriter:
    """Write log output to a terminal through rich, optionally coloured."""

    def __init__(self, console: Optional[Console] = None, color: int = 0) -> None:
        """
        Initialize console writer.

        Args:
            console: Rich console instance (default: new stdout console)
            color: ANSI colour code 30-37, or 0 for the terminal default
        """
        self.console = console or Console(highlight=False)
        self.style = Color(color).rich_style if color else None

    def write(self, data: bytes) -> int:
        text = data.decode("utf-8", "replace")
        self.console.print(
            Text(text, style=self.style or ""),
            end="",
            soft_wrap=True,
            highlight=False,
        )
        return len(data)


def open_log_file(path: Union[str, Path], perm: int = 0o777) -> BinaryIO:
    """
    Open a log file for appending, creating it and its directory if needed.

    Args:
        path: Log file path
        perm: Permission bits used when the file is created

    Returns:
        Unbuffered binary file object

    Raises:
        LoggerSetupError: If the file cannot be opened
    """
    log_file = Path(path)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(log_file, os.O_RDWR | os.O_APPEND | os.O_CREAT, perm)
    except OSError as e:
        raise LoggerSetupError(f"Cannot open log file {log_file}: {e}") from e
    return os.fdopen(fd, "ab", buffering=0)
