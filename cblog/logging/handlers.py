"""
Writer Handler

Logging handler that delivers formatted records as newline-terminated bytes
to any writer object (file, socket, fan-out).
"""

import logging
from typing import Any


class WriterHandler(logging.Handler):
    """
    Handler writing each record to a byte writer.

    The writer only needs a ``write(bytes)`` method. Errors raised by the
    writer are reported through ``handleError`` like any stdlib handler.
    """

    def __init__(self, writer: Any, encoding: str = "utf-8") -> None:
        """
        Initialize writer handler.

        Args:
            writer: Destination with a write(bytes) method
            encoding: Text encoding for formatted records
        """
        super().__init__()
        self.writer = writer
        self.encoding = encoding

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record) + "\n"
            self.writer.write(message.encode(self.encoding, "replace"))
        except Exception:
            self.handleError(record)
