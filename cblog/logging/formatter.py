"""
Placeholder Formatter

Renders log records from ``%{name}`` templates, e.g.
``%{time:%H:%M:%S} : %{category} : %{level} : %{message}``.

Supported placeholders: id, time[:strftime], module, filename, file, line,
level, message, category. Unknown placeholders are left untouched.
"""

import itertools
import logging
import os
import re
import threading
from datetime import datetime

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f %z"
DEFAULT_FORMAT = (
    "%{time:" + DEFAULT_TIME_FORMAT + "} : %{category} : %{level} : "
    "%{file}:%{line} : %{message}"
)

_PLACEHOLDER = re.compile(r"%\{(\w+)(?::([^}]*))?\}")


class PlaceholderFormatter(logging.Formatter):
    """logging.Formatter driven by a %{...} template instead of %(...)s fields."""

    def __init__(self, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__()
        self.template = fmt
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message += "\n" + record.exc_text
        if record.stack_info:
            message += "\n" + self.formatStack(record.stack_info)

        with self._id_lock:
            record_id = next(self._ids)

        # Explicit call-site locations win over the position logging recorded
        location = getattr(record, "caller_location", None)
        if location is not None:
            filename = os.path.basename(location.file)
            module = os.path.splitext(filename)[0]
            line = location.line
        else:
            filename, module, line = record.filename, record.module, record.lineno

        values = {
            "id": str(record_id),
            "module": module,
            "filename": filename,
            "file": filename,
            "line": str(line),
            "level": record.levelname,
            "message": message,
            "category": getattr(record, "category", ""),
        }

        def substitute(match: re.Match) -> str:
            name, argument = match.group(1), match.group(2)
            if name == "time":
                return self._format_time(record, argument)
            return values.get(name, match.group(0))

        return _PLACEHOLDER.sub(substitute, self.template)

    @staticmethod
    def _format_time(record: logging.LogRecord, fmt) -> str:
        moment = datetime.fromtimestamp(record.created).astimezone()
        return moment.strftime(fmt or DEFAULT_TIME_FORMAT)
