"""Tests for the category logger."""

import io
import logging
import time

import pytest
from rich.console import Console

from cblog.exceptions import LoggerCloseError, LoggerPanic, LoggerSetupError
from cblog.logging import (
    NOTICE,
    CallerLocation,
    Color,
    Logger,
    LoggerConfig,
    LogLevel,
    stack,
)
from cblog.progress import ProgressConsole

SIMPLE_FORMAT = "%{category} : %{level} : %{message}"


def make_logger(fmt=SIMPLE_FORMAT, level=LogLevel.DEBUG, **kwargs):
    buffer = io.BytesIO()
    config = LoggerConfig(
        log_level=level,
        format=fmt,
        log_to_stdout=False,
        additional_writers=[buffer],
        **kwargs,
    )
    return Logger(config), buffer


def entries(buffer):
    return buffer.getvalue().decode("utf-8").splitlines()


class Closer:
    def __init__(self, error=None):
        self.error = error
        self.closed = False
        self.data = b""

    def write(self, data):
        self.data += data
        return len(data)

    def close(self):
        self.closed = True
        if self.error:
            raise OSError(self.error)


class TestLevels:

    def test_parse_is_case_insensitive(self):
        assert LogLevel.parse("notice") is LogLevel.NOTICE
        assert LogLevel.parse(" Debug ") is LogLevel.DEBUG

    def test_parse_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            LogLevel.parse("loud")

    def test_standard_library_mapping(self):
        assert LogLevel.CRITICAL.to_logging() == logging.CRITICAL
        assert LogLevel.NOTICE.to_logging() == NOTICE == 25
        assert LogLevel.DEBUG.to_logging() == logging.DEBUG
        assert logging.getLevelName(NOTICE) == "NOTICE"

    def test_colour_style(self):
        assert Color.RED == 31
        assert Color.WHITE.rich_style == "white"


class TestLogger:

    def test_initialisation_entry(self):
        log, buffer = make_logger()

        assert entries(buffer) == ["CBLOG : INFO : Logger initialised"]

    def test_every_severity(self):
        log, buffer = make_logger()

        log.critical("A", "one")
        log.error("A", "two")
        log.warning("A", "three")
        log.notice("A", "four")
        log.info("A", "five")
        log.debug("A", "six")

        assert entries(buffer)[1:] == [
            "A : CRITICAL : one",
            "A : ERROR : two",
            "A : WARNING : three",
            "A : NOTICE : four",
            "A : INFO : five",
            "A : DEBUG : six",
        ]

    def test_level_threshold(self):
        log, buffer = make_logger(level=LogLevel.WARNING)

        log.info("A", "hidden")
        log.notice("A", "hidden")
        log.warning("A", "shown")
        log.error("A", "shown too")

        assert entries(buffer) == ["A : WARNING : shown", "A : ERROR : shown too"]

    def test_formats_only_with_arguments(self):
        log, buffer = make_logger()

        log.info("DB", "connected to %s:%d", "db", 5432)
        log.info("DB", "100% literal")

        assert entries(buffer)[1:] == [
            "DB : INFO : connected to db:5432",
            "DB : INFO : 100% literal",
        ]

    def test_reports_calling_file(self):
        log, buffer = make_logger(fmt="%{module} %{filename} %{file}")

        log.info("A", "where")

        assert entries(buffer)[-1] == "test_logger test_logger.py test_logger.py"

    def test_reports_calling_line(self):
        log, buffer = make_logger(fmt="%{line}")

        here = CallerLocation.capture()
        log.info("A", "where")

        assert entries(buffer)[-1] == str(here.line + 1)

    def test_explicit_location_overrides_caller(self):
        log, buffer = make_logger(fmt="%{module} %{file}:%{line}")

        log.error("A", "elsewhere", location=CallerLocation("/srv/app/worker.py", 42, "run"))

        assert entries(buffer)[-1] == "worker worker.py:42"

    def test_sequence_ids(self):
        log, buffer = make_logger(fmt="%{id} %{message}")

        log.info("A", "next")

        assert entries(buffer) == ["1 Logger initialised", "2 next"]

    def test_time_placeholder(self):
        log, buffer = make_logger(fmt="%{time:%Y}|%{message}")

        assert entries(buffer)[0] == time.strftime("%Y") + "|Logger initialised"

    def test_default_format(self):
        log, buffer = make_logger(fmt=LoggerConfig().format)

        entry = entries(buffer)[0]
        assert " : CBLOG : INFO : " in entry
        assert entry.endswith(" : Logger initialised")

    def test_unknown_placeholder_left_alone(self):
        log, buffer = make_logger(fmt="%{nope} %{message}")

        assert entries(buffer)[0] == "%{nope} Logger initialised"

    def test_exception_info_is_appended(self):
        log, buffer = make_logger()

        try:
            raise RuntimeError("kaput")
        except RuntimeError:
            log.underlying.error("failed", exc_info=True, extra={"category": "A"})

        text = buffer.getvalue().decode("utf-8")
        assert "A : ERROR : failed\nTraceback" in text
        assert "RuntimeError: kaput" in text

    def test_panic_logs_and_raises(self):
        log, buffer = make_logger()

        with pytest.raises(LoggerPanic, match="bad state 7"):
            log.panic("CORE", "bad state %d", 7)

        assert entries(buffer)[-1] == "CORE : CRITICAL : bad state 7"

    def test_fatal_logs_and_exits(self):
        log, buffer = make_logger()

        with pytest.raises(SystemExit) as exc_info:
            log.fatal("CORE", "giving up")

        assert exc_info.value.code == 1
        assert entries(buffer)[-1] == "CORE : CRITICAL : giving up"

    def test_stack_as_error(self):
        log, buffer = make_logger()

        log.stack_as_error("CORE")

        text = buffer.getvalue().decode("utf-8")
        assert "CORE : ERROR : Stack info\nStack (most recent call last):" in text
        assert "in test_stack_as_error" in text
        assert "in stack_as_error" not in text
        assert "in _stack_message" not in text

    def test_stack_as_critical_with_message(self):
        log, buffer = make_logger()

        log.stack_as_critical("CORE", "Unexpected state")

        text = buffer.getvalue().decode("utf-8")
        assert "CORE : CRITICAL : Unexpected state\nStack (most recent call last):" in text

    def test_write_logs_payload(self):
        log, buffer = make_logger()

        assert log.write(b"raw line\n") == 9
        assert log.write("text line") == 9
        log.write("\n")

        assert entries(buffer)[1:] == ["PRINT : INFO : raw line", "PRINT : INFO : text line"]

    def test_print_joins_values(self):
        log, buffer = make_logger()

        log.print("answer", 42)

        assert entries(buffer)[-1] == "PRINT : INFO : answer 42"

    def test_usable_as_progress_console_sink(self, clock):
        log, buffer = make_logger()
        console = ProgressConsole(writer=log, clock=clock)

        console.println("step %d", 3)

        assert entries(buffer)[-1] == "PRINT : INFO : step 3"

    def test_fan_out_stops_at_failing_writer(self):
        class Failing:
            def write(self, data):
                raise OSError("unavailable")

        after = io.BytesIO()
        config = LoggerConfig(log_to_stdout=False, additional_writers=[Failing(), after])

        raise_exceptions = logging.raiseExceptions
        logging.raiseExceptions = False
        try:
            log = Logger(config)
            log.info("A", "lost")
        finally:
            logging.raiseExceptions = raise_exceptions

        assert after.getvalue() == b""

    def test_does_not_touch_root_logger(self, caplog):
        with caplog.at_level(logging.DEBUG):
            log, buffer = make_logger()
            log.info("A", "private")

        assert "private" not in caplog.text


class TestDestinations:

    def test_stdout_destination(self):
        output = io.StringIO()
        config = LoggerConfig(
            format=SIMPLE_FORMAT,
            console=Console(file=output, force_terminal=False, width=200),
        )

        Logger(config).info("A", "to the console")

        assert output.getvalue() == "CBLOG : INFO : Logger initialised\nA : INFO : to the console\n"

    def test_file_destination(self, tmp_path):
        path = tmp_path / "logs" / "app.log"
        config = LoggerConfig(
            format=SIMPLE_FORMAT,
            log_to_stdout=False,
            log_to_file=True,
            file_path=path,
        )

        with Logger(config) as log:
            log.warning("DISK", "almost full")

        assert path.read_text().splitlines() == [
            "CBLOG : INFO : Logger initialised",
            "DISK : WARNING : almost full",
        ]

    def test_file_destination_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        config = LoggerConfig(log_to_stdout=False, log_to_file=True, file_path=blocker / "app.log")

        with pytest.raises(LoggerSetupError):
            Logger(config)

    @pytest.mark.parametrize("flag", ["log_to_file", "log_to_unix_socket"])
    def test_destination_without_path(self, flag):
        config = LoggerConfig(log_to_stdout=False, **{flag: True})

        with pytest.raises(LoggerSetupError, match="is set but"):
            Logger(config)

    def test_missing_socket_drops_silently(self, tmp_path):
        buffer = io.BytesIO()
        config = LoggerConfig(
            format=SIMPLE_FORMAT,
            log_to_stdout=False,
            log_to_unix_socket=True,
            unix_socket_path=tmp_path / "absent.sock",
            additional_writers=[buffer],
        )

        Logger(config).info("A", "still delivered")

        assert entries(buffer)[-1] == "A : INFO : still delivered"

    def test_close_closes_writer_closers(self):
        closer = Closer()
        log = Logger(LoggerConfig(format=SIMPLE_FORMAT, log_to_stdout=False,
                                  additional_writer_closers=[closer]))

        log.close()

        assert closer.closed
        assert closer.data == b"CBLOG : INFO : Logger initialised\n"

    def test_close_collects_all_errors(self):
        first, second, healthy = Closer("boom"), Closer("bang"), Closer()
        log = Logger(LoggerConfig(log_to_stdout=False,
                                  additional_writer_closers=[first, healthy, second]))

        with pytest.raises(LoggerCloseError) as exc_info:
            log.close()

        assert str(exc_info.value) == "boom\nbang"
        assert first.closed and healthy.closed and second.closed


def test_stack_omits_own_frame():
    text = stack()

    assert text.startswith("Stack (most recent call last):\n")
    assert "in test_stack_omits_own_frame" in text
    assert "in stack\n" not in text


def test_caller_location_capture():
    location = CallerLocation.capture()

    assert location.file == __file__
    assert location.function == "test_caller_location_capture"
