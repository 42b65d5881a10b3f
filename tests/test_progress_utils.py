"""Tests for progress helpers and configuration."""

import io
import logging
import time

import pytest

from cblog.progress import (
    ProgressMode,
    create_progress_console,
    format_duration,
    format_elapsed,
    format_timestamp,
    get_config,
    parse_progress_mode,
    update_config,
)


@pytest.mark.parametrize("ns, expected", [
    (0, "0s"),
    (1, "1ns"),
    (350, "350ns"),
    (1_500, "1.5µs"),
    (12_300_000, "12.3ms"),
    (500_000_000, "500ms"),
    (2_500_000_000, "2.5s"),
    (65_000_000_000, "1m5s"),
    (3_603_000_000_000, "1h0m3s"),
    (-2_000_000_000, "-2s"),
    (999, "999ns"),
    (999_999, "999.999µs"),
    (999_999_999, "999.999999ms"),
    (1_000_000_000, "1s"),
    (59_999_999_999, "59.999999999s"),
    (3_600_000_000_000, "1h0m0s"),
])
def test_format_duration(ns, expected):
    assert format_duration(ns) == expected


def test_format_elapsed_rounds_to_seconds():
    assert format_elapsed(3.4) == "00:03"
    assert format_elapsed(65) == "01:05"
    assert format_elapsed(3725) == "1:02:05"


def test_format_timestamp_uses_configured_format():
    update_config(date_time_format="%Y")

    assert format_timestamp(0) == time.strftime("%Y", time.localtime(0))


def test_format_timestamp_explicit_format():
    assert format_timestamp(0, "%H") == time.strftime("%H", time.localtime(0))


def test_update_config_rejects_unknown_option():
    with pytest.raises(ValueError, match="Unknown configuration option"):
        update_config(no_such_option=1)


def test_update_config_changes_global_config():
    update_config(auto_print_interval=0.5)

    assert get_config().auto_print_interval == 0.5


class TtySink(io.StringIO):
    def isatty(self):
        return True


class TestCreateProgressConsole:

    def test_append_mode(self):
        console = create_progress_console("append", writer=TtySink())
        assert console.replace is False

    def test_replace_mode(self):
        console = create_progress_console("REPLACE", writer=io.StringIO())
        assert console.replace is True

    def test_auto_mode_replaces_on_terminal(self):
        assert create_progress_console("auto", writer=TtySink()).replace is True
        assert create_progress_console("auto", writer=io.StringIO()).replace is False

    def test_flags_are_passed_through(self):
        console = create_progress_console("append", limit=True, track_progress=True, writer=io.StringIO())
        assert console.limit is True
        assert console.track_progress is True

    def test_invalid_mode_falls_back_to_auto(self, caplog):
        with caplog.at_level(logging.WARNING):
            mode = parse_progress_mode("sideways")

        assert mode == ProgressMode.AUTO
        assert "Invalid progress mode 'sideways'" in caplog.text
