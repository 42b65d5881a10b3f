"""Shared fixtures for cblog tests."""

import io

import pytest

from cblog.progress.config import ProgressConfig, set_config


class FakeClock:
    """Controllable wall clock for ProgressConsole."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return io.StringIO()


@pytest.fixture(autouse=True)
def reset_progress_config():
    """Each test starts from the default progress configuration."""
    set_config(ProgressConfig())
    yield
    set_config(ProgressConfig())
