"""Shared pytest fixtures for TimeFlo tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from timeflo.timer.engine import TimerEngine
from timeflo.timer.session import Preferences, Session

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single Qt application instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real settings directory."""
    monkeypatch.setattr("timeflo.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("timeflo.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def prefs():
    """Short, round durations: task 100 s, breaks 10 s / 30 s, 3 short breaks."""
    return Preferences(
        task_duration=100,
        short_break_duration=10,
        long_break_duration=30,
        breaks_before_long=3,
    )


@pytest.fixture
def session(prefs, clock):
    """Fresh Session in IDLE, task auto-start OFF."""
    return Session(prefs, auto_start_task=False, clock=clock)


@pytest.fixture
def session_auto(prefs, clock):
    """Fresh Session with task auto-start ON."""
    return Session(prefs, auto_start_task=True, clock=clock)


@pytest.fixture
def engine(qapp, prefs, clock):
    """Fresh TimerEngine on a fake clock, task auto-start OFF."""
    return TimerEngine(parent=None, preferences=prefs, clock=clock)
