"""Timer package."""

from .timer import Timer, format_duration
from .session import (
    Session,
    SessionSnapshot,
    SessionState,
    State,
    Preferences,
    Idle,
    Interval,
    Task,
    ShortBreak,
    LongBreak,
)
from .engine import TimerEngine, POLL_INTERVAL_MS

__all__ = [
    "Timer",
    "format_duration",
    "Session",
    "SessionSnapshot",
    "SessionState",
    "State",
    "Preferences",
    "Idle",
    "Interval",
    "Task",
    "ShortBreak",
    "LongBreak",
    "TimerEngine",
    "POLL_INTERVAL_MS",
]
