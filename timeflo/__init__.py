"""TimeFlo: a Pomodoro session manager."""

from .timer import Preferences, Session, State, Timer, TimerEngine

__version__ = "0.1.0"

__all__ = ["Preferences", "Session", "State", "Timer", "TimerEngine", "__version__"]
