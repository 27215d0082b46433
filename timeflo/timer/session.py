"""Session state machine for TimeFlo.

States
------
IDLE          Before the first interval.  Carries no timer.
TASK          Work interval.
SHORT_BREAK   Short break interval (always auto-started).
LONG_BREAK    Long break interval (always auto-started).

Transitions (``advance``)
-------------------------
IDLE → TASK
TASK → SHORT_BREAK            while short_break_count < breaks_before_long
TASK → LONG_BREAK             otherwise; short_break_count resets to 0
SHORT_BREAK | LONG_BREAK → TASK

Nothing returns to IDLE and the cycle has no terminal state.  Every
entered interval gets a fresh ``Timer``.  Whether TASK auto-starts is the
``auto_start_task`` policy; with it off the host shows a "begin" action.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .timer import Clock, Timer

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class State(Enum):
    IDLE = "idle"
    TASK = "task"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self in (State.SHORT_BREAK, State.LONG_BREAK)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def completion_message(self) -> str:
        """Alert text for when an interval of this kind finishes."""
        return _COMPLETION_MESSAGES[self]

    def __str__(self) -> str:
        return self.label


_LABELS: dict[State, str] = {
    State.IDLE: "Idle",
    State.TASK: "Task period",
    State.SHORT_BREAK: "Short break",
    State.LONG_BREAK: "Long break",
}

_COMPLETION_MESSAGES: dict[State, str] = {
    State.IDLE: "",
    State.TASK: "Time to take a break! \U0001F389",
    State.SHORT_BREAK: "Your short break is over.",
    State.LONG_BREAK: "Your long break is over.",
}


# ── preferences ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Preferences:
    """Interval durations (seconds) and cycle length.

    The host validates values before handing them over; see
    ``Settings.to_preferences``.
    """

    task_duration: float = 25 * 60
    short_break_duration: float = 5 * 60
    long_break_duration: float = 15 * 60
    breaks_before_long: int = 3

    def duration_for(self, state: State) -> float:
        if state == State.TASK:
            return self.task_duration
        if state == State.SHORT_BREAK:
            return self.short_break_duration
        if state == State.LONG_BREAK:
            return self.long_break_duration
        return 0.0


# ── state variants ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[State] = State.IDLE


@dataclass(frozen=True)
class Interval:
    """Base for the states that own a timer."""

    kind: ClassVar[State]
    timer: Timer


@dataclass(frozen=True)
class Task(Interval):
    kind: ClassVar[State] = State.TASK


@dataclass(frozen=True)
class ShortBreak(Interval):
    kind: ClassVar[State] = State.SHORT_BREAK


@dataclass(frozen=True)
class LongBreak(Interval):
    kind: ClassVar[State] = State.LONG_BREAK


SessionState = Union[Idle, Task, ShortBreak, LongBreak]

_VARIANTS: dict[State, type[Interval]] = {
    State.TASK: Task,
    State.SHORT_BREAK: ShortBreak,
    State.LONG_BREAK: LongBreak,
}


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for display code."""

    kind: State
    remaining: float | None
    elapsed: float | None
    is_running: bool
    is_paused: bool
    has_started: bool
    is_over: bool
    short_break_count: int
    awaiting_begin: bool


# ── session ───────────────────────────────────────────────────────────────


class Session:
    """The Idle/Task/ShortBreak/LongBreak cycle and its active timer.

    Owned by the host's event loop; not thread-safe.
    """

    def __init__(
        self,
        preferences: Preferences | None = None,
        *,
        auto_start_task: bool = False,
        clock: Clock = time.monotonic,
    ) -> None:
        self._preferences: Preferences = preferences or Preferences()
        self._auto_start_task: bool = auto_start_task
        self._clock = clock
        self._state: SessionState = Idle()
        self._short_break_count: int = 0
        self._completion_reported: bool = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def kind(self) -> State:
        return self._state.kind

    @property
    def timer(self) -> Timer | None:
        """The active interval's timer, or ``None`` while idle."""
        if isinstance(self._state, Interval):
            return self._state.timer
        return None

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    @property
    def short_break_count(self) -> int:
        """Short breaks entered since the last long break."""
        return self._short_break_count

    @property
    def auto_start_task(self) -> bool:
        return self._auto_start_task

    @auto_start_task.setter
    def auto_start_task(self, value: bool) -> None:
        self._auto_start_task = value

    @property
    def awaiting_begin(self) -> bool:
        """A task interval that the user has not begun yet."""
        timer = self.timer
        return (
            self.kind == State.TASK
            and timer is not None
            and not timer.is_running()
            and not timer.has_started()
        )

    def next_state(self) -> State:
        """The state ``advance`` would enter from here."""
        if self.kind == State.TASK:
            if self._short_break_count < self._preferences.breaks_before_long:
                return State.SHORT_BREAK
            return State.LONG_BREAK
        return State.TASK

    def snapshot(self) -> SessionSnapshot:
        timer = self.timer
        if timer is None:
            return SessionSnapshot(
                kind=self.kind,
                remaining=None,
                elapsed=None,
                is_running=False,
                is_paused=False,
                has_started=False,
                is_over=False,
                short_break_count=self._short_break_count,
                awaiting_begin=False,
            )
        return SessionSnapshot(
            kind=self.kind,
            remaining=timer.remaining(),
            elapsed=timer.elapsed(),
            is_running=timer.is_running(),
            is_paused=timer.is_paused(),
            has_started=timer.has_started(),
            is_over=timer.is_over(),
            short_break_count=self._short_break_count,
            awaiting_begin=self.awaiting_begin,
        )

    # ══════════════════════════════════════════════════════════════════
    #  COMMANDS
    # ══════════════════════════════════════════════════════════════════

    def advance(self) -> SessionState:
        """Enter the next state of the cycle with a fresh timer."""
        target = self.next_state()
        timer = Timer(self._preferences.duration_for(target), clock=self._clock)

        if target == State.SHORT_BREAK:
            self._short_break_count += 1
        elif target == State.LONG_BREAK:
            self._short_break_count = 0

        if target.is_break or self._auto_start_task:
            timer.start_or_resume()

        previous = self.kind
        self._state = _VARIANTS[target](timer)
        self._completion_reported = False
        logger.debug(
            "%s -> %s (short breaks: %d)",
            previous.value, target.value, self._short_break_count,
        )
        return self._state

    def skip(self) -> SessionState:
        """Advance regardless of whether the interval is over."""
        return self.advance()

    def start_or_resume(self) -> None:
        timer = self.timer
        if timer is not None:
            timer.start_or_resume()

    def pause(self) -> None:
        timer = self.timer
        if timer is not None:
            timer.pause()

    resume_active = start_or_resume
    pause_active = pause

    def tick(self) -> bool:
        """Poll the active timer.

        Returns ``True`` on the first poll after the interval completes
        and ``False`` on every other poll, so completion effects fire
        exactly once per interval.
        """
        timer = self.timer
        if timer is None or self._completion_reported:
            return False
        if timer.is_over():
            self._completion_reported = True
            return True
        return False

    def apply_new_preferences(self, preferences: Preferences) -> None:
        """Swap preferences and retarget the active timer in place."""
        self._preferences = preferences
        timer = self.timer
        if timer is not None:
            timer.retarget(preferences.duration_for(self.kind))
            # a longer target can re-open an interval that was already over
            if not timer.is_over():
                self._completion_reported = False
