"""Stopwatch-style timer for a single interval.

A ``Timer`` measures accumulated *active* time against a fixed target.
Pausing folds the current run into ``accumulated_time`` so progress is
never lost across any number of pause/resume cycles.

Time is read from a monotonic clock (``time.monotonic`` by default) so a
wall-clock adjustment in the middle of a long break cannot corrupt the
elapsed figure.  Tests inject their own clock.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


def format_duration(seconds: float) -> str:
    """``754`` → ``"12:34"``.  Fractional seconds are truncated."""
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m:02d}:{s:02d}"


class Timer:
    """Accumulating interval timer.

    ``running_since`` is ``None`` while paused or before the first start.
    All operations are total; there is nothing to raise.
    """

    def __init__(
        self,
        target_duration: float = 0.0,
        *,
        accumulated_time: float = 0.0,
        clock: Clock = time.monotonic,
    ) -> None:
        self._clock = clock
        self.target_duration: float = target_duration
        self.accumulated_time: float = accumulated_time
        self.running_since: float | None = None

    # ── controls ──────────────────────────────────────────────────────

    def start_or_resume(self) -> None:
        if self.running_since is None:
            self.running_since = self._clock()

    def pause(self) -> None:
        if self.running_since is not None:
            self.accumulated_time += self._current_run()
            self.running_since = None

    def retarget(self, new_duration: float) -> None:
        """Change the target without touching progress or run state."""
        self.target_duration = new_duration

    # ── queries ───────────────────────────────────────────────────────

    def elapsed(self) -> float:
        return self.accumulated_time + self._current_run()

    def remaining(self) -> float:
        return max(0.0, self.target_duration - self.elapsed())

    def has_started(self) -> bool:
        return self.elapsed() > 0

    def is_over(self) -> bool:
        return self.elapsed() >= self.target_duration

    def is_running(self) -> bool:
        return self.running_since is not None

    def is_paused(self) -> bool:
        """True only for a timer that has run and is now stopped.

        A never-started timer is neither running nor paused.
        """
        return self.running_since is None and self.has_started()

    # ── internals ─────────────────────────────────────────────────────

    def _current_run(self) -> float:
        if self.running_since is None:
            return 0.0
        # elapsed must never decrease, even with an injected clock
        return max(0.0, self._clock() - self.running_since)

    def __str__(self) -> str:
        return format_duration(self.remaining())

    def __repr__(self) -> str:
        return (
            f"<Timer target={self.target_duration:g}s "
            f"elapsed={self.elapsed():g}s running={self.is_running()}>"
        )
