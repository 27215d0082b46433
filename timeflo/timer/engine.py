"""Qt host driver for the TimeFlo session.

The ``Session`` is a pure, poll-driven state machine.  ``TimerEngine``
is the piece of host glue that polls it from the Qt event loop and turns
what it sees into signals for display, sound and logging.

Poll loop
---------
Every ``poll_interval_ms`` the engine asks ``Session.tick()`` whether the
active interval just finished.  If so it emits ``interval_completed``
*once*, advances the cycle and emits ``state_changed``.  While a timer is
running it also emits ``tick`` with the seconds remaining.
"""

from __future__ import annotations

import logging
import time

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .session import Preferences, Session, State
from .timer import Clock

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

POLL_INTERVAL_MS = 100


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Polls a ``Session`` and reports what happens to it.

    Signals
    -------
    tick(remaining_seconds: float)
        Emitted on each poll while the active timer is running.
    state_changed(new_state: State)
        Emitted after every transition and after pause/resume.
    interval_completed(finished: State)
        Emitted exactly once per interval that runs to completion
        (never for skipped intervals), before the cycle advances.
    """

    tick = pyqtSignal(float)
    state_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        preferences: Preferences | None = None,
        auto_start_task: bool = False,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        clock: Clock = time.monotonic,
    ) -> None:
        super().__init__(parent)

        self._session = Session(
            preferences,
            auto_start_task=auto_start_task,
            clock=clock,
        )

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(poll_interval_ms)
        self._qt_timer.timeout.connect(self._on_poll)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> State:
        return self._session.kind

    @property
    def is_polling(self) -> bool:
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def begin(self) -> None:
        """Leave IDLE for the first task interval and start polling.

        A no-op once the cycle is under way.
        """
        if self._session.kind != State.IDLE:
            return
        self._session.advance()
        self.state_changed.emit(self._session.kind)
        self._qt_timer.start()

    def start_or_resume(self) -> None:
        timer = self._session.timer
        if timer is None or timer.is_running():
            return
        self._session.start_or_resume()
        self.state_changed.emit(self._session.kind)

    def pause(self) -> None:
        timer = self._session.timer
        if timer is None or not timer.is_running():
            return
        self._session.pause()
        self.state_changed.emit(self._session.kind)

    def skip(self) -> None:
        """Move on without completing; no completion alert fires."""
        if self._session.kind == State.IDLE:
            self.begin()
            return
        skipped = self._session.kind
        self._session.skip()
        logger.info("Skipped %s", skipped.label.lower())
        self.state_changed.emit(self._session.kind)

    def apply_preferences(self, preferences: Preferences) -> None:
        self._session.apply_new_preferences(preferences)
        timer = self._session.timer
        if timer is not None:
            self.tick.emit(timer.remaining())

    def stop(self) -> None:
        """Stop polling (application shutdown)."""
        self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — poll loop
    # ══════════════════════════════════════════════════════════════════

    def _on_poll(self) -> None:
        session = self._session
        if session.tick():
            finished = session.kind
            logger.info("%s finished", finished.label)
            self.interval_completed.emit(finished)
            session.advance()
            self.state_changed.emit(session.kind)

        timer = session.timer
        if timer is not None and timer.is_running():
            self.tick.emit(timer.remaining())
