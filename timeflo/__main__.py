"""Allow running TimeFlo as a module: python -m timeflo."""

import logging
import os
import signal
import sys

from PyQt6.QtCore import QObject
from PyQt6.QtGui import QGuiApplication

from .errors import SettingsError
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.session import State
from .timer.timer import format_duration
from .audio.alert import AlertPlayer

logger = logging.getLogger("timeflo")


def _configure_logging() -> None:
    level = os.environ.get("TIMEFLO_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def build_engine(parent: QObject | None, settings: Settings) -> TimerEngine:
    """Engine for this console host.

    There is no input surface to press "begin", so tasks always
    auto-start here and the ``auto_start_task`` setting does not apply.
    """
    return TimerEngine(
        parent,
        preferences=settings.to_preferences(),
        auto_start_task=True,
        poll_interval_ms=settings.poll_interval_ms,
    )


def save_on_quit(settings: Settings) -> bool:
    """Persist settings; a failure is logged, never raised into Qt."""
    try:
        save_settings(settings)
    except SettingsError as exc:
        logger.warning("Could not save settings: %s", exc)
        return False
    return True


def main() -> None:
    _configure_logging()
    settings = load_settings()

    app = QGuiApplication(sys.argv)
    app.setApplicationName("TimeFlo")
    app.setOrganizationName("TimeFlo")

    # Ctrl+C ends the Qt loop
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    engine = build_engine(app, settings)

    player = AlertPlayer(app)
    player.set_enabled(settings.sound_enabled)
    player.set_volume(settings.sound_volume)

    def on_completed(finished: State) -> None:
        logger.info(finished.completion_message)
        player.play_for(finished)

    def on_state_changed(state: State) -> None:
        timer = engine.session.timer
        remaining = format_duration(timer.remaining()) if timer else "--:--"
        logger.info("%s  %s", state.label, remaining)

    engine.interval_completed.connect(on_completed)
    engine.state_changed.connect(on_state_changed)
    app.aboutToQuit.connect(engine.stop)
    app.aboutToQuit.connect(lambda: save_on_quit(settings))

    engine.begin()
    logger.info("TimeFlo ready!")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
