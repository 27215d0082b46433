"""Application settings with JSON persistence.

Settings are stored at:
    ~/.config/TimeFlo/settings.json

Only preferences are persisted.  Timer and session run-state are never
written, so every launch starts a fresh cycle.

Usage::

    settings = load_settings()
    settings.task_duration = 50 * 60
    save_settings(settings)
    engine.apply_preferences(settings.to_preferences())
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .errors import SettingsError
from .timer.session import Preferences

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / ".config" / "TimeFlo"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# Ranges offered by the preferences controls.
MIN_DURATION = 30             # seconds
MAX_DURATION = 120 * 60
MIN_SHORT_BREAKS = 1
MAX_SHORT_BREAKS = 16


def _clamp(value, low, high):
    return max(low, min(high, value))


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    task_duration: float = 25 * 60         # seconds
    short_break_duration: float = 5 * 60
    long_break_duration: float = 15 * 60
    breaks_before_long: int = 3
    auto_start_task: bool = False

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── host loop ─────────────────────────────────────────────────────
    poll_interval_ms: int = 100

    def to_preferences(self) -> Preferences:
        """Build core preferences, clamped into the supported ranges."""
        return Preferences(
            task_duration=_clamp(float(self.task_duration), MIN_DURATION, MAX_DURATION),
            short_break_duration=_clamp(
                float(self.short_break_duration), MIN_DURATION, MAX_DURATION,
            ),
            long_break_duration=_clamp(
                float(self.long_break_duration), MIN_DURATION, MAX_DURATION,
            ),
            breaks_before_long=_clamp(
                int(self.breaks_before_long), MIN_SHORT_BREAKS, MAX_SHORT_BREAKS,
            ),
        )

    @classmethod
    def from_preferences(cls, preferences: Preferences, **host_options) -> "Settings":
        return cls(
            task_duration=preferences.task_duration,
            short_break_duration=preferences.short_break_duration,
            long_break_duration=preferences.long_break_duration,
            breaks_before_long=preferences.breaks_before_long,
            **host_options,
        )

    def reset_timer_defaults(self) -> None:
        """Restore the four cycle preferences to their defaults."""
        defaults = Preferences()
        self.task_duration = defaults.task_duration
        self.short_break_duration = defaults.short_break_duration
        self.long_break_duration = defaults.long_break_duration
        self.breaks_before_long = defaults.breaks_before_long


def _read_settings(path: Path) -> Settings:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SettingsError(f"could not read {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"{path} does not contain a JSON object")

    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    settings = Settings(**filtered)
    try:
        _validate(settings)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"invalid settings in {path}: {exc}") from exc
    return settings


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(settings: Settings) -> None:
    """Reject values of the wrong type or outside what the host accepts.

    Cycle durations and counts out of range are clamped later by
    ``to_preferences``; only their type is checked here.
    """
    for name in ("task_duration", "short_break_duration", "long_break_duration"):
        if not _is_number(getattr(settings, name)):
            raise TypeError(f"{name} must be a number")
    if not _is_int(settings.breaks_before_long):
        raise TypeError("breaks_before_long must be an integer")
    for name in ("auto_start_task", "sound_enabled"):
        if not isinstance(getattr(settings, name), bool):
            raise TypeError(f"{name} must be true or false")
    if not _is_int(settings.sound_volume):
        raise TypeError("sound_volume must be an integer")
    if not 0 <= settings.sound_volume <= 100:
        raise ValueError("sound_volume must be between 0 and 100")
    if not _is_int(settings.poll_interval_ms):
        raise TypeError("poll_interval_ms must be an integer")
    if settings.poll_interval_ms <= 0:
        raise ValueError("poll_interval_ms must be positive")


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        return _read_settings(SETTINGS_PATH)
    except SettingsError as exc:
        logger.warning("Using default settings: %s", exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON.

    Raises ``SettingsError`` if the file cannot be written.
    """
    try:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(asdict(settings), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise SettingsError(f"could not write {SETTINGS_PATH}: {exc}") from exc
