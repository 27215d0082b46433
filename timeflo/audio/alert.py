"""Completion alert sounds, synthesized with numpy and played by Qt.

Sounds are generated as WAV files with sine waves shaped by an ADSR
envelope, then cached to disk so later launches only load them.

Sound names
-----------
- ``task_complete`` — bright ascending arpeggio, the task is done
- ``break_over``    — soft bell, back to work

The alert is a best-effort side channel.  Failing to write or load a
sound is logged and never reaches the timer core.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..errors import AlertError
from ..settings import APP_SUPPORT_DIR
from ..timer.session import State

logger = logging.getLogger(__name__)


SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"
SAMPLE_RATE = 44100

SOUND_NAMES = ("task_complete", "break_over")


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(sustain_level, 0.0, length - r_start)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """float64 samples in -1..1 → 16-bit mono PCM WAV."""
    int_samples = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def generate_task_complete() -> bytes:
    """C5→E5→G5→C6, last note held."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        tone = _sine(freq, 0.35 if last else 0.10) * 0.5
        if last:
            env = _make_envelope(len(tone), attack=80, decay=300, sustain_level=0.5, release=600)
        else:
            env = _make_envelope(len(tone), attack=60, decay=150, sustain_level=0.3, release=200)
        parts.append(tone * env)
        if not last:
            parts.append(np.zeros(int(SAMPLE_RATE * 0.02)))
    return _to_wav_bytes(np.concatenate(parts))


def generate_break_over() -> bytes:
    """A4 bell with an octave overtone, slow attack and long decay."""
    duration = 1.0
    combined = _sine(440.0, duration) * 0.35 + _sine(880.0, duration) * 0.08
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.08),
        decay=int(SAMPLE_RATE * 0.3),
        sustain_level=0.25,
        release=int(SAMPLE_RATE * 0.55),
    )
    return _to_wav_bytes(combined * env)


_GENERATORS = {
    "task_complete": generate_task_complete,
    "break_over": generate_break_over,
}


def sound_for(finished: State) -> str | None:
    """Which sound marks the end of an interval of this kind."""
    if finished == State.TASK:
        return "task_complete"
    if finished.is_break:
        return "break_over"
    return None


# ═══════════════════════════════════════════════════════════════════════════
#  PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class AlertPlayer(QObject):
    """Plays the completion alert for a finished interval.

    Usage::

        player = AlertPlayer(parent=self)
        player.set_volume(70)
        engine.interval_completed.connect(player.play_for)

    WAV files and ``QSoundEffect`` objects are created on first use.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

    # ── public API ────────────────────────────────────────────────────

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> bool:
        """Play a sound by name.  Returns whether playback was started."""
        if not self._enabled or name not in _GENERATORS:
            return False
        try:
            effect = self._effect(name)
        except AlertError as exc:
            logger.warning("Could not play sound: %s", exc)
            return False
        effect.play()
        return True

    def play_for(self, finished: State) -> bool:
        name = sound_for(finished)
        if name is None:
            return False
        return self.play(name)

    # ── internal ──────────────────────────────────────────────────────

    def ensure_wav(self, name: str) -> Path:
        """Write the cached WAV for *name* if it is missing."""
        path = self._sounds_dir / f"{name}.wav"
        try:
            if not path.exists():
                self._sounds_dir.mkdir(parents=True, exist_ok=True)
                path.write_bytes(_GENERATORS[name]())
        except OSError as exc:
            raise AlertError(f"cannot cache {path}: {exc}") from exc
        return path

    def _effect(self, name: str) -> QSoundEffect:
        effect = self._effects.get(name)
        if effect is None:
            path = self.ensure_wav(name)
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
        return effect
