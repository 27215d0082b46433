"""Audio package."""

from .alert import AlertPlayer, SOUND_NAMES, sound_for

__all__ = ["AlertPlayer", "SOUND_NAMES", "sound_for"]
