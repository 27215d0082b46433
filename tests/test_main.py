"""Tests for the console host wiring in ``python -m timeflo``."""

from __future__ import annotations

import pytest

from timeflo.__main__ import build_engine, save_on_quit
import timeflo.settings as settings_mod
from timeflo.settings import Settings, load_settings
from timeflo.timer.session import State


# ═══════════════════════════════════════════════════════════════════════
#  SAVE ON QUIT
# ═══════════════════════════════════════════════════════════════════════


class TestSaveOnQuit:

    def test_saves(self):
        assert save_on_quit(Settings(sound_volume=15)) is True
        assert load_settings().sound_volume == 15

    def test_unwritable_dir_logged_not_raised(self, tmp_path, monkeypatch, caplog):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        monkeypatch.setattr("timeflo.settings.APP_SUPPORT_DIR", blocker)
        monkeypatch.setattr("timeflo.settings.SETTINGS_PATH", blocker / "settings.json")

        with caplog.at_level("WARNING", logger="timeflo"):
            assert save_on_quit(Settings()) is False
        assert "Could not save settings" in caplog.text
        assert not settings_mod.SETTINGS_PATH.exists()


# ═══════════════════════════════════════════════════════════════════════
#  ENGINE
# ═══════════════════════════════════════════════════════════════════════


class TestBuildEngine:

    @pytest.mark.parametrize("auto_start_task", [False, True])
    def test_tasks_always_auto_start(self, qapp, auto_start_task):
        engine = build_engine(None, Settings(auto_start_task=auto_start_task))
        engine.begin()
        assert engine.state == State.TASK
        assert engine.session.timer.is_running() is True
        engine.stop()

    def test_uses_settings(self, qapp):
        engine = build_engine(
            None, Settings(task_duration=600, poll_interval_ms=250),
        )
        assert engine._qt_timer.interval() == 250
        assert engine.session.preferences.task_duration == 600
