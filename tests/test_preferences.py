"""Tests for tb.core.preferences: defaults, partial files and the save/load round-trip."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path

os.environ.setdefault("TIMERBAR_HOME", tempfile.mkdtemp(prefix="timerbar_tests_"))


class TestPreferenceStore(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / "preferences.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, data):
        with open(self.path, "w", encoding="utf-8") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)

    def test_first_run_returns_defaults(self):
        from tb.core.modes import DisplayMode
        from tb.core.preferences import PreferenceStore
        prefs = PreferenceStore(self.path).load()
        self.assertEqual(prefs.work_minutes, 25)
        self.assertEqual(prefs.break_minutes, 5)
        self.assertEqual(prefs.display_mode, DisplayMode.TIME)
        self.assertTrue(prefs.notifications_enabled)
        self.assertTrue(prefs.one_minute_warning_enabled)
        self.assertTrue(prefs.paused)
        self.assertFalse(self.path.exists())

    def test_save_then_load_roundtrip(self):
        from tb.core.modes import DisplayMode
        from tb.core.preferences import Preferences, PreferenceStore
        store = PreferenceStore(self.path)
        prefs = Preferences(
            work_minutes=45,
            break_minutes=15,
            display_mode=DisplayMode.PROGRESS,
            notifications_enabled=False,
            one_minute_warning_enabled=False,
            paused=False,
        )
        store.save(prefs)
        self.assertEqual(store.load(), prefs)

    def test_saved_keys_match_persisted_layout(self):
        from tb.core.preferences import Preferences, PreferenceStore
        PreferenceStore(self.path).save(Preferences())
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data, {
            "workMinutes": 25,
            "breakMinutes": 5,
            "displayMode": "time",
            "notificationsEnabled": True,
            "oneMinuteWarningEnabled": True,
            "pausedState": True,
        })

    def test_missing_keys_fall_back_to_defaults(self):
        from tb.core.modes import DisplayMode
        from tb.core.preferences import PreferenceStore
        self._write({"workMinutes": 50, "displayMode": "progress"})
        prefs = PreferenceStore(self.path).load()
        self.assertEqual(prefs.work_minutes, 50)
        self.assertEqual(prefs.break_minutes, 5)
        self.assertEqual(prefs.display_mode, DisplayMode.PROGRESS)
        self.assertTrue(prefs.paused)

    def test_wrong_types_fall_back_to_defaults(self):
        from tb.core.modes import DisplayMode
        from tb.core.preferences import PreferenceStore
        self._write({
            "workMinutes": "lots",
            "breakMinutes": True,
            "displayMode": "sundial",
            "notificationsEnabled": "yes",
            "pausedState": 0,
        })
        prefs = PreferenceStore(self.path).load()
        self.assertEqual(prefs.work_minutes, 25)
        self.assertEqual(prefs.break_minutes, 5)
        self.assertEqual(prefs.display_mode, DisplayMode.TIME)
        self.assertTrue(prefs.notifications_enabled)
        self.assertTrue(prefs.paused)

    def test_non_positive_minutes_are_clamped(self):
        from tb.core.preferences import PreferenceStore
        self._write({"workMinutes": 0, "breakMinutes": -4})
        prefs = PreferenceStore(self.path).load()
        self.assertEqual(prefs.work_minutes, 1)
        self.assertEqual(prefs.break_minutes, 1)

    def test_corrupt_file_returns_defaults(self):
        from tb.core.preferences import Preferences, PreferenceStore
        self._write("{not json!!")
        self.assertEqual(PreferenceStore(self.path).load(), Preferences())

    def test_non_object_file_returns_defaults(self):
        from tb.core.preferences import Preferences, PreferenceStore
        self._write([1, 2, 3])
        self.assertEqual(PreferenceStore(self.path).load(), Preferences())

    def test_save_creates_parent_directory(self):
        from tb.core.preferences import Preferences, PreferenceStore
        nested = Path(self.tmpdir) / "a" / "b" / "preferences.json"
        PreferenceStore(nested).save(Preferences(work_minutes=30))
        self.assertEqual(PreferenceStore(nested).load().work_minutes, 30)

    def test_save_failure_is_swallowed(self):
        from tb.core.preferences import Preferences, PreferenceStore
        # A directory where the file should be makes open() fail
        self.path.mkdir()
        PreferenceStore(self.path).save(Preferences())

    def test_clock_writes_through_store(self):
        """Every setting change on the clock lands on disk straight away."""
        from tb.core.modes import DisplayMode
        from tb.core.preferences import PreferenceStore
        from tb.core.session_clock import SessionClock
        store = PreferenceStore(self.path)
        clock = SessionClock(store.load(), save=store.save)

        clock.set_work_duration(40)
        self.assertEqual(store.load().work_minutes, 40)
        clock.set_display_mode(DisplayMode.PROGRESS)
        self.assertEqual(store.load().display_mode, DisplayMode.PROGRESS)
        clock.toggle_pause()
        self.assertFalse(store.load().paused)
        clock.set_one_minute_warning_enabled(False)
        self.assertFalse(store.load().one_minute_warning_enabled)


if __name__ == "__main__":
    unittest.main()
