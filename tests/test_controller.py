"""End-to-end tests: controller wiring of clock, store, policy and renderer."""

import os
import shutil
import tempfile
import unittest
from pathlib import Path

os.environ.setdefault("TIMERBAR_HOME", tempfile.mkdtemp(prefix="timerbar_tests_"))


class FakeNotifier:

    def __init__(self):
        self.delivered = []
        self.clears = 0

    def deliver(self, title, body):
        self.delivered.append((title, body))

    def clear(self):
        self.clears += 1


class TestTimerController(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / "preferences.json"
        self.frames = []

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _controller(self, prefs=None):
        from tb.core.controller import TimerController
        from tb.core.preferences import PreferenceStore
        store = PreferenceStore(self.path)
        if prefs is not None:
            store.save(prefs)
        notifier = FakeNotifier()
        controller = TimerController(store, notifier, render=lambda status, paused: self.frames.append((status, paused)))
        return controller, store, notifier

    def test_initial_refresh_renders_paused_status(self):
        controller, *_ = self._controller()
        controller.refresh()
        self.assertEqual(self.frames, [("25:00", True)])
        self.assertEqual(controller.pause_label, "Resume")

    def test_heartbeat_renders_even_when_paused(self):
        controller, *_ = self._controller()
        self.assertIsNone(controller.heartbeat())
        self.assertEqual(self.frames[-1], ("25:00", True))

    def test_start_work_renders_and_persists(self):
        controller, store, _ = self._controller()
        controller.start_work()
        self.assertEqual(self.frames[-1], ("25:00", False))
        self.assertFalse(store.load().paused)
        self.assertEqual(controller.pause_label, "Pause")
        controller.heartbeat()
        self.assertEqual(self.frames[-1], ("24:59", False))

    def test_session_complete_delivers_notification(self):
        from tb.core.preferences import Preferences
        from tb.core.session_clock import SessionComplete
        controller, _, notifier = self._controller(Preferences(work_minutes=1, break_minutes=3))
        controller.start_work()
        for _ in range(60):
            controller.heartbeat()
        event = controller.heartbeat()
        self.assertIsInstance(event, SessionComplete)
        self.assertEqual(notifier.delivered, [("Work Session Complete", "Time for a break (3 min).")])
        self.assertEqual(self.frames[-1], ("03:00", False))

    def test_one_minute_warning_delivered(self):
        from tb.core.preferences import Preferences
        controller, _, notifier = self._controller(Preferences(work_minutes=2))
        controller.start_work()
        for _ in range(60):
            controller.heartbeat()
        self.assertEqual(notifier.delivered, [("Work Almost Done", "1 minute remaining")])

    def test_restart_restores_settings(self):
        from tb.core.modes import DisplayMode
        controller, *_ = self._controller()
        controller.apply_settings(
            work_minutes=30,
            break_minutes=6,
            display_mode=DisplayMode.PROGRESS,
            notifications_enabled=True,
            one_minute_warning_enabled=False,
        )
        controller.toggle_pause()

        restarted, *_ = self._controller()
        clock = restarted.clock
        self.assertEqual(clock.work_minutes, 30)
        self.assertEqual(clock.break_minutes, 6)
        self.assertEqual(clock.display_mode, DisplayMode.PROGRESS)
        self.assertFalse(clock.one_minute_warning_enabled)
        self.assertFalse(clock.paused)

    def test_apply_settings_only_touches_changed_values(self):
        controller, *_ = self._controller()
        controller.start_work()
        for _ in range(10):
            controller.heartbeat()
        settings = controller.settings()
        changed = controller.apply_settings(**settings)
        self.assertEqual(changed, [])
        self.assertEqual(controller.clock.remaining_seconds, 25 * 60 - 10)

        settings["break_minutes"] = 8
        self.assertEqual(controller.apply_settings(**settings), ["break_minutes"])
        self.assertEqual(controller.clock.remaining_seconds, 25 * 60 - 10)

    def test_disabling_notifications_in_settings_clears(self):
        controller, _, notifier = self._controller()
        settings = controller.settings()
        settings["notifications_enabled"] = False
        controller.apply_settings(**settings)
        self.assertEqual(notifier.clears, 1)


if __name__ == "__main__":
    unittest.main()
