"""Wires the clock, preference store and notification policy together for whichever UI hosts them."""

from collections.abc import Callable
from tb.common.logger import log
from tb.core.modes import DisplayMode
from tb.core.notifications import NotificationPolicy
from tb.core.preferences import PreferenceStore
from tb.core.session_clock import SessionClock
from tb.util.misc import clamp_minutes


class TimerController:
    """Owns one SessionClock and routes heartbeats and user actions into it.

    ``render(status, paused)`` is called every time the visible state may have changed: after each heartbeat and
    after every user action.
    """

    def __init__(self, store: PreferenceStore, notifier, render: Callable[[str, bool], None] | None = None):
        self.store = store
        self.policy = NotificationPolicy(notifier)
        self._render = render
        self.clock = SessionClock(
            store.load(),
            save=store.save,
            on_change=self.refresh,
            on_notifications_disabled=self.policy.clear,
        )
        self.policy.clock = self.clock

    @property
    def pause_label(self):
        return "Resume" if self.clock.paused else "Pause"

    @property
    def pause_tooltip(self):
        return "Resume the timer" if self.clock.paused else "Pause the timer"

    def refresh(self):
        if self._render is not None:
            self._render(self.clock.format_status(), self.clock.paused)

    def heartbeat(self):
        event = self.clock.tick()
        if event is not None:
            self.policy.dispatch(event)
        self.refresh()
        return event

    # Menu actions
    def start_work(self):
        self.clock.start_work()

    def start_break(self):
        self.clock.start_break()

    def toggle_pause(self):
        self.clock.toggle_pause()

    def settings(self):
        """Current values for the settings dialog."""
        return {
            "work_minutes": self.clock.work_minutes,
            "break_minutes": self.clock.break_minutes,
            "display_mode": self.clock.display_mode,
            "notifications_enabled": self.clock.notifications_enabled,
            "one_minute_warning_enabled": self.clock.one_minute_warning_enabled,
        }

    def apply_settings(
        self,
        work_minutes: int,
        break_minutes: int,
        display_mode: DisplayMode,
        notifications_enabled: bool,
        one_minute_warning_enabled: bool,
    ):
        """Push the settings dialog's values into the clock. Only values that actually changed are set, so an
        unchanged work duration does not restart the running work session."""
        clock = self.clock
        changed = []
        if clamp_minutes(work_minutes) != clock.work_minutes:
            clock.set_work_duration(work_minutes)
            changed.append("work_minutes")
        if clamp_minutes(break_minutes) != clock.break_minutes:
            clock.set_break_duration(break_minutes)
            changed.append("break_minutes")
        if display_mode is not clock.display_mode:
            clock.set_display_mode(display_mode)
            changed.append("display_mode")
        if bool(notifications_enabled) != clock.notifications_enabled:
            clock.set_notifications_enabled(notifications_enabled)
            changed.append("notifications_enabled")
        if bool(one_minute_warning_enabled) != clock.one_minute_warning_enabled:
            clock.set_one_minute_warning_enabled(one_minute_warning_enabled)
            changed.append("one_minute_warning_enabled")

        if changed:
            log.info(f"Applied settings: {', '.join(changed)}")
        return changed
