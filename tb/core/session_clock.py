"""Work/break session clock: pure logic, no UI.

The clock is driven by a 1 second heartbeat from whoever hosts it. Every call, heartbeat or user action, is expected
to arrive on the same thread (the Qt event loop in the app), so there is no locking here.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import assert_never
from tb.common.logger import log
from tb.core.modes import DisplayMode, SessionKind
from tb.core.preferences import Preferences
from tb.util.misc import clamp_minutes, format_clock, format_progress

WARNING_AT_SECONDS = 60


@dataclass(frozen=True)
class SessionComplete:
    finished_kind: SessionKind


@dataclass(frozen=True)
class OneMinuteWarning:
    kind: SessionKind


TickEvent = SessionComplete | OneMinuteWarning


def _noop(*_args):
    pass


class SessionClock:
    """Single owner of the runtime timer state.

    Collaborators are injected rather than looked up:
      * ``save(prefs)`` is called after every change to a persisted field.
      * ``on_change()`` is called whenever the status line should be redrawn outside of a tick.
      * ``on_notifications_disabled()`` is called when notifications get switched off, so already delivered
        notifications can be retracted.
    """

    def __init__(
        self,
        prefs: Preferences | None = None,
        save: Callable[[Preferences], None] | None = None,
        on_change: Callable[[], None] | None = None,
        on_notifications_disabled: Callable[[], None] | None = None,
    ):
        prefs = prefs or Preferences()
        self._save = save or _noop
        self._on_change = on_change or _noop
        self._on_notifications_disabled = on_notifications_disabled or _noop

        self.work_duration_seconds = clamp_minutes(prefs.work_minutes) * 60
        self.break_duration_seconds = clamp_minutes(prefs.break_minutes) * 60
        self.display_mode = prefs.display_mode
        self.notifications_enabled = prefs.notifications_enabled
        self.one_minute_warning_enabled = prefs.one_minute_warning_enabled
        self.paused = prefs.paused

        # Always come back up at the top of a work session
        self.session_kind = SessionKind.WORK
        self.remaining_seconds = self.work_duration_seconds
        self.one_minute_warning_sent = False

        log.debug(f"Initialized clock: work={self.work_duration_seconds}s break={self.break_duration_seconds}s paused={self.paused}")

    #region === Derived values ===

    @property
    def work_minutes(self):
        return self.work_duration_seconds // 60

    @property
    def break_minutes(self):
        return self.break_duration_seconds // 60

    def duration_for(self, kind: SessionKind):
        match kind:
            case SessionKind.WORK:
                return self.work_duration_seconds
            case SessionKind.BREAK:
                return self.break_duration_seconds
            case _:
                assert_never(kind)

    @property
    def total_seconds(self):
        return self.duration_for(self.session_kind)

    def preferences(self) -> Preferences:
        return Preferences(
            work_minutes=self.work_minutes,
            break_minutes=self.break_minutes,
            display_mode=self.display_mode,
            notifications_enabled=self.notifications_enabled,
            one_minute_warning_enabled=self.one_minute_warning_enabled,
            paused=self.paused,
        )

    def format_status(self):
        match self.display_mode:
            case DisplayMode.TIME:
                return format_clock(self.remaining_seconds)
            case DisplayMode.PROGRESS:
                total = self.total_seconds
                return format_progress(total - self.remaining_seconds, total)
            case _:
                assert_never(self.display_mode)

    #endregion === Derived values ===

    #region === Heartbeat ===

    def tick(self) -> TickEvent | None:
        if self.paused:
            return None

        if self.remaining_seconds > 0:
            self.remaining_seconds -= 1
            if (self.remaining_seconds == WARNING_AT_SECONDS
                    and self.one_minute_warning_enabled
                    and self.notifications_enabled
                    and not self.one_minute_warning_sent):
                self.one_minute_warning_sent = True
                log.debug(f"One minute left in {self.session_kind.value} session")
                return OneMinuteWarning(self.session_kind)
            return None

        # Already at zero when this tick arrived, so the session is over
        finished = self.session_kind
        self._begin_session(finished.other)
        log.info(f"{finished.label} session complete, rolled over to {self.session_kind.value} ({self.remaining_seconds}s)")
        return SessionComplete(finished)

    def _begin_session(self, kind: SessionKind):
        self.session_kind = kind
        self.remaining_seconds = self.duration_for(kind)
        self.one_minute_warning_sent = False

    #endregion === Heartbeat ===

    #region === User actions ===

    def start_work(self):
        self._start(SessionKind.WORK)

    def start_break(self):
        self._start(SessionKind.BREAK)

    def _start(self, kind: SessionKind):
        self._begin_session(kind)
        self.paused = False
        log.info(f"Started {kind.value} session ({self.remaining_seconds}s)")
        self._changed()

    def toggle_pause(self):
        self.paused = not self.paused
        log.info("Paused timer" if self.paused else "Resumed timer")
        self._changed()

    def set_work_duration(self, minutes):
        self.work_duration_seconds = clamp_minutes(minutes) * 60
        if self.session_kind is SessionKind.WORK:
            self._restart_countdown()
        log.info(f"Work duration set to {self.work_minutes} min")
        self._changed()

    def set_break_duration(self, minutes):
        self.break_duration_seconds = clamp_minutes(minutes) * 60
        if self.session_kind is SessionKind.BREAK:
            self._restart_countdown()
        log.info(f"Break duration set to {self.break_minutes} min")
        self._changed()

    # Back to the full length of the running kind, warning rearmed
    def _restart_countdown(self):
        self.remaining_seconds = self.total_seconds
        if self.one_minute_warning_enabled:
            self.one_minute_warning_sent = False

    def set_display_mode(self, mode: DisplayMode):
        self.display_mode = mode
        log.debug(f"Display mode set to {mode.value}")
        self._changed()

    def set_notifications_enabled(self, enabled):
        self.notifications_enabled = bool(enabled)
        if not self.notifications_enabled:
            self._on_notifications_disabled()
            # Let the warning fire again if notifications come back on before the minute mark
            self.one_minute_warning_sent = False
        log.info(f"Notifications {'enabled' if self.notifications_enabled else 'disabled'}")
        self._changed()

    def set_one_minute_warning_enabled(self, enabled):
        self.one_minute_warning_enabled = bool(enabled)
        if not self.one_minute_warning_enabled:
            self.one_minute_warning_sent = True
        elif self.remaining_seconds > WARNING_AT_SECONDS:
            self.one_minute_warning_sent = False
        log.info(f"One minute warning {'enabled' if self.one_minute_warning_enabled else 'disabled'}")
        self._changed()

    def _changed(self):
        self._save(self.preferences())
        self._on_change()

    #endregion === User actions ===
