"""Turns clock events into desktop notification text and decides whether they get delivered.

Delivery itself belongs to a notifier collaborator, anything with:
  * ``deliver(title, body)``: show a one-shot message
  * ``clear()``: remove every pending or delivered message
"""

from dataclasses import dataclass
from typing import assert_never
from tb.common.logger import log
from tb.core.modes import SessionKind
from tb.core.session_clock import OneMinuteWarning, SessionComplete


@dataclass(frozen=True)
class Message:
    title: str
    body: str


def message_for(event, work_minutes, break_minutes):
    """Text for a tick event. Completion messages name the length of the session that starts next."""
    match event:
        case SessionComplete(finished_kind=SessionKind.WORK):
            return Message("Work Session Complete", f"Time for a break ({break_minutes} min).")
        case SessionComplete(finished_kind=SessionKind.BREAK):
            return Message("Break Over", f"Back to work ({work_minutes} min).")
        case OneMinuteWarning(kind=SessionKind.WORK):
            return Message("Work Almost Done", "1 minute remaining")
        case OneMinuteWarning(kind=SessionKind.BREAK):
            return Message("Break Ending Soon", "1 minute remaining")
        case _:
            assert_never(event)


class NotificationPolicy:

    def __init__(self, notifier):
        self.notifier = notifier
        # Bound after construction, since the clock needs clear() as its own callback
        self.clock = None

    def dispatch(self, event):
        """Deliver the message for `event` if notifications are on. Returns the message that was sent, if any."""
        if event is None or self.clock is None:
            return None
        if not self.clock.notifications_enabled:
            log.debug(f"Notifications disabled, not delivering {event}")
            return None

        message = message_for(event, self.clock.work_minutes, self.clock.break_minutes)
        try:
            self.notifier.deliver(message.title, message.body)
        # The status line still shows everything, so a failed notification is not worth stopping for
        except Exception:
            log.warning(f"Failed to deliver notification '{message.title}'", exc_info=True)
            return None
        log.debug(f"Delivered notification '{message.title}'")
        return message

    def clear(self):
        try:
            self.notifier.clear()
        except Exception:
            log.warning("Failed to clear notifications", exc_info=True)
