import time
from PySide6.QtWidgets import QSystemTrayIcon
from tb.common.logger import log

MESSAGE_TIMEOUT_MS = 8000

# Delivers notifications as tray balloon messages. Qt has no call to retract a balloon, so clear() replaces whatever
# is still on screen with an empty message that expires straight away.
class TrayNotifier:

    def __init__(self, tray: QSystemTrayIcon, now=time.monotonic):
        self._tray = tray
        self._now = now
        # Monotonic time at which the last balloon times out on its own
        self._showing_until = 0.0

    @property
    def showing(self):
        return self._now() < self._showing_until

    def deliver(self, title, body):
        if not QSystemTrayIcon.supportsMessages():
            log.debug(f"Tray messages unsupported on this platform, dropping '{title}'")
            return
        self._tray.showMessage(title, body, QSystemTrayIcon.Information, MESSAGE_TIMEOUT_MS)
        self._showing_until = self._now() + MESSAGE_TIMEOUT_MS / 1000

    def clear(self):
        if not self.showing:
            return
        self._tray.showMessage("", "", QSystemTrayIcon.NoIcon, 1)
        self._showing_until = 0.0
        log.debug("Cleared tray messages")
