import sys
from PySide6.QtCore import QObject, Qt, QTimer
from PySide6.QtGui import QAction, QColor, QFont, QFontMetrics, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon
from tb.common.logger import log
from tb.core.controller import TimerController
from tb.core.preferences import PreferenceStore
from tb.ui.dialogs.settings import SettingsDialog
from tb.ui.notifier import TrayNotifier

HEARTBEAT_MS = 1000
ICON_HEIGHT = 22
ICON_FONT = "Menlo" if sys.platform == "darwin" else "Consolas" if sys.platform == "win32" else "DejaVu Sans Mono"
TEXT_COLOR = QColor(255, 255, 255)
PAUSED_TEXT_COLOR = QColor(160, 160, 160)


# ---------------------------------------------------------------------------
# Tray application
# ---------------------------------------------------------------------------

# Lives in the system tray: the icon shows the status line, the context menu carries the user actions. All state
# is owned by the TimerController, this class only forwards clicks and repaints.
class TrayApp(QObject):

    def __init__(self, store=None):
        super().__init__()

        self.tray = QSystemTrayIcon(self)
        self._pause_action = None
        self.controller = TimerController(
            store or PreferenceStore(),
            TrayNotifier(self.tray),
            render=self._render,
        )
        self._settings_dialog = None

        self._build_menu()
        self.controller.refresh()
        self.tray.show()

        # -- Heartbeat (1 s) --
        # QTimer rides the Qt event loop, which keeps dispatching while the tray menu is open.
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self.controller.heartbeat)
        self._timer.start(HEARTBEAT_MS)

    # ------------------------------------------------------------------ #
    #  Menu                                                                #
    # ------------------------------------------------------------------ #

    def _build_menu(self):
        menu = QMenu()

        start_work = QAction("Start Work", menu)
        start_work.setToolTip("Begin a work session")
        start_work.setShortcut("W")
        start_work.triggered.connect(self.controller.start_work)
        menu.addAction(start_work)

        start_break = QAction("Start Break", menu)
        start_break.setToolTip("Begin a break session")
        start_break.setShortcut("B")
        start_break.triggered.connect(self.controller.start_break)
        menu.addAction(start_break)

        self._pause_action = QAction(self.controller.pause_label, menu)
        self._pause_action.setToolTip(self.controller.pause_tooltip)
        self._pause_action.setShortcut("P")
        self._pause_action.triggered.connect(self.controller.toggle_pause)
        menu.addAction(self._pause_action)

        menu.addSeparator()
        settings = QAction("Settings…", menu)
        settings.setShortcut("Ctrl+,")
        settings.triggered.connect(self._on_settings)
        menu.addAction(settings)

        menu.addSeparator()
        quit_action = QAction("Quit Timer", menu)
        quit_action.setToolTip("Close the Timer application")
        quit_action.setShortcut("Q")
        quit_action.triggered.connect(self._on_quit)
        menu.addAction(quit_action)

        menu.setToolTipsVisible(True)
        self._menu = menu
        self.tray.setContextMenu(menu)

    # ------------------------------------------------------------------ #
    #  Rendering                                                           #
    # ------------------------------------------------------------------ #

    def _render(self, status, paused):
        self.tray.setIcon(self._status_icon(status, paused))
        self.tray.setToolTip(f"{status} (paused)" if paused else status)
        if self._pause_action is not None:
            self._pause_action.setText(self.controller.pause_label)
            self._pause_action.setToolTip(self.controller.pause_tooltip)

    # Paints the status text into a pixmap, since most trays only show icons.
    @staticmethod
    def _status_icon(status, paused):
        font = QFont(ICON_FONT)
        font.setPixelSize(ICON_HEIGHT - 6)
        font.setBold(True)
        width = QFontMetrics(font).horizontalAdvance(status) + 4

        pm = QPixmap(width, ICON_HEIGHT)
        pm.fill(Qt.GlobalColor.transparent)
        p = QPainter(pm)
        p.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        p.setFont(font)
        p.setPen(PAUSED_TEXT_COLOR if paused else TEXT_COLOR)
        p.drawText(pm.rect(), Qt.AlignCenter, status)
        p.end()
        return QIcon(pm)

    # ------------------------------------------------------------------ #
    #  Settings dialog                                                     #
    # ------------------------------------------------------------------ #

    def _on_settings(self):
        # Reuse the open dialog rather than stacking a second one
        if self._settings_dialog is not None:
            self._settings_dialog.raise_()
            self._settings_dialog.activateWindow()
            return

        dlg = SettingsDialog(self.controller.settings(), on_apply=self.controller.apply_settings)
        dlg.finished.connect(self._on_settings_closed)
        self._settings_dialog = dlg
        dlg.show()
        dlg.raise_()
        dlg.activateWindow()

    def _on_settings_closed(self, _result):
        self._settings_dialog = None

    def _on_quit(self):
        self._timer.stop()
        self.tray.hide()
        log.info("Quit requested from tray menu")
        QApplication.instance().quit()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    app.setApplicationName("TimerBar")
    # Closing the settings dialog must not end the app, only Quit does
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        log.error("No system tray available, cannot start TimerBar")
        sys.exit(1)

    tray_app = TrayApp()
    log.info(f"TimerBar running, status {tray_app.controller.clock.format_status()}")
    sys.exit(app.exec())
