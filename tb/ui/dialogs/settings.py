"""Timer settings dialog: durations, display mode and notification switches."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)
from tb.core.modes import DisplayMode

FONT_FAMILY = "Calibri"
MAX_MINUTES = 24 * 60

# Small settings window opened from the tray menu. The dialog never touches the clock itself: on Apply it calls
# `on_apply` with the chosen values and the owner decides what changed.
class SettingsDialog(QDialog):

    def __init__(self, settings, on_apply, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Timer Settings")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setMinimumWidth(380)
        self._on_apply = on_apply

        outer = QVBoxLayout(self)
        outer.setSpacing(12)
        outer.setContentsMargins(24, 24, 24, 24)

        heading = QLabel("Timer Settings")
        heading.setFont(QFont(FONT_FAMILY, 16, QFont.Bold))
        outer.addWidget(heading)

        # Work
        row = QHBoxLayout()
        lbl = QLabel("Work (min):")
        work_tooltip = "Length of a work session in minutes. Takes effect immediately if a work session is running."
        lbl.setFont(QFont(FONT_FAMILY, 12, QFont.Bold))
        lbl.setToolTip(work_tooltip)
        self._work = QSpinBox()
        self._work.setRange(1, MAX_MINUTES)
        self._work.setValue(settings["work_minutes"])
        self._work.setAlignment(Qt.AlignRight)
        self._work.setMinimumWidth(120)
        self._work.setToolTip(work_tooltip)
        row.addWidget(lbl)
        row.addStretch()
        row.addWidget(self._work)
        outer.addLayout(row)

        # Break
        row = QHBoxLayout()
        lbl = QLabel("Break (min):")
        break_tooltip = "Length of a break in minutes. Takes effect immediately if a break is running."
        lbl.setFont(QFont(FONT_FAMILY, 12, QFont.Bold))
        lbl.setToolTip(break_tooltip)
        self._break = QSpinBox()
        self._break.setRange(1, MAX_MINUTES)
        self._break.setValue(settings["break_minutes"])
        self._break.setAlignment(Qt.AlignRight)
        self._break.setMinimumWidth(120)
        self._break.setToolTip(break_tooltip)
        row.addWidget(lbl)
        row.addStretch()
        row.addWidget(self._break)
        outer.addLayout(row)

        # Display Mode
        row = QHBoxLayout()
        lbl = QLabel("Display Mode:")
        display_tooltip = "Time: minutes and seconds left.\n\nProgress: how much of the session has passed."
        lbl.setFont(QFont(FONT_FAMILY, 12, QFont.Bold))
        lbl.setToolTip(display_tooltip)
        self._display_mode = QComboBox()
        for mode in DisplayMode:
            self._display_mode.addItem(mode.label, mode.value)
        self._display_mode.setCurrentIndex(self._display_mode.findData(settings["display_mode"].value))
        self._display_mode.setMinimumWidth(120)
        self._display_mode.setToolTip(display_tooltip)
        row.addWidget(lbl)
        row.addStretch()
        row.addWidget(self._display_mode)
        outer.addLayout(row)

        sep = QFrame()
        sep.setFrameShape(QFrame.HLine)
        sep.setFrameShadow(QFrame.Sunken)
        outer.addWidget(sep)

        # Notifications (master switch)
        row = QHBoxLayout()
        lbl = QLabel("Notifications:")
        notifications_tooltip = "Show a desktop notification whenever a session ends."
        lbl.setFont(QFont(FONT_FAMILY, 12, QFont.Bold))
        lbl.setToolTip(notifications_tooltip)
        self._notifications = QComboBox()
        self._notifications.addItems(["On", "Off"])
        self._notifications.setCurrentText("On" if settings["notifications_enabled"] else "Off")
        self._notifications.setMinimumWidth(120)
        self._notifications.setToolTip(notifications_tooltip)
        self._notifications.currentTextChanged.connect(self._on_notifications_toggle)
        row.addWidget(lbl)
        row.addStretch()
        row.addWidget(self._notifications)
        outer.addLayout(row)

        # 1-Minute Warning (child, grayed out while notifications are off)
        row = QHBoxLayout()
        self._warning_lbl = QLabel("1-Minute Warning:")
        warning_tooltip = "Also notify once when one minute of the current session is left."
        self._warning_lbl.setFont(QFont(FONT_FAMILY, 12, QFont.Bold))
        self._warning_lbl.setToolTip(warning_tooltip)
        self._warning = QComboBox()
        self._warning.addItems(["On", "Off"])
        self._warning.setCurrentText("On" if settings["one_minute_warning_enabled"] else "Off")
        self._warning.setMinimumWidth(120)
        self._warning.setToolTip(warning_tooltip)
        row.addWidget(self._warning_lbl)
        row.addStretch()
        row.addWidget(self._warning)
        outer.addLayout(row)

        outer.addStretch()

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        apply_btn = QPushButton("Apply")
        apply_btn.setFont(QFont(FONT_FAMILY, 12))
        apply_btn.setDefault(True)
        apply_btn.clicked.connect(self._apply)
        close_btn = QPushButton("Close")
        close_btn.setFont(QFont(FONT_FAMILY, 12))
        close_btn.clicked.connect(self.reject)
        btn_row.addWidget(apply_btn)
        btn_row.addWidget(close_btn)
        outer.addLayout(btn_row)

        self._on_notifications_toggle()

    def _on_notifications_toggle(self):
        enabled = self._notifications.currentText() == "On"
        self._warning.setEnabled(enabled)
        self._warning_lbl.setStyleSheet("" if enabled else "color: #888888;")

    def _apply(self):
        self._on_apply(
            work_minutes=self._work.value(),
            break_minutes=self._break.value(),
            display_mode=DisplayMode(self._display_mode.currentData()),
            notifications_enabled=self._notifications.currentText() == "On",
            one_minute_warning_enabled=self._warning.currentText() == "On",
        )
