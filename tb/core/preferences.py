"""Persisted user preferences: a flat JSON record with per-key default fallbacks.

The store is a passive mirror of the part of the clock's state that should survive a restart. Reading never
fails: a missing file is a normal first run, and a missing, mistyped or corrupt value silently becomes its default.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from tb.common.logger import log
from tb.common.setup import PATHS
from tb.core.modes import DisplayMode
from tb.util.misc import clamp_minutes

PREFS_PATH = PATHS.current / "preferences.json"

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5


@dataclass
class Preferences:
    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES
    display_mode: DisplayMode = DisplayMode.TIME
    notifications_enabled: bool = True
    one_minute_warning_enabled: bool = True
    paused: bool = True

    # Converts to the on-disk key/value layout.
    def to_dict(self):
        return {
            "workMinutes": self.work_minutes,
            "breakMinutes": self.break_minutes,
            "displayMode": self.display_mode.value,
            "notificationsEnabled": self.notifications_enabled,
            "oneMinuteWarningEnabled": self.one_minute_warning_enabled,
            "pausedState": self.paused,
        }

    # Builds Preferences from a raw dict, defaulting every key that is missing or holds the wrong type. Returns the
    # preferences plus the set of keys that had to be defaulted so the caller can log them.
    @classmethod
    def from_dict(cls, raw):
        defaults = cls()
        defaulted = set()

        def _int(key, default):
            value = raw.get(key)
            # bool is an int subclass, but `true` is never a valid minute count
            if not isinstance(value, int) or isinstance(value, bool):
                defaulted.add(key)
                return default
            if value < 1:
                defaulted.add(key)
            return clamp_minutes(value)

        def _bool(key, default):
            value = raw.get(key)
            if not isinstance(value, bool):
                defaulted.add(key)
                return default
            return value

        mode_raw = raw.get("displayMode")
        display_mode = DisplayMode.from_value(mode_raw, defaults.display_mode)
        if mode_raw != display_mode.value:
            defaulted.add("displayMode")

        prefs = cls(
            work_minutes=_int("workMinutes", defaults.work_minutes),
            break_minutes=_int("breakMinutes", defaults.break_minutes),
            display_mode=display_mode,
            notifications_enabled=_bool("notificationsEnabled", defaults.notifications_enabled),
            one_minute_warning_enabled=_bool("oneMinuteWarningEnabled", defaults.one_minute_warning_enabled),
            paused=_bool("pausedState", defaults.paused),
        )
        return prefs, defaulted


class PreferenceStore:
    """Loads and saves `Preferences` as a single JSON document at `path`."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else PREFS_PATH

    def load(self) -> Preferences:
        if not self.path.exists():
            log.info(f"No preferences found at '{self.path}', using defaults.")
            return Preferences()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise TypeError(f"Expected a JSON object, got {type(raw).__name__}")
        # Fall back to defaults in case of error, but warn in log
        except (OSError, json.JSONDecodeError, TypeError, ValueError):
            log.warning(f"Could not read preferences from '{self.path}', falling back to defaults.", exc_info=True)
            return Preferences()

        prefs, defaulted = Preferences.from_dict(raw)
        if defaulted:
            log.warning(f"Loaded preferences from '{self.path}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted))}")
        else:
            log.info(f"Successfully loaded preferences from '{self.path}'.")
        return prefs

    def save(self, prefs: Preferences):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(prefs.to_dict(), f, indent=2)
        except OSError:
            log.exception(f"Failed to save preferences to '{self.path}'")
            return
        log.debug(f"Saved preferences to '{self.path}'")
