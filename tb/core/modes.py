"""The two small closed choices the timer is built around."""

from enum import Enum


class SessionKind(Enum):
    WORK = "work"
    BREAK = "break"

    @property
    def other(self):
        """The kind a rollover switches to."""
        match self:
            case SessionKind.WORK:
                return SessionKind.BREAK
            case SessionKind.BREAK:
                return SessionKind.WORK

    @property
    def label(self):
        return self.value.capitalize()


class DisplayMode(Enum):
    TIME = "time"
    PROGRESS = "progress"

    @property
    def label(self):
        return self.value.capitalize()

    @classmethod
    def from_value(cls, value, default=None):
        """Parse a persisted value ("time"/"progress"), falling back to `default` for anything else."""
        try:
            return cls(value)
        except ValueError:
            return default if default is not None else cls.TIME
