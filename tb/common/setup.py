import logging
import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Returns the per-user base directory that TimerBar keeps its files under. TIMERBAR_HOME wins over everything,
# otherwise we follow the platform's convention for per-user application data.
def user_data_root() -> Path:
    override = os.getenv("TIMERBAR_HOME")
    if override:
        return Path(override)

    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "TimerBar"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "TimerBar"
    xdg = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "timerbar"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    current: Path

    @staticmethod
    def build():
        data = ensure_directory(user_data_root())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()

# Logging knobs, read from the environment next to TIMERBAR_HOME:
#   TIMERBAR_LOG_LEVEL   level name for the persistent and latest logs (default INFO)
#   TIMERBAR_LOG_CONSOLE any of 1/true/yes/on also echoes the log to stderr
#   TIMERBAR_DEBUG_RUNS  how many per-run debug logs to keep, 0 turns them off (default 5)
@dataclass(frozen=True)
class LogSettings:

    level: int = logging.INFO
    console: bool = False
    debug_runs: int = 5

    @staticmethod
    def from_env(env=None):
        env = os.environ if env is None else env
        defaults = LogSettings()

        level = logging.getLevelName(env.get("TIMERBAR_LOG_LEVEL", "").strip().upper())
        if not isinstance(level, int):
            level = defaults.level

        console = env.get("TIMERBAR_LOG_CONSOLE", "").strip().lower() in ("1", "true", "yes", "on")

        try:
            debug_runs = max(0, int(env.get("TIMERBAR_DEBUG_RUNS", defaults.debug_runs)))
        except ValueError:
            debug_runs = defaults.debug_runs

        return LogSettings(level=level, console=console, debug_runs=debug_runs)
LOG_SETTINGS = LogSettings.from_env()
