import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from tb.common.setup import LOG_SETTINGS, PATHS, LogSettings
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 1024 * 1024
BACKUP_COUNT = 3

# Adds `handler` under `<logger>:<role>` unless a handler with that name is already attached, so importing the
# logger twice (tests, `python -m`) never doubles up output.
def _attach(logger: logging.Logger, role, make_handler, level, fmt):
    handler_name = f"{logger.name}:{role}"
    if any(h.get_name() == handler_name for h in logger.handlers):
        return None
    handler = make_handler()
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(handler_name)
    logger.addHandler(handler)
    return handler

# Deletes all but the newest `keep` per-run debug logs in `folder`. Returns the paths that could not be removed.
def prune_debug_runs(folder: Path, name, keep):
    runs = sorted(folder.glob(f"{name}_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    stuck = []
    for run in runs[keep:]:
        try:
            run.unlink()
        except OSError:
            stuck.append(run)
    return stuck

# Builds the app logger from LogSettings:
#   * <name>.log       rotating, kept across runs, at settings.level
#   * latest.log       this run only, at settings.level
#   * debug/<name>_<start time>.log   this run at DEBUG, newest settings.debug_runs kept
#   * stderr           only when settings.console is on
def get_logger(name="timerbar", settings: LogSettings = LOG_SETTINGS, log_dir: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    # The debug run file needs every record, the other handlers filter for themselves
    logger.setLevel(logging.DEBUG if settings.debug_runs > 0 else settings.level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    _attach(logger, "persistent",
            lambda: RotatingFileHandler(log_dir / f"{name}.log", maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"),
            settings.level, fmt)
    _attach(logger, "latest",
            lambda: logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"),
            settings.level, fmt)

    if settings.debug_runs > 0:
        debug_dir = log_dir / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        this_run = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        if _attach(logger, "debug_run", lambda: logging.FileHandler(this_run, encoding="utf-8"), logging.DEBUG, fmt):
            for path in prune_debug_runs(debug_dir, name, settings.debug_runs):
                logger.warning(f"Could not remove old debug log '{path}'")

    if settings.console:
        _attach(logger, "console", logging.StreamHandler, settings.level, fmt)

    return logger

log = get_logger()
