import logging
import sys
from tb.common.logger import log
from tb.common.setup import LOG_SETTINGS, PATHS

# Qt prints exceptions raised inside slots (menu actions, the heartbeat) and carries on. This hook sends them to the log.
def log_uncaught(exc_type, exc, trace):
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, trace)
        return
    log.critical("Uncaught exception", exc_info=(exc_type, exc, trace))

# Entry point for `python -m tb` and the `timerbar` script
def run() -> None:
    log.info("=== TIMERBAR STARTING ===")
    log.info(f"Data folder '{PATHS.data}', log level {logging.getLevelName(LOG_SETTINGS.level)}, console={LOG_SETTINGS.console}")
    sys.excepthook = log_uncaught

    from tb.ui.app import main
    try:
        main()
    except SystemExit:
        raise
    except Exception:
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
