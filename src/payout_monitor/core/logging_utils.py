"""
Payout Monitor - Logging Utilities

One root logger setup shared by every module and the Streamlit app.
Records go to stdout and to logs/payout_monitor.log; the level comes from
LOG_LEVEL unless a caller passes one.
"""

import logging
import sys
from typing import Optional

_LOGGER_INITIALIZED = False


def init_logging(level: Optional[int] = None) -> None:
    """
    Attach a stdout handler and a log file handler to the root logger.
    Later calls are no-ops, so Streamlit reruns do not stack handlers.
    """
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    from payout_monitor.core import config
    from payout_monitor.core.paths import get_log_dir

    if level is None:
        level = logging.getLevelName(config.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_file = get_log_dir() / "payout_monitor.log"

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    logfile = logging.FileHandler(log_file, encoding="utf-8")
    logfile.setFormatter(formatter)
    root.addHandler(logfile)

    _LOGGER_INITIALIZED = True

    logging.getLogger(__name__).info(f"Logging to {log_file}")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Named logger, falling back to 'payout_monitor'; sets up logging on first use."""
    if not _LOGGER_INITIALIZED:
        init_logging()

    return logging.getLogger(name if name else "payout_monitor")
