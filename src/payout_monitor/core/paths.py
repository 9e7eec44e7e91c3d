from pathlib import Path
from typing import Optional

from payout_monitor.core import config


def get_project_root() -> Path:
    """
    Returns the project root directory.
    Assumes this file is at src/payout_monitor/core/paths.py
    """
    # core -> payout_monitor -> src -> root
    return Path(__file__).resolve().parents[3]


def _resolve_dir(override: Optional[str], default_name: str) -> Path:
    if override:
        target = Path(override).expanduser()
    else:
        target = get_project_root() / default_name
    if not target.exists():
        target.mkdir(parents=True, exist_ok=True)
    return target


def get_data_dir() -> Path:
    """
    Returns the directory holding the persisted records, creating it if needed.
    PAYOUT_MONITOR_DATA_DIR overrides the default <project>/data location.
    """
    return _resolve_dir(config.DATA_DIR_OVERRIDE, "data")


def get_log_dir() -> Path:
    """Returns the 'logs' directory (LOG_DIR overrides it)."""
    return _resolve_dir(config.LOG_DIR_OVERRIDE, "logs")
