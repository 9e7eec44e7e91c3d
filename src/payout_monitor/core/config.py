"""
Payout Monitor - Central Configuration

System-wide constants, default rule thresholds and environment settings.
Single source of truth for configuration.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# --- Environment Settings ---
ENVIRONMENT = os.getenv('ENVIRONMENT', 'production')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR_OVERRIDE = os.getenv('LOG_DIR', '')

# --- Storage ---
DATA_DIR_OVERRIDE = os.getenv('PAYOUT_MONITOR_DATA_DIR', '')
ACCOUNTS_KEY: str = "payout_monitor_accounts"
CONFIG_KEY: str = "payout_monitor_config"

# --- Accounts ---
ACCOUNT_ID_PREFIX: str = "ACC"
ACCOUNT_ID_LENGTH: int = 5

# --- Blown Account Auto-Removal ---
AUTO_REMOVE_BLOWN: bool = _env_flag('AUTO_REMOVE_BLOWN', True)
BLOWN_REMOVAL_DELAY_SEC: float = float(os.getenv('BLOWN_REMOVAL_DELAY_SEC', '1.5'))

# --- Default Rule Thresholds ---
DEFAULT_TARGET_PROFIT_THRESHOLD: float = 150.0
DEFAULT_REQUIRED_DAYS: int = 5
DEFAULT_MAX_DRAWDOWN: float = 2000.0
DEFAULT_POST_PAYOUT_LIQUIDATION_LEVEL: float = 0.0
DEFAULT_SUBSEQUENT_PAYOUT_RATIO: int = 50  # percent of balance
