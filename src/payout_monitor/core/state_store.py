"""
Payout Monitor - State Store
============================

Persists the account collection and the global config as two named JSON
records (one file per key) in the data directory.

Absent or corrupt records load as defaults. Writes are fire-and-forget:
a failing write is logged and swallowed.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

from payout_monitor.core import config
from payout_monitor.core.logging_utils import get_logger
from payout_monitor.core.models import Account, AccountType, GlobalConfig, PayoutHistory
from payout_monitor.core.paths import get_data_dir

logger = get_logger(__name__)

# Persisted camelCase key -> GlobalConfig attribute
_CONFIG_FIELD_KEYS: Dict[str, str] = {
    "targetProfitThreshold": "target_profit_threshold",
    "requiredDays": "required_days",
    "maxDrawdown": "max_drawdown",
    "postPayoutLiquidationLevel": "post_payout_liquidation_level",
    "subsequentPayoutRatio": "subsequent_payout_ratio",
}
_INT_CONFIG_FIELDS = {"required_days", "subsequent_payout_ratio"}


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid threshold
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _serialize_account(account: Account) -> dict:
    """Helper to serialize Account to the persisted dict layout."""
    return {
        "id": account.id,
        "name": account.name,
        "type": account.type.value,
        "balance": account.balance,
        "dailyProfits": list(account.daily_profits),
        "historyPayouts": [
            {"amount": p.amount, "postBalance": p.post_balance, "date": p.date}
            for p in account.history_payouts
        ],
    }


def _deserialize_account(data: dict) -> Account:
    """Helper to deserialize a persisted dict to Account. Raises on malformed input."""
    try:
        account_type = AccountType(data.get("type", AccountType.ALGO.value))
    except ValueError:
        account_type = AccountType.ALGO

    return Account(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        type=account_type,
        balance=float(data.get("balance", 0.0)),
        daily_profits=[float(p) for p in data.get("dailyProfits", [])],
        history_payouts=[
            PayoutHistory(
                amount=float(p["amount"]),
                post_balance=float(p["postBalance"]),
                date=str(p.get("date", "")),
            )
            for p in data.get("historyPayouts", [])
        ],
    )


def serialize_config(cfg: GlobalConfig) -> dict:
    """Helper to serialize GlobalConfig to the persisted dict layout."""
    return {key: getattr(cfg, attr) for key, attr in _CONFIG_FIELD_KEYS.items()}


def deserialize_config(data: Any) -> GlobalConfig:
    """
    Build a GlobalConfig from a persisted dict, defaulting each missing or
    ill-typed field on its own so records from older versions still load.
    """
    cfg = GlobalConfig()
    if not isinstance(data, dict):
        return cfg

    for key, attr in _CONFIG_FIELD_KEYS.items():
        if key not in data:
            continue
        value = data[key]
        if not _is_number(value):
            logger.warning(f"Invalid config value for {key}: {value!r}. Reverting to default.")
            continue
        if attr in _INT_CONFIG_FIELDS:
            value = int(value)
        else:
            value = float(value)
        setattr(cfg, attr, value)

    cfg.subsequent_payout_ratio = min(100, max(0, cfg.subsequent_payout_ratio))
    return cfg


class StateStore:
    """
    Key-value store for the two persisted records, backed by JSON files.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else get_data_dir()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        """Returns the parsed record, or None if absent or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error loading {path}: {e}. Using defaults.")
            return None

    def _write(self, key: str, payload: Any) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Error saving {path}: {e}")

    def load_accounts(self) -> List[Account]:
        """
        Loads the account collection.
        Empty if the record is missing or corrupt; malformed entries are skipped.
        """
        data = self._read(config.ACCOUNTS_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Accounts record is not a list ({type(data).__name__}). Using defaults.")
            return []

        accounts = []
        for item in data:
            try:
                accounts.append(_deserialize_account(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed account record {item!r}: {e}")
        return accounts

    def save_accounts(self, accounts: List[Account]) -> None:
        self._write(config.ACCOUNTS_KEY, [_serialize_account(a) for a in accounts])

    def load_config(self) -> GlobalConfig:
        """Loads the global config, upgrading partial records field by field."""
        return deserialize_config(self._read(config.CONFIG_KEY))

    def save_config(self, cfg: GlobalConfig) -> None:
        self._write(config.CONFIG_KEY, serialize_config(cfg))

    def reset(self) -> tuple[List[Account], GlobalConfig]:
        """
        Deletes both records and returns the in-memory defaults.
        """
        for key in (config.ACCOUNTS_KEY, config.CONFIG_KEY):
            path = self._path(key)
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Error removing {path}: {e}")
        logger.info("State store reset to defaults")
        return [], GlobalConfig()
