from dataclasses import dataclass, field
from enum import Enum
from typing import List

from payout_monitor.core import config


class AccountType(Enum):
    """
    Kind of evaluation account. Informational only, the rules ignore it.
    MANUAL: traded by hand.
    ALGO: traded by an automated strategy.
    """
    MANUAL = "Manual"
    ALGO = "Algo"


@dataclass
class PayoutHistory:
    """A single withdrawal from an account."""
    amount: float
    post_balance: float  # Balance right after the payout was applied
    date: str            # ISO 8601 timestamp


@dataclass
class Account:
    """
    An evaluation account tracked against the payout and risk rules.

    daily_profits and history_payouts are chronological (insertion order),
    the last payout is the most recent one.
    """
    id: str
    name: str
    type: AccountType = AccountType.ALGO
    balance: float = 0.0
    daily_profits: List[float] = field(default_factory=list)
    history_payouts: List[PayoutHistory] = field(default_factory=list)


@dataclass
class GlobalConfig:
    """
    Rule thresholds shared by every account.
    """
    target_profit_threshold: float = config.DEFAULT_TARGET_PROFIT_THRESHOLD  # Day counts as qualified at or above this
    required_days: int = config.DEFAULT_REQUIRED_DAYS
    max_drawdown: float = config.DEFAULT_MAX_DRAWDOWN  # Blow limit before the first payout
    post_payout_liquidation_level: float = config.DEFAULT_POST_PAYOUT_LIQUIDATION_LEVEL  # Blow limit after it
    subsequent_payout_ratio: int = config.DEFAULT_SUBSEQUENT_PAYOUT_RATIO  # 0-100, percent of balance


@dataclass(frozen=True)
class AccountStatus:
    """Derived state of an account. Never stored."""
    qualified_days: int
    is_blown: bool
    can_payout: bool
    reason: str
