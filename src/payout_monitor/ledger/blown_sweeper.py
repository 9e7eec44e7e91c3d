"""
Payout Monitor - Blown Account Sweeper
======================================

Removes blown accounts from the collection once they have stayed blown for
a grace delay. The delay gives the dashboard time to show the account as
blown before it disappears.
"""

import time
from typing import Dict, List, Optional, Tuple

from payout_monitor.core import config as app_config
from payout_monitor.core.logging_utils import get_logger
from payout_monitor.core.models import Account, GlobalConfig
from payout_monitor.rules.status_evaluator import evaluate

logger = get_logger(__name__)


class BlownAccountSweeper:
    """
    Tracks when each blown account was first seen and sweeps it out after
    grace_seconds.
    """

    def __init__(self, grace_seconds: Optional[float] = None) -> None:
        if grace_seconds is None:
            grace_seconds = app_config.BLOWN_REMOVAL_DELAY_SEC
        self.grace_seconds = float(grace_seconds)
        self._first_seen: Dict[str, float] = {}

    def _refresh(self, accounts: List[Account], config: GlobalConfig, now: float) -> List[Account]:
        """Update detection times and return the currently blown accounts."""
        blown = [a for a in accounts if evaluate(a, config).is_blown]
        blown_ids = {a.id for a in blown}

        # Forget accounts that recovered or were deleted
        for account_id in list(self._first_seen):
            if account_id not in blown_ids:
                del self._first_seen[account_id]

        for account in blown:
            self._first_seen.setdefault(account.id, now)
        return blown

    def pending(
        self,
        accounts: List[Account],
        config: GlobalConfig,
        now: Optional[float] = None,
    ) -> List[Tuple[Account, float]]:
        """
        Blown accounts still inside their grace delay, with seconds remaining.
        """
        if now is None:
            now = time.monotonic()
        blown = self._refresh(accounts, config, now)
        result = []
        for account in blown:
            remaining = self.grace_seconds - (now - self._first_seen[account.id])
            if remaining > 0:
                result.append((account, remaining))
        return result

    def sweep(
        self,
        accounts: List[Account],
        config: GlobalConfig,
        now: Optional[float] = None,
    ) -> Tuple[List[Account], List[Account]]:
        """
        Split the collection into (remaining, removed).

        An account is removed once it has been blown for at least
        grace_seconds.
        """
        if now is None:
            now = time.monotonic()
        self._refresh(accounts, config, now)

        remaining, removed = [], []
        for account in accounts:
            first_seen = self._first_seen.get(account.id)
            if first_seen is not None and now - first_seen >= self.grace_seconds:
                removed.append(account)
                del self._first_seen[account.id]
            else:
                remaining.append(account)

        for account in removed:
            logger.info(f'Account "{account.name}" ({account.id}) was liquidated and removed.')
        return remaining, removed
