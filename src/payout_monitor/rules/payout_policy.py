"""
Payout Monitor - Payout Policy
==============================

Withdrawal cap and payout execution. The cap is a percentage of the balance
at the moment of execution; requests above it are refused, never clamped.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from payout_monitor.core.logging_utils import get_logger
from payout_monitor.core.models import Account, GlobalConfig, PayoutHistory
from payout_monitor.rules.status_evaluator import evaluate

logger = get_logger(__name__)


class PayoutRejectedError(ValueError):
    """Raised when a payout request violates the payout policy."""

    def __init__(self, message: str, reason_code: str, requested: float, max_allowed: float) -> None:
        super().__init__(message)
        self.reason_code = reason_code
        self.requested = requested
        self.max_allowed = max_allowed


@dataclass
class PayoutDecision:
    """
    Result of a payout check.
    """
    allow: bool
    reason_code: str  # "OK", "NOT_ELIGIBLE", "INVALID_AMOUNT", "EXCEEDS_CAP"
    max_allowed: float
    details: dict[str, object] = field(default_factory=dict)


def max_allowed_payout(balance: float, config: GlobalConfig) -> float:
    """Largest amount that may be withdrawn from the given balance (never negative)."""
    return max(0.0, balance * (config.subsequent_payout_ratio / 100))


def check_payout(account: Account, config: GlobalConfig, amount: float) -> PayoutDecision:
    """
    Check a payout request: the account must be eligible (not blown,
    qualified) and the amount within the withdrawal cap.

    Args:
        account: Account the payout would be taken from.
        config: Global rule thresholds.
        amount: Requested withdrawal.

    Returns:
        PayoutDecision indicating if the payout is allowed.
    """
    cap = max_allowed_payout(account.balance, config)
    details = {"account_id": account.id, "requested": amount, "balance": account.balance}

    status = evaluate(account, config)
    if not status.can_payout:
        details["status_reason"] = status.reason
        return PayoutDecision(allow=False, reason_code="NOT_ELIGIBLE", max_allowed=cap, details=details)

    if amount is None or not math.isfinite(amount) or amount <= 0:
        return PayoutDecision(allow=False, reason_code="INVALID_AMOUNT", max_allowed=cap, details=details)

    if amount > cap:
        return PayoutDecision(allow=False, reason_code="EXCEEDS_CAP", max_allowed=cap, details=details)

    return PayoutDecision(allow=True, reason_code="OK", max_allowed=cap, details=details)


def execute_payout(
    account: Account,
    config: GlobalConfig,
    amount: Optional[float] = None,
    now: Optional[datetime] = None,
) -> Account:
    """
    Withdraw from an account and record the payout.

    The qualified-day counter restarts: daily_profits is cleared.

    Args:
        account: Account to withdraw from. Not modified.
        config: Global rule thresholds.
        amount: Requested withdrawal. Defaults to the max allowed amount.
        now: Payout timestamp. Defaults to the current UTC time.

    Returns:
        New Account with the payout applied.

    Raises:
        PayoutRejectedError: If the account is not eligible, or the amount
            is invalid or above the cap.
    """
    if amount is None:
        amount = max_allowed_payout(account.balance, config)

    decision = check_payout(account, config, amount)
    if not decision.allow:
        if decision.reason_code == "NOT_ELIGIBLE":
            message = f"Payout not allowed: {decision.details['status_reason']}"
        elif decision.reason_code == "EXCEEDS_CAP":
            message = f"Payout exceeds max allowed amount of ${decision.max_allowed:,.2f}"
        else:
            message = f"Payout amount must be positive (max allowed ${decision.max_allowed:,.2f})"
        logger.info(f"Payout rejected for {account.id}: {decision.reason_code} (requested={amount})")
        raise PayoutRejectedError(message, decision.reason_code, amount, decision.max_allowed)

    if now is None:
        now = datetime.now(timezone.utc)

    post_balance = account.balance - amount
    record = PayoutHistory(amount=amount, post_balance=post_balance, date=now.isoformat())

    logger.info(f"Payout executed for {account.id}: amount={amount:.2f} post_balance={post_balance:.2f}")

    return replace(
        account,
        balance=post_balance,
        daily_profits=[],
        history_payouts=[*account.history_payouts, record],
    )
