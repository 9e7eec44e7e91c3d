"""
Payout Monitor - Status Evaluator
=================================

Derives the qualification, blown and payout-eligibility state of an account
from its current snapshot and the global rule thresholds.

Two-stage risk policy:
    * Before the first payout the account blows at -max_drawdown.
    * After any payout it blows at post_payout_liquidation_level.

Pure function: no I/O, no stored state, same input gives the same status.
"""

from payout_monitor.core.models import Account, AccountStatus, GlobalConfig

FIRST_PAYOUT_READY = "First Payout Ready"
SUBSEQUENT_PAYOUT_READY = "Subsequent Payout Ready"
GROWTH_REQUIRED = "Growth required since last payout"


def _money(value: float) -> str:
    return f"${value:,.2f}"


def count_qualified_days(account: Account, config: GlobalConfig) -> int:
    """Number of entries at or above the daily profit target."""
    return sum(1 for p in account.daily_profits if p >= config.target_profit_threshold)


def _days_needed_reason(qualified_days: int, config: GlobalConfig) -> str:
    return f"Need {config.required_days - qualified_days} more qualified days"


def evaluate(account: Account, config: GlobalConfig) -> AccountStatus:
    """
    Evaluate an account against the payout and risk rules.

    Args:
        account: Current account snapshot.
        config: Global rule thresholds.

    Returns:
        AccountStatus with qualified day count, blown flag, payout flag and
        the reason explaining the current state.
    """
    balance = account.balance
    qualified_days = count_qualified_days(account, config)
    has_payouts = len(account.history_payouts) > 0

    # Rule 1: Drawdown / liquidation limit (two-stage)
    if not has_payouts:
        if balance <= -config.max_drawdown:
            return AccountStatus(
                qualified_days=qualified_days,
                is_blown=True,
                can_payout=False,
                reason=f"Drawdown Limit Hit ({_money(balance)}) at -{_money(config.max_drawdown)} limit",
            )
    elif balance <= config.post_payout_liquidation_level:
        return AccountStatus(
            qualified_days=qualified_days,
            is_blown=True,
            can_payout=False,
            reason=f"Liquidated at {_money(config.post_payout_liquidation_level)}",
        )

    days_ok = qualified_days >= config.required_days

    # Rule 2: Payout eligibility
    if not has_payouts:
        if days_ok and balance > 0:
            can_payout, reason = True, FIRST_PAYOUT_READY
        else:
            # Also the balance <= 0 case, where the count reads 0 or less
            can_payout, reason = False, _days_needed_reason(qualified_days, config)
    else:
        last_post_balance = account.history_payouts[-1].post_balance
        grown = balance > last_post_balance
        if days_ok and grown:
            can_payout, reason = True, SUBSEQUENT_PAYOUT_READY
        elif not grown:
            # Growth message wins over the day count
            can_payout, reason = False, GROWTH_REQUIRED
        else:
            can_payout, reason = False, _days_needed_reason(qualified_days, config)

    return AccountStatus(
        qualified_days=qualified_days,
        is_blown=False,
        can_payout=can_payout,
        reason=reason,
    )
