"""
Payout Monitor - Portfolio Summary
==================================

Tabular views over accounts for the dashboard: portfolio totals, one row per
account with its evaluated status, and per-account profit and payout history.
"""

from typing import Dict, List

import pandas as pd

from payout_monitor.core.models import Account, GlobalConfig
from payout_monitor.rules.payout_policy import max_allowed_payout
from payout_monitor.rules.status_evaluator import evaluate

ACCOUNT_COLUMNS = [
    "id", "name", "type", "balance", "qualified_days",
    "is_blown", "can_payout", "reason", "payout_count", "total_paid", "max_payout",
]


def total_paid(account: Account) -> float:
    return sum(p.amount for p in account.history_payouts)


def portfolio_totals(accounts: List[Account]) -> Dict[str, float]:
    """Totals shown in the dashboard header."""
    return {
        "account_count": len(accounts),
        "total_balance": sum(a.balance for a in accounts),
        "total_payouts": sum(total_paid(a) for a in accounts),
    }


def accounts_frame(accounts: List[Account], config: GlobalConfig) -> pd.DataFrame:
    """One row per account with its evaluated status."""
    rows = []
    for account in accounts:
        status = evaluate(account, config)
        rows.append({
            "id": account.id,
            "name": account.name,
            "type": account.type.value,
            "balance": account.balance,
            "qualified_days": status.qualified_days,
            "is_blown": status.is_blown,
            "can_payout": status.can_payout,
            "reason": status.reason,
            "payout_count": len(account.history_payouts),
            "total_paid": total_paid(account),
            "max_payout": max_allowed_payout(account.balance, config),
        })
    return pd.DataFrame(rows, columns=ACCOUNT_COLUMNS)


def profit_history_frame(account: Account, config: GlobalConfig) -> pd.DataFrame:
    """
    Daily entries as a frame: day (1-based), profit, qualified.
    """
    df = pd.DataFrame({"profit": pd.Series(account.daily_profits, dtype="float64")})
    df.insert(0, "day", range(1, len(df) + 1))
    df["qualified"] = df["profit"] >= config.target_profit_threshold
    return df


def payout_history_frame(account: Account) -> pd.DataFrame:
    """Payout records in chronological order."""
    return pd.DataFrame(
        [
            {"amount": p.amount, "post_balance": p.post_balance, "date": p.date}
            for p in account.history_payouts
        ],
        columns=["amount", "post_balance", "date"],
    )
