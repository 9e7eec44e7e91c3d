# Payout Monitor Ledger Module
"""
Ledger module provides account mutations, blown-account sweeping and portfolio summaries.
"""

from .account_ops import (
    parse_amount,
    generate_account_id,
    create_account,
    add_profit_entry,
    edit_profit_entry,
    delete_profit_entry,
    add_manual_payout,
    delete_payout_record,
    rename_account,
    set_account_type,
    replace_account,
    delete_account,
)
from .blown_sweeper import BlownAccountSweeper
from .portfolio_summary import (
    portfolio_totals,
    accounts_frame,
    profit_history_frame,
    payout_history_frame,
)

__all__ = [
    # Account ops
    "parse_amount",
    "generate_account_id",
    "create_account",
    "add_profit_entry",
    "edit_profit_entry",
    "delete_profit_entry",
    "add_manual_payout",
    "delete_payout_record",
    "rename_account",
    "set_account_type",
    "replace_account",
    "delete_account",
    # Sweeper
    "BlownAccountSweeper",
    # Summary
    "portfolio_totals",
    "accounts_frame",
    "profit_history_frame",
    "payout_history_frame",
]
