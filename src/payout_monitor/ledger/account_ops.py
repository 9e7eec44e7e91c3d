"""
Payout Monitor - Account Ledger Operations
==========================================

Mutations on accounts and on the account collection. Every operation
returns a new value and leaves its inputs untouched, so callers replace the
whole account (or collection) after each change.

Balance stays coupled to the profit history: editing an entry from a to b
moves the balance by b - a, deleting an entry removes its value.
Invalid input is a no-op: the original account comes back unchanged.
"""

import math
import random
import re
import string
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from payout_monitor.core import config as app_config
from payout_monitor.core.logging_utils import get_logger
from payout_monitor.core.models import Account, AccountType, GlobalConfig, PayoutHistory
from payout_monitor.rules.status_evaluator import evaluate

logger = get_logger(__name__)

_ID_ALPHABET = string.ascii_uppercase + string.digits
_THOUSANDS_RE = re.compile(r"[+-]?\d{1,3}(,\d{3})+(\.\d*)?")


def parse_amount(raw: Any) -> Optional[float]:
    """
    Parse user input into a finite float.
    Commas are accepted only as thousands separators ("1,250.5"); "1,5" is
    rejected rather than read as 15.
    Returns None for empty, non-numeric, NaN or infinite input.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
        if "," in raw:
            if not _THOUSANDS_RE.fullmatch(raw):
                return None
            raw = raw.replace(",", "")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def generate_account_id(existing_ids: Iterable[str] = ()) -> str:
    """Returns a new 'ACC-XXXXX' identifier not present in existing_ids."""
    taken = set(existing_ids)
    while True:
        token = "".join(random.choices(_ID_ALPHABET, k=app_config.ACCOUNT_ID_LENGTH))
        account_id = f"{app_config.ACCOUNT_ID_PREFIX}-{token}"
        if account_id not in taken:
            return account_id


def create_account(
    accounts: List[Account],
    name: Optional[str] = None,
    account_type: AccountType = AccountType.ALGO,
) -> Account:
    """New empty account (balance 0, no history) with a unique id."""
    account = Account(
        id=generate_account_id(a.id for a in accounts),
        name=name if name else f"Account {len(accounts) + 1}",
        type=account_type,
    )
    logger.info(f"Created account {account.id} ({account.name})")
    return account


def add_profit_entry(account: Account, raw_value: Any, config: GlobalConfig) -> Account:
    """
    Append a daily profit/loss entry and apply it to the balance.
    A blown account takes no further entries.
    """
    value = parse_amount(raw_value)
    if value is None:
        logger.debug(f"Ignoring invalid profit entry for {account.id}: {raw_value!r}")
        return account
    if evaluate(account, config).is_blown:
        logger.info(f"Ignoring profit entry for blown account {account.id}")
        return account
    return replace(
        account,
        balance=account.balance + value,
        daily_profits=[*account.daily_profits, value],
    )


def _valid_index(items: list, index: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(items)


def edit_profit_entry(account: Account, index: int, raw_value: Any) -> Account:
    """Replace entry `index`; the balance moves by the difference."""
    value = parse_amount(raw_value)
    if value is None or not _valid_index(account.daily_profits, index):
        logger.debug(f"Ignoring invalid profit edit for {account.id}: index={index} value={raw_value!r}")
        return account

    old_value = account.daily_profits[index]
    profits = list(account.daily_profits)
    profits[index] = value
    return replace(account, balance=account.balance + (value - old_value), daily_profits=profits)


def delete_profit_entry(account: Account, index: int) -> Account:
    """Remove entry `index` and take its value back out of the balance."""
    if not _valid_index(account.daily_profits, index):
        logger.debug(f"Ignoring invalid profit delete for {account.id}: index={index}")
        return account

    profits = list(account.daily_profits)
    removed = profits.pop(index)
    return replace(account, balance=account.balance - removed, daily_profits=profits)


def add_manual_payout(account: Account, raw_amount: Any, date: Optional[str] = None) -> Account:
    """
    Record a payout taken outside the app.

    Unlike execute_payout there is no cap check and the profit history is
    kept, the record only documents money that already left the account.
    """
    amount = parse_amount(raw_amount)
    if amount is None or amount <= 0:
        logger.debug(f"Ignoring invalid manual payout for {account.id}: {raw_amount!r}")
        return account

    if date is None:
        date = datetime.now(timezone.utc).isoformat()

    post_balance = account.balance - amount
    record = PayoutHistory(amount=amount, post_balance=post_balance, date=date)
    logger.info(f"Manual payout recorded for {account.id}: amount={amount:.2f}")
    return replace(
        account,
        balance=post_balance,
        history_payouts=[*account.history_payouts, record],
    )


def delete_payout_record(account: Account, index: int) -> Account:
    """Remove payout record `index` and credit its amount back to the balance."""
    if not _valid_index(account.history_payouts, index):
        logger.debug(f"Ignoring invalid payout delete for {account.id}: index={index}")
        return account

    payouts = list(account.history_payouts)
    removed = payouts.pop(index)
    logger.info(f"Payout record removed for {account.id}: amount={removed.amount:.2f}")
    return replace(account, balance=account.balance + removed.amount, history_payouts=payouts)


def rename_account(account: Account, name: str) -> Account:
    name = (name or "").strip()
    if not name:
        return account
    return replace(account, name=name)


def set_account_type(account: Account, account_type: AccountType) -> Account:
    return replace(account, type=AccountType(account_type))


def replace_account(accounts: List[Account], updated: Account) -> List[Account]:
    """Collection with the account sharing updated.id swapped for updated."""
    return [updated if a.id == updated.id else a for a in accounts]


def delete_account(accounts: List[Account], account_id: str) -> List[Account]:
    remaining = [a for a in accounts if a.id != account_id]
    if len(remaining) < len(accounts):
        logger.info(f"Deleted account {account_id}")
    return remaining
