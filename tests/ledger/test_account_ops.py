"""
Tests for Payout Monitor - Account Ledger Operations
"""

import re

import pytest

from payout_monitor.core.models import Account, AccountType, GlobalConfig, PayoutHistory
from payout_monitor.ledger import account_ops


@pytest.fixture
def account():
    return Account(id="ACC-AAAAA", name="Main", balance=350.0, daily_profits=[200.0, -50.0, 200.0])


@pytest.mark.parametrize("raw,expected", [
    ("200", 200.0),
    (" -75.5 ", -75.5),
    ("1,250", 1250.0),
    ("-12,345.50", -12345.5),
    ("1,5", None),
    ("12,34", None),
    ("1,2345", None),
    (42, 42.0),
    ("", None),
    ("abc", None),
    (None, None),
    ("nan", None),
    ("inf", None),
    (True, None),
])
def test_parse_amount(raw, expected):
    assert account_ops.parse_amount(raw) == expected


def test_generate_account_id_format_and_uniqueness():
    ids = set()
    for _ in range(50):
        new_id = account_ops.generate_account_id(ids)
        assert re.fullmatch(r"ACC-[A-Z0-9]{5}", new_id)
        assert new_id not in ids
        ids.add(new_id)


def test_create_account_defaults():
    existing = [Account(id="ACC-11111", name="Account 1")]
    acc = account_ops.create_account(existing)

    assert acc.name == "Account 2"
    assert acc.type == AccountType.ALGO
    assert acc.balance == 0
    assert acc.daily_profits == []
    assert acc.history_payouts == []
    assert acc.id != "ACC-11111"


def test_add_profit_entry_updates_balance(account):
    updated = account_ops.add_profit_entry(account, "150", GlobalConfig())

    assert updated.daily_profits == [200.0, -50.0, 200.0, 150.0]
    assert updated.balance == 500.0
    assert account.daily_profits == [200.0, -50.0, 200.0]


def test_invalid_profit_entry_is_noop(account):
    assert account_ops.add_profit_entry(account, "twelve", GlobalConfig()) is account


def test_blown_account_takes_no_profit_entries():
    blown = Account(id="ACC-BLOWN", name="Blown", balance=-2500.0, daily_profits=[-2500.0])

    assert account_ops.add_profit_entry(blown, "1000", GlobalConfig(max_drawdown=2000)) is blown


def test_profit_entry_allowed_just_above_drawdown_limit():
    acc = Account(id="ACC-EDGE1", name="Edge", balance=-1999.0)
    updated = account_ops.add_profit_entry(acc, "500", GlobalConfig(max_drawdown=2000))

    assert updated.balance == -1499.0
    assert updated.daily_profits == [500.0]


def test_edit_profit_entry_moves_balance_by_delta(account):
    updated = account_ops.edit_profit_entry(account, 1, "100")

    assert updated.daily_profits == [200.0, 100.0, 200.0]
    assert updated.balance == pytest.approx(350.0 + (100.0 - (-50.0)))


@pytest.mark.parametrize("index,raw", [(3, "10"), (-1, "10"), (0, "x")])
def test_invalid_profit_edit_is_noop(account, index, raw):
    assert account_ops.edit_profit_entry(account, index, raw) is account


def test_delete_profit_entry_subtracts_value(account):
    updated = account_ops.delete_profit_entry(account, 0)

    assert updated.daily_profits == [-50.0, 200.0]
    assert updated.balance == 150.0
    assert account_ops.delete_profit_entry(account, 9) is account


def test_manual_payout_and_delete_round_trip(account):
    paid = account_ops.add_manual_payout(account, "100", date="2024-02-01T00:00:00+00:00")

    assert paid.balance == 250.0
    assert paid.history_payouts == [PayoutHistory(100.0, 250.0, "2024-02-01T00:00:00+00:00")]
    assert paid.daily_profits == account.daily_profits

    restored = account_ops.delete_payout_record(paid, 0)
    assert restored.balance == 350.0
    assert restored.history_payouts == []


@pytest.mark.parametrize("raw", ["0", "-20", "", "abc"])
def test_invalid_manual_payout_is_noop(account, raw):
    assert account_ops.add_manual_payout(account, raw) is account


def test_rename_and_retype(account):
    assert account_ops.rename_account(account, "  Swing  ").name == "Swing"
    assert account_ops.rename_account(account, "   ") is account
    assert account_ops.set_account_type(account, AccountType.MANUAL).type == AccountType.MANUAL


def test_replace_and_delete_account(account):
    other = Account(id="ACC-BBBBB", name="Other")
    accounts = [account, other]

    renamed = account_ops.rename_account(account, "Renamed")
    replaced = account_ops.replace_account(accounts, renamed)
    assert [a.name for a in replaced] == ["Renamed", "Other"]
    assert accounts[0].name == "Main"

    assert account_ops.delete_account(accounts, "ACC-AAAAA") == [other]
    assert account_ops.delete_account(accounts, "ACC-ZZZZZ") == accounts
