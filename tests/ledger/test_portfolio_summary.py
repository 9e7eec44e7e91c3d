"""
Tests for Payout Monitor - Portfolio Summary
"""

import pytest

from payout_monitor.core.models import Account, AccountType, GlobalConfig, PayoutHistory
from payout_monitor.ledger.portfolio_summary import (
    ACCOUNT_COLUMNS,
    accounts_frame,
    payout_history_frame,
    portfolio_totals,
    profit_history_frame,
)


@pytest.fixture
def config():
    return GlobalConfig()


@pytest.fixture
def accounts():
    return [
        Account(id="ACC-00001", name="Ready", balance=1000, daily_profits=[200] * 5),
        Account(
            id="ACC-00002",
            name="Paid",
            type=AccountType.MANUAL,
            balance=600,
            daily_profits=[100, 180],
            history_payouts=[
                PayoutHistory(300, 700, "2024-01-01T00:00:00+00:00"),
                PayoutHistory(200, 500, "2024-02-01T00:00:00+00:00"),
            ],
        ),
    ]


def test_portfolio_totals(accounts):
    totals = portfolio_totals(accounts)
    assert totals == {"account_count": 2, "total_balance": 1600, "total_payouts": 500}


def test_portfolio_totals_empty():
    assert portfolio_totals([]) == {"account_count": 0, "total_balance": 0, "total_payouts": 0}


def test_accounts_frame(accounts, config):
    df = accounts_frame(accounts, config)

    assert list(df.columns) == ACCOUNT_COLUMNS
    assert df["can_payout"].tolist() == [True, False]
    assert df["qualified_days"].tolist() == [5, 1]
    assert df["type"].tolist() == ["Algo", "Manual"]
    assert df["total_paid"].tolist() == [0, 500]
    assert df["max_payout"].tolist() == [500, 300]
    assert df.loc[1, "reason"] == "Need 4 more qualified days"


def test_accounts_frame_empty(config):
    df = accounts_frame([], config)
    assert df.empty
    assert list(df.columns) == ACCOUNT_COLUMNS


def test_profit_history_frame(accounts, config):
    df = profit_history_frame(accounts[1], config)

    assert df["day"].tolist() == [1, 2]
    assert df["profit"].tolist() == [100.0, 180.0]
    assert df["qualified"].tolist() == [False, True]


def test_profit_history_frame_empty(config):
    df = profit_history_frame(Account(id="ACC-X", name="Empty"), config)
    assert df.empty
    assert list(df.columns) == ["day", "profit", "qualified"]


def test_payout_history_frame(accounts):
    df = payout_history_frame(accounts[1])
    assert df["amount"].tolist() == [300, 200]
    assert df["post_balance"].iloc[-1] == 500
