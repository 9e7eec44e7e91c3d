"""
Tests for Payout Monitor - Payout Policy
"""

from datetime import datetime, timezone

import pytest

from payout_monitor.core.models import Account, GlobalConfig, PayoutHistory
from payout_monitor.rules.payout_policy import (
    PayoutRejectedError,
    check_payout,
    execute_payout,
    max_allowed_payout,
)
from payout_monitor.rules.status_evaluator import evaluate

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return GlobalConfig(subsequent_payout_ratio=50)


@pytest.fixture
def account():
    return Account(
        id="ACC-PAY01",
        name="Payout",
        balance=1000,
        daily_profits=[200, 200, 200, 200, 200],
    )


def test_max_allowed_payout(config):
    assert max_allowed_payout(1000, config) == 500
    assert max_allowed_payout(-250, config) == 0
    assert max_allowed_payout(1000, GlobalConfig(subsequent_payout_ratio=0)) == 0
    assert max_allowed_payout(1000, GlobalConfig(subsequent_payout_ratio=100)) == 1000


def test_check_payout_reason_codes(account, config):
    assert check_payout(account, config, 500).reason_code == "OK"
    assert check_payout(account, config, 500.01).reason_code == "EXCEEDS_CAP"
    assert check_payout(account, config, 0).reason_code == "INVALID_AMOUNT"
    assert check_payout(account, config, float("nan")).reason_code == "INVALID_AMOUNT"


def test_over_cap_payout_is_rejected_and_state_unchanged(account, config):
    with pytest.raises(PayoutRejectedError) as exc_info:
        execute_payout(account, config, 600, now=NOW)

    err = exc_info.value
    assert err.reason_code == "EXCEEDS_CAP"
    assert err.max_allowed == 500
    assert err.requested == 600
    assert "$500.00" in str(err)

    assert account.balance == 1000
    assert account.history_payouts == []
    assert account.daily_profits == [200, 200, 200, 200, 200]


def test_payout_at_cap_succeeds(account, config):
    updated = execute_payout(account, config, 500, now=NOW)

    assert updated.balance == 500
    assert updated.daily_profits == []
    assert updated.history_payouts == [
        PayoutHistory(amount=500, post_balance=500, date=NOW.isoformat())
    ]
    # Input untouched
    assert account.balance == 1000
    assert account.history_payouts == []


def test_default_amount_is_max_allowed(account, config):
    updated = execute_payout(account, config, now=NOW)
    assert updated.history_payouts[-1].amount == 500
    assert updated.balance == 500


def test_payout_restarts_qualification(account, config):
    updated = execute_payout(account, config, 500, now=NOW)
    status = evaluate(updated, config)

    assert status.qualified_days == 0
    assert status.is_blown is False
    assert status.can_payout is False
    assert status.reason == "Growth required since last payout"


def test_rejected_payout_is_a_value_error(account, config):
    with pytest.raises(ValueError):
        execute_payout(account, config, -10)


def test_unqualified_account_cannot_pay_out(config):
    acc = Account(id="ACC-PAY02", name="Fresh", balance=1000)

    assert check_payout(acc, config, 500).reason_code == "NOT_ELIGIBLE"
    with pytest.raises(PayoutRejectedError) as exc_info:
        execute_payout(acc, config, 500, now=NOW)

    assert exc_info.value.reason_code == "NOT_ELIGIBLE"
    assert "Need 5 more qualified days" in str(exc_info.value)
    assert acc.balance == 1000
    assert acc.history_payouts == []


def test_blown_account_cannot_pay_out(config):
    acc = Account(id="ACC-PAY03", name="Blown", balance=-2500, daily_profits=[200] * 5)

    with pytest.raises(PayoutRejectedError) as exc_info:
        execute_payout(acc, config, 10, now=NOW)
    assert exc_info.value.reason_code == "NOT_ELIGIBLE"


def test_account_without_growth_cannot_pay_out_again(account, config):
    paid = execute_payout(account, config, 500, now=NOW)

    with pytest.raises(PayoutRejectedError) as exc_info:
        execute_payout(paid, config, 100, now=NOW)
    assert "Growth required since last payout" in str(exc_info.value)
