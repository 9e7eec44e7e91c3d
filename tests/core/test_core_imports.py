# Payout Monitor Core Imports Test
"""
Tests that the packages and their public names import correctly.
"""


def test_rules_import():
    """Test that the rules package exposes the evaluator and payout policy."""
    from payout_monitor.rules import (
        evaluate,
        execute_payout,
        check_payout,
        max_allowed_payout,
        PayoutRejectedError,
    )
    assert callable(evaluate)
    assert callable(execute_payout)
    assert callable(check_payout)
    assert callable(max_allowed_payout)
    assert issubclass(PayoutRejectedError, ValueError)


def test_ledger_import():
    """Test that the ledger package exposes its operations."""
    from payout_monitor.ledger import (
        create_account,
        add_profit_entry,
        BlownAccountSweeper,
        portfolio_totals,
    )
    assert create_account is not None
    assert add_profit_entry is not None
    assert BlownAccountSweeper is not None
    assert portfolio_totals is not None


def test_default_thresholds():
    """Default rule thresholds match the documented values."""
    from payout_monitor.core import config
    from payout_monitor.core.models import GlobalConfig

    cfg = GlobalConfig()
    assert cfg.target_profit_threshold == config.DEFAULT_TARGET_PROFIT_THRESHOLD == 150
    assert cfg.required_days == config.DEFAULT_REQUIRED_DAYS == 5
    assert cfg.max_drawdown == config.DEFAULT_MAX_DRAWDOWN == 2000
    assert cfg.post_payout_liquidation_level == config.DEFAULT_POST_PAYOUT_LIQUIDATION_LEVEL == 0
    assert cfg.subsequent_payout_ratio == config.DEFAULT_SUBSEQUENT_PAYOUT_RATIO == 50
