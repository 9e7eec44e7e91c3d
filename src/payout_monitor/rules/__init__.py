# Payout Monitor Rules Module
"""
Rules module provides the status evaluator and the payout policy.
"""

from .status_evaluator import evaluate, count_qualified_days
from .payout_policy import (
    PayoutDecision,
    PayoutRejectedError,
    check_payout,
    execute_payout,
    max_allowed_payout,
)

__all__ = [
    # Status
    "evaluate",
    "count_qualified_days",
    # Payout
    "PayoutDecision",
    "PayoutRejectedError",
    "check_payout",
    "execute_payout",
    "max_allowed_payout",
]
