"""Derived views package."""

from ledger.queries.views import (
    budget_overview,
    build_dashboard,
    build_stats,
    current_period_transactions,
    describe_period,
    headline_label,
)

__all__ = [
    "budget_overview",
    "build_dashboard",
    "build_stats",
    "current_period_transactions",
    "describe_period",
    "headline_label",
]
