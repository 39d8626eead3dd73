"""
Derived Views

DESIGN DECISION: Views are re-derived from a store snapshot on every call.
Nothing is cached or maintained incrementally; a personal ledger holds
thousands of transactions, not millions, and re-deriving keeps every view
deterministic for the same snapshot and dates.

Each view only reads the snapshot it is given.
"""

from datetime import date, timedelta
from typing import Optional

from ledger.engine.aggregator import (
    category_breakdown,
    net_position,
    sum_by_type_in_period,
    trend_buckets,
)
from ledger.engine.budgets import budget_statuses
from ledger.engine.filters import filter_by_period, filter_by_range, recent_activity
from ledger.engine.periods import compute_period_range
from ledger.models.ledger import (
    BudgetStatus,
    DashboardView,
    PeriodRange,
    PeriodType,
    StatsView,
    Transaction,
    TransactionType,
    UserSettings,
)
from ledger.store import LedgerStore

RECENT_ITEMS_SHOWN = 5


def headline_label(settings: UserSettings) -> str:
    """Title of the home aggregate for the active balance mode."""
    return "Net Financial Position" if settings.enable_rollover else "Monthly Cashflow"


def describe_period(period: PeriodRange) -> str:
    """Format a period range for display."""
    start, end = period.start, period.end
    if start == end:
        return f"on {start.strftime('%d %b %Y')}"
    elif (
        start.day == 1
        and (start.year, start.month) == (end.year, end.month)
        and (end + timedelta(days=1)).day == 1
    ):
        return f"in {start.strftime('%B %Y')}"
    elif start.year == end.year:
        return f"from {start.strftime('%d %b')} to {end.strftime('%d %b %Y')}"
    else:
        return f"from {start.strftime('%d %b %Y')} to {end.strftime('%d %b %Y')}"


def current_period_transactions(store: LedgerStore, today: date) -> list[Transaction]:
    """Transactions of the accounting month containing today."""
    period = compute_period_range(today, store.settings.month_start_day)
    return filter_by_range(store.transactions, period)


def build_dashboard(
    store: LedgerStore,
    today: date,
    now_ms: int,
    window_hours: Optional[int] = None,
) -> DashboardView:
    """
    Home view: headline balance, current-period totals, recent activity.

    The headline is the all-time balance as of today with rollover on,
    and the current accounting period's net cashflow otherwise.
    """
    period = compute_period_range(today, store.settings.month_start_day)
    totals = sum_by_type_in_period(filter_by_range(store.transactions, period))
    recent = recent_activity(store.transactions, now_ms, window_hours)

    return DashboardView(
        headline_label=headline_label(store.settings),
        net_position=net_position(store.transactions, store.settings, today),
        period=period,
        period_description=describe_period(period),
        period_totals=totals,
        recent=tuple(recent[:RECENT_ITEMS_SHOWN]),
    )


def build_stats(
    store: LedgerStore,
    period_type: PeriodType,
    anchor: date,
) -> StatsView:
    """Statistics for the period of the given type containing the anchor."""
    transactions = filter_by_period(
        store.transactions,
        period_type,
        anchor,
        store.settings.month_start_day,
    )
    return StatsView(
        period_type=period_type,
        anchor=anchor,
        transactions=tuple(transactions),
        totals=sum_by_type_in_period(transactions),
        expense_breakdown=tuple(category_breakdown(transactions, TransactionType.EXPENSE)),
        income_breakdown=tuple(category_breakdown(transactions, TransactionType.INCOME)),
        trend=tuple(trend_buckets(transactions, period_type)),
    )


def budget_overview(store: LedgerStore, today: date) -> list[BudgetStatus]:
    """Progress of each capped category in the current accounting period."""
    return budget_statuses(store.budgets, current_period_transactions(store, today))
