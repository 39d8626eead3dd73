"""Period accounting and aggregation engine."""

from ledger.engine.aggregator import (
    category_breakdown,
    net_position,
    sum_by_type_in_period,
    total_historical_balance,
    trend_buckets,
)
from ledger.engine.budgets import (
    budget_statuses,
    evaluate_budget,
    find_budget,
    set_budget_limit,
    spent_in_category,
)
from ledger.engine.filters import (
    filter_by_period,
    filter_by_range,
    filter_by_type,
    newest_first,
    recent_activity,
)
from ledger.engine.periods import (
    InvalidMonthStartDayError,
    add_months,
    calendar_date,
    compute_period_range,
    day_range,
    period_range,
    week_range,
    year_range,
)

__all__ = [
    # Periods
    "InvalidMonthStartDayError",
    "add_months",
    "calendar_date",
    "compute_period_range",
    "day_range",
    "period_range",
    "week_range",
    "year_range",
    # Filters
    "filter_by_period",
    "filter_by_range",
    "filter_by_type",
    "newest_first",
    "recent_activity",
    # Aggregates
    "category_breakdown",
    "net_position",
    "sum_by_type_in_period",
    "total_historical_balance",
    "trend_buckets",
    # Budgets
    "budget_statuses",
    "evaluate_budget",
    "find_budget",
    "set_budget_limit",
    "spent_in_category",
]
