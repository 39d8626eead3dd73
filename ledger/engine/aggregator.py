"""
Aggregator

Reduces transaction subsets into the figures the views show.

Two balances exist and must not be confused:
- sum_by_type_in_period(): income/expense of an already-filtered subset
- total_historical_balance(): all-time net position up to a date

net_position() picks between them according to the rollover setting.
All arithmetic is on raw Decimal amounts; there is no currency conversion.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledger.constants import DAYS_SHORT, MONTHS
from ledger.engine.filters import filter_by_range
from ledger.engine.periods import compute_period_range
from ledger.models.ledger import (
    CategoryTotal,
    PeriodTotals,
    PeriodType,
    Transaction,
    TransactionType,
    TrendBucket,
    UserSettings,
)


def sum_by_type_in_period(transactions: Iterable[Transaction]) -> PeriodTotals:
    """Sum amounts of a pre-filtered subset, income and expense independently."""
    income = Decimal("0")
    expense = Decimal("0")
    for tx in transactions:
        if tx.is_income:
            income += tx.amount
        else:
            expense += tx.amount
    return PeriodTotals(income=income, expense=expense)


def total_historical_balance(
    all_transactions: Iterable[Transaction],
    as_of: Optional[date] = None,
) -> Decimal:
    """
    All-time net position: +income, -expense over every transaction
    dated on or before as_of (default: local today).

    Transactions dated after as_of are not yet realized and are excluded.
    """
    if as_of is None:
        as_of = date.today()
    return sum(
        (tx.signed_amount for tx in all_transactions if tx.date <= as_of),
        Decimal("0"),
    )


def net_position(
    all_transactions: Iterable[Transaction],
    settings: UserSettings,
    today: date,
) -> Decimal:
    """
    Headline figure of the home view.

    With rollover enabled this is the all-time balance as of today;
    otherwise it is the current accounting period's net cashflow.
    """
    if settings.enable_rollover:
        return total_historical_balance(all_transactions, today)
    current = compute_period_range(today, settings.month_start_day)
    return sum_by_type_in_period(filter_by_range(all_transactions, current)).net


def category_breakdown(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[CategoryTotal]:
    """
    Per-category sums for one transaction type.

    Categories appear in the order they are first seen. Unknown category
    names are grouped on the raw string like any other.
    """
    totals: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.type != transaction_type:
            continue
        totals[tx.category] = totals.get(tx.category, Decimal("0")) + tx.amount
    return [CategoryTotal(name=name, value=value) for name, value in totals.items()]


def _bucket_key(day: date, period_type: PeriodType) -> tuple[int, str]:
    if period_type == PeriodType.YEAR:
        index = day.month - 1
        return index, MONTHS[index][:3]
    elif period_type == PeriodType.MONTH:
        return day.day, str(day.day)
    # Day and week views group by Sunday-based weekday
    weekday = (day.weekday() + 1) % 7
    return weekday, DAYS_SHORT[weekday]


def trend_buckets(
    transactions: Iterable[Transaction],
    period_type: PeriodType,
) -> list[TrendBucket]:
    """
    Income/expense per bucket for a trend chart, sorted by bucket key.

    Buckets are months of the year for a year view, days of the month for
    a month view and weekdays otherwise. Empty buckets are omitted.
    """
    groups: dict[int, dict] = {}
    for tx in transactions:
        key, label = _bucket_key(tx.date, period_type)
        if key not in groups:
            groups[key] = {
                "label": label,
                "income": Decimal("0"),
                "expense": Decimal("0"),
            }
        if tx.is_income:
            groups[key]["income"] += tx.amount
        else:
            groups[key]["expense"] += tx.amount

    return [
        TrendBucket(
            key=key,
            label=values["label"],
            income=values["income"],
            expense=values["expense"],
        )
        for key, values in sorted(groups.items())
    ]
