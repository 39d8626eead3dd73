"""
Transaction Filter

Selects the transactions that fall inside a period and orders them
most recent first. Inputs are never mutated; every call returns a new list.
"""

from datetime import date
from typing import Iterable, Optional

from ledger.config import get_settings
from ledger.engine.periods import period_range
from ledger.models.ledger import PeriodRange, PeriodType, Transaction, TransactionType

MS_PER_HOUR = 60 * 60 * 1000


def newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Order by timestamp, most recent first.

    Equal timestamps keep their input order (sorted() is stable in reverse too).
    """
    return sorted(transactions, key=lambda tx: tx.timestamp, reverse=True)


def filter_by_range(
    transactions: Iterable[Transaction],
    period: PeriodRange,
) -> list[Transaction]:
    """Transactions dated within [period.start, period.end], newest first."""
    return newest_first(tx for tx in transactions if period.contains(tx.date))


def filter_by_period(
    transactions: Iterable[Transaction],
    period_type: PeriodType,
    anchor: date,
    month_start_day: int,
) -> list[Transaction]:
    """
    Transactions inside the period of the given type containing the anchor.

    - day: date equals the anchor
    - week: date within the Sunday-Saturday week of the anchor
    - month: date within the accounting month of the anchor
    - year: date in the anchor's calendar year
    """
    return filter_by_range(
        transactions,
        period_range(period_type, anchor, month_start_day),
    )


def filter_by_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[Transaction]:
    return [tx for tx in transactions if tx.type == transaction_type]


def recent_activity(
    transactions: Iterable[Transaction],
    now_ms: int,
    window_hours: Optional[int] = None,
) -> list[Transaction]:
    """
    Transactions created within the last window_hours, newest first.

    Uses the creation timestamp, not the accounting date. The window
    defaults to the configured recent_activity_hours.
    """
    if window_hours is None:
        window_hours = get_settings().engine.recent_activity_hours
    window_ms = window_hours * MS_PER_HOUR
    return newest_first(
        tx for tx in transactions if now_ms - tx.timestamp < window_ms
    )
