"""Tests for the Transaction Filter."""

import pytest
from datetime import date
from decimal import Decimal

from ledger.engine.filters import (
    MS_PER_HOUR,
    filter_by_period,
    filter_by_type,
    newest_first,
    recent_activity,
)
from ledger.models.ledger import PeriodType, Transaction, TransactionType


def make_tx(tx_type, amount, day, timestamp=0, category="Misc", tx_id=None):
    data = dict(
        type=tx_type,
        category=category,
        amount=Decimal(str(amount)),
        date=day,
        timestamp=timestamp,
    )
    if tx_id is not None:
        data["id"] = tx_id
    return Transaction(**data)


@pytest.fixture
def march_transactions():
    return [
        make_tx("income", 1000, date(2024, 3, 1), timestamp=100, tx_id="salary"),
        make_tx("expense", 300, date(2024, 3, 10), timestamp=300, tx_id="rent"),
        make_tx("expense", 200, date(2024, 4, 1), timestamp=200, tx_id="april"),
    ]


class TestFilterByPeriod:
    """Tests for filter_by_period."""

    def test_month_excludes_other_months(self, march_transactions):
        """Test the April row falls outside the March period."""
        result = filter_by_period(march_transactions, PeriodType.MONTH, date(2024, 3, 15), 1)
        assert [tx.id for tx in result] == ["rent", "salary"]

    def test_month_with_custom_start_day(self, march_transactions):
        """Test a start day of 5 gives the period 5 Mar to 4 Apr."""
        result = filter_by_period(march_transactions, PeriodType.MONTH, date(2024, 3, 15), 5)
        # March 1 belongs to the previous period, April 1 to this one
        assert [tx.id for tx in result] == ["rent", "april"]

    def test_month_bounds_are_inclusive(self):
        """Test rows on the first and last day are included."""
        txs = [
            make_tx("expense", 1, date(2024, 2, 25), timestamp=1, tx_id="first"),
            make_tx("expense", 1, date(2024, 3, 24), timestamp=2, tx_id="last"),
            make_tx("expense", 1, date(2024, 3, 25), timestamp=3, tx_id="next"),
        ]
        result = filter_by_period(txs, PeriodType.MONTH, date(2024, 3, 10), 25)
        assert {tx.id for tx in result} == {"first", "last"}

    def test_day_matches_calendar_date_only(self, march_transactions):
        """Test day filtering is date equality."""
        result = filter_by_period(march_transactions, PeriodType.DAY, date(2024, 3, 10), 1)
        assert [tx.id for tx in result] == ["rent"]

    def test_week_is_calendar_week(self):
        """Test the Sunday-Saturday week, not the last seven days."""
        txs = [
            make_tx("expense", 1, date(2024, 3, 9), tx_id="saturday_before"),
            make_tx("expense", 1, date(2024, 3, 10), tx_id="sunday"),
            make_tx("expense", 1, date(2024, 3, 16), tx_id="saturday"),
            make_tx("expense", 1, date(2024, 3, 17), tx_id="next_sunday"),
        ]
        result = filter_by_period(txs, PeriodType.WEEK, date(2024, 3, 13), 1)
        assert {tx.id for tx in result} == {"sunday", "saturday"}

    def test_year(self, march_transactions):
        """Test year filtering by calendar year."""
        extra = make_tx("income", 5, date(2023, 12, 31), tx_id="last_year")
        result = filter_by_period(march_transactions + [extra], PeriodType.YEAR, date(2024, 6, 1), 1)
        assert {tx.id for tx in result} == {"salary", "rent", "april"}

    def test_sorted_newest_first(self, march_transactions):
        """Test output is descending by timestamp."""
        result = filter_by_period(march_transactions, PeriodType.YEAR, date(2024, 3, 1), 1)
        assert [tx.timestamp for tx in result] == [300, 200, 100]

    def test_ties_keep_input_order(self):
        """Test equal timestamps keep their relative order."""
        txs = [
            make_tx("expense", 1, date(2024, 3, 1), timestamp=50, tx_id="a"),
            make_tx("expense", 1, date(2024, 3, 2), timestamp=50, tx_id="b"),
            make_tx("expense", 1, date(2024, 3, 3), timestamp=90, tx_id="c"),
            make_tx("expense", 1, date(2024, 3, 4), timestamp=50, tx_id="d"),
        ]
        result = filter_by_period(txs, PeriodType.MONTH, date(2024, 3, 15), 1)
        assert [tx.id for tx in result] == ["c", "a", "b", "d"]

    def test_filtering_twice_is_a_no_op(self, march_transactions):
        """Test re-filtering for the same period changes nothing."""
        once = filter_by_period(march_transactions, PeriodType.MONTH, date(2024, 3, 15), 1)
        twice = filter_by_period(once, PeriodType.MONTH, date(2024, 3, 15), 1)
        assert twice == once

    def test_input_not_mutated(self, march_transactions):
        """Test the input list keeps its order and contents."""
        before = list(march_transactions)
        filter_by_period(march_transactions, PeriodType.MONTH, date(2024, 3, 15), 1)
        assert march_transactions == before

    def test_empty_input(self):
        """Test no input gives no output."""
        assert filter_by_period([], PeriodType.MONTH, date(2024, 3, 15), 1) == []


class TestOtherFilters:
    """Tests for type filters, ordering and recent activity."""

    def test_filter_by_type(self, march_transactions):
        """Test partition by type."""
        expenses = filter_by_type(march_transactions, TransactionType.EXPENSE)
        assert {tx.id for tx in expenses} == {"rent", "april"}

    def test_newest_first_returns_new_list(self, march_transactions):
        """Test newest_first does not sort in place."""
        ordered = newest_first(march_transactions)
        assert ordered is not march_transactions
        assert ordered[0].id == "rent"

    def test_recent_activity_uses_timestamp_window(self):
        """Test the creation timestamp decides, not the accounting date."""
        now = 1_000 * MS_PER_HOUR
        txs = [
            make_tx("expense", 1, date(2020, 1, 1), timestamp=now - 47 * MS_PER_HOUR, tx_id="inside"),
            make_tx("expense", 1, date(2024, 3, 1), timestamp=now - 48 * MS_PER_HOUR, tx_id="edge"),
            make_tx("expense", 1, date(2024, 3, 1), timestamp=now - MS_PER_HOUR, tx_id="newest"),
        ]
        result = recent_activity(txs, now, window_hours=48)
        assert [tx.id for tx in result] == ["newest", "inside"]

    def test_recent_activity_defaults_to_48_hours(self):
        """Test the configured default window."""
        now = 1_000 * MS_PER_HOUR
        txs = [
            make_tx("expense", 1, date(2024, 3, 1), timestamp=now - 30 * MS_PER_HOUR, tx_id="a"),
            make_tx("expense", 1, date(2024, 3, 1), timestamp=now - 50 * MS_PER_HOUR, tx_id="b"),
        ]
        assert [tx.id for tx in recent_activity(txs, now)] == ["a"]
