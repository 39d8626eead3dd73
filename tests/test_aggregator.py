"""Tests for the Aggregator."""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from ledger.engine.aggregator import (
    category_breakdown,
    net_position,
    sum_by_type_in_period,
    total_historical_balance,
    trend_buckets,
)
from ledger.engine.filters import filter_by_period
from ledger.models.ledger import (
    PeriodTotals,
    PeriodType,
    Transaction,
    TransactionType,
    UserSettings,
)


def make_tx(tx_type, amount, day, category="Misc", timestamp=0):
    return Transaction(
        type=tx_type,
        category=category,
        amount=Decimal(str(amount)),
        date=day,
        timestamp=timestamp,
    )


@pytest.fixture
def ledger_history():
    return [
        make_tx("income", 1000, date(2024, 2, 1), "Salary"),
        make_tx("expense", 400, date(2024, 2, 20), "Rent"),
        make_tx("income", 1000, date(2024, 3, 1), "Salary"),
        make_tx("expense", 300, date(2024, 3, 10), "Food"),
        make_tx("expense", 50, date(2024, 3, 12), "Transport"),
        make_tx("expense", 200, date(2024, 4, 1), "Food"),
    ]


class TestSumByType:
    """Tests for sum_by_type_in_period."""

    def test_scenario_march_totals(self):
        """Test the April row is excluded before summing."""
        txs = [
            make_tx("income", 1000, date(2024, 3, 1)),
            make_tx("expense", 300, date(2024, 3, 10)),
            make_tx("expense", 200, date(2024, 4, 1)),
        ]
        march = filter_by_period(txs, PeriodType.MONTH, date(2024, 3, 15), 1)
        totals = sum_by_type_in_period(march)
        assert totals == PeriodTotals(income=Decimal("1000"), expense=Decimal("300"))
        assert totals.net == Decimal("700")

    def test_empty_subset_is_zero(self):
        """Test no transactions give zero totals."""
        totals = sum_by_type_in_period([])
        assert totals.income == Decimal("0")
        assert totals.expense == Decimal("0")

    def test_additive_over_disjoint_sets(self, ledger_history):
        """Test totals of a union equal the sum of the parts."""
        for split in range(len(ledger_history) + 1):
            a, b = ledger_history[:split], ledger_history[split:]
            assert sum_by_type_in_period(a + b) == (
                sum_by_type_in_period(a) + sum_by_type_in_period(b)
            )

    def test_decimal_amounts_are_exact(self):
        """Test fractional amounts do not drift."""
        txs = [make_tx("expense", "0.1", date(2024, 1, 1)) for _ in range(3)]
        assert sum_by_type_in_period(txs).expense == Decimal("0.3")


class TestHistoricalBalance:
    """Tests for total_historical_balance and net_position."""

    def test_future_dated_income_excluded(self):
        """Test a transaction dated after today is not yet counted."""
        today = date(2024, 3, 15)
        txs = [
            make_tx("income", 500, date(2024, 3, 1)),
            make_tx("expense", 100, date(2024, 3, 15)),
            make_tx("income", 9999, date(2024, 3, 16)),
        ]
        assert total_historical_balance(txs, today) == Decimal("400")

    def test_balance_grows_by_each_day_net(self, ledger_history):
        """Test the balance at d is the balance at d-1 plus d's net."""
        day = date(2024, 1, 31)
        while day <= date(2024, 4, 2):
            same_day = [tx for tx in ledger_history if tx.date == day]
            assert total_historical_balance(ledger_history, day) == (
                total_historical_balance(ledger_history, day - timedelta(days=1))
                + sum_by_type_in_period(same_day).net
            )
            day += timedelta(days=1)

    def test_net_position_with_rollover(self, ledger_history):
        """Test rollover shows the all-time balance as of today."""
        settings = UserSettings(month_start_day=1, enable_rollover=True)
        # Feb: +600, Mar up to the 15th: +650; April is still in the future
        assert net_position(ledger_history, settings, date(2024, 3, 15)) == Decimal("1250")

    def test_net_position_without_rollover(self, ledger_history):
        """Test without rollover only the current period counts."""
        settings = UserSettings(month_start_day=1, enable_rollover=False)
        assert net_position(ledger_history, settings, date(2024, 3, 15)) == Decimal("650")

    def test_net_position_uses_month_start_day(self, ledger_history):
        """Test the current period follows the configured start day."""
        settings = UserSettings(month_start_day=15, enable_rollover=False)
        # Period [2024-02-15, 2024-03-14] holds Rent, March salary, Food and Transport
        assert net_position(ledger_history, settings, date(2024, 3, 1)) == Decimal("250")


class TestBreakdownAndTrend:
    """Tests for category_breakdown and trend_buckets."""

    def test_category_breakdown_first_seen_order(self, ledger_history):
        """Test categories are grouped in first-seen order."""
        breakdown = category_breakdown(ledger_history, TransactionType.EXPENSE)
        assert [(c.name, c.value) for c in breakdown] == [
            ("Rent", Decimal("400")),
            ("Food", Decimal("500")),
            ("Transport", Decimal("50")),
        ]

    def test_category_breakdown_keeps_unknown_names(self):
        """Test unknown category names group like any other."""
        txs = [
            make_tx("income", 10, date(2024, 1, 1), "Lottery"),
            make_tx("income", 5, date(2024, 1, 2), "Lottery"),
        ]
        breakdown = category_breakdown(txs, TransactionType.INCOME)
        assert len(breakdown) == 1
        assert breakdown[0].value == Decimal("15")

    def test_year_trend_by_month(self, ledger_history):
        """Test year buckets are months with short labels."""
        buckets = trend_buckets(ledger_history, PeriodType.YEAR)
        assert [(b.key, b.label) for b in buckets] == [(1, "Feb"), (2, "Mar"), (3, "Apr")]
        march = buckets[1]
        assert march.income == Decimal("1000")
        assert march.expense == Decimal("350")

    def test_month_trend_by_day(self):
        """Test month buckets are days of the month, sorted."""
        txs = [
            make_tx("expense", 5, date(2024, 3, 20)),
            make_tx("expense", 7, date(2024, 3, 3)),
            make_tx("income", 9, date(2024, 3, 20)),
        ]
        buckets = trend_buckets(txs, PeriodType.MONTH)
        assert [(b.key, b.label) for b in buckets] == [(3, "3"), (20, "20")]
        assert buckets[1].income == Decimal("9")
        assert buckets[1].expense == Decimal("5")

    def test_week_trend_by_weekday(self):
        """Test week buckets are Sunday-based weekdays."""
        txs = [
            make_tx("expense", 1, date(2024, 3, 16)),  # Saturday
            make_tx("expense", 2, date(2024, 3, 10)),  # Sunday
        ]
        buckets = trend_buckets(txs, PeriodType.WEEK)
        assert [(b.key, b.label) for b in buckets] == [(0, "Sun"), (6, "Sat")]

    def test_trend_of_nothing_is_empty(self):
        assert trend_buckets([], PeriodType.YEAR) == []
