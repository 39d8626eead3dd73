"""
Period Calculator

Boundaries of the periods every view is built on:
- the accounting month, which starts on a configurable day
- the calendar day, the Sunday-Saturday week and the calendar year

DESIGN DECISION: Date arithmetic normalizes calendar overflow instead of
clamping. Day 31 of a 30-day month is day 1 of the following month, and
moving a date by whole months keeps its day-of-month and overflows the
same way. Every date this module forms goes through calendar_date().
"""

from datetime import date, timedelta

from ledger.models.ledger import PeriodRange, PeriodType


class InvalidMonthStartDayError(ValueError):
    """month_start_day outside 1..31."""

    def __init__(self, month_start_day: int):
        self.month_start_day = month_start_day
        super().__init__(
            f"month_start_day must be between 1 and 31, got {month_start_day}"
        )


def calendar_date(year: int, month: int, day: int) -> date:
    """
    Build a date from possibly out-of-range parts.

    month is 1-based and may fall outside 1..12; day may exceed the
    length of the month (rolls forward) or be below 1 (rolls back).
    """
    years, month_index = divmod(month - 1, 12)
    first = date(year + years, month_index + 1, 1)
    return first + timedelta(days=day - 1)


def add_months(day: date, months: int) -> date:
    """Move a date by whole months, keeping the day-of-month with overflow."""
    return calendar_date(day.year, day.month + months, day.day)


def compute_period_range(anchor: date, month_start_day: int) -> PeriodRange:
    """
    Accounting month enclosing the anchor date.

    The month begins on month_start_day of the anchor's calendar month,
    or of the previous calendar month when the anchor's day is earlier
    than month_start_day. It ends the day before the start moved one
    month forward.

    Start days 29 to 31 overflow in short months, and the resulting
    period need not contain its anchor. With start day 31 the anchor
    2024-02-01 gives 2024-02-02 to 2024-03-01. Both boundaries follow
    the overflow rule and are not clamped.

    Raises:
        InvalidMonthStartDayError: If month_start_day is outside 1..31
    """
    if not 1 <= month_start_day <= 31:
        raise InvalidMonthStartDayError(month_start_day)

    start = calendar_date(anchor.year, anchor.month, month_start_day)
    if anchor.day < month_start_day:
        start = add_months(start, -1)
    end = add_months(start, 1) - timedelta(days=1)
    return PeriodRange(start=start, end=end)


def day_range(anchor: date) -> PeriodRange:
    return PeriodRange(start=anchor, end=anchor)


def week_range(anchor: date) -> PeriodRange:
    """Sunday through Saturday week containing the anchor."""
    # date.weekday() is Monday=0; shift to Sunday=0
    sunday_based = (anchor.weekday() + 1) % 7
    start = anchor - timedelta(days=sunday_based)
    return PeriodRange(start=start, end=start + timedelta(days=6))


def year_range(anchor: date) -> PeriodRange:
    return PeriodRange(start=date(anchor.year, 1, 1), end=date(anchor.year, 12, 31))


def period_range(
    period_type: PeriodType,
    anchor: date,
    month_start_day: int,
) -> PeriodRange:
    """Boundaries of the period of the given type containing the anchor."""
    if period_type == PeriodType.DAY:
        return day_range(anchor)
    elif period_type == PeriodType.WEEK:
        return week_range(anchor)
    elif period_type == PeriodType.MONTH:
        return compute_period_range(anchor, month_start_day)
    elif period_type == PeriodType.YEAR:
        return year_range(anchor)
    raise ValueError(f"Unknown period type: {period_type}")
