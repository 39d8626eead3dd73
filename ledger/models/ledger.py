"""
Core Data Models for the Ledger Engine

These models define the strict schemas for all data flowing through the engine.
They are designed to:
1. Enforce type safety at runtime
2. Be immutable once created (edits produce replacements)
3. Accept and emit the camelCase wire shapes collaborators use
4. Be serializable for storage and logging

DESIGN DECISION: Amounts are Decimal magnitudes. The sign of a transaction
is carried by its type, never by the stored amount.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_validator,
)


def new_record_id() -> str:
    """Opaque identifier for a new record. Never reused."""
    return uuid4().hex


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class PeriodType(str, Enum):
    """
    Period selector for filtered views.

    MONTH is the accounting month (custom start day), not the calendar month.
    WEEK is the calendar week, Sunday through Saturday.
    """
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class ThemeMode(str, Enum):
    """Display theme. Ignored by the engine."""
    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# CORE RECORDS
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    `date` is the accounting date. `timestamp` is the creation instant in
    epoch milliseconds and is only used for ordering and recent-activity
    windows; the two need not agree (imported rows synthesize timestamps).
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Unique opaque identifier"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        description="Category name (matched against Category.name for display only)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Magnitude of the transaction"
    )
    date: dt.date = Field(
        ...,
        description="Accounting date (no time component)"
    )
    timestamp: int = Field(
        ...,
        description="Creation instant in epoch milliseconds"
    )
    note: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Free text note"
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> Decimal:
        """+amount for income, -amount for expense."""
        return self.amount if self.is_income else -self.amount

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class Category(BaseModel):
    """
    A named category within the income or expense namespace.

    Names are unique per type; income and expense categories never collide.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_record_id,
        min_length=1
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100
    )
    icon: str = Field(
        default="🏷️",
        description="Display glyph, opaque to the engine"
    )
    color: str = Field(
        default="#64748b",
        description="Display color, opaque to the engine"
    )
    type: TransactionType


class Budget(BaseModel):
    """
    Spending cap for one expense category.

    There is no date range: the cap always applies to the current
    accounting period. A limit <= 0 means "uncapped".
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    category_name: str = Field(
        ...,
        alias="categoryName",
        min_length=1,
        description="Name of the expense category this cap applies to"
    )
    limit: Decimal = Field(
        ...,
        description="Cap for the current accounting period"
    )

    @field_serializer('limit', when_used='json')
    def serialize_limit(self, limit: Decimal) -> float:
        return float(limit)


class UserSettings(BaseModel):
    """
    Per-user preferences.

    Only month_start_day and enable_rollover affect the engine;
    the remaining fields are display-only.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    month_start_day: int = Field(
        default=1,
        ge=1,
        le=31,
        alias="monthStartDay",
        description="Day of month on which the accounting month begins"
    )
    enable_rollover: bool = Field(
        default=True,
        alias="enableRollover",
        description="Home aggregate shows all-time balance instead of period cashflow"
    )

    # Display-only
    user_name: str = Field(default="", alias="userName")
    theme: ThemeMode = ThemeMode.LIGHT
    stealth_mode: bool = Field(default=False, alias="stealthMode")
    daily_reminders: bool = Field(default=False, alias="dailyReminders")


class Currency(BaseModel):
    """Formatting parameter only. The engine is currency-agnostic."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=3, max_length=3)
    symbol: str
    name: str


# =============================================================================
# COLLABORATOR INPUT
# =============================================================================

class ParsedEntry(BaseModel):
    """
    Output of the natural-language parsing collaborator ("magic entry").

    It becomes a Transaction once wrapped with id, timestamp and today's date.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    amount: Decimal = Field(..., gt=0)
    type: TransactionType
    category: str = Field(..., min_length=1)
    note: Optional[str] = None


class ImportResult(BaseModel):
    """Outcome of a best-effort bulk import."""
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = ()
    skipped_count: int = Field(default=0, ge=0)

    @property
    def imported_count(self) -> int:
        return len(self.transactions)


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class PeriodRange(BaseModel):
    """Inclusive date range [start, end]."""
    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date

    @model_validator(mode='after')
    def validate_order(self) -> 'PeriodRange':
        if self.end < self.start:
            raise ValueError("Period end cannot be before start")
        return self

    def contains(self, day: dt.date) -> bool:
        return self.start <= day <= self.end


class PeriodTotals(BaseModel):
    """Income and expense summed independently over a transaction subset."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    @property
    def volume(self) -> Decimal:
        return self.income + self.expense

    @property
    def is_surplus(self) -> bool:
        return self.income >= self.expense

    def __add__(self, other: 'PeriodTotals') -> 'PeriodTotals':
        return PeriodTotals(
            income=self.income + other.income,
            expense=self.expense + other.expense,
        )


class BudgetEvaluation(BaseModel):
    """
    Decision for a prospective expense against a category cap.

    limit is None when the category is uncapped.
    """
    model_config = ConfigDict(frozen=True)

    category_name: str
    limit: Optional[Decimal] = None
    spent_before_add: Decimal = Decimal("0")
    prospective_amount: Decimal = Decimal("0")
    would_exceed: bool = False
    over_by: Decimal = Decimal("0")

    @property
    def is_capped(self) -> bool:
        return self.limit is not None and self.limit > 0


class BudgetStatus(BaseModel):
    """Progress of one capped category in the current accounting period."""
    model_config = ConfigDict(frozen=True)

    category_name: str
    limit: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def percent_used(self) -> float:
        if self.limit <= 0:
            return 0.0
        return float(self.spent / self.limit * 100)

    @property
    def is_exceeded(self) -> bool:
        return self.spent > self.limit


class CategoryTotal(BaseModel):
    """Sum of one category within a subset (distribution chart slice)."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Decimal


class TrendBucket(BaseModel):
    """
    Income/expense for one bucket of a trend chart.

    key is the month index (0-11), day of month (1-31) or Sunday-based
    weekday (0-6) depending on the period type.
    """
    model_config = ConfigDict(frozen=True)

    key: int
    label: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


class DashboardView(BaseModel):
    """Home screen aggregates."""
    model_config = ConfigDict(frozen=True)

    headline_label: str
    net_position: Decimal
    period: PeriodRange
    period_description: str
    period_totals: PeriodTotals
    recent: tuple[Transaction, ...] = ()


class StatsView(BaseModel):
    """Statistics screen for one period selection."""
    model_config = ConfigDict(frozen=True)

    period_type: PeriodType
    anchor: dt.date
    transactions: tuple[Transaction, ...] = ()
    totals: PeriodTotals
    expense_breakdown: tuple[CategoryTotal, ...] = ()
    income_breakdown: tuple[CategoryTotal, ...] = ()
    trend: tuple[TrendBucket, ...] = ()

    @property
    def total_volume(self) -> Decimal:
        return self.totals.volume

    @property
    def status_label(self) -> str:
        return "SURPLUS" if self.totals.is_surplus else "DEFICIT"


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating a prospective transaction."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
