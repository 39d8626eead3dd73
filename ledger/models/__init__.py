"""
Data Models Package

This package contains all Pydantic models used by the ledger engine.
All data flowing in from collaborators must conform to these schemas.
"""

from ledger.models.ledger import (
    Budget,
    BudgetEvaluation,
    BudgetStatus,
    Category,
    CategoryTotal,
    Currency,
    DashboardView,
    ImportResult,
    ParsedEntry,
    PeriodRange,
    PeriodTotals,
    PeriodType,
    StatsView,
    ThemeMode,
    Transaction,
    TransactionType,
    TrendBucket,
    UserSettings,
    ValidationIssue,
    ValidationResult,
    new_record_id,
)
from ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Budget",
    "BudgetEvaluation",
    "BudgetStatus",
    "Category",
    "CategoryTotal",
    "Currency",
    "DashboardView",
    "ImportResult",
    "ParsedEntry",
    "PeriodRange",
    "PeriodTotals",
    "PeriodType",
    "StatsView",
    "ThemeMode",
    "Transaction",
    "TransactionType",
    "TrendBucket",
    "UserSettings",
    "ValidationIssue",
    "ValidationResult",
    "new_record_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
