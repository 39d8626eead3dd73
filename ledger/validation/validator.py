"""
Transaction Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Amount present and positive
- Category present
- Catches entries that cannot be recorded at all

STAGE 2 - SEMANTIC VALIDATION:
- Category known within its type's namespace
- Accounting date not in the future
- Catches entries that are recordable but probably not what the user meant

Stage 2 only produces warnings. An unknown category is still recorded and
aggregated on its raw name; it is simply shown with the fallback icon.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them to the caller.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledger.constants import FALLBACK_CATEGORY_COLOR, FALLBACK_CATEGORY_ICON
from ledger.models.ledger import (
    Category,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


def resolve_category(
    name: str,
    category_type: TransactionType,
    categories: Iterable[Category],
) -> Category:
    """
    Category record for a transaction's category name.

    Only categories of the same type match. Unmatched names get a
    display-only fallback carrying the raw name.
    """
    for category in categories:
        if category.type == category_type and category.name == name:
            return category
    return Category(
        id=f"unknown-{category_type.value}",
        name=name or "Uncategorised",
        icon=FALLBACK_CATEGORY_ICON,
        color=FALLBACK_CATEGORY_COLOR,
        type=category_type,
    )


class TransactionValidator:
    """
    Validates a prospective transaction through a two-stage pipeline.

    Stage 1: Schema validation (blocks the entry)
    Stage 2: Semantic validation (warnings only)
    """

    def __init__(self, categories: Optional[Iterable[Category]] = None):
        """
        Initialize validator.

        Args:
            categories: Known categories of both types.
                        If None, the unknown-category check is skipped.
        """
        self._categories = list(categories) if categories is not None else None

    def _validate_schema(
        self,
        transaction: Transaction,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if transaction.amount <= Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))

        if not transaction.category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        transaction: Transaction,
        today: date,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        Returns: list_of_issues (warnings only)
        """
        issues = []

        if self._categories is not None and transaction.category:
            known = {
                c.name for c in self._categories if c.type == transaction.type
            }
            if transaction.category not in known:
                issues.append(ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message=(
                        f"'{transaction.category}' is not a known "
                        f"{transaction.type.value} category"
                    ),
                    severity="warning",
                ))

        if transaction.date > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=(
                    f"Date ({transaction.date}) is in the future and will not count "
                    "towards the balance until then"
                ),
                severity="warning",
            ))

        return issues

    def validate(
        self,
        transaction: Transaction,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Stage 2 runs only when stage 1 passes.
        """
        today = today or date.today()

        schema_valid, issues = self._validate_schema(transaction)
        if schema_valid:
            issues.extend(self._validate_semantic(transaction, today))

        return ValidationResult(is_valid=schema_valid, issues=issues)
