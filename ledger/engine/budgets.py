"""
Budget Tracker

Evaluates per-category spending caps against the current accounting period.

DESIGN DECISION: The current period is never looked up here. Callers compute
it with the Period Calculator and pass in the transactions that fall inside
it, so evaluation is pure and can be tested against any simulated date.

Known behavior: when an existing expense is edited, its pre-edit amount is
still part of the period's spending, so re-evaluating the edited amount can
report a breach that editing alone did not cause.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union

from ledger.models.ledger import (
    Budget,
    BudgetEvaluation,
    BudgetStatus,
    Transaction,
    TransactionType,
)

Amount = Union[Decimal, int, float, str]


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from carrying binary noise
    return Decimal(str(value))


def find_budget(budgets: Iterable[Budget], category_name: str) -> Optional[Budget]:
    for budget in budgets:
        if budget.category_name == category_name:
            return budget
    return None


def spent_in_category(
    transactions: Iterable[Transaction],
    category_name: str,
) -> Decimal:
    """Sum of expense amounts recorded under a category name."""
    return sum(
        (
            tx.amount
            for tx in transactions
            if tx.type == TransactionType.EXPENSE and tx.category == category_name
        ),
        Decimal("0"),
    )


def evaluate_budget(
    category: str,
    budgets: Iterable[Budget],
    transactions_in_current_period: Iterable[Transaction],
    prospective_amount: Amount,
) -> BudgetEvaluation:
    """
    Would adding prospective_amount to category exceed its cap?

    Args:
        category: Expense category name
        budgets: All budget entries
        transactions_in_current_period: Transactions of the current
            accounting period (not the prospective transaction's own period)
        prospective_amount: Amount about to be added

    Returns:
        BudgetEvaluation. An absent budget or a limit <= 0 never exceeds.
    """
    prospective = _to_decimal(prospective_amount)
    spent = spent_in_category(transactions_in_current_period, category)
    budget = find_budget(budgets, category)

    if budget is None or budget.limit <= 0:
        return BudgetEvaluation(
            category_name=category,
            limit=budget.limit if budget else None,
            spent_before_add=spent,
            prospective_amount=prospective,
        )

    difference = spent + prospective - budget.limit
    would_exceed = difference > 0
    return BudgetEvaluation(
        category_name=category,
        limit=budget.limit,
        spent_before_add=spent,
        prospective_amount=prospective,
        would_exceed=would_exceed,
        over_by=difference if would_exceed else Decimal("0"),
    )


def set_budget_limit(
    budgets: Iterable[Budget],
    category_name: str,
    limit: Amount,
) -> list[Budget]:
    """
    Budgets with the entry for category_name replaced.

    A limit <= 0 removes the entry entirely (absence means uncapped).
    The input is left untouched.
    """
    limit = _to_decimal(limit)
    remaining = [b for b in budgets if b.category_name != category_name]
    if limit <= 0:
        return remaining
    return remaining + [Budget(category_name=category_name, limit=limit)]


def budget_statuses(
    budgets: Iterable[Budget],
    transactions_in_current_period: Iterable[Transaction],
) -> list[BudgetStatus]:
    """Spending progress of every capped category, in budget order."""
    transactions = list(transactions_in_current_period)
    return [
        BudgetStatus(
            category_name=budget.category_name,
            limit=budget.limit,
            spent=spent_in_category(transactions, budget.category_name),
        )
        for budget in budgets
        if budget.limit > 0
    ]
