"""
Ledger Store

DESIGN DECISION: The store is an immutable snapshot.
Every mutation returns a NEW store; nothing is changed in place.
The engine functions take the pieces they need from a snapshot and
never hold on to it, so the caller (one logical writer) owns the
store's lifecycle and persistence entirely.

Transactions are kept newest-inserted first, the order in which
manual entries and imports prepend them.
"""

from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from ledger.config import get_settings
from ledger.constants import (
    INITIAL_EXPENSE_CATEGORIES,
    INITIAL_INCOME_CATEGORIES,
    find_currency,
)
from ledger.engine.budgets import set_budget_limit
from ledger.models.ledger import (
    Budget,
    Category,
    Currency,
    Transaction,
    TransactionType,
    UserSettings,
)


class StoreError(Exception):
    """Base exception for store operations."""
    pass


class TransactionNotFoundError(StoreError):
    """No transaction with the given id exists in the store."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class DuplicateCategoryError(StoreError):
    """A category with the same name already exists for that type."""
    pass


class UnknownCurrencyError(StoreError):
    """No supported currency has the given code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unsupported currency code: {code}")


class LedgerStore(BaseModel):
    """
    Snapshot of everything a user has recorded.

    Use LedgerStore.initial() for a store seeded with default
    categories, currency and settings.
    """
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = ()
    budgets: tuple[Budget, ...] = ()
    income_categories: tuple[Category, ...] = ()
    expense_categories: tuple[Category, ...] = ()
    settings: UserSettings = Field(default_factory=UserSettings)
    currency: Currency = Field(default_factory=lambda: find_currency("PKR"))

    @classmethod
    def initial(cls) -> "LedgerStore":
        """Fresh store with the default seed set and configured defaults."""
        engine = get_settings().engine
        return cls(
            income_categories=INITIAL_INCOME_CATEGORIES,
            expense_categories=INITIAL_EXPENSE_CATEGORIES,
            settings=UserSettings(
                month_start_day=engine.default_month_start_day,
                enable_rollover=engine.default_enable_rollover,
            ),
            currency=find_currency(engine.default_currency_code),
        )

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for tx in self.transactions:
            if tx.id == transaction_id:
                return tx
        return None

    def categories_for(self, category_type: TransactionType) -> tuple[Category, ...]:
        if category_type == TransactionType.INCOME:
            return self.income_categories
        return self.expense_categories

    def budget_for(self, category_name: str) -> Optional[Budget]:
        for budget in self.budgets:
            if budget.category_name == category_name:
                return budget
        return None

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> "LedgerStore":
        """Prepend a new transaction."""
        return self.model_copy(
            update={"transactions": (transaction,) + self.transactions}
        )

    def prepend_transactions(self, transactions: Iterable[Transaction]) -> "LedgerStore":
        """Prepend a batch, keeping the batch's own order."""
        return self.model_copy(
            update={"transactions": tuple(transactions) + self.transactions}
        )

    def replace_transaction(self, transaction: Transaction) -> "LedgerStore":
        """
        Replace the transaction with the same id.

        Raises:
            TransactionNotFoundError: If no transaction has that id
        """
        if self.get_transaction(transaction.id) is None:
            raise TransactionNotFoundError(transaction.id)
        return self.model_copy(
            update={
                "transactions": tuple(
                    transaction if tx.id == transaction.id else tx
                    for tx in self.transactions
                )
            }
        )

    def edit_transaction(
        self,
        transaction_id: str,
        type: TransactionType,
        category: str,
        amount: Decimal,
        note: Optional[str] = None,
    ) -> "LedgerStore":
        """
        Edit flow: replace type, category, amount and note.

        id, date and timestamp are preserved.
        """
        existing = self.get_transaction(transaction_id)
        if existing is None:
            raise TransactionNotFoundError(transaction_id)
        edited = apply_edit(existing, type, category, amount, note)
        return self.replace_transaction(edited)

    def delete_transaction(self, transaction_id: str) -> "LedgerStore":
        """Remove a transaction by id. Unknown ids leave the store unchanged."""
        return self.model_copy(
            update={
                "transactions": tuple(
                    tx for tx in self.transactions if tx.id != transaction_id
                )
            }
        )

    # -------------------------------------------------------------------------
    # Budgets, categories, settings
    # -------------------------------------------------------------------------

    def set_budget_limit(self, category_name: str, limit: Decimal) -> "LedgerStore":
        """Replace the cap for a category; limit <= 0 removes it."""
        return self.model_copy(
            update={
                "budgets": tuple(set_budget_limit(self.budgets, category_name, limit))
            }
        )

    def add_category(self, category: Category) -> "LedgerStore":
        """
        Add a custom category to its type's namespace.

        Raises:
            DuplicateCategoryError: If the name is taken within that type
        """
        existing = self.categories_for(category.type)
        if any(c.name == category.name for c in existing):
            raise DuplicateCategoryError(
                f"{category.type.value.capitalize()} category '{category.name}' already exists"
            )
        field_name = (
            "income_categories"
            if category.type == TransactionType.INCOME
            else "expense_categories"
        )
        return self.model_copy(update={field_name: existing + (category,)})

    def with_settings(self, settings: UserSettings) -> "LedgerStore":
        return self.model_copy(update={"settings": settings})

    def with_currency(self, currency: Currency) -> "LedgerStore":
        return self.model_copy(update={"currency": currency})


def apply_edit(
    transaction: Transaction,
    type: TransactionType,
    category: str,
    amount: Decimal,
    note: Optional[str] = None,
) -> Transaction:
    """Validated copy of a transaction with the editable fields replaced."""
    data = transaction.model_dump()
    data.update(type=type, category=category, amount=amount, note=note)
    return Transaction.model_validate(data)
