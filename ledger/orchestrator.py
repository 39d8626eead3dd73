"""
Ledger Session Orchestrator

This module ties together the store, the engine and the collaborators,
and defines the end-to-end flows for:
1. Saving a transaction (manual or magic entry, add or edit)
2. Bulk import of pasted rows
3. Budget and settings changes
4. Reading the dashboard and statistics views

DESIGN DECISION: The session is the single logical writer.
- It owns the current store snapshot and replaces it after every change
- It persists each new snapshot when a storage backend is configured
- It is the only place a budget alert is surfaced; the engine only decides
- Every change is audited

The engine functions it calls hold no state of their own.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional
from uuid import UUID

from ledger.audit import AuditLogger, create_correlation_id
from ledger.constants import find_currency
from ledger.engine.budgets import evaluate_budget
from ledger.entries import make_custom_category, new_transaction, transaction_from_parsed
from ledger.imports import NoValidRowsError, parse_migration_text
from ledger.models.ledger import (
    BudgetEvaluation,
    BudgetStatus,
    Category,
    Currency,
    DashboardView,
    ImportResult,
    ParsedEntry,
    PeriodType,
    StatsView,
    Transaction,
    TransactionType,
    UserSettings,
    ValidationResult,
)
from ledger.queries import (
    budget_overview,
    build_dashboard,
    build_stats,
    current_period_transactions,
)
from ledger.services.storage import AuditStorageInterface, LedgerStorageInterface
from ledger.store import LedgerStore, UnknownCurrencyError
from ledger.validation import TransactionValidator

BudgetAlert = Callable[[BudgetEvaluation], None]
Clock = Callable[[], datetime]


class TransactionRejectedError(Exception):
    """A prospective transaction failed validation and was not saved."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = [i.message for i in result.issues if i.severity == "error"]
        super().__init__("; ".join(messages) or "Transaction rejected")


class LedgerSession:
    """
    Orchestrates all changes to one user's ledger.

    Flow of a save:
    1. Build the candidate transaction (new, or an edit of an existing one)
    2. Validate it (errors reject, warnings pass through)
    3. For expenses, evaluate the category budget against the CURRENT
       accounting period, as the store stood before this save
    4. Commit and persist the new snapshot
    5. Surface a one-shot alert if the cap is exceeded

    Edits are evaluated like additions: the pre-edit amount is not taken
    out of the period's spending first.
    """

    def __init__(
        self,
        store: Optional[LedgerStore] = None,
        storage: Optional[LedgerStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        alert: Optional[BudgetAlert] = None,
        clock: Optional[Clock] = None,
    ):
        self._storage = storage
        if store is None and storage is not None:
            store = storage.load_snapshot()
        self._store = store or LedgerStore.initial()
        self._audit_logger = audit_logger or AuditLogger()
        self._alert = alert
        self._clock = clock or datetime.now

    @property
    def store(self) -> LedgerStore:
        return self._store

    def _today(self) -> date:
        return self._clock().date()

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _commit(self, store: LedgerStore) -> None:
        """Persist first, then swap, so a failed save leaves the session unchanged."""
        if self._storage is not None:
            self._storage.save_snapshot(store)
        self._store = store

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def save_transaction(
        self,
        type: TransactionType,
        category: str,
        amount: Decimal,
        note: Optional[str] = None,
        editing_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
        source: str = "manual",
    ) -> tuple[Transaction, Optional[BudgetEvaluation]]:
        """
        Add a new transaction, or edit an existing one when editing_id is given.

        Returns:
            (saved_transaction, budget_evaluation)
            budget_evaluation is None for income.

        Raises:
            TransactionRejectedError: If validation finds errors
            TransactionNotFoundError: If editing_id does not exist
        """
        correlation_id = correlation_id or create_correlation_id()
        today = self._today()

        existing = None
        if editing_id is not None:
            existing = self._store.get_transaction(editing_id)
            updated = self._store.edit_transaction(editing_id, type, category, amount, note)
            candidate = updated.get_transaction(editing_id)
        else:
            candidate = new_transaction(
                type=type,
                category=category,
                amount=amount,
                note=note,
                today=today,
                created_ms=self._now_ms(),
            )
            updated = self._store.add_transaction(candidate)

        categories = self._store.income_categories + self._store.expense_categories
        result = TransactionValidator(categories).validate(candidate, today)
        if not result.is_valid:
            self._audit_logger.log_transaction_rejected(
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ],
                correlation_id=correlation_id,
            )
            raise TransactionRejectedError(result)

        evaluation = None
        if candidate.is_expense:
            evaluation = evaluate_budget(
                candidate.category,
                self._store.budgets,
                current_period_transactions(self._store, today),
                candidate.amount,
            )

        self._commit(updated)
        if existing is not None:
            self._audit_logger.log_transaction_updated(
                transaction_id=candidate.id,
                changes=_diff(existing, candidate),
                correlation_id=correlation_id,
            )
        else:
            self._audit_logger.log_transaction_added(
                transaction_id=candidate.id,
                transaction_type=candidate.type.value,
                category=candidate.category,
                amount=candidate.amount,
                source=source,
                correlation_id=correlation_id,
            )

        if evaluation is not None and evaluation.would_exceed:
            self._audit_logger.log_budget_exceeded(
                category_name=evaluation.category_name,
                limit=evaluation.limit,
                spent=evaluation.spent_before_add + evaluation.prospective_amount,
                over_by=evaluation.over_by,
                correlation_id=correlation_id,
            )
            if self._alert is not None:
                self._alert(evaluation)

        return candidate, evaluation

    def add_magic_entry(
        self,
        parsed: Optional[ParsedEntry],
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Transaction], Optional[BudgetEvaluation]]:
        """
        Save a transaction produced by the natural-language parser.

        When the parser is unavailable or produced nothing (parsed is None),
        no transaction is produced and nothing is raised.
        """
        correlation_id = correlation_id or create_correlation_id()
        wrapped = transaction_from_parsed(parsed, self._today(), self._now_ms())
        if wrapped is None:
            self._audit_logger.log_magic_entry_unavailable(correlation_id=correlation_id)
            return None, None
        return self.save_transaction(
            type=wrapped.type,
            category=wrapped.category,
            amount=wrapped.amount,
            note=wrapped.note,
            correlation_id=correlation_id,
            source="magic",
        )

    def delete_transaction(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete by id. Returns False when no such transaction existed."""
        if self._store.get_transaction(transaction_id) is None:
            return False
        self._commit(self._store.delete_transaction(transaction_id))
        self._audit_logger.log_transaction_deleted(
            transaction_id=transaction_id,
            correlation_id=correlation_id or create_correlation_id(),
        )
        return True

    def import_text(
        self,
        text: str,
        correlation_id: Optional[UUID] = None,
    ) -> ImportResult:
        """
        Bulk import pasted rows. Malformed rows are skipped.

        Raises:
            NoValidRowsError: If no row could be imported
        """
        correlation_id = correlation_id or create_correlation_id()
        try:
            result = parse_migration_text(text)
        except NoValidRowsError as e:
            self._audit_logger.log_import_failed(
                reason=str(e),
                skipped=e.skipped_count,
                correlation_id=correlation_id,
            )
            raise

        self._commit(self._store.prepend_transactions(result.transactions))
        self._audit_logger.log_import_completed(
            imported=result.imported_count,
            skipped=result.skipped_count,
            correlation_id=correlation_id,
        )
        return result

    # -------------------------------------------------------------------------
    # Budgets, categories, settings
    # -------------------------------------------------------------------------

    def set_budget_limit(
        self,
        category_name: str,
        limit: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Set the cap for a category; limit <= 0 removes it."""
        correlation_id = correlation_id or create_correlation_id()
        self._commit(self._store.set_budget_limit(category_name, limit))

        budget = self._store.budget_for(category_name)
        if budget is None:
            self._audit_logger.log_budget_removed(
                category_name=category_name,
                correlation_id=correlation_id,
            )
        else:
            self._audit_logger.log_budget_set(
                category_name=category_name,
                limit=budget.limit,
                correlation_id=correlation_id,
            )

    def add_category(
        self,
        name: str,
        icon: str,
        type: TransactionType,
        correlation_id: Optional[UUID] = None,
    ) -> Category:
        """
        Create a custom category.

        Raises:
            DuplicateCategoryError: If the name is taken within that type
        """
        category = make_custom_category(name=name, icon=icon, type=type)
        self._commit(self._store.add_category(category))
        self._audit_logger.log_category_added(
            category_id=category.id,
            name=category.name,
            category_type=category.type.value,
            correlation_id=correlation_id or create_correlation_id(),
        )
        return category

    def update_settings(self, **changes: Any) -> UserSettings:
        """Replace some settings fields; the result is re-validated."""
        data = self._store.settings.model_dump()
        data.update(changes)
        settings = UserSettings.model_validate(data)
        self._commit(self._store.with_settings(settings))
        self._audit_logger.log_settings_updated(changes={k: str(v) for k, v in changes.items()})
        return settings

    def set_currency(
        self,
        code: str,
        correlation_id: Optional[UUID] = None,
    ) -> Currency:
        """
        Switch the display currency. Stored amounts are not converted.

        Raises:
            UnknownCurrencyError: If no supported currency has that code
        """
        code = code.strip().upper()
        currency = find_currency(code)
        if currency.code != code:
            raise UnknownCurrencyError(code)

        old_code = self._store.currency.code
        self._commit(self._store.with_currency(currency))
        self._audit_logger.log_currency_changed(
            old_code=old_code,
            new_code=currency.code,
            correlation_id=correlation_id or create_correlation_id(),
        )
        return currency

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def dashboard(self) -> DashboardView:
        return build_dashboard(self._store, self._today(), self._now_ms())

    def stats(
        self,
        period_type: PeriodType,
        anchor: Optional[date] = None,
    ) -> StatsView:
        return build_stats(self._store, period_type, anchor or self._today())

    def budget_overview(self) -> list[BudgetStatus]:
        return budget_overview(self._store, self._today())


def _diff(before: Transaction, after: Transaction) -> dict[str, Any]:
    changes = {}
    for field in ("type", "category", "amount", "note"):
        old, new = getattr(before, field), getattr(after, field)
        if old != new:
            changes[field] = {"from": str(old), "to": str(new)}
    return changes


def create_session(
    storage: Optional[LedgerStorageInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
    alert: Optional[BudgetAlert] = None,
) -> LedgerSession:
    """
    Factory function to create a session with its collaborators.

    Args:
        storage: Snapshot backend. When None the session is memory-only.
        audit_storage: Audit backend. When None audit events are only logged.
        alert: Called once with the evaluation when a save breaches a cap.
    """
    return LedgerSession(
        storage=storage,
        audit_logger=AuditLogger(audit_storage),
        alert=alert,
    )
