"""Tests for the immutable ledger store and entry construction."""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from ledger.entries import make_custom_category, new_transaction, transaction_from_parsed
from ledger.models.ledger import (
    Category,
    ParsedEntry,
    Transaction,
    TransactionType,
    UserSettings,
)
from ledger.store import (
    DuplicateCategoryError,
    LedgerStore,
    TransactionNotFoundError,
)


def make_tx(tx_id, amount=10, category="Food", tx_type="expense", timestamp=0):
    return Transaction(
        id=tx_id,
        type=tx_type,
        category=category,
        amount=Decimal(str(amount)),
        date=date(2024, 3, 5),
        timestamp=timestamp,
        note="original",
    )


@pytest.fixture
def store():
    return LedgerStore.initial().add_transaction(make_tx("t1")).add_transaction(make_tx("t2"))


class TestInitialStore:
    """Tests for the seeded store."""

    def test_seed_categories(self):
        """Test the default category namespaces."""
        store = LedgerStore.initial()
        assert [c.name for c in store.income_categories] == [
            "Salary", "Bonus", "Freelance", "Business",
        ]
        assert "Rent" in {c.name for c in store.expense_categories}
        assert all(c.type == TransactionType.EXPENSE for c in store.expense_categories)

    def test_default_settings_and_currency(self):
        store = LedgerStore.initial()
        assert store.settings.month_start_day == 1
        assert store.settings.enable_rollover is True
        assert store.currency.code == "PKR"
        assert store.transactions == ()
        assert store.budgets == ()


class TestTransactionMutations:
    """Tests for add, edit and delete."""

    def test_add_prepends(self, store):
        assert [tx.id for tx in store.transactions] == ["t2", "t1"]

    def test_mutations_return_new_store(self, store):
        """Test the original snapshot is never changed."""
        updated = store.delete_transaction("t1")
        assert [tx.id for tx in store.transactions] == ["t2", "t1"]
        assert [tx.id for tx in updated.transactions] == ["t2"]

    def test_prepend_batch_keeps_batch_order(self, store):
        updated = store.prepend_transactions([make_tx("a"), make_tx("b")])
        assert [tx.id for tx in updated.transactions] == ["a", "b", "t2", "t1"]

    def test_edit_preserves_identity_fields(self, store):
        """Test id, date and timestamp survive an edit."""
        original = store.get_transaction("t1")
        updated = store.edit_transaction("t1", TransactionType.INCOME, "Bonus", Decimal("99"), None)
        edited = updated.get_transaction("t1")
        assert edited.id == original.id
        assert edited.date == original.date
        assert edited.timestamp == original.timestamp
        assert edited.type == TransactionType.INCOME
        assert edited.category == "Bonus"
        assert edited.amount == Decimal("99")
        assert edited.note is None
        # Position in the list is unchanged
        assert [tx.id for tx in updated.transactions] == ["t2", "t1"]

    def test_edit_unknown_id_raises(self, store):
        with pytest.raises(TransactionNotFoundError) as exc_info:
            store.edit_transaction("missing", TransactionType.EXPENSE, "Food", Decimal("1"))
        assert exc_info.value.transaction_id == "missing"

    def test_edit_rejects_negative_amount(self, store):
        with pytest.raises(ValidationError):
            store.edit_transaction("t1", TransactionType.EXPENSE, "Food", Decimal("-5"))

    def test_replace_unknown_raises(self, store):
        with pytest.raises(TransactionNotFoundError):
            store.replace_transaction(make_tx("ghost"))

    def test_delete_unknown_is_no_op(self, store):
        assert store.delete_transaction("missing").transactions == store.transactions


class TestBudgetsCategoriesSettings:
    """Tests for the remaining store mutations."""

    def test_set_and_clear_budget(self):
        store = LedgerStore.initial().set_budget_limit("Food", Decimal("500"))
        assert store.budget_for("Food").limit == Decimal("500")
        cleared = store.set_budget_limit("Food", Decimal("0"))
        assert cleared.budget_for("Food") is None

    def test_add_category_to_its_namespace(self):
        category = make_custom_category("Pets", "🐶", TransactionType.EXPENSE)
        store = LedgerStore.initial().add_category(category)
        assert store.expense_categories[-1] == category
        assert category not in store.income_categories

    def test_duplicate_category_rejected(self):
        duplicate = Category(name="Rent", type=TransactionType.EXPENSE)
        with pytest.raises(DuplicateCategoryError, match="Rent"):
            LedgerStore.initial().add_category(duplicate)

    def test_same_name_allowed_in_other_type(self):
        """Test namespaces are separate per type."""
        store = LedgerStore.initial().add_category(
            Category(name="Rent", type=TransactionType.INCOME)
        )
        assert "Rent" in {c.name for c in store.income_categories}

    def test_with_settings(self):
        store = LedgerStore.initial().with_settings(UserSettings(month_start_day=25))
        assert store.settings.month_start_day == 25

    def test_json_round_trip(self, store):
        """Test a snapshot survives its wire form."""
        restored = LedgerStore.model_validate_json(store.model_dump_json())
        assert restored.transactions == store.transactions
        assert restored.expense_categories == store.expense_categories
        assert restored.settings == store.settings
        assert restored.currency == store.currency


class TestEntryConstruction:
    """Tests for manual and magic entries."""

    def test_new_transaction_dated_today(self):
        tx = new_transaction(
            TransactionType.EXPENSE, "Food", Decimal("12"),
            today=date(2024, 3, 15), created_ms=1234,
        )
        assert tx.date == date(2024, 3, 15)
        assert tx.timestamp == 1234
        assert tx.id

    def test_magic_entry_wraps_parser_output(self):
        parsed = ParsedEntry(amount=Decimal("450"), type="expense", category="Food", note="Pizza")
        tx = transaction_from_parsed(parsed, date(2024, 3, 15), 99)
        assert tx.category == "Food"
        assert tx.note == "Pizza"
        assert tx.amount == Decimal("450")
        assert tx.timestamp == 99

    def test_magic_entry_without_parse_result(self):
        """Test an unavailable parser yields no transaction."""
        assert transaction_from_parsed(None, date(2024, 3, 15), 99) is None

    def test_custom_category_gets_fallback_icon(self):
        category = make_custom_category("Gifts", "", TransactionType.EXPENSE)
        assert category.icon == "🏷️"
