"""Validation package."""

from ledger.validation.validator import TransactionValidator, resolve_category

__all__ = ["TransactionValidator", "resolve_category"]
