"""Bulk import package."""

from ledger.imports.migration import (
    MigrationError,
    NoValidRowsError,
    parse_migration_text,
)

__all__ = ["MigrationError", "NoValidRowsError", "parse_migration_text"]
