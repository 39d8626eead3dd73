"""
Storage Services Package

Provides abstract interfaces for persisting ledger snapshots and audit
events, plus an in-memory implementation. Real transports (local files,
cloud sync) implement the same interfaces outside this package.
"""

from ledger.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
    StorageError,
)
from ledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
]
