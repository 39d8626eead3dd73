"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a collaborator, not part of the engine.
We define an abstract interface so that:
1. Local files, browser storage or a cloud copy can back the same session
2. In-memory storage can be used for testing
3. Merge/conflict resolution stays with the transport, outside the engine

A backend always loads and saves whole snapshots. The engine expects a
single resolved store and never merges copies itself.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ledger.models.audit import AuditEvent
from ledger.store import LedgerStore


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger snapshot persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load_snapshot(self) -> Optional[LedgerStore]:
        """
        Load the last saved snapshot.

        Returns:
            The stored snapshot, or None if nothing was saved yet

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save_snapshot(self, store: LedgerStore) -> bool:
        """
        Replace the saved snapshot.

        Args:
            store: The snapshot to persist

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
