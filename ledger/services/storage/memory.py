"""
In-Memory Storage

Keeps snapshots and audit events in process memory. Used by tests and by
hosts that persist on their own schedule.

Snapshots are stored as their JSON form and re-validated on load, so a
round trip through this backend exercises the same wire shapes a real
transport would.
"""

from typing import Optional

from ledger.models.audit import AuditEvent
from ledger.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
)
from ledger.store import LedgerStore


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Snapshot storage backed by a JSON string."""

    def __init__(self, initial: Optional[LedgerStore] = None):
        self._payload: Optional[str] = (
            initial.model_dump_json() if initial is not None else None
        )
        self.save_count = 0

    def load_snapshot(self) -> Optional[LedgerStore]:
        if self._payload is None:
            return None
        return LedgerStore.model_validate_json(self._payload)

    def save_snapshot(self, store: LedgerStore) -> bool:
        self._payload = store.model_dump_json()
        self.save_count += 1
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
