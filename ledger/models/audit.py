"""
Audit Models for the Ledger Engine

Every change a session applies to the ledger is logged for audit purposes.
This provides:
1. Traceability of all edits, deletes and imports
2. Debugging information when a view looks wrong
3. A record of every budget alert that was surfaced

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Budgets
    BUDGET_SET = "budget_set"
    BUDGET_REMOVED = "budget_removed"
    BUDGET_EXCEEDED = "budget_exceeded"

    # Bulk import
    IMPORT_COMPLETED = "import_completed"
    IMPORT_FAILED = "import_failed"

    # Magic entry
    MAGIC_ENTRY_UNAVAILABLE = "magic_entry_unavailable"

    # Store
    CATEGORY_ADDED = "category_added"
    SETTINGS_UPDATED = "settings_updated"
    CURRENCY_CHANGED = "currency_changed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant change to the ledger creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget', 'import')"
    )
    entity_id: Optional[str] = None

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., a save and its budget alert)"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(tx_id, "expense", "Food", "120")
        event = AuditEventBuilder.budget_exceeded("Food", "500", "550", "50", correlation_id)
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        category: str,
        amount: str,
        source: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"{transaction_type.capitalize()} added: {category} {amount}",
            details={
                "type": transaction_type,
                "category": category,
                "amount": amount,
                "source": source,
            },
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction edited: {', '.join(sorted(changes)) or 'no changes'}",
            details={"changes": changes},
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Transaction deleted",
        )

    @staticmethod
    def transaction_rejected(
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Transaction rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def budget_set(
        category_name: str,
        limit: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SET,
            entity_type="budget",
            entity_id=category_name,
            correlation_id=correlation_id,
            description=f"Budget for {category_name} set to {limit}",
            details={"limit": limit},
        )

    @staticmethod
    def budget_removed(
        category_name: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_REMOVED,
            entity_type="budget",
            entity_id=category_name,
            correlation_id=correlation_id,
            description=f"Budget for {category_name} removed",
        )

    @staticmethod
    def budget_exceeded(
        category_name: str,
        limit: str,
        spent: str,
        over_by: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_id=category_name,
            correlation_id=correlation_id,
            description=f"Budget for {category_name} exceeded by {over_by}",
            details={
                "limit": limit,
                "spent_after_add": spent,
                "over_by": over_by,
            },
        )

    @staticmethod
    def import_completed(
        imported: int,
        skipped: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_COMPLETED,
            entity_type="import",
            correlation_id=correlation_id,
            description=f"Imported {imported} items",
            details={
                "imported_count": imported,
                "skipped_count": skipped,
            },
        )

    @staticmethod
    def import_failed(
        reason: str,
        skipped: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="import",
            correlation_id=correlation_id,
            description="Import produced no transactions",
            error_message=reason,
            details={"skipped_count": skipped},
        )

    @staticmethod
    def magic_entry_unavailable(
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MAGIC_ENTRY_UNAVAILABLE,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description="Magic entry produced no transaction",
        )

    @staticmethod
    def category_added(
        category_id: str,
        name: str,
        category_type: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Custom {category_type} category added: {name}",
        )

    @staticmethod
    def settings_updated(
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTINGS_UPDATED,
            entity_type="settings",
            correlation_id=correlation_id,
            description="Settings updated",
            details={"changes": changes},
        )

    @staticmethod
    def currency_changed(
        old_code: str,
        new_code: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CURRENCY_CHANGED,
            entity_type="settings",
            entity_id=new_code,
            correlation_id=correlation_id,
            description=f"Currency changed: {old_code} -> {new_code}",
            details={"from": old_code, "to": new_code},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
