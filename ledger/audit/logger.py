"""
Audit Logger

DESIGN DECISION: Every change a session applies to the ledger is logged.
This provides:
1. Complete traceability of edits, deletes and imports
2. Debugging capability when an aggregate looks wrong
3. A record of every budget alert that was surfaced

The audit logger:
- Is synchronous, like the rest of the engine
- Gracefully handles failures (doesn't break a save if logging fails)
- Supports correlation IDs to trace related events
"""

from decimal import Decimal
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from ledger.config import AppSettings, get_settings
from ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from ledger.services.storage import AuditStorageInterface


def select_renderer(app: AppSettings) -> Any:
    """JSON lines unless debug mode is on or JSON output is disabled."""
    if app.debug_mode or not app.log_json:
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _configure_structlog() -> None:
    renderer = select_renderer(get_settings().app)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Configure structlog for local logging
_configure_structlog()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("ledger.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        transaction_id: str,
        transaction_type: str,
        category: str,
        amount: Decimal,
        source: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new transaction (manual, magic or imported)."""
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            category=category,
            amount=str(amount),
            source=source,
            correlation_id=correlation_id,
        ))

    def log_transaction_updated(
        self,
        transaction_id: str,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an edit."""
        self.log(AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changes=changes,
            correlation_id=correlation_id,
        ))

    def log_transaction_deleted(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_deleted(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_transaction_rejected(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transaction_rejected(
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_budget_set(
        self,
        category_name: str,
        limit: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_set(
            category_name=category_name,
            limit=str(limit),
            correlation_id=correlation_id,
        ))

    def log_budget_removed(
        self,
        category_name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_removed(
            category_name=category_name,
            correlation_id=correlation_id,
        ))

    def log_budget_exceeded(
        self,
        category_name: str,
        limit: Decimal,
        spent: Decimal,
        over_by: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a budget alert that was surfaced to the user."""
        self.log(AuditEventBuilder.budget_exceeded(
            category_name=category_name,
            limit=str(limit),
            spent=str(spent),
            over_by=str(over_by),
            correlation_id=correlation_id,
        ))

    def log_import_completed(
        self,
        imported: int,
        skipped: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.import_completed(
            imported=imported,
            skipped=skipped,
            correlation_id=correlation_id,
        ))

    def log_import_failed(
        self,
        reason: str,
        skipped: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.import_failed(
            reason=reason,
            skipped=skipped,
            correlation_id=correlation_id,
        ))

    def log_magic_entry_unavailable(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.magic_entry_unavailable(
            correlation_id=correlation_id,
        ))

    def log_category_added(
        self,
        category_id: str,
        name: str,
        category_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.category_added(
            category_id=category_id,
            name=name,
            category_type=category_type,
            correlation_id=correlation_id,
        ))

    def log_settings_updated(
        self,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.settings_updated(
            changes=changes,
            correlation_id=correlation_id,
        ))

    def log_currency_changed(
        self,
        old_code: str,
        new_code: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.currency_changed(
            old_code=old_code,
            new_code=new_code,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., saving a transaction).
    Pass it through all subsequent operations.
    """
    return uuid4()
