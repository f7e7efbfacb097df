"""
Audit Models for Finance Tracker

Every store mutation, load and persistence failure is recorded as an audit event.
This provides:
1. Traceability of what happened to the user's data
2. Debugging information when a stored value turns out to be corrupt
3. A hook for an external observability sink

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store lifecycle
    STORE_LOADED = "store_loaded"
    STATE_CORRUPTED = "state_corrupted"
    STORE_CLOSED = "store_closed"

    # Mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_REPLACED = "expenses_replaced"
    INCOME_ADDED = "income_added"
    INCOME_DELETED = "income_deleted"
    INCOME_REPLACED = "income_replaced"

    # Persistence
    PERSIST_FAILED = "persist_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'income', 'store')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

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
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id="...", category="food", amount="12.50")
        audit_logger.log(event)
    """

    @staticmethod
    def store_loaded(expense_count: int, income_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            entity_type="store",
            description=f"Loaded {expense_count} expenses and {income_count} income records",
            details={"expense_count": expense_count, "income_count": income_count},
        )

    @staticmethod
    def state_corrupted(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_CORRUPTED,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            entity_id=key,
            description=f"Stored '{key}' could not be read; starting with an empty collection",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def store_closed(expense_count: int, income_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_CLOSED,
            entity_type="store",
            description="Store closed",
            details={"expense_count": expense_count, "income_count": income_count},
        )

    @staticmethod
    def expense_added(expense_id: str, category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {amount} ({category})",
            details={"category": category, "amount": amount},
        )

    @staticmethod
    def expense_deleted(expense_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            severity=AuditSeverity.INFO if found else AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted" if found else "Expense not found, nothing deleted",
            details={"found": found},
        )

    @staticmethod
    def expenses_replaced(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_REPLACED,
            entity_type="expense",
            description=f"Expense collection replaced with {count} records",
            details={"count": count},
        )

    @staticmethod
    def income_added(income_id: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_ADDED,
            entity_type="income",
            entity_id=income_id,
            description=f"Income added: {amount}",
            details={"amount": amount},
        )

    @staticmethod
    def income_deleted(income_id: str, found: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_DELETED,
            severity=AuditSeverity.INFO if found else AuditSeverity.DEBUG,
            entity_type="income",
            entity_id=income_id,
            description="Income deleted" if found else "Income not found, nothing deleted",
            details={"found": found},
        )

    @staticmethod
    def income_replaced(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_REPLACED,
            entity_type="income",
            description=f"Income collection replaced with {count} records",
            details={"count": count},
        )

    @staticmethod
    def persist_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="store",
            entity_id=key,
            description=f"Could not persist '{key}'; in-memory state kept",
            details={"key": key},
            error_message=error_message,
        )
