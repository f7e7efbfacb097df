"""
Audit Logger

DESIGN DECISION: Every store mutation and every recovered failure is logged.
This provides:
1. Traceability of what happened to the user's data
2. A record of corrupt state that was discarded at startup
3. Persistence failures that would otherwise go unnoticed

The audit logger:
- Is synchronous, like the store that calls it
- Gracefully handles failures (doesn't crash the app if the sink fails)
"""

import logging
from typing import Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder
from finance_tracker.services.storage import AuditSinkInterface


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (for observability)
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Where events are forwarded.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("finance_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if available.

        Returns True if the sink accepted the event (or no sink is configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_store_loaded(self, expense_count: int, income_count: int) -> None:
        self.log(AuditEventBuilder.store_loaded(expense_count, income_count))

    def log_state_corrupted(self, key: str, error_message: str) -> None:
        """Log a stored collection that was discarded at load."""
        self.log(AuditEventBuilder.state_corrupted(key, error_message))

    def log_store_closed(self, expense_count: int, income_count: int) -> None:
        self.log(AuditEventBuilder.store_closed(expense_count, income_count))

    def log_expense_added(self, expense_id: str, category: str, amount: str) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, category, amount))

    def log_expense_deleted(self, expense_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id, found))

    def log_expenses_replaced(self, count: int) -> None:
        self.log(AuditEventBuilder.expenses_replaced(count))

    def log_income_added(self, income_id: str, amount: str) -> None:
        self.log(AuditEventBuilder.income_added(income_id, amount))

    def log_income_deleted(self, income_id: str, found: bool) -> None:
        self.log(AuditEventBuilder.income_deleted(income_id, found))

    def log_income_replaced(self, count: int) -> None:
        self.log(AuditEventBuilder.income_replaced(count))

    def log_persist_failed(self, key: str, error_message: str) -> None:
        """Log a storage write that failed; the in-memory state was kept."""
        self.log(AuditEventBuilder.persist_failed(key, error_message))
