"""
Main Orchestrator for Finance Tracker

This module ties together all the components and defines the flows the
presentation layer drives:
1. Startup (settings → storage → audit → store → load)
2. Submission (raw input → validate → store mutation)
3. Views (store snapshot → aggregation)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing validation first
- Views are always derived from a fresh snapshot, never cached
- The store is explicitly constructed and explicitly closed; there is no
  process-wide instance
"""

import datetime as dt
from decimal import Decimal
from typing import Callable, Optional, Union

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, get_settings
from finance_tracker.models.report import CategorySlice, FinanceSummary, MonthlyPoint
from finance_tracker.models.transaction import Expense, ExpenseCategory, Income
from finance_tracker.models.validation import ValidationResult
from finance_tracker.queries import aggregations
from finance_tracker.services.storage import (
    AuditSinkInterface,
    FileKeyValueStorage,
    KeyValueStorageInterface,
)
from finance_tracker.store import TransactionStore
from finance_tracker.validation import TransactionValidator


def create_store(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    id_factory: Optional[Callable[[], str]] = None,
    audit_sink: Optional[AuditSinkInterface] = None,
) -> TransactionStore:
    """
    Build and load a store from configuration.

    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Overrides the file storage from settings
        id_factory: Overrides the random-UUID id generator
        audit_sink: Optional observability sink for audit events

    Returns:
        A loaded TransactionStore
    """
    settings = settings or get_settings()
    storage_settings = settings.storage

    configure_logging(settings.app.log_level)

    if storage is None:
        storage = FileKeyValueStorage(
            data_dir=storage_settings.data_dir,
            write_attempts=storage_settings.write_attempts,
        )

    store = TransactionStore(
        storage=storage,
        id_factory=id_factory,
        audit_logger=AuditLogger(sink=audit_sink),
        expenses_key=storage_settings.expenses_key,
        income_key=storage_settings.income_key,
    )
    return store.load()


class FinanceSession:
    """
    What the presentation layer talks to.

    Flow:
    1. submit_* → validate raw input → add to store (only if valid)
    2. remove_* → delete from store (unknown ids are fine)
    3. summary() / chart_distribution() / ... → derived from current state
    4. close() → final flush
    """

    def __init__(
        self,
        store: TransactionStore,
        validator: Optional[TransactionValidator] = None,
        month_label_format: Optional[str] = None,
    ):
        self._store = store
        self._validator = validator or TransactionValidator()
        self._month_label_format = (
            month_label_format or get_settings().display.month_label_format
        )

    @classmethod
    def open(cls, settings: Optional[Settings] = None, **store_kwargs) -> "FinanceSession":
        """Create the store from settings and wrap it in a session."""
        settings = settings or get_settings()
        store = create_store(settings=settings, **store_kwargs)
        return cls(
            store,
            validator=TransactionValidator(settings.app),
            month_label_format=settings.display.month_label_format,
        )

    @property
    def store(self) -> TransactionStore:
        return self._store

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._store.expenses

    @property
    def income(self) -> tuple[Income, ...]:
        return self._store.income

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def submit_expense(
        self,
        description: str,
        amount: Union[str, int, float, Decimal],
        category: Union[str, ExpenseCategory],
        date: Union[str, dt.date],
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate raw expense input and add it if valid.

        Returns:
            (expense, validation) - expense is None when validation failed
        """
        result = self._validator.validate_expense(description, amount, category, date)
        if not result.is_valid:
            return None, result
        return self._store.add_expense(result.draft), result

    def submit_income(
        self,
        description: str,
        amount: Union[str, int, float, Decimal],
        date: Union[str, dt.date],
    ) -> tuple[Optional[Income], ValidationResult]:
        """
        Validate raw income input and add it if valid.

        Returns:
            (income, validation) - income is None when validation failed
        """
        result = self._validator.validate_income(description, amount, date)
        if not result.is_valid:
            return None, result
        return self._store.add_income(result.draft), result

    def remove_expense(self, expense_id: str) -> None:
        self._store.delete_expense(expense_id)

    def remove_income(self, income_id: str) -> None:
        self._store.delete_income(income_id)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def summary(self) -> FinanceSummary:
        return aggregations.summarize(self._store.income, self._store.expenses)

    def chart_distribution(self) -> list[CategorySlice]:
        return aggregations.chart_distribution(self._store.expenses)

    def expenses_by_month(self) -> dict[str, Decimal]:
        """Monthly totals, newest month first."""
        return aggregations.expenses_by_month(
            self._store.expenses, self._month_label_format
        )

    def monthly_trend(self) -> list[MonthlyPoint]:
        """Monthly totals, oldest month first (line chart order)."""
        return aggregations.monthly_trend(
            self._store.expenses, self._month_label_format
        )

    # ------------------------------------------------------------------

    def close(self) -> None:
        self._store.close()

    def __enter__(self) -> "FinanceSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
