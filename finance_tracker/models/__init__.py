"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the store must conform to these schemas.
"""

from finance_tracker.models.transaction import (
    CENT,
    MAX_AMOUNT,
    Expense,
    ExpenseCategory,
    ExpenseDraft,
    Income,
    IncomeDraft,
    TransactionBase,
    round_amount,
    to_decimal,
)
from finance_tracker.models.mutation import (
    AddExpense,
    AddIncome,
    DeleteExpense,
    DeleteIncome,
    Mutation,
    ReplaceExpenses,
    ReplaceIncome,
)
from finance_tracker.models.report import (
    CategorySlice,
    FinanceSummary,
    MonthlyPoint,
)
from finance_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "CENT",
    "MAX_AMOUNT",
    "Expense",
    "ExpenseCategory",
    "ExpenseDraft",
    "Income",
    "IncomeDraft",
    "TransactionBase",
    "round_amount",
    "to_decimal",
    # Mutations
    "AddExpense",
    "AddIncome",
    "DeleteExpense",
    "DeleteIncome",
    "Mutation",
    "ReplaceExpenses",
    "ReplaceIncome",
    # Derived views
    "CategorySlice",
    "FinanceSummary",
    "MonthlyPoint",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
