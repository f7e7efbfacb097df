"""Aggregation package: pure derivations over the transaction collections."""

from finance_tracker.queries.aggregations import (
    MONTH_LABEL_FORMAT,
    balance,
    chart_distribution,
    expenses_by_category,
    expenses_by_month,
    monthly_trend,
    summarize,
    total_expenses,
    total_income,
)

__all__ = [
    "MONTH_LABEL_FORMAT",
    "balance",
    "chart_distribution",
    "expenses_by_category",
    "expenses_by_month",
    "monthly_trend",
    "summarize",
    "total_expenses",
    "total_income",
]
