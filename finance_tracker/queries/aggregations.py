"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and PURE.
Every function here takes the collections as arguments and returns a new
value. Nothing reads the clock, nothing touches storage, nothing mutates
its inputs.

All sums are Decimal sums of two-decimal amounts, so they are exact:
the per-category and per-month sums always add up to the grand total.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from itertools import groupby
from operator import attrgetter

from finance_tracker.models.report import CategorySlice, FinanceSummary, MonthlyPoint
from finance_tracker.models.transaction import CENT, Expense, Income


ZERO = Decimal("0.00")
MONTH_LABEL_FORMAT = "%b %Y"


def _sum_amounts(records: Iterable) -> Decimal:
    return sum((record.amount for record in records), ZERO).quantize(CENT)


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all expense amounts. 0.00 when empty."""
    return _sum_amounts(expenses)


def total_income(income: Iterable[Income]) -> Decimal:
    """Sum of all income amounts. 0.00 when empty."""
    return _sum_amounts(income)


def balance(income: Iterable[Income], expenses: Iterable[Expense]) -> Decimal:
    """Total income minus total expenses. May be negative."""
    return total_income(income) - total_expenses(expenses)


def expenses_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """
    Sum expenses per category.

    Only categories that occur appear. Keys are the categories exactly as
    stored, in order of first appearance.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
    return totals


def chart_distribution(expenses: Iterable[Expense]) -> list[CategorySlice]:
    """Category sums as chart slices, ordered by first appearance."""
    return [
        CategorySlice(name=category, value=amount)
        for category, amount in expenses_by_category(expenses).items()
    ]


def expenses_by_month(
    expenses: Iterable[Expense],
    label_format: str = MONTH_LABEL_FORMAT,
) -> dict[str, Decimal]:
    """
    Sum expenses per calendar month, newest month first.

    Expenses are sorted by date descending and consecutive entries of the
    same year and month are summed. Callers wanting oldest-first reverse
    the items (see monthly_trend).
    """
    ordered = sorted(expenses, key=attrgetter("date"), reverse=True)
    totals: dict[str, Decimal] = {}
    for _, group in groupby(ordered, key=lambda e: (e.date.year, e.date.month)):
        group = list(group)
        label = group[0].date.replace(day=1).strftime(label_format)
        # Distinct months can only share a label with a lossy format
        totals[label] = totals.get(label, ZERO) + _sum_amounts(group)
    return totals


def monthly_trend(
    expenses: Iterable[Expense],
    label_format: str = MONTH_LABEL_FORMAT,
) -> list[MonthlyPoint]:
    """Monthly sums as line-chart points, oldest month first."""
    by_month = expenses_by_month(expenses, label_format)
    return [
        MonthlyPoint(label=label, amount=amount)
        for label, amount in reversed(list(by_month.items()))
    ]


def summarize(
    income: Sequence[Income],
    expenses: Sequence[Expense],
) -> FinanceSummary:
    """
    Build the summary card figures.

    The top category is the one with the highest sum; ties go to the
    category that appeared first.
    """
    by_category = expenses_by_category(expenses)

    top_category = None
    top_amount = None
    for category, amount in by_category.items():
        if top_amount is None or amount > top_amount:
            top_category, top_amount = category, amount

    return FinanceSummary(
        total_income=total_income(income),
        total_expenses=total_expenses(expenses),
        balance=balance(income, expenses),
        by_category=by_category,
        top_category=top_category,
        top_category_amount=top_amount,
        income_count=len(income),
        expense_count=len(expenses),
    )
