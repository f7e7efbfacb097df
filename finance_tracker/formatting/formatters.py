"""
Display Formatting

Pure helpers turning stored values into display strings and colour tokens.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional, Union

from finance_tracker.config import get_settings
from finance_tracker.models.transaction import ExpenseCategory, round_amount


class FormattingError(ValueError):
    """Value cannot be rendered."""
    pass


CATEGORY_COLORS = {
    ExpenseCategory.FOOD: "#8B5CF6",
    ExpenseCategory.TRANSPORT: "#06B6D4",
    ExpenseCategory.ENTERTAINMENT: "#EC4899",
    ExpenseCategory.SHOPPING: "#FACC15",
    ExpenseCategory.UTILITIES: "#F59E0B",
    ExpenseCategory.HEALTH: "#10B981",
    ExpenseCategory.OTHER: "#6366F1",
}

CATEGORY_LABELS = {
    ExpenseCategory.FOOD: "Food & Dining",
    ExpenseCategory.TRANSPORT: "Transportation",
    ExpenseCategory.ENTERTAINMENT: "Entertainment",
    ExpenseCategory.SHOPPING: "Shopping",
    ExpenseCategory.UTILITIES: "Utilities",
    ExpenseCategory.HEALTH: "Health & Medical",
    ExpenseCategory.OTHER: "Other",
}


def format_currency(
    amount: Union[Decimal, int, float],
    symbol: Optional[str] = None,
) -> str:
    """
    Format an amount as e.g. '₹1,234.56' (or '-₹1,234.56').

    Rounds half-up to cents before formatting.
    """
    if symbol is None:
        symbol = get_settings().display.currency_symbol
    try:
        value = round_amount(amount)
    except ValueError as e:
        raise FormattingError(f"Cannot format amount {amount!r}: {e}") from e
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_date(
    value: Union[str, dt.date],
    fmt: Optional[str] = None,
) -> str:
    """
    Render an ISO date ('YYYY-MM-DD') for humans, e.g. '05 Jan 2024'.

    Raises FormattingError on anything that is not a valid calendar date.
    """
    if fmt is None:
        fmt = get_settings().display.date_format
    if isinstance(value, dt.datetime):
        value = value.date()
    elif isinstance(value, str):
        try:
            value = dt.date.fromisoformat(value.strip())
        except ValueError as e:
            raise FormattingError(f"Invalid date: {value!r}") from e
    elif not isinstance(value, dt.date):
        raise FormattingError(f"Invalid date: {value!r}")
    return value.strftime(fmt)


def category_color(category: str) -> str:
    """Hex colour for a category. Unknown categories get OTHER's colour."""
    return CATEGORY_COLORS[ExpenseCategory.from_value(category)]


def category_label(category: str) -> str:
    """Human label for a category; unknown values are shown capitalised."""
    kind = ExpenseCategory.from_value(category)
    if kind.value != str(category).strip().lower():
        return str(category).strip().capitalize()
    return CATEGORY_LABELS[kind]
