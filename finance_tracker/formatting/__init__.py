"""Display formatting package."""

from finance_tracker.formatting.formatters import (
    CATEGORY_COLORS,
    CATEGORY_LABELS,
    FormattingError,
    category_color,
    category_label,
    format_currency,
    format_date,
)

__all__ = [
    "CATEGORY_COLORS",
    "CATEGORY_LABELS",
    "FormattingError",
    "category_color",
    "category_label",
    "format_currency",
    "format_date",
]
