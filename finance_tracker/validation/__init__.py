"""Input validation package."""

from finance_tracker.validation.validator import (
    InvalidAmountError,
    TransactionValidator,
    parse_amount,
)

__all__ = ["InvalidAmountError", "TransactionValidator", "parse_amount"]
