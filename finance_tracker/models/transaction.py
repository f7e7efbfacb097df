"""
Core Data Models for Finance Tracker

These models define the strict schemas for every transaction held by the store.
They are designed to:
1. Enforce the amount invariants at runtime (finite, positive, cents)
2. Provide clear validation error messages
3. Serialize to the persisted JSON layout (amount as a JSON number)

DESIGN DECISION: Records are frozen. The aggregation functions receive the
very same objects the store holds, so immutability is what keeps them read-only.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


CENT = Decimal("0.01")

# Largest amount whose float form (the persisted JSON number) is exact
MAX_AMOUNT = Decimal("9999999999999.99")

Number = Union[Decimal, int, float, str]


# =============================================================================
# MONEY HELPERS
# =============================================================================

def to_decimal(value: Number) -> Decimal:
    """
    Convert a raw amount to Decimal without binary float artefacts.

    Floats go through their shortest repr, so 4.2 becomes Decimal('4.2')
    rather than Decimal('4.2000000000000001776...').
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a number, not a boolean")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(value)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def round_amount(value: Number) -> Decimal:
    """Round half-up to whole cents. Idempotent."""
    try:
        return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range: {value!r}") from e


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    Records keep whatever category string they were stored with; anything
    outside this set is displayed as OTHER.
    """
    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    HEALTH = "health"
    OTHER = "other"

    @classmethod
    def from_value(cls, value: str) -> "ExpenseCategory":
        """Map a stored category to the closed set, falling back to OTHER."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class TransactionBase(BaseModel):
    """Fields shared by every income and expense record."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What the money was for / came from"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        decimal_places=2,
        description="Positive amount with at most two fractional digits"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def reject_inexact_amounts(cls, v):
        """
        Amounts must arrive already rounded to cents.

        Nothing is coerced here: 4.999 is an error, not 5.00.
        """
        amount = to_decimal(v)
        if amount != round_amount(amount):
            raise ValueError(
                f"Amount must have at most two decimal places, got {v!r}"
            )
        return amount

    @field_validator('amount')
    @classmethod
    def store_as_cents(cls, v: Decimal) -> Decimal:
        return v.quantize(CENT)

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)


class IncomeDraft(TransactionBase):
    """An income entry that has not been assigned an id yet."""


class ExpenseDraft(TransactionBase):
    """An expense entry that has not been assigned an id yet."""

    category: str = Field(
        default=ExpenseCategory.OTHER.value,
        min_length=1,
        max_length=50,
        description="Expense category (kept verbatim)"
    )

    @field_validator('category', mode='before')
    @classmethod
    def unwrap_category(cls, v):
        if isinstance(v, ExpenseCategory):
            return v.value
        return v


class Income(IncomeDraft):
    """An income record held by the store."""

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier assigned by the store"
    )

    @classmethod
    def from_draft(cls, draft: IncomeDraft, record_id: str) -> "Income":
        return cls(id=record_id, **draft.model_dump(exclude={"id"}))


class Expense(ExpenseDraft):
    """An expense record held by the store."""

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier assigned by the store"
    )

    @classmethod
    def from_draft(cls, draft: ExpenseDraft, record_id: str) -> "Expense":
        return cls(id=record_id, **draft.model_dump(exclude={"id"}))

    @property
    def category_kind(self) -> ExpenseCategory:
        """The category as a member of the closed set (unknown -> OTHER)."""
        return ExpenseCategory.from_value(self.category)
