"""
Derived View Models

Shapes produced by the aggregation functions for charts and summary cards.
They carry no behaviour beyond what is needed to render them.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CategorySlice(BaseModel):
    """One segment of the category distribution chart."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="Category as stored on the expenses"
    )
    value: Decimal = Field(
        ...,
        description="Sum of the category's expense amounts"
    )


class MonthlyPoint(BaseModel):
    """One point of the monthly spending trend."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(
        ...,
        description="Month label, e.g. 'Jan 2024'"
    )
    amount: Decimal


class FinanceSummary(BaseModel):
    """
    Everything the summary cards show.

    All amounts are exact Decimal sums of two-decimal amounts.
    """

    model_config = ConfigDict(frozen=True)

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal = Field(
        ...,
        description="Total income minus total expenses (may be negative)"
    )
    by_category: dict[str, Decimal] = Field(default_factory=dict)

    # Highest-spending category, None when there are no expenses
    top_category: Optional[str] = None
    top_category_amount: Optional[Decimal] = None

    income_count: int = Field(default=0, ge=0)
    expense_count: int = Field(default=0, ge=0)

    @property
    def is_overspent(self) -> bool:
        return self.balance < 0
