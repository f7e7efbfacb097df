"""
Store Mutations

Every change to the transaction collections is one of these variants.
The store applies them one at a time, in the order they are submitted,
and persists after each one.

DESIGN DECISION: The set is closed. TransactionStore.apply() handles each
variant explicitly and raises on anything else; nothing is silently ignored.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from finance_tracker.models.transaction import Expense, Income


class _MutationBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class AddExpense(_MutationBase):
    kind: Literal["add_expense"] = "add_expense"
    record: Expense


class DeleteExpense(_MutationBase):
    kind: Literal["delete_expense"] = "delete_expense"
    id: str


class ReplaceExpenses(_MutationBase):
    """Full overwrite of the expense collection (bulk import / reset)."""
    kind: Literal["replace_expenses"] = "replace_expenses"
    records: tuple[Expense, ...] = ()


class AddIncome(_MutationBase):
    kind: Literal["add_income"] = "add_income"
    record: Income


class DeleteIncome(_MutationBase):
    kind: Literal["delete_income"] = "delete_income"
    id: str


class ReplaceIncome(_MutationBase):
    """Full overwrite of the income collection (bulk import / reset)."""
    kind: Literal["replace_income"] = "replace_income"
    records: tuple[Income, ...] = ()


Mutation = Annotated[
    Union[
        AddExpense,
        DeleteExpense,
        ReplaceExpenses,
        AddIncome,
        DeleteIncome,
        ReplaceIncome,
    ],
    Field(discriminator="kind"),
]
