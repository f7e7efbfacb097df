"""
Transaction Store

The single owner of the expense and income collections, and the only
component that writes to durable storage.

DESIGN DECISION: Every mutation is two ordered steps, apply then persist.
- In-memory state is authoritative. A failed write is logged and the
  mutation still stands; the user never loses what they just entered.
- Loading is fail-soft. A stored collection that cannot be parsed is
  reported and replaced by an empty one; startup never crashes on it.
- Contract violations (bad amounts, duplicate ids) raise immediately.
  They are caller bugs, not runtime conditions.
"""

import threading
from collections.abc import Iterable, Mapping
from typing import Callable, Optional, TypeVar, Union
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.models.mutation import (
    AddExpense,
    AddIncome,
    DeleteExpense,
    DeleteIncome,
    Mutation,
    ReplaceExpenses,
    ReplaceIncome,
)
from finance_tracker.models.transaction import (
    Expense,
    ExpenseDraft,
    Income,
    IncomeDraft,
)
from finance_tracker.services.storage import KeyValueStorageInterface


_EXPENSE_LIST = TypeAdapter(Optional[list[Expense]])
_INCOME_LIST = TypeAdapter(Optional[list[Income]])

T = TypeVar("T", Expense, Income)


class StoreError(Exception):
    """Base exception for store operations."""
    pass


class ContractViolationError(StoreError, ValueError):
    """A caller passed data the store must not accept."""
    pass


class DuplicateIdError(ContractViolationError):
    """An id that is already in use (or was used before) was presented again."""
    pass


class StoreClosedError(StoreError):
    """Mutation attempted after close()."""
    pass


def new_transaction_id() -> str:
    """Default id generator: random UUID4 as a string."""
    return str(uuid4())


class TransactionStore:
    """
    Owns the expense and income collections.

    Usage:
        store = TransactionStore(storage).load()
        expense = store.add_expense(ExpenseDraft(...))
        store.delete_expense(expense.id)
        store.close()

    Read accessors hand out tuples; records themselves are frozen models.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        id_factory: Optional[Callable[[], str]] = None,
        audit_logger: Optional[AuditLogger] = None,
        expenses_key: str = "expenses",
        income_key: str = "income",
    ):
        """
        Initialize the store. Collections start empty until load() is called.

        Args:
            storage: Durable key-value storage
            id_factory: Returns a fresh unique string per call.
                        Defaults to random UUIDs.
            audit_logger: Where mutations and recovered failures are reported.
            expenses_key: Storage key of the expense collection
            income_key: Storage key of the income collection
        """
        self._storage = storage
        self._id_factory = id_factory or new_transaction_id
        self._audit = audit_logger or AuditLogger()
        self._expenses_key = expenses_key
        self._income_key = income_key

        self._expenses: list[Expense] = []
        self._income: list[Income] = []
        self._issued_ids: set[str] = set()
        self._lock = threading.RLock()
        self._closed = False

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return tuple(self._expenses)

    @property
    def income(self) -> tuple[Income, ...]:
        return tuple(self._income)

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> "TransactionStore":
        """
        Rehydrate both collections from storage.

        Absent entries give empty collections. Malformed entries are
        reported and also give empty collections. So does a collection
        repeating an id, or reusing one of the expense ids for income.
        """
        with self._lock:
            self._expenses = self._read_collection(self._expenses_key, _EXPENSE_LIST)
            self._expenses = self._drop_on_id_clash(self._expenses_key, self._expenses)
            self._income = self._read_collection(self._income_key, _INCOME_LIST)
            self._income = self._drop_on_id_clash(
                self._income_key, self._income, other=self._expenses
            )
            self._issued_ids = {r.id for r in self._expenses}
            self._issued_ids.update(r.id for r in self._income)
            self._audit.log_store_loaded(len(self._expenses), len(self._income))
        return self

    def flush(self) -> bool:
        """Write the current state to storage. Returns False if any write failed."""
        with self._lock:
            return self._persist()

    def close(self) -> None:
        """Final flush; further mutations raise StoreClosedError."""
        with self._lock:
            if self._closed:
                return
            self._persist()
            self._closed = True
            self._audit.log_store_closed(len(self._expenses), len(self._income))

    def __enter__(self) -> "TransactionStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_expense(self, draft: Union[ExpenseDraft, Mapping]) -> Expense:
        """
        Create an expense from a validated draft and append it.

        The amount must already be rounded to cents; the store rejects
        rather than rounds.

        Raises:
            ContractViolationError: Non-finite, non-positive or unrounded amount,
                                    or an otherwise invalid draft
            DuplicateIdError: The id generator returned an id already issued
        """
        draft = self._coerce(ExpenseDraft, draft)
        record = self._build(Expense, draft)
        self.apply(AddExpense(record=record))
        return record

    def add_income(self, draft: Union[IncomeDraft, Mapping]) -> Income:
        """Create an income record from a validated draft and append it."""
        draft = self._coerce(IncomeDraft, draft)
        record = self._build(Income, draft)
        self.apply(AddIncome(record=record))
        return record

    def delete_expense(self, expense_id: str) -> None:
        """Remove an expense by id. Unknown ids are ignored."""
        self.apply(DeleteExpense(id=expense_id))

    def delete_income(self, income_id: str) -> None:
        """Remove an income record by id. Unknown ids are ignored."""
        self.apply(DeleteIncome(id=income_id))

    def replace_expenses(self, records: Iterable[Union[Expense, Mapping]]) -> None:
        """Overwrite the whole expense collection. Never merges."""
        items = self._coerce_list(list[Expense], records)
        self.apply(ReplaceExpenses(records=tuple(items)))

    def replace_income(self, records: Iterable[Union[Income, Mapping]]) -> None:
        """Overwrite the whole income collection. Never merges."""
        items = self._coerce_list(list[Income], records)
        self.apply(ReplaceIncome(records=tuple(items)))

    def apply(self, mutation: Mutation) -> None:
        """
        Apply one mutation, then persist both collections.

        Mutations are applied strictly in call order.
        """
        with self._lock:
            if self._closed:
                raise StoreClosedError("Store is closed")
            self._reduce(mutation)
            self._persist()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reduce(self, mutation: Mutation) -> None:
        if isinstance(mutation, AddExpense):
            self._claim_ids([mutation.record.id])
            self._expenses.append(mutation.record)
            self._audit.log_expense_added(
                mutation.record.id,
                mutation.record.category,
                str(mutation.record.amount),
            )
        elif isinstance(mutation, DeleteExpense):
            remaining = [e for e in self._expenses if e.id != mutation.id]
            found = len(remaining) != len(self._expenses)
            self._expenses = remaining
            self._audit.log_expense_deleted(mutation.id, found)
        elif isinstance(mutation, ReplaceExpenses):
            self._check_replacement(mutation.records, other=self._income)
            self._expenses = list(mutation.records)
            self._issued_ids.update(r.id for r in mutation.records)
            self._audit.log_expenses_replaced(len(mutation.records))
        elif isinstance(mutation, AddIncome):
            self._claim_ids([mutation.record.id])
            self._income.append(mutation.record)
            self._audit.log_income_added(
                mutation.record.id,
                str(mutation.record.amount),
            )
        elif isinstance(mutation, DeleteIncome):
            remaining = [i for i in self._income if i.id != mutation.id]
            found = len(remaining) != len(self._income)
            self._income = remaining
            self._audit.log_income_deleted(mutation.id, found)
        elif isinstance(mutation, ReplaceIncome):
            self._check_replacement(mutation.records, other=self._expenses)
            self._income = list(mutation.records)
            self._issued_ids.update(r.id for r in mutation.records)
            self._audit.log_income_replaced(len(mutation.records))
        else:
            raise TypeError(f"Unsupported mutation: {type(mutation).__name__}")

    def _claim_ids(self, ids: Iterable[str]) -> None:
        for record_id in ids:
            if record_id in self._issued_ids:
                raise DuplicateIdError(f"Transaction id already used: {record_id}")
        self._issued_ids.update(ids)

    def _check_replacement(self, records, other) -> None:
        """Ids must be unique within the new list and not clash with the other collection."""
        seen: set[str] = set()
        other_ids = {r.id for r in other}
        for record in records:
            if record.id in seen:
                raise DuplicateIdError(f"Duplicate id in replacement list: {record.id}")
            if record.id in other_ids:
                raise DuplicateIdError(f"Id already used by another collection: {record.id}")
            seen.add(record.id)

    def _build(self, model: type[T], draft) -> T:
        try:
            return model.from_draft(draft, self._id_factory())
        except ValidationError as e:
            raise ContractViolationError(str(e)) from e

    @staticmethod
    def _coerce(model, draft):
        if isinstance(draft, model):
            return draft
        try:
            return model.model_validate(draft)
        except ValidationError as e:
            raise ContractViolationError(str(e)) from e

    @staticmethod
    def _coerce_list(list_type, records):
        try:
            return TypeAdapter(list_type).validate_python(list(records))
        except ValidationError as e:
            raise ContractViolationError(str(e)) from e

    def _read_collection(self, key: str, adapter: TypeAdapter) -> list:
        try:
            raw = self._storage.get(key)
        except Exception as e:
            self._audit.log_state_corrupted(key, f"read failed: {e}")
            return []
        if raw is None:
            return []
        try:
            return adapter.validate_json(raw) or []
        except ValidationError as e:
            self._audit.log_state_corrupted(key, str(e))
            return []

    def _drop_on_id_clash(self, key: str, records: list, other=()) -> list:
        try:
            self._check_replacement(records, other)
        except DuplicateIdError as e:
            self._audit.log_state_corrupted(key, str(e))
            return []
        return records

    def _persist(self) -> bool:
        """Best-effort write of both collections. Never raises."""
        ok = True
        payloads = (
            (self._expenses_key, _EXPENSE_LIST, self._expenses),
            (self._income_key, _INCOME_LIST, self._income),
        )
        for key, adapter, records in payloads:
            try:
                value = adapter.dump_json(records).decode("utf-8")
                if not self._storage.set(key, value):
                    ok = False
                    self._audit.log_persist_failed(key, "storage rejected the write")
            except Exception as e:
                ok = False
                self._audit.log_persist_failed(key, str(e))
        return ok
