"""Transaction store package."""

from finance_tracker.store.transaction_store import (
    ContractViolationError,
    DuplicateIdError,
    StoreClosedError,
    StoreError,
    TransactionStore,
    new_transaction_id,
)

__all__ = [
    "ContractViolationError",
    "DuplicateIdError",
    "StoreClosedError",
    "StoreError",
    "TransactionStore",
    "new_transaction_id",
]
