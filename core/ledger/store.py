"""
Citizen Platform Ledger - Record Store
=======================================
In-memory host ledger: create-once, mutate-in-place records keyed by
derived addresses, plus per-address liquid balances.

RULES (NON-NEGOTIABLE):
- create() at an occupied address raises DuplicateRecordError
- Records are never deleted
- Every write happens inside transaction()
- Records mutated in place must be read through get() or
  records_of_type() inside the same transaction
- A transaction either commits in full or restores the pre-call state
- One re-entrant lock serializes transactions (linearizable per store)

Rollback is copy-on-read: the first time a transaction reads a record
or writes a balance, its prior value is saved in an undo log. Cost per
transaction is proportional to the records it touches, not to the
size of the store.

Nested transaction() calls join the outermost one.
"""

from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type, TypeVar

from core.ledger.arithmetic import checked_add, checked_sub, require_u64
from core.ledger.errors import DuplicateRecordError, InsufficientFundsError

logger = logging.getLogger("citizen.ledger")

R = TypeVar("R")

_ABSENT = object()


class TransactionRequired(RuntimeError):
    """A write was attempted outside RecordStore.transaction()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"RecordStore.{operation}() must run inside transaction()."
        )


class RecordStore:
    """
    Arena-style record map with atomic transactions.

    Usage:
        store = RecordStore()
        with store.transaction():
            store.create(address, record, kind="property")
            store.get(address).tokens_sold += 10
    """

    def __init__(self) -> None:
        self._records: Dict[str, Any] = {}
        self._liquid: Dict[str, int] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._record_undo: Dict[str, Any] = {}
        self._liquid_undo: Dict[str, Any] = {}

    # ══════════════════════════════════════════════════════════
    # TRANSACTIONS
    # ══════════════════════════════════════════════════════════

    @contextmanager
    def serialized(self) -> Iterator["RecordStore"]:
        """Hold the store lock across a transaction and its follow-up work."""
        with self._lock:
            yield self

    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        with self._lock:
            if self._depth > 0:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            self._record_undo = {}
            self._liquid_undo = {}
            self._depth = 1
            try:
                yield self
            except BaseException as exc:
                self._rollback()
                logger.info(
                    f"Transaction rolled back: {type(exc).__name__}"
                )
                raise
            finally:
                self._depth = 0
                self._record_undo = {}
                self._liquid_undo = {}

    def _rollback(self) -> None:
        for address, previous in self._record_undo.items():
            if previous is _ABSENT:
                self._records.pop(address, None)
            else:
                self._records[address] = previous
        for address, previous in self._liquid_undo.items():
            if previous is _ABSENT:
                self._liquid.pop(address, None)
            else:
                self._liquid[address] = previous

    def _remember_record(self, address: str) -> None:
        if self._depth == 0 or address in self._record_undo:
            return
        current = self._records.get(address, _ABSENT)
        self._record_undo[address] = (
            current if current is _ABSENT else copy.deepcopy(current)
        )

    def _remember_liquid(self, address: str) -> None:
        if address not in self._liquid_undo:
            self._liquid_undo[address] = self._liquid.get(address, _ABSENT)

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @property
    def touched_count(self) -> int:
        """Addresses saved for rollback by the open transaction."""
        return len(self._record_undo) + len(self._liquid_undo)

    def _require_transaction(self, operation: str) -> None:
        if self._depth == 0:
            raise TransactionRequired(operation)

    # ══════════════════════════════════════════════════════════
    # RECORDS
    # ══════════════════════════════════════════════════════════

    def create(self, address: str, record: R, *, kind: str = "record") -> R:
        """Create a record at an unused address. Never overwrites."""
        self._require_transaction("create")
        if address in self._records:
            raise DuplicateRecordError(address, kind)
        self._remember_record(address)
        self._records[address] = record
        logger.debug(f"Created {kind} at {address}")
        return record

    def get(self, address: str) -> Optional[Any]:
        with self._lock:
            self._remember_record(address)
            return self._records.get(address)

    def exists(self, address: str) -> bool:
        with self._lock:
            return address in self._records

    def records_of_type(self, record_type: Type[R]) -> List[R]:
        with self._lock:
            matches = [
                (address, record) for address, record in self._records.items()
                if isinstance(record, record_type)
            ]
            for address, _ in matches:
                self._remember_record(address)
            return [record for _, record in matches]

    @property
    def record_count(self) -> int:
        return len(self._records)

    # ══════════════════════════════════════════════════════════
    # LIQUID BALANCES
    # ══════════════════════════════════════════════════════════

    def liquid_balance(self, address: str) -> int:
        with self._lock:
            return self._liquid.get(address, 0)

    def credit_liquid(self, address: str, amount: int) -> int:
        """Add funds to an address. Returns the new balance."""
        self._require_transaction("credit_liquid")
        require_u64(amount, "amount")
        balance = checked_add(self._liquid.get(address, 0), amount)
        self._remember_liquid(address)
        self._liquid[address] = balance
        return balance

    def transfer_liquid(self, source: str, destination: str, amount: int) -> None:
        """Move funds between addresses, guarded by the source balance."""
        self._require_transaction("transfer_liquid")
        require_u64(amount, "amount")
        source_balance = self._liquid.get(source, 0)
        if source_balance < amount:
            raise InsufficientFundsError(source, source_balance, amount)
        self._remember_liquid(source)
        self._remember_liquid(destination)
        self._liquid[source] = checked_sub(source_balance, amount)
        self._liquid[destination] = checked_add(
            self._liquid.get(destination, 0), amount
        )
