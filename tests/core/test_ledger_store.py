"""
Citizen Ledger — Record Store, Addressing, Checked Arithmetic
=============================================================
Host-ledger guarantees every platform operation relies on:
atomic transactions, create-once addresses, u64 arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from core.ledger.address import (
    certificate_address,
    derive_address,
    platform_address,
    property_address,
)
from core.ledger.arithmetic import (
    U64_MAX,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    require_u64,
)
from core.ledger.errors import (
    ArithmeticOverflowError,
    DuplicateRecordError,
    InsufficientFundsError,
    PlatformError,
)
from core.ledger.store import RecordStore, TransactionRequired


@dataclass
class Counter:
    value: int = 0


@dataclass
class Label:
    text: str


class Boom(Exception):
    pass


# ══════════════════════════════════════════════════════════════
# ADDRESSING
# ══════════════════════════════════════════════════════════════

class TestDeriveAddress:
    def test_same_input_same_address(self):
        assert derive_address("property", "mint-1") == derive_address("property", "mint-1")

    def test_namespace_separates_addresses(self):
        assert derive_address("property", "mint-1") != derive_address("certificate", "mint-1")

    def test_seed_boundaries_do_not_collide(self):
        assert derive_address("holding", "ab", "c") != derive_address("holding", "a", "bc")

    def test_address_is_64_hex_chars(self):
        address = derive_address("platform")
        assert len(address) == 64
        int(address, 16)

    def test_empty_seed_rejected(self):
        with pytest.raises(ValueError):
            derive_address("property", "")

    def test_empty_namespace_rejected(self):
        with pytest.raises(ValueError):
            derive_address("")

    def test_helpers_match_raw_derivation(self):
        assert platform_address() == derive_address("platform")
        assert certificate_address("c-1") == derive_address("certificate", "c-1")
        assert property_address("p-1") == derive_address("property", "p-1")


# ══════════════════════════════════════════════════════════════
# CHECKED ARITHMETIC
# ══════════════════════════════════════════════════════════════

class TestCheckedArithmetic:
    def test_add_within_range(self):
        assert checked_add(U64_MAX - 1, 1) == U64_MAX

    def test_add_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError) as exc_info:
            checked_add(U64_MAX, 1)
        assert exc_info.value.operation == "add"
        assert exc_info.value.code == "ARITHMETIC_OVERFLOW"

    def test_sub_below_zero_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            checked_sub(1, 2)

    def test_mul_overflow_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            checked_mul(2**32, 2**32)

    def test_div_truncates(self):
        assert checked_div(199, 100) == 1

    def test_div_by_zero_raises(self):
        with pytest.raises(ArithmeticOverflowError):
            checked_div(10, 0)

    def test_overflow_error_is_platform_and_arithmetic_error(self):
        error = ArithmeticOverflowError("add", 1, 2)
        assert isinstance(error, PlatformError)
        assert isinstance(error, ArithmeticError)

    def test_require_u64_rejects_bool_and_negative(self):
        with pytest.raises(TypeError):
            require_u64(True, "flag")
        with pytest.raises(ValueError):
            require_u64(-1, "amount")
        with pytest.raises(ValueError):
            require_u64(U64_MAX + 1, "amount")


# ══════════════════════════════════════════════════════════════
# RECORD STORE
# ══════════════════════════════════════════════════════════════

class TestRecordStoreCreate:
    def test_create_requires_transaction(self):
        store = RecordStore()
        with pytest.raises(TransactionRequired):
            store.create("addr", Counter())

    def test_create_and_get(self):
        store = RecordStore()
        with store.transaction():
            store.create("addr", Counter(3), kind="counter")
        assert store.get("addr") == Counter(3)
        assert store.exists("addr")
        assert store.record_count == 1

    def test_create_at_occupied_address_raises(self):
        store = RecordStore()
        with store.transaction():
            store.create("addr", Counter(), kind="counter")
        with pytest.raises(DuplicateRecordError) as exc_info:
            with store.transaction():
                store.create("addr", Counter(), kind="counter")
        assert exc_info.value.address == "addr"
        assert exc_info.value.kind == "counter"
        assert exc_info.value.code == "DUPLICATE_RECORD"

    def test_records_of_type(self):
        store = RecordStore()
        with store.transaction():
            store.create("a", Counter())
            store.create("b", Label("x"))
            store.create("c", Counter())
        assert len(store.records_of_type(Counter)) == 2
        assert store.records_of_type(Label) == [Label("x")]

    def test_get_missing_returns_none(self):
        assert RecordStore().get("nowhere") is None


class TestRecordStoreAtomicity:
    def test_failure_restores_records(self):
        store = RecordStore()
        with store.transaction():
            store.create("addr", Counter(1))

        with pytest.raises(Boom):
            with store.transaction():
                store.get("addr").value = 99
                store.create("other", Counter())
                raise Boom()

        assert store.get("addr").value == 1
        assert not store.exists("other")

    def test_failure_restores_liquid_balances(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", 500)

        with pytest.raises(Boom):
            with store.transaction():
                store.transfer_liquid("pool", "alice", 200)
                raise Boom()

        assert store.liquid_balance("pool") == 500
        assert store.liquid_balance("alice") == 0

    def test_nested_transaction_joins_outer(self):
        store = RecordStore()
        with pytest.raises(Boom):
            with store.transaction():
                store.create("outer", Counter())
                with store.transaction():
                    assert store.in_transaction
                    store.create("inner", Counter())
                raise Boom()
        assert not store.exists("outer")
        assert not store.exists("inner")

    def test_in_transaction_flag_resets(self):
        store = RecordStore()
        with store.transaction():
            assert store.in_transaction
        assert not store.in_transaction

    def test_rollback_only_restores_touched_records(self):
        store = RecordStore()
        with store.transaction():
            store.create("a", Counter(1))
            store.create("b", Counter(2))
        untouched = store.get("a")

        with pytest.raises(Boom):
            with store.transaction():
                store.get("b").value = 20
                assert store.touched_count == 1
                raise Boom()

        assert store.get("a") is untouched
        assert store.get("b").value == 2

    def test_touched_count_tracks_records_and_balances(self):
        store = RecordStore()
        with store.transaction():
            for index in range(50):
                store.create(f"r-{index}", Counter(index))

        with store.transaction():
            store.get("r-7").value += 1
            store.get("r-7").value += 1
            store.credit_liquid("pool", 5)
            assert store.touched_count == 2
        assert store.touched_count == 0
        assert store.get("r-7").value == 9

    def test_nested_rollback_restores_inner_writes(self):
        store = RecordStore()
        with store.transaction():
            store.create("addr", Counter(1))
        with pytest.raises(Boom):
            with store.transaction():
                with store.transaction():
                    store.get("addr").value = 5
                raise Boom()
        assert store.get("addr").value == 1


class TestLiquidBalances:
    def test_credit_requires_transaction(self):
        with pytest.raises(TransactionRequired):
            RecordStore().credit_liquid("pool", 1)

    def test_transfer_moves_funds(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", 1_000)
            store.transfer_liquid("pool", "alice", 250)
        assert store.liquid_balance("pool") == 750
        assert store.liquid_balance("alice") == 250

    def test_transfer_beyond_balance_raises(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", 10)
        with pytest.raises(InsufficientFundsError) as exc_info:
            with store.transaction():
                store.transfer_liquid("pool", "alice", 11)
        assert exc_info.value.balance == 10
        assert exc_info.value.requested == 11
        assert store.liquid_balance("pool") == 10

    def test_self_transfer_keeps_balance(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", 100)
            store.transfer_liquid("pool", "pool", 40)
        assert store.liquid_balance("pool") == 100

    def test_failed_transfer_to_new_address_leaves_no_balance_entry(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", 100)
        with pytest.raises(Boom):
            with store.transaction():
                store.transfer_liquid("pool", "alice", 40)
                raise Boom()
        assert store.liquid_balance("alice") == 0
        assert store.liquid_balance("pool") == 100

    def test_credit_overflow_raises(self):
        store = RecordStore()
        with store.transaction():
            store.credit_liquid("pool", U64_MAX)
        with pytest.raises(ArithmeticOverflowError):
            with store.transaction():
                store.credit_liquid("pool", 1)
        assert store.liquid_balance("pool") == U64_MAX
