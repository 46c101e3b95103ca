"""
Citizen Platform Ledger - Host Ledger Primitives
=================================================
Record store, deterministic addressing, checked arithmetic,
error taxonomy and the transaction journal.

Pure Python. No Django imports.
"""

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
    AuthorizationError,
    CapacityError,
    DuplicateRecordError,
    ExternalCallError,
    InsufficientFundsError,
    MetadataError,
    MintError,
    PlatformError,
    StateError,
    error_for_rejection,
)
from core.ledger.journal import GENESIS_HASH, TransactionJournal
from core.ledger.store import RecordStore, TransactionRequired

__all__ = [
    # ── Addressing ────────────────────────────────────────────
    "derive_address",
    "platform_address",
    "certificate_address",
    "property_address",
    # ── Arithmetic ────────────────────────────────────────────
    "U64_MAX",
    "checked_add",
    "checked_sub",
    "checked_mul",
    "checked_div",
    "require_u64",
    # ── Errors ────────────────────────────────────────────────
    "PlatformError",
    "AuthorizationError",
    "CapacityError",
    "StateError",
    "DuplicateRecordError",
    "ArithmeticOverflowError",
    "ExternalCallError",
    "MintError",
    "MetadataError",
    "InsufficientFundsError",
    "error_for_rejection",
    # ── Store / journal ───────────────────────────────────────
    "RecordStore",
    "TransactionRequired",
    "TransactionJournal",
    "GENESIS_HASH",
]
