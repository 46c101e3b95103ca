"""
Citizen Platform Ledger - Errors
=================================
Named error taxonomy for every platform operation.

Each error carries a RejectionReason so the command bus can journal
the failure and the HTTP layer can render it without knowing the
concrete class.

Any error raised inside a transaction aborts the whole operation.
The record store restores its pre-call state before the error
reaches the caller.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from core.commands.rejection import ReasonCode, RejectionReason


class PlatformError(Exception):
    """Base error for all platform operations."""

    default_code = "PLATFORM_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        policy_name: str = "platform",
    ):
        self.code = code or self.default_code
        self.message = message
        self.reason = RejectionReason(
            code=self.code,
            message=message,
            policy_name=policy_name,
        )
        super().__init__(f"[{self.code}] {message}")

    @classmethod
    def from_reason(cls, reason: RejectionReason) -> "PlatformError":
        return cls(reason.message, code=reason.code, policy_name=reason.policy_name)


class AuthorizationError(PlatformError):
    """Caller lacks the required capability (wrong authority, unlisted issuer)."""

    default_code = ReasonCode.AUTHORITY_REQUIRED


class CapacityError(PlatformError):
    """A bounded resource would be exceeded (token supply, issuer list, text cap)."""

    default_code = ReasonCode.INSUFFICIENT_TOKENS_AVAILABLE


class StateError(PlatformError):
    """Operation invoked on a record whose state forbids it."""

    default_code = ReasonCode.NO_TOKENS_OWNED


class DuplicateRecordError(PlatformError):
    """Creation attempted at an already occupied address."""

    default_code = ReasonCode.DUPLICATE_RECORD

    def __init__(self, address: str, kind: str = "record"):
        self.address = address
        self.kind = kind
        super().__init__(
            f"A {kind} already exists at address '{address}'.",
            policy_name="record_store",
        )


class ArithmeticOverflowError(PlatformError, ArithmeticError):
    """Counter or payout computation left the u64 range."""

    default_code = ReasonCode.ARITHMETIC_OVERFLOW

    def __init__(self, operation: str, left: int, right: int):
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(
            f"Checked {operation} failed for operands {left} and {right}.",
            policy_name="checked_arithmetic",
        )


class ExternalCallError(PlatformError):
    """A collaborator (minter, metadata, transfer) refused the call."""


class MintError(ExternalCallError):
    default_code = ReasonCode.MINT_FAILED


class MetadataError(ExternalCallError):
    default_code = ReasonCode.METADATA_FAILED


class InsufficientFundsError(ExternalCallError):
    """Liquid balance cannot cover a transfer."""

    default_code = ReasonCode.INSUFFICIENT_FUNDS

    def __init__(self, address: str, balance: int, requested: int):
        self.address = address
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Account '{address}' holds {balance}, transfer needs {requested}.",
            policy_name="liquid_transfer",
        )


# ══════════════════════════════════════════════════════════════
# REJECTION CODE → ERROR CLASS
# ══════════════════════════════════════════════════════════════

REJECTION_ERROR_CLASSES: Dict[str, Type[PlatformError]] = {
    ReasonCode.AUTHORITY_REQUIRED: AuthorizationError,
    ReasonCode.UNAUTHORIZED_ISSUER: AuthorizationError,
    ReasonCode.INSUFFICIENT_TOKENS_AVAILABLE: CapacityError,
    ReasonCode.ISSUER_CAPACITY_EXCEEDED: CapacityError,
    ReasonCode.FIELD_TOO_LONG: CapacityError,
    ReasonCode.NO_TOKENS_OWNED: StateError,
    ReasonCode.PLATFORM_NOT_INITIALIZED: StateError,
    ReasonCode.PROPERTY_NOT_FOUND: StateError,
    ReasonCode.ISSUER_ALREADY_AUTHORIZED: StateError,
    ReasonCode.UNKNOWN_COMMAND: StateError,
}


def error_for_rejection(reason: RejectionReason) -> PlatformError:
    """Build the named error for a policy rejection."""
    error_class = REJECTION_ERROR_CLASSES.get(reason.code, PlatformError)
    return error_class.from_reason(reason)
