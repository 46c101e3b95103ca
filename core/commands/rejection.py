"""
Citizen Platform Command Layer - Rejection Model
=================================================
Structured rejection reasons for denied or failed commands.

A RejectionReason is not an error by itself. It is the explanation
carried by every PlatformError and written into the rejection event
that the journal records for a failed operation.

Every rejection must be:
- Deterministic (same input, same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Machine-readable code (e.g. 'UNAUTHORIZED_ISSUER').
        message:     Human-readable explanation.
        policy_name: Policy or component that produced the rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        """Serialize for event payload."""
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Authorization ─────────────────────────────────────────
    AUTHORITY_REQUIRED = "AUTHORITY_REQUIRED"
    UNAUTHORIZED_ISSUER = "UNAUTHORIZED_ISSUER"

    # ── Capacity ──────────────────────────────────────────────
    INSUFFICIENT_TOKENS_AVAILABLE = "INSUFFICIENT_TOKENS_AVAILABLE"
    ISSUER_CAPACITY_EXCEEDED = "ISSUER_CAPACITY_EXCEEDED"
    FIELD_TOO_LONG = "FIELD_TOO_LONG"

    # ── State ─────────────────────────────────────────────────
    NO_TOKENS_OWNED = "NO_TOKENS_OWNED"
    PLATFORM_NOT_INITIALIZED = "PLATFORM_NOT_INITIALIZED"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"
    ISSUER_ALREADY_AUTHORIZED = "ISSUER_ALREADY_AUTHORIZED"

    # ── Host ledger ───────────────────────────────────────────
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    ARITHMETIC_OVERFLOW = "ARITHMETIC_OVERFLOW"

    # ── External collaborators ────────────────────────────────
    MINT_FAILED = "MINT_FAILED"
    METADATA_FAILED = "METADATA_FAILED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    # ── Command structure ─────────────────────────────────────
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
