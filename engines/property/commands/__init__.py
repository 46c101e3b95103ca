"""
Citizen Property Engine — Commands
===================================
Property registration (authority only) and share acquisition.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from core.ledger.arithmetic import U64_MAX

PROPERTY_REGISTER_REQUEST = "property.listing.register.request"
SHARES_ACQUIRE_REQUEST = "property.shares.acquire.request"

PROPERTY_COMMAND_TYPES = frozenset({
    PROPERTY_REGISTER_REQUEST,
    SHARES_ACQUIRE_REQUEST,
})


def _is_u64(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= U64_MAX
    )


@dataclass(frozen=True)
class RegisterPropertyRequest:
    """Authority lists a property with a fixed share supply."""
    asset_id: str
    name: str
    total_value: int
    total_tokens: int
    metadata_uri: str
    actor_id: str
    issued_at: datetime
    source_engine: str = "property"

    def __post_init__(self):
        if not self.asset_id or not isinstance(self.asset_id, str):
            raise ValueError("asset_id must be a non-empty string.")
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")
        if not isinstance(self.metadata_uri, str):
            raise ValueError("metadata_uri must be a string.")
        if not _is_u64(self.total_value):
            raise ValueError("total_value must be an integer within the u64 range.")
        if not _is_u64(self.total_tokens) or self.total_tokens == 0:
            raise ValueError("total_tokens must be > 0 and within the u64 range.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": PROPERTY_REGISTER_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "asset_id": self.asset_id,
                "name": self.name,
                "total_value": self.total_value,
                "total_tokens": self.total_tokens,
                "metadata_uri": self.metadata_uri,
                "issued_at": str(self.issued_at),
            },
        }


@dataclass(frozen=True)
class AcquireSharesRequest:
    """Buyer (the signer) acquires share units. No payment is collected."""
    asset_id: str
    quantity: int
    actor_id: str
    issued_at: datetime
    source_engine: str = "property"

    def __post_init__(self):
        if not self.asset_id or not isinstance(self.asset_id, str):
            raise ValueError("asset_id must be a non-empty string.")
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not _is_u64(self.quantity) or self.quantity == 0:
            raise ValueError("quantity must be > 0 and within the u64 range.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": SHARES_ACQUIRE_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "asset_id": self.asset_id,
                "quantity": self.quantity,
                "issued_at": str(self.issued_at),
            },
        }
