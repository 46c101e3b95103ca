"""
Citizen Rent Engine — Commands
===============================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

YIELD_CLAIM_REQUEST = "rent.yield.claim.request"

RENT_COMMAND_TYPES = frozenset({YIELD_CLAIM_REQUEST})


@dataclass(frozen=True)
class ClaimYieldRequest:
    """Share holder (the signer) claims the proportional monthly payout."""
    asset_id: str
    actor_id: str
    issued_at: datetime
    source_engine: str = "rent"

    def __post_init__(self):
        if not self.asset_id or not isinstance(self.asset_id, str):
            raise ValueError("asset_id must be a non-empty string.")
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": YIELD_CLAIM_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "asset_id": self.asset_id,
                "issued_at": str(self.issued_at),
            },
        }
