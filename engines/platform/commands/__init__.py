"""
Citizen Platform Engine — Commands
===================================
Registry initialization and issuer authorization.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PLATFORM_INITIALIZE_REQUEST = "platform.registry.initialize.request"
ISSUER_AUTHORIZE_REQUEST = "platform.issuer.authorize.request"

PLATFORM_COMMAND_TYPES = frozenset({
    PLATFORM_INITIALIZE_REQUEST,
    ISSUER_AUTHORIZE_REQUEST,
})


@dataclass(frozen=True)
class InitializePlatformRequest:
    """Create the PlatformRegistry; the signer becomes its authority."""
    actor_id: str
    issued_at: datetime
    source_engine: str = "platform"

    def __post_init__(self):
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": PLATFORM_INITIALIZE_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "authority": self.actor_id,
                "issued_at": str(self.issued_at),
            },
        }


@dataclass(frozen=True)
class AuthorizeIssuerRequest:
    """Authority appends an identity to the issuer allow-list."""
    issuer: str
    actor_id: str
    issued_at: datetime
    source_engine: str = "platform"

    def __post_init__(self):
        if not self.issuer or not isinstance(self.issuer, str):
            raise ValueError("issuer must be a non-empty string.")
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")
        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

    def to_command(self) -> dict:
        return {
            "command_type": ISSUER_AUTHORIZE_REQUEST,
            "source_engine": self.source_engine,
            "actor_id": self.actor_id,
            "issued_at": self.issued_at,
            "payload": {
                "issuer": self.issuer,
                "issued_at": str(self.issued_at),
            },
        }
