"""
Citizen Platform Command Layer - Command Base Contract
=======================================================
Every platform operation begins as a Command.

A Command is a frozen declaration of intent signed by one identity.
It carries identity, payload and timing, nothing else.

Rules:
- Immutable once created (frozen dataclass)
- No business logic inside
- No store interaction
- command_type must end with '.request'
- command_type follows engine.domain.action.request format
- actor_id is the verified signer of the operation
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


# ══════════════════════════════════════════════════════════════
# CANONICAL COMMAND
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Command:
    """
    Canonical platform command.

    Fields:
        command_id:     Unique identifier (UUID).
        command_type:   Namespaced type ending in '.request'
                        (e.g. 'property.shares.acquire.request').
        actor_id:       Identity that signed the operation.
        payload:        Operation data (dict).
        issued_at:      When the command was issued.
        correlation_id: Groups related commands and events.
        source_engine:  Engine that owns this command.

    Example:
        Command(
            command_id=uuid.uuid4(),
            command_type="property.shares.acquire.request",
            actor_id="buyer-wallet",
            payload={"asset_id": "prop-mint-1", "quantity": 60},
            issued_at=datetime.now(timezone.utc),
            correlation_id=uuid.uuid4(),
            source_engine="property",
        )
    """

    command_id: uuid.UUID
    command_type: str
    actor_id: str
    payload: dict
    issued_at: datetime
    correlation_id: uuid.UUID
    source_engine: str

    def __post_init__(self):
        # ── command_id must be UUID ───────────────────────────
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be UUID, got {type(self.command_id).__name__}"
            )

        # ── command_type must end with .request ───────────────
        if not self.command_type or not isinstance(self.command_type, str):
            raise ValueError("command_type must be a non-empty string.")

        if not self.command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{self.command_type}' must end with "
                f"'.request' (e.g. 'platform.issuer.authorize.request')."
            )

        # ── command_type minimum 4 segments ───────────────────
        parts = self.command_type.split(".")
        if len(parts) < 4:
            raise ValueError(
                f"command_type '{self.command_type}' must follow "
                f"engine.domain.action.request format (minimum 4 segments)."
            )

        # ── source_engine must match first segment ────────────
        if parts[0] != self.source_engine:
            raise ValueError(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{self.source_engine}'."
            )

        # ── actor_id must be non-empty ────────────────────────
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")

        if not isinstance(self.issued_at, datetime):
            raise ValueError("issued_at must be a datetime.")

        if not isinstance(self.correlation_id, uuid.UUID):
            raise ValueError("correlation_id must be UUID.")


# ══════════════════════════════════════════════════════════════
# EVENT NAMING LAW (derivation helpers)
# ══════════════════════════════════════════════════════════════

def derive_rejection_event_type(command_type: str) -> str:
    """
    property.shares.acquire.request → property.shares.acquire.rejected
    """
    if not command_type.endswith(".request"):
        raise ValueError(
            f"Cannot derive rejection event type from "
            f"'{command_type}', it must end with '.request'."
        )

    base = command_type[: -len(".request")]
    return f"{base}.rejected"


def derive_source_engine(command_type: str) -> str:
    """property.shares.acquire.request → property"""
    return command_type.split(".")[0]


# ══════════════════════════════════════════════════════════════
# REQUEST → COMMAND
# ══════════════════════════════════════════════════════════════

def command_from_request(
    request: dict,
    *,
    command_id: Optional[uuid.UUID] = None,
    correlation_id: Optional[uuid.UUID] = None,
) -> Command:
    """
    Build a Command from an engine request's to_command() dict.

    Identifiers default to fresh UUIDs.
    """
    return Command(
        command_id=command_id or uuid.uuid4(),
        command_type=request["command_type"],
        actor_id=request["actor_id"],
        payload=dict(request["payload"]),
        issued_at=request["issued_at"],
        correlation_id=correlation_id or uuid.uuid4(),
        source_engine=request["source_engine"],
    )
