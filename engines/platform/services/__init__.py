"""
Citizen Platform Engine — Service Layer
========================================
Creates the PlatformRegistry and maintains the issuer allow-list.
The projection keeps a read-side history of issuer authorizations.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from core.commands.rejection import ReasonCode
from core.ledger.errors import StateError
from core.primitives.records import PlatformRegistry
from engines.platform.commands import (
    ISSUER_AUTHORIZE_REQUEST,
    PLATFORM_INITIALIZE_REQUEST,
)
from engines.platform.events import (
    COMMAND_TO_EVENT_TYPE,
    ISSUER_AUTHORIZED_V1,
    PAYLOAD_BUILDERS,
    PLATFORM_INITIALIZED_V1,
)

logger = logging.getLogger("citizen.engines")


# ── Projection Store ──────────────────────────────────────────

class PlatformProjectionStore:
    """In-memory read model of registry lifecycle and issuers."""

    def __init__(self):
        self._events: List[dict] = []
        self._authority: Optional[str] = None
        self._initialized_at: Optional[str] = None
        self._issuers: Dict[str, dict] = {}  # issuer → authorization summary

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        if event_type not in (PLATFORM_INITIALIZED_V1, ISSUER_AUTHORIZED_V1):
            return
        self._events.append({"event_type": event_type, "payload": payload})

        if event_type == PLATFORM_INITIALIZED_V1:
            self._authority = payload["authority"]
            self._initialized_at = payload.get("initialized_at")

        elif event_type == ISSUER_AUTHORIZED_V1:
            issuer = payload["issuer"]
            self._issuers[issuer] = {
                "issuer": issuer,
                "authorized_by": payload.get("actor_id"),
                "authorized_at": payload.get("authorized_at"),
            }

    # ── Queries ───────────────────────────────────────────────

    @property
    def authority(self) -> Optional[str]:
        return self._authority

    @property
    def initialized_at(self) -> Optional[str]:
        return self._initialized_at

    def list_issuers(self) -> List[dict]:
        return [dict(entry) for entry in self._issuers.values()]

    def get_issuer(self, issuer: str) -> Optional[dict]:
        entry = self._issuers.get(issuer)
        return dict(entry) if entry else None

    @property
    def event_count(self) -> int:
        return len(self._events)

    def truncate(self):
        self._events.clear()
        self._authority = None
        self._initialized_at = None
        self._issuers.clear()


# ── Service ───────────────────────────────────────────────────

class PlatformService:
    """Registry engine service. Runs inside the bus transaction."""

    def __init__(self, *, context):
        self._context = context
        self._handlers = {
            PLATFORM_INITIALIZE_REQUEST: self._initialize,
            ISSUER_AUTHORIZE_REQUEST: self._authorize_issuer,
        }

    def execute(self, command) -> dict:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise StateError(
                f"Unknown command: {command.command_type}",
                code=ReasonCode.UNKNOWN_COMMAND,
                policy_name="platform_service",
            )
        effects = handler(command)
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]
        payload = PAYLOAD_BUILDERS[event_type](command, effects)
        return {"event_type": event_type, "payload": payload}

    def _initialize(self, command) -> dict:
        ctx = self._context
        registry = PlatformRegistry(authority=command.actor_id)
        ctx.store.create(ctx.address, registry, kind="platform registry")
        registry.mint_authority = ctx.minter.grant_authority(ctx.address)
        logger.info(f"Platform initialized with authority {command.actor_id}")
        return {"platform_address": ctx.address}

    def _authorize_issuer(self, command) -> dict:
        registry = self._context.require_registry()
        issuer = command.payload["issuer"]
        registry.authorized_issuers.append(issuer)
        logger.info(f"Issuer authorized: {issuer}")
        return {"issuer_count": len(registry.authorized_issuers)}
