"""
Citizen Property Engine — Service Layer
========================================
Registration creates the Property record and its share asset class.
Acquisition mints shares to the buyer and advances tokens_sold.

tokens_sold never exceeds total_tokens; the service enforces it even
when the supply policy is not registered.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from core.commands.rejection import ReasonCode
from core.ledger.address import property_address
from core.ledger.arithmetic import checked_add
from core.ledger.errors import CapacityError, StateError
from core.primitives.records import Property
from engines.property.commands import (
    PROPERTY_REGISTER_REQUEST,
    SHARES_ACQUIRE_REQUEST,
)
from engines.property.events import (
    COMMAND_TO_EVENT_TYPE,
    PAYLOAD_BUILDERS,
    PROPERTY_REGISTERED_V1,
    SHARES_ACQUIRED_V1,
)

logger = logging.getLogger("citizen.engines")


# ── Projection Store ──────────────────────────────────────────

class PropertyProjectionStore:
    """In-memory read model of listings and who acquired what."""

    def __init__(self):
        self._events: List[dict] = []
        self._properties: Dict[str, dict] = {}  # asset_id → listing, registration order
        self._acquired: Dict[str, Dict[str, int]] = {}  # asset_id → {buyer → quantity}

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        if event_type not in (PROPERTY_REGISTERED_V1, SHARES_ACQUIRED_V1):
            return
        self._events.append({"event_type": event_type, "payload": payload})

        if event_type == PROPERTY_REGISTERED_V1:
            asset_id = payload["asset_id"]
            self._properties[asset_id] = {
                "asset_id": asset_id,
                "name": payload["name"],
                "total_value": payload["total_value"],
                "total_tokens": payload["total_tokens"],
                "tokens_sold": 0,
                "tokens_available": payload["total_tokens"],
                "metadata_uri": payload["metadata_uri"],
                "property_address": payload["property_address"],
                "registered_at": payload.get("registered_at"),
            }
            self._acquired[asset_id] = {}

        elif event_type == SHARES_ACQUIRED_V1:
            asset_id = payload["asset_id"]
            listing = self._properties.get(asset_id)
            if listing:
                listing["tokens_sold"] = payload["tokens_sold"]
                listing["tokens_available"] = payload["tokens_available"]
            buyers = self._acquired.setdefault(asset_id, {})
            buyer = payload["buyer"]
            buyers[buyer] = buyers.get(buyer, 0) + payload["quantity"]

    # ── Queries ───────────────────────────────────────────────

    def list_properties(self) -> List[dict]:
        return [dict(listing) for listing in self._properties.values()]

    def get_property(self, asset_id: str) -> Optional[dict]:
        listing = self._properties.get(asset_id)
        return dict(listing) if listing else None

    def buyers_of(self, asset_id: str) -> Dict[str, int]:
        return dict(self._acquired.get(asset_id, {}))

    @property
    def event_count(self) -> int:
        return len(self._events)

    def truncate(self):
        self._events.clear()
        self._properties.clear()
        self._acquired.clear()


# ── Service ───────────────────────────────────────────────────

class PropertyService:
    """Property engine service. Runs inside the bus transaction."""

    def __init__(self, *, context):
        self._context = context
        self._handlers = {
            PROPERTY_REGISTER_REQUEST: self._register,
            SHARES_ACQUIRE_REQUEST: self._acquire,
        }

    def execute(self, command) -> dict:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise StateError(
                f"Unknown command: {command.command_type}",
                code=ReasonCode.UNKNOWN_COMMAND,
                policy_name="property_service",
            )
        effects = handler(command)
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]
        payload = PAYLOAD_BUILDERS[event_type](command, effects)
        return {"event_type": event_type, "payload": payload}

    def _register(self, command) -> dict:
        ctx = self._context
        registry = ctx.require_registry()
        p = command.payload
        asset_id = p["asset_id"]
        address = property_address(asset_id)

        prop = Property(
            name=p["name"],
            total_value=p["total_value"],
            total_tokens=p["total_tokens"],
            metadata_uri=p["metadata_uri"],
            asset_id=asset_id,
        )
        ctx.store.create(address, prop, kind="property")
        ctx.minter.create_asset(
            asset_id, authority=registry.mint_authority, decimals=0, max_supply=None,
        )

        registry.total_properties = checked_add(registry.total_properties, 1)
        logger.info(f"Property {asset_id} registered ({prop.total_tokens} shares)")
        return {
            "property_address": address,
            "total_properties": registry.total_properties,
        }

    def _acquire(self, command) -> dict:
        ctx = self._context
        registry = ctx.require_registry()
        asset_id = command.payload["asset_id"]
        quantity = command.payload["quantity"]

        prop = ctx.get_property(asset_id)
        if prop is None:
            raise StateError(
                f"No property registered for asset '{asset_id}'.",
                code=ReasonCode.PROPERTY_NOT_FOUND,
                policy_name="property_service",
            )
        new_sold = checked_add(prop.tokens_sold, quantity)
        if new_sold > prop.total_tokens:
            raise CapacityError(
                f"Requested {quantity}, only {prop.tokens_available} available.",
                code=ReasonCode.INSUFFICIENT_TOKENS_AVAILABLE,
                policy_name="property_service",
            )

        buyer_balance = ctx.minter.mint(
            asset_id, command.actor_id, quantity, registry.mint_authority,
        )
        prop.tokens_sold = new_sold
        logger.info(f"{command.actor_id} acquired {quantity} shares of {asset_id}")
        return {
            "buyer_balance": buyer_balance,
            "tokens_sold": prop.tokens_sold,
            "tokens_available": prop.tokens_available,
        }
