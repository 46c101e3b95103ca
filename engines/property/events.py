"""
Citizen Property Engine — Event Types
======================================
Property listings and share acquisitions.
"""

from engines.property.commands import (
    PROPERTY_REGISTER_REQUEST,
    SHARES_ACQUIRE_REQUEST,
)

# ── Event Types ───────────────────────────────────────────────

PROPERTY_REGISTERED_V1 = "property.listing.registered.v1"
SHARES_ACQUIRED_V1 = "property.shares.acquired.v1"

ALL_EVENT_TYPES = (
    PROPERTY_REGISTERED_V1,
    SHARES_ACQUIRED_V1,
)


# ── Payload Builders ──────────────────────────────────────────

def _base_fields(cmd):
    return {
        "actor_id": cmd.actor_id,
        "correlation_id": str(cmd.correlation_id),
        "command_id": str(cmd.command_id),
    }


def _property_registered(cmd, effects):
    base = _base_fields(cmd)
    p = cmd.payload
    base.update({
        "asset_id": p["asset_id"],
        "name": p["name"],
        "total_value": p["total_value"],
        "total_tokens": p["total_tokens"],
        "metadata_uri": p["metadata_uri"],
        "property_address": effects["property_address"],
        "total_properties": effects["total_properties"],
        "registered_at": p.get("issued_at") or str(cmd.issued_at),
    })
    return base


def _shares_acquired(cmd, effects):
    base = _base_fields(cmd)
    p = cmd.payload
    base.update({
        "asset_id": p["asset_id"],
        "buyer": cmd.actor_id,
        "quantity": p["quantity"],
        "buyer_balance": effects["buyer_balance"],
        "tokens_sold": effects["tokens_sold"],
        "tokens_available": effects["tokens_available"],
        "acquired_at": p.get("issued_at") or str(cmd.issued_at),
    })
    return base


PAYLOAD_BUILDERS = {
    PROPERTY_REGISTERED_V1: _property_registered,
    SHARES_ACQUIRED_V1: _shares_acquired,
}

COMMAND_TO_EVENT_TYPE = {
    PROPERTY_REGISTER_REQUEST: PROPERTY_REGISTERED_V1,
    SHARES_ACQUIRE_REQUEST: SHARES_ACQUIRED_V1,
}
