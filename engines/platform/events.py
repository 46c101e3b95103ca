"""
Citizen Platform Engine — Event Types
======================================
Registry lifecycle and issuer allow-list changes.
"""

from engines.platform.commands import (
    ISSUER_AUTHORIZE_REQUEST,
    PLATFORM_INITIALIZE_REQUEST,
)

# ── Event Types ───────────────────────────────────────────────

PLATFORM_INITIALIZED_V1 = "platform.registry.initialized.v1"
ISSUER_AUTHORIZED_V1 = "platform.issuer.authorized.v1"

ALL_EVENT_TYPES = (
    PLATFORM_INITIALIZED_V1,
    ISSUER_AUTHORIZED_V1,
)


# ── Payload Builders ──────────────────────────────────────────

def _base_fields(cmd):
    return {
        "actor_id": cmd.actor_id,
        "correlation_id": str(cmd.correlation_id),
        "command_id": str(cmd.command_id),
    }


def _platform_initialized(cmd, effects):
    base = _base_fields(cmd)
    base.update({
        "authority": cmd.payload["authority"],
        "platform_address": effects["platform_address"],
        "initialized_at": cmd.payload.get("issued_at") or str(cmd.issued_at),
    })
    return base


def _issuer_authorized(cmd, effects):
    base = _base_fields(cmd)
    base.update({
        "issuer": cmd.payload["issuer"],
        "issuer_count": effects["issuer_count"],
        "authorized_at": cmd.payload.get("issued_at") or str(cmd.issued_at),
    })
    return base


PAYLOAD_BUILDERS = {
    PLATFORM_INITIALIZED_V1: _platform_initialized,
    ISSUER_AUTHORIZED_V1: _issuer_authorized,
}

COMMAND_TO_EVENT_TYPE = {
    PLATFORM_INITIALIZE_REQUEST: PLATFORM_INITIALIZED_V1,
    ISSUER_AUTHORIZE_REQUEST: ISSUER_AUTHORIZED_V1,
}
