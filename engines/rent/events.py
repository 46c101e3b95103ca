"""
Citizen Rent Engine — Event Types
==================================
"""

from engines.rent.commands import YIELD_CLAIM_REQUEST

# ── Event Types ───────────────────────────────────────────────

YIELD_CLAIMED_V1 = "rent.yield.claimed.v1"

ALL_EVENT_TYPES = (
    YIELD_CLAIMED_V1,
)


# ── Payload Builders ──────────────────────────────────────────

def _base_fields(cmd):
    return {
        "actor_id": cmd.actor_id,
        "correlation_id": str(cmd.correlation_id),
        "command_id": str(cmd.command_id),
    }


def _yield_claimed(cmd, effects):
    base = _base_fields(cmd)
    base.update({
        "asset_id": cmd.payload["asset_id"],
        "claimant": cmd.actor_id,
        "share_balance": effects["share_balance"],
        "monthly_rent": effects["monthly_rent"],
        "user_share": effects["user_share"],
        "claimant_liquid_balance": effects["claimant_liquid_balance"],
        "claimed_at": cmd.payload.get("issued_at") or str(cmd.issued_at),
    })
    return base


PAYLOAD_BUILDERS = {
    YIELD_CLAIMED_V1: _yield_claimed,
}

COMMAND_TO_EVENT_TYPE = {
    YIELD_CLAIM_REQUEST: YIELD_CLAIMED_V1,
}
