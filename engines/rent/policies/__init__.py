"""
Citizen Rent Engine — Policies
===============================
"""

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason


def tokens_owned_policy(command, context) -> Optional[RejectionReason]:
    """Claimant must hold at least one share of the property."""
    asset_id = command.payload.get("asset_id")
    if context.get_property(asset_id) is None:
        return None
    balance = context.minter.balance_of(asset_id, command.actor_id)
    if balance == 0:
        return RejectionReason(
            code=ReasonCode.NO_TOKENS_OWNED,
            message=f"'{command.actor_id}' holds no shares of '{asset_id}'.",
            policy_name="tokens_owned_policy",
        )
    return None
