"""
Citizen Property Engine — Policies
===================================
Listing text bounds, property existence, share supply cap.
"""

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.ledger.arithmetic import checked_add
from core.primitives.records import exceeds_cap


def property_text_bounds_policy(command, context) -> Optional[RejectionReason]:
    limits = context.limits
    p = command.payload
    bounded = (
        ("name", limits.max_name_bytes),
        ("metadata_uri", limits.max_uri_bytes),
    )
    for field_name, cap in bounded:
        if exceeds_cap(p.get(field_name, ""), cap):
            return RejectionReason(
                code=ReasonCode.FIELD_TOO_LONG,
                message=f"{field_name} exceeds {cap} bytes.",
                policy_name="property_text_bounds_policy",
            )
    return None


def property_exists_policy(command, context) -> Optional[RejectionReason]:
    """Shared by share acquisition and yield claims."""
    asset_id = command.payload.get("asset_id")
    if context.get_property(asset_id) is None:
        return RejectionReason(
            code=ReasonCode.PROPERTY_NOT_FOUND,
            message=f"No property registered for asset '{asset_id}'.",
            policy_name="property_exists_policy",
        )
    return None


def tokens_available_policy(command, context) -> Optional[RejectionReason]:
    """tokens_sold + quantity must stay within total_tokens. No partial fill."""
    prop = context.get_property(command.payload.get("asset_id"))
    if prop is None:
        return None
    quantity = command.payload.get("quantity", 0)
    requested_total = checked_add(prop.tokens_sold, quantity)
    if requested_total > prop.total_tokens:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_TOKENS_AVAILABLE,
            message=f"Requested {quantity}, only {prop.tokens_available} available.",
            policy_name="tokens_available_policy",
        )
    return None
