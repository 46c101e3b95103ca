"""
Citizen Credential Engine — Policies
=====================================
Issuer allow-list and bounded text checks.
"""

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.primitives.records import exceeds_cap


def authorized_issuer_policy(command, context) -> Optional[RejectionReason]:
    """Only allow-listed issuers may issue credentials."""
    registry = context.registry()
    if registry is None:
        return None
    if not registry.is_authorized_issuer(command.actor_id):
        return RejectionReason(
            code=ReasonCode.UNAUTHORIZED_ISSUER,
            message=f"'{command.actor_id}' is not an authorized issuer.",
            policy_name="authorized_issuer_policy",
        )
    return None


def credential_text_bounds_policy(command, context) -> Optional[RejectionReason]:
    limits = context.limits
    p = command.payload
    bounded = (
        ("student_name", limits.max_name_bytes),
        ("course_name", limits.max_name_bytes),
        ("issuer_name", limits.max_name_bytes),
        ("metadata_uri", limits.max_uri_bytes),
    )
    for field_name, cap in bounded:
        if exceeds_cap(p.get(field_name, ""), cap):
            return RejectionReason(
                code=ReasonCode.FIELD_TOO_LONG,
                message=f"{field_name} exceeds {cap} bytes.",
                policy_name="credential_text_bounds_policy",
            )
    return None
