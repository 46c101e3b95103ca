"""
Citizen Platform Engine — Policies
===================================
Initialization guard, authority signer check, issuer allow-list rules.

Policies read the PlatformContext and never write.
"""

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.platform.commands import PLATFORM_INITIALIZE_REQUEST


def platform_initialized_policy(command, context) -> Optional[RejectionReason]:
    """Every command except initialization needs an existing registry."""
    if command.command_type == PLATFORM_INITIALIZE_REQUEST:
        return None
    if context.registry() is None:
        return RejectionReason(
            code=ReasonCode.PLATFORM_NOT_INITIALIZED,
            message="Platform has not been initialized.",
            policy_name="platform_initialized_policy",
        )
    return None


def authority_signer_policy(command, context) -> Optional[RejectionReason]:
    """Signer must be the registry authority."""
    registry = context.registry()
    if registry is None:
        return None
    if command.actor_id != registry.authority:
        return RejectionReason(
            code=ReasonCode.AUTHORITY_REQUIRED,
            message=f"'{command.actor_id}' is not the platform authority.",
            policy_name="authority_signer_policy",
        )
    return None


def issuer_not_authorized_yet_policy(command, context) -> Optional[RejectionReason]:
    registry = context.registry()
    if registry is None:
        return None
    issuer = command.payload.get("issuer")
    if registry.is_authorized_issuer(issuer):
        return RejectionReason(
            code=ReasonCode.ISSUER_ALREADY_AUTHORIZED,
            message=f"Issuer '{issuer}' is already authorized.",
            policy_name="issuer_not_authorized_yet_policy",
        )
    return None


def issuer_capacity_policy(command, context) -> Optional[RejectionReason]:
    """Allow-list holds at most limits.max_issuers entries."""
    registry = context.registry()
    if registry is None:
        return None
    capacity = context.limits.max_issuers
    if len(registry.authorized_issuers) >= capacity:
        return RejectionReason(
            code=ReasonCode.ISSUER_CAPACITY_EXCEEDED,
            message=f"Issuer allow-list is full ({capacity} entries).",
            policy_name="issuer_capacity_policy",
        )
    return None
