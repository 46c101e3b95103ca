"""
Citizen Rent Engine — Service Layer
====================================
Proportional yield payout from the platform's pooled liquid balance.

    monthly_rent = total_value // monthly_yield_divisor
    user_share   = (monthly_rent * balance) // total_tokens

Both steps truncate. The product is checked against u64. A zero
share is a no-op transfer. There is no reserve accounting and no
claim rate limit: a holder can claim repeatedly while the pool lasts.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from core.commands.rejection import ReasonCode
from core.ledger.arithmetic import checked_div, checked_mul
from core.ledger.errors import StateError
from engines.rent.commands import YIELD_CLAIM_REQUEST
from engines.rent.events import (
    COMMAND_TO_EVENT_TYPE,
    PAYLOAD_BUILDERS,
    YIELD_CLAIMED_V1,
)

logger = logging.getLogger("citizen.engines")


def monthly_rent(total_value: int, divisor: int = 100) -> int:
    return checked_div(total_value, divisor)


def compute_user_share(total_value: int, total_tokens: int, balance: int, divisor: int = 100) -> int:
    """Holder's payout for one claim."""
    return checked_div(checked_mul(monthly_rent(total_value, divisor), balance), total_tokens)


# ── Projection Store ──────────────────────────────────────────

class RentProjectionStore:
    """In-memory read model of yield claims per wallet and property."""

    def __init__(self):
        self._events: List[dict] = []
        self._claimed: Dict[str, Dict[str, int]] = {}  # wallet → {asset_id → total}
        self._claim_counts: Dict[str, int] = {}

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        if event_type != YIELD_CLAIMED_V1:
            return
        self._events.append({"event_type": event_type, "payload": payload})

        wallet = payload["claimant"]
        asset_id = payload["asset_id"]
        per_property = self._claimed.setdefault(wallet, {})
        per_property[asset_id] = per_property.get(asset_id, 0) + payload["user_share"]
        self._claim_counts[wallet] = self._claim_counts.get(wallet, 0) + 1

    # ── Queries ───────────────────────────────────────────────

    def total_claimed_by(self, wallet: str) -> int:
        return sum(self._claimed.get(wallet, {}).values())

    def claimed_for(self, wallet: str, asset_id: str) -> int:
        return self._claimed.get(wallet, {}).get(asset_id, 0)

    def claim_count(self, wallet: str) -> int:
        return self._claim_counts.get(wallet, 0)

    @property
    def event_count(self) -> int:
        return len(self._events)

    def truncate(self):
        self._events.clear()
        self._claimed.clear()
        self._claim_counts.clear()


# ── Service ───────────────────────────────────────────────────

class RentService:
    """Yield engine service. Runs inside the bus transaction."""

    def __init__(self, *, context):
        self._context = context

    def execute(self, command) -> dict:
        if command.command_type != YIELD_CLAIM_REQUEST:
            raise StateError(
                f"Unknown command: {command.command_type}",
                code=ReasonCode.UNKNOWN_COMMAND,
                policy_name="rent_service",
            )
        effects = self._claim(command)
        event_type = COMMAND_TO_EVENT_TYPE[command.command_type]
        payload = PAYLOAD_BUILDERS[event_type](command, effects)
        return {"event_type": event_type, "payload": payload}

    def _claim(self, command) -> dict:
        ctx = self._context
        asset_id = command.payload["asset_id"]
        claimant = command.actor_id

        prop = ctx.get_property(asset_id)
        if prop is None:
            raise StateError(
                f"No property registered for asset '{asset_id}'.",
                code=ReasonCode.PROPERTY_NOT_FOUND,
                policy_name="rent_service",
            )
        balance = ctx.minter.balance_of(asset_id, claimant)
        if balance == 0:
            raise StateError(
                f"'{claimant}' holds no shares of '{asset_id}'.",
                code=ReasonCode.NO_TOKENS_OWNED,
                policy_name="rent_service",
            )

        divisor = ctx.limits.monthly_yield_divisor
        rent = monthly_rent(prop.total_value, divisor)
        user_share = compute_user_share(prop.total_value, prop.total_tokens, balance, divisor)
        if user_share > 0:
            ctx.store.transfer_liquid(ctx.address, claimant, user_share)

        logger.info(f"{claimant} claimed {user_share} yield on {asset_id}")
        return {
            "share_balance": balance,
            "monthly_rent": rent,
            "user_share": user_share,
            "claimant_liquid_balance": ctx.store.liquid_balance(claimant),
        }
