"""
Citizen Platform Runtime - PlatformRuntime
===========================================
Wires context, dispatcher, command bus, journal and projections, and
exposes one method per platform operation plus the read-side queries.

Write path:
    request dataclass → Command → CommandBus.handle()
        → policies (dispatcher) → engine service → journal → projections

Writes raise the named PlatformError on failure; ValueError means the
request was malformed and no command was built.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.commands.base import command_from_request
from core.commands.bus import CommandBus, CommandResult
from core.commands.dispatcher import CommandDispatcher
from core.config.limits import PlatformLimits
from core.context.platform_context import PlatformContext
from core.ledger.errors import ArithmeticOverflowError
from core.ledger.journal import TransactionJournal
from core.runtime.ids import IdProvider, UuidIdProvider
from core.time.clock import Clock
from engines.credential.commands import (
    CREDENTIAL_ISSUE_REQUEST,
    IssueCredentialRequest,
)
from engines.credential.policies import (
    authorized_issuer_policy,
    credential_text_bounds_policy,
)
from engines.credential.services import CredentialProjectionStore, CredentialService
from engines.platform.commands import (
    ISSUER_AUTHORIZE_REQUEST,
    PLATFORM_INITIALIZE_REQUEST,
    AuthorizeIssuerRequest,
    InitializePlatformRequest,
)
from engines.platform.policies import (
    authority_signer_policy,
    issuer_capacity_policy,
    issuer_not_authorized_yet_policy,
    platform_initialized_policy,
)
from engines.platform.services import PlatformProjectionStore, PlatformService
from engines.property.commands import (
    PROPERTY_REGISTER_REQUEST,
    SHARES_ACQUIRE_REQUEST,
    AcquireSharesRequest,
    RegisterPropertyRequest,
)
from engines.property.policies import (
    property_exists_policy,
    property_text_bounds_policy,
    tokens_available_policy,
)
from engines.property.services import PropertyProjectionStore, PropertyService
from engines.rent.commands import YIELD_CLAIM_REQUEST, ClaimYieldRequest
from engines.rent.policies import tokens_owned_policy
from engines.rent.services import RentProjectionStore, RentService, compute_user_share

logger = logging.getLogger("citizen.engines")

CREDENTIAL_ASSET_PREFIX = "cred"
BASIS_POINTS = 10_000

# Evaluated in order after platform_initialized_policy; first rejection wins.
COMMAND_POLICIES = {
    ISSUER_AUTHORIZE_REQUEST: (
        authority_signer_policy,
        issuer_not_authorized_yet_policy,
        issuer_capacity_policy,
    ),
    CREDENTIAL_ISSUE_REQUEST: (
        authorized_issuer_policy,
        credential_text_bounds_policy,
    ),
    PROPERTY_REGISTER_REQUEST: (
        authority_signer_policy,
        property_text_bounds_policy,
    ),
    SHARES_ACQUIRE_REQUEST: (
        property_exists_policy,
        tokens_available_policy,
    ),
    YIELD_CLAIM_REQUEST: (
        property_exists_policy,
        tokens_owned_policy,
    ),
}


class PlatformRuntime:
    """
    Usage:
        runtime = PlatformRuntime.in_memory()
        runtime.init_platform("authority-wallet")
        runtime.add_issuer("authority-wallet", "issuer-wallet")
        runtime.issue_credential(
            "issuer-wallet",
            student="student-wallet",
            student_name="Ada",
            course_name="Rust 101",
            issuer_name="Academy",
            metadata_uri="https://example.org/meta.json",
        )
    """

    def __init__(
        self,
        context: PlatformContext,
        *,
        journal: Optional[TransactionJournal] = None,
        id_provider: Optional[IdProvider] = None,
    ):
        self.context = context
        self.journal = journal or TransactionJournal()
        self._ids = id_provider or UuidIdProvider()

        self.dispatcher = CommandDispatcher(context=context, clock=context.clock)
        self.dispatcher.register_policy(platform_initialized_policy)
        self.dispatcher.register_policies(COMMAND_POLICIES)

        self.bus = CommandBus(
            dispatcher=self.dispatcher,
            store=context.store,
            journal=self.journal,
        )

        self.platform_projection = PlatformProjectionStore()
        self.credential_projection = CredentialProjectionStore()
        self.property_projection = PropertyProjectionStore()
        self.rent_projection = RentProjectionStore()

        platform_service = PlatformService(context=context)
        property_service = PropertyService(context=context)
        self.bus.register_handler(PLATFORM_INITIALIZE_REQUEST, platform_service)
        self.bus.register_handler(ISSUER_AUTHORIZE_REQUEST, platform_service)
        self.bus.register_handler(CREDENTIAL_ISSUE_REQUEST, CredentialService(context=context))
        self.bus.register_handler(PROPERTY_REGISTER_REQUEST, property_service)
        self.bus.register_handler(SHARES_ACQUIRE_REQUEST, property_service)
        self.bus.register_handler(YIELD_CLAIM_REQUEST, RentService(context=context))

        for projection in (
            self.platform_projection,
            self.credential_projection,
            self.property_projection,
            self.rent_projection,
        ):
            self.bus.subscribe(projection.apply)

    @classmethod
    def in_memory(
        cls,
        *,
        limits: Optional[PlatformLimits] = None,
        clock: Optional[Clock] = None,
        id_provider: Optional[IdProvider] = None,
    ) -> "PlatformRuntime":
        context = PlatformContext.in_memory(limits=limits, clock=clock)
        return cls(context, id_provider=id_provider)

    # ══════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ══════════════════════════════════════════════════════════

    def _submit(self, request) -> CommandResult:
        command = command_from_request(
            request.to_command(),
            command_id=self._ids.new_command_id(),
            correlation_id=self._ids.new_correlation_id(),
        )
        return self.bus.handle(command)

    def _now(self):
        return self.context.clock.now_utc()

    def init_platform(self, signer: str) -> CommandResult:
        return self._submit(InitializePlatformRequest(actor_id=signer, issued_at=self._now()))

    def add_issuer(self, signer: str, issuer: str) -> CommandResult:
        return self._submit(
            AuthorizeIssuerRequest(issuer=issuer, actor_id=signer, issued_at=self._now())
        )

    def issue_credential(
        self,
        signer: str,
        *,
        student: str,
        student_name: str,
        course_name: str,
        issuer_name: str,
        metadata_uri: str,
        asset_id: Optional[str] = None,
    ) -> CommandResult:
        return self._submit(
            IssueCredentialRequest(
                student=student,
                student_name=student_name,
                course_name=course_name,
                issuer_name=issuer_name,
                metadata_uri=metadata_uri,
                asset_id=asset_id or self._ids.new_asset_id(CREDENTIAL_ASSET_PREFIX),
                actor_id=signer,
                issued_at=self._now(),
            )
        )

    def register_property(
        self,
        signer: str,
        *,
        asset_id: str,
        name: str,
        total_value: int,
        total_tokens: int,
        metadata_uri: str,
    ) -> CommandResult:
        return self._submit(
            RegisterPropertyRequest(
                asset_id=asset_id,
                name=name,
                total_value=total_value,
                total_tokens=total_tokens,
                metadata_uri=metadata_uri,
                actor_id=signer,
                issued_at=self._now(),
            )
        )

    def acquire_shares(self, signer: str, *, asset_id: str, quantity: int) -> CommandResult:
        return self._submit(
            AcquireSharesRequest(
                asset_id=asset_id, quantity=quantity, actor_id=signer, issued_at=self._now(),
            )
        )

    def claim_yield(self, signer: str, *, asset_id: str) -> CommandResult:
        return self._submit(
            ClaimYieldRequest(asset_id=asset_id, actor_id=signer, issued_at=self._now())
        )

    def deposit_liquidity(self, address: str, amount: int) -> int:
        """Host-level funding; not a platform command and not journaled."""
        store = self.context.store
        with store.transaction():
            balance = store.credit_liquid(address, amount)
        logger.info(f"Deposited {amount} to {address}")
        return balance

    def fund_yield_pool(self, amount: int) -> int:
        return self.deposit_liquidity(self.context.address, amount)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def platform_info(self) -> dict:
        registry = self.context.registry()
        info = {
            "initialized": registry is not None,
            "platform_address": self.context.address,
            "max_issuers": self.context.limits.max_issuers,
            "yield_pool_balance": self.context.store.liquid_balance(self.context.address),
        }
        if registry is not None:
            info.update(registry.to_dict())
            info["initialized_at"] = self.platform_projection.initialized_at
        return info

    def list_issuers(self) -> List[dict]:
        return self.platform_projection.list_issuers()

    def is_authorized_issuer(self, identity: str) -> bool:
        registry = self.context.registry()
        return registry is not None and registry.is_authorized_issuer(identity)

    def get_certificate(self, asset_id: str) -> Optional[dict]:
        credential = self.context.get_credential(asset_id)
        if credential is None:
            return None
        data = credential.to_dict()
        metadata = self.context.metadata.get(asset_id)
        data["metadata"] = metadata.descriptor.to_dict() if metadata else None
        data["holder_balance"] = self.context.minter.balance_of(asset_id, credential.student)
        return data

    def certificates_of(self, student: str) -> List[dict]:
        return self.credential_projection.certificates_of(student)

    def verify_student(self, student: str) -> dict:
        return self.credential_projection.verify_student(student)

    def certificates_issued_by(self, issuer: str) -> List[dict]:
        return self.credential_projection.certificates_issued_by(issuer)

    def get_property(self, asset_id: str) -> Optional[dict]:
        prop = self.context.get_property(asset_id)
        return prop.to_dict() if prop else None

    def list_properties(self) -> List[dict]:
        return self.property_projection.list_properties()

    def property_buyers(self, asset_id: str) -> Optional[dict]:
        if self.context.get_property(asset_id) is None:
            return None
        buyers = self.property_projection.buyers_of(asset_id)
        return {"asset_id": asset_id, "buyers": buyers, "buyer_count": len(buyers)}

    def liquid_balance(self, identity: str) -> int:
        return self.context.store.liquid_balance(identity)

    def holdings_of(self, wallet: str) -> dict:
        divisor = self.context.limits.monthly_yield_divisor
        holdings = []
        for holding in self.context.minter.holdings_of(wallet):
            prop = self.context.get_property(holding.asset_id)
            if prop is None:
                continue
            tokens = holding.amount
            try:
                estimate = compute_user_share(
                    prop.total_value, prop.total_tokens, tokens, divisor,
                )
            except ArithmeticOverflowError:
                # Claims of this size are rejected too; report no estimate.
                estimate = None
            holdings.append({
                "asset_id": prop.asset_id,
                "name": prop.name,
                "tokens_owned": tokens,
                "total_tokens": prop.total_tokens,
                "ownership_bps": tokens * BASIS_POINTS // prop.total_tokens,
                "value_share": prop.total_value * tokens // prop.total_tokens,
                "estimated_monthly_yield": estimate,
                "yield_claimed": self.rent_projection.claimed_for(wallet, prop.asset_id),
            })
        return {
            "wallet": wallet,
            "holdings": holdings,
            "property_count": len(holdings),
            "total_value_share": sum(h["value_share"] for h in holdings),
            "total_estimated_monthly_yield": sum(
                h["estimated_monthly_yield"] for h in holdings
                if h["estimated_monthly_yield"] is not None
            ),
        }

    def dashboard(self, wallet: str) -> dict:
        certificates = self.certificates_of(wallet)
        holdings = self.holdings_of(wallet)
        return {
            "wallet": wallet,
            "certificate_count": len(certificates),
            "certificates": certificates,
            "property_count": holdings["property_count"],
            "holdings": holdings["holdings"],
            "total_value_share": holdings["total_value_share"],
            "total_estimated_monthly_yield": holdings["total_estimated_monthly_yield"],
            "total_yield_claimed": self.rent_projection.total_claimed_by(wallet),
            "liquid_balance": self.liquid_balance(wallet),
        }
