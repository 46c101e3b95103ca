"""
Citizen Platform Context - PlatformContext
===========================================
Explicit context passed to every policy and engine service.

The PlatformRegistry is never a process-wide global. It is created
once by initialization and read back through the context's store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from core.assets.metadata import LedgerMetadataRegistry
from core.assets.minter import LedgerAssetMinter
from core.commands.rejection import ReasonCode
from core.config.limits import DEFAULT_LIMITS, PlatformLimits
from core.ledger.address import certificate_address, platform_address, property_address
from core.ledger.errors import StateError
from core.ledger.store import RecordStore
from core.primitives.records import Credential, PlatformRegistry, Property
from core.time.clock import Clock, SystemClock


@dataclass
class PlatformContext:
    """
    Collaborators and limits for one platform instance.

    Usage:
        ctx = PlatformContext.in_memory()
        registry = ctx.registry()
    """

    store: RecordStore
    minter: LedgerAssetMinter
    metadata: LedgerMetadataRegistry
    clock: Clock = field(default_factory=SystemClock)
    limits: PlatformLimits = DEFAULT_LIMITS
    address: str = field(default_factory=platform_address)

    @classmethod
    def in_memory(
        cls,
        *,
        limits: Optional[PlatformLimits] = None,
        clock: Optional[Clock] = None,
    ) -> "PlatformContext":
        store = RecordStore()
        return cls(
            store=store,
            minter=LedgerAssetMinter(store),
            metadata=LedgerMetadataRegistry(store),
            clock=clock or SystemClock(),
            limits=limits or DEFAULT_LIMITS,
        )

    def registry(self) -> Optional[PlatformRegistry]:
        return self.store.get(self.address)

    def require_registry(self) -> PlatformRegistry:
        registry = self.registry()
        if registry is None:
            raise StateError(
                "Platform has not been initialized.",
                code=ReasonCode.PLATFORM_NOT_INITIALIZED,
                policy_name="platform_context",
            )
        return registry

    def get_credential(self, asset_id: str) -> Optional[Credential]:
        return self.store.get(certificate_address(asset_id))

    def get_property(self, asset_id: str) -> Optional[Property]:
        return self.store.get(property_address(asset_id))
