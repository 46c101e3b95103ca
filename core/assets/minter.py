"""
Citizen Platform Assets - Asset Minter
=======================================
Asset classes, the minting capability, and holder balances.

RULES:
- Minting requires a MintAuthority capability, never a bare identity
- A capability is granted once per holder and checked by secret token
- An asset class only accepts the capability of the holder it names
- Supply and balances are u64 and use checked arithmetic
- max_supply (when set) is a hard cap: credentials use max_supply=1

All state lives in the RecordStore, so a failed operation rolls back
asset classes, supply and holdings together with platform records.
"""

from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from core.ledger.address import ASSET_NAMESPACE, HOLDING_NAMESPACE, derive_address
from core.ledger.arithmetic import checked_add, require_u64
from core.ledger.errors import MintError
from core.ledger.store import RecordStore

logger = logging.getLogger("citizen.assets")

MINT_AUTHORITY_NAMESPACE = "mint_authority"


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class MintAuthority:
    """Capability to mint; only the holder's registry keeps it."""
    holder: str
    token: str = field(repr=False)


@dataclass
class MintAuthorityGrant:
    holder: str
    token: str = field(repr=False)


@dataclass
class AssetClass:
    asset_id: str
    decimals: int
    authority_holder: str
    supply: int = 0
    max_supply: Optional[int] = None


@dataclass
class HoldingAccount:
    asset_id: str
    owner: str
    amount: int = 0


def asset_class_address(asset_id: str) -> str:
    return derive_address(ASSET_NAMESPACE, asset_id)


def holding_address(asset_id: str, owner: str) -> str:
    return derive_address(HOLDING_NAMESPACE, asset_id, owner)


def grant_matches(store: RecordStore, authority: MintAuthority) -> bool:
    """True when authority carries the token granted to its holder."""
    if not isinstance(authority, MintAuthority):
        return False
    grant = store.get(derive_address(MINT_AUTHORITY_NAMESPACE, authority.holder))
    return grant is not None and hmac.compare_digest(grant.token, authority.token)


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════

class AssetMinter(Protocol):
    def grant_authority(self, holder: str) -> MintAuthority:
        ...

    def create_asset(
        self,
        asset_id: str,
        *,
        authority: MintAuthority,
        decimals: int = 0,
        max_supply: Optional[int] = None,
    ) -> AssetClass:
        ...

    def mint(
        self,
        asset_id: str,
        destination: str,
        amount: int,
        authority: MintAuthority,
    ) -> int:
        ...

    def balance_of(self, asset_id: str, owner: str) -> int:
        ...


# ══════════════════════════════════════════════════════════════
# LEDGER-BACKED IMPLEMENTATION
# ══════════════════════════════════════════════════════════════

class LedgerAssetMinter:
    """AssetMinter storing everything in a RecordStore."""

    def __init__(self, store: RecordStore):
        self._store = store

    def grant_authority(self, holder: str) -> MintAuthority:
        token = secrets.token_hex(16)
        self._store.create(
            derive_address(MINT_AUTHORITY_NAMESPACE, holder),
            MintAuthorityGrant(holder=holder, token=token),
            kind="mint authority",
        )
        logger.info(f"Mint authority granted to {holder}")
        return MintAuthority(holder=holder, token=token)

    def _verify_authority(self, authority: MintAuthority) -> None:
        if not isinstance(authority, MintAuthority):
            raise MintError(
                "A MintAuthority capability is required to mint.",
                policy_name="asset_minter",
            )
        if not grant_matches(self._store, authority):
            raise MintError(
                f"Mint authority for '{authority.holder}' is not valid.",
                policy_name="asset_minter",
            )

    def create_asset(
        self,
        asset_id: str,
        *,
        authority: MintAuthority,
        decimals: int = 0,
        max_supply: Optional[int] = None,
    ) -> AssetClass:
        self._verify_authority(authority)
        if not asset_id:
            raise MintError("asset_id must be non-empty.", policy_name="asset_minter")
        if max_supply is not None:
            require_u64(max_supply, "max_supply")
        asset = AssetClass(
            asset_id=asset_id,
            decimals=decimals,
            authority_holder=authority.holder,
            max_supply=max_supply,
        )
        return self._store.create(asset_class_address(asset_id), asset, kind="asset class")

    def get_asset(self, asset_id: str) -> Optional[AssetClass]:
        return self._store.get(asset_class_address(asset_id))

    def mint(
        self,
        asset_id: str,
        destination: str,
        amount: int,
        authority: MintAuthority,
    ) -> int:
        """Mint amount units to destination. Returns the new balance."""
        self._verify_authority(authority)

        asset = self.get_asset(asset_id)
        if asset is None:
            raise MintError(f"Unknown asset '{asset_id}'.", policy_name="asset_minter")
        if asset.authority_holder != authority.holder:
            raise MintError(
                f"'{authority.holder}' is not the mint authority of '{asset_id}'.",
                policy_name="asset_minter",
            )
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise MintError(f"Mint amount must be a positive integer, got {amount!r}.",
                            policy_name="asset_minter")

        new_supply = checked_add(asset.supply, amount)
        if asset.max_supply is not None and new_supply > asset.max_supply:
            raise MintError(
                f"Minting {amount} of '{asset_id}' exceeds max supply {asset.max_supply}.",
                policy_name="asset_minter",
            )

        address = holding_address(asset_id, destination)
        holding = self._store.get(address)
        if holding is None:
            holding = self._store.create(
                address,
                HoldingAccount(asset_id=asset_id, owner=destination),
                kind="holding account",
            )
        holding.amount = checked_add(holding.amount, amount)
        asset.supply = new_supply
        logger.debug(f"Minted {amount} of {asset_id} to {destination}")
        return holding.amount

    def balance_of(self, asset_id: str, owner: str) -> int:
        holding = self._store.get(holding_address(asset_id, owner))
        return holding.amount if holding is not None else 0

    def holdings_of(self, owner: str) -> List[HoldingAccount]:
        return [
            h for h in self._store.records_of_type(HoldingAccount)
            if h.owner == owner and h.amount > 0
        ]
