"""
Citizen Platform Assets - Metadata Registry
============================================
Descriptive metadata attached to an asset (name, symbol, locator,
creators, royalty basis points).

Field bounds follow the token-metadata account layout the platform
was built against: name 32 bytes, symbol 10 bytes, uri 200 bytes,
at most 5 creators whose shares sum to 100.

Attaching fails when a field is malformed, when the asset does not
exist, or when the asset already carries immutable metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from core.assets.minter import MintAuthority, asset_class_address, grant_matches
from core.ledger.address import METADATA_NAMESPACE, derive_address
from core.ledger.errors import MetadataError
from core.ledger.store import RecordStore

logger = logging.getLogger("citizen.assets")

MAX_NAME_BYTES = 32
MAX_SYMBOL_BYTES = 10
MAX_URI_BYTES = 200
MAX_CREATORS = 5
MAX_SELLER_FEE_BASIS_POINTS = 10_000


@dataclass(frozen=True)
class Creator:
    address: str
    verified: bool
    share: int

    def to_dict(self) -> dict:
        return {"address": self.address, "verified": self.verified, "share": self.share}


@dataclass(frozen=True)
class MetadataDescriptor:
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = 0
    creators: Tuple[Creator, ...] = ()
    collection: Optional[str] = None
    uses: Optional[int] = None
    is_mutable: bool = True
    update_authority_is_signer: bool = True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "seller_fee_basis_points": self.seller_fee_basis_points,
            "creators": [c.to_dict() for c in self.creators],
            "collection": self.collection,
            "uses": self.uses,
            "is_mutable": self.is_mutable,
            "update_authority_is_signer": self.update_authority_is_signer,
        }


@dataclass
class MetadataRecord:
    asset_id: str
    descriptor: MetadataDescriptor
    update_authority: str


def metadata_address(asset_id: str) -> str:
    return derive_address(METADATA_NAMESPACE, asset_id)


def _fail(message: str) -> MetadataError:
    return MetadataError(message, policy_name="metadata_registry")


def validate_descriptor(descriptor: MetadataDescriptor) -> None:
    if len(descriptor.name.encode("utf-8")) > MAX_NAME_BYTES:
        raise _fail(f"Metadata name exceeds {MAX_NAME_BYTES} bytes: {descriptor.name!r}.")
    if len(descriptor.symbol.encode("utf-8")) > MAX_SYMBOL_BYTES:
        raise _fail(f"Metadata symbol exceeds {MAX_SYMBOL_BYTES} bytes.")
    if len(descriptor.uri.encode("utf-8")) > MAX_URI_BYTES:
        raise _fail(f"Metadata uri exceeds {MAX_URI_BYTES} bytes.")
    if not 0 <= descriptor.seller_fee_basis_points <= MAX_SELLER_FEE_BASIS_POINTS:
        raise _fail("seller_fee_basis_points must be within 0..10000.")
    if len(descriptor.creators) > MAX_CREATORS:
        raise _fail(f"At most {MAX_CREATORS} creators are allowed.")
    if descriptor.creators:
        if sum(c.share for c in descriptor.creators) != 100:
            raise _fail("Creator shares must sum to 100.")
        addresses = [c.address for c in descriptor.creators]
        if len(set(addresses)) != len(addresses):
            raise _fail("Creator addresses must be unique.")


class MetadataRegistry(Protocol):
    def attach(
        self,
        asset_id: str,
        descriptor: MetadataDescriptor,
        update_authority: MintAuthority,
    ) -> MetadataRecord:
        ...

    def get(self, asset_id: str) -> Optional[MetadataRecord]:
        ...


class LedgerMetadataRegistry:
    """MetadataRegistry storing records in a RecordStore."""

    def __init__(self, store: RecordStore):
        self._store = store

    def attach(
        self,
        asset_id: str,
        descriptor: MetadataDescriptor,
        update_authority: MintAuthority,
    ) -> MetadataRecord:
        validate_descriptor(descriptor)

        asset = self._store.get(asset_class_address(asset_id))
        if asset is None:
            raise _fail(f"Cannot attach metadata to unknown asset '{asset_id}'.")
        if not grant_matches(self._store, update_authority):
            raise _fail("Metadata update authority is not valid.")
        if asset.authority_holder != update_authority.holder:
            raise _fail(f"'{update_authority.holder}' cannot attach metadata to '{asset_id}'.")

        address = metadata_address(asset_id)
        existing = self._store.get(address)
        if existing is None:
            record = MetadataRecord(
                asset_id=asset_id,
                descriptor=descriptor,
                update_authority=update_authority.holder,
            )
            self._store.create(address, record, kind="metadata")
            logger.debug(f"Metadata attached to {asset_id}")
            return record

        if not existing.descriptor.is_mutable:
            raise _fail(f"Asset '{asset_id}' already has immutable metadata.")
        if existing.update_authority != update_authority.holder:
            raise _fail(f"'{update_authority.holder}' is not the update authority of '{asset_id}'.")
        existing.descriptor = descriptor
        return existing

    def get(self, asset_id: str) -> Optional[MetadataRecord]:
        return self._store.get(metadata_address(asset_id))
