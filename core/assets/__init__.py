"""
Citizen Platform Assets
=======================
External asset collaborators, expressed at their interface:

    minter    — asset classes, MintAuthority capability, holdings
    metadata  — descriptor validation and attachment

Both keep their state in the host RecordStore.
"""

from core.assets.metadata import (
    Creator,
    LedgerMetadataRegistry,
    MetadataDescriptor,
    MetadataRecord,
    MetadataRegistry,
)
from core.assets.minter import (
    AssetClass,
    AssetMinter,
    HoldingAccount,
    LedgerAssetMinter,
    MintAuthority,
    grant_matches,
)

__all__ = [
    "AssetClass",
    "AssetMinter",
    "HoldingAccount",
    "LedgerAssetMinter",
    "MintAuthority",
    "grant_matches",
    "Creator",
    "MetadataDescriptor",
    "MetadataRecord",
    "MetadataRegistry",
    "LedgerMetadataRegistry",
]
