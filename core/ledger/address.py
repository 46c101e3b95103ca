"""
Citizen Platform Ledger - Deterministic Addressing
===================================================
Pure key derivation: (namespace, key material) -> storage address.

    derive_address("platform")                       → registry
    derive_address("certificate", asset_id)          → Credential
    derive_address("property", asset_id)             → Property
    derive_address("holding", asset_id, owner)       → HoldingAccount

Same input ALWAYS produces the same address. Seeds are length-prefixed
so ("ab", "c") and ("a", "bc") never collide.
"""

from __future__ import annotations

import hashlib

# ── Namespaces ────────────────────────────────────────────────

PLATFORM_NAMESPACE = "platform"
CERTIFICATE_NAMESPACE = "certificate"
PROPERTY_NAMESPACE = "property"
ASSET_NAMESPACE = "asset"
HOLDING_NAMESPACE = "holding"
METADATA_NAMESPACE = "metadata"

ADDRESS_DOMAIN = b"citizen-platform/address/v1"


def derive_address(namespace: str, *seeds: str) -> str:
    """
    Derive a 64-character hex address from a namespace and seeds.

    Args:
        namespace: Non-empty tag (e.g. 'property').
        seeds:     Key material, each a non-empty string.

    Returns:
        Lowercase hex SHA-256 digest.
    """
    if not namespace or not isinstance(namespace, str):
        raise ValueError("namespace must be a non-empty string.")

    digest = hashlib.sha256()
    digest.update(ADDRESS_DOMAIN)
    for part in (namespace, *seeds):
        if not isinstance(part, str) or not part:
            raise ValueError("address seeds must be non-empty strings.")
        encoded = part.encode("utf-8")
        digest.update(len(encoded).to_bytes(4, "big"))
        digest.update(encoded)
    return digest.hexdigest()


def platform_address() -> str:
    return derive_address(PLATFORM_NAMESPACE)


def certificate_address(asset_id: str) -> str:
    return derive_address(CERTIFICATE_NAMESPACE, asset_id)


def property_address(asset_id: str) -> str:
    return derive_address(PROPERTY_NAMESPACE, asset_id)
