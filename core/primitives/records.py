"""
Citizen Platform Primitives - Platform Records
===============================================
The three record kinds the platform owns in the RecordStore.

    PlatformRegistry — singleton at derive_address("platform")
    Credential       — one per credential asset identity
    Property         — one per share asset identity

RULES (NON-NEGOTIABLE):
- Counters are u64 and never decrease
- Credentials are immutable once created
- 0 <= Property.tokens_sold <= Property.total_tokens
- Text fields are bounded in UTF-8 bytes; over-long text is rejected

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.assets.minter import MintAuthority


# ══════════════════════════════════════════════════════════════
# BOUNDED TEXT
# ══════════════════════════════════════════════════════════════

def utf8_length(value: str) -> int:
    return len(value.encode("utf-8"))


def exceeds_cap(value: str, cap: int) -> bool:
    return utf8_length(value) > cap


# ══════════════════════════════════════════════════════════════
# RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass
class PlatformRegistry:
    """
    Platform-wide registry.

    authority is fixed at initialization. mint_authority is the only
    capability the asset minter accepts for platform assets.
    """
    authority: str
    total_properties: int = 0
    total_certificates: int = 0
    authorized_issuers: List[str] = field(default_factory=list)
    mint_authority: Optional[MintAuthority] = field(default=None, repr=False)

    def is_authorized_issuer(self, identity: str) -> bool:
        return identity in self.authorized_issuers

    def to_dict(self) -> dict:
        return {
            "authority": self.authority,
            "total_properties": self.total_properties,
            "total_certificates": self.total_certificates,
            "authorized_issuers": list(self.authorized_issuers),
        }


@dataclass(frozen=True)
class Credential:
    """Non-transferable achievement credential."""
    student: str
    issuer: str
    student_name: str
    course_name: str
    issuer_name: str
    mint_time: int
    asset_id: str

    def to_dict(self) -> dict:
        return {
            "student": self.student,
            "issuer": self.issuer,
            "student_name": self.student_name,
            "course_name": self.course_name,
            "issuer_name": self.issuer_name,
            "mint_time": self.mint_time,
            "asset_id": self.asset_id,
        }


@dataclass
class Property:
    """Fractionally owned property with a fixed share supply."""
    name: str
    total_value: int
    total_tokens: int
    metadata_uri: str
    asset_id: str
    tokens_sold: int = 0

    @property
    def tokens_available(self) -> int:
        return self.total_tokens - self.tokens_sold

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_value": self.total_value,
            "total_tokens": self.total_tokens,
            "tokens_sold": self.tokens_sold,
            "tokens_available": self.tokens_available,
            "metadata_uri": self.metadata_uri,
            "asset_id": self.asset_id,
        }
