"""
Citizen Core Primitives - Platform Records
===========================================
Records owned by the platform in the RecordStore:

    PlatformRegistry — authority, counters, issuer allow-list
    Credential       — immutable achievement credential
    Property         — fractionally owned listing with share supply

Pure Python, no Django dependency.
"""

from core.primitives.records import (
    Credential,
    PlatformRegistry,
    Property,
    exceeds_cap,
    utf8_length,
)

__all__ = [
    "PlatformRegistry",
    "Credential",
    "Property",
    "utf8_length",
    "exceeds_cap",
]
