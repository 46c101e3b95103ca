"""
Citizen Platform Config - Limits
=================================
Fixed upper bounds known before any record is created.

Every record has a bounded size: text fields have byte caps and the
issuer allow-list has a capacity. Values exceeding a cap are rejected,
never truncated.

Overrides come from a mapping (Django setting CITIZEN_PLATFORM_LIMITS)
or from CITIZEN_* environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PlatformLimits:
    """
    max_issuers:           Capacity of PlatformRegistry.authorized_issuers.
    max_name_bytes:        Cap for student/course/issuer/property names.
    max_uri_bytes:         Cap for metadata locators.
    credential_symbol:     Symbol tag attached to credential metadata.
    monthly_yield_divisor: monthly_rent = total_value // divisor (100 → 1%).
    """

    max_issuers: int = 10
    max_name_bytes: int = 100
    max_uri_bytes: int = 200
    credential_symbol: str = "EDU"
    monthly_yield_divisor: int = 100

    def __post_init__(self) -> None:
        for name in ("max_issuers", "max_name_bytes", "max_uri_bytes", "monthly_yield_divisor"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}.")
        if not self.credential_symbol or not isinstance(self.credential_symbol, str):
            raise ValueError("credential_symbol must be a non-empty string.")

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_LIMITS = PlatformLimits()

_ENV_KEYS = {
    "max_issuers": "CITIZEN_MAX_ISSUERS",
    "max_name_bytes": "CITIZEN_MAX_NAME_BYTES",
    "max_uri_bytes": "CITIZEN_MAX_URI_BYTES",
    "credential_symbol": "CITIZEN_CREDENTIAL_SYMBOL",
    "monthly_yield_divisor": "CITIZEN_MONTHLY_YIELD_DIVISOR",
}


def limits_from_mapping(values: Optional[Mapping[str, Any]]) -> PlatformLimits:
    """Build limits from a mapping; unknown keys are rejected."""
    if not values:
        return DEFAULT_LIMITS
    known = {f.name for f in fields(PlatformLimits)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown platform limit(s): {sorted(unknown)}")
    return PlatformLimits(**dict(values))


def limits_from_env(environ: Optional[Mapping[str, str]] = None) -> PlatformLimits:
    environ = os.environ if environ is None else environ
    overrides: dict = {}
    for field_name, env_key in _ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is None or raw == "":
            continue
        if field_name == "credential_symbol":
            overrides[field_name] = raw
        else:
            try:
                overrides[field_name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{env_key} must be an integer, got {raw!r}.") from exc
    return limits_from_mapping(overrides)
