"""
Citizen Platform Config - Public API
=====================================
Operator-configurable platform limits.
Doctrine: no capacity or text cap is hardcoded in engine logic.
"""

from core.config.limits import (
    DEFAULT_LIMITS,
    PlatformLimits,
    limits_from_env,
    limits_from_mapping,
)

__all__ = [
    "PlatformLimits",
    "DEFAULT_LIMITS",
    "limits_from_env",
    "limits_from_mapping",
]
