"""
Citizen Platform Runtime
========================
In-process wiring of the platform engines.
"""

from core.runtime.ids import IdProvider, SequentialIdProvider, UuidIdProvider
from core.runtime.platform_runtime import COMMAND_POLICIES, PlatformRuntime

__all__ = [
    "PlatformRuntime",
    "COMMAND_POLICIES",
    "IdProvider",
    "UuidIdProvider",
    "SequentialIdProvider",
]
