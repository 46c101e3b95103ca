"""
Citizen Context - Public API
=============================
Explicit platform context handed to policies and engine services.
"""

from core.context.platform_context import PlatformContext

__all__ = [
    "PlatformContext",
]
