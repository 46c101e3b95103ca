"""
Citizen HTTP API - Dependencies
===============================
Handler wiring. Identifier and time providers live on the runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.runtime.platform_runtime import PlatformRuntime


@dataclass(frozen=True)
class HttpApiDependencies:
    runtime: PlatformRuntime
