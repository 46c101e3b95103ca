"""
Citizen Django Adapter Wiring
=============================
Constructs HttpApiDependencies for local/staging live runs.

This module is adapter-only glue:
- no core contract changes
- one in-memory PlatformRuntime per process
- limits from CITIZEN_* environment variables, then
  settings.CITIZEN_PLATFORM_LIMITS on top
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from core.config.limits import PlatformLimits, limits_from_env, limits_from_mapping
from core.http_api.dependencies import HttpApiDependencies
from core.runtime.platform_runtime import PlatformRuntime

logger = logging.getLogger("citizen.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _configured_limits() -> PlatformLimits:
    merged = limits_from_env().to_dict()
    merged.update(getattr(settings, "CITIZEN_PLATFORM_LIMITS", None) or {})
    return limits_from_mapping(merged)


def _create_dependencies() -> HttpApiDependencies:
    runtime = PlatformRuntime.in_memory(limits=_configured_limits())

    initial_pool = int(getattr(settings, "CITIZEN_INITIAL_YIELD_POOL", 0) or 0)
    if initial_pool > 0:
        runtime.fund_yield_pool(initial_pool)

    logger.info(
        f"Platform runtime wired (address {runtime.context.address}, "
        f"yield pool {initial_pool})"
    )
    return HttpApiDependencies(runtime=runtime)


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the process runtime; the next request wires a fresh one."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
