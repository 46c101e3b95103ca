"""
Citizen Platform Time
=====================
Injectable clock used for command issue times and Credential.mint_time.
Engine services never call datetime.now() directly.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
    unix_timestamp,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "unix_timestamp",
]
