"""
Citizen Platform Time - Clock Protocol
=======================================
The host ledger stamps every operation with its own time. Here that
time comes from an injected Clock so that issuance timestamps are
reproducible under test.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    """Wall-clock time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock, frozen until advanced.

    Usage:
        clock = FixedClock(datetime(2026, 3, 1, tzinfo=timezone.utc))
        clock.advance(60)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)


def unix_timestamp(moment: datetime) -> int:
    """Whole seconds since the epoch, as stored in Credential.mint_time."""
    if moment.tzinfo is None:
        raise ValueError("unix_timestamp requires timezone-aware datetime.")
    return int(moment.timestamp())


_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Override the process default clock (tests only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    return _default_clock.now_utc()
