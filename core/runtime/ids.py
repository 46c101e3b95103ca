"""
Citizen Platform Runtime - Identifier Providers
================================================
Injected source of command, correlation and asset identifiers.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdProvider(Protocol):
    def new_command_id(self) -> uuid.UUID:
        ...

    def new_correlation_id(self) -> uuid.UUID:
        ...

    def new_asset_id(self, prefix: str) -> str:
        ...


class UuidIdProvider:
    def new_command_id(self) -> uuid.UUID:
        return uuid.uuid4()

    def new_correlation_id(self) -> uuid.UUID:
        return uuid.uuid4()

    def new_asset_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"


class SequentialIdProvider:
    """Deterministic identifiers for tests and replays."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def new_command_id(self) -> uuid.UUID:
        return uuid.UUID(int=next(self._counter))

    def new_correlation_id(self) -> uuid.UUID:
        return uuid.UUID(int=next(self._counter))

    def new_asset_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter):06d}"
