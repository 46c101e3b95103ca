"""
Citizen Platform Ledger - Transaction Journal
==============================================
Append-only, hash-chained log of committed and rejected operations.

Formula:
    event_hash = SHA256(canonical_json(entry) + previous_event_hash)

Rules:
- Canonical JSON: sorted keys, compact separators, str() for UUID/datetime
- First entry chains from GENESIS_HASH
- Entries are copied on the way in and on the way out
- The journal never decides; the command bus decides what is recorded
"""

from __future__ import annotations

import copy
import hashlib
import json
import threading
from typing import Any, Dict, List, Tuple

GENESIS_HASH = "GENESIS"


def canonical_serialize(payload: Any) -> str:
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=str,
    )


def compute_event_hash(entry: Any, previous_event_hash: str) -> str:
    hash_input = canonical_serialize(entry) + previous_event_hash
    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()


class TransactionJournal:
    """In-memory journal with a verifiable hash chain."""

    def __init__(self) -> None:
        self._entries: List[Dict[str, Any]] = []
        self._last_hash = GENESIS_HASH
        self._lock = threading.Lock()

    def record(self, event_data: Dict[str, Any]) -> Dict[str, Any]:
        """Append an entry and return the stored copy (with hashes)."""
        with self._lock:
            stored = copy.deepcopy(event_data)
            stored.pop("event_hash", None)
            stored.pop("previous_event_hash", None)
            event_hash = compute_event_hash(stored, self._last_hash)
            stored["previous_event_hash"] = self._last_hash
            stored["event_hash"] = event_hash
            self._entries.append(stored)
            self._last_hash = event_hash
            return copy.deepcopy(stored)

    def all_events(self) -> Tuple[Dict[str, Any], ...]:
        with self._lock:
            return tuple(copy.deepcopy(self._entries))

    def events_of_type(self, event_type: str) -> Tuple[Dict[str, Any], ...]:
        return tuple(
            e for e in self.all_events() if e.get("event_type") == event_type
        )

    @property
    def last_hash(self) -> str:
        return self._last_hash

    def __len__(self) -> int:
        return len(self._entries)

    def verify_chain(self) -> bool:
        """Recompute every hash from GENESIS. False on any break."""
        previous = GENESIS_HASH
        for entry in self.all_events():
            body = dict(entry)
            event_hash = body.pop("event_hash", None)
            recorded_previous = body.pop("previous_event_hash", None)
            if recorded_previous != previous:
                return False
            if compute_event_hash(body, previous) != event_hash:
                return False
            previous = event_hash
        return True
