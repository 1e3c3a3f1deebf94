"""In-memory response cache with freshness-aware lookups.

Entries are keyed by the fully-resolved request URL and stamped with the
clock time they were stored. An entry older than the TTL is treated as a
miss and never served; the next store for the same key overwrites it.

The clock is injectable so tests can move time without sleeping.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    stored_at: float


class ResponseCache:
    """Maps request keys to payloads with a fixed time-to-live."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def lookup(self, key: str) -> CacheEntry | None:
        """Fresh entry for ``key``, or None. A stored ``None`` payload is still a hit."""
        entry = self._entries.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    def get(self, key: str) -> Any | None:
        """Return the cached payload, or None if missing or expired."""
        entry = self.lookup(key)
        return entry.payload if entry is not None else None

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, stored_at=self._clock())
        self._entries[key] = entry
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at <= self.ttl

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None
