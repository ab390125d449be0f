"""Bounded in-memory response cache with per-entry time-to-live."""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from quakecast.domain.ports.response_cache import IResponseCache


@dataclass(frozen=True)
class _Entry:
    value: Any
    stored_at: float
    ttl_seconds: float


class TTLResponseCache(IResponseCache):
    """
    Insertion-ordered cache; the oldest entry is evicted beyond ``max_entries``.

    Entries older than their TTL are treated as absent and dropped on access.
    """

    def __init__(
        self,
        default_ttl_seconds: float = 900.0,
        max_entries: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at > entry.ttl_seconds:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        self._entries.pop(key, None)
        if ttl_seconds is None:
            ttl_seconds = self.default_ttl_seconds
        self._entries[key] = _Entry(
            value=value, stored_at=self._clock(), ttl_seconds=ttl_seconds
        )
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def is_stale(self, key: str, max_age_seconds: float) -> bool:
        entry = self._entries.get(key)
        if entry is None:
            return True
        return self._clock() - entry.stored_at > max_age_seconds

    def __len__(self) -> int:
        return len(self._entries)
