"""Domain port for caching full query responses."""

from __future__ import annotations

from typing import Any, Optional, Protocol


class IResponseCache(Protocol):
    """Key/value cache with per-entry time-to-live."""

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """Store ``value`` under ``key``."""
        ...

    def is_stale(self, key: str, max_age_seconds: float) -> bool:
        """True if ``key`` is absent or older than ``max_age_seconds``."""
        ...
