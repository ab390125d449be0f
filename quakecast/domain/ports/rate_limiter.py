"""Domain port for per-client request rate limiting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after_seconds: float = 0.0


class IRateLimiter(Protocol):
    """Token-bucket style limiter keyed by client identifier."""

    def check_limit(self, client_id: str) -> RateLimitDecision:
        """Consume one token for ``client_id`` if available."""
        ...

    def cleanup(self) -> int:
        """Drop idle buckets; returns how many were removed."""
        ...
