"""In-process token-bucket rate limiter keyed by client identifier."""

from __future__ import annotations

import math
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

import structlog

from quakecast.domain.ports.rate_limiter import IRateLimiter, RateLimitDecision

logger = structlog.get_logger(__name__)


@dataclass
class _Bucket:
    tokens: float
    last_refill: float


class TokenBucketRateLimiter(IRateLimiter):
    """
    ``capacity`` requests per ``window_seconds`` per client.

    Buckets refill continuously with elapsed time. The table of buckets is
    bounded: idle buckets are swept by ``cleanup`` and, past ``max_clients``,
    the least recently used bucket is evicted.
    """

    def __init__(
        self,
        capacity: int = 30,
        window_seconds: float = 600.0,
        idle_seconds: float = 3600.0,
        max_clients: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.capacity = capacity
        self.refill_rate = capacity / window_seconds
        self.idle_seconds = idle_seconds
        self.max_clients = max_clients
        self._clock = clock
        self._buckets: "OrderedDict[str, _Bucket]" = OrderedDict()

    def check_limit(self, client_id: str) -> RateLimitDecision:
        now = self._clock()
        bucket = self._buckets.get(client_id)

        if bucket is None:
            self._make_room(now)
            bucket = _Bucket(tokens=float(self.capacity - 1), last_refill=now)
            self._buckets[client_id] = bucket
            return RateLimitDecision(allowed=True, remaining=int(bucket.tokens))

        self._buckets.move_to_end(client_id)
        elapsed = max(0.0, now - bucket.last_refill)
        bucket.tokens = min(
            float(self.capacity), bucket.tokens + elapsed * self.refill_rate
        )
        bucket.last_refill = now

        if bucket.tokens >= 1.0:
            bucket.tokens -= 1.0
            return RateLimitDecision(allowed=True, remaining=math.floor(bucket.tokens))

        retry_after = (1.0 - bucket.tokens) / self.refill_rate
        logger.info("rate_limit.rejected", client_id=client_id, retry_after=retry_after)
        return RateLimitDecision(
            allowed=False, remaining=0, retry_after_seconds=retry_after
        )

    def cleanup(self) -> int:
        now = self._clock()
        stale = [
            key
            for key, bucket in self._buckets.items()
            if now - bucket.last_refill > self.idle_seconds
        ]
        for key in stale:
            del self._buckets[key]
        if stale:
            logger.debug("rate_limit.cleanup", removed=len(stale))
        return len(stale)

    def __len__(self) -> int:
        return len(self._buckets)

    def _make_room(self, now: float) -> None:
        if len(self._buckets) < self.max_clients:
            return
        self.cleanup()
        while len(self._buckets) >= self.max_clients:
            self._buckets.popitem(last=False)
