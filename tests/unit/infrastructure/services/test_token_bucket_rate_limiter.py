from __future__ import annotations

import pytest

from conftest import FakeClock
from quakecast.infrastructure.services.token_bucket_rate_limiter import (
    TokenBucketRateLimiter,
)


def _limiter(clock: FakeClock, **kwargs) -> TokenBucketRateLimiter:
    values = dict(capacity=30, window_seconds=600, idle_seconds=3600)
    values.update(kwargs)
    return TokenBucketRateLimiter(clock=clock, **values)


def test_capacity_requests_are_allowed_then_rejected() -> None:
    limiter = _limiter(FakeClock())

    decisions = [limiter.check_limit("1.2.3.4") for _ in range(30)]
    assert all(decision.allowed for decision in decisions)
    assert decisions[0].remaining == 29
    assert decisions[-1].remaining == 0

    rejected = limiter.check_limit("1.2.3.4")
    assert rejected.allowed is False
    assert rejected.retry_after_seconds == pytest.approx(20.0)


def test_tokens_refill_continuously() -> None:
    clock = FakeClock()
    limiter = _limiter(clock)
    for _ in range(30):
        limiter.check_limit("client")

    clock.advance(21.0)
    assert limiter.check_limit("client").allowed is True
    assert limiter.check_limit("client").allowed is False

    clock.advance(600.0)
    assert limiter.check_limit("client").remaining == 29


def test_clients_have_independent_buckets() -> None:
    limiter = _limiter(FakeClock(), capacity=1)
    assert limiter.check_limit("a").allowed is True
    assert limiter.check_limit("a").allowed is False
    assert limiter.check_limit("b").allowed is True


def test_cleanup_removes_idle_buckets() -> None:
    clock = FakeClock()
    limiter = _limiter(clock)
    limiter.check_limit("old")
    clock.advance(3000.0)
    limiter.check_limit("recent")
    clock.advance(700.0)

    assert limiter.cleanup() == 1
    assert len(limiter) == 1


def test_table_is_bounded() -> None:
    limiter = _limiter(FakeClock(), max_clients=3)
    for client in ("a", "b", "c", "d"):
        limiter.check_limit(client)
    assert len(limiter) == 3
