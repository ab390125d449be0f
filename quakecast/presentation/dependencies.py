"""
Presentation Layer - Shared request dependencies

Client identification and per-client rate limiting for the query endpoints.
"""

import math

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import Depends, HTTPException, Request, Response, status

from quakecast.domain.ports.rate_limiter import IRateLimiter

logger = structlog.get_logger(__name__)

CACHE_CONTROL = "public, max-age=900"


def client_identifier(request: Request) -> str:
    """Best-effort client address, preferring proxy headers."""
    connecting_ip = request.headers.get("cf-connecting-ip")
    if connecting_ip:
        return connecting_ip.strip()

    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    if request.client is not None:
        return request.client.host
    return "unknown"


@inject
async def enforce_rate_limit(
    request: Request,
    rate_limiter: IRateLimiter = Depends(Provide["rate_limiter"]),
) -> None:
    client_id = client_identifier(request)
    decision = rate_limiter.check_limit(client_id)
    if not decision.allowed:
        retry_after = max(1, math.ceil(decision.retry_after_seconds))
        logger.info("rate_limit.exceeded", client=client_id, retry_after=retry_after)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded. Please try again later.",
            headers={"Retry-After": str(retry_after)},
        )


def set_cache_headers(response: Response, cache_hit: bool) -> None:
    response.headers["Cache-Control"] = CACHE_CONTROL
    response.headers["X-Cache"] = "HIT" if cache_hit else "MISS"
