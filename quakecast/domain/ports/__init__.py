"""Domain ports package."""

from .health_check import IHealthCheckService
from .model_artifact_provider import IModelArtifactProvider
from .rate_limiter import IRateLimiter, RateLimitDecision
from .response_cache import IResponseCache

__all__ = [
    "IHealthCheckService",
    "IModelArtifactProvider",
    "IRateLimiter",
    "RateLimitDecision",
    "IResponseCache",
]
