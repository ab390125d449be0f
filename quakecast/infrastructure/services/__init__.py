"""Infrastructure services package."""

from .health_check_service import HealthCheckService
from .model_artifact_provider import ModelArtifactProvider
from .token_bucket_rate_limiter import TokenBucketRateLimiter
from .ttl_response_cache import TTLResponseCache

__all__ = [
    "HealthCheckService",
    "ModelArtifactProvider",
    "TokenBucketRateLimiter",
    "TTLResponseCache",
]
