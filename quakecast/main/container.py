"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import asyncio
from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from quakecast.application.models import SystemInfo
from quakecast.application.use_cases.aftershock_use_case import AftershockRingUseCase
from quakecast.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from quakecast.application.use_cases.nowcast_prediction_use_case import (
    NowcastPredictionUseCase,
)
from quakecast.application.use_cases.nowcast_training_use_case import (
    NowcastTrainingUseCase,
)
from quakecast.infrastructure.gateways.usgs_catalog_gateway import USGSCatalogGateway
from quakecast.infrastructure.repositories.json_model_artifacts_repository import (
    JsonModelArtifactsRepository,
)
from quakecast.infrastructure.services.health_check_service import HealthCheckService
from quakecast.infrastructure.services.model_artifact_provider import (
    ModelArtifactProvider,
)
from quakecast.infrastructure.services.token_bucket_rate_limiter import (
    TokenBucketRateLimiter,
)
from quakecast.infrastructure.services.ttl_response_cache import TTLResponseCache
from quakecast.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Gateways
    catalog_gateway = providers.Singleton(
        USGSCatalogGateway,
        base_url=config.catalog.base_url,
        timeout=config.catalog.timeout_seconds,
        user_agent=config.catalog.user_agent,
        limit=config.catalog.limit,
    )

    # Repositories
    model_artifacts_repository = providers.Singleton(
        JsonModelArtifactsRepository,
        artifacts_dir=config.nowcast.artifacts_dir,
        model_filename=config.nowcast.model_filename,
        evaluation_filename=config.nowcast.evaluation_filename,
    )

    # Services
    artifact_provider = providers.Singleton(
        ModelArtifactProvider,
        artifacts_repository=model_artifacts_repository,
    )

    rate_limiter = providers.Singleton(
        TokenBucketRateLimiter,
        capacity=config.rate_limit.capacity,
        window_seconds=config.rate_limit.window_seconds,
        idle_seconds=config.rate_limit.idle_seconds,
        max_clients=config.rate_limit.max_clients,
    )

    response_cache = providers.Singleton(
        TTLResponseCache,
        default_ttl_seconds=config.nowcast.cache_ttl_seconds,
        max_entries=config.nowcast.cache_max_entries,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        artifacts_repository=model_artifacts_repository,
        catalog_gateway=catalog_gateway,
        catalog_url=config.catalog.base_url,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        catalog_base_url=config.catalog.base_url,
        artifacts_dir=config.nowcast.artifacts_dir,
    )

    # Application (use cases)
    nowcast_prediction_use_case = providers.Factory(
        NowcastPredictionUseCase,
        artifact_provider=artifact_provider,
        catalog_gateway=catalog_gateway,
        response_cache=response_cache,
        max_cells=config.nowcast.max_cells,
        min_probability=config.nowcast.min_probability,
        lookback_days=config.nowcast.lookback_days,
        bbox_padding_deg=config.nowcast.bbox_padding_deg,
        cache_ttl_seconds=config.nowcast.cache_ttl_seconds,
    )

    aftershock_use_case = providers.Factory(
        AftershockRingUseCase,
        catalog_gateway=catalog_gateway,
        response_cache=response_cache,
        lookback_days=config.nowcast.lookback_days,
        cache_ttl_seconds=config.nowcast.cache_ttl_seconds,
    )

    nowcast_training_use_case = providers.Factory(
        NowcastTrainingUseCase,
        catalog_gateway=catalog_gateway,
        artifacts_repository=model_artifacts_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        artifact_provider=artifact_provider,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


async def _sweep_rate_limiter(container: AppContainer, interval: float) -> None:
    rate_limiter = container.rate_limiter()
    while True:
        await asyncio.sleep(interval)
        removed = rate_limiter.cleanup()
        if removed:
            logger.debug("container.rate_limiter.swept", removed=removed)


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for process-wide resources.

    Starts the periodic rate limiter sweep and warms the model artifact
    provider. A missing artifact is logged, not fatal: prediction requests
    report it until a model is trained.
    """
    container = get_container()
    interval = container.config.rate_limit.cleanup_interval_seconds() or 600.0

    sweeper = asyncio.create_task(_sweep_rate_limiter(container, interval))
    try:
        artifact_provider = container.artifact_provider()
        artifacts_repository = container.model_artifacts_repository()
        if await artifacts_repository.artifact_exists():
            artifact = await artifact_provider.get()
            logger.info("container.model.loaded", version=artifact.version)
        else:
            logger.warning("container.model.missing")

        logger.info("container.resources.initialized")
        yield container

    finally:
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass
        logger.info("container.resources.shutdown")
