"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import List

from quakecast.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway
from quakecast.domain.ports.health_check import IHealthCheckService
from quakecast.domain.repositories.model_artifacts_repository import (
    IModelArtifactsRepository,
)


class HealthCheckService(IHealthCheckService):
    """Collect health information for the model artifact and the catalog."""

    def __init__(
        self,
        artifacts_repository: IModelArtifactsRepository,
        catalog_gateway: ICatalogGateway,
        catalog_url: str = "",
    ) -> None:
        self._artifacts_repository = artifacts_repository
        self._catalog_gateway = catalog_gateway
        self._catalog_url = catalog_url

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""

        checks = {
            "model_artifact": asyncio.create_task(self._check_artifact()),
            "usgs_catalog": asyncio.create_task(self._check_catalog()),
        }

        dependency_statuses: List[DependencyStatus] = []

        for name, task in checks.items():
            try:
                dependency_statuses.append(await task)
            except Exception as exc:  # pragma: no cover
                dependency_statuses.append(
                    DependencyStatus(
                        name=name,
                        status=ServiceStatus.DOWN,
                        message=str(exc),
                    )
                )

        return SystemHealth.from_dependencies(dependency_statuses)

    async def _check_artifact(self) -> DependencyStatus:
        # Without a model only /predict is unusable; /aftershock still works.
        if await self._artifacts_repository.artifact_exists():
            return DependencyStatus(
                name="model_artifact",
                status=ServiceStatus.UP,
                message="Model artifact available",
            )
        return DependencyStatus(
            name="model_artifact",
            status=ServiceStatus.DEGRADED,
            message="No trained model artifact found",
        )

    async def _check_catalog(self) -> DependencyStatus:
        start = perf_counter()
        reachable = await self._catalog_gateway.ping()
        latency_ms = (perf_counter() - start) * 1000
        return DependencyStatus(
            name="usgs_catalog",
            status=ServiceStatus.UP if reachable else ServiceStatus.DOWN,
            message="Catalog reachable" if reachable else "Catalog unreachable",
            latency_ms=latency_ms,
            url=self._catalog_url or None,
        )
