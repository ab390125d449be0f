from __future__ import annotations

import pytest

from conftest import InMemoryArtifactsRepository, InMemoryCatalogGateway
from quakecast.domain.entities.health import ServiceStatus
from quakecast.infrastructure.services.health_check_service import HealthCheckService


@pytest.mark.asyncio
async def test_all_dependencies_up(sample_artifact) -> None:
    service = HealthCheckService(
        InMemoryArtifactsRepository(sample_artifact),
        InMemoryCatalogGateway(),
        catalog_url="https://usgs",
    )

    health = await service.evaluate()

    assert health.status is ServiceStatus.UP
    by_name = {dep.name: dep for dep in health.dependencies}
    assert set(by_name) == {"model_artifact", "usgs_catalog"}
    assert by_name["usgs_catalog"].url == "https://usgs"
    assert by_name["usgs_catalog"].latency_ms is not None


@pytest.mark.asyncio
async def test_missing_model_degrades() -> None:
    service = HealthCheckService(
        InMemoryArtifactsRepository(), InMemoryCatalogGateway()
    )
    health = await service.evaluate()
    assert health.status is ServiceStatus.DEGRADED


@pytest.mark.asyncio
async def test_unreachable_catalog_is_down(sample_artifact) -> None:
    gateway = InMemoryCatalogGateway()
    gateway.reachable = False
    service = HealthCheckService(InMemoryArtifactsRepository(sample_artifact), gateway)

    health = await service.evaluate()

    assert health.status is ServiceStatus.DOWN
