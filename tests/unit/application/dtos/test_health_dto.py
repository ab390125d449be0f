from __future__ import annotations

from datetime import datetime, timezone

from quakecast.application.dtos.health_dto import (
    ApplicationInfoDTO,
    DependencyStatusDTO,
    SystemHealthDTO,
)
from quakecast.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ModelSummary,
    ServiceStatus,
    SystemHealth,
)


def test_dependency_status_dto_from_domain() -> None:
    domain = DependencyStatus(
        name="usgs_catalog",
        status=ServiceStatus.UP,
        latency_ms=120.0,
        url="https://earthquake.usgs.gov/fdsnws/event/1",
    )
    dto = DependencyStatusDTO.from_domain(domain)
    assert dto.name == "usgs_catalog"
    assert dto.status is ServiceStatus.UP
    assert dto.latency_ms == 120.0
    assert dto.url == "https://earthquake.usgs.gov/fdsnws/event/1"


def test_system_health_dto_from_domain() -> None:
    domain = SystemHealth(status=ServiceStatus.UP, dependencies=[])
    dto = SystemHealthDTO.from_domain(domain)
    assert dto.status is ServiceStatus.UP
    assert dto.dependencies == []


def _info(**overrides) -> ApplicationInfo:
    values = dict(
        name="QuakeCast",
        description="desc",
        version="1.0",
        environment="development",
        git_commit="abc",
        build_time="2024-09-01",
        started_at=datetime.now(timezone.utc),
        uptime_seconds=42.0,
        status=ServiceStatus.DEGRADED,
        catalog_url="https://earthquake.usgs.gov/fdsnws/event/1",
        artifacts_dir="models",
        dependencies=[
            DependencyStatus(name="model_artifact", status=ServiceStatus.DEGRADED)
        ],
    )
    values.update(overrides)
    return ApplicationInfo(**values)


def test_application_info_dto_from_domain() -> None:
    dto = ApplicationInfoDTO.from_domain(_info())
    assert dto.name == "QuakeCast"
    assert dto.status is ServiceStatus.DEGRADED
    assert dto.artifacts_dir == "models"
    assert dto.catalog_url.startswith("https://earthquake.usgs.gov")
    assert dto.model is None
    assert dto.model_dump(mode="json")["model"] is None


def test_application_info_dto_carries_model_summary() -> None:
    trained_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
    summary = ModelSummary(
        version="1.0.0",
        trained_at=trained_at,
        horizon_days=7.0,
        label_magnitude=4.5,
        bbox=[-125.0, 32.0, -114.0, 42.0],
    )

    dto = ApplicationInfoDTO.from_domain(_info(model=summary))

    assert dto.model is not None
    assert dto.model.horizon_days == 7.0
    assert dto.model.bbox == [-125.0, 32.0, -114.0, 42.0]
    payload = dto.model_dump(mode="json")
    assert payload["model"]["label_magnitude"] == 4.5
    assert payload["model"]["trained_at"].startswith("2024-06-01T00:00:00")
