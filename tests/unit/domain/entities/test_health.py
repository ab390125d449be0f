from __future__ import annotations

from datetime import timezone

import pytest

from quakecast.domain.entities.health import (
    DependencyStatus,
    ModelSummary,
    ServiceStatus,
    SystemHealth,
)


def _dep(name: str, status: ServiceStatus) -> DependencyStatus:
    return DependencyStatus(name=name, status=status)


def test_dependency_status_defaults() -> None:
    status = DependencyStatus(name="model_artifact", status=ServiceStatus.UP)
    assert status.checked_at.tzinfo == timezone.utc
    assert status.url is None
    assert status.latency_ms is None


def test_system_health_container() -> None:
    dependency = _dep("usgs_catalog", ServiceStatus.DOWN)
    health = SystemHealth(status=ServiceStatus.DOWN, dependencies=[dependency])
    assert health.dependencies[0] is dependency
    assert health.status is ServiceStatus.DOWN


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([ServiceStatus.UP, ServiceStatus.UP], ServiceStatus.UP),
        ([ServiceStatus.UP, ServiceStatus.DEGRADED], ServiceStatus.DEGRADED),
        ([ServiceStatus.DEGRADED, ServiceStatus.DOWN], ServiceStatus.DOWN),
        ([ServiceStatus.DOWN, ServiceStatus.UP], ServiceStatus.DOWN),
        ([], ServiceStatus.UP),
    ],
)
def test_system_health_takes_worst_dependency_status(statuses, expected) -> None:
    dependencies = [_dep(f"dep{i}", status) for i, status in enumerate(statuses)]

    health = SystemHealth.from_dependencies(iter(dependencies))

    assert health.status is expected
    assert health.dependencies == dependencies


def test_model_summary_from_artifact(sample_artifact) -> None:
    summary = ModelSummary.from_artifact(sample_artifact)

    assert summary.version == sample_artifact.version
    assert summary.trained_at == sample_artifact.trained_at
    assert summary.horizon_days == sample_artifact.config.horizon_days
    assert summary.label_magnitude == sample_artifact.config.label_magnitude
    assert summary.bbox == sample_artifact.config.bbox.to_list()
