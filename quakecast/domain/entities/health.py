"""
Health domain entities.

Value objects describing the availability of the nowcast service's
collaborators: the persisted model artifact and the upstream catalog.
A missing model only degrades the service (aftershock queries still
work), while an unreachable catalog takes it down.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional

from quakecast.domain.entities.model import ModelArtifact


class ServiceStatus(str, Enum):
    """Availability of a dependency or of the whole service."""

    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"


_SEVERITY = {ServiceStatus.UP: 0, ServiceStatus.DEGRADED: 1, ServiceStatus.DOWN: 2}


@dataclass(slots=True)
class DependencyStatus:
    """Result of checking one collaborator."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: Optional[float] = None
    url: Optional[str] = None


@dataclass(slots=True)
class SystemHealth:
    """Service health: the worst status among its dependencies."""

    status: ServiceStatus
    dependencies: List[DependencyStatus] = field(default_factory=list)

    @classmethod
    def from_dependencies(
        cls, dependencies: Iterable[DependencyStatus]
    ) -> SystemHealth:
        checked = list(dependencies)
        status = max(
            (dep.status for dep in checked),
            key=_SEVERITY.__getitem__,
            default=ServiceStatus.UP,
        )
        return cls(status=status, dependencies=checked)


@dataclass(slots=True)
class ModelSummary:
    """What /info reports about the loaded nowcast model."""

    version: str
    trained_at: datetime
    horizon_days: float
    label_magnitude: float
    bbox: List[float]

    @classmethod
    def from_artifact(cls, artifact: ModelArtifact) -> ModelSummary:
        return cls(
            version=artifact.version,
            trained_at=artifact.trained_at,
            horizon_days=artifact.config.horizon_days,
            label_magnitude=artifact.config.label_magnitude,
            bbox=artifact.config.bbox.to_list(),
        )


@dataclass(slots=True)
class ApplicationInfo:
    """Operational metadata surfaced by the /info endpoint."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    catalog_url: str
    artifacts_dir: str
    dependencies: List[DependencyStatus] = field(default_factory=list)
    model: Optional[ModelSummary] = None
