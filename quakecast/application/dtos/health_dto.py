"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from quakecast.domain.entities.health import (
    ApplicationInfo,
    DependencyStatus,
    ModelSummary,
    ServiceStatus,
    SystemHealth,
)


class DependencyStatusDTO(BaseModel):
    """Serializable representation of a dependency health check."""

    name: str = Field(description="Dependency identifier")
    status: ServiceStatus = Field(description="Status of the dependency")
    message: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    checked_at: datetime = Field(description="Timestamp of the check")
    latency_ms: Optional[float] = Field(
        default=None, description="Round trip time of the check in milliseconds"
    )
    url: Optional[str] = Field(default=None, description="Endpoint that was checked")

    @classmethod
    def from_domain(cls, status: DependencyStatus) -> "DependencyStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            latency_ms=status.latency_ms,
            url=status.url,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "usgs_catalog",
                "status": "up",
                "message": "Catalog reachable",
                "checked_at": "2025-01-15T12:00:00Z",
                "latency_ms": 182.4,
                "url": "https://earthquake.usgs.gov/fdsnws/event/1",
            }
        }
    }


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Worst status among dependencies")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Per dependency checks"
    )

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in health.dependencies
            ],
        )


class ModelSummaryDTO(BaseModel):
    """The loaded nowcast model as reported by /info."""

    version: str = Field(description="Artifact format version")
    trained_at: datetime = Field(description="When the model was trained")
    horizon_days: float = Field(description="Forecast horizon the model was fit for")
    label_magnitude: float = Field(description="Target magnitude threshold")
    bbox: List[float] = Field(
        description="Training region as [min_lon, min_lat, max_lon, max_lat]"
    )

    @classmethod
    def from_domain(cls, summary: ModelSummary) -> "ModelSummaryDTO":
        return cls(
            version=summary.version,
            trained_at=summary.trained_at,
            horizon_days=summary.horizon_days,
            label_magnitude=summary.label_magnitude,
            bbox=list(summary.bbox),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "version": "1.0.0",
                "trained_at": "2025-01-10T03:00:00Z",
                "horizon_days": 7.0,
                "label_magnitude": 4.5,
                "bbox": [-125.0, 32.0, -114.0, 42.0],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str = Field(description="Application name")
    description: str = Field(description="Application description")
    version: str = Field(description="Application version")
    environment: str = Field(description="Current deployment environment")
    git_commit: str = Field(description="Git commit hash")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    status: ServiceStatus = Field(description="Overall system status")
    catalog_url: str = Field(description="Base URL of the earthquake catalog")
    artifacts_dir: str = Field(description="Directory holding model artifacts")
    dependencies: List[DependencyStatusDTO] = Field(
        default_factory=list, description="Dependency status snapshot"
    )
    model: Optional[ModelSummaryDTO] = Field(
        default=None, description="Loaded model, absent until one has been loaded"
    )

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            catalog_url=info.catalog_url,
            artifacts_dir=info.artifacts_dir,
            dependencies=[
                DependencyStatusDTO.from_domain(dep) for dep in info.dependencies
            ],
            model=ModelSummaryDTO.from_domain(info.model) if info.model else None,
        )
