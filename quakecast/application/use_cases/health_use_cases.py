"""Use cases for health and application info endpoints."""

from datetime import datetime, timezone
from typing import Optional

from quakecast.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from quakecast.application.models import SystemInfo
from quakecast.domain.entities.health import ApplicationInfo, ModelSummary
from quakecast.domain.ports.health_check import IHealthCheckService
from quakecast.domain.ports.model_artifact_provider import IModelArtifactProvider


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Use case responsible for returning application info."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        artifact_provider: IModelArtifactProvider,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._artifact_provider = artifact_provider
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now
        uptime_seconds = max(0.0, (now - started).total_seconds())

        # Only report a model that is already loaded; /info never triggers a load.
        artifact = self._artifact_provider.current()

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=uptime_seconds,
            status=system_health.status,
            catalog_url=self._info.catalog_base_url,
            artifacts_dir=self._info.artifacts_dir,
            dependencies=system_health.dependencies,
            model=None if artifact is None else ModelSummary.from_artifact(artifact),
        )

        return ApplicationInfoDTO.from_domain(info)
