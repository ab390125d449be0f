"""Process-wide, load-once holder for the trained model artifact."""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from quakecast.domain.entities.model import ModelArtifact
from quakecast.domain.ports.model_artifact_provider import IModelArtifactProvider
from quakecast.domain.repositories.model_artifacts_repository import (
    IModelArtifactsRepository,
)

logger = structlog.get_logger(__name__)


class ModelArtifactProvider(IModelArtifactProvider):
    """
    Loads the artifact lazily through the repository and caches it.

    The lock makes concurrent first requests share a single load. A failed
    load leaves nothing cached, so the next request retries.
    """

    def __init__(self, artifacts_repository: IModelArtifactsRepository) -> None:
        self._repository = artifacts_repository
        self._artifact: Optional[ModelArtifact] = None
        self._lock = asyncio.Lock()

    async def get(self) -> ModelArtifact:
        if self._artifact is not None:
            return self._artifact
        async with self._lock:
            if self._artifact is None:
                self._artifact = await self._repository.load_artifact()
                logger.info(
                    "artifact_provider.loaded",
                    version=self._artifact.version,
                    trained=self._artifact.trained_at.isoformat(),
                )
            return self._artifact

    async def reload(self) -> ModelArtifact:
        async with self._lock:
            self._artifact = await self._repository.load_artifact()
            logger.info("artifact_provider.reloaded", version=self._artifact.version)
            return self._artifact

    def current(self) -> Optional[ModelArtifact]:
        return self._artifact
