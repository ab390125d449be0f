from __future__ import annotations

import asyncio

import pytest

from conftest import InMemoryArtifactsRepository
from quakecast.domain.entities.errors import ModelArtifactNotFoundError
from quakecast.infrastructure.services.model_artifact_provider import (
    ModelArtifactProvider,
)


class _SlowRepository(InMemoryArtifactsRepository):
    async def load_artifact(self):
        await asyncio.sleep(0.01)
        return await super().load_artifact()


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_load(sample_artifact) -> None:
    repository = _SlowRepository(sample_artifact)
    provider = ModelArtifactProvider(repository)
    assert provider.current() is None

    results = await asyncio.gather(*(provider.get() for _ in range(5)))

    assert repository.loads == 1
    assert all(result is sample_artifact for result in results)
    assert provider.current() is sample_artifact


@pytest.mark.asyncio
async def test_failed_load_is_retried(sample_artifact) -> None:
    repository = InMemoryArtifactsRepository()
    provider = ModelArtifactProvider(repository)

    with pytest.raises(ModelArtifactNotFoundError):
        await provider.get()
    assert provider.current() is None

    repository.artifact = sample_artifact
    assert await provider.get() is sample_artifact


@pytest.mark.asyncio
async def test_reload_replaces_cached_artifact(sample_artifact) -> None:
    repository = InMemoryArtifactsRepository(sample_artifact)
    provider = ModelArtifactProvider(repository)
    await provider.get()

    await provider.reload()

    assert repository.loads == 2
