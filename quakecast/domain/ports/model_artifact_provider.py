"""Domain port for the process-wide, load-once model artifact."""

from __future__ import annotations

from typing import Optional, Protocol

from quakecast.domain.entities.model import ModelArtifact


class IModelArtifactProvider(Protocol):
    """
    Supplies the immutable model artifact to the prediction path.

    The artifact is loaded lazily on first use and then reused; concurrent
    first loads must converge on the same instance.
    """

    async def get(self) -> ModelArtifact:
        """Return the loaded artifact, loading it on first call."""
        ...

    async def reload(self) -> ModelArtifact:
        """Discard the cached artifact and load it again."""
        ...

    def current(self) -> Optional[ModelArtifact]:
        """Return the artifact if already loaded, without triggering a load."""
        ...
