"""
Model Artifacts Repository Interface

This module defines the interface for model artifact storage following
the repository pattern. It decouples the training pipeline and the
prediction service from where artifacts are stored.
"""

from abc import ABC, abstractmethod
from typing import Optional

from quakecast.domain.entities.evaluation import EvaluationReport
from quakecast.domain.entities.model import ModelArtifact


class IModelArtifactsRepository(ABC):
    """Interface for Model Artifacts repository implementations."""

    @abstractmethod
    async def save_artifact(self, artifact: ModelArtifact) -> str:
        """
        Persist a trained model artifact.

        Returns:
            Location of the saved artifact
        """
        pass

    @abstractmethod
    async def load_artifact(self) -> ModelArtifact:
        """
        Load the current model artifact.

        Raises:
            ModelArtifactNotFoundError: When no artifact has been saved
            ModelArtifactFormatError: When the stored artifact is malformed
        """
        pass

    @abstractmethod
    async def save_evaluation(self, report: EvaluationReport) -> str:
        """
        Persist the evaluation report produced alongside an artifact.

        Returns:
            Location of the saved report
        """
        pass

    @abstractmethod
    async def load_evaluation(self) -> Optional[EvaluationReport]:
        """Load the latest evaluation report, or None if none was saved."""
        pass

    @abstractmethod
    async def artifact_exists(self) -> bool:
        """Return True if a model artifact is available."""
        pass
