"""
Repositories Package - Domain Layer

This package contains repository interfaces for persisting trained model
artifacts and their evaluation reports.
"""

from .model_artifacts_repository import IModelArtifactsRepository

__all__ = ["IModelArtifactsRepository"]
