"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .json_model_artifacts_repository import JsonModelArtifactsRepository

__all__ = ["JsonModelArtifactsRepository"]
