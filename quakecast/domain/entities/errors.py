"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
Numerical guards (probability clamping, sigmoid and logit clamping, the
standard-deviation floor) never raise; everything below is an input, budget,
upstream or artifact problem that callers must surface.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidQueryError(DomainError):
    """Raised when a numeric query parameter is non-finite or out of range."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class GridTooLargeError(DomainError):
    """Raised when a requested grid exceeds the cell budget."""

    def __init__(
        self,
        estimated_cells: int,
        max_cells: int,
        suggested_cell_deg: float,
    ):
        self.estimated_cells = estimated_cells
        self.max_cells = max_cells
        self.suggested_cell_deg = suggested_cell_deg
        message = (
            f"Grid too large: ~{estimated_cells} cells requested, "
            f"maximum is {max_cells}. Try cellDeg={suggested_cell_deg} or larger."
        )
        super().__init__(
            message,
            details={
                "estimated_cells": estimated_cells,
                "max_cells": max_cells,
                "suggested_cell_deg": suggested_cell_deg,
            },
        )


class CatalogUnavailableError(DomainError):
    """Raised when the upstream earthquake catalog cannot be fetched."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ModelArtifactNotFoundError(DomainError):
    """Raised when no persisted model artifact can be located."""

    def __init__(self, location: str, details: Optional[Dict[str, Any]] = None):
        message = f"Model artifact not found at {location}"
        super().__init__(message, details)


class ModelArtifactFormatError(DomainError):
    """Raised when a persisted artifact does not match the expected schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ClassifierTrainingError(DomainError):
    """Raised when the classifier cannot be trained on the given samples."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TrainingPipelineError(DomainError):
    """Raised when the training pipeline cannot produce a model."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
