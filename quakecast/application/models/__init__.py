"""Application-level models that are not transport DTOs."""

from .query_result import CachedQueryResult
from .system_info import SystemInfo
from .training_config import TrainingConfig

__all__ = ["CachedQueryResult", "SystemInfo", "TrainingConfig"]
