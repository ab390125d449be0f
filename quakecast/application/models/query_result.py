"""Wrapper telling the presentation layer whether a response came from cache."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CachedQueryResult(Generic[T]):
    payload: T
    cache_hit: bool = False
