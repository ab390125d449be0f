"""Domain entities for observed seismic events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

import numpy as np

from quakecast.shared.consts import SECONDS_PER_DAY


def to_epoch_seconds(moment: datetime) -> float:
    """Convert a datetime to epoch seconds, treating naive values as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


@dataclass(frozen=True, slots=True)
class Event:
    """A single catalog earthquake. Immutable once observed."""

    time: datetime
    lat: float
    lon: float
    magnitude: float
    event_id: Optional[str] = None
    depth_km: Optional[float] = None


class EventCatalog:
    """
    Time-sorted, columnar view over a set of events.

    Kernel and feature computations run over thousands of (cell, time) pairs,
    so events are kept as numpy arrays. The catalog is never mutated; the
    slicing helpers return new catalogs sharing no state with the caller's
    event list.
    """

    __slots__ = ("times", "lats", "lons", "magnitudes")

    def __init__(
        self,
        times: np.ndarray,
        lats: np.ndarray,
        lons: np.ndarray,
        magnitudes: np.ndarray,
    ):
        order = np.argsort(times, kind="stable")
        self.times = np.asarray(times, dtype=np.float64)[order]
        self.lats = np.asarray(lats, dtype=np.float64)[order]
        self.lons = np.asarray(lons, dtype=np.float64)[order]
        self.magnitudes = np.asarray(magnitudes, dtype=np.float64)[order]
        for array in (self.times, self.lats, self.lons, self.magnitudes):
            array.setflags(write=False)

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "EventCatalog":
        events = list(events)
        return cls(
            times=np.array([to_epoch_seconds(e.time) for e in events], dtype=float),
            lats=np.array([e.lat for e in events], dtype=float),
            lons=np.array([e.lon for e in events], dtype=float),
            magnitudes=np.array([e.magnitude for e in events], dtype=float),
        )

    @classmethod
    def empty(cls) -> "EventCatalog":
        return cls.from_events([])

    def __len__(self) -> int:
        return int(self.times.size)

    def _slice(self, start: int, stop: int) -> "EventCatalog":
        return EventCatalog(
            self.times[start:stop],
            self.lats[start:stop],
            self.lons[start:stop],
            self.magnitudes[start:stop],
        )

    def before(self, moment: datetime) -> "EventCatalog":
        """Events strictly earlier than ``moment``."""
        stop = int(np.searchsorted(self.times, to_epoch_seconds(moment), "left"))
        return self._slice(0, stop)

    def between(self, start: datetime, end: datetime) -> "EventCatalog":
        """Events with ``start <= time < end``."""
        lo = int(np.searchsorted(self.times, to_epoch_seconds(start), "left"))
        hi = int(np.searchsorted(self.times, to_epoch_seconds(end), "left"))
        return self._slice(lo, max(lo, hi))

    def with_event(self, event: Event) -> "EventCatalog":
        return EventCatalog(
            np.append(self.times, to_epoch_seconds(event.time)),
            np.append(self.lats, event.lat),
            np.append(self.lons, event.lon),
            np.append(self.magnitudes, event.magnitude),
        )

    def ages_days(self, moment: datetime) -> np.ndarray:
        """Elapsed days from each event to ``moment`` (negative for future events)."""
        return (to_epoch_seconds(moment) - self.times) / SECONDS_PER_DAY
