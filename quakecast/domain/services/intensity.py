"""
ETAS-style intensity kernel.

``intensity`` returns the expected event rate (events/day) at a location and
time as a sum of decaying contributions from strictly earlier events:

    K * exp(alpha * (m - M0)) * (dt + c) ** -p * (r**2 + d**2) ** (-q / 2)

``probability_at_least_one`` turns that rate into the Poisson probability of
one or more events within a horizon, holding the rate constant over the
horizon.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional, Union

import numpy as np

from quakecast.domain.entities.event import Event, EventCatalog
from quakecast.domain.entities.kernel import DEFAULT_KERNEL_PARAMS, KernelParams
from quakecast.domain.services.geodesy import haversine_km

EventSource = Union[EventCatalog, Iterable[Event]]

MIN_POISSON_EXPONENT = -50.0


def as_catalog(events: EventSource) -> EventCatalog:
    if isinstance(events, EventCatalog):
        return events
    return EventCatalog.from_events(events)


def intensity(
    events: EventSource,
    t0: datetime,
    lat0: float,
    lon0: float,
    params: Optional[KernelParams] = None,
) -> float:
    """Expected events/day at ``(lat0, lon0)`` at ``t0``; always >= 0."""
    params = params or DEFAULT_KERNEL_PARAMS
    catalog = as_catalog(events)
    if len(catalog) == 0:
        return 0.0

    dt_days = catalog.ages_days(t0)
    mask = (dt_days > 0) & (dt_days <= params.time_window_days)
    if not mask.any():
        return 0.0

    r_km = haversine_km(lat0, lon0, catalog.lats[mask], catalog.lons[mask])
    in_range = r_km <= params.radius_km
    if not np.any(in_range):
        return 0.0

    dt = dt_days[mask][in_range]
    r = np.asarray(r_km)[in_range]
    magnitudes = catalog.magnitudes[mask][in_range]

    time_term = np.power(dt + params.c, -params.p)
    magnitude_term = np.exp(params.alpha * (magnitudes - params.M0))
    space_term = np.power(r * r + params.d * params.d, -params.q / 2.0)

    lambda_ = float(np.sum(params.K * magnitude_term * time_term * space_term))
    return max(0.0, lambda_)


def probability_at_least_one(lambda_per_day: float, horizon_days: float) -> float:
    """Poisson probability of >= 1 event in ``horizon_days``, clamped to [0, 1]."""
    exponent = max(MIN_POISSON_EXPONENT, -lambda_per_day * horizon_days)
    return min(1.0, max(0.0, 1.0 - math.exp(exponent)))
