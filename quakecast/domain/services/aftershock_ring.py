"""
Aftershock Ring

Evaluates the intensity kernel at a mainshock epicenter and at ``n_points``
evenly spaced bearings on a circle of ``radius_km`` around it.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional

import numpy as np

from quakecast.domain.entities.aftershock import (
    AftershockRing,
    RingCenter,
    RingParameters,
    RingPoint,
    RingStatistics,
)
from quakecast.domain.entities.event import Event, EventCatalog
from quakecast.domain.entities.kernel import DEFAULT_KERNEL_PARAMS, KernelParams
from quakecast.domain.services.geodesy import destination_point
from quakecast.domain.services.intensity import intensity, probability_at_least_one

EVALUATION_OFFSET = timedelta(seconds=1)
# Ring points sit exactly on the kernel's cutoff radius; rounding in the
# haversine must not drop the mainshock from them.
RADIUS_TOLERANCE_KM = 1e-6


def compute_aftershock_ring(
    mainshock: Event,
    catalog: EventCatalog,
    params: Optional[RingParameters] = None,
    kernel_params: Optional[KernelParams] = None,
) -> AftershockRing:
    params = params or RingParameters()
    kernel = (kernel_params or DEFAULT_KERNEL_PARAMS).with_overrides(
        radius_km=params.radius_km + RADIUS_TOLERANCE_KM,
        time_window_days=params.lookback_days,
    )

    events = catalog.before(mainshock.time).with_event(mainshock)
    t_eval = mainshock.time + EVALUATION_OFFSET

    center_lambda = intensity(events, t_eval, mainshock.lat, mainshock.lon, kernel)
    center = RingCenter(
        lat=mainshock.lat,
        lon=mainshock.lon,
        lambda_=center_lambda,
        probability=probability_at_least_one(center_lambda, params.horizon_days),
    )

    ring = []
    for i in range(params.n_points):
        bearing = 2.0 * math.pi * i / params.n_points
        lat, lon = destination_point(
            mainshock.lat, mainshock.lon, bearing, params.radius_km
        )
        lambda_ = intensity(events, t_eval, lat, lon, kernel)
        ring.append(
            RingPoint(
                lat=lat,
                lon=lon,
                lambda_=lambda_,
                probability=probability_at_least_one(lambda_, params.horizon_days),
            )
        )

    probabilities = np.array([point.probability for point in ring], dtype=np.float64)
    if probabilities.size:
        statistics = RingStatistics(
            max_probability=float(probabilities.max()),
            mean_probability=float(probabilities.mean()),
            min_probability=float(probabilities.min()),
        )
    else:
        statistics = RingStatistics(0.0, 0.0, 0.0)

    return AftershockRing(
        center=center, statistics=statistics, ring=ring, events_used=len(events)
    )
