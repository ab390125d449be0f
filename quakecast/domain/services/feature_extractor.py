"""
Feature Extractor

Computes the classifier's feature vector for one (location, time) sample.
Features only ever see events strictly before the sample time. The
look-ahead window ``[time, time + horizon)`` is used exclusively by
``build_label`` during training.

The same extractor serves the training pipeline and online scoring, so a
model always sees features computed identically in both paths.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, Optional

import numpy as np

from quakecast.domain.entities.event import EventCatalog
from quakecast.domain.entities.features import (
    RATE_WINDOWS_DAYS,
    TIME_SINCE_LAST_SENTINEL,
    FeatureSettings,
    FeatureVector,
    LabeledSample,
)
from quakecast.domain.entities.kernel import KernelParams
from quakecast.domain.services.geodesy import haversine_km
from quakecast.domain.services.intensity import intensity


def _within_radius(
    catalog: EventCatalog, lat: float, lon: float, radius_km: float
) -> np.ndarray:
    if len(catalog) == 0:
        return np.zeros(0, dtype=bool)
    distances = np.atleast_1d(haversine_km(lat, lon, catalog.lats, catalog.lons))
    return distances <= radius_km


def extract_features(
    lat: float,
    lon: float,
    time: datetime,
    catalog: EventCatalog,
    settings: FeatureSettings,
    kernel_params: Optional[KernelParams] = None,
) -> FeatureVector:
    past = catalog.before(time)
    nearby = _within_radius(past, lat, lon, settings.radius_km)
    ages = past.ages_days(time)[nearby]
    magnitudes = past.magnitudes[nearby]

    values: Dict[str, float] = {}
    for window in RATE_WINDOWS_DAYS:
        in_window = ages <= window
        values[f"rate_{window}"] = float(np.count_nonzero(in_window)) / window
        values[f"maxMag_{window}"] = (
            max(0.0, float(magnitudes[in_window].max())) if in_window.any() else 0.0
        )

    significant = magnitudes >= settings.label_magnitude
    if significant.any():
        time_since_last = float(ages[significant].min())
    else:
        time_since_last = TIME_SINCE_LAST_SENTINEL
    values["time_since_last"] = min(time_since_last, TIME_SINCE_LAST_SENTINEL)

    values["etas"] = intensity(past, time, lat, lon, kernel_params)
    return FeatureVector(values)


def build_label(
    lat: float,
    lon: float,
    time: datetime,
    catalog: EventCatalog,
    settings: FeatureSettings,
    horizon_days: float,
) -> int:
    """1 if a qualifying event falls in ``[time, time + horizon)`` nearby, else 0."""
    future = catalog.between(time, time + timedelta(days=horizon_days))
    if len(future) == 0:
        return 0
    qualifying = future.magnitudes >= settings.label_magnitude
    nearby = _within_radius(future, lat, lon, settings.radius_km)
    return int(np.any(qualifying & nearby))


def extract_labeled_sample(
    lat: float,
    lon: float,
    time: datetime,
    catalog: EventCatalog,
    settings: FeatureSettings,
    horizon_days: float,
    kernel_params: Optional[KernelParams] = None,
) -> LabeledSample:
    return LabeledSample(
        lat=lat,
        lon=lon,
        time=time,
        features=extract_features(lat, lon, time, catalog, settings, kernel_params),
        label=build_label(lat, lon, time, catalog, settings, horizon_days),
    )
