from __future__ import annotations

import pytest

from conftest import REFERENCE_TIME, make_event
from quakecast.domain.entities.event import EventCatalog
from quakecast.domain.entities.features import (
    FEATURE_NAMES,
    TIME_SINCE_LAST_SENTINEL,
    FeatureSettings,
)
from quakecast.domain.services.feature_extractor import (
    build_label,
    extract_features,
    extract_labeled_sample,
)

SETTINGS = FeatureSettings(label_magnitude=4.5, radius_km=100.0)


def test_features_cover_fixed_names_with_sentinel_when_no_events() -> None:
    features = extract_features(
        0.0, 120.0, REFERENCE_TIME, EventCatalog.empty(), SETTINGS
    )
    assert tuple(features) == FEATURE_NAMES
    assert features["time_since_last"] == TIME_SINCE_LAST_SENTINEL
    assert features["rate_90"] == 0.0
    assert features["etas"] == 0.0


def test_rate_and_max_magnitude_windows() -> None:
    catalog = EventCatalog.from_events(
        [
            make_event(2.0, magnitude=4.0),
            make_event(10.0, magnitude=5.0),
            make_event(60.0, magnitude=6.0),
            make_event(5.0, lat=3.0, magnitude=7.0),
        ]
    )
    features = extract_features(0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS)

    assert features["rate_7"] == pytest.approx(1 / 7)
    assert features["rate_30"] == pytest.approx(2 / 30)
    assert features["rate_90"] == pytest.approx(3 / 90)
    assert features["maxMag_7"] == 4.0
    assert features["maxMag_30"] == 5.0
    assert features["maxMag_90"] == 6.0
    assert features["time_since_last"] == pytest.approx(10.0)


def test_features_never_see_future_events() -> None:
    past_only = EventCatalog.from_events([make_event(3.0, magnitude=5.0)])
    with_future = past_only.with_event(make_event(-1.0, magnitude=7.0))

    before = extract_features(0.0, 120.0, REFERENCE_TIME, past_only, SETTINGS)
    after = extract_features(0.0, 120.0, REFERENCE_TIME, with_future, SETTINGS)
    assert before.as_dict() == after.as_dict()


def test_label_uses_look_ahead_window_only() -> None:
    catalog = EventCatalog.from_events(
        [
            make_event(1.0, magnitude=6.0),
            make_event(-8.0, magnitude=6.0),
            make_event(-2.0, magnitude=4.0),
        ]
    )
    assert build_label(0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS, 7.0) == 0

    catalog = catalog.with_event(make_event(-6.0, magnitude=4.5))
    assert build_label(0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS, 7.0) == 1


def test_label_requires_nearby_event() -> None:
    catalog = EventCatalog.from_events([make_event(-1.0, lat=5.0, magnitude=6.0)])
    assert build_label(0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS, 7.0) == 0


def test_labeled_sample_combines_features_and_label() -> None:
    catalog = EventCatalog.from_events(
        [make_event(4.0, magnitude=5.0), make_event(-1.0, magnitude=5.0)]
    )
    sample = extract_labeled_sample(
        0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS, horizon_days=3.0
    )
    assert sample.label == 1
    assert sample.time == REFERENCE_TIME
    assert sample.features["time_since_last"] == pytest.approx(4.0)
    assert sample.features["etas"] > 0.0


def test_event_exactly_at_sample_time_is_label_not_feature() -> None:
    catalog = EventCatalog.from_events([make_event(0.0, magnitude=6.0)])
    sample = extract_labeled_sample(
        0.0, 120.0, REFERENCE_TIME, catalog, SETTINGS, horizon_days=1.0
    )
    assert sample.features["rate_7"] == 0.0
    assert sample.label == 1
