from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import pytest

from quakecast.domain.entities.errors import (
    CatalogUnavailableError,
    ModelArtifactNotFoundError,
)
from quakecast.domain.entities.evaluation import EvaluationReport
from quakecast.domain.entities.event import Event
from quakecast.domain.entities.features import FEATURE_NAMES
from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.entities.kernel import KernelParams
from quakecast.domain.entities.model import (
    ArtifactConfig,
    Calibration,
    LogisticModel,
    ModelArtifact,
)
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway
from quakecast.domain.ports.model_artifact_provider import IModelArtifactProvider
from quakecast.domain.repositories.model_artifacts_repository import (
    IModelArtifactsRepository,
)
from quakecast.infrastructure.services.ttl_response_cache import TTLResponseCache

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


REFERENCE_TIME = datetime(2024, 6, 1, tzinfo=timezone.utc)


class InMemoryCatalogGateway(ICatalogGateway):
    """Returns a fixed event list filtered like the FDSN query would be."""

    def __init__(self, events: Optional[List[Event]] = None, fail: bool = False):
        self.events = list(events or [])
        self.fail = fail
        self.calls: List[dict] = []
        self.reachable = True

    async def fetch_events(self, start, end, min_magnitude, bbox) -> List[Event]:
        self.calls.append(
            {
                "start": start,
                "end": end,
                "min_magnitude": min_magnitude,
                "bbox": bbox,
            }
        )
        if self.fail:
            raise CatalogUnavailableError("USGS API error: 503")
        return [
            event
            for event in self.events
            if event.time >= start
            and (end is None or event.time <= end)
            and event.magnitude >= min_magnitude
            and bbox.min_lon <= event.lon <= bbox.max_lon
            and bbox.min_lat <= event.lat <= bbox.max_lat
        ]

    async def ping(self) -> bool:
        return self.reachable


class InMemoryArtifactsRepository(IModelArtifactsRepository):
    def __init__(self, artifact: Optional[ModelArtifact] = None):
        self.artifact = artifact
        self.evaluation: Optional[EvaluationReport] = None
        self.loads = 0

    async def save_artifact(self, artifact: ModelArtifact) -> str:
        self.artifact = artifact
        return "memory://nowcast.json"

    async def load_artifact(self) -> ModelArtifact:
        self.loads += 1
        if self.artifact is None:
            raise ModelArtifactNotFoundError("memory://nowcast.json")
        return self.artifact

    async def save_evaluation(self, report: EvaluationReport) -> str:
        self.evaluation = report
        return "memory://nowcast_eval.json"

    async def load_evaluation(self) -> Optional[EvaluationReport]:
        return self.evaluation

    async def artifact_exists(self) -> bool:
        return self.artifact is not None


class StaticArtifactProvider(IModelArtifactProvider):
    def __init__(self, artifact: Optional[ModelArtifact]):
        self._artifact = artifact

    async def get(self) -> ModelArtifact:
        if self._artifact is None:
            raise ModelArtifactNotFoundError("memory://nowcast.json")
        return self._artifact

    async def reload(self) -> ModelArtifact:
        return await self.get()

    def current(self) -> Optional[ModelArtifact]:
        return self._artifact


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_event(
    days_before: float,
    lat: float = 0.0,
    lon: float = 120.0,
    magnitude: float = 4.0,
    reference: datetime = REFERENCE_TIME,
    event_id: Optional[str] = None,
) -> Event:
    return Event(
        time=reference - timedelta(days=days_before),
        lat=lat,
        lon=lon,
        magnitude=magnitude,
        event_id=event_id,
    )


@pytest.fixture()
def reference_time() -> datetime:
    return REFERENCE_TIME


@pytest.fixture()
def sample_artifact() -> ModelArtifact:
    coeffs = {name: 0.0 for name in FEATURE_NAMES}
    coeffs["etas"] = 2.0
    coeffs["rate_30"] = 0.5
    return ModelArtifact(
        config=ArtifactConfig(
            bbox=BoundingBox(118.0, -2.0, 122.0, 2.0),
            cell_deg=1.0,
            label_magnitude=4.5,
            horizon_days=7.0,
            completeness_magnitude=4.0,
            rate_radius_km=100.0,
        ),
        model=LogisticModel(intercept=-4.0, coeffs=coeffs),
        calibration=Calibration(A=1.0, B=0.0),
        kernel_params=KernelParams(),
        trained_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def recent_events() -> List[Event]:
    return [
        make_event(1.0, lat=0.2, lon=120.1, magnitude=5.5, event_id="a"),
        make_event(3.0, lat=-0.4, lon=119.8, magnitude=4.8, event_id="b"),
        make_event(20.0, lat=1.1, lon=121.3, magnitude=4.2, event_id="c"),
        make_event(45.0, lat=0.0, lon=120.0, magnitude=6.1, event_id="d"),
    ]


@pytest.fixture()
def catalog_gateway(recent_events) -> InMemoryCatalogGateway:
    return InMemoryCatalogGateway(recent_events)


@pytest.fixture()
def response_cache() -> TTLResponseCache:
    return TTLResponseCache(default_ttl_seconds=900, max_entries=100)
