from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from quakecast.domain.entities.errors import CatalogUnavailableError
from quakecast.domain.entities.grid import BoundingBox
from quakecast.infrastructure.gateways.usgs_catalog_gateway import (
    USGSCatalogGateway,
    parse_geojson,
)

START = datetime(2024, 5, 1, tzinfo=timezone.utc)
BBOX = BoundingBox(95.0, -12.0, 141.0, 7.0)


def _feature(event_id, time_ms, lon, lat, mag, depth=10.0) -> dict:
    return {
        "id": event_id,
        "properties": {"time": time_ms, "mag": mag},
        "geometry": {"coordinates": [lon, lat, depth]},
    }


PAYLOAD = {
    "features": [
        _feature("late", 1717200000000, 120.0, 0.5, 4.7),
        _feature("early", 1714521600000, 121.0, -1.0, 5.1),
        _feature("no-mag", 1717200000000, 120.0, 0.5, None),
        _feature("bad-lat", 1717200000000, 120.0, "NaN", 4.0),
        {"id": "no-geometry", "properties": {"time": 1717200000000, "mag": 4.0}},
    ]
}


class _StubResponse:
    def __init__(self, status_code: int, json_data=None, invalid_json=False):
        self.status_code = status_code
        self._json = json_data or {}
        self._invalid_json = invalid_json
        self.text = "error"

    def json(self) -> dict:
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://usgs")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.requests = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, params=None):
        self.requests.append((url, params))
        if self._error is not None:
            raise self._error
        return self._response


def _install(monkeypatch, client: _StubAsyncClient) -> _StubAsyncClient:
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)
    return client


def test_parse_geojson_drops_incomplete_features_and_sorts() -> None:
    events = parse_geojson(PAYLOAD)

    assert [event.event_id for event in events] == ["early", "late"]
    assert events[0].time == datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert events[0].lon == 121.0
    assert events[0].depth_km == 10.0


def test_parse_geojson_handles_empty_payload() -> None:
    assert parse_geojson({}) == []


@pytest.mark.asyncio
async def test_fetch_events_builds_fdsn_query(monkeypatch) -> None:
    client = _install(monkeypatch, _StubAsyncClient(_StubResponse(200, PAYLOAD)))
    gateway = USGSCatalogGateway("https://usgs.example/fdsnws/event/1/", limit=500)

    events = await gateway.fetch_events(START, None, 3.0, BBOX)

    assert len(events) == 2
    url, params = client.requests[0]
    assert url == "https://usgs.example/fdsnws/event/1/query"
    assert params["format"] == "geojson"
    assert params["orderby"] == "time-asc"
    assert params["starttime"] == "2024-05-01T00:00:00"
    assert params["minmagnitude"] == "3"
    assert params["minlongitude"] == "95"
    assert params["maxlatitude"] == "7"
    assert params["limit"] == "500"
    assert "endtime" not in params


@pytest.mark.asyncio
async def test_fetch_events_includes_end_time(monkeypatch) -> None:
    client = _install(monkeypatch, _StubAsyncClient(_StubResponse(200, PAYLOAD)))
    gateway = USGSCatalogGateway()

    await gateway.fetch_events(
        START, datetime(2024, 6, 1, 12, 30, tzinfo=timezone.utc), 2.5, BBOX
    )

    _, params = client.requests[0]
    assert params["endtime"] == "2024-06-01T12:30:00"
    assert params["minmagnitude"] == "2.5"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "client",
    [
        _StubAsyncClient(_StubResponse(503)),
        _StubAsyncClient(error=httpx.ConnectError("boom")),
        _StubAsyncClient(_StubResponse(200, invalid_json=True)),
    ],
)
async def test_fetch_failures_raise_catalog_unavailable(monkeypatch, client) -> None:
    _install(monkeypatch, client)
    gateway = USGSCatalogGateway()

    with pytest.raises(CatalogUnavailableError):
        await gateway.fetch_events(START, None, 3.0, BBOX)


@pytest.mark.asyncio
async def test_http_error_reports_status(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(429)))
    with pytest.raises(CatalogUnavailableError) as excinfo:
        await USGSCatalogGateway().fetch_events(START, None, 3.0, BBOX)
    assert excinfo.value.message == "USGS API error: 429"


@pytest.mark.asyncio
async def test_ping(monkeypatch) -> None:
    client = _install(monkeypatch, _StubAsyncClient(_StubResponse(200)))
    assert await USGSCatalogGateway("https://usgs").ping() is True
    assert client.requests[0][0] == "https://usgs/version"

    _install(monkeypatch, _StubAsyncClient(error=httpx.ConnectError("down")))
    assert await USGSCatalogGateway().ping() is False
