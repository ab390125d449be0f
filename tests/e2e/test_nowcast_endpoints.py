from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from conftest import FakeClock, InMemoryArtifactsRepository, InMemoryCatalogGateway
from quakecast.infrastructure.services.token_bucket_rate_limiter import (
    TokenBucketRateLimiter,
)
from quakecast.main.app import create_app
from quakecast.main.container import get_container

MAINSHOCK_MS = 1717200000000


@pytest.fixture()
def catalog(recent_events) -> InMemoryCatalogGateway:
    return InMemoryCatalogGateway(recent_events)


@pytest.fixture()
def client(sample_artifact, catalog):
    app = create_app()
    container = get_container()
    container.catalog_gateway.override(providers.Object(catalog))
    container.model_artifacts_repository.override(
        providers.Object(InMemoryArtifactsRepository(sample_artifact))
    )

    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "up"
    assert {dep["name"] for dep in body["dependencies"]} == {
        "model_artifact",
        "usgs_catalog",
    }


def test_health_endpoint_down_when_catalog_unreachable(client, catalog):
    catalog.reachable = False
    response = client.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "down"


def test_info_reports_loaded_model(client):
    response = client.get("/info")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "QuakeCast"
    assert body["model"]["label_magnitude"] == 4.5
    assert body["model"]["horizon_days"] == 7.0


def test_predict_uses_model_defaults_and_caches(client):
    first = client.get("/predict")
    assert first.status_code == 200
    assert first.headers["X-Cache"] == "MISS"
    assert first.headers["Cache-Control"] == "public, max-age=900"

    body = first.json()
    assert body["type"] == "nowcast"
    assert body["total_cells"] == 16
    assert body["bbox"] == [118.0, -2.0, 122.0, 2.0]
    for cell in body["cells"]:
        assert "lambda" in cell
        assert 0.0 <= cell["probability"] <= 1.0
    assert "EXPERIMENTAL" in body["disclaimer"]

    second = client.get("/predict")
    assert second.headers["X-Cache"] == "HIT"


def test_predict_rejects_bad_input_with_400(client):
    assert client.get("/predict", params={"cellDeg": "abc"}).status_code == 400
    assert client.get("/predict", params={"bbox": "1,2,3"}).status_code == 400

    too_large = client.get("/predict", params={"bbox": "0,0,90,45", "cellDeg": "0.1"})
    assert too_large.status_code == 400
    assert too_large.json()["detail"]["error"] == "Grid too large"


def test_predict_without_model_is_503(catalog):
    app = create_app()
    container = get_container()
    container.catalog_gateway.override(providers.Object(catalog))
    container.model_artifacts_repository.override(
        providers.Object(InMemoryArtifactsRepository())
    )

    with TestClient(app) as test_client:
        response = test_client.get("/predict")

    assert response.status_code == 503
    assert response.json()["detail"] == "Model not available"


def test_aftershock_ring(client):
    response = client.get(
        "/aftershock",
        params={
            "lat": 0.0,
            "lon": 120.0,
            "mag": 6.5,
            "time": MAINSHOCK_MS,
            "nPoints": 16,
            "eventId": "us6000test",
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["type"] == "aftershock"
    assert len(body["ring"]) == 16
    assert body["mainshock"]["event_id"] == "us6000test"
    assert body["center_probability"] >= body["statistics"]["max_probability"]


def test_aftershock_missing_parameters_is_400(client):
    response = client.get("/aftershock", params={"lat": 0.0, "lon": 120.0})
    assert response.status_code == 400


def test_rate_limit_returns_429(client):
    get_container().rate_limiter.override(
        providers.Object(
            TokenBucketRateLimiter(capacity=2, window_seconds=8, clock=FakeClock())
        )
    )

    headers = {"X-Forwarded-For": "198.51.100.7"}
    assert client.get("/predict", headers=headers).status_code == 200
    assert client.get("/predict", headers=headers).status_code == 200

    rejected = client.get("/predict", headers=headers)
    assert rejected.status_code == 429
    assert rejected.headers["Retry-After"] == "4"

    other = client.get("/predict", headers={"X-Forwarded-For": "203.0.113.9"})
    assert other.status_code == 200
