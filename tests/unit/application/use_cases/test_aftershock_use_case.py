from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import InMemoryCatalogGateway
from quakecast.application.dtos.aftershock_dto import AftershockQueryDTO
from quakecast.application.use_cases.aftershock_use_case import (
    AftershockRingUseCase,
    aftershock_cache_key,
)
from quakecast.domain.entities.errors import CatalogUnavailableError, InvalidQueryError


def _query(reference_time, **overrides) -> AftershockQueryDTO:
    values = dict(
        lat=0.1,
        lon=120.1,
        magnitude=6.2,
        time=reference_time - timedelta(hours=1),
        event_id="us6000abcd",
        n_points=12,
    )
    values.update(overrides)
    return AftershockQueryDTO(**values)


@pytest.mark.asyncio
async def test_aftershock_ring_response(
    catalog_gateway, response_cache, reference_time
) -> None:
    use_case = AftershockRingUseCase(catalog_gateway, response_cache)

    result = await use_case.execute(_query(reference_time), now=reference_time)
    response = result.payload

    assert result.cache_hit is False
    assert response.type == "aftershock"
    assert response.mainshock.event_id == "us6000abcd"
    assert response.parameters.radius_km == 150.0
    assert len(response.ring) == 12
    assert response.recent_events_count == 5
    assert response.center_probability > response.statistics.max_probability > 0
    assert response.statistics.min_probability <= response.statistics.mean_probability

    call = catalog_gateway.calls[0]
    assert call["end"] == reference_time - timedelta(hours=1)
    assert call["start"] == call["end"] - timedelta(days=90)
    assert call["min_magnitude"] == 2.5
    assert call["bbox"].to_list() == pytest.approx([115.1, -4.9, 125.1, 5.1])


@pytest.mark.asyncio
async def test_future_mainshock_time_is_capped_at_now(
    catalog_gateway, response_cache, reference_time
) -> None:
    use_case = AftershockRingUseCase(catalog_gateway, response_cache)
    query = _query(reference_time, time=reference_time + timedelta(days=2))

    await use_case.execute(query, now=reference_time)

    assert catalog_gateway.calls[0]["end"] == reference_time


@pytest.mark.asyncio
async def test_naive_mainshock_time_is_treated_as_utc(
    catalog_gateway, response_cache, reference_time
) -> None:
    use_case = AftershockRingUseCase(catalog_gateway, response_cache)
    naive = (reference_time - timedelta(hours=3)).replace(tzinfo=None)

    await use_case.execute(_query(reference_time, time=naive), now=reference_time)

    assert catalog_gateway.calls[0]["end"] == reference_time - timedelta(hours=3)


@pytest.mark.asyncio
async def test_repeated_query_hits_cache(
    catalog_gateway, response_cache, reference_time
) -> None:
    use_case = AftershockRingUseCase(catalog_gateway, response_cache)

    await use_case.execute(_query(reference_time), now=reference_time)
    second = await use_case.execute(_query(reference_time), now=reference_time)

    assert second.cache_hit is True
    assert len(catalog_gateway.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"lat": 91.0},
        {"lon": float("nan")},
        {"radius_km": 0.0},
        {"horizon_days": 45.0},
        {"n_points": 0},
    ],
)
async def test_invalid_queries_are_rejected(
    overrides, catalog_gateway, response_cache, reference_time
) -> None:
    use_case = AftershockRingUseCase(catalog_gateway, response_cache)
    with pytest.raises(InvalidQueryError):
        await use_case.execute(_query(reference_time, **overrides))
    assert catalog_gateway.calls == []


@pytest.mark.asyncio
async def test_catalog_failure_propagates(response_cache, reference_time) -> None:
    use_case = AftershockRingUseCase(InMemoryCatalogGateway(fail=True), response_cache)
    with pytest.raises(CatalogUnavailableError):
        await use_case.execute(_query(reference_time), now=reference_time)


def test_cache_key_without_event_id_depends_on_location() -> None:
    moment = datetime(2024, 6, 1, tzinfo=timezone.utc)
    first = AftershockQueryDTO(lat=1.0, lon=2.0, magnitude=6.0, time=moment)
    second = AftershockQueryDTO(lat=3.0, lon=2.0, magnitude=6.0, time=moment)

    assert aftershock_cache_key(first) != aftershock_cache_key(second)
    assert aftershock_cache_key(first) == "aftershock:1,2,1717200000:3:3:150:64"
