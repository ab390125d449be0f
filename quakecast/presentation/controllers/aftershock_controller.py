"""
Presentation Layer - Aftershock Controller

Exposes the aftershock probability ring around a mainshock.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from quakecast.application.dtos.aftershock_dto import (
    AftershockQueryDTO,
    AftershockResponseDTO,
)
from quakecast.application.use_cases.aftershock_use_case import AftershockRingUseCase
from quakecast.domain.entities.errors import CatalogUnavailableError, InvalidQueryError
from quakecast.domain.services.validation import (
    parse_epoch_millis,
    parse_number,
    require_number,
    validate_ring_points,
)
from quakecast.main.container import AppContainer
from quakecast.presentation.dependencies import enforce_rate_limit, set_cache_headers

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Aftershocks"])


def build_aftershock_query(
    lat: Optional[str],
    lon: Optional[str],
    mag: Optional[str],
    time: Optional[str],
    m0: Optional[str] = None,
    horizon: Optional[str] = None,
    radius: Optional[str] = None,
    n_points: Optional[str] = None,
    event_id: Optional[str] = None,
) -> AftershockQueryDTO:
    """Parse raw query strings into an aftershock query."""
    return AftershockQueryDTO(
        lat=require_number("lat", lat),
        lon=require_number("lon", lon),
        magnitude=require_number("mag", mag),
        time=parse_epoch_millis("time", time),
        m0=parse_number("m0", m0, default=3.0),
        horizon_days=parse_number("horizon", horizon, default=3.0),
        radius_km=parse_number("radius", radius, default=150.0),
        n_points=validate_ring_points(parse_number("nPoints", n_points, default=64)),
        event_id=event_id or None,
    )


@router.get(
    "/aftershock",
    response_model=AftershockResponseDTO,
    summary="Aftershock probability ring",
    description="""
    Kernel-based probability of at least one event at or above `m0` within
    the horizon, at the mainshock epicenter and at `nPoints` points on a
    circle of `radius` km around it. `time` is the mainshock origin time in
    milliseconds since the Unix epoch.
    """,
    dependencies=[Depends(enforce_rate_limit)],
)
@inject
async def aftershock(
    response: Response,
    lat: Optional[str] = Query(default=None, description="Mainshock latitude"),
    lon: Optional[str] = Query(default=None, description="Mainshock longitude"),
    mag: Optional[str] = Query(default=None, description="Mainshock magnitude"),
    time: Optional[str] = Query(default=None, description="Origin time, epoch ms"),
    m0: Optional[str] = Query(default=None, description="Magnitude threshold"),
    horizon: Optional[str] = Query(default=None, description="Horizon in days"),
    radius: Optional[str] = Query(default=None, description="Ring radius in km"),
    n_points: Optional[str] = Query(
        default=None, alias="nPoints", description="Points on the ring"
    ),
    event_id: Optional[str] = Query(
        default=None, alias="eventId", description="Catalog event id"
    ),
    aftershock_use_case: AftershockRingUseCase = Depends(
        Provide[AppContainer.aftershock_use_case]
    ),
) -> AftershockResponseDTO:
    try:
        query = build_aftershock_query(
            lat, lon, mag, time, m0, horizon, radius, n_points, event_id
        )
        result = await aftershock_use_case.execute(query)
    except InvalidQueryError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except CatalogUnavailableError as exc:
        logger.error("aftershock.catalog_unavailable", error=exc.message)
        raise HTTPException(status_code=500, detail=exc.message)
    except Exception as exc:  # pragma: no cover
        logger.error(
            "aftershock.unexpected_error",
            event_id=event_id,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    set_cache_headers(response, result.cache_hit)
    return result.payload
