"""
Application Use Case - Aftershock Ring

Computes the kernel-based aftershock probability at a mainshock and on a
ring around it, from the mainshock plus the recent catalog near it.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from quakecast.application.dtos.aftershock_dto import (
    AftershockQueryDTO,
    AftershockResponseDTO,
)
from quakecast.application.models.query_result import CachedQueryResult
from quakecast.domain.entities.aftershock import RingParameters
from quakecast.domain.entities.event import Event, EventCatalog
from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.entities.kernel import DEFAULT_KERNEL_PARAMS, KernelParams
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway
from quakecast.domain.ports.response_cache import IResponseCache
from quakecast.domain.services.aftershock_ring import compute_aftershock_ring
from quakecast.domain.services.validation import (
    require_finite,
    validate_horizon,
    validate_latitude,
    validate_longitude,
    validate_ring_points,
    validate_ring_radius,
)

logger = structlog.get_logger(__name__)

SEARCH_HALF_WIDTH_DEG = 5.0


def aftershock_cache_key(query: AftershockQueryDTO) -> str:
    # Queries without a catalog id are keyed by their location and time.
    source = query.event_id or (
        f"{query.lat:g},{query.lon:g},{query.time.timestamp():.0f}"
    )
    return (
        f"aftershock:{source}:{query.horizon_days:g}:{query.m0:g}:"
        f"{query.radius_km:g}:{query.n_points}"
    )


class AftershockRingUseCase:
    """Use case for the aftershock probability ring around a mainshock."""

    def __init__(
        self,
        catalog_gateway: ICatalogGateway,
        response_cache: IResponseCache,
        kernel_params: Optional[KernelParams] = None,
        lookback_days: float = 90.0,
        cache_ttl_seconds: float = 900.0,
    ):
        self.catalog_gateway = catalog_gateway
        self.response_cache = response_cache
        self.kernel_params = kernel_params or DEFAULT_KERNEL_PARAMS
        self.lookback_days = lookback_days
        self.cache_ttl_seconds = cache_ttl_seconds

    async def execute(
        self, query: AftershockQueryDTO, now: Optional[datetime] = None
    ) -> CachedQueryResult[AftershockResponseDTO]:
        """
        Raises:
            InvalidQueryError: When a query parameter is non-finite or out of range
            CatalogUnavailableError: When recent events cannot be fetched
        """
        self._validate(query)

        cache_key = aftershock_cache_key(query)
        cached = self.response_cache.get(cache_key)
        if cached is not None:
            logger.debug("aftershock.cache_hit", key=cache_key)
            return CachedQueryResult(payload=cached, cache_hit=True)

        logger.info(
            "aftershock.start",
            event_id=query.event_id,
            lat=query.lat,
            lon=query.lon,
            magnitude=query.magnitude,
            radius_km=query.radius_km,
        )

        now = now or datetime.now(timezone.utc)
        shock_time = query.time
        if shock_time.tzinfo is None:
            shock_time = shock_time.replace(tzinfo=timezone.utc)
        reference = min(shock_time, now)
        point = BoundingBox(query.lon, query.lat, query.lon, query.lat)
        events = await self.catalog_gateway.fetch_events(
            start=reference - timedelta(days=self.lookback_days),
            end=reference,
            min_magnitude=max(query.m0 - 1.0, 2.5),
            bbox=point.padded(SEARCH_HALF_WIDTH_DEG),
        )

        mainshock = Event(
            time=shock_time,
            lat=query.lat,
            lon=query.lon,
            magnitude=query.magnitude,
            event_id=query.event_id,
        )
        ring = compute_aftershock_ring(
            mainshock,
            EventCatalog.from_events(events),
            RingParameters(
                m0=query.m0,
                horizon_days=query.horizon_days,
                radius_km=query.radius_km,
                n_points=query.n_points,
                lookback_days=self.lookback_days,
            ),
            self.kernel_params,
        )

        response = AftershockResponseDTO.from_domain(query, ring, generated=now)
        self.response_cache.set(cache_key, response, self.cache_ttl_seconds)

        logger.info(
            "aftershock.completed",
            events_used=ring.events_used,
            center_probability=ring.center.probability,
            max_ring_probability=ring.statistics.max_probability,
        )
        return CachedQueryResult(payload=response, cache_hit=False)

    def _validate(self, query: AftershockQueryDTO) -> None:
        validate_latitude(query.lat)
        validate_longitude(query.lon)
        require_finite("mag", query.magnitude)
        require_finite("m0", query.m0)
        validate_horizon(query.horizon_days)
        validate_ring_radius(query.radius_km)
        validate_ring_points(query.n_points)
