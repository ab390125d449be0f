"""
Infrastructure Gateway - USGS Catalog Implementation

This module implements the catalog gateway on top of the USGS FDSN event
web service, requesting GeoJSON and converting features into domain events.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import structlog

from quakecast.domain.entities.errors import CatalogUnavailableError
from quakecast.domain.entities.event import Event
from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://earthquake.usgs.gov/fdsnws/event/1"


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S")


def _finite(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_geojson(payload: Dict[str, Any]) -> List[Event]:
    """
    Convert a USGS GeoJSON FeatureCollection into events.

    Features with a missing or non-finite time, latitude, longitude or
    magnitude are dropped.
    """
    events: List[Event] = []
    for feature in payload.get("features") or []:
        properties = feature.get("properties") or {}
        coordinates = (feature.get("geometry") or {}).get("coordinates") or []
        if len(coordinates) < 2:
            continue

        time_ms = _finite(properties.get("time"))
        lon = _finite(coordinates[0])
        lat = _finite(coordinates[1])
        magnitude = _finite(properties.get("mag"))
        if time_ms is None or lat is None or lon is None or magnitude is None:
            continue

        events.append(
            Event(
                time=datetime.fromtimestamp(time_ms / 1000.0, tz=timezone.utc),
                lat=lat,
                lon=lon,
                magnitude=magnitude,
                event_id=feature.get("id"),
                depth_km=_finite(coordinates[2]) if len(coordinates) > 2 else None,
            )
        )
    events.sort(key=lambda event: event.time)
    return events


class USGSCatalogGateway(ICatalogGateway):
    """Implementation of the catalog gateway using the USGS FDSN event API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = "quakecast",
        limit: Optional[int] = None,
    ):
        """
        Initialize the USGS gateway.

        Args:
            base_url: FDSN event service root (without the ``/query`` suffix)
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            limit: Optional cap on the number of events per query
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self.limit = limit

    async def fetch_events(
        self,
        start: datetime,
        end: Optional[datetime],
        min_magnitude: float,
        bbox: BoundingBox,
    ) -> List[Event]:
        url = f"{self.base_url}/query"
        params: Dict[str, str] = {
            "format": "geojson",
            "orderby": "time-asc",
            "starttime": _format_time(start),
            "minmagnitude": f"{min_magnitude:g}",
            "minlatitude": f"{bbox.min_lat:g}",
            "maxlatitude": f"{bbox.max_lat:g}",
            "minlongitude": f"{bbox.min_lon:g}",
            "maxlongitude": f"{bbox.max_lon:g}",
        }
        if end is not None:
            params["endtime"] = _format_time(end)
        if self.limit:
            params["limit"] = str(self.limit)

        logger.info("catalog.fetch.start", url=url, params=params)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers={"User-Agent": self.user_agent}
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "catalog.fetch.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise CatalogUnavailableError(
                f"USGS API error: {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e

        except httpx.RequestError as e:
            logger.error("catalog.fetch.request_error", error=str(e), url=url)
            raise CatalogUnavailableError(
                f"USGS request failed: {str(e)}", details={"url": url}
            ) from e

        except ValueError as e:
            logger.error("catalog.fetch.invalid_payload", error=str(e), url=url)
            raise CatalogUnavailableError(
                "USGS returned a response that is not valid JSON",
                details={"url": url},
            ) from e

        events = parse_geojson(payload)
        logger.info("catalog.fetch.completed", events=len(events))
        return events

    async def ping(self) -> bool:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers={"User-Agent": self.user_agent}
            ) as client:
                response = await client.get(f"{self.base_url}/version")
            return response.status_code < 400
        except httpx.RequestError as e:
            logger.warning("catalog.ping.failed", error=str(e))
            return False
