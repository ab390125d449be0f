"""
Domain Gateway - Earthquake Catalog

This module defines the gateway interface for fetching historical
earthquake events from an external catalog service.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from quakecast.domain.entities.event import Event
from quakecast.domain.entities.grid import BoundingBox


class ICatalogGateway(ABC):
    """Interface for earthquake catalog gateways."""

    @abstractmethod
    async def fetch_events(
        self,
        start: datetime,
        end: Optional[datetime],
        min_magnitude: float,
        bbox: BoundingBox,
    ) -> List[Event]:
        """
        Fetch catalog events inside a region and time range.

        Args:
            start: Inclusive start of the time range
            end: End of the time range, or None for "up to now"
            min_magnitude: Minimum magnitude to return
            bbox: Region to query

        Returns:
            Events sorted by time ascending

        Raises:
            CatalogUnavailableError: When the catalog cannot be fetched.
                An upstream failure is never reported as an empty list.
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the catalog service is reachable."""
        pass
