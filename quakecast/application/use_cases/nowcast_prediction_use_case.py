"""
Application Use Case - Nowcast Prediction

Scores a lat/lon grid with the trained model. Each request runs:
  * Validation of explicit parameters, then defaults from the loaded artifact
  * The grid budget check, before any catalog or kernel work
  * Response cache lookup
  * Recent catalog fetch around the padded bounding box
  * Feature extraction (the kernel rate is the `etas` feature), classification
    and calibration, off the event loop
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import numpy as np
import structlog

from quakecast.application.dtos.prediction_dto import (
    CellDTO,
    NowcastResponseDTO,
    PredictionQueryDTO,
)
from quakecast.application.models.query_result import CachedQueryResult
from quakecast.domain.entities.event import EventCatalog
from quakecast.domain.entities.features import FeatureSettings
from quakecast.domain.entities.grid import BoundingBox, GridCell
from quakecast.domain.entities.model import ModelArtifact
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway
from quakecast.domain.ports.model_artifact_provider import IModelArtifactProvider
from quakecast.domain.ports.response_cache import IResponseCache
from quakecast.domain.services.calibrator import apply_calibration
from quakecast.domain.services.classifier import predict_probability
from quakecast.domain.services.feature_extractor import extract_features
from quakecast.domain.services.grid_engine import (
    DEFAULT_MAX_CELLS,
    build_grid,
    ensure_within_budget,
)
from quakecast.domain.services.validation import (
    validate_bbox,
    validate_cell_deg,
    validate_horizon,
)

logger = structlog.get_logger(__name__)


def prediction_cache_key(bbox: BoundingBox, cell_deg: float, horizon: float) -> str:
    coords = ",".join(f"{value:g}" for value in bbox.to_list())
    return f"predict:{coords}:{cell_deg:g}:{horizon:g}"


class NowcastPredictionUseCase:
    """Use case producing calibrated nowcast probabilities for a grid."""

    def __init__(
        self,
        artifact_provider: IModelArtifactProvider,
        catalog_gateway: ICatalogGateway,
        response_cache: IResponseCache,
        max_cells: int = DEFAULT_MAX_CELLS,
        min_probability: float = 1e-3,
        lookback_days: float = 90.0,
        bbox_padding_deg: float = 5.0,
        cache_ttl_seconds: float = 900.0,
    ):
        self.artifact_provider = artifact_provider
        self.catalog_gateway = catalog_gateway
        self.response_cache = response_cache
        self.max_cells = max_cells
        self.min_probability = min_probability
        self.lookback_days = lookback_days
        self.bbox_padding_deg = bbox_padding_deg
        self.cache_ttl_seconds = cache_ttl_seconds

    async def execute(
        self, query: PredictionQueryDTO, now: Optional[datetime] = None
    ) -> CachedQueryResult[NowcastResponseDTO]:
        """
        Score the requested grid.

        Raises:
            InvalidQueryError: When a query parameter is non-finite or out of range
            GridTooLargeError: When the grid exceeds the cell budget
            CatalogUnavailableError: When recent events cannot be fetched
            ModelArtifactNotFoundError: When no trained model is available
        """
        # Explicit parameters are rejected before the model is needed.
        bbox = validate_bbox(query.bbox) if query.bbox is not None else None
        cell_deg = (
            validate_cell_deg(query.cell_deg) if query.cell_deg is not None else None
        )
        horizon = (
            validate_horizon(query.horizon_days)
            if query.horizon_days is not None
            else None
        )
        if bbox is not None and cell_deg is not None:
            ensure_within_budget(bbox, cell_deg, self.max_cells)

        artifact = await self.artifact_provider.get()
        defaults = artifact.config
        if bbox is None:
            bbox = validate_bbox(defaults.bbox.to_list())
        if cell_deg is None:
            cell_deg = validate_cell_deg(defaults.cell_deg)
        if horizon is None:
            horizon = validate_horizon(defaults.horizon_days)
        estimated_cells = ensure_within_budget(bbox, cell_deg, self.max_cells)

        cache_key = prediction_cache_key(bbox, cell_deg, horizon)
        cached = self.response_cache.get(cache_key)
        if cached is not None:
            logger.debug("prediction.cache_hit", key=cache_key)
            return CachedQueryResult(payload=cached, cache_hit=True)

        logger.info(
            "prediction.start",
            bbox=bbox.to_list(),
            cell_deg=cell_deg,
            horizon_days=horizon,
            estimated_cells=estimated_cells,
        )

        now = now or datetime.now(timezone.utc)
        events = await self.catalog_gateway.fetch_events(
            start=now - timedelta(days=self.lookback_days),
            end=None,
            min_magnitude=max(defaults.completeness_magnitude - 1.0, 2.5),
            bbox=bbox.padded(self.bbox_padding_deg),
        )
        catalog = EventCatalog.from_events(events)

        cells = await asyncio.to_thread(
            self._score_cells, artifact, bbox, cell_deg, catalog, now
        )
        probabilities = np.array([cell.probability for cell in cells])

        response = NowcastResponseDTO(
            generated=now,
            model_version=artifact.version,
            model_trained=artifact.trained_at,
            horizon_days=horizon,
            label_magnitude=defaults.label_magnitude,
            bbox=bbox.to_list(),
            cell_deg=cell_deg,
            total_cells=len(cells),
            cells=[
                CellDTO.from_domain(cell)
                for cell in cells
                if cell.probability > self.min_probability
            ],
            max_probability=float(probabilities.max()) if cells else 0.0,
            mean_probability=float(probabilities.mean()) if cells else 0.0,
        )
        self.response_cache.set(cache_key, response, self.cache_ttl_seconds)

        logger.info(
            "prediction.completed",
            events=len(catalog),
            total_cells=response.total_cells,
            reported_cells=len(response.cells),
            max_probability=response.max_probability,
        )
        return CachedQueryResult(payload=response, cache_hit=False)

    def _score_cells(
        self,
        artifact: ModelArtifact,
        bbox: BoundingBox,
        cell_deg: float,
        catalog: EventCatalog,
        now: datetime,
    ) -> List[GridCell]:
        # Budget was already enforced against the configured maximum.
        grid = build_grid(bbox, cell_deg)
        settings = FeatureSettings(
            label_magnitude=artifact.config.label_magnitude,
            radius_km=artifact.config.rate_radius_km,
        )
        for cell in grid.cells:
            cell.features = extract_features(
                cell.lat, cell.lon, now, catalog, settings, artifact.kernel_params
            )
            cell.lambda_ = cell.features["etas"]
            raw = predict_probability(cell.features, artifact.model)
            cell.probability = float(apply_calibration(raw, artifact.calibration))
        return grid.cells
