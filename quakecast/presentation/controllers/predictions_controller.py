"""
Presentation Layer - Predictions Controller

Exposes the calibrated nowcast grid for a bounding box.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from quakecast.application.dtos.prediction_dto import (
    NowcastResponseDTO,
    PredictionQueryDTO,
)
from quakecast.application.use_cases.nowcast_prediction_use_case import (
    NowcastPredictionUseCase,
)
from quakecast.domain.entities.errors import (
    CatalogUnavailableError,
    GridTooLargeError,
    InvalidQueryError,
    ModelArtifactFormatError,
    ModelArtifactNotFoundError,
)
from quakecast.domain.services.validation import parse_bbox, parse_number
from quakecast.main.container import AppContainer
from quakecast.presentation.dependencies import enforce_rate_limit, set_cache_headers

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Predictions"])


def build_prediction_query(
    bbox: Optional[str], cell_deg: Optional[str], horizon: Optional[str]
) -> PredictionQueryDTO:
    """Parse raw query strings; missing values fall back to the model defaults."""
    parsed_bbox = None
    if bbox is not None and bbox.strip():
        parsed_bbox = parse_bbox(bbox).to_list()
    return PredictionQueryDTO(
        bbox=parsed_bbox,
        cell_deg=parse_number("cellDeg", cell_deg),
        horizon_days=parse_number("horizon", horizon),
    )


@router.get(
    "/predict",
    response_model=NowcastResponseDTO,
    response_model_by_alias=True,
    summary="Nowcast probabilities for a grid",
    description="""
    Score a regular lat/lon grid over the bounding box with the trained model.
    Each cell carries the calibrated probability of at least one event at or
    above the label magnitude within the horizon. Cells at or below the
    minimum probability are omitted; `total_cells` counts all of them.
    """,
    dependencies=[Depends(enforce_rate_limit)],
)
@inject
async def predict(
    response: Response,
    bbox: Optional[str] = Query(
        default=None, description="minLon,minLat,maxLon,maxLat"
    ),
    cell_deg: Optional[str] = Query(
        default=None, alias="cellDeg", description="Cell size in degrees"
    ),
    horizon: Optional[str] = Query(default=None, description="Horizon in days"),
    prediction_use_case: NowcastPredictionUseCase = Depends(
        Provide[AppContainer.nowcast_prediction_use_case]
    ),
) -> NowcastResponseDTO:
    try:
        query = build_prediction_query(bbox, cell_deg, horizon)
        result = await prediction_use_case.execute(query)
    except GridTooLargeError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Grid too large",
                "message": exc.message,
                "estimated_cells": exc.estimated_cells,
                "max_cells": exc.max_cells,
                "suggested_cell_deg": exc.suggested_cell_deg,
            },
        )
    except InvalidQueryError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except (ModelArtifactNotFoundError, ModelArtifactFormatError) as exc:
        logger.error("prediction.model_unavailable", error=exc.message)
        raise HTTPException(status_code=503, detail="Model not available")
    except CatalogUnavailableError as exc:
        logger.error("prediction.catalog_unavailable", error=exc.message)
        raise HTTPException(status_code=500, detail=exc.message)
    except Exception as exc:  # pragma: no cover
        logger.error(
            "prediction.unexpected_error",
            bbox=bbox,
            error=str(exc),
            exc_info=exc,
        )
        raise HTTPException(status_code=500, detail="Internal server error")

    set_cache_headers(response, result.cache_hit)
    return result.payload
