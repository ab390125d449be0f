"""
Grid Engine

Builds the lat/lon lattice for a bounding box and evaluates the intensity
kernel at each cell center. Grid evaluation costs O(cells x events), so the
request path must reject oversized grids *before* doing any kernel work and
tell the caller which cell size would fit.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from quakecast.domain.entities.errors import GridTooLargeError
from quakecast.domain.entities.event import EventCatalog
from quakecast.domain.entities.grid import BoundingBox, Grid, GridCell
from quakecast.domain.entities.kernel import KernelParams
from quakecast.domain.services.intensity import intensity, probability_at_least_one

DEFAULT_MAX_CELLS = 1000


def estimate_cells(bbox: BoundingBox, cell_deg: float) -> int:
    return math.ceil(bbox.area_deg2 / (cell_deg * cell_deg))


def suggest_cell_deg(bbox: BoundingBox, max_cells: int) -> float:
    """Smallest cell size (rounded up to 0.1 deg) that fits the budget."""
    return math.ceil(math.sqrt(bbox.area_deg2 / max_cells) * 10) / 10


def ensure_within_budget(
    bbox: BoundingBox, cell_deg: float, max_cells: int = DEFAULT_MAX_CELLS
) -> int:
    """
    Return the estimated cell count, or raise if it exceeds ``max_cells``.

    Raises:
        GridTooLargeError: carrying the estimate and a suggested ``cell_deg``.
    """
    estimated = estimate_cells(bbox, cell_deg)
    if estimated > max_cells:
        raise GridTooLargeError(
            estimated_cells=estimated,
            max_cells=max_cells,
            suggested_cell_deg=suggest_cell_deg(bbox, max_cells),
        )
    return estimated


def build_grid(bbox: BoundingBox, cell_deg: float) -> Grid:
    rows = max(1, math.ceil(bbox.height_deg / cell_deg))
    cols = max(1, math.ceil(bbox.width_deg / cell_deg))
    cells = [
        GridCell(
            lat=bbox.min_lat + (i + 0.5) * cell_deg,
            lon=bbox.min_lon + (j + 0.5) * cell_deg,
        )
        for i in range(rows)
        for j in range(cols)
    ]
    return Grid(bbox=bbox, cell_deg=cell_deg, rows=rows, cols=cols, cells=cells)


def evaluate_grid(
    bbox: BoundingBox,
    cell_deg: float,
    catalog: EventCatalog,
    t0: datetime,
    horizon_days: float,
    params: Optional[KernelParams] = None,
    max_cells: Optional[int] = DEFAULT_MAX_CELLS,
) -> Grid:
    """
    Build the grid and fill ``lambda_``/``probability`` for every cell.

    ``max_cells=None`` disables the budget (offline use only).
    """
    if max_cells is not None:
        ensure_within_budget(bbox, cell_deg, max_cells)

    grid = build_grid(bbox, cell_deg)
    past = catalog.before(t0)
    for cell in grid.cells:
        cell.lambda_ = intensity(past, t0, cell.lat, cell.lon, params)
        cell.probability = probability_at_least_one(cell.lambda_, horizon_days)
    return grid
