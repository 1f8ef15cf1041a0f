# anchorplan/core/hex_grid.py
"""
Strategy B: per-zone hexagonal grid with jitter.
Each zone gets a brick-offset grid sized to its demand; every cell is jittered,
clamped into the zone and kept only if it clears every anchor accepted so far,
including anchors from earlier zones. Rejected cells are not retried.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from anchorplan.core.config import JITTER_FRACTION
from anchorplan.core.geometry import (
    clamp,
    exclusion_geometry,
    is_excluded,
    is_separated,
    zone_pixel_rect,
)
from anchorplan.core.types import Anchor, Demand, PlacementConstraints, Zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    """Nominal grid position relative to the zone origin (px). row and col are 1-based."""
    row: int
    col: int
    x: float
    y: float


@dataclass(frozen=True)
class HexGrid:
    rows: int
    cols: int
    spacing_x: float
    spacing_y: float
    cells: tuple[GridCell, ...]


def grid_dimensions(n: int, width_px: float, height_px: float) -> tuple[int, int]:
    """
    rows = floor(sqrt(n / aspect)), at least 1; cols = ceil(n / rows).
    Returns (0, 0) when there is nothing to place.
    """
    if n <= 0 or width_px <= 0 or height_px <= 0:
        return (0, 0)
    aspect = width_px / height_px
    rows = max(1, math.floor(math.sqrt(n / aspect)))
    cols = math.ceil(n / rows)
    return (rows, cols)


def grid_spacing(width_px: float, height_px: float, rows: int, cols: int) -> tuple[float, float]:
    return (width_px / (cols + 1), height_px / (rows + 1))


def build_hex_grid(n: int, width_px: float, height_px: float) -> HexGrid:
    """
    Nominal grid for n anchors in a width x height zone.
    Odd rows carry cols cells; even rows carry cols - 1 cells shifted by half a spacing.
    The cell count can differ from n in either direction.
    """
    rows, cols = grid_dimensions(n, width_px, height_px)
    if rows == 0:
        return HexGrid(rows=0, cols=0, spacing_x=0.0, spacing_y=0.0, cells=())
    spacing_x, spacing_y = grid_spacing(width_px, height_px, rows, cols)
    cells: list[GridCell] = []
    for row in range(1, rows + 1):
        shifted = row % 2 == 0
        n_cols = cols - 1 if shifted else cols
        offset = spacing_x / 2.0 if shifted else 0.0
        for col in range(1, n_cols + 1):
            cells.append(GridCell(row=row, col=col, x=col * spacing_x + offset, y=row * spacing_y))
    return HexGrid(rows=rows, cols=cols, spacing_x=spacing_x, spacing_y=spacing_y, cells=tuple(cells))


def jitter(spacing: float, rng: np.random.Generator, fraction: float = JITTER_FRACTION) -> float:
    """Uniform offset in [-spacing * fraction / 2, +spacing * fraction / 2)."""
    return (float(rng.random()) - 0.5) * spacing * fraction


def place_hex_grid(
    zones: Sequence[Zone],
    demand: Demand,
    constraints: PlacementConstraints,
    rng: np.random.Generator | None = None,
) -> list[Anchor]:
    """
    Place anchors in each zone on a jittered hex grid sized for demand.per_zone[i].
    Every cell that clears exclusions and all anchors placed so far is kept, so a
    zone can end up with more or fewer anchors than its share.
    """
    rng = rng if rng is not None else np.random.default_rng()
    geometry = constraints.geometry
    excluded = exclusion_geometry(constraints.exclusion_zones, geometry)

    anchors: list[Anchor] = []
    accepted: list[tuple[float, float]] = []
    for zone, n in zip(zones, demand.per_zone):
        x0, y0, w, h = zone_pixel_rect(zone, geometry)
        grid = build_hex_grid(n, w, h)
        if not grid.cells:
            continue
        placed_in_zone = 0
        for cell in grid.cells:
            x = clamp(x0 + cell.x + jitter(grid.spacing_x, rng), x0, x0 + w)
            y = clamp(y0 + cell.y + jitter(grid.spacing_y, rng), y0, y0 + h)
            if is_excluded(x, y, excluded):
                continue
            if not is_separated(x, y, accepted, constraints.min_distance_px):
                continue
            accepted.append((x, y))
            x_pct, y_pct = geometry.display_to_percent(x, y)
            anchors.append(
                Anchor(id=f"anchor-{len(anchors)}", x=x_pct, y=y_pct, diameter=constraints.diameter_m)
            )
            placed_in_zone += 1
        logger.debug(
            "Hex grid zone %s: %d anchors from %d cells, share %d (%d rows x %d cols)",
            zone.name or zone.id or "?", placed_in_zone, len(grid.cells), n, grid.rows, grid.cols,
        )
    return anchors
