# anchorplan/core/placement.py
"""
Anchor distribution pipeline: display geometry -> scale -> demand -> strategy.
Every strategy has the signature place(zones, demand, constraints, rng) -> anchors
and is selected by name from STRATEGIES. Precondition failures never escape:
they produce an empty PlacementResult carrying an error key.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from anchorplan.core.config import DEFAULT_STRATEGY, SEED
from anchorplan.core.demand import compute_demand
from anchorplan.core.display import resolve_display_geometry
from anchorplan.core.error_codes import (
    CAPACITY_EXHAUSTED,
    NO_ZONES,
    UNKNOWN_STRATEGY,
    PreconditionError,
    user_message,
)
from anchorplan.core.geometry import clip_zone
from anchorplan.core.hex_grid import place_hex_grid
from anchorplan.core.sampling import place_rejection
from anchorplan.core.scale import meters_per_pixel, min_distance_display_px
from anchorplan.core.types import (
    Anchor,
    Demand,
    PlacementConstraints,
    PlacementRequest,
    PlacementResult,
)

logger = logging.getLogger(__name__)

PlacementStrategy = Callable[..., list[Anchor]]

STRATEGIES: dict[str, PlacementStrategy] = {
    "hex_grid": place_hex_grid,
    "rejection": place_rejection,
}


def get_strategy(name: str) -> PlacementStrategy:
    """Look up a strategy by name. Raises PreconditionError for unknown names."""
    try:
        return STRATEGIES[name]
    except KeyError:
        raise PreconditionError(UNKNOWN_STRATEGY, f"Unknown strategy {name!r}; choose from {sorted(STRATEGIES)}") from None


def requested_count(strategy: str, demand: Demand) -> int:
    """Anchors the strategy is sized for: per-zone sum for the grid, total otherwise."""
    if strategy == "hex_grid":
        return sum(demand.per_zone)
    return demand.total


def _empty_result(request: PlacementRequest, error_key: str, detail: str) -> PlacementResult:
    logger.warning("Distribution refused (%s): %s", error_key, detail)
    return PlacementResult(
        anchors=[],
        strategy=request.strategy,
        requested=0,
        error_key=error_key,
        warnings=[user_message(error_key)],
    )


def run_distribution(
    request: PlacementRequest,
    seed: int | None = SEED,
    rng: np.random.Generator | None = None,
) -> PlacementResult:
    """
    Run one full distribution. Anchors replace any previous set.
    rng overrides seed when both are given.
    """
    if not request.zones:
        return _empty_result(request, NO_ZONES, "no zones defined")
    try:
        name = request.strategy or DEFAULT_STRATEGY
        strategy = get_strategy(name)
        image_w, image_h = request.image_size
        container_w, container_h = request.container_size
        geometry = resolve_display_geometry(image_w, image_h, container_w, container_h)
        mpp = meters_per_pixel(request.project_area_m2, image_w, image_h)
        min_dist = min_distance_display_px(request.anchor_diameter_m, mpp, geometry)
        zones = [clip_zone(z) for z in request.zones]
        demand = compute_demand(request.project_area_m2, zones, request.additional_anchors)
    except PreconditionError as e:
        return _empty_result(request, e.error_key, str(e))

    constraints = PlacementConstraints(
        geometry=geometry,
        min_distance_px=min_dist,
        diameter_m=request.anchor_diameter_m,
        exclusion_zones=tuple(request.exclusion_zones),
    )
    rng = rng if rng is not None else np.random.default_rng(seed)
    anchors = strategy(zones, demand, constraints, rng)

    requested = requested_count(name, demand)
    warnings: list[str] = []
    if len(anchors) < requested:
        warnings.append(user_message(CAPACITY_EXHAUSTED))
        logger.info("Placed %d of %d anchors (%s)", len(anchors), requested, name)
    else:
        logger.info("Placed %d anchors (%s)", len(anchors), name)

    return PlacementResult(
        anchors=anchors,
        strategy=name,
        requested=requested,
        meters_per_pixel=mpp,
        min_distance_px=min_dist,
        geometry=geometry,
        warnings=warnings,
    )
