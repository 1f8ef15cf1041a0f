# anchorplan/core/sampling.py
"""
Strategy A: rejection sampling over a global zone pool.
Pick a random zone, sample a uniform point in it, keep it if it is inside the
zone, outside exclusions and far enough from every accepted anchor.
Bounded by an explicit attempt budget; running out is a degraded result, not an error.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from anchorplan.core.config import ATTEMPTS_PER_ANCHOR
from anchorplan.core.geometry import (
    exclusion_geometry,
    is_excluded,
    is_separated,
    zone_contains_percent,
    zone_pixel_rect,
)
from anchorplan.core.types import Anchor, Demand, PlacementConstraints, Zone

logger = logging.getLogger(__name__)


def attempt_budget(required: int, attempts_per_anchor: int = ATTEMPTS_PER_ANCHOR) -> int:
    return max(0, required) * attempts_per_anchor


def place_rejection(
    zones: Sequence[Zone],
    demand: Demand,
    constraints: PlacementConstraints,
    rng: np.random.Generator | None = None,
    max_attempts: int | None = None,
) -> list[Anchor]:
    """
    Place up to demand.total anchors by rejection sampling.
    Returns the accepted anchors; may be fewer than requested.
    """
    rng = rng if rng is not None else np.random.default_rng()
    pool = [z for z in zones if z.width > 0 and z.height > 0]
    required = demand.total
    if not pool or required <= 0:
        return []

    geometry = constraints.geometry
    excluded = exclusion_geometry(constraints.exclusion_zones, geometry)
    budget = attempt_budget(required) if max_attempts is None else max_attempts

    anchors: list[Anchor] = []
    accepted: list[tuple[float, float]] = []
    attempts = 0
    while len(anchors) < required and attempts < budget:
        attempts += 1
        zone = pool[int(rng.integers(len(pool)))]
        x0, y0, w, h = zone_pixel_rect(zone, geometry)
        x = x0 + float(rng.random()) * w
        y = y0 + float(rng.random()) * h
        x_pct, y_pct = geometry.display_to_percent(x, y)
        if not zone_contains_percent(zone, x_pct, y_pct):
            continue
        if is_excluded(x, y, excluded):
            continue
        if not is_separated(x, y, accepted, constraints.min_distance_px):
            continue
        accepted.append((x, y))
        anchors.append(
            Anchor(id=f"anchor-{len(anchors)}", x=x_pct, y=y_pct, diameter=constraints.diameter_m)
        )

    logger.debug("Rejection sampling: %d/%d anchors after %d attempts", len(anchors), required, attempts)
    return anchors
