# anchorplan/core/demand.py
"""
Demand calculator: how many anchors a project needs, overall and per zone.
Per-zone shares are weighted by percent-space zone area, a proxy for m² that
holds because every zone lives on the same image.
"""

from __future__ import annotations

import math
from typing import Sequence

from anchorplan.core.config import ADDITIONAL_ANCHORS_STEP, AREA_PER_ANCHOR_M2
from anchorplan.core.error_codes import (
    INVALID_ADDITIONAL_ANCHORS,
    INVALID_PROJECT_AREA,
    PreconditionError,
)
from anchorplan.core.types import Demand, Zone


def global_demand(project_area_m2: float, area_per_anchor_m2: float = AREA_PER_ANCHOR_M2) -> int:
    """One anchor per area_per_anchor_m2, rounded up."""
    if not (math.isfinite(project_area_m2) and project_area_m2 > 0):
        raise PreconditionError(INVALID_PROJECT_AREA, f"Project area {project_area_m2}")
    return math.ceil(project_area_m2 / area_per_anchor_m2)


def total_demand(project_area_m2: float, additional_anchors: int = 0) -> int:
    """Global demand plus manually requested additional anchors."""
    if not (math.isfinite(additional_anchors) and additional_anchors >= 0):
        raise PreconditionError(INVALID_ADDITIONAL_ANCHORS, f"Additional anchors {additional_anchors}")
    return global_demand(project_area_m2) + int(additional_anchors)


def per_zone_demand(zones: Sequence[Zone], total: int) -> tuple[int, ...]:
    """
    ceil(zone_area / total_zone_area * total) per zone.
    Zero total zone area gives zero demand for every zone.
    Rounding up means the sum can exceed total by at most len(zones) - 1.
    """
    areas = [max(0.0, z.area) for z in zones]
    total_area = sum(areas)
    if total_area <= 0:
        return tuple(0 for _ in zones)
    return tuple(math.ceil(a / total_area * total) for a in areas)


def compute_demand(
    project_area_m2: float,
    zones: Sequence[Zone],
    additional_anchors: int = 0,
) -> Demand:
    """Total demand and its proportional split over zones."""
    total = total_demand(project_area_m2, additional_anchors)
    return Demand(total=total, per_zone=per_zone_demand(zones, total))


def next_additional_anchors(additional_anchors: int, step: int = ADDITIONAL_ANCHORS_STEP) -> int:
    """Counter value after one "add more" request."""
    return max(0, additional_anchors) + step
