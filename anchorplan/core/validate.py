# anchorplan/core/validate.py
"""
Validate a placed anchor set: real-world separation and bounds.
Return (ok, min_separation_m).
"""

from __future__ import annotations

from typing import Sequence

from anchorplan.core.config import DISTANCE_TOLERANCE_PX
from anchorplan.core.geometry import min_pairwise_distance
from anchorplan.core.types import Anchor, DisplayGeometry


def anchors_to_image_px(anchors: Sequence[Anchor], geometry: DisplayGeometry) -> list[tuple[float, float]]:
    """Percent coordinates -> natural image pixels."""
    return [
        (a.x / 100.0 * geometry.image_width, a.y / 100.0 * geometry.image_height)
        for a in anchors
    ]


def validate_anchor_separation(
    anchors: Sequence[Anchor],
    geometry: DisplayGeometry,
    meters_per_pixel: float,
    diameter_m: float,
    tolerance_px: float = DISTANCE_TOLERANCE_PX,
) -> tuple[bool, float]:
    """
    True if every pair of anchors is at least diameter_m apart in meters.
    Also returns the smallest pairwise separation in meters (inf for < 2 anchors).
    """
    d_px = min_pairwise_distance(anchors_to_image_px(anchors, geometry))
    if d_px == float("inf"):
        return True, d_px
    min_sep_m = d_px * meters_per_pixel
    tol_m = tolerance_px * meters_per_pixel
    return min_sep_m >= diameter_m - tol_m, min_sep_m


def anchors_in_bounds(anchors: Sequence[Anchor]) -> bool:
    """True if every anchor lies in the [0, 100] percent box."""
    return all(0.0 <= a.x <= 100.0 and 0.0 <= a.y <= 100.0 for a in anchors)
