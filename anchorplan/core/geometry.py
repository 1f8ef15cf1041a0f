# anchorplan/core/geometry.py
"""
Geometry helpers: zone rectangles in display pixels, clipping to the image box,
exclusion areas, bounds and separation checks.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from shapely.geometry import Point, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from anchorplan.core.config import DISTANCE_TOLERANCE_PX, PERCENT_TOLERANCE
from anchorplan.core.types import DisplayGeometry, ExclusionZone, Zone


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def clip_zone(zone: Zone) -> Zone:
    """Clip a zone to the [0, 100] image box. Fully outside gives a zero-area zone on the box edge."""
    x0 = clamp(zone.x, 0.0, 100.0)
    y0 = clamp(zone.y, 0.0, 100.0)
    x1 = clamp(zone.x + zone.width, 0.0, 100.0)
    y1 = clamp(zone.y + zone.height, 0.0, 100.0)
    return Zone(x=x0, y=y0, width=max(0.0, x1 - x0), height=max(0.0, y1 - y0), id=zone.id, name=zone.name)


def zone_pixel_rect(zone: Zone | ExclusionZone, geometry: DisplayGeometry) -> tuple[float, float, float, float]:
    """Return (minx, miny, width, height) in display px relative to the image box."""
    x0, y0 = geometry.percent_to_display(zone.x, zone.y)
    w, h = geometry.percent_to_display(zone.width, zone.height)
    return (x0, y0, w, h)


def zone_polygon(zone: Zone | ExclusionZone, geometry: DisplayGeometry) -> Polygon:
    """Zone as a shapely box in display px."""
    x0, y0, w, h = zone_pixel_rect(zone, geometry)
    return box(x0, y0, x0 + w, y0 + h)


def exclusion_geometry(
    exclusions: Sequence[ExclusionZone],
    geometry: DisplayGeometry,
) -> BaseGeometry | None:
    """Union of exclusion rectangles in display px; None when there are none."""
    polys = [zone_polygon(e, geometry) for e in exclusions if e.width > 0 and e.height > 0]
    if not polys:
        return None
    return unary_union(polys)


def is_excluded(x_px: float, y_px: float, excluded: BaseGeometry | None) -> bool:
    """True if the point lies inside or on the boundary of an exclusion area."""
    if excluded is None or excluded.is_empty:
        return False
    return bool(excluded.covers(Point(x_px, y_px)))


def zone_contains_percent(
    zone: Zone,
    x_pct: float,
    y_pct: float,
    tolerance: float = PERCENT_TOLERANCE,
) -> bool:
    """Inclusive bounds check in percent space."""
    return (
        zone.x - tolerance <= x_pct <= zone.x + zone.width + tolerance
        and zone.y - tolerance <= y_pct <= zone.y + zone.height + tolerance
    )


def is_separated(
    x_px: float,
    y_px: float,
    accepted: Sequence[tuple[float, float]],
    min_distance_px: float,
    tolerance_px: float = DISTANCE_TOLERANCE_PX,
) -> bool:
    """True if (x, y) is at least min_distance_px from every accepted point."""
    if not accepted:
        return True
    pts = np.asarray(accepted, dtype=float)
    d = np.hypot(pts[:, 0] - x_px, pts[:, 1] - y_px)
    return bool(np.all(d >= min_distance_px - tolerance_px))


def min_pairwise_distance(points: Sequence[tuple[float, float]]) -> float:
    """Smallest distance between any two points; inf for fewer than two."""
    if len(points) < 2:
        return float("inf")
    pts = np.asarray(points, dtype=float)
    diff = pts[:, None, :] - pts[None, :, :]
    d = np.hypot(diff[..., 0], diff[..., 1])
    np.fill_diagonal(d, np.inf)
    return float(d.min())
