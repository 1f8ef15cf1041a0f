# tests/test_geometry.py
"""
Deterministic tests for geometry helpers: zone corners, clipping, exclusions, separation.
"""

from __future__ import annotations

import math

import pytest

from anchorplan.core.display import resolve_display_geometry
from anchorplan.core.geometry import (
    clip_zone,
    exclusion_geometry,
    is_excluded,
    is_separated,
    min_pairwise_distance,
    zone_contains_percent,
    zone_pixel_rect,
)
from anchorplan.core.types import ExclusionZone, Zone


def test_zone_from_corners_normalizes() -> None:
    z = Zone.from_corners(60, 80, 20, 30, name="Hall")
    assert (z.x, z.y, z.width, z.height) == (20, 30, 40, 50)
    assert z.name == "Hall"
    assert z.area == 2000


def test_clip_zone_to_image_box() -> None:
    z = clip_zone(Zone(-10, 90, 30, 20, id="z"))
    assert z.x == pytest.approx(0) and z.y == pytest.approx(90)
    assert z.width == pytest.approx(20) and z.height == pytest.approx(10)
    assert z.id == "z"


def test_clip_zone_outside_is_empty() -> None:
    z = clip_zone(Zone(120, 120, 10, 10))
    assert z.area == 0


def test_zone_pixel_rect() -> None:
    g = resolve_display_geometry(1000, 500, 400, 400)
    assert zone_pixel_rect(Zone(25, 50, 50, 50), g) == pytest.approx((100, 100, 200, 100))


def test_zone_contains_percent_inclusive() -> None:
    z = Zone(10, 10, 20, 20)
    assert zone_contains_percent(z, 10, 10)
    assert zone_contains_percent(z, 30, 30)
    assert not zone_contains_percent(z, 30.1, 20)


def test_exclusion_geometry() -> None:
    g = resolve_display_geometry(100, 100, 100, 100)
    excluded = exclusion_geometry([ExclusionZone(0, 0, 50, 100), ExclusionZone(40, 0, 20, 10)], g)
    assert excluded is not None
    assert is_excluded(10, 50, excluded)
    assert is_excluded(55, 5, excluded)
    assert not is_excluded(75, 50, excluded)
    assert exclusion_geometry([], g) is None
    assert not is_excluded(10, 10, None)


def test_is_separated() -> None:
    accepted = [(0.0, 0.0), (100.0, 0.0)]
    assert is_separated(50, 0, accepted, 50)
    assert not is_separated(50, 0, accepted, 50.1)
    assert is_separated(5, 5, [], 1000)


def test_min_pairwise_distance() -> None:
    assert min_pairwise_distance([(0, 0), (3, 4), (10, 10)]) == pytest.approx(5)
    assert math.isinf(min_pairwise_distance([(1, 1)]))
