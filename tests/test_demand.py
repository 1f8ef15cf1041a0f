# tests/test_demand.py
"""
Scale and demand calculators: meters-per-pixel, min distance, global and per-zone demand.
"""

from __future__ import annotations

import math

import pytest

from anchorplan.core.demand import (
    compute_demand,
    global_demand,
    next_additional_anchors,
    per_zone_demand,
    total_demand,
)
from anchorplan.core.error_codes import (
    INVALID_ADDITIONAL_ANCHORS,
    INVALID_DIAMETER,
    INVALID_IMAGE_SIZE,
    INVALID_PROJECT_AREA,
    PreconditionError,
)
from anchorplan.core.scale import meters_per_pixel, min_distance_pixels
from anchorplan.core.types import Zone


def test_meters_per_pixel() -> None:
    # 1e6 px² image covering 10_000 m² -> 0.1 m/px
    assert meters_per_pixel(10_000, 1000, 1000) == pytest.approx(0.1)


def test_min_distance_pixels() -> None:
    assert min_distance_pixels(7.1, 0.1) == pytest.approx(71.0)


def test_scale_preconditions() -> None:
    with pytest.raises(PreconditionError) as exc:
        meters_per_pixel(0, 1000, 1000)
    assert exc.value.error_key == INVALID_PROJECT_AREA
    with pytest.raises(PreconditionError) as exc:
        meters_per_pixel(750, 0, 1000)
    assert exc.value.error_key == INVALID_IMAGE_SIZE
    with pytest.raises(PreconditionError) as exc:
        min_distance_pixels(0, 0.1)
    assert exc.value.error_key == INVALID_DIAMETER


def test_global_demand() -> None:
    assert global_demand(750) == 10
    assert global_demand(751) == 11
    assert global_demand(1) == 1


def test_total_demand_includes_additional() -> None:
    assert total_demand(750, 5) == 15
    with pytest.raises(PreconditionError) as exc:
        total_demand(750, -1)
    assert exc.value.error_key == INVALID_ADDITIONAL_ANCHORS


def test_equal_zones_split_evenly() -> None:
    zones = [Zone(0, 0, 40, 40), Zone(50, 50, 40, 40)]
    assert per_zone_demand(zones, 10) == (5, 5)


def test_proportional_split_rounds_up() -> None:
    zones = [Zone(0, 0, 30, 10), Zone(0, 20, 10, 10)]  # areas 300 and 100
    shares = per_zone_demand(zones, 10)
    assert shares == (math.ceil(7.5), math.ceil(2.5))
    assert sum(shares) - 10 <= len(zones) - 1


def test_zero_total_area_gives_zero_demand() -> None:
    zones = [Zone(10, 10, 0, 20), Zone(30, 30, 20, 0)]
    assert per_zone_demand(zones, 10) == (0, 0)


def test_compute_demand() -> None:
    zones = [Zone(0, 0, 50, 50), Zone(50, 50, 50, 50)]
    demand = compute_demand(750, zones, additional_anchors=10)
    assert demand.total == 20
    assert demand.per_zone == (10, 10)


def test_next_additional_anchors_steps_by_five() -> None:
    assert next_additional_anchors(0) == 5
    assert next_additional_anchors(5) == 10
