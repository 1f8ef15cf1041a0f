# tests/test_placement.py
"""
End-to-end distribution: separation invariant in meters, bounds, preconditions
that degrade to an empty result, strategy registry.
"""

from __future__ import annotations

import numpy as np
import pytest

from anchorplan.core.config import ANCHOR_DIAMETER_M
from anchorplan.core.error_codes import (
    CAPACITY_EXHAUSTED,
    INVALID_ADDITIONAL_ANCHORS,
    INVALID_CONTAINER_SIZE,
    INVALID_IMAGE_SIZE,
    INVALID_PROJECT_AREA,
    NO_ZONES,
    UNKNOWN_STRATEGY,
    PreconditionError,
    user_message,
)
from anchorplan.core.placement import STRATEGIES, get_strategy, run_distribution
from anchorplan.core.types import ExclusionZone, PlacementRequest, Zone
from anchorplan.core.validate import anchors_in_bounds, validate_anchor_separation

ZONES = [Zone(5, 5, 40, 50, name="North"), Zone(55, 40, 40, 50, name="South")]


def _request(**overrides) -> PlacementRequest:
    base = dict(
        project_area_m2=2400.0,
        zones=list(ZONES),
        image_size=(1200.0, 800.0),
        container_size=(900.0, 900.0),
    )
    base.update(overrides)
    return PlacementRequest(**base)


@pytest.mark.parametrize("strategy", sorted(STRATEGIES))
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_separation_invariant_in_meters(strategy: str, seed: int) -> None:
    result = run_distribution(_request(strategy=strategy), seed=seed)
    assert result.ok
    assert result.placed > 0
    if strategy == "rejection":
        assert result.placed <= result.requested
    ok, min_sep_m = validate_anchor_separation(
        result.anchors, result.geometry, result.meters_per_pixel, ANCHOR_DIAMETER_M
    )
    assert ok
    assert min_sep_m >= ANCHOR_DIAMETER_M - 1e-6
    assert anchors_in_bounds(result.anchors)
    assert all(a.diameter == ANCHOR_DIAMETER_M for a in result.anchors)


@pytest.mark.parametrize("strategy", sorted(STRATEGIES))
def test_repeated_runs_keep_invariants(strategy: str) -> None:
    request = _request(strategy=strategy)
    for _ in range(3):
        result = run_distribution(request)
        ok, _ = validate_anchor_separation(
            result.anchors, result.geometry, result.meters_per_pixel, ANCHOR_DIAMETER_M
        )
        assert ok
        if strategy == "rejection":
            assert result.placed <= result.requested


def test_rejection_requests_global_demand() -> None:
    result = run_distribution(_request(project_area_m2=750.0, strategy="rejection"), seed=0)
    assert result.requested == 10


def test_hex_grid_requests_per_zone_sum() -> None:
    zones = [Zone(0, 0, 40, 40), Zone(50, 50, 40, 40)]
    result = run_distribution(_request(project_area_m2=750.0, zones=zones, strategy="hex_grid"), seed=0)
    assert result.requested == 10


def test_small_diameter_fills_demand() -> None:
    result = run_distribution(_request(project_area_m2=750.0, anchor_diameter_m=0.5), seed=5)
    assert result.placed == result.requested
    assert result.warnings == []


def test_capacity_exhausted_is_warning_not_error() -> None:
    # One tiny zone cannot hold 32 anchors at 7.1 m spacing
    result = run_distribution(_request(zones=[Zone(10, 10, 2, 2)], strategy="rejection"), seed=0)
    assert result.ok
    assert result.placed < result.requested
    assert user_message(CAPACITY_EXHAUSTED) in result.warnings


def test_exclusion_zones_respected() -> None:
    excl = ExclusionZone(0, 0, 100, 30)
    for strategy in sorted(STRATEGIES):
        result = run_distribution(_request(strategy=strategy, exclusion_zones=[excl]), seed=3)
        assert result.ok
        assert all(a.y > 30 for a in result.anchors)


def test_rng_overrides_seed() -> None:
    a = run_distribution(_request(strategy="rejection"), rng=np.random.default_rng(42))
    b = run_distribution(_request(strategy="rejection"), rng=np.random.default_rng(42))
    assert [(p.x, p.y) for p in a.anchors] == [(p.x, p.y) for p in b.anchors]


@pytest.mark.parametrize(
    "overrides,key",
    [
        ({"container_size": (0.0, 900.0)}, INVALID_CONTAINER_SIZE),
        ({"image_size": (0.0, 800.0)}, INVALID_IMAGE_SIZE),
        ({"project_area_m2": 0.0}, INVALID_PROJECT_AREA),
        ({"project_area_m2": -5.0}, INVALID_PROJECT_AREA),
        ({"zones": []}, NO_ZONES),
        ({"additional_anchors": -5}, INVALID_ADDITIONAL_ANCHORS),
        ({"additional_anchors": float("nan")}, INVALID_ADDITIONAL_ANCHORS),
        ({"additional_anchors": float("inf")}, INVALID_ADDITIONAL_ANCHORS),
        ({"strategy": "spiral"}, UNKNOWN_STRATEGY),
    ],
)
def test_preconditions_give_empty_result(overrides: dict, key: str) -> None:
    result = run_distribution(_request(**overrides), seed=0)
    assert result.anchors == []
    assert result.error_key == key
    assert not result.ok


def test_get_strategy() -> None:
    assert get_strategy("hex_grid") is STRATEGIES["hex_grid"]
    with pytest.raises(PreconditionError):
        get_strategy("nope")
