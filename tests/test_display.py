# tests/test_display.py
"""
Deterministic tests for the letterboxed display geometry and percent conversions.
"""

from __future__ import annotations

import pytest

from anchorplan.core.display import resolve_display_geometry
from anchorplan.core.error_codes import (
    INVALID_CONTAINER_SIZE,
    INVALID_IMAGE_SIZE,
    PreconditionError,
)


def test_wide_image_fits_container_width() -> None:
    g = resolve_display_geometry(1000, 500, 400, 400)
    assert g.display_width == pytest.approx(400)
    assert g.display_height == pytest.approx(200)
    assert g.offset_x == pytest.approx(0)
    assert g.offset_y == pytest.approx(100)


def test_tall_image_fits_container_height() -> None:
    g = resolve_display_geometry(500, 1000, 400, 400)
    assert g.display_width == pytest.approx(200)
    assert g.display_height == pytest.approx(400)
    assert g.offset_x == pytest.approx(100)
    assert g.offset_y == pytest.approx(0)


def test_equal_ratio_fills_container() -> None:
    g = resolve_display_geometry(800, 600, 400, 300)
    assert g.display_width == pytest.approx(400)
    assert g.display_height == pytest.approx(300)
    assert g.offset_x == 0 and g.offset_y == 0
    assert g.display_scale == pytest.approx(0.5)


def test_percent_conversions() -> None:
    g = resolve_display_geometry(1000, 500, 400, 400)
    assert g.percent_to_display(50, 50) == pytest.approx((200, 100))
    assert g.display_to_percent(200, 100) == pytest.approx((50, 50))
    assert g.percent_to_container(0, 0) == pytest.approx((0, 100))
    assert g.percent_to_container(100, 100) == pytest.approx((400, 300))


@pytest.mark.parametrize(
    "dims,key",
    [
        ((0, 500, 400, 400), INVALID_IMAGE_SIZE),
        ((1000, -1, 400, 400), INVALID_IMAGE_SIZE),
        ((1000, 500, 0, 400), INVALID_CONTAINER_SIZE),
        ((1000, 500, 400, float("nan")), INVALID_CONTAINER_SIZE),
    ],
)
def test_degenerate_dimensions_raise(dims: tuple, key: str) -> None:
    with pytest.raises(PreconditionError) as exc:
        resolve_display_geometry(*dims)
    assert exc.value.error_key == key
