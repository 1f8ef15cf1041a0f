# anchorplan/core/scale.py
"""
Scale calculator: meters-per-pixel from project area and image pixel area,
minimum anchor separation in pixels from the anchor diameter.
Assumes the image is a uniform-scale orthographic map of the project area.
"""

from __future__ import annotations

import math

from anchorplan.core.error_codes import (
    INVALID_DIAMETER,
    INVALID_IMAGE_SIZE,
    INVALID_PROJECT_AREA,
    PreconditionError,
)
from anchorplan.core.types import DisplayGeometry


def meters_per_pixel(project_area_m2: float, pixel_width: float, pixel_height: float) -> float:
    """sqrt(area / pixel area). Raises PreconditionError instead of returning 0 or NaN."""
    if not (math.isfinite(project_area_m2) and project_area_m2 > 0):
        raise PreconditionError(INVALID_PROJECT_AREA, f"Project area {project_area_m2}")
    pixel_area = pixel_width * pixel_height
    if not (math.isfinite(pixel_area) and pixel_width > 0 and pixel_height > 0):
        raise PreconditionError(INVALID_IMAGE_SIZE, f"Image size {pixel_width}x{pixel_height}")
    return math.sqrt(project_area_m2 / pixel_area)


def min_distance_pixels(diameter_m: float, mpp: float) -> float:
    """Minimum center-to-center distance in image pixels."""
    if not (math.isfinite(diameter_m) and diameter_m > 0):
        raise PreconditionError(INVALID_DIAMETER, f"Diameter {diameter_m}")
    if not (math.isfinite(mpp) and mpp > 0):
        raise PreconditionError(INVALID_PROJECT_AREA, f"Meters per pixel {mpp}")
    return diameter_m / mpp


def min_distance_display_px(diameter_m: float, mpp: float, geometry: DisplayGeometry) -> float:
    """Minimum distance converted from image pixels to display pixels."""
    return min_distance_pixels(diameter_m, mpp) * geometry.display_scale
