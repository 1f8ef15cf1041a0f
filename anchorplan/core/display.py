# anchorplan/core/display.py
"""
Display geometry: the letterboxed rectangle an image occupies inside its container
when fitted with "contain" (preserve aspect ratio, centered).
Recomputed on every call; container size can change between calls.
"""

from __future__ import annotations

import math

from anchorplan.core.error_codes import (
    INVALID_CONTAINER_SIZE,
    INVALID_IMAGE_SIZE,
    PreconditionError,
)
from anchorplan.core.types import DisplayGeometry


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def resolve_display_geometry(
    image_width: float,
    image_height: float,
    container_width: float,
    container_height: float,
) -> DisplayGeometry:
    """
    Fit the image inside the container preserving aspect ratio.
    Wider-than-container images span the container width and are centered
    vertically; otherwise they span the height and are centered horizontally.
    Raises PreconditionError on zero, negative or non-finite dimensions.
    """
    if not (_positive(image_width) and _positive(image_height)):
        raise PreconditionError(INVALID_IMAGE_SIZE, f"Image size {image_width}x{image_height}")
    if not (_positive(container_width) and _positive(container_height)):
        raise PreconditionError(
            INVALID_CONTAINER_SIZE, f"Container size {container_width}x{container_height}"
        )

    image_ratio = image_width / image_height
    container_ratio = container_width / container_height

    if image_ratio > container_ratio:
        display_width = float(container_width)
        display_height = container_width / image_ratio
        offset_x = 0.0
        offset_y = (container_height - display_height) / 2.0
    else:
        display_height = float(container_height)
        display_width = container_height * image_ratio
        offset_x = (container_width - display_width) / 2.0
        offset_y = 0.0

    return DisplayGeometry(
        image_width=float(image_width),
        image_height=float(image_height),
        container_width=float(container_width),
        container_height=float(container_height),
        display_width=display_width,
        display_height=display_height,
        offset_x=offset_x,
        offset_y=offset_y,
    )
