# anchorplan/core/io.py
"""
Load a project description (project.json) and blueprint image size.
project.json keys: project_area_m2, zones, optional exclusion_zones, image,
image_size [w, h], container_size [w, h], additional_anchors, strategy.
Image paths are resolved relative to the project file.
"""

from __future__ import annotations

import json
from pathlib import Path

import matplotlib.image as mpimg
import numpy as np

from anchorplan.core.config import (
    ANCHOR_DIAMETER_M,
    DEFAULT_CONTAINER_HEIGHT_PX,
    DEFAULT_CONTAINER_WIDTH_PX,
    DEFAULT_STRATEGY,
)
from anchorplan.core.types import ExclusionZone, PlacementRequest, Zone


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def load_image(path: str | Path, repo_root: Path | None = None) -> np.ndarray:
    """Read a blueprint image into an array (H, W[, C])."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Image file not found: {resolved}")
    return mpimg.imread(str(resolved))


def image_size_of(image: np.ndarray) -> tuple[float, float]:
    """Natural (width, height) in pixels of an image array."""
    if image.ndim < 2:
        raise ValueError(f"Not an image array: shape {image.shape}")
    return (float(image.shape[1]), float(image.shape[0]))


def _pair(value: object, key: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{key} must be a [width, height] pair, got {value!r}")
    return (float(value[0]), float(value[1]))


def parse_zone(data: dict) -> Zone:
    """Zone from {"x", "y", "width", "height"[, "id", "name"]}."""
    try:
        return Zone(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
            id=data.get("id"),
            name=data.get("name"),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid zone {data!r}: {e}") from e


def parse_exclusion(data: dict) -> ExclusionZone:
    try:
        return ExclusionZone(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
            id=data.get("id"),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid exclusion zone {data!r}: {e}") from e


def parse_project(data: dict, image_size: tuple[float, float] | None = None) -> PlacementRequest:
    """
    Build a PlacementRequest from a project dict.
    image_size (from a loaded image) takes precedence over the dict's image_size.
    Raises ValueError on missing or malformed fields.
    """
    if "project_area_m2" not in data:
        raise ValueError("project_area_m2 is required")
    if image_size is None:
        if "image_size" not in data:
            raise ValueError("image_size is required when no image is given")
        image_size = _pair(data["image_size"], "image_size")
    container = data.get("container_size", [DEFAULT_CONTAINER_WIDTH_PX, DEFAULT_CONTAINER_HEIGHT_PX])
    return PlacementRequest(
        project_area_m2=float(data["project_area_m2"]),
        zones=[parse_zone(z) for z in data.get("zones", [])],
        image_size=image_size,
        container_size=_pair(container, "container_size"),
        anchor_diameter_m=float(data.get("anchor_diameter_m", ANCHOR_DIAMETER_M)),
        additional_anchors=int(data.get("additional_anchors", 0)),
        exclusion_zones=[parse_exclusion(e) for e in data.get("exclusion_zones", [])],
        strategy=str(data.get("strategy", DEFAULT_STRATEGY)),
    )


def load_project(
    path: str | Path,
    repo_root: Path | None = None,
) -> tuple[PlacementRequest, np.ndarray | None]:
    """
    Load project.json and its blueprint image (if referenced).
    Returns (request, image or None).
    Raises FileNotFoundError if a file is missing, ValueError if the JSON is invalid.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Project file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid project JSON in {resolved}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Project JSON must be an object: {resolved}")

    image = None
    image_size = None
    if data.get("image"):
        image = load_image(data["image"], repo_root=resolved.parent)
        image_size = image_size_of(image)
    return parse_project(data, image_size=image_size), image
