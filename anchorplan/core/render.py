# anchorplan/core/render.py
"""
Matplotlib PNG rendering in container pixels: before.png (blueprint + zones),
after.png (blueprint + zones + anchors with clearance circles).
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import BinaryIO, Sequence

import matplotlib.pyplot as plt
import numpy as np
from shapely.affinity import translate
from shapely.geometry import Point, box
from shapely.geometry.base import BaseGeometry

from anchorplan.core.config import ANCHOR_COLOR, EXCLUSION_COLOR, ZONE_COLOR
from anchorplan.core.geometry import zone_polygon
from anchorplan.core.types import DisplayGeometry, ExclusionZone, PlacementResult, Zone


def _new_fig(geometry: DisplayGeometry, scale: int = 1) -> tuple[plt.Figure, plt.Axes]:
    w = geometry.container_width * scale
    h = geometry.container_height * scale
    fig = plt.figure(figsize=(w / 100.0, h / 100.0), dpi=100, constrained_layout=False)
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.set_xlim(0, geometry.container_width)
    ax.set_ylim(geometry.container_height, 0)  # screen coordinates: y grows downward
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")
    return fig, ax


def _draw_blueprint(ax: plt.Axes, geometry: DisplayGeometry, image: np.ndarray | None) -> None:
    x0, y0 = geometry.offset_x, geometry.offset_y
    x1, y1 = x0 + geometry.display_width, y0 + geometry.display_height
    if image is not None:
        ax.imshow(image, extent=(x0, x1, y1, y0), zorder=0)
    else:
        ax.fill([x0, x1, x1, x0], [y0, y0, y1, y1], facecolor="whitesmoke", edgecolor="gray", linewidth=1, zorder=0)


def _draw_polygon(
    ax: plt.Axes,
    geom: BaseGeometry,
    facecolor: str,
    edgecolor: str,
    fill_alpha: float = 0.2,
    zorder: int = 2,
) -> None:
    if geom is None or geom.is_empty:
        return
    parts = [geom] if geom.geom_type == "Polygon" else list(getattr(geom, "geoms", []))
    for g in parts:
        xy = np.array(g.exterior.coords)
        ax.fill(xy[:, 0], xy[:, 1], facecolor=facecolor, alpha=fill_alpha, zorder=zorder)
        ax.plot(xy[:, 0], xy[:, 1], color=edgecolor, linewidth=1.5, zorder=zorder + 1)


def container_outline(zone: Zone | ExclusionZone, geometry: DisplayGeometry) -> BaseGeometry:
    """Zone box clipped to the displayed image, in container px. Empty when fully outside."""
    image_box = box(0.0, 0.0, geometry.display_width, geometry.display_height)
    clipped = zone_polygon(zone, geometry).intersection(image_box)
    return translate(clipped, xoff=geometry.offset_x, yoff=geometry.offset_y)


def _draw_zones(
    ax: plt.Axes,
    geometry: DisplayGeometry,
    zones: Sequence[Zone],
    exclusions: Sequence[ExclusionZone],
) -> None:
    for zone in zones:
        poly = container_outline(zone, geometry)
        _draw_polygon(ax, poly, ZONE_COLOR, ZONE_COLOR)
        if zone.name and not poly.is_empty:
            minx, miny, _, _ = poly.bounds
            ax.text(minx + 3, miny + 3, zone.name, fontsize=8, ha="left", va="top", color=ZONE_COLOR, zorder=4)
    for excl in exclusions:
        poly = container_outline(excl, geometry)
        _draw_polygon(ax, poly, EXCLUSION_COLOR, EXCLUSION_COLOR, fill_alpha=0.3)


def _save(fig: plt.Figure, output_path: str | Path | BinaryIO) -> None:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, format="png", dpi=100, facecolor="white")
    plt.close(fig)


def render_before(
    geometry: DisplayGeometry,
    zones: Sequence[Zone],
    output_path: str | Path | BinaryIO,
    exclusions: Sequence[ExclusionZone] = (),
    image: np.ndarray | None = None,
    scale: int = 1,
) -> None:
    """Render blueprint and zones. scale multiplies output resolution (1x, 2x, 4x)."""
    fig, ax = _new_fig(geometry, scale)
    _draw_blueprint(ax, geometry, image)
    _draw_zones(ax, geometry, zones, exclusions)
    _save(fig, output_path)


def render_after(
    geometry: DisplayGeometry,
    zones: Sequence[Zone],
    result: PlacementResult,
    output_path: str | Path | BinaryIO,
    exclusions: Sequence[ExclusionZone] = (),
    image: np.ndarray | None = None,
    show_zones: bool = True,
    scale: int = 1,
) -> None:
    """
    Render blueprint with anchors. Each anchor gets a circle of radius
    min_distance_px / 2, so circles of neighbours at minimum spacing just touch.
    """
    fig, ax = _new_fig(geometry, scale)
    _draw_blueprint(ax, geometry, image)
    if show_zones:
        _draw_zones(ax, geometry, zones, exclusions)

    radius = result.min_distance_px / 2.0
    for anchor in result.anchors:
        cx, cy = geometry.percent_to_container(anchor.x, anchor.y)
        if radius > 0:
            circle = Point(cx, cy).buffer(radius)
            xy = np.array(circle.exterior.coords)
            ax.plot(xy[:, 0], xy[:, 1], color=ANCHOR_COLOR, linewidth=0.8, alpha=0.6, zorder=5)
        ax.scatter([cx], [cy], s=12, color=ANCHOR_COLOR, zorder=6)

    _save(fig, output_path)
