# anchorplan/core/reporting.py
"""
Create reports/<run_name>/ and write anchors.json and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from anchorplan.core.config import (
    ADDITIONAL_ANCHORS_STEP,
    ANCHOR_DIAMETER_M,
    AREA_PER_ANCHOR_M2,
    ATTEMPTS_PER_ANCHOR,
    DEFAULT_STRATEGY,
    JITTER_FRACTION,
    REPORTS_DIR,
    SEED,
)
from anchorplan.core.types import Anchor, PlacementRequest, PlacementResult, Zone
from anchorplan.core.validate import validate_anchor_separation

SCHEMA_VERSION = "1.0"


def anchor_to_dict(anchor: Anchor) -> dict:
    return {
        "id": anchor.id,
        "x_percent": anchor.x,
        "y_percent": anchor.y,
        "diameter_m": anchor.diameter,
    }


def zone_to_dict(zone: Zone) -> dict:
    out = {"x": zone.x, "y": zone.y, "width": zone.width, "height": zone.height}
    if zone.id is not None:
        out["id"] = zone.id
    if zone.name is not None:
        out["name"] = zone.name
    return out


def anchors_to_dict(result: PlacementResult, request: PlacementRequest) -> dict:
    """Exact structure for anchors.json."""
    if result.geometry is not None and result.anchors:
        ok, min_sep = validate_anchor_separation(
            result.anchors, result.geometry, result.meters_per_pixel, request.anchor_diameter_m
        )
    else:
        ok, min_sep = True, float("inf")
    geometry = None
    if result.geometry is not None:
        g = result.geometry
        geometry = {
            "display_width": g.display_width,
            "display_height": g.display_height,
            "offset_x": g.offset_x,
            "offset_y": g.offset_y,
        }
    return {
        "schema_version": SCHEMA_VERSION,
        "input": {
            "project_area_m2": request.project_area_m2,
            "anchor_diameter_m": request.anchor_diameter_m,
            "additional_anchors": request.additional_anchors,
            "image_size": list(request.image_size),
            "container_size": list(request.container_size),
            "zones": [zone_to_dict(z) for z in request.zones],
            "exclusion_zones": [
                {"x": e.x, "y": e.y, "width": e.width, "height": e.height} for e in request.exclusion_zones
            ],
        },
        "result": {
            "strategy": result.strategy,
            "error_key": result.error_key,
            "display_geometry": geometry,
            "anchors": [anchor_to_dict(a) for a in result.anchors],
        },
        "metrics": {
            "requested": result.requested,
            "placed": result.placed,
            "meters_per_pixel": result.meters_per_pixel,
            "min_distance_px": result.min_distance_px,
            # JSON has no inf; None means fewer than two anchors
            "min_separation_m": None if min_sep == float("inf") else min_sep,
            "separation_ok": ok,
        },
        "warnings": result.warnings,
    }


def run_metadata_dict(
    run_name: str,
    project_path: str,
    strategy: str,
    seed: int | None,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "project_path": project_path,
        "strategy": strategy,
        "seed": seed,
        "config": {
            "ANCHOR_DIAMETER_M": ANCHOR_DIAMETER_M,
            "AREA_PER_ANCHOR_M2": AREA_PER_ANCHOR_M2,
            "ADDITIONAL_ANCHORS_STEP": ADDITIONAL_ANCHORS_STEP,
            "ATTEMPTS_PER_ANCHOR": ATTEMPTS_PER_ANCHOR,
            "JITTER_FRACTION": JITTER_FRACTION,
            "DEFAULT_STRATEGY": DEFAULT_STRATEGY,
            "SEED": SEED,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_anchors_json(report_dir: Path, result: PlacementResult, request: PlacementRequest) -> Path:
    """Write anchors.json to report_dir. Returns path to file."""
    path = report_dir / "anchors.json"
    data = anchors_to_dict(result, request)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    project_path: str,
    strategy: str,
    seed: int | None,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, project_path, strategy, seed)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
