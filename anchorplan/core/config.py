# anchorplan/core/config.py
"""
Central configuration for anchor distribution.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
DEFAULT_PROJECT_PATH: str = "examples/project.json"
REPORTS_DIR: str = "reports"

# ----- Physical constants -----
ANCHOR_DIAMETER_M: float = 7.1
"""Anchor diameter (m). Also the minimum center-to-center spacing between anchors."""

AREA_PER_ANCHOR_M2: float = 75.0
"""One anchor per this many square meters of project area, rounded up."""

# ----- Demand -----
ADDITIONAL_ANCHORS_STEP: int = 5
"""Increment applied to additional_anchors on each "add more" request."""

# ----- Strategy A: rejection sampling -----
ATTEMPTS_PER_ANCHOR: int = 200
"""Attempt budget = required anchors * ATTEMPTS_PER_ANCHOR."""

# ----- Strategy B: hex grid -----
JITTER_FRACTION: float = 0.2
"""Jitter span as a fraction of grid spacing: (random() - 0.5) * spacing * JITTER_FRACTION."""

# ----- Strategies -----
DEFAULT_STRATEGY: str = os.environ.get("ANCHORPLAN_STRATEGY", "hex_grid")
"""Placement strategy name used when none is given ("hex_grid" or "rejection")."""

# ----- Tolerances -----
PERCENT_TOLERANCE: float = 1e-9
"""Tolerance (percent units) for zone bounds checks."""

DISTANCE_TOLERANCE_PX: float = 1e-9
"""Tolerance (px) when comparing anchor separation to the minimum distance."""

# ----- Display -----
DEFAULT_CONTAINER_WIDTH_PX: int = 1000
DEFAULT_CONTAINER_HEIGHT_PX: int = 600
"""Default container size (px) when a project does not specify one."""

# ----- Rendering -----
RENDER_WIDTH_PX: int = 1000
RENDER_HEIGHT_PX: int = 600
ZONE_COLOR: str = "green"
EXCLUSION_COLOR: str = "red"
ANCHOR_COLOR: str = "royalblue"

# ----- Comparison -----
COMPARE_RUNS: int = 10
"""Runs per strategy in strategy comparison."""

# ----- Determinism -----
SEED: int | None = None
"""Random seed for placement; None for non-deterministic."""

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for entrypoints. Set env LOG_LEVEL=DEBUG for development."""
