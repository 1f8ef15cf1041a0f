# anchorplan/core/compare.py
"""
Strategy comparison: run every registered strategy N times on the same request.
Saves comparison_results.csv and comparison_summary.json under reports/<run_name>/.
"""

from __future__ import annotations

import csv
import json
import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from anchorplan.core.config import COMPARE_RUNS, SEED
from anchorplan.core.placement import STRATEGIES, run_distribution
from anchorplan.core.reporting import ensure_report_dir
from anchorplan.core.types import PlacementRequest, PlacementResult
from anchorplan.core.validate import anchors_to_image_px, validate_anchor_separation

logger = logging.getLogger(__name__)

RESULT_KEYS = [
    "strategy", "run", "requested", "placed", "fill_ratio",
    "min_separation_m", "separation_ok", "nn_cv", "duration_ms",
]


def nearest_neighbour_cv(points: list[tuple[float, float]]) -> float:
    """
    Coefficient of variation of nearest-neighbour distances.
    Lower means more uniform spacing; 0.0 for fewer than two points.
    """
    if len(points) < 2:
        return 0.0
    pts = np.asarray(points, dtype=float)
    diff = pts[:, None, :] - pts[None, :, :]
    d = np.hypot(diff[..., 0], diff[..., 1])
    np.fill_diagonal(d, np.inf)
    nn = d.min(axis=1)
    mean = float(nn.mean())
    return float(nn.std() / mean) if mean > 0 else 0.0


def result_metrics(result: PlacementResult, diameter_m: float) -> dict:
    """Per-run metrics for one placement result."""
    if result.geometry is None or not result.anchors:
        return {
            "requested": result.requested,
            "placed": 0,
            "fill_ratio": 0.0,
            "min_separation_m": "",
            "separation_ok": True,
            "nn_cv": 0.0,
        }
    ok, min_sep = validate_anchor_separation(
        result.anchors, result.geometry, result.meters_per_pixel, diameter_m
    )
    return {
        "requested": result.requested,
        "placed": result.placed,
        "fill_ratio": result.placed / result.requested if result.requested else 0.0,
        "min_separation_m": "" if min_sep == float("inf") else round(min_sep, 3),
        "separation_ok": ok,
        "nn_cv": round(nearest_neighbour_cv(anchors_to_image_px(result.anchors, result.geometry)), 4),
    }


def compare_strategies(
    request: PlacementRequest,
    n_runs: int = COMPARE_RUNS,
    seed: int | None = SEED,
) -> list[dict]:
    """Run each strategy n_runs times. Returns one row per run."""
    rows: list[dict] = []
    for name in sorted(STRATEGIES):
        strategy_request = replace(request, strategy=name)
        for i in range(n_runs):
            run_seed = seed + i if seed is not None else None
            t0 = time.perf_counter()
            result = run_distribution(strategy_request, seed=run_seed)
            duration_ms = int((time.perf_counter() - t0) * 1000)
            rows.append({
                "strategy": name,
                "run": i,
                "duration_ms": duration_ms,
                **result_metrics(result, request.anchor_diameter_m),
            })
    return rows


def summarize(rows: list[dict]) -> dict:
    """Aggregate per strategy: mean fill ratio, mean nn_cv, separation violations."""
    by_strategy: dict[str, list[dict]] = {}
    for r in rows:
        by_strategy.setdefault(r["strategy"], []).append(r)
    out: dict[str, dict] = {}
    for name, list_r in by_strategy.items():
        n = len(list_r)
        out[name] = {
            "n_runs": n,
            "mean_fill_ratio": sum(r["fill_ratio"] for r in list_r) / n if n else 0.0,
            "mean_placed": sum(r["placed"] for r in list_r) / n if n else 0.0,
            "mean_nn_cv": sum(r["nn_cv"] for r in list_r) / n if n else 0.0,
            "separation_violations": sum(1 for r in list_r if not r["separation_ok"]),
            "avg_duration_ms": sum(r["duration_ms"] for r in list_r) / n if n else 0.0,
        }
    return out


def run_comparison(
    request: PlacementRequest,
    run_name: str = "compare_01",
    n_runs: int = COMPARE_RUNS,
    seed: int | None = SEED,
    repo_root: Path | None = None,
    output_dir: str | None = None,
) -> Path:
    """
    Compare strategies on one request and write results to reports/<run_name>/.
    Returns report_dir.
    """
    root = repo_root or Path.cwd().resolve()
    report_dir = ensure_report_dir(root, run_name, output_dir=output_dir)
    rows = compare_strategies(request, n_runs=n_runs, seed=seed)

    summary = {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "n_runs": n_runs,
        "seed": seed,
        "by_strategy": summarize(rows),
    }
    (report_dir / "comparison_summary.json").write_text(json.dumps(summary, indent=2), encoding="utf-8")

    with open(report_dir / "comparison_results.csv", "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=RESULT_KEYS, extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow({k: r.get(k, "") for k in RESULT_KEYS})

    logger.info("Strategy comparison written to %s", report_dir)
    return report_dir
