# tests/test_runner.py
"""
CLI runner and strategy comparison: temp project, run, assert report files exist.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from anchorplan.core.compare import nearest_neighbour_cv, run_comparison
from anchorplan.core.io import parse_project
from anchorplan.core.runner import main, parse_size

PROJECT = {
    "project_area_m2": 1500,
    "image_size": [1200, 800],
    "container_size": [900, 600],
    "zones": [
        {"x": 5, "y": 5, "width": 40, "height": 40, "name": "North"},
        {"x": 55, "y": 50, "width": 40, "height": 45, "name": "South"},
    ],
}


def test_parse_size() -> None:
    assert parse_size("1000x600") == (1000.0, 600.0)
    with pytest.raises(ValueError):
        parse_size("1000")


def test_runner_writes_report(tmp_path: Path) -> None:
    (tmp_path / "project.json").write_text(json.dumps(PROJECT), encoding="utf-8")
    code = main(["--project", "project.json", "--repo-root", str(tmp_path), "--run-name", "cli", "--seed", "1"])
    assert code == 0
    report_dir = tmp_path / "reports" / "cli"
    for name in ("anchors.json", "run_metadata.json", "before.png", "after.png"):
        assert (report_dir / name).exists(), name
    data = json.loads((report_dir / "anchors.json").read_text(encoding="utf-8"))
    assert data["metrics"]["separation_ok"] is True
    assert data["result"]["strategy"] == "hex_grid"


def test_runner_reports_precondition_failure(tmp_path: Path) -> None:
    (tmp_path / "project.json").write_text(json.dumps(PROJECT), encoding="utf-8")
    code = main([
        "--project", "project.json", "--repo-root", str(tmp_path),
        "--run-name", "bad", "--container", "0x600", "--no-render",
    ])
    assert code == 1
    data = json.loads((tmp_path / "reports" / "bad" / "anchors.json").read_text(encoding="utf-8"))
    assert data["result"]["anchors"] == []


def test_comparison_writes_summary(tmp_path: Path) -> None:
    request = parse_project(PROJECT)
    report_dir = run_comparison(request, run_name="cmp", n_runs=2, seed=3, repo_root=tmp_path)
    summary = json.loads((report_dir / "comparison_summary.json").read_text(encoding="utf-8"))
    assert set(summary["by_strategy"]) == {"hex_grid", "rejection"}
    for stats in summary["by_strategy"].values():
        assert stats["n_runs"] == 2
        assert stats["separation_violations"] == 0
    with open(report_dir / "comparison_results.csv", newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4


def test_nearest_neighbour_cv_uniform_grid_is_zero() -> None:
    pts = [(float(x), float(y)) for x in range(0, 50, 10) for y in range(0, 50, 10)]
    assert nearest_neighbour_cv(pts) == pytest.approx(0.0)
    assert nearest_neighbour_cv([(0.0, 0.0)]) == 0.0
