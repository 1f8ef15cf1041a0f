# anchorplan/core/runner.py
"""
CLI entrypoint: load project.json, distribute anchors, render, export.
Default project: project.json (repo-relative).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from anchorplan.core.config import DEFAULT_PROJECT_PATH, LOG_LEVEL, SEED
from anchorplan.core.error_codes import user_message
from anchorplan.core.io import load_project
from anchorplan.core.placement import STRATEGIES, run_distribution
from anchorplan.core.render import render_after, render_before
from anchorplan.core.reporting import (
    ensure_report_dir,
    write_anchors_json,
    write_run_metadata_json,
)

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Distribute anchors over blueprint zones.")
    p.add_argument("--project", type=str, default=DEFAULT_PROJECT_PATH, help="Project JSON path (repo-relative)")
    p.add_argument("--strategy", type=str, default=None, choices=sorted(STRATEGIES), help="Override project strategy")
    p.add_argument("--additional", type=int, default=None, help="Override additional anchors")
    p.add_argument("--container", type=str, default=None, help="Override container size, e.g. '1000x600'")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--seed", type=int, default=SEED, help="Random seed")
    p.add_argument("--output-dir", type=str, default="reports", dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--compare", type=int, default=0, help="Compare strategies over N runs instead of a single run")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip PNG rendering")
    return p.parse_args(argv)


def parse_size(s: str) -> tuple[float, float]:
    """Parse 'WxH' into (w, h)."""
    parts = s.lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ValueError(f"Size must look like 1000x600, got {s!r}")
    return (float(parts[0]), float(parts[1]))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    request, image = load_project(args.project, repo_root=repo_root)
    if args.strategy:
        request.strategy = args.strategy
    if args.additional is not None:
        request.additional_anchors = args.additional
    if args.container:
        request.container_size = parse_size(args.container)

    if args.compare > 0:
        from anchorplan.core.compare import run_comparison
        out = run_comparison(
            request,
            run_name=args.run_name,
            n_runs=args.compare,
            seed=args.seed,
            repo_root=repo_root,
            output_dir=args.output_dir,
        )
        print(out / "comparison_summary.json")
        return 0

    result = run_distribution(request, seed=args.seed)
    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    anchors_path = write_anchors_json(report_dir, result, request)
    write_run_metadata_json(report_dir, args.run_name, args.project, result.strategy, args.seed)
    print(anchors_path)

    if not result.ok:
        print("Error:", user_message(result.error_key))
        return 1

    if not args.no_render and result.geometry is not None:
        before_path = report_dir / "before.png"
        after_path = report_dir / "after.png"
        render_before(result.geometry, request.zones, before_path, exclusions=request.exclusion_zones, image=image)
        render_after(
            result.geometry, request.zones, result, after_path,
            exclusions=request.exclusion_zones, image=image,
        )
        print(before_path)
        print(after_path)

    print(f"Placed {result.placed} of {result.requested} anchors ({result.strategy})")
    for w in result.warnings:
        print("Warning:", w)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
