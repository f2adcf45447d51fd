# autolayout/core/runner.py
"""
CLI entrypoint: load a data sample (and optionally a schema), run one layout pass,
write layout.json, run_metadata.json and, on request, a wireframe PNG.
Without --schema the schema is inferred from the data.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from autolayout.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    DEFAULT_WIDTH_PX,
    LAYOUT_DEBUG,
    REPORTS_DIR,
)
from autolayout.core.error_codes import INPUT_NOT_FOUND, LayoutContractError, SchemaError, user_message
from autolayout.core.io import load_json, load_schema
from autolayout.core.layout import run_layout
from autolayout.core.reporting import (
    ensure_report_dir,
    write_layout_json,
    write_run_metadata_json,
)
from autolayout.core.schema import infer_schema
from autolayout.core.text_metrics import MonospaceMetrics, PillowTextMetrics, TextMetrics

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Adaptive outline/table layout of a JSON document.")
    p.add_argument("--data", type=str, required=True, help="JSON data sample path")
    p.add_argument("--schema", type=str, default=None, help="Schema description JSON (default: infer from data)")
    p.add_argument("--root-field", type=str, default="root", dest="root_field", help="Root field name when inferring")
    p.add_argument("--width", type=float, default=DEFAULT_WIDTH_PX, help="Width budget (px)")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family", help="Font family")
    p.add_argument("--font-size", type=float, default=DEFAULT_FONT_SIZE_PX, dest="font_size", help="Font size (px)")
    p.add_argument("--monospace", action="store_true", help="Use fixed-width metrics instead of Pillow")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--render", action="store_true", help="Also write layout.png wireframe")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if (verbose or LAYOUT_DEBUG) else logging.WARNING
    logging.basicConfig(level=level, format="[%(name)s] %(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    try:
        data = load_json(args.data, repo_root)
        root = load_schema(args.schema, repo_root) if args.schema else infer_schema(data, args.root_field)
    except FileNotFoundError as e:
        logger.error("%s %s", user_message(INPUT_NOT_FOUND), e)
        return 2
    except SchemaError as e:
        logger.error("%s %s", user_message(e.error_key), e)
        return 2

    metrics: TextMetrics
    if args.monospace:
        metrics = MonospaceMetrics()
    else:
        metrics = PillowTextMetrics(args.font_family, args.font_size)

    try:
        summary = run_layout(root, data, args.width, metrics)
    except LayoutContractError as e:
        logger.error("%s", e)
        return 1

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    layout_path = write_layout_json(report_dir, summary)
    meta_path = write_run_metadata_json(
        report_dir,
        args.run_name,
        args.data,
        args.schema,
        args.width,
        args.font_family,
        args.font_size,
        metrics.style,
    )
    print(layout_path)
    print(meta_path)
    if args.render:
        from autolayout.core.render import render_layout
        png_path = report_dir / "layout.png"
        render_layout(summary, png_path)
        print(png_path)
    print(f"Size: {summary.width:.0f} x {summary.height:.0f} ({summary.table_count} tables, {summary.outline_count} outlines)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
