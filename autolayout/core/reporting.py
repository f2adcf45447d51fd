# autolayout/core/reporting.py
"""
Create reports/<run_name>/ and write layout.json and run_metadata.json.
layout.json mirrors the NodeResult tree: width, height, mode and indentation per node.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from autolayout.core.config import (
    AUTO_FOLD,
    MAX_AVERAGE_CARDINALITY,
    REPORTS_DIR,
    SNAP_UNIT,
)
from autolayout.core.types import LayoutStyle, LayoutSummary, NodeResult

SCHEMA_VERSION = "1.0"


def result_to_dict(result: NodeResult) -> dict:
    """Nested dict for one node and its descendants."""
    out = {
        "field": result.field,
        "label": result.label,
        "kind": result.kind,
        "mode": "table" if result.use_table else "outline",
        "width": result.width,
        "height": result.height,
        "indentation": result.indentation,
        "average_cardinality": result.average_cardinality,
        "column_sets": result.column_sets,
        "children": [result_to_dict(c) for c in result.children],
    }
    if result.kind == "primitive":
        out.pop("mode")
        out.pop("column_sets")
        out.pop("average_cardinality")
        out.pop("children")
    if result.folded_into is not None:
        out["folded_into"] = result.folded_into
    return out


def summary_to_dict(summary: LayoutSummary) -> dict:
    """Exact structure for layout.json."""
    return {
        "schema_version": SCHEMA_VERSION,
        "width_budget": summary.width_budget,
        "summary": {
            "width": summary.width,
            "height": summary.height,
            "table_count": summary.table_count,
            "outline_count": summary.outline_count,
        },
        "root": result_to_dict(summary.root),
    }


def run_metadata_dict(
    run_name: str,
    data_path: str,
    schema_path: str | None,
    width: float,
    font_family: str,
    font_size_px: float,
    style: LayoutStyle,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "data_path": data_path,
        "schema_path": schema_path,
        "width": width,
        "font_family": font_family,
        "font_size_px": font_size_px,
        "style": {
            "text_horizontal_inset": style.text_horizontal_inset,
            "text_vertical_inset": style.text_vertical_inset,
            "cell_vertical_inset": style.cell_vertical_inset,
            "list_vertical_inset": style.list_vertical_inset,
            "table_horizontal_inset": style.table_horizontal_inset,
            "table_vertical_inset": style.table_vertical_inset,
            "nested_left_inset": style.nested_left_inset,
            "nested_right_inset": style.nested_right_inset,
            "snap_unit": style.snap_unit,
        },
        "config": {
            "AUTO_FOLD": AUTO_FOLD,
            "MAX_AVERAGE_CARDINALITY": MAX_AVERAGE_CARDINALITY,
            "SNAP_UNIT": SNAP_UNIT,
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


def write_layout_json(report_dir: Path, summary: LayoutSummary) -> Path:
    """Write layout.json to report_dir. Returns path to file."""
    path = report_dir / "layout.json"
    path.write_text(json.dumps(summary_to_dict(summary), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    data_path: str,
    schema_path: str | None,
    width: float,
    font_family: str,
    font_size_px: float,
    style: LayoutStyle,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, data_path, schema_path, width, font_family, font_size_px, style)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
