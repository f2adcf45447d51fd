# tests/test_reporting.py
"""
layout.json contract: required keys exist, primitives carry no mode, folded
relations name their fold child. Files are written under tmp_path.
"""

from __future__ import annotations

import json
from pathlib import Path

from autolayout.core.layout import run_layout
from autolayout.core.reporting import (
    SCHEMA_VERSION,
    ensure_report_dir,
    run_metadata_dict,
    summary_to_dict,
    write_layout_json,
    write_run_metadata_json,
)
from autolayout.core.schema import Primitive, Relation
from autolayout.core.text_metrics import MonospaceMetrics
from autolayout.core.types import LayoutStyle, LayoutSummary

REQUIRED_KEYS = [
    "schema_version",
    "width_budget",
    ("summary", "width"),
    ("summary", "height"),
    ("summary", "table_count"),
    ("summary", "outline_count"),
    ("root", "field"),
    ("root", "mode"),
    ("root", "width"),
    ("root", "height"),
    ("root", "indentation"),
    ("root", "average_cardinality"),
    ("root", "children"),
]


def _summary() -> LayoutSummary:
    schema = Relation("root", children=[Primitive("a"), Primitive("b")])
    data = [{"a": "hello", "b": "world"}, {"a": "x", "b": "y"}]
    return run_layout(schema, data, 400, metrics=MonospaceMetrics(char_width=10))


def test_summary_dict_has_required_keys() -> None:
    out = summary_to_dict(_summary())
    assert out["schema_version"] == SCHEMA_VERSION
    for key in REQUIRED_KEYS:
        if isinstance(key, tuple):
            assert key[1] in out[key[0]], key
        else:
            assert key in out, key


def test_primitive_nodes_have_no_mode() -> None:
    out = summary_to_dict(_summary())
    for child in out["root"]["children"]:
        assert child["kind"] == "primitive"
        assert "mode" not in child
        assert "children" not in child


def test_folded_node_names_fold_child() -> None:
    schema = Relation("orders", children=[Relation("items", children=[Primitive("sku")])])
    summary = run_layout(schema, [{"items": [{"sku": "a"}]}], 300, metrics=MonospaceMetrics())
    out = summary_to_dict(summary)
    assert out["root"]["folded_into"] == "items"
    assert "folded_into" not in out["root"]["children"][0]


def test_write_layout_json(tmp_path: Path) -> None:
    report_dir = ensure_report_dir(tmp_path, "run1", output_dir="reports")
    assert report_dir == (tmp_path / "reports" / "run1").resolve()
    path = write_layout_json(report_dir, _summary())
    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded["root"]["field"] == "root"
    assert loaded["summary"]["table_count"] + loaded["summary"]["outline_count"] == 1


def test_run_metadata(tmp_path: Path) -> None:
    meta = run_metadata_dict("r", "data.json", None, 400.0, "DejaVu Sans", 14.0, LayoutStyle())
    assert meta["timestamp_utc"]
    assert meta["style"]["snap_unit"] == 1.0
    path = write_run_metadata_json(tmp_path, "r", "data.json", None, 400.0, "DejaVu Sans", 14.0, LayoutStyle())
    assert json.loads(path.read_text(encoding="utf-8"))["run_name"] == "r"
