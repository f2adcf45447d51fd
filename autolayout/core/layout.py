# autolayout/core/layout.py
"""
Layout driver: builds the per-pass layout tree for a schema tree and runs
measure -> layout -> compress/justify -> cell heights.
A pass never reuses layout objects from an earlier pass. Passes over one schema tree
must be serialized by the caller; concurrent passes on the same tree are undefined.
"""

from __future__ import annotations

import logging
from typing import Any

from autolayout.core.error_codes import SchemaError
from autolayout.core.node_layout import NodeLayout
from autolayout.core.primitive_layout import PrimitiveLayout
from autolayout.core.relation_layout import RelationLayout
from autolayout.core.schema import Primitive, Relation, SchemaNode, as_list
from autolayout.core.text_metrics import PillowTextMetrics, TextMetrics
from autolayout.core.types import LayoutSummary, NodeResult

logger = logging.getLogger(__name__)


def build_layout(node: SchemaNode, metrics: TextMetrics) -> NodeLayout:
    """Same-shaped tree of fresh layout objects for node and its descendants."""
    if isinstance(node, Relation):
        children = [build_layout(child, metrics) for child in node.children]
        return RelationLayout(metrics, node, children)
    if isinstance(node, Primitive):
        return PrimitiveLayout(metrics, node)
    raise SchemaError(f"Unknown schema node kind: {type(node).__name__}")


def _count_modes(result: NodeResult) -> tuple[int, int]:
    tables = outlines = 0
    if result.kind == "relation" and result.folded_into is None:
        if result.use_table:
            tables += 1
        else:
            outlines += 1
    for child in result.children:
        t, o = _count_modes(child)
        tables += t
        outlines += o
    return tables, outlines


def run_layout_pass(
    layout: NodeLayout,
    data: Any,
    width: float,
    cardinality: int | None = None,
) -> NodeResult:
    """
    One full pass on an existing layout tree. Every stage resets the memoized
    state it owns, so repeating a pass with unchanged inputs gives identical output.
    """
    metrics = layout.metrics
    layout.measure(data, not isinstance(data, list))
    snapped = metrics.snap(width)
    layout.layout(snapped)
    layout.compress(snapped)
    rows = cardinality if cardinality is not None else max(1, len(as_list(data)))
    layout.cell_height(rows, snapped)
    return layout.result()


def run_layout(
    root: SchemaNode,
    data: Any,
    width: float,
    metrics: TextMetrics | None = None,
    cardinality: int | None = None,
) -> LayoutSummary:
    """
    Lay out root over a data sample within a width budget.
    data holds the root's rows (a list) or a single record. cardinality is the
    number of root rows to size for; defaults to the sample's row count.
    """
    if metrics is None:
        metrics = PillowTextMetrics()
    layout = build_layout(root, metrics)
    result = run_layout_pass(layout, data, width, cardinality=cardinality)
    tables, outlines = _count_modes(result)
    logger.debug(
        "layout %s at %.1f: %.1f x %.1f, %d tables, %d outlines",
        root.field, width, result.width, result.height, tables, outlines,
    )
    return LayoutSummary(
        width_budget=width,
        width=result.width,
        height=result.height,
        table_count=tables,
        outline_count=outlines,
        root=result,
    )
