# autolayout/core/node_layout.py
"""
Shared contract of per-node layout objects and the table indentation state machine.
One layout object exists per schema node per pass; it owns only its own transient
sizing state. Passes over one tree must be serialized by the caller.
"""

from __future__ import annotations

from typing import Any

from autolayout.core.text_metrics import TextMetrics
from autolayout.core.types import Indent, LayoutStyle, NodeResult


def child_indentation(parent: Indent, child: Indent, indentation: float, style: LayoutStyle) -> float:
    """
    Cumulative inset of a nested table column, keyed by (parent tag, child tag).
    Shared edges carry the inset once: only columns on the parent's own outer
    edge inherit the parent's indentation.
    """
    if parent is Indent.LEFT:
        if child in (Indent.LEFT, Indent.SINGULAR):
            return indentation + style.nested_left_inset
        if child is Indent.RIGHT:
            return style.nested_right_inset
        return 0.0
    if parent is Indent.RIGHT:
        if child is Indent.LEFT:
            return style.nested_left_inset
        if child in (Indent.SINGULAR, Indent.RIGHT):
            return indentation + style.nested_right_inset
        return 0.0
    if parent is Indent.SINGULAR:
        half = indentation / 2.0
        if child is Indent.LEFT:
            return half + style.nested_left_inset
        if child is Indent.RIGHT:
            return half + style.nested_right_inset
        if child is Indent.SINGULAR:
            return indentation + style.nested_inset
        return 0.0
    # TOP and NONE
    if child is Indent.LEFT:
        return style.nested_left_inset
    if child is Indent.RIGHT:
        return style.nested_right_inset
    if child is Indent.SINGULAR:
        return style.nested_inset
    return 0.0


class NodeLayout:
    """Base of PrimitiveLayout and RelationLayout."""

    def __init__(self, metrics: TextMetrics) -> None:
        self.metrics = metrics
        self.style = metrics.style
        self.height = -1.0
        self.justified_width = -1.0
        self.indentation = 0.0
        self.label_width = 0.0
        self.average_cardinality = 1

    @property
    def field(self) -> str:
        raise NotImplementedError

    @property
    def label(self) -> str:
        raise NotImplementedError

    @property
    def is_relation(self) -> bool:
        return False

    def clear(self) -> None:
        """Drop width/height memoized by the previous pass."""
        self.height = -1.0
        self.justified_width = -1.0
        self.indentation = 0.0

    def own_label_width(self) -> float:
        return self.metrics.snap(self.metrics.label_width(self.label))

    def column_header_height(self) -> float:
        return self.metrics.snap(self.metrics.line_height() + self.style.text_vertical_inset)

    def measure(self, data: Any, is_singular: bool) -> float:
        raise NotImplementedError

    def layout(self, width: float) -> float:
        raise NotImplementedError

    def outline_extent(self) -> float:
        """Width this node occupies in outline mode after the last layout call."""
        raise NotImplementedError

    def layout_width(self) -> float:
        raise NotImplementedError

    def compress(self, available: float) -> None:
        raise NotImplementedError

    def justify(self, width: float) -> float:
        raise NotImplementedError

    def nest_table_column(self, indent: Indent, indentation: float) -> float:
        raise NotImplementedError

    def table_column_width(self) -> float:
        raise NotImplementedError

    def cell_height(self, cardinality: int, available_width: float) -> float:
        raise NotImplementedError

    def result(self) -> NodeResult:
        raise NotImplementedError
