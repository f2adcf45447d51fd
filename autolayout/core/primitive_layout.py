# autolayout/core/primitive_layout.py
"""
Layout of a scalar column: natural width from sampled values, wrapped height
at the justified width.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from autolayout.core.error_codes import JUSTIFIED_WIDTH_NOT_POSITIVE, LayoutContractError
from autolayout.core.node_layout import NodeLayout
from autolayout.core.schema import Primitive, as_list, text_rows
from autolayout.core.text_metrics import TextMetrics
from autolayout.core.types import Indent, NodeResult


class PrimitiveLayout(NodeLayout):

    def __init__(self, metrics: TextMetrics, primitive: Primitive) -> None:
        super().__init__(metrics)
        self.p = primitive
        self.column_width = 0.0
        self.average_width = 0.0
        self.max_width = 0.0
        self.max_rows = 1
        self.variable_length = False
        self.laid_out_width = 0.0

    @property
    def field(self) -> str:
        return self.p.field

    @property
    def label(self) -> str:
        return self.p.label or self.p.field

    def row_width(self, text: str) -> float:
        return self.metrics.text_width(text) + self.style.text_horizontal_inset

    def measure(self, data: Any, is_singular: bool) -> float:
        """
        Column width = max(label width, snap(max(default width, average width))).
        The average is taken per occurrence (mean row width, 1 when it has no rows),
        then across occurrences.
        """
        self.clear()
        self.label_width = self.own_label_width()
        occurrences = as_list(data)
        self.max_width = 0.0
        self.max_rows = 1
        per_occurrence: list[float] = []
        for occurrence in occurrences:
            rows = text_rows(occurrence)
            if not rows:
                per_occurrence.append(1.0)
                continue
            widths = np.array([self.row_width(row) for row in rows], dtype=float)
            self.max_width = max(self.max_width, float(widths.max()))
            self.max_rows = max(self.max_rows, len(rows))
            per_occurrence.append(float(widths.mean()))
        self.average_width = float(np.mean(per_occurrence)) if per_occurrence else 0.0
        self.column_width = max(
            self.label_width,
            self.metrics.snap(max(self.p.default_width, self.average_width)),
        )
        self.variable_length = self.max_width > self.average_width
        return self.column_width

    def layout(self, width: float) -> float:
        self.clear()
        self.laid_out_width = self.metrics.snap(width)
        return self.laid_out_width

    def outline_extent(self) -> float:
        return self.laid_out_width

    def layout_width(self) -> float:
        return self.column_width

    def table_column_width(self) -> float:
        return self.column_width

    def compress(self, available: float) -> None:
        self.justified_width = self.metrics.snap(available)

    def justify(self, width: float) -> float:
        self.justified_width = self.metrics.snap(width)
        return self.justified_width

    def nest_table_column(self, indent: Indent, indentation: float) -> float:
        self.indentation = indentation
        return self.table_column_width()

    def cell_height(self, cardinality: int, available_width: float) -> float:
        """
        Lines needed at the justified width times line height, plus padding.
        Variable-length columns reserve room for the longest sampled value with a
        half-line margin; fixed-length columns stack the most rows one occurrence holds.
        """
        if self.height > 0:
            return self.height
        justified = self.justified_width if self.justified_width > 0 else available_width
        if justified <= 0:
            raise LayoutContractError(JUSTIFIED_WIDTH_NOT_POSITIVE, f"{self.field}: {justified}")
        if self.variable_length:
            lines = math.ceil(self.max_width / justified + 0.5)
        else:
            lines = max(1, math.ceil(self.average_width / justified)) * self.max_rows
        self.height = self.metrics.snap(
            self.metrics.line_height() * lines + self.style.text_vertical_inset
        )
        return self.height

    def result(self) -> NodeResult:
        return NodeResult(
            field=self.field,
            label=self.label,
            kind="primitive",
            width=self.justified_width if self.justified_width > 0 else self.column_width,
            height=self.height,
            indentation=self.indentation,
        )

    def __repr__(self) -> str:
        return (
            f"PrimitiveLayout [{self.field} {self.height} "
            f"{{{self.column_width}, {self.justified_width}}}]"
        )
