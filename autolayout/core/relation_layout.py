# autolayout/core/relation_layout.py
"""
Layout of a collection/record node: cardinality estimation from sampled rows,
the outline-vs-table decision, column packing in outline mode, proportional
justification and indentation in table mode, and folding of single-relation
wrappers into their child.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from autolayout.core.columns import ColumnSet, pack_column_sets
from autolayout.core.config import MAX_AVERAGE_CARDINALITY, MIN_AVERAGE_CARDINALITY
from autolayout.core.error_codes import (
    NEGATIVE_AVAILABLE_WIDTH,
    NOT_A_TABLE,
    TABLE_WIDTH_NOT_POSITIVE,
    LayoutContractError,
)
from autolayout.core.node_layout import NodeLayout, child_indentation
from autolayout.core.schema import Relation, as_list, flatten
from autolayout.core.text_metrics import TextMetrics
from autolayout.core.types import Indent, NodeResult

logger = logging.getLogger(__name__)


def clamp_cardinality(value: int) -> int:
    return max(MIN_AVERAGE_CARDINALITY, min(MAX_AVERAGE_CARDINALITY, value))


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class RelationLayout(NodeLayout):
    """
    Sizing state of one relation for one pass. Holds non-owning references to the
    children's layouts; fold, when set, is the child every operation delegates to.
    """

    def __init__(self, metrics: TextMetrics, relation: Relation, children: list[NodeLayout]) -> None:
        super().__init__(metrics)
        self.r = relation
        self.children = children
        self.fold: RelationLayout | None = None
        self.use_table = False
        self.singular = False
        self.max_cardinality = 1
        self.column_width = 0.0
        self.outline_width = 0.0
        self.measured_table_width = 0.0
        self.table_width = 0.0
        self.row_height = -1.0
        self.indent = Indent.TOP
        self.column_sets: list[ColumnSet] = []

    @property
    def field(self) -> str:
        return self.r.field

    @property
    def label(self) -> str:
        return self.r.label or self.r.field

    @property
    def is_relation(self) -> bool:
        return True

    def clear(self) -> None:
        super().clear()
        self.use_table = False
        self.indent = Indent.TOP
        self.row_height = -1.0
        self.table_width = self.measured_table_width
        self.column_sets = []

    def resolve_cardinality(self, cardinality: int) -> int:
        if self.singular:
            return 1
        return max(1, min(cardinality, self.max_cardinality))

    # ----- measure -----

    def measure(self, data: Any, is_singular: bool) -> float:
        """
        Measure every child against its values aggregated over all sampled rows,
        children first. Width = shared label width + widest child.
        """
        self.clear()
        self.singular = is_singular
        fold = self.r.fold_target
        self.fold = self.children[0] if fold is not None else None  # type: ignore[assignment]
        if self.fold is not None:
            return self._measure_fold(data, is_singular)

        rows = as_list(data)
        self.max_cardinality = max(1, len(rows))
        self.label_width = max((c.own_label_width() for c in self.children), default=0.0)
        widest = 0.0
        table_sum = 0.0
        total_cardinality = 0
        effective_children = 0
        for child in self.children:
            aggregate: list[Any] = []
            cardinality = 0
            collection = False
            for row in rows:
                sub = row.get(child.field) if isinstance(row, dict) else None
                if isinstance(sub, list):
                    collection = True
                    aggregate.extend(sub)
                    cardinality += len(sub)
                else:
                    aggregate.append(sub)
            if collection:
                effective_children += 1
                total_cardinality += cardinality
            widest = max(widest, child.measure(aggregate, not collection))
            table_sum += child.table_column_width()

        if effective_children == 0:
            self.average_cardinality = MIN_AVERAGE_CARDINALITY
        else:
            self.average_cardinality = clamp_cardinality(
                _ceil_div(total_cardinality, len(rows) * effective_children)
            )
        self.column_width = self.metrics.snap(self.label_width + widest) if self.children else 0.0
        self.measured_table_width = self.metrics.snap(max(self.own_label_width(), table_sum))
        self.table_width = self.measured_table_width
        logger.debug(
            "measured %s: width %.1f, table %.1f, cardinality %d",
            self.field, self.column_width, self.measured_table_width, self.average_cardinality,
        )
        return self.column_width

    def _measure_fold(self, data: Any, is_singular: bool) -> float:
        assert self.fold is not None
        rows = as_list(data)
        counts = [len(as_list(row.get(self.fold.field))) for row in rows if isinstance(row, dict)]
        self.max_cardinality = max([1] + counts)
        if counts:
            self.average_cardinality = clamp_cardinality(_ceil_div(sum(counts), len(counts)))
        else:
            self.average_cardinality = MIN_AVERAGE_CARDINALITY
        flattened = flatten(rows, self.fold.field)
        nested_singular = not any(
            isinstance(row.get(self.fold.field), list) for row in rows if isinstance(row, dict)
        )
        self.column_width = self.fold.measure(flattened, is_singular and nested_singular)
        self.label_width = self.fold.label_width
        return self.column_width

    # ----- layout decision -----

    def standalone_table_width(self) -> float:
        """Width of this relation rendered as a table outside another table."""
        return self.metrics.snap(self.table_width + self.style.nested_inset + self.style.table_horizontal_inset)

    def layout(self, width: float) -> float:
        """
        Outline width from the children given the remaining width, then the table
        alternative from measured column widths; commit to table mode when it is no
        wider than the outline.
        """
        if self.fold is not None:
            return self.fold.layout(width)
        self.clear()
        nested = self.style.nested_inset
        available = max(0.0, self.metrics.snap(width - self.label_width - nested))
        for child in self.children:
            child.layout(available)
        widest = max((c.outline_extent() for c in self.children), default=0.0)
        self.outline_width = self.metrics.snap(widest + self.label_width)
        outline_total = self.metrics.snap(self.outline_width + nested)
        if not self.children:
            return outline_total
        table_total = self.standalone_table_width()
        if table_total <= outline_total:
            self.nest_table_column(Indent.TOP, 0.0)
            logger.debug("%s: table %.1f <= outline %.1f at width %.1f", self.field, table_total, outline_total, width)
            return self.standalone_table_width()
        logger.debug("%s: outline %.1f < table %.1f at width %.1f", self.field, outline_total, table_total, width)
        return outline_total

    def outline_extent(self) -> float:
        if self.fold is not None:
            return self.fold.outline_extent()
        return self.metrics.snap(self.outline_width + self.style.nested_inset)

    def layout_width(self) -> float:
        if self.fold is not None:
            return self.fold.layout_width()
        if self.use_table:
            return self.standalone_table_width()
        return self.metrics.snap(self.outline_width + self.style.nested_inset)

    def table_column_width(self) -> float:
        if self.fold is not None:
            return self.fold.table_column_width()
        if self.use_table and self.table_width <= 0:
            raise LayoutContractError(TABLE_WIDTH_NOT_POSITIVE, f"{self.label} tcw <= 0: {self.table_width}")
        return self.metrics.snap(self.table_width + self.style.nested_inset)

    def justified_column_width(self) -> float:
        """Width allotted to this relation as a table column, nested inset included."""
        return self.metrics.snap(self.justified_width + self.style.nested_inset)

    def nest_table_column(self, indent: Indent, indentation: float) -> float:
        """
        Commit this relation and every descendant to table mode; tables never hold
        outline-mode relations. Children get indentation from their position tags.
        """
        if self.fold is not None:
            return self.fold.nest_table_column(indent, indentation)
        self.use_table = True
        self.indent = indent
        self.indentation = indentation
        self.height = -1.0
        self.row_height = -1.0
        self.column_sets = []
        count = len(self.children)
        total = 0.0
        for index, child in enumerate(self.children):
            tag = Indent.of(index, count)
            total += child.nest_table_column(tag, child_indentation(indent, tag, indentation, self.style))
        self.table_width = self.metrics.snap(max(self.own_label_width(), total))
        return self.table_column_width()

    # ----- compress / justify -----

    def compress(self, available: float) -> None:
        """Outline: pack children into column sets and balance them. Table: justify."""
        if self.fold is not None:
            self.fold.compress(available)
            return
        if self.use_table:
            self.justify(max(available - self.style.table_horizontal_inset, self.table_column_width()))
            return
        self.justified_width = self.metrics.snap(available - self.style.nested_inset)
        self.column_sets = pack_column_sets(self.children, self.label_width, self.justified_width)
        for column_set in self.column_sets:
            column_set.compress(self.average_cardinality, self.justified_width, self.label_width)

    def justify(self, width: float) -> float:
        """
        Distribute width (less the nested inset) over the children in proportion to
        their table column widths. The last child takes the exact remainder.
        """
        if self.fold is not None:
            return self.fold.justify(width)
        if not self.use_table:
            raise LayoutContractError(NOT_A_TABLE, self.label)
        available = self.metrics.snap(width - self.style.nested_inset)
        if available < 0:
            raise LayoutContractError(NEGATIVE_AVAILABLE_WIDTH, f"{self.label}: {available}")
        if not self.children:
            self.justified_width = available
            return width
        widths = np.array([c.table_column_width() for c in self.children], dtype=float)
        total = float(widths.sum())
        if total <= 0:
            widths = np.ones(len(self.children))
            total = float(len(self.children))
        remaining = available
        justified = 0.0
        for child, child_table_width in zip(self.children[:-1], widths[:-1]):
            child_width = self.metrics.relax(available * float(child_table_width) / total)
            remaining -= child_width
            justified += child.justify(child_width)
        justified += self.children[-1].justify(remaining)
        self.justified_width = self.metrics.snap(justified)
        return width

    # ----- heights -----

    def column_header_height(self) -> float:
        if self.fold is not None:
            return self.fold.column_header_height()
        nested = max((c.column_header_height() for c in self.children), default=0.0)
        if not self.use_table:
            return super().column_header_height()
        return self.metrics.snap(super().column_header_height() + nested)

    def table_header_height(self) -> float:
        return max((c.column_header_height() for c in self.children), default=0.0)

    def element_height(self) -> float:
        """Tallest child cell of one table row."""
        return self.metrics.snap(max(
            (c.cell_height(self.average_cardinality, c.justified_width) for c in self.children),
            default=0.0,
        ))

    def cell_height(self, cardinality: int, available_width: float) -> float:
        """
        Height of cardinality rows of this relation. Memoized until the next clear.
        Top-level tables add their header row and table chrome; nested tables share
        the enclosing header.
        """
        if self.fold is not None:
            return self.fold.cell_height(cardinality * self.average_cardinality, available_width)
        if self.height > 0:
            return self.height
        rows = self.resolve_cardinality(cardinality)
        style = self.style
        if not self.use_table:
            element = sum(cs.element_height for cs in self.column_sets)
            self.height = self.metrics.snap(
                rows * (element + style.cell_vertical_inset) + style.list_vertical_inset
            )
            return self.height
        self.row_height = self.metrics.snap(self.element_height() + style.cell_vertical_inset)
        if self.indent is Indent.TOP:
            self.height = self.metrics.snap(
                rows * self.row_height + style.table_vertical_inset + self.table_header_height()
            )
        else:
            self.height = self.metrics.snap(rows * self.row_height + style.list_vertical_inset)
        return self.height

    # ----- results -----

    def result(self) -> NodeResult:
        if self.fold is not None:
            inner = self.fold.result()
            return NodeResult(
                field=self.field,
                label=self.label,
                kind="relation",
                width=inner.width,
                height=inner.height,
                use_table=inner.use_table,
                indentation=inner.indentation,
                average_cardinality=self.average_cardinality,
                children=[inner],
                folded_into=self.fold.field,
            )
        if self.use_table:
            width = self.justified_column_width() if self.justified_width > 0 else self.table_column_width()
        else:
            width = self.justified_width if self.justified_width > 0 else self.column_width
        return NodeResult(
            field=self.field,
            label=self.label,
            kind="relation",
            width=width,
            height=self.height,
            use_table=self.use_table,
            indentation=self.indentation,
            average_cardinality=self.average_cardinality,
            column_sets=[cs.field_names() for cs in self.column_sets],
            children=[c.result() for c in self.children],
        )

    def __repr__(self) -> str:
        return (
            f"RelationLayout [{self.field} {self.height} x {self.average_cardinality}, "
            f"{{{self.column_width}, {self.table_width}, {self.justified_width}}}]"
        )
