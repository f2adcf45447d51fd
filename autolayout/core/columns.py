# autolayout/core/columns.py
"""
Column set packing for outline mode.
Sibling fields are grouped into horizontal bands (column sets); within a band the
fields are spread over equal-width columns and balanced so the tallest column is
as short as possible. Rebuilt on every compress; never kept across passes.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, TypeVar

from autolayout.core.node_layout import NodeLayout

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Column:
    """One vertical stack of fields inside a column set."""

    def __init__(self, width: float, cardinality: int, fields: list[NodeLayout] | None = None) -> None:
        self.width = width
        self.cardinality = cardinality
        self.fields: list[NodeLayout] = list(fields) if fields else []

    def element_height(self, fields: Iterable[NodeLayout] | None = None) -> float:
        stack = self.fields if fields is None else fields
        return sum(f.cell_height(self.cardinality, f.justified_width) for f in stack)

    def slide_right(self, neighbor: "Column") -> bool:
        """
        Move this column's last field to the top of neighbor when that strictly
        lowers the taller of the two columns. A column never gives up its last field.
        """
        if len(self.fields) <= 1:
            return False
        before = max(self.element_height(), neighbor.element_height())
        moved = self.fields[-1]
        after = max(
            self.element_height(self.fields[:-1]),
            neighbor.element_height([moved] + neighbor.fields),
        )
        if after >= before:
            return False
        self.fields.pop()
        neighbor.fields.insert(0, moved)
        return True

    def __repr__(self) -> str:
        return f"Column [{self.width} {[f.field for f in self.fields]}]"


class ColumnSet:
    """A band of sibling fields sharing one outline row."""

    def __init__(self) -> None:
        self.fields: list[NodeLayout] = []
        self.columns: list[Column] = []
        self.element_height = 0.0
        self.width = 0.0

    def add(self, field: NodeLayout) -> None:
        self.fields.append(field)

    def compress(self, cardinality: int, justified_width: float, label_width: float) -> float:
        """
        Spread the fields over as many equal columns as the widest field allows,
        then balance column heights. Returns the set's element height.
        """
        self.width = justified_width
        metrics = self.fields[0].metrics
        widest = max(label_width + f.layout_width() for f in self.fields)
        if widest > 0:
            count = min(len(self.fields), max(1, int(justified_width // widest)))
        else:
            count = len(self.fields)

        column_width = justified_width if count == 1 else metrics.relax(justified_width / count)
        field_width = max(column_width - label_width, metrics.style.snap_unit)
        for f in self.fields:
            f.compress(field_width)
        if count == 1:
            self.columns = [Column(column_width, cardinality, self.fields)]
            self.element_height = self.columns[0].element_height()
            return self.element_height

        self.columns = self._seed(count, column_width, cardinality)
        self.element_height = max(c.element_height() for c in self.columns)

        rounds = 0
        while True:
            last_height = self.element_height
            for left, right in zip(self.columns, self.columns[1:]):
                while left.slide_right(right):
                    pass
            self.element_height = max(c.element_height() for c in self.columns)
            rounds += 1
            if self.element_height >= last_height:
                break
        logger.debug(
            "column set %s: %d columns, height %.1f after %d rounds",
            [f.field for f in self.fields], count, self.element_height, rounds,
        )
        return self.element_height

    def _seed(self, count: int, column_width: float, cardinality: int) -> list[Column]:
        """
        Initial placement, filled from the right at the mean column height. Every
        column gets at least one field; the first column takes what is left over.
        """
        columns = [Column(column_width, cardinality) for _ in range(count)]
        heights = [f.cell_height(cardinality, f.justified_width) for f in self.fields]
        target = sum(heights) / count
        index = count - 1
        filled = 0.0
        remaining = len(self.fields)
        for f, h in zip(reversed(self.fields), reversed(heights)):
            column = columns[index]
            if column.fields and index > 0 and (filled + h > target or remaining <= index):
                index -= 1
                column = columns[index]
                filled = 0.0
            column.fields.insert(0, f)
            filled += h
            remaining -= 1
        return columns

    def field_names(self) -> list[list[str]]:
        return [[f.field for f in c.fields] for c in self.columns]

    def __repr__(self) -> str:
        return f"ColumnSet [{self.columns}]"


def pack_fields(
    children: list[T],
    label_width: float,
    justified_width: float,
    width_of: Callable[[T], float],
) -> list[list[T]]:
    """
    Group children, in order, into bands. A band accumulates children while its
    summed label + child width stays within half the justified width; a child
    wider than half the justified width gets a band of its own.
    """
    half_width = justified_width / 2.0
    bands: list[list[T]] = []
    current: list[T] | None = None
    current_width = 0.0
    for child in children:
        child_width = label_width + width_of(child)
        if child_width > half_width:
            bands.append([child])
            current = None
            continue
        if current is None or current_width + child_width > half_width:
            current = []
            bands.append(current)
            current_width = 0.0
        current.append(child)
        current_width += child_width
    return bands


def pack_column_sets(
    children: list[NodeLayout],
    label_width: float,
    justified_width: float,
) -> list[ColumnSet]:
    """Column sets for the children of an outline-mode relation, in schema order."""
    column_sets: list[ColumnSet] = []
    for band in pack_fields(children, label_width, justified_width, lambda c: c.layout_width()):
        column_set = ColumnSet()
        for child in band:
            column_set.add(child)
        column_sets.append(column_set)
    return column_sets
