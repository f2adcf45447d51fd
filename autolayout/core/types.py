# autolayout/core/types.py
"""
Dataclasses for layout style, per-node layout results and pass summaries.
Results are plain records consumed by the rendering layer; they hold no references
to schema or layout objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from autolayout.core.config import (
    CELL_VERTICAL_INSET,
    LIST_VERTICAL_INSET,
    NESTED_LEFT_INSET,
    NESTED_RIGHT_INSET,
    SNAP_UNIT,
    TABLE_HORIZONTAL_INSET,
    TABLE_VERTICAL_INSET,
    TEXT_HORIZONTAL_INSET,
    TEXT_VERTICAL_INSET,
)


NodeKind = Literal["primitive", "relation"]


class Indent(str, Enum):
    """Position of a table column among its siblings; drives nested border insets."""
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"
    SINGULAR = "singular"
    NONE = "none"

    @classmethod
    def of(cls, index: int, count: int) -> "Indent":
        """Position tag for the child at index among count siblings."""
        if count == 1:
            return cls.SINGULAR
        if index == 0:
            return cls.LEFT
        if index == count - 1:
            return cls.RIGHT
        return cls.NONE


@dataclass(frozen=True)
class LayoutStyle:
    """Inset constants (px) of the rendering surface. See config for defaults."""
    text_horizontal_inset: float = TEXT_HORIZONTAL_INSET
    text_vertical_inset: float = TEXT_VERTICAL_INSET
    cell_vertical_inset: float = CELL_VERTICAL_INSET
    list_vertical_inset: float = LIST_VERTICAL_INSET
    table_horizontal_inset: float = TABLE_HORIZONTAL_INSET
    table_vertical_inset: float = TABLE_VERTICAL_INSET
    nested_left_inset: float = NESTED_LEFT_INSET
    nested_right_inset: float = NESTED_RIGHT_INSET
    snap_unit: float = SNAP_UNIT

    @property
    def nested_inset(self) -> float:
        return self.nested_left_inset + self.nested_right_inset

    @classmethod
    def zero(cls, snap_unit: float = SNAP_UNIT) -> "LayoutStyle":
        """Style with every inset set to 0; widths then equal raw text widths."""
        return cls(
            text_horizontal_inset=0.0,
            text_vertical_inset=0.0,
            cell_vertical_inset=0.0,
            list_vertical_inset=0.0,
            table_horizontal_inset=0.0,
            table_vertical_inset=0.0,
            nested_left_inset=0.0,
            nested_right_inset=0.0,
            snap_unit=snap_unit,
        )


@dataclass
class NodeResult:
    """
    Final geometry of one schema node after a layout pass.
    column_sets lists, per outline band, the fields of each column (outline mode only).
    """
    field: str
    label: str
    kind: NodeKind
    width: float
    height: float
    use_table: bool = False
    indentation: float = 0.0
    average_cardinality: int = 1
    column_sets: list[list[list[str]]] = field(default_factory=list)
    children: list["NodeResult"] = field(default_factory=list)
    folded_into: str | None = None

    def find(self, field_name: str) -> "NodeResult | None":
        """Depth-first lookup by field name."""
        if self.field == field_name:
            return self
        for child in self.children:
            found = child.find(field_name)
            if found is not None:
                return found
        return None


@dataclass
class LayoutSummary:
    """Summary of one layout pass."""
    width_budget: float
    width: float
    height: float
    table_count: int
    outline_count: int
    root: NodeResult
