# autolayout/core/schema.py
"""
Schema tree (Primitive, Relation) describing document shape, plus helpers for
JSON-shaped data (dict / list / scalar / None).
The schema is structure only; per-pass sizing state lives in the layout objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from autolayout.core.config import AUTO_FOLD

ID_FIELD = "id"


def as_list(value: Any) -> list[Any]:
    """None -> [], list -> itself, anything else -> [value]."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_text(value: Any) -> str:
    """Display text of a value; array elements are joined with newlines."""
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(scalar_text(v) for v in value)
    return scalar_text(value)


def text_rows(value: Any) -> list[str]:
    """Rows of one scalar occurrence: array elements and embedded lines each become a row."""
    rows: list[str] = []
    for item in as_list(value):
        if item is None:
            continue
        rows.extend(scalar_text(item).split("\n"))
    return rows


def extract_field(data: Any, field_name: str) -> list[Any]:
    """
    Value of field_name across data, flattened one level.
    Missing keys and non-object elements contribute nothing.
    """
    if data is None:
        return []
    if not isinstance(data, list):
        if not isinstance(data, dict):
            return []
        resolved = data.get(field_name)
        if resolved is None:
            return []
        return resolved if isinstance(resolved, list) else [resolved]
    extracted: list[Any] = []
    for element in data:
        if not isinstance(element, dict):
            continue
        resolved = element.get(field_name)
        if resolved is None:
            continue
        if isinstance(resolved, list):
            extracted.extend(resolved)
        else:
            extracted.append(resolved)
    return extracted


def flatten(data: Any, field_name: str) -> list[Any]:
    """Concatenate field_name of every row into one flat collection."""
    flattened: list[Any] = []
    for row in as_list(data):
        if isinstance(row, dict):
            flattened.extend(as_list(row.get(field_name)))
    return flattened


@dataclass
class SchemaNode:
    field: str
    label: str | None = None

    def __post_init__(self) -> None:
        if self.label is None:
            self.label = self.field

    @property
    def is_relation(self) -> bool:
        return False

    def extract_from(self, data: Any) -> list[Any]:
        return extract_field(data, self.field)

    def describe(self, indent: int = 0) -> str:
        return f"{type(self).__name__} [{self.label}]"


@dataclass
class Primitive(SchemaNode):
    """Scalar leaf. default_width is a minimum width hint (px)."""
    default_width: float = 0.0


@dataclass
class Relation(SchemaNode):
    """Collection or record node. Children keep insertion order, which is display order."""
    children: list[SchemaNode] = field(default_factory=list)
    auto_fold: bool = AUTO_FOLD

    @property
    def is_relation(self) -> bool:
        return True

    @property
    def fold_target(self) -> "Relation | None":
        """The single relation child this node folds into, if folding applies."""
        if self.auto_fold and len(self.children) == 1 and self.children[0].is_relation:
            return self.children[0]  # type: ignore[return-value]
        return None

    def add_child(self, child: SchemaNode) -> None:
        self.children.append(child)

    def get_child(self, field_name: str) -> SchemaNode | None:
        for child in self.children:
            if child.field == field_name:
                return child
        return None

    def extract_from(self, data: Any) -> list[Any]:
        extracted = extract_field(data, self.field)
        fold = self.fold_target
        if fold is not None:
            return fold.extract_from(extracted)
        return extracted

    def describe(self, indent: int = 0) -> str:
        lines = [f"Relation [{self.label}]"]
        for child in self.children:
            lines.append("    " * indent + "  - " + child.describe(indent + 1))
        return "\n".join(lines)


SchemaTree = Union[Primitive, Relation]


def _infer_node(field_name: str, values: list[Any]) -> SchemaNode:
    objects = [v for v in values if isinstance(v, dict)]
    if not objects:
        return Primitive(field_name)
    relation = Relation(field_name)
    seen: dict[str, list[Any]] = {}
    for obj in objects:
        for key, value in obj.items():
            if key == ID_FIELD:
                continue
            seen.setdefault(key, []).extend(as_list(value))
    for key, child_values in seen.items():
        relation.add_child(_infer_node(key, child_values))
    return relation


def infer_schema(data: Any, field_name: str = "root") -> SchemaNode:
    """
    Derive a schema tree from a data sample: objects become relations, scalars
    primitives. Fields named 'id' are elided; children follow first-seen key order.
    """
    values: list[Any] = []
    for item in as_list(data):
        values.extend(as_list(item))
    return _infer_node(field_name, values)
