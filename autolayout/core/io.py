# autolayout/core/io.py
"""
Load data samples and schema descriptions from JSON files.
Schema description: {"field", "label"?, "kind": "relation"|"primitive",
"default_width"?, "auto_fold"?, "children"?: [...]}.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from autolayout.core.config import AUTO_FOLD
from autolayout.core.error_codes import SchemaError
from autolayout.core.schema import Primitive, Relation, SchemaNode


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def load_json(path: str | Path, repo_root: Path | None = None) -> Any:
    """Read a JSON document. Raises FileNotFoundError if path is missing."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"File not found: {resolved}")
    return json.loads(resolved.read_text(encoding="utf-8"))


def schema_from_dict(spec: Any) -> SchemaNode:
    """
    Build a schema tree from its JSON description.
    kind defaults to "relation" when children are given, else "primitive".
    """
    if not isinstance(spec, dict):
        raise SchemaError(f"Schema node must be an object, got {type(spec).__name__}")
    field = spec.get("field")
    if not isinstance(field, str) or not field:
        raise SchemaError(f"Schema node needs a non-empty 'field': {spec!r}")
    children = spec.get("children")
    kind = spec.get("kind", "relation" if children is not None else "primitive")
    label = spec.get("label")
    if kind == "primitive":
        if children:
            raise SchemaError(f"Primitive {field!r} cannot have children")
        return Primitive(field, label, default_width=float(spec.get("default_width", 0.0)))
    if kind != "relation":
        raise SchemaError(f"Unknown node kind {kind!r} for {field!r}")
    if children is not None and not isinstance(children, list):
        raise SchemaError(f"'children' of {field!r} must be a list")
    relation = Relation(field, label, auto_fold=bool(spec.get("auto_fold", AUTO_FOLD)))
    for child in children or []:
        relation.add_child(schema_from_dict(child))
    return relation


def schema_to_dict(node: SchemaNode) -> dict:
    """Inverse of schema_from_dict."""
    out: dict[str, Any] = {"field": node.field, "label": node.label}
    if isinstance(node, Relation):
        out["kind"] = "relation"
        out["auto_fold"] = node.auto_fold
        out["children"] = [schema_to_dict(c) for c in node.children]
    else:
        out["kind"] = "primitive"
        out["default_width"] = getattr(node, "default_width", 0.0)
    return out


def load_schema(path: str | Path, repo_root: Path | None = None) -> SchemaNode:
    """Load a schema description file. Raises FileNotFoundError or SchemaError."""
    return schema_from_dict(load_json(path, repo_root))
