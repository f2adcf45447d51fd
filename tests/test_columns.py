# tests/test_columns.py
"""
Column set packing (half-width bands) and column height balancing.
"""

from __future__ import annotations

from autolayout.core.columns import Column, ColumnSet, pack_column_sets, pack_fields
from autolayout.core.primitive_layout import PrimitiveLayout
from autolayout.core.schema import Primitive
from autolayout.core.text_metrics import MonospaceMetrics
from autolayout.core.types import LayoutStyle


def _metrics() -> MonospaceMetrics:
    return MonospaceMetrics(char_width=10, line_height=10, style=LayoutStyle.zero())


def _field(metrics: MonospaceMetrics, name: str, value: str) -> PrimitiveLayout:
    p = PrimitiveLayout(metrics, Primitive(name))
    p.measure([value], True)
    return p


def test_pack_fields_half_width_rule() -> None:
    bands = pack_fields([50, 50, 50, 200], 0, 220, lambda w: w)
    assert bands == [[50, 50], [50], [200]]


def test_pack_fields_counts_label_width() -> None:
    bands = pack_fields([40, 40, 40], 10, 200, lambda w: w)
    assert bands == [[40, 40], [40]]


def test_pack_fields_wide_child_splits_band() -> None:
    bands = pack_fields([10, 300, 10, 10], 0, 100, lambda w: w)
    assert bands == [[10], [300], [10, 10]]


def test_pack_column_sets_keeps_schema_order() -> None:
    m = _metrics()
    fields = [_field(m, n, "x" * k) for n, k in (("a", 2), ("b", 2), ("c", 15), ("d", 1))]
    sets = pack_column_sets(fields, 10, 200)
    names = [[f.field for f in cs.fields] for cs in sets]
    assert names == [["a", "b"], ["c"], ["d"]]


def test_equal_fields_get_one_column_each() -> None:
    m = _metrics()
    cs = ColumnSet()
    for name in "abcd":
        cs.add(_field(m, name, "abcd"))
    height = cs.compress(1, 200, 10)
    assert cs.field_names() == [["a"], ["b"], ["c"], ["d"]]
    assert height == 10
    assert all(f.justified_width == 40 for f in cs.fields)


def test_narrow_set_uses_single_column() -> None:
    m = _metrics()
    cs = ColumnSet()
    for name in "abc":
        cs.add(_field(m, name, "abcd"))
    height = cs.compress(1, 60, 10)
    assert cs.field_names() == [["a", "b", "c"]]
    assert height == 30


def test_slide_right_only_when_max_height_drops() -> None:
    m = _metrics()
    fields = [_field(m, n, "ab") for n in "abc"]
    for f in fields:
        f.compress(20)
    left = Column(20, 1, fields)
    right = Column(20, 1)
    assert left.slide_right(right)
    assert [f.field for f in left.fields] == ["a", "b"]
    assert [f.field for f in right.fields] == ["c"]
    assert not left.slide_right(right)


def test_column_keeps_its_last_field() -> None:
    m = _metrics()
    f = _field(m, "a", "ab")
    f.compress(20)
    assert not Column(20, 1, [f]).slide_right(Column(20, 1))


def test_balanced_columns_preserve_order_and_cover_all_fields() -> None:
    m = _metrics()
    values = ["abcd", "ab", "abcdefgh", "a", "abc", "abcdef"]
    fields = [_field(m, f"f{i}", v) for i, v in enumerate(values)]
    cs = ColumnSet()
    for f in fields:
        cs.add(f)
    height = cs.compress(2, 300, 10)
    names = [n for column in cs.field_names() for n in column]
    assert names == [f.field for f in fields]
    assert all(column.fields for column in cs.columns)
    assert height == max(c.element_height() for c in cs.columns)
    single = sum(f.cell_height(2, f.justified_width) for f in fields)
    assert height <= single
