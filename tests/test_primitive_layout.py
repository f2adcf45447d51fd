# tests/test_primitive_layout.py
"""
Primitive measurement and wrapped height. Monospace metrics, 10 px per character,
zero insets, so widths equal character counts x 10.
"""

from __future__ import annotations

import pytest

from autolayout.core.error_codes import JUSTIFIED_WIDTH_NOT_POSITIVE, LayoutContractError
from autolayout.core.primitive_layout import PrimitiveLayout
from autolayout.core.schema import Primitive
from autolayout.core.text_metrics import MonospaceMetrics
from autolayout.core.types import LayoutStyle


def _metrics() -> MonospaceMetrics:
    return MonospaceMetrics(char_width=10, line_height=10, style=LayoutStyle.zero())


def test_measure_label_wider_than_average() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("name", "Name"))
    width = p.measure(["Alice", "Bob"], False)
    assert p.average_width == 40
    assert p.max_width == 50
    assert p.label_width == 40
    assert width == 40
    assert p.variable_length


def test_measure_uses_default_width_hint() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("a", default_width=120))
    assert p.measure(["xy"], True) == 120


def test_measure_empty_data_falls_back_to_label() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("label"))
    assert p.measure([], True) == 50
    assert p.average_width == 0


def test_missing_values_count_as_narrow_rows() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("a"))
    p.measure([None, "abcdefghij"], False)
    assert p.average_width == pytest.approx((1 + 100) / 2)


def test_variable_length_height_reserves_longest_value() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("name", "Name"))
    p.measure(["Alice", "Bob"], False)
    p.compress(40)
    # ceil(50 / 40 + 0.5) = 2 lines
    assert p.cell_height(1, 40) == 20


def test_fixed_length_height_wraps_average() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("code"))
    p.measure(["abcd", "wxyz"], False)
    assert not p.variable_length
    p.compress(20)
    assert p.cell_height(1, 20) == 20
    p.measure(["abcd", "wxyz"], False)
    p.compress(80)
    assert p.cell_height(1, 80) == 10


def test_multi_row_values_multiply_lines() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("x"))
    p.measure([["a", "b", "c"]], True)
    assert p.max_rows == 3
    p.compress(10)
    assert p.cell_height(1, 10) == 30


def test_variable_length_multi_row_uses_longest_value_only() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("x"))
    p.measure([["abcdef", "a", "a"], "ab"], False)
    assert p.max_rows == 3
    assert p.variable_length
    p.compress(40)
    # ceil(60 / 40 + 0.5) = 2 lines, not multiplied by the row count
    assert p.cell_height(1, 40) == 20


def test_height_memoized_until_next_measure() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("code"))
    p.measure(["abcd"], True)
    p.compress(20)
    first = p.cell_height(1, 20)
    p.justified_width = 80
    assert p.cell_height(1, 80) == first
    p.measure(["abcd"], True)
    p.compress(80)
    assert p.cell_height(1, 80) == 10


def test_zero_justified_width_is_contract_error() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("a"))
    p.measure(["x"], True)
    with pytest.raises(LayoutContractError) as exc:
        p.cell_height(1, 0)
    assert exc.value.error_key == JUSTIFIED_WIDTH_NOT_POSITIVE


def test_result_is_plain_record() -> None:
    p = PrimitiveLayout(_metrics(), Primitive("a", "A"))
    p.measure(["xyz"], True)
    p.compress(60)
    p.cell_height(1, 60)
    r = p.result()
    assert r.kind == "primitive"
    assert r.label == "A"
    assert r.width == 60
    assert r.height == 10
    assert r.children == []
