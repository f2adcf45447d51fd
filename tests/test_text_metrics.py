# tests/test_text_metrics.py
"""
Deterministic tests for text metrics: snap/relax, label padding, multi-line width,
memoization. Pillow provider is checked for shape only (font files vary by host).
"""

from __future__ import annotations

import warnings

import pytest

from autolayout.core import text_metrics
from autolayout.core.text_metrics import MonospaceMetrics, PillowTextMetrics
from autolayout.core.types import LayoutStyle


def test_monospace_width_is_chars_times_char_width() -> None:
    m = MonospaceMetrics(char_width=10, line_height=10, style=LayoutStyle.zero())
    assert m.text_width("abc") == 30
    assert m.text_width("") == 0
    assert m.line_height() == 10


def test_multiline_width_is_widest_line() -> None:
    m = MonospaceMetrics(char_width=10, style=LayoutStyle.zero())
    assert m.text_width("ab\ncdef\ng") == 40


def test_label_width_includes_text_padding() -> None:
    m = MonospaceMetrics(char_width=10, style=LayoutStyle())
    assert m.label_width("Name") == 40 + LayoutStyle().text_horizontal_inset
    zero = MonospaceMetrics(char_width=10, style=LayoutStyle.zero())
    assert zero.label_width("Name") == 40


def test_snap_rounds_half_up_relax_floors() -> None:
    m = MonospaceMetrics(style=LayoutStyle.zero(snap_unit=1.0))
    assert m.snap(34.5) == 35
    assert m.snap(34.4) == 34
    assert m.relax(34.9) == 34
    assert m.relax(34.0) == 34


def test_snap_respects_snap_unit() -> None:
    m = MonospaceMetrics(style=LayoutStyle.zero(snap_unit=0.5))
    assert m.snap(1.3) == 1.5
    assert m.snap(1.2) == 1.0
    assert m.relax(1.3) == 1.0
    assert m.relax(1.5) == 1.5


def test_widths_are_memoized() -> None:
    calls: list[str] = []

    class Counting(MonospaceMetrics):
        def _measure(self, text: str) -> float:
            calls.append(text)
            return super()._measure(text)

    m = Counting(char_width=10)
    assert m.text_width("hello") == m.text_width("hello")
    assert calls == ["hello"]


def test_pillow_metrics_positive_and_ordered() -> None:
    m = PillowTextMetrics(font_size_px=14)
    assert m.text_width("") == 0
    assert m.text_width("WWWW") > m.text_width("i") > 0
    assert m.line_height() > 0


def test_pillow_metrics_unknown_family_still_measures() -> None:
    m = PillowTextMetrics(font_family="No Such Family 7f3a", font_size_px=14)
    assert m.text_width("abc") > 0
    assert m.line_height() > 0


def test_missing_font_warns_once_per_family(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(text_metrics, "FALLBACK_FONT_FILES", ())
    with pytest.warns(UserWarning, match="No font file"):
        PillowTextMetrics(font_family="Absent Family 91c2")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        m = PillowTextMetrics(font_family="Absent Family 91c2")
    assert m.text_width("abc") > 0
