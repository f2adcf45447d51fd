# autolayout/core/text_metrics.py
"""
Text/metric providers: rendered text width, line height, label width and snapping.
The layout core only calls these; it never computes font metrics itself.
Providers must be callable synchronously and repeatedly; widths are memoized per string.
"""

from __future__ import annotations

import math
import warnings

from autolayout.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE_PX,
    FALLBACK_FONT_FILES,
    MONOSPACE_CHAR_WIDTH_PX,
    MONOSPACE_LINE_HEIGHT_PX,
)
from autolayout.core.types import LayoutStyle

_missing_families: set[str] = set()


class TextMetrics:
    """
    Base provider. Subclasses implement _measure and line_height.
    snap rounds half up to the style's snap unit; relax floors to it.
    """

    def __init__(self, style: LayoutStyle | None = None) -> None:
        self.style = style if style is not None else LayoutStyle()
        self._widths: dict[str, float] = {}

    def _measure(self, text: str) -> float:
        raise NotImplementedError

    def line_height(self) -> float:
        raise NotImplementedError

    def text_width(self, text: str) -> float:
        """Rendered width of text (widest line when it spans several lines)."""
        width = self._widths.get(text)
        if width is None:
            lines = text.split("\n") if text else [""]
            width = max(float(self._measure(line)) for line in lines)
            self._widths[text] = width
        return width

    def label_width(self, label: str) -> float:
        """Minimum width of a label, including text padding."""
        return self.text_width(label) + self.style.text_horizontal_inset

    def snap(self, value: float) -> float:
        unit = self.style.snap_unit
        return math.floor(value / unit + 0.5) * unit

    def relax(self, value: float) -> float:
        unit = self.style.snap_unit
        return math.floor(value / unit) * unit


class PillowTextMetrics(TextMetrics):
    """Measure text with Pillow; 1 font px = 1 layout px."""

    def __init__(
        self,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_size_px: float = DEFAULT_FONT_SIZE_PX,
        style: LayoutStyle | None = None,
    ) -> None:
        super().__init__(style)
        self.font_family = font_family
        self.font_size_px = font_size_px
        self._font = self._open_font()
        self._line_height: float | None = None

    def _open_font(self):
        """Pillow font for the family at the configured size; default bitmap font if none matches."""
        from PIL import ImageFont

        size = max(1, int(round(self.font_size_px)))
        family_files = [f"{self.font_family}.ttf", f"{self.font_family.replace(' ', '')}.ttf"]
        for name in dict.fromkeys(family_files + list(FALLBACK_FONT_FILES)):
            try:
                return ImageFont.truetype(name, size=size)
            except OSError:
                continue
        if self.font_family not in _missing_families:
            _missing_families.add(self.font_family)
            warnings.warn(f"No font file for {self.font_family!r}; measuring with the default font.", UserWarning)
        return ImageFont.load_default()

    def _measure(self, text: str) -> float:
        return float(self._font.getlength(text))

    def line_height(self) -> float:
        if self._line_height is None:
            try:
                ascent, descent = self._font.getmetrics()
                self._line_height = float(ascent + descent)
            except AttributeError:
                bbox = self._font.getbbox("Ag")
                self._line_height = float(bbox[3] - bbox[1])
        return self._line_height


class MonospaceMetrics(TextMetrics):
    """Deterministic provider: every character is char_width wide."""

    def __init__(
        self,
        char_width: float = MONOSPACE_CHAR_WIDTH_PX,
        line_height: float = MONOSPACE_LINE_HEIGHT_PX,
        style: LayoutStyle | None = None,
    ) -> None:
        super().__init__(style)
        self.char_width = char_width
        self._line_height = line_height

    def _measure(self, text: str) -> float:
        return len(text) * self.char_width

    def line_height(self) -> float:
        return self._line_height
