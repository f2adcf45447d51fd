# autolayout/core/config.py
"""
Central configuration for adaptive outline/table layout.
All tunable values live here; no magic numbers in other modules.
Inset constants are style values supplied by the host; the core never derives them.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Snapping -----
SNAP_UNIT: float = 1.0
"""Smallest addressable unit of the rendering surface (px)."""

# ----- Cardinality -----
MIN_AVERAGE_CARDINALITY: int = 1
MAX_AVERAGE_CARDINALITY: int = 4
"""Upper clamp for a relation's estimated rows per parent row; bounds layout explosion."""

# ----- Folding -----
AUTO_FOLD: bool = True
"""Relations with exactly one relation child delegate to that child."""

# ----- Default font -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX: float = 14.0
FALLBACK_FONT_FILES: tuple[str, ...] = ("DejaVuSans.ttf", "arial.ttf", "Arial.ttf")
"""Font files tried, in order, when the requested family has no matching file."""

# ----- Monospace metrics (tests, headless runs) -----
MONOSPACE_CHAR_WIDTH_PX: float = 8.0
MONOSPACE_LINE_HEIGHT_PX: float = 16.0

# ----- Insets (px) -----
TEXT_HORIZONTAL_INSET: float = 8.0
"""Padding left + right of a rendered text value."""

TEXT_VERTICAL_INSET: float = 4.0
"""Padding top + bottom of a rendered text value."""

CELL_VERTICAL_INSET: float = 2.0

LIST_VERTICAL_INSET: float = 2.0

TABLE_HORIZONTAL_INSET: float = 4.0
"""Fixed table chrome added to a table's summed column widths."""

TABLE_VERTICAL_INSET: float = 4.0

NESTED_LEFT_INSET: float = 2.0
NESTED_RIGHT_INSET: float = 2.0
"""Left and right inset of a relation nested in its parent."""

# ----- CLI -----
DEFAULT_WIDTH_PX: float = 800.0
"""Width budget for the root when none is given."""

# ----- Rendering (debug wireframe) -----
RENDER_DPI: int = 100
RENDER_MIN_HEIGHT_PX: int = 200

# ----- Debug flags -----
LAYOUT_DEBUG: bool = os.environ.get("LAYOUT_DEBUG", "").lower() in ("1", "true", "yes")
"""Enable debug logging from the CLI. Set env LAYOUT_DEBUG=1 to enable."""
