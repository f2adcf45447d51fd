# autolayout/core/render.py
"""
Matplotlib PNG wireframe of a layout result: one box per node, tables laid out
left to right, outline column sets stacked top to bottom. Debug artifact only;
it draws the computed geometry, not widgets.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from autolayout.core.config import RENDER_DPI, RENDER_MIN_HEIGHT_PX
from autolayout.core.types import LayoutSummary, NodeResult

TABLE_COLOR = "tab:blue"
OUTLINE_COLOR = "tab:green"
PRIMITIVE_COLOR = "tab:gray"


def _box(ax: plt.Axes, x: float, y: float, w: float, h: float, color: str, label: str) -> None:
    if w <= 0 or h <= 0:
        return
    ax.add_patch(Rectangle((x, y), w, h, fill=False, edgecolor=color, linewidth=1))
    if w > 24 and h > 10:
        ax.text(x + 2, y + 2, label, fontsize=6, ha="left", va="top", color=color, clip_on=True)


def _draw(ax: plt.Axes, node: NodeResult, x: float, y: float) -> None:
    if node.folded_into is not None and node.children:
        _draw(ax, node.children[0], x, y)
        return
    if node.kind == "primitive":
        _box(ax, x, y, node.width, node.height, PRIMITIVE_COLOR, node.label)
        return
    color = TABLE_COLOR if node.use_table else OUTLINE_COLOR
    _box(ax, x, y, node.width, node.height, color, node.label)
    if node.use_table:
        cx = x
        for child in node.children:
            _draw(ax, child, cx, y)
            cx += child.width
        return
    by_field = {c.field: c for c in node.children}
    cy = y
    for column_set in node.column_sets:
        if not column_set:
            continue
        column_width = node.width / len(column_set)
        band_height = 0.0
        for i, column in enumerate(column_set):
            fy = cy
            for name in column:
                child = by_field.get(name)
                if child is None:
                    continue
                _draw(ax, child, x + i * column_width, fy)
                fy += child.height
            band_height = max(band_height, fy - cy)
        cy += band_height


def render_layout(
    summary: LayoutSummary,
    output_path: str | Path,
    scale: int = 1,
) -> None:
    """Render the layout wireframe at 1 px per layout unit. scale multiplies output resolution."""
    width = max(1.0, summary.width_budget, summary.width)
    height = max(float(RENDER_MIN_HEIGHT_PX), summary.height)
    fig = plt.figure(
        figsize=(width * scale / RENDER_DPI, height * scale / RENDER_DPI),
        dpi=RENDER_DPI,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])
    ax.axis("off")
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    _draw(ax, summary.root, 0.0, 0.0)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=RENDER_DPI * scale, facecolor="white")
    plt.close(fig)
