# ups_solver/plotting.py
# Minimal matplotlib visualization: one master sheet with its pieces and cuts,
# or a row of sheets for the top suggestions side by side.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .config import from_scaled
from .types import PackingResult, Suggestion

NORMAL_COLOR = (0.55, 0.72, 0.88)
ROTATED_COLOR = (0.91, 0.62, 0.55)


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_cuts: bool = True
    show_grid: bool = False
    font_size: int = 7
    padding_in: float = 0.5  # empty margin around each sheet in inches
    max_cols: int = 3        # layout of multiple sheets in a single figure


def _title(s: Suggestion) -> str:
    bits = [
        s.candidate_id,
        f"{s.sheet_width:g}×{s.sheet_height:g} in",
        f"{s.ups_per_sheet} ups",
        f"waste {s.wastage_percentage:.2f}%",
        f"{s.sheets_needed} sheets",
    ]
    if s.shortfall:
        bits.append(f"short {s.shortfall}")
    return " | ".join(bits)


def draw_layout(ax: plt.Axes, packing: PackingResult, style: PlotStyle, title: str = "") -> None:
    """Draw one packed sheet on an existing axis, in inches."""
    k = packing.scale
    W, H = from_scaled(packing.sheet_w, k), from_scaled(packing.sheet_h, k)

    ax.add_patch(Rectangle((0, 0), W, H, fill=False, linewidth=1.2))

    for idx, pl in enumerate(packing.placements):
        x, y = from_scaled(pl.x, k), from_scaled(pl.y, k)
        w, h = from_scaled(pl.w, k), from_scaled(pl.h, k)
        color = ROTATED_COLOR if pl.rotated else NORMAL_COLOR
        ax.add_patch(Rectangle((x, y), w, h, facecolor=color, edgecolor="black", linewidth=0.6))
        if style.show_labels:
            ax.text(
                x + w / 2,
                y + h / 2,
                f"{idx + 1}" + (" R" if pl.rotated else ""),
                ha="center",
                va="center",
                fontsize=style.font_size,
                color="black",
            )

    if style.show_cuts:
        for c in packing.cuts:
            coord, a0, a1 = from_scaled(c.coord, k), from_scaled(c.a0, k), from_scaled(c.a1, k)
            if c.orientation == "V":
                ax.plot([coord, coord], [a0, a1], linewidth=0.8, linestyle="--", color="dimgray")
            else:
                ax.plot([a0, a1], [coord, coord], linewidth=0.8, linestyle="--", color="dimgray")

    ax.set_title(title or packing.layout_description, fontsize=9)
    ax.set_aspect("equal", adjustable="box")

    pad = style.padding_in
    ax.set_xlim(-pad, W + pad)
    ax.set_ylim(-pad, H + pad)
    ax.grid(bool(style.show_grid), linewidth=0.3)
    ax.tick_params(labelbottom=False, labelleft=False, bottom=False, left=False)


def plot_layout(
    packing: PackingResult,
    style: Optional[PlotStyle] = None,
    figsize: Tuple[float, float] = (6.0, 6.0),
    title: str = "",
) -> plt.Figure:
    """Draw a single master sheet layout."""
    if packing.ups_per_sheet == 0:
        raise ValueError(f"Nothing to plot: {packing.layout_description}")
    fig, ax = plt.subplots(1, 1, figsize=figsize)
    draw_layout(ax, packing, style or PlotStyle(), title=title)
    fig.tight_layout()
    return fig


def plot_suggestions(
    suggestions: Sequence[Suggestion],
    style: Optional[PlotStyle] = None,
    limit: int = 6,
) -> plt.Figure:
    """Draw the first `limit` suggestions in one figure."""
    style = style or PlotStyle()
    items = [s for s in suggestions if s.packing is not None][:limit]
    n = len(items)
    if n == 0:
        raise ValueError("No suggestions to plot")

    cols = min(style.max_cols, n)
    rows = (n + cols - 1) // cols
    fig, axes = plt.subplots(rows, cols, figsize=(5 * cols, 5 * rows), squeeze=False)
    ax_list: List[plt.Axes] = list(axes.ravel())

    for ax in ax_list[n:]:
        ax.axis("off")
    for ax, s in zip(ax_list, items):
        draw_layout(ax, s.packing, style, title=_title(s))

    fig.tight_layout()
    return fig


def save_layout_png(
    packing: PackingResult,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
    title: str = "",
) -> None:
    """Save one sheet layout to PNG."""
    fig = plot_layout(packing, style=style, title=title)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)


def save_suggestions_png(
    suggestions: Sequence[Suggestion],
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 150,
) -> None:
    fig = plot_suggestions(suggestions, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
