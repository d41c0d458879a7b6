# ups_solver/metrics.py
# Metrics for master sheet suggestions:
# - wastage percentage (sheet area not covered by pieces)
# - master sheets needed for a quantity, and stock shortfall
# - used / waste area and guillotine cut length of a packed layout
#
# These metrics are engine-agnostic: they work for any PackingResult.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .config import clamp_float
from .types import Cut, Dimension, PackingResult


@dataclass(frozen=True)
class LayoutMetrics:
    used_area: int
    waste_area: int
    cut_length: int
    utilization_pct: float


def wastage_percentage(piece: Dimension, ups: int, sheet: Dimension, ndigits: int = 2) -> float:
    """
    100 * (1 - ups * piece_area / sheet_area), clamped to [0, 100].
    A sheet without area is all waste.
    """
    sheet_area = sheet.area()
    if sheet_area <= 0:
        return 100.0
    used = ups * piece.area()
    pct = clamp_float(100.0 * (1.0 - used / sheet_area), 0.0, 100.0)
    return round(pct, ndigits)


def sheets_needed(quantity: int, ups: int) -> int:
    """ceil(quantity / ups) in integer arithmetic. ups must be >= 1."""
    if ups <= 0:
        raise ValueError(f"ups must be >= 1 to compute sheets needed, got {ups}")
    return -(-int(quantity) // int(ups))


def shortfall(needed: int, available_stock: int) -> int:
    return max(0, int(needed) - max(0, int(available_stock)))


def compute_cut_length(cuts: Iterable[Cut]) -> int:
    """Sum of all provided cut segment lengths (scaled units)."""
    total = 0
    for c in cuts:
        total += c.length()
    return total


def compute_layout_metrics(result: PackingResult) -> LayoutMetrics:
    """Area bookkeeping of a packed layout in scaled units."""
    used = sum(p.w * p.h for p in result.placements)
    total = result.sheet_w * result.sheet_h
    waste = total - used
    if waste < 0:
        # Overlaps could cause this too, but should be prevented upstream.
        raise ValueError(f"Negative waste area (used={used} > total={total}).")
    util = 100.0 * used / total if total > 0 else 0.0
    return LayoutMetrics(
        used_area=used,
        waste_area=waste,
        cut_length=compute_cut_length(result.cuts),
        utilization_pct=round(util, 2),
    )
