# ups_solver/packer.py
# RectanglePacker: how many copies of a piece fit on one master sheet.
#
# - inputs in inches, packed in fixed-point integers (PackerParams.scale)
# - engines: "guillotine" (exact over guillotine cuts), "maxrects"
#   (free-rectangle heuristic), optional "cp_sat" (OR-Tools search that only
#   has to beat the others)
# - the engine with the most copies wins; ties keep the earlier engine
# - never more than PackerParams.max_placements copies
#
# Pure function: no state survives between calls.

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .config import DEFAULTS, to_scaled
from .logger import get_logger
from .solver_cp_sat import CpSatParams, pack_cp_sat
from .solver_guillotine import grid_layout, pack_guillotine, uniform_grid
from .solver_maxrects import pack_maxrects
from .types import Dimension, Layout, PackingResult

INVALID_DIMENSIONS = "Invalid dimensions"
NO_FIT = "No fit: piece larger than sheet"

METHOD_LABELS = {
    "grid": "Grid",
    "guillotine": "Guillotine",
    "maxrects": "MaxRects",
    "cp_sat": "CP-SAT",
}


@dataclass(frozen=True)
class PackerParams:
    scale: int = DEFAULTS.scale
    max_placements: int = DEFAULTS.max_placements
    methods: Tuple[str, ...] = DEFAULTS.methods
    cp_sat_time_limit_s: float = DEFAULTS.cp_sat_time_limit_s
    guillotine_max_work: int = 2_000_000

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"scale must be >= 1, got {self.scale}")
        if self.max_placements <= 0:
            raise ValueError(f"max_placements must be >= 1, got {self.max_placements}")
        unknown = [m for m in self.methods if m not in ENGINES]
        if unknown or not self.methods:
            raise ValueError(f"Unknown packing methods {unknown}; choose from {sorted(ENGINES)}")


def _run_guillotine(W, H, w, h, allow_rotation, params: PackerParams, best: int) -> Layout:
    return pack_guillotine(W, H, w, h, allow_rotation, max_work=params.guillotine_max_work)


def _run_maxrects(W, H, w, h, allow_rotation, params: PackerParams, best: int) -> Layout:
    return pack_maxrects(W, H, w, h, allow_rotation, max_placements=params.max_placements)


def _run_cp_sat(W, H, w, h, allow_rotation, params: PackerParams, best: int) -> Layout:
    cp = CpSatParams(
        time_limit_s=params.cp_sat_time_limit_s,
        max_copies=params.max_placements,
        lower_bound=best,
    )
    return pack_cp_sat(W, H, w, h, allow_rotation, params=cp)


ENGINES: Dict[str, Callable[..., Layout]] = {
    "guillotine": _run_guillotine,
    "maxrects": _run_maxrects,
    "cp_sat": _run_cp_sat,
}


def describe(method: str, ups: int, allow_rotation: bool, extra: str = "") -> str:
    label = METHOD_LABELS.get(method, method)
    text = f"{label}: {ups} ups (rotation {'enabled' if allow_rotation else 'disabled'})"
    return f"{text}, {extra}" if extra else text


def count_fitting_copies(
    piece: Dimension,
    sheet: Dimension,
    allow_rotation: bool = True,
    params: Optional[PackerParams] = None,
) -> PackingResult:
    """
    Maximum number of non-overlapping axis-aligned copies of `piece` inside
    `sheet` (each copy may be turned 90 degrees when allow_rotation).

    Never raises for bad numbers: non-positive or non-finite sizes give 0 ups
    with layout_description "Invalid dimensions".
    """
    params = params or PackerParams()
    log = get_logger()

    if not (piece.is_valid() and sheet.is_valid()):
        log.warn(f"Invalid dimensions: piece={piece} sheet={sheet}. Returning 0 ups.")
        return PackingResult(ups_per_sheet=0, layout_description=INVALID_DIMENSIONS, scale=params.scale)

    W, H = to_scaled(sheet.width, params.scale), to_scaled(sheet.height, params.scale)
    w, h = to_scaled(piece.width, params.scale), to_scaled(piece.height, params.scale)

    if min(W, H, w, h) <= 0:
        log.warn(f"Invalid dimensions: piece={piece} sheet={sheet}. Returning 0 ups.")
        return PackingResult(ups_per_sheet=0, layout_description=INVALID_DIMENSIONS, scale=params.scale)

    grid = uniform_grid(W, H, w, h, allow_rotation)
    fits_any = (w <= W and h <= H) or (allow_rotation and h <= W and w <= H)
    if not fits_any:
        log.debug(f"piece {piece} does not fit sheet {sheet} in any orientation")
        return PackingResult(ups_per_sheet=0, layout_description=NO_FIT, scale=params.scale)

    cap = params.max_placements
    if grid.count >= cap:
        layout = grid_layout(grid, limit=cap)
        return _result(layout, "grid", allow_rotation, params, W, H,
                       extra=f"capped at {cap}, {grid.describe()}")

    best_method = ""
    best_layout = Layout()
    for method in params.methods:
        layout = ENGINES[method](W, H, w, h, allow_rotation, params, best_layout.count())
        log.debug(f"{METHOD_LABELS[method]}: {layout.count()} ups for piece {piece} on sheet {sheet}")
        if layout.count() > best_layout.count():
            best_method, best_layout = method, layout

    if best_layout.count() == 0:
        return PackingResult(ups_per_sheet=0, layout_description=NO_FIT, scale=params.scale)
    if best_layout.count() > cap:
        best_layout = Layout(placements=best_layout.placements[:cap], cuts=best_layout.cuts)

    # a guillotine optimum equal to the grid count is the grid itself
    extra = grid.describe() if best_method == "guillotine" and best_layout.count() == grid.count else ""
    return _result(best_layout, best_method, allow_rotation, params, W, H, extra=extra)


def _result(
    layout: Layout,
    method: str,
    allow_rotation: bool,
    params: PackerParams,
    W: int,
    H: int,
    extra: str = "",
) -> PackingResult:
    ups = layout.count()
    return PackingResult(
        ups_per_sheet=ups,
        layout_description=describe(method, ups, allow_rotation, extra),
        method=method,
        rotation_used=layout.uses_rotation(),
        placements=tuple(layout.placements),
        cuts=tuple(layout.cuts),
        scale=params.scale,
        sheet_w=W,
        sheet_h=H,
    )
