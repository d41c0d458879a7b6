# ups_solver/optimizer.py
# MasterSheetOptimizer: rank inventory sheets for one job.
#
# For each candidate sheet:
#   ups       = count_fitting_copies(piece, sheet, allow_rotation=True)
#               (also tried on the sheet turned 90 degrees; better count wins)
#   wastage   = 100 * (1 - ups * piece_area / sheet_area), clamped to [0, 100]
#   needed    = ceil(quantity / ups)
#   shortfall = max(0, needed - available_stock)
# Sheets with 0 ups are dropped. Suggestions are sorted by wastage, then by
# sheets needed. The optimal pick is the fewest-sheets suggestion among
# those within `wastage_tolerance_pct` of the lowest wastage.
#
# Never raises for data-shaped input: nothing usable -> empty result.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULTS
from .logger import get_logger
from .metrics import shortfall, sheets_needed, wastage_percentage
from .packer import PackerParams, count_fitting_copies
from .types import Dimension, OptimizationResult, PackingResult, PieceSpec, SheetCandidate, Suggestion


@dataclass(frozen=True)
class OptimizerParams:
    wastage_tolerance_pct: float = DEFAULTS.wastage_tolerance_pct
    try_sheet_rotation: bool = True
    packer: PackerParams = PackerParams()

    def __post_init__(self):
        if self.wastage_tolerance_pct < 0:
            raise ValueError("wastage_tolerance_pct must be >= 0")


def _pack_candidate(
    piece: PieceSpec,
    candidate: SheetCandidate,
    params: OptimizerParams,
) -> Tuple[PackingResult, Dimension, bool]:
    """Pack onto the sheet as listed and, if allowed, turned 90 degrees."""
    sheet = candidate.dimension
    best = count_fitting_copies(piece, sheet, allow_rotation=True, params=params.packer)
    best_sheet, turned = sheet, False

    if params.try_sheet_rotation and best.ups_per_sheet > 0 and not sheet.is_square():
        alt_sheet = sheet.rotated()
        alt = count_fitting_copies(piece, alt_sheet, allow_rotation=True, params=params.packer)
        if alt.ups_per_sheet > best.ups_per_sheet:
            best, best_sheet, turned = alt, alt_sheet, True

    return best, best_sheet, turned


def build_suggestion(
    piece: PieceSpec,
    requested_quantity: int,
    candidate: SheetCandidate,
    params: Optional[OptimizerParams] = None,
) -> Optional[Suggestion]:
    """Suggestion for one candidate, or None if the piece does not fit it."""
    params = params or OptimizerParams()
    packing, sheet, turned = _pack_candidate(piece, candidate, params)
    ups = packing.ups_per_sheet
    if ups <= 0:
        return None

    needed = sheets_needed(requested_quantity, ups)
    description = packing.layout_description
    if turned:
        description = f"{description} (master landscape)"

    return Suggestion(
        candidate_id=candidate.id,
        ups_per_sheet=ups,
        wastage_percentage=wastage_percentage(piece, ups, sheet),
        sheets_needed=needed,
        shortfall=shortfall(needed, candidate.available_stock),
        layout_description=description,
        sheet_width=sheet.width,
        sheet_height=sheet.height,
        sheet_rotated=turned,
        candidate=candidate,
        packing=packing,
    )


def sort_suggestions(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Ascending wastage, then fewer sheets, then candidate id."""
    return sorted(suggestions, key=lambda s: (s.wastage_percentage, s.sheets_needed, s.candidate_id))


def select_optimal(
    suggestions: List[Suggestion],
    tolerance_pct: float = DEFAULTS.wastage_tolerance_pct,
) -> Optional[Suggestion]:
    """
    Waste first, but a marginal waste gain does not justify more handling:
    among suggestions within tolerance_pct of the minimum wastage, take the
    one with the fewest sheets (then lower wastage, then list order).
    """
    if not suggestions:
        return None
    floor_pct = min(s.wastage_percentage for s in suggestions)
    near = [(i, s) for i, s in enumerate(suggestions) if s.wastage_percentage <= floor_pct + tolerance_pct]
    return min(near, key=lambda t: (t[1].sheets_needed, t[1].wastage_percentage, t[0]))[1]


def optimize(
    piece: PieceSpec,
    requested_quantity: int,
    candidates: Iterable[SheetCandidate],
    params: Optional[OptimizerParams] = None,
) -> OptimizationResult:
    """Rank candidate sheets for a job. Empty result when nothing fits."""
    params = params or OptimizerParams()
    log = get_logger()
    candidates = list(candidates)

    if requested_quantity <= 0:
        log.warn(f"Requested quantity must be positive, got {requested_quantity}. Returning no suggestions.")
        return OptimizationResult()
    if not candidates:
        log.info("No candidate sheets given. Returning no suggestions.")
        return OptimizationResult()

    collected: List[Suggestion] = []
    for c in candidates:
        s = build_suggestion(piece, requested_quantity, c, params)
        if s is None:
            log.debug(f"Sheet {c.id} ({c.dimension}) yields 0 ups for piece {piece}. Skipping.")
            continue
        log.debug(
            f"Sheet {c.id}: ups={s.ups_per_sheet}, wastage={s.wastage_percentage}%, "
            f"sheets={s.sheets_needed}, shortfall={s.shortfall}"
        )
        collected.append(s)

    suggestions = sort_suggestions(collected)
    optimal = select_optimal(suggestions, params.wastage_tolerance_pct)

    log.info(f"Processed {len(candidates)} sheets for piece {piece} x {requested_quantity}: "
             f"{len(suggestions)} suggestions.")
    if optimal is not None:
        log.info(f"Optimal: sheet {optimal.candidate_id} ({optimal.ups_per_sheet} ups, "
                 f"{optimal.wastage_percentage}% wastage, {optimal.sheets_needed} sheets)")
    else:
        log.info("No suitable stock found for this piece.")

    return OptimizationResult(suggestions=suggestions, optimal=optimal)
