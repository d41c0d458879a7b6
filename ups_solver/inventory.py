# ups_solver/inventory.py
# Matching inventory sheets to a job's paper spec before optimization.
#
# Rules (as the print shop applies them):
#   - paper quality must match exactly
#   - out-of-stock sheets are skipped
#   - board qualities (kappa, MDF) match on thickness within 0.1 mm
#   - paper qualities match on GSM within 5 % of the target GSM
# Every rejected sheet is logged with the reason.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULTS
from .logger import get_logger
from .types import QualitySpec, SheetCandidate


@dataclass(frozen=True)
class MatchParams:
    gsm_tolerance_frac: float = DEFAULTS.gsm_tolerance_frac
    thickness_tolerance_mm: float = DEFAULTS.thickness_tolerance_mm
    thickness_qualities: Tuple[str, ...] = DEFAULTS.thickness_qualities
    skip_out_of_stock: bool = True


def quality_unit(paper_quality: str, params: Optional[MatchParams] = None) -> str:
    """'mm' for boards measured by thickness, 'gsm' for everything else."""
    params = params or MatchParams()
    return "mm" if paper_quality.strip().upper() in params.thickness_qualities else "gsm"


def mismatch_reason(
    candidate: SheetCandidate,
    target: QualitySpec,
    params: Optional[MatchParams] = None,
) -> Optional[str]:
    """Why a candidate does not match the target spec, or None when it does."""
    params = params or MatchParams()
    q = candidate.quality

    if q.paper_quality != target.paper_quality:
        return f"quality {q.paper_quality!r} != target {target.paper_quality!r}"
    if params.skip_out_of_stock and candidate.available_stock <= 0:
        return "no available stock"

    if quality_unit(target.paper_quality, params) == "mm":
        if target.thickness_mm is None or q.thickness_mm is None:
            return "thickness missing on sheet or target"
        if abs(q.thickness_mm - target.thickness_mm) > params.thickness_tolerance_mm:
            return f"thickness {q.thickness_mm}mm vs target {target.thickness_mm}mm"
        return None

    if target.gsm is None or q.gsm is None:
        return "GSM missing on sheet or target"
    tolerance = target.gsm * params.gsm_tolerance_frac
    if abs(q.gsm - target.gsm) > tolerance:
        return f"GSM {q.gsm:g} vs target {target.gsm:g} (tolerance {tolerance:.2f})"
    return None


def filter_candidates(
    candidates: Iterable[SheetCandidate],
    target: QualitySpec,
    params: Optional[MatchParams] = None,
) -> List[SheetCandidate]:
    """Keep the sheets that match the target spec, in input order."""
    params = params or MatchParams()
    log = get_logger()

    kept: List[SheetCandidate] = []
    for c in candidates:
        reason = mismatch_reason(c, target, params)
        if reason is not None:
            log.debug(f"Sheet {c.id} ({c.name or 'N/A'}) skipped: {reason}")
            continue
        kept.append(c)
    return kept
