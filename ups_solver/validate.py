# ups_solver/validate.py
# Validation utilities for packed layouts:
# - placements inside the sheet
# - no overlap between copies
# - count and cut consistency
#
# Useful both during development and to sanity-check engine output.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .types import PackingResult, Suggestion, check_no_overlap


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    placement_index: Optional[int] = None


def validate_packing(result: PackingResult) -> List[ValidationIssue]:
    """Check one packing result. Returns a list of issues (empty if OK)."""
    issues: List[ValidationIssue] = []

    if result.ups_per_sheet != len(result.placements):
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"ups_per_sheet={result.ups_per_sheet} but {len(result.placements)} placements",
            )
        )
    if not result.layout_description:
        issues.append(ValidationIssue(level="WARN", message="Empty layout description"))
    if result.ups_per_sheet == 0:
        return issues

    W, H = result.sheet_w, result.sheet_h
    for idx, pl in enumerate(result.placements):
        if pl.w <= 0 or pl.h <= 0:
            issues.append(
                ValidationIssue(level="ERROR", message=f"Non-positive size {pl.w}x{pl.h}", placement_index=idx)
            )
        if pl.x < 0 or pl.y < 0 or pl.right() > W or pl.top() > H:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Placement out of sheet: x={pl.x}, y={pl.y}, w={pl.w}, h={pl.h}, sheet={W}x{H}",
                    placement_index=idx,
                )
            )

    try:
        check_no_overlap(list(result.placements))
    except ValueError as e:
        issues.append(ValidationIssue(level="ERROR", message=str(e)))

    for c in result.cuts:
        limit_coord, limit_seg = (W, H) if c.orientation == "V" else (H, W)
        if not (0 <= c.coord <= limit_coord) or min(c.a0, c.a1) < 0 or max(c.a0, c.a1) > limit_seg:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"{c.orientation} cut @ {c.coord} seg=[{c.a0},{c.a1}] outside sheet {W}x{H}",
                )
            )

    return issues


def validate_suggestion(s: Suggestion) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if s.ups_per_sheet <= 0:
        issues.append(ValidationIssue(level="ERROR", message=f"{s.candidate_id}: suggestion with 0 ups"))
    if not 0.0 <= s.wastage_percentage <= 100.0:
        issues.append(ValidationIssue(level="ERROR", message=f"{s.candidate_id}: wastage {s.wastage_percentage} out of range"))
    if s.shortfall < 0:
        issues.append(ValidationIssue(level="ERROR", message=f"{s.candidate_id}: negative shortfall"))
    if s.packing is not None:
        issues.extend(validate_packing(s.packing))
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(f"[{e.level}] placement={e.placement_index} :: {e.message}" for e in errs)
        raise ValueError("Validation failed:\n" + msg)
