# ups_solver/types.py
# Core data structures for master-sheet cutting (ups per sheet, wastage, stock).
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class Dimension:
    """A (width, height) pair in inches. Valid only when both are finite and > 0."""
    width: float
    height: float

    def is_valid(self) -> bool:
        return all(math.isfinite(v) and v > 0 for v in (self.width, self.height))

    def area(self) -> float:
        return self.width * self.height

    def rotated(self) -> "Dimension":
        return Dimension(width=self.height, height=self.width)

    def is_square(self) -> bool:
        return self.width == self.height

    def __str__(self) -> str:
        return f"{self.width:g}x{self.height:g}"


# The job's individual cut piece.
PieceSpec = Dimension


@dataclass(frozen=True)
class QualitySpec:
    """Paper quality of a stock sheet. Opaque to the packer."""
    paper_quality: str
    gsm: Optional[float] = None
    thickness_mm: Optional[float] = None


@dataclass(frozen=True)
class SheetCandidate:
    """One inventory-backed master sheet option."""
    id: str
    dimension: Dimension
    quality: QualitySpec = field(default_factory=lambda: QualitySpec(paper_quality=""))
    available_stock: int = 0

    # Display metadata carried through from the inventory record
    name: str = ""
    location_godown: str = ""
    location_line_number: str = ""


# ----------------------------
# Outputs
# ----------------------------

@dataclass(frozen=True)
class Placement:
    """Placed piece on a sheet, in scaled integer coordinates."""
    x: int
    y: int
    w: int
    h: int
    rotated: bool = False

    def right(self) -> int:
        return self.x + self.w

    def top(self) -> int:
        return self.y + self.h


@dataclass(frozen=True)
class Cut:
    """
    A guillotine cut segment in scaled integer sheet coordinates:
      - For vertical cut: x is fixed, segment runs [y0, y1]
      - For horizontal cut: y is fixed, segment runs [x0, x1]
    """
    orientation: str  # "V" or "H"
    coord: int        # x for V, y for H
    a0: int           # y0 for V, x0 for H
    a1: int           # y1 for V, x1 for H
    stage: int = 0    # depth in the cut tree (1 = first cut through the sheet)

    def length(self) -> int:
        return abs(self.a1 - self.a0)

    def __post_init__(self):
        if self.orientation not in ("V", "H"):
            raise ValueError("Cut.orientation must be 'V' or 'H'")
        if self.a0 == self.a1:
            raise ValueError("Cut segment length is zero (a0 == a1)")


@dataclass
class Layout:
    """Raw engine output: placed copies (+ cut list when the engine knows it)."""
    placements: List[Placement] = field(default_factory=list)
    cuts: List[Cut] = field(default_factory=list)

    def count(self) -> int:
        return len(self.placements)

    def uses_rotation(self) -> bool:
        return any(p.rotated for p in self.placements)


@dataclass(frozen=True)
class PackingResult:
    """Outcome of packing one piece size onto one sheet size."""
    ups_per_sheet: int
    layout_description: str
    method: str = ""
    rotation_used: bool = False
    placements: Tuple[Placement, ...] = ()
    cuts: Tuple[Cut, ...] = ()

    # Scaled sheet size the placements refer to (0 when nothing was packed)
    scale: int = 1
    sheet_w: int = 0
    sheet_h: int = 0

    def fits(self) -> bool:
        return self.ups_per_sheet > 0


@dataclass(frozen=True)
class Suggestion:
    """One ranked master sheet option for a job."""
    candidate_id: str
    ups_per_sheet: int
    wastage_percentage: float
    sheets_needed: int
    shortfall: int
    layout_description: str

    # Sheet as laid out (may be the candidate turned by 90 degrees)
    sheet_width: float = 0.0
    sheet_height: float = 0.0
    sheet_rotated: bool = False

    candidate: Optional[SheetCandidate] = None
    packing: Optional[PackingResult] = None

    def has_enough_stock(self) -> bool:
        return self.shortfall == 0


@dataclass
class OptimizationResult:
    """Ranked suggestions for one optimization request."""
    suggestions: List[Suggestion] = field(default_factory=list)
    optimal: Optional[Suggestion] = None

    def is_empty(self) -> bool:
        return not self.suggestions

    def by_candidate(self) -> Dict[str, Suggestion]:
        return {s.candidate_id: s for s in self.suggestions}


# ----------------------------
# Helper utilities
# ----------------------------

def check_no_overlap(placements: List[Placement]) -> None:
    """
    Simple validator: raise if any two placements overlap with positive area.
    This is useful for unit tests and sanity checks.
    """
    for i in range(len(placements)):
        a = placements[i]
        ax0, ay0, ax1, ay1 = a.x, a.y, a.right(), a.top()
        for j in range(i + 1, len(placements)):
            b = placements[j]
            bx0, by0, bx1, by1 = b.x, b.y, b.right(), b.top()
            if ax0 < bx1 and ax1 > bx0 and ay0 < by1 and ay1 > by0:
                raise ValueError(
                    f"Overlap: #{i} ({ax0},{ay0},{ax1},{ay1}) "
                    f"with #{j} ({bx0},{by0},{bx1},{by1})"
                )
