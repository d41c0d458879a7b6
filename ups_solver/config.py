# ups_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (scale, placement ceiling, tolerances) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .types import Dimension


@dataclass(frozen=True)
class Defaults:
    # Fixed-point resolution: 1000 units per inch
    scale: int = 1000

    # Hard ceiling on copies placed on one master sheet
    max_placements: int = 200

    # Engines tried by the packer, in tie-break order
    methods: Tuple[str, ...] = ("guillotine", "maxrects")

    # CP-SAT budget (deterministic time units, roughly seconds)
    cp_sat_time_limit_s: float = 5.0

    # Suggestions within this many percentage points of the lowest wastage
    # compete on sheet count for the optimal pick
    wastage_tolerance_pct: float = 1.0

    # Inventory matching (caller side)
    gsm_tolerance_frac: float = 0.05
    thickness_tolerance_mm: float = 0.1

    # Qualities measured by thickness (mm) instead of GSM
    thickness_qualities: Tuple[str, ...] = ("GG_KAPPA", "WG_KAPPA", "MDF")


DEFAULTS = Defaults()


def to_scaled(value: float, scale: int = DEFAULTS.scale) -> int:
    """Convert inches to fixed-point integer units (round to nearest)."""
    return int(round(float(value) * scale))


def from_scaled(value: int, scale: int = DEFAULTS.scale) -> float:
    return value / scale


def clamp_float(v: float, lo: float, hi: float) -> float:
    """Clamp a numeric value to a float range."""
    x = float(v)
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def parse_size_text(size_text: str) -> Dimension:
    """
    Parse '20x30' -> Dimension(20.0, 30.0). Fractions like '27.56x39.37' are fine.
    """
    s = size_text.lower().replace(" ", "").replace("×", "x")
    if "x" not in s:
        raise ValueError(f"size must be like '20x30', got {size_text!r}")
    a, b = s.split("x", 1)
    return Dimension(width=float(a), height=float(b))
