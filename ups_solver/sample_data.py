# ups_solver/sample_data.py
# Sample inventory for quick runs (--example) and random stock lists for
# benchmarking the packer on many sheet/piece combinations.

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .types import Dimension, QualitySpec, SheetCandidate

# Common master sheet sizes in a print shop godown (inches)
STANDARD_SHEETS: List[Tuple[float, float]] = [
    (18.0, 23.0),
    (20.0, 30.0),
    (22.0, 28.0),
    (23.0, 36.0),
    (25.0, 36.0),
    (27.56, 39.37),
    (28.0, 40.0),
]


def example_piece() -> Dimension:
    # A carton face panel
    return Dimension(width=4.0, height=6.0)


def example_inventory(paper_quality: str = "SBS", gsm: float = 300.0) -> List[SheetCandidate]:
    out: List[SheetCandidate] = []
    for k, (w, h) in enumerate(STANDARD_SHEETS):
        out.append(
            SheetCandidate(
                id=f"{paper_quality}-{w:g}x{h:g}",
                dimension=Dimension(width=w, height=h),
                quality=QualitySpec(paper_quality=paper_quality, gsm=gsm),
                available_stock=100 * (k + 1),
                name=f"{paper_quality} {gsm:g}gsm {w:g}x{h:g}",
                location_godown="Main",
                location_line_number=f"L{k + 1}",
            )
        )
    return out


@dataclass(frozen=True)
class RandomInventoryConfig:
    seed: int = 123
    n_sheets: int = 25

    # sheet size range (inches)
    w_range: Tuple[float, float] = (15.0, 30.0)
    h_range: Tuple[float, float] = (20.0, 45.0)

    stock_range: Tuple[int, int] = (0, 2000)
    qualities: Tuple[str, ...] = ("SBS", "GREYBACK", "ART_PAPER_GLOSS")
    gsm_choices: Tuple[float, ...] = (250.0, 300.0, 350.0)


def generate_random_inventory(cfg: RandomInventoryConfig) -> List[SheetCandidate]:
    """
    Random stock list. Sizes are rounded to a quarter inch.
    Same seed -> same list.
    """
    rng = random.Random(cfg.seed)
    out: List[SheetCandidate] = []
    for i in range(cfg.n_sheets):
        w = round(rng.uniform(*cfg.w_range) * 4) / 4
        h = round(rng.uniform(*cfg.h_range) * 4) / 4
        quality = rng.choice(cfg.qualities)
        gsm = rng.choice(cfg.gsm_choices)
        out.append(
            SheetCandidate(
                id=f"R{i + 1:03d}",
                dimension=Dimension(width=w, height=h),
                quality=QualitySpec(paper_quality=quality, gsm=gsm),
                available_stock=rng.randint(*cfg.stock_range),
                name=f"{quality} {gsm:g}gsm {w:g}x{h:g}",
            )
        )
    return out
