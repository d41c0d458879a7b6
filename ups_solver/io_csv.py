# ups_solver/io_csv.py
# CSV import/export helpers:
# - read inventory sheets (candidates) from a stock list
# - export ranked suggestions (for the job card / quoting)
# - export the piece layout of a suggestion (inches)
#
# Inventory CSV format (header required, extra columns ignored):
#   id,width,height,quality,gsm,thickness_mm,stock,name,godown,line

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional

from .config import from_scaled
from .types import Dimension, OptimizationResult, PackingResult, QualitySpec, SheetCandidate


def _opt_float(s: Optional[str]) -> Optional[float]:
    s = (s or "").strip()
    return float(s) if s else None


def read_inventory_csv(path: str | Path) -> List[SheetCandidate]:
    path = Path(path)
    candidates: List[SheetCandidate] = []
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        required = {"id", "width", "height"}
        if not required.issubset(set(reader.fieldnames or [])):
            raise ValueError(f"CSV must contain at least columns: {sorted(required)}")
        for row in reader:
            cid = (row.get("id") or "").strip()
            if not cid:
                continue
            candidates.append(
                SheetCandidate(
                    id=cid,
                    dimension=Dimension(width=float(row["width"]), height=float(row["height"])),
                    quality=QualitySpec(
                        paper_quality=(row.get("quality") or "").strip(),
                        gsm=_opt_float(row.get("gsm")),
                        thickness_mm=_opt_float(row.get("thickness_mm")),
                    ),
                    available_stock=int(float(row.get("stock") or "0")),
                    name=(row.get("name") or "").strip(),
                    location_godown=(row.get("godown") or "").strip(),
                    location_line_number=(row.get("line") or "").strip(),
                )
            )
    return candidates


def export_suggestions_csv(result: OptimizationResult, path: str | Path) -> None:
    """One row per suggestion, in ranked order; the optimal row is flagged."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "optimal",
        "candidate_id",
        "sheet_width",
        "sheet_height",
        "ups_per_sheet",
        "wastage_percentage",
        "sheets_needed",
        "available_stock",
        "shortfall",
        "layout_description",
    ]

    optimal_id = result.optimal.candidate_id if result.optimal else None
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for rank, s in enumerate(result.suggestions, start=1):
            w.writerow(
                {
                    "rank": rank,
                    "optimal": int(s.candidate_id == optimal_id),
                    "candidate_id": s.candidate_id,
                    "sheet_width": s.sheet_width,
                    "sheet_height": s.sheet_height,
                    "ups_per_sheet": s.ups_per_sheet,
                    "wastage_percentage": s.wastage_percentage,
                    "sheets_needed": s.sheets_needed,
                    "available_stock": s.candidate.available_stock if s.candidate else "",
                    "shortfall": s.shortfall,
                    "layout_description": s.layout_description,
                }
            )


def export_placements_csv(packing: PackingResult, path: str | Path) -> None:
    """
    Write piece placements of one master sheet into a CSV file.
    Coordinates are converted back to inches.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    s = packing.scale
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["index", "x", "y", "w", "h", "rotated"])
        w.writeheader()
        for idx, pl in enumerate(packing.placements):
            w.writerow(
                {
                    "index": idx,
                    "x": from_scaled(pl.x, s),
                    "y": from_scaled(pl.y, s),
                    "w": from_scaled(pl.w, s),
                    "h": from_scaled(pl.h, s),
                    "rotated": int(bool(pl.rotated)),
                }
            )


def export_all(result: OptimizationResult, out_dir: str | Path, prefix: str = "suggestions") -> None:
    """
    Export the suggestion table, plus the layout of the optimal sheet, into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_suggestions_csv(result, out_dir / f"{prefix}.csv")
    if result.optimal is not None and result.optimal.packing is not None:
        export_placements_csv(result.optimal.packing, out_dir / f"{prefix}_optimal_layout.csv")
