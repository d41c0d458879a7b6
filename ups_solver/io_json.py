# ups_solver/io_json.py
# Load an optimization request from JSON into PieceSpec + [SheetCandidate].
#
# Expected JSON shape:
# {
#   "piece": {"width": 4, "height": 6},
#   "requested_quantity": 1000,
#   "target": {"paper_quality": "SBS", "gsm": 300},            (optional)
#   "candidates": [
#     {"id": "SBS-20x30", "dimension": {"width": 20, "height": 30},
#      "quality_spec": {"paper_quality": "SBS", "gsm": 300}, "available_stock": 500}
#   ]
# }
#
# The job-card form's field names are accepted too (jobSizeWidth/jobSizeHeight,
# netQuantity, targetPaperQuality/targetPaperGsm/targetPaperThicknessMm,
# availableMasterSheets[] with masterSheetSizeWidth/masterSheetSizeHeight,
# paperQuality, paperGsm, paperThicknessMm, availableStock, locationGodown ...).

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .types import Dimension, PieceSpec, QualitySpec, SheetCandidate


@dataclass(frozen=True)
class OptimizationRequest:
    piece: PieceSpec
    requested_quantity: int
    candidates: List[SheetCandidate] = field(default_factory=list)
    target: Optional[QualitySpec] = None


def _first(d: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _opt_float(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    return float(v)


def quality_from_dict(d: Any) -> QualitySpec:
    if isinstance(d, str):
        return QualitySpec(paper_quality=d)
    d = d or {}
    return QualitySpec(
        paper_quality=str(_first(d, "paper_quality", "paperQuality", "quality", default="")),
        gsm=_opt_float(_first(d, "gsm", "paper_gsm", "paperGsm")),
        thickness_mm=_opt_float(_first(d, "thickness_mm", "paper_thickness_mm", "paperThicknessMm")),
    )


def candidate_from_dict(d: Dict[str, Any]) -> SheetCandidate:
    cid = str(_first(d, "id", "name", default="")).strip()
    if not cid:
        raise ValueError(f"Candidate missing id/name: {d}")

    dim = d.get("dimension")
    if isinstance(dim, dict):
        width, height = dim.get("width"), dim.get("height")
    else:
        width = _first(d, "width", "masterSheetSizeWidth")
        height = _first(d, "height", "masterSheetSizeHeight")
    if width is None or height is None:
        raise ValueError(f"Candidate {cid} missing sheet width/height")

    spec = _first(d, "quality_spec", "qualitySpec")
    quality = quality_from_dict(spec if spec is not None else d)

    return SheetCandidate(
        id=cid,
        dimension=Dimension(width=float(width), height=float(height)),
        quality=quality,
        available_stock=int(_first(d, "available_stock", "availableStock", default=0)),
        name=str(_first(d, "name", default="")),
        location_godown=str(_first(d, "location_godown", "locationGodown", default="")),
        location_line_number=str(_first(d, "location_line_number", "locationLineNumber", default="")),
    )


def request_from_dict(data: Dict[str, Any]) -> OptimizationRequest:
    piece = data.get("piece")
    if isinstance(piece, dict):
        pw, ph = piece.get("width"), piece.get("height")
    else:
        pw, ph = data.get("jobSizeWidth"), data.get("jobSizeHeight")
    if pw is None or ph is None:
        raise ValueError("Request missing piece width/height ('piece' or jobSizeWidth/jobSizeHeight).")

    qty = _first(data, "requested_quantity", "requestedQuantity", "netQuantity")
    if qty is None:
        raise ValueError("Request missing 'requested_quantity'.")

    raw_candidates = _first(data, "candidates", "availableMasterSheets", default=[])
    candidates = [candidate_from_dict(c) for c in raw_candidates]

    target: Optional[QualitySpec] = None
    if isinstance(data.get("target"), (dict, str)):
        target = quality_from_dict(data["target"])
    elif data.get("targetPaperQuality"):
        target = QualitySpec(
            paper_quality=str(data["targetPaperQuality"]),
            gsm=_opt_float(data.get("targetPaperGsm")),
            thickness_mm=_opt_float(data.get("targetPaperThicknessMm")),
        )

    return OptimizationRequest(
        piece=Dimension(width=float(pw), height=float(ph)),
        requested_quantity=int(qty),
        candidates=candidates,
        target=target,
    )


def load_request_json(path: str | Path) -> OptimizationRequest:
    """Load an optimization request file (see module header for the shape)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top-level JSON must be an object")
    return request_from_dict(data)


def request_to_dict(req: OptimizationRequest) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "piece": {"width": req.piece.width, "height": req.piece.height},
        "requested_quantity": req.requested_quantity,
        "candidates": [
            {
                "id": c.id,
                "dimension": {"width": c.dimension.width, "height": c.dimension.height},
                "quality_spec": {
                    "paper_quality": c.quality.paper_quality,
                    "gsm": c.quality.gsm,
                    "thickness_mm": c.quality.thickness_mm,
                },
                "available_stock": c.available_stock,
                "name": c.name,
                "location_godown": c.location_godown,
                "location_line_number": c.location_line_number,
            }
            for c in req.candidates
        ],
    }
    if req.target is not None:
        out["target"] = {
            "paper_quality": req.target.paper_quality,
            "gsm": req.target.gsm,
            "thickness_mm": req.target.thickness_mm,
        }
    return out
