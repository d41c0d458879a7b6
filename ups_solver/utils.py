# ups_solver/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON export of optimization results (the library output shape)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config import from_scaled
from .types import OptimizationResult, PackingResult, Suggestion


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("optimize") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def _to_jsonable(obj: Any) -> Any:
    """Convert dataclasses and other objects to JSON-serializable structures."""
    if is_dataclass(obj):
        return _to_jsonable(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(x) for x in obj]
    if isinstance(obj, Path):
        return str(obj)
    return obj


def packing_to_dict(result: PackingResult, *, include_layout: bool = False) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "ups_per_sheet": result.ups_per_sheet,
        "layout_description": result.layout_description,
        "method": result.method,
        "rotation_used": bool(result.rotation_used),
    }
    if include_layout:
        s = result.scale
        out["placements"] = [
            {
                "x": from_scaled(p.x, s),
                "y": from_scaled(p.y, s),
                "w": from_scaled(p.w, s),
                "h": from_scaled(p.h, s),
                "rotated": bool(p.rotated),
            }
            for p in result.placements
        ]
        out["cuts"] = [
            {
                "orientation": c.orientation,
                "coord": from_scaled(c.coord, s),
                "a0": from_scaled(c.a0, s),
                "a1": from_scaled(c.a1, s),
                "stage": c.stage,
            }
            for c in result.cuts
        ]
    return out


def suggestion_to_dict(s: Suggestion, *, include_layout: bool = False) -> Dict[str, Any]:
    """One suggestion in the library output shape, plus sheet/stock details."""
    out: Dict[str, Any] = {
        "candidate_id": s.candidate_id,
        "ups_per_sheet": s.ups_per_sheet,
        "wastage_percentage": s.wastage_percentage,
        "sheets_needed": s.sheets_needed,
        "shortfall": s.shortfall,
        "layout_description": s.layout_description,
        "sheet_width": s.sheet_width,
        "sheet_height": s.sheet_height,
        "sheet_rotated": bool(s.sheet_rotated),
    }
    c = s.candidate
    if c is not None:
        out["name"] = c.name
        out["paper_quality"] = c.quality.paper_quality
        out["gsm"] = c.quality.gsm
        out["thickness_mm"] = c.quality.thickness_mm
        out["available_stock"] = c.available_stock
        out["location_godown"] = c.location_godown
        out["location_line_number"] = c.location_line_number
    if include_layout and s.packing is not None:
        out["layout"] = packing_to_dict(s.packing, include_layout=True)
    return out


def result_to_dict(res: OptimizationResult, *, include_layout: bool = False) -> Dict[str, Any]:
    """{suggestions: [...], optimal: {...} | None}"""
    return {
        "suggestions": [suggestion_to_dict(s, include_layout=include_layout) for s in res.suggestions],
        "optimal": suggestion_to_dict(res.optimal, include_layout=include_layout) if res.optimal else None,
    }


def save_result_json(
    res: OptimizationResult,
    path: str | Path,
    *,
    indent: int = 2,
    include_layout: bool = False,
    request: Optional[Dict[str, Any]] = None,
) -> None:
    """Save an optimization result as JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = result_to_dict(res, include_layout=include_layout)
    if request is not None:
        payload = {"request": request, **payload}
    with path.open("w", encoding="utf-8") as f:
        json.dump(_to_jsonable(payload), f, ensure_ascii=False, indent=indent)
