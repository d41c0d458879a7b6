# ups_solver/run.py
# High-level convenience runner that ties together:
# - inventory matching (optional target paper spec)
# - optimizer (ups, wastage, sheets needed, shortfall)
# - validation of every suggested layout
# - optional CSV/JSON export
# - matplotlib visualization of the top suggestions
#
# This is meant to be called from your own scripts or an API layer.
# Example:
#   from ups_solver.run import run_optimization
#   res = run_optimization(piece, 1000, candidates, target=QualitySpec("SBS", gsm=300), out_dir="out")

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .inventory import MatchParams, filter_candidates
from .io_csv import export_all
from .logger import get_logger
from .optimizer import OptimizerParams, optimize
from .plotting import PlotStyle, plot_suggestions
from .types import OptimizationResult, PieceSpec, QualitySpec, SheetCandidate
from .utils import save_result_json, timer
from .validate import raise_on_errors, validate_suggestion


@dataclass(frozen=True)
class RunResult:
    result: OptimizationResult
    candidates_total: int
    candidates_matched: int
    seconds: float


def run_optimization(
    piece: PieceSpec,
    requested_quantity: int,
    candidates: List[SheetCandidate],
    *,
    target: Optional[QualitySpec] = None,
    params: Optional[OptimizerParams] = None,
    match_params: Optional[MatchParams] = None,
    validate: bool = True,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "suggestions",
    show_plot: bool = False,
    plot_style: Optional[PlotStyle] = None,
):
    """
    Run matching + optimization end-to-end.

    Returns RunResult. If show_plot=True and there are suggestions, returns (RunResult, fig).
    """
    log = get_logger()

    matched = filter_candidates(candidates, target, match_params) if target is not None else list(candidates)
    if target is not None:
        log.info(f"{len(matched)} of {len(candidates)} sheets match {target.paper_quality}.")

    with timer("optimize") as t:
        result = optimize(piece, requested_quantity, matched, params=params)

    if validate:
        for s in result.suggestions:
            issues = validate_suggestion(s)
            for i in issues:
                if i.level == "ERROR":
                    log.error(f"Sheet {s.candidate_id}: {i.message}")
            raise_on_errors(issues)

    res = RunResult(
        result=result,
        candidates_total=len(candidates),
        candidates_matched=len(matched),
        seconds=t["seconds"],
    )

    if out_dir is not None:
        outp = Path(out_dir)
        export_all(result, out_dir=outp, prefix=export_prefix)
        save_result_json(result, outp / f"{export_prefix}.json", include_layout=True)

    if show_plot and result.suggestions:
        fig = plot_suggestions(result.suggestions, style=plot_style or PlotStyle())
        return res, fig

    return res
