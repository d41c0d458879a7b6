# ups_solver/__init__.py
"""
UPS Solver package (print shop master sheet planning).

Current state:
- RectanglePacker: how many copies of one piece fit on one master sheet
  - fixed-point integer geometry (1000 units per inch)
  - exact guillotine engine (normal-pattern cut positions) with cut list
  - max-rects free-rectangle heuristic
  - optional OR-Tools CP-SAT search that only has to beat the others
  - hard ceiling of 200 copies per sheet
- MasterSheetOptimizer: ranks inventory sheets by wastage and sheets needed,
  with stock shortfall and a tolerance-based optimal pick
- inventory matching on paper quality, GSM and board thickness
- JSON/CSV input and export, matplotlib layout plots
"""

from .types import (
    Dimension,
    PieceSpec,
    QualitySpec,
    SheetCandidate,
    Placement,
    Cut,
    PackingResult,
    Suggestion,
    OptimizationResult,
)

from .packer import (
    PackerParams,
    count_fitting_copies,
)

from .optimizer import (
    OptimizerParams,
    optimize,
    select_optimal,
)

from .inventory import (
    MatchParams,
    filter_candidates,
)

from .metrics import (
    wastage_percentage,
    sheets_needed,
    compute_layout_metrics,
)

from .plotting import (
    PlotStyle,
    plot_layout,
    plot_suggestions,
    save_layout_png,
)

from .run import RunResult, run_optimization

__all__ = [
    # types
    "Dimension",
    "PieceSpec",
    "QualitySpec",
    "SheetCandidate",
    "Placement",
    "Cut",
    "PackingResult",
    "Suggestion",
    "OptimizationResult",
    # packer
    "PackerParams",
    "count_fitting_copies",
    # optimizer
    "OptimizerParams",
    "optimize",
    "select_optimal",
    # inventory
    "MatchParams",
    "filter_candidates",
    # metrics
    "wastage_percentage",
    "sheets_needed",
    "compute_layout_metrics",
    # plotting
    "PlotStyle",
    "plot_layout",
    "plot_suggestions",
    "save_layout_png",
    # runner
    "RunResult",
    "run_optimization",
]
