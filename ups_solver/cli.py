# ups_solver/cli.py
# Command line front end:
# - request JSON (piece, quantity, candidates, optional target spec)
#   or piece/quantity flags + inventory CSV
# - optional paper-spec matching (--quality/--gsm/--thickness)
# - prints the ranked suggestion table and the optimal pick
# - optional CSV/JSON export folder and PNG of the top layouts
#
# Run:
#   python -m ups_solver --request job.json --out out/
#   python -m ups_solver --piece 4x6 --qty 1000 --inventory stock.csv --quality SBS --gsm 300
#   python -m ups_solver --example --png layouts.png

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, parse_size_text
from .io_csv import read_inventory_csv
from .io_json import load_request_json
from .logger import set_enabled, set_verbose
from .optimizer import OptimizerParams
from .packer import ENGINES, PackerParams
from .plotting import PlotStyle, save_suggestions_png
from .run import run_optimization
from .sample_data import example_inventory, example_piece
from .types import OptimizationResult, QualitySpec


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Master sheet optimizer: ups per sheet, wastage and sheets needed")
    p.add_argument("--request", type=str, default="", help="Path to request JSON (piece, quantity, candidates)")
    p.add_argument("--piece", type=str, default="", help="Piece size WxH in inches, e.g. 4x6")
    p.add_argument("--qty", type=int, default=0, help="Requested quantity of pieces")
    p.add_argument("--inventory", type=str, default="", help="Path to inventory CSV")
    p.add_argument("--example", action="store_true", help="Use built-in example piece + inventory")

    # Paper spec matching
    p.add_argument("--quality", type=str, default="", help="Target paper quality (enables inventory matching)")
    p.add_argument("--gsm", type=float, default=None, help="Target GSM")
    p.add_argument("--thickness", type=float, default=None, help="Target thickness in mm (kappa/MDF)")

    # Packing / ranking controls
    p.add_argument(
        "--methods",
        type=str,
        default=",".join(DEFAULTS.methods),
        help=f"Packing engines in tie-break order, from {sorted(ENGINES)}",
    )
    p.add_argument("--scale", type=int, default=DEFAULTS.scale, help="Fixed-point units per inch")
    p.add_argument("--max_ups", type=int, default=DEFAULTS.max_placements, help="Ceiling on ups per sheet")
    p.add_argument("--time", type=float, default=DEFAULTS.cp_sat_time_limit_s, help="CP-SAT budget per sheet")
    p.add_argument("--tolerance", type=float, default=DEFAULTS.wastage_tolerance_pct,
                   help="Wastage tolerance (percentage points) for the optimal pick")
    p.add_argument("--no_sheet_rotation", action="store_true", help="Do not try master sheets turned 90 degrees")

    # Output
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="suggestions", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save the top layouts as PNG (optional)")
    p.add_argument("--no_labels", action="store_true", help="Hide piece numbers in plot")
    p.add_argument("--quiet", action="store_true", help="No log output")
    p.add_argument("--verbose", action="store_true", help="Per-sheet debug log output")
    return p


def print_result(result: OptimizationResult) -> None:
    if not result.suggestions:
        print("No suitable inventory found for these specifications.")
        return

    header = f"{'#':>3}  {'sheet':<18} {'size':>13} {'ups':>4} {'waste%':>7} {'sheets':>7} {'short':>6}  layout"
    print(header)
    print("-" * len(header))
    optimal_id = result.optimal.candidate_id if result.optimal else None
    for rank, s in enumerate(result.suggestions, start=1):
        mark = "*" if s.candidate_id == optimal_id else " "
        size = f"{s.sheet_width:g}x{s.sheet_height:g}"
        print(
            f"{rank:>3}{mark} {s.candidate_id:<18} {size:>13} {s.ups_per_sheet:>4} "
            f"{s.wastage_percentage:>7.2f} {s.sheets_needed:>7} {s.shortfall:>6}  {s.layout_description}"
        )
    if result.optimal is not None:
        o = result.optimal
        print(f"\nOptimal: {o.candidate_id} -> {o.ups_per_sheet} ups, {o.wastage_percentage:.2f}% wastage, "
              f"{o.sheets_needed} master sheets" + (f" (short by {o.shortfall})" if o.shortfall else ""))


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)

    set_enabled(not args.quiet)
    set_verbose(bool(args.verbose))

    target: Optional[QualitySpec] = None
    if args.example:
        piece = example_piece()
        qty = args.qty or 1000
        candidates = example_inventory()
    elif args.request:
        job_path = Path(args.request)
        if not job_path.exists():
            raise SystemExit(f"Request JSON not found: {job_path}")
        req = load_request_json(job_path)
        piece, qty, candidates, target = req.piece, req.requested_quantity, req.candidates, req.target
    else:
        if not args.piece or not args.inventory:
            raise SystemExit("Provide --request job.json, or --piece WxH --qty N --inventory stock.csv, or --example")
        piece = parse_size_text(args.piece)
        qty = int(args.qty)
        candidates = read_inventory_csv(Path(args.inventory))

    if args.quality:
        target = QualitySpec(paper_quality=args.quality, gsm=args.gsm, thickness_mm=args.thickness)

    methods = tuple(m.strip() for m in args.methods.split(",") if m.strip())
    try:
        params = OptimizerParams(
            wastage_tolerance_pct=float(args.tolerance),
            try_sheet_rotation=not args.no_sheet_rotation,
            packer=PackerParams(
                scale=int(args.scale),
                max_placements=int(args.max_ups),
                methods=methods,
                cp_sat_time_limit_s=float(args.time),
            ),
        )
    except ValueError as e:
        raise SystemExit(str(e))

    res = run_optimization(
        piece,
        qty,
        candidates,
        target=target,
        params=params,
        out_dir=args.out.strip() or None,
        export_prefix=args.prefix,
    )

    print(f"Piece: {piece} in   Quantity: {qty}   Sheets matched: {res.candidates_matched}/{res.candidates_total}")
    print_result(res.result)

    if args.out.strip():
        print(f"Exported CSV + JSON to: {args.out.strip()}")

    if args.png.strip() and res.result.suggestions:
        style = PlotStyle(show_labels=not args.no_labels)
        save_suggestions_png(res.result.suggestions, args.png.strip(), style=style)
        print(f"Layouts saved to: {args.png.strip()}")


if __name__ == "__main__":
    main()
