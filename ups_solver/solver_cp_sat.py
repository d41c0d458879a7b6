# ups_solver/solver_cp_sat.py
# Exact-ish CP-SAT model (OR-Tools) for copies of ONE piece on ONE sheet:
# - up to n candidate copies, each optionally present in one orientation
# - NoOverlap2D over optional intervals
# - maximize the number of present copies
#
# The heuristic engines give a lower bound; the model is only asked to beat
# it. With one worker and a deterministic time budget the search is
# repeatable for identical inputs.

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ortools.sat.python import cp_model

from .solver_guillotine import orientations_for
from .types import Layout, Placement


@dataclass(frozen=True)
class CpSatParams:
    time_limit_s: float = 5.0   # deterministic time units
    max_copies: int = 200
    lower_bound: int = 0        # known achievable count (from heuristics)


def pack_cp_sat(
    W: int,
    H: int,
    w: int,
    h: int,
    allow_rotation: bool = True,
    params: CpSatParams = CpSatParams(),
) -> Layout:
    """
    Search for a layout with more copies than params.lower_bound.
    Returns an empty Layout when the model proves nothing better exists
    or the time budget runs out without an improvement.
    """
    if min(W, H, w, h) <= 0:
        return Layout()

    orients = [(pw, ph, r) for pw, ph, r in orientations_for(w, h, allow_rotation) if pw <= W and ph <= H]
    if not orients:
        return Layout()

    n = min(int(params.max_copies), (W * H) // (w * h))
    if n <= params.lower_bound:
        return Layout()

    m = cp_model.CpModel()

    x_itv = []
    y_itv = []
    present: List[cp_model.IntVar] = []
    choices = []  # (copy index, lit, x, y, pw, ph, rotated)

    for i in range(n):
        p_i = m.NewBoolVar(f"present[{i}]")
        present.append(p_i)
        lits = []
        for pw, ph, rotated in orients:
            tag = "r" if rotated else "u"
            lit = m.NewBoolVar(f"use[{i},{tag}]")
            x = m.NewIntVar(0, W - pw, f"x[{i},{tag}]")
            y = m.NewIntVar(0, H - ph, f"y[{i},{tag}]")
            x_itv.append(m.NewOptionalFixedSizeIntervalVar(x, pw, lit, f"xi[{i},{tag}]"))
            y_itv.append(m.NewOptionalFixedSizeIntervalVar(y, ph, lit, f"yi[{i},{tag}]"))
            lits.append(lit)
            choices.append((i, lit, x, y, pw, ph, rotated))
        m.Add(sum(lits) == p_i)

    m.AddNoOverlap2D(x_itv, y_itv)

    # Symmetry break: present copies come first
    for i in range(n - 1):
        m.Add(present[i] >= present[i + 1])

    m.Add(sum(present) >= int(params.lower_bound) + 1)
    m.Maximize(sum(present))

    solver = cp_model.CpSolver()
    solver.parameters.max_deterministic_time = float(params.time_limit_s)
    solver.parameters.num_search_workers = 1
    solver.parameters.random_seed = 0

    status = solver.Solve(m)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        return Layout()

    layout = Layout()
    for i, lit, x, y, pw, ph, rotated in choices:
        if solver.Value(lit) == 1:
            layout.placements.append(
                Placement(x=int(solver.Value(x)), y=int(solver.Value(y)), w=pw, h=ph, rotated=rotated)
            )
    return layout
