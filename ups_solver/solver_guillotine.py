# ups_solver/solver_guillotine.py
# Guillotine (edge-to-edge cut) layouts for copies of ONE piece on ONE sheet.
#
# Two layers:
#   - uniform_grid: every copy in the same orientation, cols x rows
#     (portrait wins ties, like the job-card "calculate ups" helper)
#   - pack_guillotine: exact optimum over guillotine cut patterns.
#     Cut positions are restricted to "normal patterns" (a*w + b*h), which
#     loses nothing for guillotine layouts. The table is filled bottom-up
#     over (width, height) states; each state is either a uniform grid or
#     the best vertical/horizontal split into two smaller states.
#
# The optimum only grows with the sheet, so this engine gives the packer a
# count that never drops when a larger sheet is offered.
#
# Coordinates are scaled integers; cuts are emitted with stage = depth.

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .types import Cut, Layout, Placement

Orientation = Tuple[int, int, bool]  # (w, h, rotated)


@dataclass(frozen=True)
class GridFit:
    count: int
    cols: int
    rows: int
    w: int
    h: int
    rotated: bool

    def describe(self) -> str:
        label = "landscape" if self.rotated else "portrait"
        return f"{self.cols} across x {self.rows} down ({label})"


def orientations_for(w: int, h: int, allow_rotation: bool) -> List[Orientation]:
    out = [(w, h, False)]
    if allow_rotation and w != h:
        out.append((h, w, True))
    return out


def uniform_grid(W: int, H: int, w: int, h: int, allow_rotation: bool = True) -> GridFit:
    """Best single-orientation grid. Portrait is kept on ties."""
    best = GridFit(count=0, cols=0, rows=0, w=w, h=h, rotated=False)
    if min(W, H, w, h) <= 0:
        return best
    for pw, ph, rotated in orientations_for(w, h, allow_rotation):
        cols, rows = W // pw, H // ph
        if cols * rows > best.count:
            best = GridFit(count=cols * rows, cols=cols, rows=rows, w=pw, h=ph, rotated=rotated)
    return best


def grid_layout(fit: GridFit, limit: Optional[int] = None) -> Layout:
    """Placements for a uniform grid, row by row from the origin."""
    layout = Layout()
    for r in range(fit.rows):
        for c in range(fit.cols):
            if limit is not None and len(layout.placements) >= limit:
                return layout
            layout.placements.append(
                Placement(x=c * fit.w, y=r * fit.h, w=fit.w, h=fit.h, rotated=fit.rotated)
            )
    return layout


def normal_positions(length: int, sides: Sequence[int]) -> List[int]:
    """All a*s1 + b*s2 + ... <= length (including 0), sorted."""
    vals = {0}
    for s in sorted(set(sides)):
        vals = {v + k * s for v in vals for k in range((length - v) // s + 1)}
    return sorted(vals)


def _floor_index(vals: List[int], v: int) -> int:
    return bisect_right(vals, v) - 1


class _Table:
    def __init__(self, xs: List[int], ys: List[int], orients: List[Orientation]):
        self.xs = xs
        self.ys = ys
        self.orients = orients
        self.best = [[0] * len(ys) for _ in xs]
        self.choice: List[List[Optional[Tuple[str, object]]]] = [[None] * len(ys) for _ in xs]

    def fill(self) -> None:
        xs, ys, best, choice = self.xs, self.ys, self.best, self.choice
        for i, X in enumerate(xs):
            for j, Y in enumerate(ys):
                b: int = 0
                c: Optional[Tuple[str, object]] = None
                for pw, ph, rotated in self.orients:
                    n = (X // pw) * (Y // ph)
                    if n > b:
                        b, c = n, ("G", rotated)
                for k in range(i):
                    if 2 * xs[k] > X:
                        break
                    n = best[k][j] + best[_floor_index(xs, X - xs[k])][j]
                    if n > b:
                        b, c = n, ("V", k)
                for k in range(j):
                    if 2 * ys[k] > Y:
                        break
                    n = best[i][k] + best[i][_floor_index(ys, Y - ys[k])]
                    if n > b:
                        b, c = n, ("H", k)
                best[i][j] = b
                choice[i][j] = c

    def rebuild(self, layout: Layout, x0: int, y0: int, rw: int, rh: int, stage: int) -> None:
        i = _floor_index(self.xs, rw)
        j = _floor_index(self.ys, rh)
        if i < 0 or j < 0:
            return
        c = self.choice[i][j]
        if c is None:
            return

        kind, arg = c
        if kind == "G":
            pw, ph = next((w, h) for w, h, r in self.orients if r == arg)
            self._emit_grid(layout, x0, y0, rw, rh, pw, ph, bool(arg), stage)
        elif kind == "V":
            cut_x = self.xs[int(arg)]
            layout.cuts.append(Cut("V", x0 + cut_x, y0, y0 + rh, stage=stage))
            self.rebuild(layout, x0, y0, cut_x, rh, stage + 1)
            self.rebuild(layout, x0 + cut_x, y0, rw - cut_x, rh, stage + 1)
        else:
            cut_y = self.ys[int(arg)]
            layout.cuts.append(Cut("H", y0 + cut_y, x0, x0 + rw, stage=stage))
            self.rebuild(layout, x0, y0, rw, cut_y, stage + 1)
            self.rebuild(layout, x0, y0 + cut_y, rw, rh - cut_y, stage + 1)

    @staticmethod
    def _emit_grid(layout, x0, y0, rw, rh, pw, ph, rotated, stage) -> None:
        cols, rows = rw // pw, rh // ph
        bw, bh = cols * pw, rows * ph
        if bw < rw:
            layout.cuts.append(Cut("V", x0 + bw, y0, y0 + rh, stage=stage))
        if bh < rh:
            layout.cuts.append(Cut("H", y0 + bh, x0, x0 + bw, stage=stage))
        for r in range(1, rows):
            layout.cuts.append(Cut("H", y0 + r * ph, x0, x0 + bw, stage=stage + 1))
        for c in range(1, cols):
            layout.cuts.append(Cut("V", x0 + c * pw, y0, y0 + bh, stage=stage + 2))
        for r in range(rows):
            for c in range(cols):
                layout.placements.append(
                    Placement(x=x0 + c * pw, y=y0 + r * ph, w=pw, h=ph, rotated=rotated)
                )


def pack_guillotine(
    W: int,
    H: int,
    w: int,
    h: int,
    allow_rotation: bool = True,
    max_work: int = 2_000_000,
) -> Layout:
    """
    Best guillotine layout of w x h copies on a W x H sheet, with its cut list.
    Falls back to the uniform grid when filling the table would take more than
    max_work split checks (cells x candidate cuts per cell).
    """
    if min(W, H, w, h) <= 0:
        return Layout()

    orients = orientations_for(w, h, allow_rotation)
    if not any(pw <= W and ph <= H for pw, ph, _ in orients):
        return Layout()

    xs = [v for v in normal_positions(W, [pw for pw, _, _ in orients]) if v > 0]
    ys = [v for v in normal_positions(H, [ph for _, ph, _ in orients]) if v > 0]
    if len(xs) * len(ys) * (len(xs) + len(ys)) > max_work:
        return grid_layout(uniform_grid(W, H, w, h, allow_rotation))

    table = _Table(xs, ys, orients)
    table.fill()

    layout = Layout()
    table.rebuild(layout, 0, 0, W, H, stage=1)
    return layout
