# ups_solver/solver_maxrects.py
# MaxRects (best-area-fit) heuristic for copies of ONE piece size on ONE sheet.
# Keeps a list of maximal free rectangles; each step places one more copy into
# the free rectangle that leaves the least area, then splits every free
# rectangle the new copy intersects.
#
# All coordinates are scaled integers (see config.to_scaled).

from __future__ import annotations

from typing import List, Optional, Tuple

from .types import Layout, Placement

FreeRect = Tuple[int, int, int, int]  # (x, y, w, h)


def pack_maxrects(
    W: int,
    H: int,
    w: int,
    h: int,
    allow_rotation: bool = True,
    max_placements: int = 200,
) -> Layout:
    """
    Place copies of a w x h piece into a W x H sheet until nothing fits
    or max_placements copies are down.

    Tie-break (deterministic): least leftover area in the chosen free
    rectangle, then shortest leftover side, then lowest y, lowest x,
    unrotated before rotated.
    """
    layout = Layout()
    if min(W, H, w, h) <= 0:
        return layout

    orientations = [(w, h, False)]
    if allow_rotation and w != h:
        orientations.append((h, w, True))

    free: List[FreeRect] = [(0, 0, W, H)]

    for _ in range(max(0, int(max_placements))):
        best = _find_best(free, orientations)
        if best is None:
            break

        x, y, pw, ph, rotated = best
        layout.placements.append(Placement(x=x, y=y, w=pw, h=ph, rotated=rotated))
        free = _split_free(free, (x, y, pw, ph))
        free = _prune(free, w, h, len(orientations) > 1)

    return layout


def _find_best(
    free: List[FreeRect],
    orientations: List[Tuple[int, int, bool]],
) -> Optional[Tuple[int, int, int, int, bool]]:
    best = None
    best_key = None
    for fx, fy, fw, fh in free:
        for pw, ph, rotated in orientations:
            if pw > fw or ph > fh:
                continue
            key = (fw * fh - pw * ph, min(fw - pw, fh - ph), fy, fx, rotated)
            if best_key is None or key < best_key:
                best_key = key
                best = (fx, fy, pw, ph, rotated)
    return best


def _split_free(free: List[FreeRect], used: FreeRect) -> List[FreeRect]:
    """Replace each free rectangle hit by `used` with its (up to 4) maximal leftovers."""
    ux, uy, uw, uh = used
    ur, ut = ux + uw, uy + uh
    out: List[FreeRect] = []
    for fx, fy, fw, fh in free:
        fr, ft = fx + fw, fy + fh
        if ux >= fr or ur <= fx or uy >= ft or ut <= fy:
            out.append((fx, fy, fw, fh))
            continue
        if ux > fx:
            out.append((fx, fy, ux - fx, fh))
        if ur < fr:
            out.append((ur, fy, fr - ur, fh))
        if uy > fy:
            out.append((fx, fy, fw, uy - fy))
        if ut < ft:
            out.append((fx, ut, fw, ft - ut))
    return out


def _contains(a: FreeRect, b: FreeRect) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax <= bx and ay <= by and ax + aw >= bx + bw and ay + ah >= by + bh


def _prune(free: List[FreeRect], w: int, h: int, rotatable: bool) -> List[FreeRect]:
    """
    Drop duplicates, rectangles contained in another one, and rectangles
    too small to ever take a copy of the piece.
    """
    usable: List[FreeRect] = []
    seen = set()
    for r in free:
        if r in seen:
            continue
        seen.add(r)
        _, _, fw, fh = r
        if not rotatable:
            fits = fw >= w and fh >= h
        else:
            fits = (fw >= w and fh >= h) or (fw >= h and fh >= w)
        if fits:
            usable.append(r)

    out: List[FreeRect] = []
    for i, r in enumerate(usable):
        if any(j != i and _contains(o, r) for j, o in enumerate(usable)):
            continue
        out.append(r)
    return out
