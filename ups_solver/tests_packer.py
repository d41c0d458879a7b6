# ups_solver/tests_packer.py
# Packer tests (pytest or `python -m ups_solver.tests_packer`).
# Expected counts below are small enough to check on paper.

from __future__ import annotations

import math

import pytest

from ups_solver.metrics import compute_layout_metrics
from ups_solver.packer import INVALID_DIMENSIONS, NO_FIT, PackerParams, count_fitting_copies
from ups_solver.solver_guillotine import normal_positions, pack_guillotine, uniform_grid
from ups_solver.solver_maxrects import pack_maxrects
from ups_solver.types import Dimension, check_no_overlap
from ups_solver.utils import timer
from ups_solver.validate import raise_on_errors, validate_packing


def test_grid_sized_sheet_is_full() -> None:
    # 5 across x 5 down, no waste
    res = count_fitting_copies(Dimension(4, 6), Dimension(20, 30))
    assert res.ups_per_sheet == 25
    assert res.method == "guillotine"
    assert res.layout_description.startswith("Guillotine: 25 ups (rotation enabled)")
    assert "5 across x 5 down (portrait)" in res.layout_description
    raise_on_errors(validate_packing(res))


def test_layout_metrics() -> None:
    res = count_fitting_copies(Dimension(4, 6), Dimension(10, 9))
    m = compute_layout_metrics(res)
    assert m.used_area == 3 * 4_000 * 6_000
    assert m.waste_area == 10_000 * 9_000 - m.used_area
    assert m.utilization_pct == 80.0
    assert m.cut_length > 0


def test_piece_equal_to_sheet() -> None:
    for rot in (True, False):
        res = count_fitting_copies(Dimension(8.5, 11), Dimension(8.5, 11), allow_rotation=rot)
        assert res.ups_per_sheet == 1
        raise_on_errors(validate_packing(res))


def test_piece_larger_than_sheet() -> None:
    res = count_fitting_copies(Dimension(10, 10), Dimension(9, 9))
    assert res.ups_per_sheet == 0
    assert res.layout_description == NO_FIT
    assert not res.fits()


@pytest.mark.parametrize(
    "piece,sheet",
    [
        (Dimension(4, 6), Dimension(0, 30)),
        (Dimension(4, -1), Dimension(20, 30)),
        (Dimension(4, 6), Dimension(20, -5)),
        (Dimension(0.0001, 6), Dimension(20, 30)),  # rounds to 0 units
        (Dimension(math.inf, 6), Dimension(20, 30)),
        (Dimension(4, 6), Dimension(20, math.nan)),
        (Dimension(4, 6), Dimension(-math.inf, 30)),
    ],
)
def test_invalid_dimensions(piece: Dimension, sheet: Dimension) -> None:
    res = count_fitting_copies(piece, sheet)
    assert res.ups_per_sheet == 0
    assert res.layout_description == INVALID_DIMENSIONS
    assert res.placements == ()


def test_rotation_gives_more_ups() -> None:
    # 4x6 on 10x9: one portrait copy + two landscape copies beside it
    piece, sheet = Dimension(4, 6), Dimension(10, 9)
    with_rot = count_fitting_copies(piece, sheet, allow_rotation=True)
    without = count_fitting_copies(piece, sheet, allow_rotation=False)
    assert without.ups_per_sheet == 2
    assert with_rot.ups_per_sheet == 3
    assert with_rot.rotation_used
    assert not any(p.rotated for p in without.placements)
    raise_on_errors(validate_packing(with_rot))


def test_only_fits_rotated() -> None:
    res = count_fitting_copies(Dimension(12, 5), Dimension(10, 13), allow_rotation=True)
    assert res.ups_per_sheet == 2
    none = count_fitting_copies(Dimension(12, 5), Dimension(10, 13), allow_rotation=False)
    assert none.ups_per_sheet == 0
    assert none.layout_description == NO_FIT


def test_deterministic() -> None:
    piece, sheet = Dimension(3.25, 4.75), Dimension(22, 28)
    a = count_fitting_copies(piece, sheet)
    b = count_fitting_copies(piece, sheet)
    assert a.ups_per_sheet == b.ups_per_sheet
    assert a.placements == b.placements
    assert a.layout_description == b.layout_description


def test_guillotine_monotone_in_sheet_size() -> None:
    params = PackerParams(methods=("guillotine",))
    piece = Dimension(4, 6)
    for h in (9, 12, 15):
        last = 0
        for w in range(4, 25):
            ups = count_fitting_copies(piece, Dimension(w, h), params=params).ups_per_sheet
            assert ups >= last, f"{w}x{h}: {ups} < {last}"
            last = ups


def test_default_engines_monotone_in_sheet_size() -> None:
    piece = Dimension(4, 6)
    for h in (9, 12, 15):
        last = 0
        for w in range(4, 25):
            ups = count_fitting_copies(piece, Dimension(w, h)).ups_per_sheet
            assert ups >= last, f"{w}x{h}: {ups} < {last}"
            last = ups


def test_long_strip_stays_fast() -> None:
    # ~11k cut positions along the strip: too much table work, grid is used
    with timer("strip") as t:
        res = count_fitting_copies(Dimension(1.001, 1.003), Dimension(150, 1.2))
    assert res.ups_per_sheet == 149
    assert t["seconds"] < 5.0
    raise_on_errors(validate_packing(res))


def test_guillotine_work_limit_falls_back_to_grid() -> None:
    layout = pack_guillotine(10_000, 9_000, 4_000, 6_000, allow_rotation=True, max_work=10)
    assert layout.count() == uniform_grid(10_000, 9_000, 4_000, 6_000).count == 2
    assert layout.cuts == []


def test_dimension_is_valid() -> None:
    assert Dimension(4, 6).is_valid()
    assert not Dimension(0, 6).is_valid()
    assert not Dimension(4, math.inf).is_valid()
    assert not Dimension(math.nan, 6).is_valid()


def test_layouts_are_valid() -> None:
    cases = [
        (Dimension(4, 6), Dimension(18, 23)),
        (Dimension(3.5, 2), Dimension(25, 36)),
        (Dimension(7.3, 9.1), Dimension(27.56, 39.37)),
        (Dimension(11, 17), Dimension(28, 40)),
    ]
    for piece, sheet in cases:
        res = count_fitting_copies(piece, sheet)
        assert res.ups_per_sheet > 0
        # never below the plain grid
        grid = uniform_grid(res.sheet_w, res.sheet_h, int(round(piece.width * 1000)), int(round(piece.height * 1000)))
        assert res.ups_per_sheet >= grid.count
        raise_on_errors(validate_packing(res))


def test_placement_ceiling_uses_capped_grid() -> None:
    res = count_fitting_copies(Dimension(1, 1), Dimension(20, 20))
    assert res.ups_per_sheet == 200
    assert res.method == "grid"
    assert "capped at 200" in res.layout_description
    raise_on_errors(validate_packing(res))


def test_custom_ceiling() -> None:
    res = count_fitting_copies(Dimension(4, 6), Dimension(20, 30), params=PackerParams(max_placements=10))
    assert res.ups_per_sheet == 10


def test_unknown_method_rejected() -> None:
    with pytest.raises(ValueError):
        PackerParams(methods=("shelf",))
    with pytest.raises(ValueError):
        PackerParams(scale=0)


def test_normal_positions() -> None:
    assert normal_positions(10, [4, 6]) == [0, 4, 6, 8, 10]
    assert normal_positions(5, [6]) == [0]


def test_uniform_grid_prefers_portrait_on_tie() -> None:
    fit = uniform_grid(6, 6, 2, 3)
    assert fit.count == 6
    assert not fit.rotated
    assert fit.describe() == "3 across x 2 down (portrait)"


def test_guillotine_engine_emits_cuts_inside_sheet() -> None:
    layout = pack_guillotine(10_000, 9_000, 4_000, 6_000, allow_rotation=True)
    assert layout.count() == 3
    assert layout.cuts
    for c in layout.cuts:
        assert c.a0 < c.a1
        if c.orientation == "V":
            assert 0 < c.coord < 10_000
        else:
            assert 0 < c.coord < 9_000


def test_maxrects_squares() -> None:
    layout = pack_maxrects(10_000, 10_000, 5_000, 5_000)
    assert layout.count() == 4
    check_no_overlap(layout.placements)


def test_maxrects_respects_max_placements() -> None:
    layout = pack_maxrects(10_000, 10_000, 1_000, 1_000, max_placements=7)
    assert layout.count() == 7


def test_cp_sat_engine() -> None:
    params = PackerParams(methods=("cp_sat",), cp_sat_time_limit_s=2.0)
    res = count_fitting_copies(Dimension(4, 6), Dimension(10, 9), params=params)
    assert res.ups_per_sheet == 3
    assert res.method == "cp_sat"
    raise_on_errors(validate_packing(res))

    res = count_fitting_copies(Dimension(4, 6), Dimension(10, 9), allow_rotation=False, params=params)
    assert res.ups_per_sheet == 2


def main() -> None:
    print("Running packer tests...")
    test_grid_sized_sheet_is_full()
    test_layout_metrics()
    test_piece_equal_to_sheet()
    test_piece_larger_than_sheet()
    test_invalid_dimensions(Dimension(4, 6), Dimension(0, 30))
    test_rotation_gives_more_ups()
    test_only_fits_rotated()
    test_deterministic()
    test_guillotine_monotone_in_sheet_size()
    test_default_engines_monotone_in_sheet_size()
    test_long_strip_stays_fast()
    test_guillotine_work_limit_falls_back_to_grid()
    test_dimension_is_valid()
    test_layouts_are_valid()
    test_placement_ceiling_uses_capped_grid()
    test_custom_ceiling()
    test_normal_positions()
    test_uniform_grid_prefers_portrait_on_tie()
    test_guillotine_engine_emits_cuts_inside_sheet()
    test_maxrects_squares()
    test_maxrects_respects_max_placements()
    test_cp_sat_engine()
    print("OK")


if __name__ == "__main__":
    main()
