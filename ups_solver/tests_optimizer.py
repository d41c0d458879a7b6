# ups_solver/tests_optimizer.py
# Optimizer + metrics tests (pytest or `python -m ups_solver.tests_optimizer`).

from __future__ import annotations

import math

import pytest

from ups_solver.metrics import shortfall, sheets_needed, wastage_percentage
from ups_solver.optimizer import OptimizerParams, optimize, select_optimal, sort_suggestions
from ups_solver.sample_data import example_inventory, example_piece
from ups_solver.types import Dimension, SheetCandidate, Suggestion
from ups_solver.validate import raise_on_errors, validate_suggestion


def _sheet(cid: str, w: float, h: float, stock: int = 100) -> SheetCandidate:
    return SheetCandidate(id=cid, dimension=Dimension(w, h), available_stock=stock)


def _suggestion(cid: str, wastage: float, sheets: int) -> Suggestion:
    return Suggestion(
        candidate_id=cid,
        ups_per_sheet=10,
        wastage_percentage=wastage,
        sheets_needed=sheets,
        shortfall=0,
        layout_description="test",
    )


def test_empty_candidates() -> None:
    res = optimize(Dimension(4, 6), 1000, [])
    assert res.suggestions == []
    assert res.optimal is None
    assert res.is_empty()


def test_piece_larger_than_every_sheet() -> None:
    res = optimize(Dimension(30, 30), 1000, [_sheet("A", 20, 30), _sheet("B", 28, 40)])
    assert res.suggestions == []
    assert res.optimal is None


def test_non_positive_quantity() -> None:
    for qty in (0, -5):
        res = optimize(Dimension(4, 6), qty, [_sheet("A", 20, 30)])
        assert res.is_empty()
        assert res.optimal is None


def test_invalid_piece_gives_no_suggestions() -> None:
    res = optimize(Dimension(0, 6), 100, [_sheet("A", 20, 30)])
    assert res.is_empty()


def test_non_finite_sizes_are_skipped() -> None:
    res = optimize(Dimension(math.inf, 6), 100, [_sheet("A", 20, 30)])
    assert res.is_empty()
    res = optimize(Dimension(4, 6), 100, [_sheet("NaN", math.nan, 30), _sheet("A", 20, 30)])
    assert [s.candidate_id for s in res.suggestions] == ["A"]


def test_single_sheet_numbers() -> None:
    res = optimize(Dimension(4, 6), 1001, [_sheet("A", 20, 30, stock=10)])
    assert len(res.suggestions) == 1
    s = res.suggestions[0]
    assert s.ups_per_sheet == 25
    assert s.wastage_percentage == 0.0
    assert s.sheets_needed == 41
    assert s.shortfall == 31
    assert not s.has_enough_stock()
    assert res.optimal == s


def test_example_inventory_properties() -> None:
    piece = example_piece()
    qty = 1000
    candidates = example_inventory()
    res = optimize(piece, qty, candidates)

    assert len(res.suggestions) == len(candidates)
    for s in res.suggestions:
        raise_on_errors(validate_suggestion(s))
        assert 0.0 <= s.wastage_percentage <= 100.0
        assert s.sheets_needed == math.ceil(qty / s.ups_per_sheet)
        assert s.shortfall == max(0, s.sheets_needed - s.candidate.available_stock)

    pct = [s.wastage_percentage for s in res.suggestions]
    assert pct == sorted(pct)

    best = res.by_candidate()["SBS-20x30"]
    assert best.ups_per_sheet == 25
    assert best.wastage_percentage == 0.0
    assert best.sheets_needed == 40
    assert res.suggestions[0].wastage_percentage == 0.0

    # optimal: fewest sheets among those near the lowest wastage
    opt = res.optimal
    assert opt is not None
    floor_pct = res.suggestions[0].wastage_percentage
    assert opt.wastage_percentage <= floor_pct + 1.0
    for s in res.suggestions:
        if s.wastage_percentage <= floor_pct + 1.0:
            assert opt.sheets_needed <= s.sheets_needed


def test_sheet_rotation_never_lowers_ups() -> None:
    piece = Dimension(3.3, 5.1)
    candidates = example_inventory()
    turned = optimize(piece, 500, candidates, OptimizerParams(try_sheet_rotation=True)).by_candidate()
    fixed = optimize(piece, 500, candidates, OptimizerParams(try_sheet_rotation=False)).by_candidate()
    assert turned.keys() == fixed.keys()
    for cid, s in fixed.items():
        assert turned[cid].ups_per_sheet >= s.ups_per_sheet


def test_sort_ties_by_sheets_then_id() -> None:
    items = [
        _suggestion("C", 5.0, 30),
        _suggestion("B", 5.0, 20),
        _suggestion("A", 5.0, 20),
        _suggestion("D", 1.0, 90),
    ]
    assert [s.candidate_id for s in sort_suggestions(items)] == ["D", "A", "B", "C"]


def test_identical_sheets_sorted_by_id() -> None:
    res = optimize(Dimension(4, 6), 100, [_sheet("B", 20, 30), _sheet("A", 20, 30)])
    assert [s.candidate_id for s in res.suggestions] == ["A", "B"]
    assert res.optimal.candidate_id == "A"


def test_optimal_prefers_fewer_sheets_within_tolerance() -> None:
    a = _suggestion("A", 10.0, 20)
    b = _suggestion("B", 9.5, 40)
    ranked = sort_suggestions([a, b])
    assert ranked[0] is b
    assert select_optimal(ranked, tolerance_pct=1.0) is a
    # tighter tolerance: only B is near the floor
    assert select_optimal(ranked, tolerance_pct=0.25) is b


def test_optimal_none_for_empty() -> None:
    assert select_optimal([]) is None


def test_negative_tolerance_rejected() -> None:
    with pytest.raises(ValueError):
        OptimizerParams(wastage_tolerance_pct=-1.0)


def test_wastage_percentage() -> None:
    assert wastage_percentage(Dimension(4, 6), 25, Dimension(20, 30)) == 0.0
    assert wastage_percentage(Dimension(4, 6), 3, Dimension(10, 9)) == 20.0
    assert wastage_percentage(Dimension(4, 6), 0, Dimension(10, 9)) == 100.0
    # clamped when ups over-claims the sheet
    assert wastage_percentage(Dimension(4, 6), 30, Dimension(20, 30)) == 0.0
    assert wastage_percentage(Dimension(1, 1), 1, Dimension(3, 1)) == 66.67


def test_sheets_needed_and_shortfall() -> None:
    assert sheets_needed(1000, 25) == 40
    assert sheets_needed(1001, 25) == 41
    assert sheets_needed(1, 200) == 1
    with pytest.raises(ValueError):
        sheets_needed(10, 0)
    assert shortfall(40, 100) == 0
    assert shortfall(40, 25) == 15
    assert shortfall(40, -3) == 40


def main() -> None:
    print("Running optimizer tests...")
    test_empty_candidates()
    test_piece_larger_than_every_sheet()
    test_non_positive_quantity()
    test_invalid_piece_gives_no_suggestions()
    test_non_finite_sizes_are_skipped()
    test_single_sheet_numbers()
    test_example_inventory_properties()
    test_sheet_rotation_never_lowers_ups()
    test_sort_ties_by_sheets_then_id()
    test_identical_sheets_sorted_by_id()
    test_optimal_prefers_fewer_sheets_within_tolerance()
    test_optimal_none_for_empty()
    test_wastage_percentage()
    test_sheets_needed_and_shortfall()
    print("OK")


if __name__ == "__main__":
    main()
