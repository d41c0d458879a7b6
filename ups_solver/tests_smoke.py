# ups_solver/tests_smoke.py
# Very small smoke tests you can run with:
#   python -m ups_solver.tests_smoke
#
# These are not full unit tests, but they quickly tell you if
# the packer, optimizer and validation are wired correctly.

from __future__ import annotations

from ups_solver.run import run_optimization
from ups_solver.sample_data import RandomInventoryConfig, example_inventory, example_piece, generate_random_inventory
from ups_solver.types import Dimension
from ups_solver.validate import raise_on_errors, validate_suggestion


def test_basic_run() -> None:
    res = run_optimization(example_piece(), 1000, example_inventory())
    result = res.result

    assert not result.is_empty()
    assert result.optimal is not None
    assert res.candidates_matched == res.candidates_total
    assert res.seconds >= 0.0
    for s in result.suggestions:
        raise_on_errors(validate_suggestion(s))


def test_nothing_fits() -> None:
    res = run_optimization(Dimension(50, 50), 10, example_inventory())
    assert res.result.suggestions == []
    assert res.result.optimal is None


def test_random_inventory() -> None:
    cfg = RandomInventoryConfig(seed=7, n_sheets=10)
    sheets = generate_random_inventory(cfg)
    assert [c.id for c in sheets] == [c.id for c in generate_random_inventory(cfg)]

    res = run_optimization(Dimension(5.5, 8.5), 2500, sheets)
    assert len(res.result.suggestions) <= len(sheets)
    for s in res.result.suggestions:
        assert s.ups_per_sheet > 0
        assert 0.0 <= s.wastage_percentage <= 100.0


def main() -> None:
    print("Running smoke tests...")
    test_basic_run()
    test_nothing_fits()
    test_random_inventory()
    print("OK")


if __name__ == "__main__":
    main()
