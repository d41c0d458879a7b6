# ups_solver/tests_inventory.py
# Inventory matching tests (pytest or `python -m ups_solver.tests_inventory`).

from __future__ import annotations

from typing import Optional

from ups_solver.inventory import MatchParams, filter_candidates, mismatch_reason, quality_unit
from ups_solver.types import Dimension, QualitySpec, SheetCandidate


def _sheet(
    cid: str,
    quality: str,
    gsm: Optional[float] = None,
    thickness: Optional[float] = None,
    stock: int = 50,
) -> SheetCandidate:
    return SheetCandidate(
        id=cid,
        dimension=Dimension(20, 30),
        quality=QualitySpec(paper_quality=quality, gsm=gsm, thickness_mm=thickness),
        available_stock=stock,
    )


def test_quality_unit() -> None:
    assert quality_unit("GG_KAPPA") == "mm"
    assert quality_unit("WG_KAPPA") == "mm"
    assert quality_unit("mdf") == "mm"
    assert quality_unit("SBS") == "gsm"
    assert quality_unit("ART_PAPER_GLOSS") == "gsm"


def test_gsm_within_five_percent() -> None:
    target = QualitySpec(paper_quality="SBS", gsm=300)
    sheets = [
        _sheet("ok-low", "SBS", gsm=290),
        _sheet("ok-high", "SBS", gsm=314),
        _sheet("too-heavy", "SBS", gsm=316),
        _sheet("too-light", "SBS", gsm=280),
        _sheet("no-gsm", "SBS"),
        _sheet("other-quality", "GREYBACK", gsm=300),
    ]
    kept = filter_candidates(sheets, target)
    assert [c.id for c in kept] == ["ok-low", "ok-high"]


def test_thickness_for_board_qualities() -> None:
    target = QualitySpec(paper_quality="GG_KAPPA", thickness_mm=1.2)
    sheets = [
        _sheet("same", "GG_KAPPA", thickness=1.2),
        _sheet("close", "GG_KAPPA", thickness=1.25),
        _sheet("far", "GG_KAPPA", thickness=1.35),
        _sheet("gsm-only", "GG_KAPPA", gsm=1200),
    ]
    kept = filter_candidates(sheets, target)
    assert [c.id for c in kept] == ["same", "close"]


def test_out_of_stock_skipped() -> None:
    target = QualitySpec(paper_quality="SBS", gsm=300)
    empty = _sheet("empty", "SBS", gsm=300, stock=0)
    assert mismatch_reason(empty, target) == "no available stock"
    assert filter_candidates([empty], target) == []

    keep_all = MatchParams(skip_out_of_stock=False)
    assert mismatch_reason(empty, target, keep_all) is None


def test_custom_tolerances() -> None:
    target = QualitySpec(paper_quality="SBS", gsm=300)
    sheet = _sheet("s", "SBS", gsm=320)
    assert mismatch_reason(sheet, target) is not None
    assert mismatch_reason(sheet, target, MatchParams(gsm_tolerance_frac=0.1)) is None


def test_order_preserved() -> None:
    target = QualitySpec(paper_quality="SBS", gsm=300)
    sheets = [_sheet(cid, "SBS", gsm=300) for cid in ("z", "a", "m")]
    assert [c.id for c in filter_candidates(sheets, target)] == ["z", "a", "m"]


def main() -> None:
    print("Running inventory tests...")
    test_quality_unit()
    test_gsm_within_five_percent()
    test_thickness_for_board_qualities()
    test_out_of_stock_skipped()
    test_custom_tolerances()
    test_order_preserved()
    print("OK")


if __name__ == "__main__":
    main()
