# ups_solver/tests_io.py
# JSON/CSV input, export and CLI tests (pytest; uses tmp_path/capsys fixtures).

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from ups_solver.cli import main as cli_main
from ups_solver.config import parse_size_text
from ups_solver.io_csv import export_all, read_inventory_csv
from ups_solver.io_json import load_request_json, request_from_dict, request_to_dict
from ups_solver.optimizer import optimize
from ups_solver.plotting import save_layout_png
from ups_solver.run import run_optimization
from ups_solver.sample_data import example_inventory, example_piece
from ups_solver.types import Dimension, QualitySpec
from ups_solver.utils import result_to_dict, save_result_json

INVENTORY_CSV = """id,width,height,quality,gsm,thickness_mm,stock,name,godown,line
S1,20,30,SBS,300,,500,SBS 300 20x30,Main,L1
S2,23,36,SBS,310,,0,SBS 310 23x36,Main,L2
S3,25,36,SBS,350,,900,SBS 350 25x36,Annex,L7
K1,28,40,GG_KAPPA,,1.2,40,Kappa board,Annex,L9
"""


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_size_text() -> None:
    assert parse_size_text("20x30") == Dimension(20.0, 30.0)
    assert parse_size_text(" 27.56 X 39.37 ") == Dimension(27.56, 39.37)
    with pytest.raises(ValueError):
        parse_size_text("2030")


def test_request_snake_case(tmp_path: Path) -> None:
    data = {
        "piece": {"width": 4, "height": 6},
        "requested_quantity": 1000,
        "target": {"paper_quality": "SBS", "gsm": 300},
        "candidates": [
            {
                "id": "A",
                "dimension": {"width": 20, "height": 30},
                "quality_spec": {"paper_quality": "SBS", "gsm": 300},
                "available_stock": 500,
            }
        ],
    }
    path = _write(tmp_path / "job.json", json.dumps(data))
    req = load_request_json(path)
    assert req.piece == Dimension(4.0, 6.0)
    assert req.requested_quantity == 1000
    assert req.target == QualitySpec(paper_quality="SBS", gsm=300.0)
    assert req.candidates[0].dimension == Dimension(20.0, 30.0)
    assert req.candidates[0].available_stock == 500

    again = request_from_dict(request_to_dict(req))
    assert again == req


def test_request_job_card_fields() -> None:
    data = {
        "jobSizeWidth": 4,
        "jobSizeHeight": 6,
        "netQuantity": 250,
        "targetPaperQuality": "GG_KAPPA",
        "targetPaperThicknessMm": 1.2,
        "availableMasterSheets": [
            {
                "id": "K1",
                "name": "Kappa 1.2mm",
                "masterSheetSizeWidth": 28,
                "masterSheetSizeHeight": 40,
                "paperQuality": "GG_KAPPA",
                "paperThicknessMm": 1.2,
                "availableStock": 12,
                "locationGodown": "Annex",
                "locationLineNumber": "L9",
            }
        ],
    }
    req = request_from_dict(data)
    assert req.requested_quantity == 250
    assert req.target.thickness_mm == 1.2
    c = req.candidates[0]
    assert c.quality.paper_quality == "GG_KAPPA"
    assert c.available_stock == 12
    assert c.location_godown == "Annex"


def test_request_missing_piece() -> None:
    with pytest.raises(ValueError):
        request_from_dict({"requested_quantity": 10, "candidates": []})


def test_read_inventory_csv(tmp_path: Path) -> None:
    path = _write(tmp_path / "stock.csv", INVENTORY_CSV)
    sheets = read_inventory_csv(path)
    assert [c.id for c in sheets] == ["S1", "S2", "S3", "K1"]
    assert sheets[0].quality.gsm == 300.0
    assert sheets[0].quality.thickness_mm is None
    assert sheets[3].quality.thickness_mm == 1.2
    assert sheets[1].available_stock == 0
    assert sheets[2].location_line_number == "L7"


def test_read_inventory_csv_requires_columns(tmp_path: Path) -> None:
    path = _write(tmp_path / "bad.csv", "name,width\nfoo,10\n")
    with pytest.raises(ValueError):
        read_inventory_csv(path)


def test_result_json_shape(tmp_path: Path) -> None:
    res = optimize(example_piece(), 1000, example_inventory())
    out = tmp_path / "res.json"
    save_result_json(res, out, include_layout=True)
    data = json.loads(out.read_text(encoding="utf-8"))
    assert set(data) == {"suggestions", "optimal"}
    first = data["suggestions"][0]
    for key in ("candidate_id", "ups_per_sheet", "wastage_percentage", "sheets_needed", "shortfall", "layout_description"):
        assert key in first
    assert len(first["layout"]["placements"]) == first["ups_per_sheet"]
    assert data["optimal"]["candidate_id"] == res.optimal.candidate_id

    empty = result_to_dict(optimize(example_piece(), 1000, []))
    assert empty == {"suggestions": [], "optimal": None}


def test_export_all(tmp_path: Path) -> None:
    res = optimize(example_piece(), 1000, example_inventory())
    export_all(res, tmp_path, prefix="job")
    with (tmp_path / "job.csv").open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == len(res.suggestions)
    assert sum(int(r["optimal"]) for r in rows) == 1
    with (tmp_path / "job_optimal_layout.csv").open(newline="", encoding="utf-8") as f:
        layout_rows = list(csv.DictReader(f))
    assert len(layout_rows) == res.optimal.ups_per_sheet


def test_run_optimization_with_target(tmp_path: Path) -> None:
    path = _write(tmp_path / "stock.csv", INVENTORY_CSV)
    sheets = read_inventory_csv(path)
    res = run_optimization(
        Dimension(4, 6),
        1000,
        sheets,
        target=QualitySpec(paper_quality="SBS", gsm=300),
        out_dir=tmp_path / "out",
    )
    # S2 has no stock, S3 is 350 gsm, K1 is board
    assert res.candidates_total == 4
    assert res.candidates_matched == 1
    assert [s.candidate_id for s in res.result.suggestions] == ["S1"]
    assert (tmp_path / "out" / "suggestions.csv").exists()
    assert (tmp_path / "out" / "suggestions.json").exists()


def test_save_layout_png(tmp_path: Path) -> None:
    res = optimize(Dimension(4, 6), 100, example_inventory())
    out = tmp_path / "layout.png"
    save_layout_png(res.optimal.packing, str(out))
    assert out.exists() and out.stat().st_size > 0


def test_cli_example(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    cli_main(["--example", "--quiet", "--out", str(tmp_path), "--png", str(tmp_path / "top.png")])
    out = capsys.readouterr().out
    assert "Optimal:" in out
    assert "SBS-20x30" in out
    assert (tmp_path / "suggestions.csv").exists()
    assert (tmp_path / "top.png").exists()


def test_cli_no_match(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    path = _write(tmp_path / "stock.csv", INVENTORY_CSV)
    cli_main(["--piece", "4x6", "--qty", "100", "--inventory", str(path), "--quality", "MDF", "--thickness", "3", "--quiet"])
    assert "No suitable inventory found" in capsys.readouterr().out


def test_cli_requires_input() -> None:
    with pytest.raises(SystemExit):
        cli_main(["--quiet"])
