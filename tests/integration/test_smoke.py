from __future__ import annotations

from pathlib import Path

import pandas as pd
import yaml

from donorcheck.app.orchestrator import EXIT_INVALID_ROWS, EXIT_OK, EXIT_READ_ERROR
from donorcheck.config import Config
from donorcheck.main import main, run_pipeline


CSV_TEXT = (
    "email,amount,date,state,first_name\n"
    '" A@GMAIL.CON ","$1,000.50",3/4/2024,California,jane doe\n'
    "bad,10,2024-01-01,NY,bob\n"
    "c@x.com,-5,2024-13-01,TX,Al\n"
)


def _write_input(tmp_path: Path) -> Path:
    p = tmp_path / "donors.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    return p


def _read(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def _run_dir(out: Path) -> Path:
    dirs = [p for p in out.iterdir() if p.is_dir()]
    assert len(dirs) == 1
    return dirs[0]


def test_validate_only_writes_row_sets(tmp_path: Path) -> None:
    src = _write_input(tmp_path)
    code = run_pipeline(src, tmp_path / "runs")
    assert code == EXIT_OK

    run_dir = _run_dir(tmp_path / "runs")
    cleaned = _read(run_dir / "cleaned_donors.csv")
    assert len(cleaned) == 1
    assert cleaned.loc[0, "date"] == "2024-03-04"
    assert cleaned.loc[0, "email"] == "A@GMAIL.CON"

    full = _read(run_dir / "full_updated_donors.csv")
    assert len(full) == 3

    report = _read(run_dir / "error_report_donors.csv")
    assert list(report["email"]) == ["bad", "c@x.com"]

    assert not (run_dir / "autofix_changes.csv").exists()
    assert (run_dir / "logs.jsonl").exists()
    manifest = yaml.safe_load((run_dir / "run_manifest.yaml").read_text(encoding="utf-8"))
    assert manifest["totals"]["invalid_rows"] == 2
    assert manifest["totals"]["errors"] == {"email": 1, "donation": 1, "date": 1, "duplicate": 0}


def test_auto_fix_run(tmp_path: Path) -> None:
    src = _write_input(tmp_path)
    cfg = Config(auto_fix=True, flip_negative_amounts=True)
    code = run_pipeline(src, tmp_path / "runs", cfg)
    assert code == EXIT_OK

    run_dir = _run_dir(tmp_path / "runs")
    full = _read(run_dir / "full_updated_donors.csv")
    first = full.loc[0]
    assert first["email"] == "a@gmail.com"
    assert first["donation_amount"] == "1000.5"
    assert first["date"] == "2024-03-04"
    assert first["state"] == "CA"
    assert first["first_name"] == "Jane Doe"
    assert full.loc[2, "donation_amount"] == "5"

    changes = _read(run_dir / "autofix_changes.csv")
    assert "Corrected typo: gmail.con -> gmail.com" in set(changes["fix_type"])
    unresolved = _read(run_dir / "autofix_unresolved.csv")
    assert set(unresolved["reason"]) == {"Invalid email (missing @)", "Invalid date values"}

    # row 3 is still invalid on its date, row 2 on its email
    report = _read(run_dir / "error_report_donors.csv")
    assert len(report) == 2


def test_strict_mode_fails_on_invalid_rows(tmp_path: Path) -> None:
    src = _write_input(tmp_path)
    code = run_pipeline(src, tmp_path / "runs", Config(strict_fail=True))
    assert code == EXIT_INVALID_ROWS


def test_clean_input_strict_ok(tmp_path: Path) -> None:
    src = tmp_path / "ok.csv"
    src.write_text("email,amount\na@x.com,5\nb@x.com,7\n", encoding="utf-8")
    code = run_pipeline(src, tmp_path / "runs", Config(strict_fail=True))
    assert code == EXIT_OK
    run_dir = _run_dir(tmp_path / "runs")
    assert not (run_dir / "error_report_ok.csv").exists()


def test_unsupported_input(tmp_path: Path) -> None:
    src = tmp_path / "donors.json"
    src.write_text("[]", encoding="utf-8")
    assert run_pipeline(src, tmp_path / "runs") == EXIT_READ_ERROR


def test_xlsx_output(tmp_path: Path) -> None:
    src = _write_input(tmp_path)
    code = run_pipeline(src, tmp_path / "runs", Config(auto_fix=True, output_format="xlsx"))
    assert code == EXIT_OK

    run_dir = _run_dir(tmp_path / "runs")
    xls = pd.ExcelFile(run_dir / "donors_checked.xlsx")
    assert xls.sheet_names == [
        "Cleaned",
        "FullUpdated",
        "ErrorReport",
        "AutofixChanges",
        "AutofixUnresolved",
    ]


def test_cli_flags(tmp_path: Path) -> None:
    src = _write_input(tmp_path)
    code = main(
        [
            "--input",
            str(src),
            "--out",
            str(tmp_path / "runs"),
            "--auto-fix",
            "--flip-negatives",
            "--strict",
        ]
    )
    # the impossible date and the bad email survive auto-fix
    assert code == EXIT_INVALID_ROWS
    run_dir = _run_dir(tmp_path / "runs")
    manifest = yaml.safe_load((run_dir / "run_manifest.yaml").read_text(encoding="utf-8"))
    assert manifest["options"]["auto_fix"] is True
    assert manifest["options"]["flip_negative_amounts"] is True
    assert manifest["options"]["strict_fail"] is True
