import csv
import json
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_sales_csv(path: Path) -> None:
    rows = [
        {"Date": "2024-01-01", "Product": "Bread"},
        {"Date": "2024-01-01", "Product": "Milk"},
        {"Date": "2024-01-02", "Product": "Bread"},
        {"Date": "2024-01-02", "Product": "Bread"},
    ]
    with path.open("w", newline="", encoding="utf-8") as stream:
        writer = csv.DictWriter(stream, fieldnames=["Date", "Product"])
        writer.writeheader()
        writer.writerows(rows)


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "scripts/run_basket_analysis.py", *args],
        cwd=REPO_ROOT,
        text=True,
        capture_output=True,
        check=False,
    )


def test_run_basket_analysis_prints_summary_and_exports(tmp_path: Path) -> None:
    sales_csv = tmp_path / "sales.csv"
    json_out = tmp_path / "out" / "result.json"
    csv_out = tmp_path / "out" / "combinations.csv"
    _write_sales_csv(sales_csv)

    result = _run(
        "--input-csv",
        str(sales_csv),
        "--threshold",
        "0.5",
        "--export",
        f"json={json_out}",
        "--export",
        f"csv={csv_out}",
        "--preview",
        "2",
    )

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["ingested_records"] == 4
    assert payload["result"]["totalRecords"] == 3
    assert payload["result"]["analyzedBaskets"] == 2
    assert [row["combination"] for row in payload["result"]["combinations"]] == ["bread + milk"]
    assert payload["preview"]["total_records"] == 4
    assert len(payload["preview"]["rows"]) == 2
    assert payload["exports"] == [str(json_out), str(csv_out)]
    assert json.loads(json_out.read_text(encoding="utf-8")) == payload["result"]
    assert csv_out.read_text(encoding="utf-8").startswith("combination,count,frequency,percentage")


def test_run_basket_analysis_reports_empty_input(tmp_path: Path) -> None:
    empty_csv = tmp_path / "empty.csv"
    empty_csv.write_text("Date,Product\n", encoding="utf-8")

    result = _run("--input-csv", str(empty_csv))

    assert result.returncode == 2
    assert "Analysis failed" in result.stderr


def test_run_basket_analysis_infers_export_format_from_suffix(tmp_path: Path) -> None:
    sales_csv = tmp_path / "sales.csv"
    json_out = tmp_path / "result.json"
    _write_sales_csv(sales_csv)

    result = _run("--input-csv", str(sales_csv), "--export", str(json_out))

    assert result.returncode == 0, result.stderr
    assert json.loads(json_out.read_text(encoding="utf-8"))["analyzedBaskets"] == 2


@pytest.mark.parametrize(
    ("extra_args", "message"),
    [
        (["--export", "=out.json"], "FORMAT=PATH"),
        (["--export", "pdf=out.pdf"], "Unknown export format 'pdf'"),
        (["--export", "out.pdf"], "No export format for suffix '.pdf'"),
        (["--profile", "missing"], "Resolution profile not found"),
        (["--threshold", "1.5"], "Threshold must be in (0, 1]"),
        (["--top-items", "0"], "top_items must be a positive integer"),
    ],
)
def test_run_basket_analysis_rejects_bad_arguments_without_traceback(
    tmp_path: Path,
    extra_args: list[str],
    message: str,
) -> None:
    sales_csv = tmp_path / "sales.csv"
    _write_sales_csv(sales_csv)

    result = _run("--input-csv", str(sales_csv), *extra_args)

    assert result.returncode == 2
    assert "error:" in result.stderr
    assert message in result.stderr
    assert "Traceback" not in result.stderr


def test_run_basket_analysis_rejects_missing_input(tmp_path: Path) -> None:
    result = _run("--input-csv", str(tmp_path / "absent.csv"))

    assert result.returncode == 2
    assert "Input file not found" in result.stderr
    assert "Traceback" not in result.stderr
