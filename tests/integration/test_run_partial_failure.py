from __future__ import annotations

import json
from pathlib import Path

from medflow.cli import main as cli_main

"""Partial failure: unreadable inputs are skipped, the rest still summarizes."""


def test_partial_failure_continues_with_readable_files(temp_workdir: Path, delivery_csv: Path, capsys):
    broken = temp_workdir / "data" / "broken.xlsx"
    broken.write_bytes(b"definitely not a workbook")
    summary_out = temp_workdir / "summary.json"

    code = cli_main([str(broken), str(delivery_csv), "--summary-out", str(summary_out)])
    out = capsys.readouterr().out

    assert code == 2
    assert "ERROR input: cannot read workbook broken.xlsx" in out
    assert "INFO deliveries.csv: 3 rows" in out
    assert "SUMMARY files=1/2 rows=3 units=15" in out

    summary = json.loads(summary_out.read_text(encoding="utf-8"))
    assert summary["rows"] == 3
    assert summary["unique"] == {"suppliers": 2, "customers": 2, "categories": 2}


def test_non_array_json_input_reads_as_zero_rows(temp_workdir: Path, delivery_csv: Path, capsys):
    obj = temp_workdir / "data" / "object.json"
    obj.write_text(json.dumps({"Supplier": "X", "Qty": 99}), encoding="utf-8")

    code = cli_main([str(obj), str(delivery_csv)])
    out = capsys.readouterr().out

    # a readable file with no records is not a failure
    assert code == 0
    assert "INFO object.json: 0 rows" in out
    assert "SUMMARY files=2/2 rows=3" in out
