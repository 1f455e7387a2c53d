from __future__ import annotations

from pathlib import Path

from medflow.cli import main as cli_main

"""Exit code contract: 0 all files read, 2 some files failed, 1 fatal."""


def test_exit_code_no_inputs_is_fatal(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == 1
    assert "ERROR no input files given" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, delivery_csv: Path, capsys):
    code = cli_main([str(delivery_csv)])
    assert code == 0
    assert "SUMMARY files=1/1" in capsys.readouterr().out


def test_exit_code_partial_failure(temp_workdir: Path, delivery_csv: Path, capsys):
    code = cli_main([str(delivery_csv), str(temp_workdir / "data" / "missing.csv")])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR input:" in out
    assert "SUMMARY files=1/2" in out


def test_exit_code_all_files_failed(temp_workdir: Path, capsys):
    code = cli_main([str(temp_workdir / "data" / "missing.csv")])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR no input file could be read" in out
    assert "SUMMARY" not in out


def test_exit_code_bad_config(temp_workdir: Path, delivery_csv: Path, capsys):
    (temp_workdir / "config" / "medflow.yml").write_text("unknown: 1\n", encoding="utf-8")
    code = cli_main([str(delivery_csv)])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_missing_explicit_config(temp_workdir: Path, delivery_csv: Path, capsys):
    code = cli_main([str(delivery_csv), "--config", "nowhere.yml"])
    assert code == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_exit_code_bad_date_filter(temp_workdir: Path, delivery_csv: Path, capsys):
    code = cli_main([str(delivery_csv), "--date-min", "15/01/2024"])
    assert code == 1
    assert "ERROR filter:" in capsys.readouterr().out


def test_exit_code_nonpositive_max_nodes(temp_workdir: Path, delivery_csv: Path, capsys):
    code = cli_main([str(delivery_csv), "--max-nodes", "0"])
    assert code == 1
    assert "ERROR --max-nodes must be >= 1" in capsys.readouterr().out
