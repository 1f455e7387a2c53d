# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from medflow.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logger():
    # the app logger binds sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MEDFLOW_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """top_n:
  suppliers: 3
  models: 2
scatter_limit: 50
sample_size: 2
graph:
  max_nodes: 10
  radius_min: 2.0
  radius_max: 12.0
  width_scale: 1.0
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "medflow.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def delivery_csv_text() -> str:
    return (
        "Supplier,Client,Category,Qty,Delivery Date\n"
        "X,Y,Gloves,10,2024-01-15\n"
        "X,Z,Gloves,5,20240116\n"
        "W,Y,Masks,abc,bad\n"
    )


@pytest.fixture()
def delivery_csv(temp_workdir: Path, delivery_csv_text: str) -> Path:
    f = temp_workdir / "data" / "deliveries.csv"
    f.write_text(delivery_csv_text, encoding="utf-8")
    return f
