from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from medflow.config.loader import DEFAULT_CONFIG_PATH, ConfigError, default_config, load_config
from medflow.ingest.normalizer import normalize_records, resolve_field
from medflow.ingest.reader import InputFileError, read_input_file
from medflow.logging.init import log_summary, set_level, setup_logging
from medflow.logging.quality_log import QualityLogBuffer
from medflow.models.config_models import AnalyticsConfig
from medflow.services.aggregation import summarize
from medflow.services.filters import RowFilter, apply_filter
from medflow.services.graph_builder import build_graph
from medflow.services.pipeline import import_files
from medflow.services.quality import assess_quality
from medflow.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (``--config``, ``$MEDFLOW_CONFIG`` or
  ``config/medflow.yml``)
- Read and normalize every input file
- Apply row filters, compute the Summary, quality counts and graph payload
- Write JSON outputs when asked and print the SUMMARY line
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "MEDFLOW_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv. Existing environment wins unless ``override``."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="medflow",
        description="Summarize medical-supply delivery records and build the supplier/category/customer graph",
    )
    p.add_argument("inputs", nargs="*", type=Path, help="CSV / JSON / XLSX input files")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--max-nodes", type=int, default=None, help="Graph node-count bound (overrides config)")
    p.add_argument("--summary-out", type=Path, default=None, help="Write the Summary JSON here")
    p.add_argument("--graph-out", type=Path, default=None, help="Write the graph payload JSON here")
    p.add_argument("--display", action="store_true", help="Include node radius / link width in the graph payload")
    p.add_argument("--quality-log", action="store_true", help="Write per-row quality issues to logs/")
    p.add_argument("--inspect-data", action="store_true", help="Print resolved headers & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")

    f = p.add_argument_group("filters")
    f.add_argument("--supplier", action="append", default=[], help="Keep only this supplier (repeatable)")
    f.add_argument("--customer", action="append", default=[], help="Keep only this customer (repeatable)")
    f.add_argument("--category", action="append", default=[], help="Keep only this category (repeatable)")
    f.add_argument("--license", default="", help="License number contains (case-insensitive)")
    f.add_argument("--model", default="", help="Model contains (case-insensitive)")
    f.add_argument("--lot", default="", help="Lot number contains (case-insensitive)")
    f.add_argument("--serial", default="", help="Serial number contains (case-insensitive)")
    f.add_argument("--date-min", default=None, help="Earliest delivery date, YYYY-MM-DD (inclusive)")
    f.add_argument("--date-max", default=None, help="Latest delivery date, YYYY-MM-DD (inclusive)")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace, logger: logging.Logger) -> AnalyticsConfig:
    """Explicit config paths must exist; the default path is optional."""
    explicit = args.config or (Path(os.environ[CONFIG_ENV_VAR]) if os.getenv(CONFIG_ENV_VAR) else None)
    if explicit is not None:
        return load_config(explicit)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    logger.debug(f"no config at {DEFAULT_CONFIG_PATH}, using defaults")
    return default_config()


def _build_filter(args: argparse.Namespace) -> RowFilter:
    """Raises ValueError on a malformed date bound."""
    date_min = date.fromisoformat(args.date_min) if args.date_min else None
    date_max = date.fromisoformat(args.date_max) if args.date_max else None
    return RowFilter.build(
        suppliers=args.supplier,
        customers=args.customer,
        categories=args.category,
        license_no=args.license,
        model=args.model,
        lot_no=args.lot,
        serial_no=args.serial,
        date_min=date_min,
        date_max=date_max,
    )


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _inspect_data(paths: list[Path]) -> int:
    code = EXIT_SUCCESS_ALL
    for path in paths:
        print(f"FILE: {path.name}")
        try:
            records = read_input_file(path)
        except InputFileError as e:
            print(f"  read_error: {e}")
            code = EXIT_PARTIAL_FAILURE
            continue
        headers: list[str] = []
        for rec in records:
            for key in rec:
                if key not in headers:
                    headers.append(key)
        resolved = {h: resolve_field(h) for h in headers}
        print(f"  records={len(records)} headers={resolved}")
        for row in normalize_records(records[:3]):
            print("    sample_row=", row.to_dict())
    return code


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None means "read sys.argv"; an explicit [] must stay empty
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_level(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args, logger)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.inputs:
        logger.error("no input files given")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.inputs)

    try:
        row_filter = _build_filter(args)
    except ValueError as e:
        logger.error(f"filter: {e}")
        return EXIT_FATAL

    max_nodes = args.max_nodes if args.max_nodes is not None else cfg.graph.max_nodes
    if max_nodes < 1:
        logger.error(f"--max-nodes must be >= 1, got {max_nodes}")
        return EXIT_FATAL

    quality_log = QualityLogBuffer() if args.quality_log else None
    result = import_files(args.inputs, quality_log=quality_log)
    if result.success_files == 0:
        logger.error("no input file could be read")
        return EXIT_FATAL

    rows = apply_filter(result.rows, row_filter)
    if not row_filter.is_empty:
        logger.info(f"filter kept {len(rows)}/{len(result.rows)} rows")

    summary = summarize(
        rows,
        cfg.top_n,
        scatter_limit=cfg.scatter_limit,
        sample_size=cfg.sample_size,
    )
    quality = assess_quality(rows)
    graph = build_graph(rows, max_nodes)
    logger.info(f"graph nodes={len(graph.nodes)} links={len(graph.edges)}")

    if args.summary_out is not None:
        _write_json(args.summary_out, summary.to_dict())
        logger.info(f"summary written: {args.summary_out}")
    if args.graph_out is not None:
        display = cfg.graph.display if args.display else None
        _write_json(args.graph_out, graph.to_dict(display))
        logger.info(f"graph written: {args.graph_out}")
    if quality_log is not None:
        log_path = quality_log.flush()
        logger.info(f"quality log: {log_path}")

    summary_line = render_summary_line(result, summary, quality)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
