from __future__ import annotations

import json
import logging
import zipfile
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd

"""Format detection and raw-record parsing.

Raw text is tried as strict JSON first; a JSON array yields one record per
element, any other JSON value yields nothing. Text that is not JSON is read
as CSV with a header line.

Parsing of text never raises: the worst case is an empty list or records full
of empty strings. Only file I/O (``read_input_file``) can fail.
"""

__all__ = [
    "RawRecord",
    "InputFileError",
    "EXCEL_SUFFIXES",
    "parse_raw_input",
    "parse_json_text",
    "parse_csv_text",
    "split_csv_line",
    "read_input_file",
]

RawRecord = dict[str, Any]

EXCEL_SUFFIXES = {".xlsx"}

logger = logging.getLogger(__name__)


class InputFileError(Exception):
    """Raised when an input file cannot be opened or decoded."""


def parse_raw_input(text: str) -> list[RawRecord]:
    """Detect JSON vs CSV and return raw records in source order."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError):
        logger.debug("input is not JSON, falling back to CSV")
        return parse_csv_text(text)
    return parse_json_text(data)


def parse_json_text(data: Any) -> list[RawRecord]:
    """Turn an already-decoded JSON value into raw records."""
    if not isinstance(data, list):
        logger.debug("JSON input is %s, not an array -> no records", type(data).__name__)
        return []
    records: list[RawRecord] = []
    for item in data:
        if isinstance(item, Mapping):
            records.append({str(k): v for k, v in item.items()})
        else:
            # scalars/arrays carry no named fields; they normalize to an all-default row
            records.append({})
    return records


def split_csv_line(line: str) -> list[str]:
    """Quote-aware comma split.

    A double quote toggles the in-quote state and is not kept; commas inside
    quotes are literal. ``a,"b,c",d`` -> ``["a", "b,c", "d"]``.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quote = False
    for ch in line:
        if ch == '"':
            in_quote = not in_quote
        elif ch == "," and not in_quote:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    fields.append("".join(current).strip())
    return fields


def _strip_outer_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_csv_text(text: str) -> list[RawRecord]:
    """Parse CSV text whose first line is the header.

    Rows with fewer fields than headers get "" for the missing tail; extra
    fields are ignored. No line is rejected.
    """
    lines = text.strip().split("\n")
    if len(lines) < 2:
        return []
    headers = [h.strip().replace('"', "") for h in lines[0].split(",")]
    records: list[RawRecord] = []
    for line in lines[1:]:
        cols = split_csv_line(line)
        record: RawRecord = {}
        for idx, header in enumerate(headers):
            value = cols[idx] if idx < len(cols) else ""
            record[header] = _strip_outer_quotes(value) if value else ""
        records.append(record)
    logger.debug("parsed %d CSV records with headers=%s", len(records), headers)
    return records


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        # datetime cells (pd.Timestamp included) -> YYYYMMDD for the date parser
        return "" if pd.isna(value) else value.strftime("%Y%m%d")
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def _read_excel_records(path: Path) -> list[RawRecord]:
    # dtype=object keeps "000123" as text and date cells as datetimes
    df = pd.read_excel(path, sheet_name=0, dtype=object, keep_default_na=False)
    columns = [str(c).strip() for c in df.columns]
    records: list[RawRecord] = []
    for values in df.itertuples(index=False, name=None):
        records.append({c: _cell_text(v) for c, v in zip(columns, values, strict=False)})
    return records


def read_input_file(path: Path) -> list[RawRecord]:
    """Read one input file into raw records.

    ``.xlsx`` files are read with pandas (first sheet, first row as
    header). Anything else is decoded as UTF-8 text and passed through
    ``parse_raw_input``.

    Raises:
        InputFileError: if the file is missing, unreadable or not valid UTF-8
    """
    if not path.exists():
        raise InputFileError(f"input file not found: {path}")
    if path.suffix.lower() in EXCEL_SUFFIXES:
        try:
            return _read_excel_records(path)
        except (OSError, ValueError, ImportError, zipfile.BadZipFile) as e:
            raise InputFileError(f"cannot read workbook {path.name}: {e}") from e
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"cannot read {path.name}: {e}") from e
    return parse_raw_input(text)
