from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..ingest.normalizer import normalize_records
from ..ingest.reader import InputFileError, parse_raw_input, read_input_file
from ..logging.quality_log import QualityLogBuffer
from ..models.processing_result import FileStat, ImportResult
from ..models.row import CanonicalRow
from .progress import ProgressTracker
from .quality import collect_issues

"""Import pipeline: input files -> one normalized row sequence.

Each file is read and normalized on its own; rows are concatenated in the
order the files were given. A file that cannot be read is recorded as failed
and skipped, the rest of the batch still imports.
"""

__all__ = [
    "import_text",
    "import_files",
]

logger = logging.getLogger(__name__)


def import_text(text: str) -> list[CanonicalRow]:
    """Parse and normalize in-memory text (JSON array or CSV)."""
    return normalize_records(parse_raw_input(text))


def import_files(
    paths: Sequence[Path],
    *,
    quality_log: QualityLogBuffer | None = None,
) -> ImportResult:
    """Read, parse and normalize every file in ``paths``.

    Args:
        paths: input files (.csv, .json, .txt, .xlsx ...), read in order
        quality_log: when given, receives one record per degraded row field

    Returns:
        ImportResult with the concatenated rows and one FileStat per file
    """
    start_time = datetime.now(UTC)
    rows: list[CanonicalRow] = []
    file_stats: list[FileStat] = []

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            file_start = datetime.now(UTC)
            try:
                records = read_input_file(path)
            except InputFileError as e:
                logger.error(f"input: {e}")
                file_stats.append(
                    FileStat(
                        file_name=path.name,
                        status="failed",
                        rows=0,
                        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                        error=str(e),
                    )
                )
                progress.finish_file(0)
                continue

            file_rows = normalize_records(records)
            if quality_log is not None:
                for issue in collect_issues(file_rows, path.name):
                    quality_log.append(issue)
            rows.extend(file_rows)
            elapsed = (datetime.now(UTC) - file_start).total_seconds()
            file_stats.append(
                FileStat(file_name=path.name, status="success", rows=len(file_rows), elapsed_seconds=elapsed)
            )
            logger.info(f"{path.name}: {len(file_rows)} rows")
            progress.finish_file(len(file_rows))

    end_time = datetime.now(UTC)
    return ImportResult(
        rows=rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
