from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.quality_record import QualityIssue

"""Quality log buffering.

- JSON Lines, fixed key set (no extra keys)
- one ``logs/quality-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- records are buffered in memory and appended on ``flush()``
"""

__all__ = [
    "QualityIssue",
    "QualityLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class QualityLogBuffer:
    """In-memory buffer for quality issues. Flush writes JSON Lines."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[QualityIssue] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir or LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"quality-{stamp}.log"
        return self._file_path

    def append(self, record: QualityIssue) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path:
        if not self._records:
            return self.file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
