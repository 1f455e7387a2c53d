from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .row import CanonicalRow

"""Import result models.

``ImportResult`` aggregates the outcome of reading and normalizing a batch of
input files: the concatenated rows plus one FileStat per file.
"""

__all__ = [
    "FileStat",
    "ImportResult",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file import statistics."""
    file_name: str
    status: str  # success/failed
    rows: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ImportResult:
    rows: list[CanonicalRow]
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def success_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "success")

    @property
    def failed_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == "failed")
