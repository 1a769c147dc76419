from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .attendance import Employee
from .header_map import HeaderMap, SourceLayout

"""Result models for one ingestion and for a batch run over a directory."""

__all__ = [
    "Notice",
    "IngestResult",
    "FileStat",
    "ProcessingResult",
]

HEADER_NOT_FOUND = "HEADER_NOT_FOUND"
ID_COLUMN_UNRESOLVED = "ID_COLUMN_UNRESOLVED"
LAYOUT_AMBIGUOUS = "LAYOUT_AMBIGUOUS"


@dataclass(frozen=True)
class Notice:
    """A silent degradation applied during ingestion."""
    code: str  # UPPER_SNAKE
    message: str


@dataclass(frozen=True)
class IngestResult:
    """Everything derived from one raw text blob."""
    employees: tuple[Employee, ...]
    header_map: HeaderMap | None  # None when the text had no rows at all
    layout: SourceLayout
    row_count: int  # tokenized rows, preamble and header included
    notices: tuple[Notice, ...] = ()

    @property
    def entry_count(self) -> int:
        return sum(len(e.daily_entries) for e in self.employees)

    @property
    def degraded(self) -> bool:
        return bool(self.notices)


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics for a batch run."""
    file_name: str
    status: str  # success/failed
    layout: str
    employees: int
    entries: int
    elapsed_seconds: float
    notices: int = 0


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for the SUMMARY output line."""
    success_files: int
    failed_files: int
    total_employees: int
    total_entries: int
    degraded_files: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # entries / elapsed
    file_stats: list[FileStat] | None = None
    # file name -> ingestion result, successful files only
    ingests: dict[str, IngestResult] | None = None
