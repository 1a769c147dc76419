"""Domain models for the attendance sheet ingester.

Value objects produced by ingestion (employees, daily entries, statistics),
the header map, periods, configuration profiles and result records.
"""

from .attendance import AttendanceStats, DailyEntry, Employee
from .config_models import AppConfig, ColumnAliases, HeaderProbes, IngestProfile, SheetSourceConfig
from .header_map import DayColumn, HeaderMap, SourceLayout
from .period import Period, period_from_name
from .processing_result import FileStat, IngestResult, Notice, ProcessingResult

__all__ = [
    # Attendance models
    "AttendanceStats",
    "DailyEntry",
    "Employee",
    # Configuration models
    "AppConfig",
    "ColumnAliases",
    "HeaderProbes",
    "IngestProfile",
    "SheetSourceConfig",
    # Ingestion models
    "DayColumn",
    "HeaderMap",
    "SourceLayout",
    "Period",
    "period_from_name",
    "FileStat",
    "IngestResult",
    "Notice",
    "ProcessingResult",
]
