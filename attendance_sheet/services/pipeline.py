from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..csvtext.tokenizer import tokenize
from ..logging.error_log import ErrorLogBuffer, ErrorRecord, records_from_ingest
from ..models.attendance import Employee
from ..models.config_models import DEFAULT_PROFILE, AppConfig, IngestProfile
from ..models.header_map import SourceLayout
from ..models.processing_result import (
    HEADER_NOT_FOUND,
    ID_COLUMN_UNRESOLVED,
    LAYOUT_AMBIGUOUS,
    FileStat,
    IngestResult,
    Notice,
    ProcessingResult,
)
from .header_resolver import resolve_header
from .progress import ProgressTracker
from .record_builder import build_employees

"""Ingestion pipeline and batch orchestration.

`ingest_text` runs tokenize -> resolve -> build over one raw text blob in a
single synchronous pass. It never raises on malformed content; degradations
are reported as notices on the result.

`process_all` ingests every export file in the configured directory, one file
at a time, and aggregates a ProcessingResult for the SUMMARY line.
"""

logger = logging.getLogger(__name__)

FILE_READ_ERROR = "FILE_READ_ERROR"
BOM = "\ufeff"


class ProcessingError(Exception):
    """Fatal batch error (source directory missing or unreadable)."""
    pass


def ingest_text(text: str, profile: IngestProfile = DEFAULT_PROFILE) -> IngestResult:
    """Parse one raw text blob into an Employee set."""
    # fetched or pasted text can still carry the BOM that read_export_text strips
    rows = tokenize(text.removeprefix(BOM))
    header_map = resolve_header(rows, profile)
    if header_map is None:
        return IngestResult(employees=(), header_map=None, layout=SourceLayout.UNRESOLVED, row_count=0)

    notices: list[Notice] = []
    if not header_map.header_found:
        notices.append(Notice(HEADER_NOT_FOUND, "no header-like row found; using row 1 as header"))
    if not header_map.has_identifier:
        notices.append(Notice(ID_COLUMN_UNRESOLVED, f"no identifier column in header {list(header_map.headers)}"))
    elif header_map.layout is SourceLayout.UNRESOLVED:
        notices.append(Notice(LAYOUT_AMBIGUOUS, "neither a status column nor day columns found"))

    employees = build_employees(rows[header_map.header_index + 1:], header_map, profile)
    return IngestResult(
        employees=employees,
        header_map=header_map,
        layout=header_map.layout,
        row_count=len(rows),
        notices=tuple(notices),
    )


def read_export_text(path: Path) -> str:
    # utf-8-sig drops the BOM some spreadsheet exports prepend
    return path.read_text(encoding="utf-8-sig")


def scan_export_files(directory: Path, suffixes: tuple[str, ...] = (".csv",)) -> list[Path]:
    """Scan directory for export files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in suffixes)
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _ingest_source(name: str, text: str, profile: IngestProfile, error_log: ErrorLogBuffer) -> tuple[FileStat, IngestResult]:
    start = datetime.now(UTC)
    result = ingest_text(text, profile)
    for notice in result.notices:
        logger.warning(f"{name}: {notice.code} {notice.message}")
    error_log.extend(records_from_ingest(name, result))
    logger.debug(f"{name}: layout={result.layout.value} employees={len(result.employees)} entries={result.entry_count}")
    stat = FileStat(
        file_name=name,
        status="success",
        layout=result.layout.value,
        employees=len(result.employees),
        entries=result.entry_count,
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        notices=len(result.notices),
    )
    return stat, result


def _flush_error_log(error_log: ErrorLogBuffer) -> None:
    # Don't fail the entire run if the notice log can't be written
    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write notice log: {e}")
        return
    if log_path is not None:
        logger.info(f"notices written to {log_path}")


def _build_result(
    start_time: datetime,
    file_stats: list[FileStat],
    ingests: dict[str, IngestResult],
) -> ProcessingResult:
    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    succeeded = [s for s in file_stats if s.status == "success"]
    total_entries = sum(s.entries for s in succeeded)
    # Calculate throughput (avoid division by zero)
    throughput = total_entries / elapsed_seconds if elapsed_seconds > 0 else 0.0
    return ProcessingResult(
        success_files=len(succeeded),
        failed_files=len(file_stats) - len(succeeded),
        total_employees=sum(s.employees for s in succeeded),
        total_entries=total_entries,
        degraded_files=sum(1 for s in succeeded if s.notices),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
        ingests=ingests,
    )


def process_text(name: str, text: str, config: AppConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Ingest one already-retrieved text blob (e.g. a fetched sheet) as a one-file run."""
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    stat, result = _ingest_source(name, text, config.profile, error_log)
    _flush_error_log(error_log)
    return _build_result(start_time, [stat], {name: result})


def process_all(config: AppConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Ingest every export file in the configured directory.

    A file that cannot be read fails on its own; the run continues with the
    next file. Notices and read failures go to the error log, flushed once at
    the end.

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_export_files(Path(config.source_directory), config.file_suffixes)

    file_stats: list[FileStat] = []
    ingests: dict[str, IngestResult] = {}

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)
            try:
                text = read_export_text(file_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"failed to read {file_path.name}: {e}")
                error_log.append(
                    ErrorRecord.create(file=file_path.name, row=-1, error_type=FILE_READ_ERROR, message=str(e))
                )
                file_stats.append(
                    FileStat(
                        file_name=file_path.name,
                        status="failed",
                        layout=SourceLayout.UNRESOLVED.value,
                        employees=0,
                        entries=0,
                        elapsed_seconds=(datetime.now(UTC) - file_start).total_seconds(),
                    )
                )
                progress.finish_file()
                continue

            stat, result = _ingest_source(file_path.name, text, config.profile, error_log)
            file_stats.append(stat)
            ingests[file_path.name] = result
            progress.set_postfix(
                success=len(ingests),
                failed=len(file_stats) - len(ingests),
                employees=sum(len(r.employees) for r in ingests.values()),
            )
            progress.finish_file()

    _flush_error_log(error_log)
    return _build_result(start_time, file_stats, ingests)


def collect_employees(result: ProcessingResult) -> tuple[Employee, ...]:
    """Employees of all successfully ingested sources, in source order."""
    if not result.ingests:
        return ()
    return tuple(emp for ingest in result.ingests.values() for emp in ingest.employees)
