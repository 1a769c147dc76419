from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, setup_logging
from ..models.attendance import Employee
from ..models.config_models import AppConfig
from ..models.period import PERIOD_NAMES, Period, period_from_name
from ..services.aggregator import employee_stats
from ..services.export import entries_frame, stats_frame, write_stats
from ..services.fetch import FetchError, build_candidate_urls, fetch_sheet_text
from ..services.pipeline import ProcessingError, collect_employees, process_all, process_text
from ..services.search import search_employees, select_employee
from ..services.summary import render_employee_report, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (SHEET_ID / SHEET_GID take precedence over the config file)
- Load and validate the YAML config
- Ingest every export file in ``source_directory`` (or, with --fetch, the
  published spreadsheet)
- Optionally search / report / export over the ingested employees
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Attendance sheet ingester")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print resolved headers & first employees then exit")
    p.add_argument("--fetch", action="store_true", help="Fetch the configured spreadsheet instead of scanning files")
    p.add_argument("--period", choices=sorted(PERIOD_NAMES), help="Canonical period (default from config)")
    p.add_argument("--start", type=int, help="Custom period start day (requires --end)")
    p.add_argument("--end", type=int, help="Custom period end day (requires --start)")
    p.add_argument("--query", help="List employees whose id or name contains this text")
    p.add_argument("--employee", help="Print the attendance report for this employee id")
    p.add_argument("--export", type=Path, help="Write per-employee statistics (.csv, or .xlsx with an entries sheet)")
    return p.parse_args(argv)


def _resolve_period(args: argparse.Namespace, cfg: AppConfig) -> Period:
    if args.start is not None or args.end is not None:
        if args.start is None or args.end is None:
            raise ValueError("--start and --end must be given together")
        return Period.custom(args.start, args.end)
    return period_from_name(args.period or cfg.default_period)


def _sheet_source(cfg: AppConfig) -> tuple[str | None, str | None]:
    """Sheet id / gid: environment first, config as fallback."""
    sheet_id = os.getenv("SHEET_ID") or cfg.sheet.sheet_id
    gid = os.getenv("SHEET_GID") or cfg.sheet.gid
    return sheet_id, gid


def _inspect_data(result, logger) -> int:
    for name, ingest in (result.ingests or {}).items():
        print(f"FILE: {name}")
        hm = ingest.header_map
        if hm is None:
            print("  (no rows)")
            continue
        print(
            f"  header_row={hm.header_index + 1} found={hm.header_found} layout={ingest.layout.value} "
            f"id={hm.id} name={hm.name} status={hm.status} serial={hm.serial} "
            f"days={[c.label for c in hm.day_columns]}"
        )
        for emp in ingest.employees[:3]:
            print(f"    {emp.id} {emp.name!r} entries={len(emp.daily_entries)}")
    return EXIT_SUCCESS_ALL


def _report_queries(args: argparse.Namespace, employees: tuple[Employee, ...], cfg: AppConfig, period: Period, logger) -> None:
    if args.query is not None:
        matches = search_employees(employees, args.query)
        logger.info(f"query={args.query!r} matches={len(matches)}")
        for emp in matches:
            stats = employee_stats(emp, period, cfg.profile)
            logger.info(
                f"{emp.id} {emp.name or 'Unnamed'} present={stats.present_count} absent={stats.absent_count} "
                f"late={stats.late_count}"
            )

    if args.employee is not None:
        emp = select_employee(employees, args.employee)
        if emp is None:
            logger.warning(f"employee not found: {args.employee}")
        else:
            stats = employee_stats(emp, period, cfg.profile)
            for line in render_employee_report(emp, stats, period):
                logger.info(line)

    if args.export is not None:
        path = write_stats(stats_frame(employees, period, cfg.profile), args.export, entries=entries_frame(employees))
        logger.info(f"exported {len(employees)} employees to {path}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when argv is None (tests call main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        period = _resolve_period(args, cfg)
    except ValueError as e:
        logger.error(f"period: {e}")
        return EXIT_FATAL

    if args.fetch:
        sheet_id, gid = _sheet_source(cfg)
        urls = build_candidate_urls(sheet_id, gid)
        try:
            fetched = fetch_sheet_text(urls)
        except FetchError as e:
            logger.error(f"fetch: {e}")
            for attempt in e.attempts:
                logger.debug(f"  {attempt.url} -> {attempt.status}")
            return EXIT_FATAL
        logger.info(f"Fetched sheet from: {fetched.url}")
        result = process_text("sheet", fetched.text, cfg)
    else:
        directory = Path(cfg.source_directory)
        if not directory.exists():
            logger.error(f"directory not found: {directory}")
            return EXIT_FATAL
        logger.info(f"Processing files from: {directory}")
        try:
            result = process_all(cfg)
        except ProcessingError as e:
            logger.error(f"processing: {e}")
            return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(result, logger)

    employees = collect_employees(result)
    try:
        _report_queries(args, employees, cfg, period, logger)
    except (OSError, ValueError) as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
