#!/usr/bin/env python3
"""Generate synthetic attendance exports for manual runs and perf checks.

Writes comma-separated files shaped like a spreadsheet export:
- Row 1: title/preamble row (skipped by header detection)
- Row 2: header row (E.ID, Name, then day columns or Date/Status)
- Row 3+: data rows

Wide files have one row per employee and one column per day; long files have
one row per employee-day.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

STATUS_CODES = ["P", "A", "L", "CL", "SL", "EL", "W.H", ""]
# Mostly present; weekends/holidays show up as W.H
STATUS_WEIGHTS = [0.70, 0.05, 0.06, 0.03, 0.03, 0.03, 0.08, 0.02]


def generate_statuses(employees: int, days: int, seed: int = 42) -> np.ndarray:
    """Employees x days matrix of status codes."""
    rng = np.random.default_rng(seed)
    return rng.choice(STATUS_CODES, size=(employees, days), p=STATUS_WEIGHTS)


def wide_frame(employees: int, days: int, seed: int = 42) -> pd.DataFrame:
    statuses = generate_statuses(employees, days, seed)
    data: dict[str, list[str]] = {
        "E.ID": [f"E{i:04d}" for i in range(1, employees + 1)],
        "Name": [f"Employee {i}" for i in range(1, employees + 1)],
    }
    for day in range(1, days + 1):
        data[str(day)] = statuses[:, day - 1].tolist()
    return pd.DataFrame(data)


def long_frame(employees: int, days: int, seed: int = 42) -> pd.DataFrame:
    wide = wide_frame(employees, days, seed)
    long = wide.melt(id_vars=["E.ID", "Name"], var_name="Date", value_name="Status")
    # group rows per day like a daily punch sheet
    long["Date"] = long["Date"].astype(int)
    return long.sort_values(["Date", "E.ID"], kind="stable").reset_index(drop=True)


def write_export(frame: pd.DataFrame, output_path: Path, title: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as f:
        f.write(f"\"{title}\"\r\n")
        frame.to_csv(f, index=False, lineterminator="\r\n")
    print(f"Created export: {output_path}")
    print(f"  Rows: {len(frame):,} (+ 2 header rows)")
    print(f"  Columns: {len(frame.columns)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic attendance CSV exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 50 employees, 31 days, wide layout
  %(prog)s data/march.csv

  # long layout (one row per employee-day)
  %(prog)s data/march_long.csv --layout long --employees 200
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV path")
    parser.add_argument("--employees", type=int, default=50, help="Number of employees (default: 50)")
    parser.add_argument("--days", type=int, default=31, help="Days in the month (default: 31)")
    parser.add_argument("--layout", choices=["wide", "long"], default="wide")
    parser.add_argument("--title", default="Attendance Sheet", help="Preamble title row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.employees <= 0:
        print("Error: --employees must be positive", file=sys.stderr)
        return 1
    if not 1 <= args.days <= 31:
        print("Error: --days must be between 1 and 31", file=sys.stderr)
        return 1

    if args.layout == "wide":
        frame = wide_frame(args.employees, args.days, args.seed)
    else:
        frame = long_frame(args.employees, args.days, args.seed)
    write_export(frame, args.output, args.title)
    return 0


if __name__ == "__main__":
    sys.exit(main())
