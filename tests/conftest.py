# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from attendance_sheet.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _no_tty(monkeypatch):
    # keep tqdm out of captured output regardless of the terminal running pytest
    monkeypatch.setattr("attendance_sheet.services.progress.is_tty_enabled", lambda: False)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        for var in ("SHEET_ID", "SHEET_GID"):
            monkeypatch.delenv(var, raising=False)
        reset_logging()
        yield p
        reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
file_suffixes: [.csv]
default_period: full
sheet:
  id: 1AbCdEfGhIjK
  gid: "0"
profile:
  id_fallback: [id, serial]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "attendance.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


WIDE_CSV = (
    '"March attendance",,,,\r\n'
    "E.ID,Name,1,2,16\r\n"
    "E001,Ann,P,A,L\r\n"
    "E002,Bob,CL,SL,EL\r\n"
)

LONG_CSV = (
    "Employee ID,Name,Date,Status\n"
    "E002,Bob,1,P\n"
    "E003,Cy,1,a\n"
    "E002,Bob,2, l \n"
)


@pytest.fixture()
def wide_csv() -> str:
    return WIDE_CSV


@pytest.fixture()
def long_csv() -> str:
    return LONG_CSV


@pytest.fixture()
def export_files(temp_workdir: Path) -> list[Path]:
    files = []
    for name, text in [("march_wide.csv", WIDE_CSV), ("march_long.csv", LONG_CSV)]:
        f = temp_workdir / "data" / name
        f.write_text(text, encoding="utf-8", newline="")
        files.append(f)
    return files
