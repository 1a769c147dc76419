from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from attendance_sheet.logging.error_log import ErrorLogBuffer, records_from_ingest
from attendance_sheet.models.error_record import ErrorRecord
from attendance_sheet.services.pipeline import ingest_text

"""Notice log JSON Lines contract: fixed keys, no extras."""

ERROR_LOG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "required": ["timestamp", "file", "row", "error_type", "message"],
    "properties": {
        "timestamp": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$"},
        "file": {"type": "string", "minLength": 1},
        "row": {"type": "integer", "minimum": -1},
        "error_type": {"type": "string", "pattern": "^[A-Z][A-Z_]*$"},
        "message": {"type": "string"},
    },
}


def test_error_log_schema_valid_example():
    record = {
        "timestamp": "2025-03-01T10:12:33Z",
        "file": "march.csv",
        "row": -1,
        "error_type": "HEADER_NOT_FOUND",
        "message": "no header-like row found; using row 1 as header",
    }
    jsonschema.validate(record, ERROR_LOG_SCHEMA)


def test_error_log_schema_rejects_extra_key():
    record = {
        "timestamp": "2025-03-01T10:12:33Z",
        "file": "march.csv",
        "row": -1,
        "error_type": "HEADER_NOT_FOUND",
        "message": "x",
        "sheet": "not allowed",
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, ERROR_LOG_SCHEMA)


def test_flushed_records_match_schema(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.extend(records_from_ingest("odd.csv", ingest_text("just,some,text\n")))
    buf.append(ErrorRecord.create(file="bad.csv", row=-1, error_type="FILE_READ_ERROR", message="boom"))

    path = buf.flush()
    assert path is not None
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3  # HEADER_NOT_FOUND, ID_COLUMN_UNRESOLVED, FILE_READ_ERROR
    for line in lines:
        jsonschema.validate(json.loads(line), ERROR_LOG_SCHEMA)
