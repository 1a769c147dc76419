from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_PROFILE,
    AppConfig,
    IngestProfile,
    SheetSourceConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (``config/attendance.yml`` by default)
- Validate it against the bundled JSON schema
- Apply defaults (period=full, suffixes=[.csv], stock ingest profile)
- Overlay ``profile`` overrides on the stock tables
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "build_profile",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "schema.json"
DEFAULT_CONFIG_PATH = Path("config/attendance.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _check_pattern(pattern: str, key: str) -> str:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"invalid regex for {key}: {e}") from e
    return pattern


def build_profile(raw: dict[str, Any] | None, base: IngestProfile = DEFAULT_PROFILE) -> IngestProfile:
    """Overlay a ``profile`` section on `base`. Missing keys keep the base tables."""
    if not raw:
        return base

    aliases = base.aliases
    if "aliases" in raw:
        aliases = replace(aliases, **{k: tuple(v) for k, v in raw["aliases"].items()})

    probes = base.header_probes
    if "header_probes" in raw:
        overrides = {k: _check_pattern(v, f"header_probes.{k}") for k, v in raw["header_probes"].items()}
        probes = replace(probes, **overrides)

    day_patterns = base.day_column_patterns
    if "day_column_patterns" in raw:
        day_patterns = tuple(_check_pattern(p, "day_column_patterns") for p in raw["day_column_patterns"])

    status_table = base.status_table
    if "status_table" in raw:
        # replaces the stock table; codes compared upper-cased like stored statuses
        status_table = MappingProxyType(
            {code.strip().upper(): tuple(counters) for code, counters in raw["status_table"].items()}
        )

    return IngestProfile(
        aliases=aliases,
        header_probes=probes,
        day_column_patterns=day_patterns,
        status_table=status_table,
        id_fallback=tuple(raw.get("id_fallback", base.id_fallback)),
        generated_id_prefix=raw.get("generated_id_prefix", base.generated_id_prefix),
    )


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    sheet_raw = data.get("sheet") or {}
    gid = sheet_raw.get("gid")
    sheet = SheetSourceConfig(
        sheet_id=sheet_raw.get("id"),
        gid=str(gid) if gid is not None else None,
    )
    return AppConfig(
        source_directory=data["source_directory"],
        profile=build_profile(data.get("profile")),
        file_suffixes=tuple(s.lower() for s in data.get("file_suffixes", [".csv"])),
        default_period=data.get("default_period", "full"),
        sheet=sheet,
    )
