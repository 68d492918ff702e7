from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from src.config.field_tables import KIND_SPECS
from src.models.config_models import ImportConfig, RecordKind, RecordKindSpec

"""Config loader.

Responsibilities:
- Load YAML config/import.yml
- Validate against import_schema.json (shipped next to this module)
- Apply defaults (output ./out, record_kind payment, header_scan_rows 10)
- Build the per-kind field specs with configured extra synonyms
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "build_kind_specs",
]

SCHEMA_PATH = Path(__file__).with_name("import_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails validation (missing keys, wrong types, extras).
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


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    extra = {
        RecordKind(kind): {name: list(labels) for name, labels in table.items()}
        for kind, table in data.get("extra_synonyms", {}).items()
    }
    cfg = ImportConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./out"),
        record_kind=RecordKind(data.get("record_kind", RecordKind.PAYMENT.value)),
        kind_patterns={pattern: RecordKind(kind) for pattern, kind in data.get("kind_patterns", {}).items()},
        header_scan_rows=data.get("header_scan_rows", 10),
        sheet=data.get("sheet", 0),
        extra_synonyms=extra,
    )
    # 未知のフィールド名はここで検出 (スキーマでは表現できない)
    build_kind_specs(cfg)
    return cfg


def build_kind_specs(cfg: ImportConfig) -> dict[RecordKind, RecordKindSpec]:
    """Built-in specs with the config's extra synonyms appended."""
    specs: dict[RecordKind, RecordKindSpec] = {}
    for kind, spec in KIND_SPECS.items():
        try:
            specs[kind] = spec.with_extra_synonyms(cfg.extra_synonyms.get(kind))
        except KeyError as e:
            raise ConfigError(f"extra_synonyms: {e.args[0]}") from e
    return specs
