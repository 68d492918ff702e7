from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from src.config.loader import SCHEMA_PATH

"""Config schema contract test: shipped sample config and rejected shapes."""


@pytest.fixture(scope="module")
def schema():
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(schema):
    config = {
        "source_directory": "./data",
        "output_directory": "./out",
        "record_kind": "income",
        "kind_patterns": {"*ايرادات*.xlsx": "income", "pay*.xlsx": "payment"},
        "header_scan_rows": 15,
        "sheet": "Ledger",
        "extra_synonyms": {"payment": {"total": ["المبلغ"]}},
    }
    jsonschema.validate(config, schema)


def test_shipped_sample_config_is_valid(schema, request):
    sample = request.config.rootpath / "config" / "import.yml"
    jsonschema.validate(yaml.safe_load(sample.read_text(encoding="utf-8")), schema)


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"source_directory": ""},
        {"source_directory": "./data", "record_kind": "refund"},
        {"source_directory": "./data", "header_scan_rows": 0},
        {"source_directory": "./data", "sheet": -1},
        {"source_directory": "./data", "kind_patterns": {"*.xlsx": "other"}},
        {"source_directory": "./data", "extra_synonyms": {"refund": {"total": ["x"]}}},
        {"source_directory": "./data", "extra_synonyms": {"payment": {"total": "x"}}},
        {"source_directory": "./data", "database": {"host": "localhost"}},
    ],
)
def test_config_schema_rejects(schema, config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, schema)
