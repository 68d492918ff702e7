from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from numbers import Real
from typing import Any

from ..models.config_models import FieldSpec, FieldType, RecordKindSpec
from ..models.processing_result import MISSING_REQUIRED_FIELD, Accepted, Rejected, RowOutcome
from ..models.records import RECORD_CLASSES
from .date_normalizer import normalize_date
from .numeric_normalizer import normalize_total

"""Row validation and canonical record assembly.

Row problems are returned as Rejected outcomes, never raised, so the pipeline
always moves on to the next row. Checks run in a fixed order: missing date,
missing required text fields (in field order), missing total, unparseable
date, invalid total.
"""

__all__ = [
    "assemble",
    "to_text",
    "missing_reason",
    "invalid_reason",
]

_CHECK_ORDER = (FieldType.DATE, FieldType.STRING, FieldType.DECIMAL)


def to_text(value: Any) -> str:
    """Trimmed text form of a cell; integral floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == datetime.min.time() else value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def missing_reason(field: FieldSpec) -> str:
    if field.field_type is FieldType.STRING:
        return f"{MISSING_REQUIRED_FIELD}({field.name})"
    return f"missing_{field.name}"


def invalid_reason(field: FieldSpec) -> str:
    if field.field_type is FieldType.DATE:
        return f"invalid_{field.name}_format"
    return f"invalid_{field.name}"


def _is_missing(field: FieldSpec, value: Any) -> bool:
    # 0 in a date column is an empty cell exported as a number
    if field.field_type is FieldType.DATE and isinstance(value, Real) and not isinstance(value, bool):
        return value == 0
    return to_text(value) == ""


def _ordered(spec: RecordKindSpec, *types: FieldType) -> list[FieldSpec]:
    return [f for t in types for f in spec.fields if f.field_type is t]


def assemble(spec: RecordKindSpec, row_number: int, resolved: Mapping[str, Any]) -> RowOutcome:
    """Build the canonical record for one row, or reject it with a reason."""
    for field in _ordered(spec, *_CHECK_ORDER):
        if field.required and _is_missing(field, resolved.get(field.name)):
            return Rejected(row_number, missing_reason(field))

    values: dict[str, Any] = {}
    for field in _ordered(spec, FieldType.DATE, FieldType.DECIMAL):
        raw = resolved.get(field.name)
        if _is_missing(field, raw):
            values[field.name] = "" if field.field_type is FieldType.DATE else None
            continue
        if field.field_type is FieldType.DATE:
            normalized = normalize_date(raw)
        else:
            normalized = normalize_total(raw)
        if normalized is None:
            return Rejected(row_number, invalid_reason(field))
        values[field.name] = normalized

    for field in _ordered(spec, FieldType.STRING):
        values[field.name] = to_text(resolved.get(field.name))

    record_cls = RECORD_CLASSES[spec.kind]
    return Accepted(row_number, record_cls(**values))
