from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

"""Config dataclasses for the ledger sheet importer.

FieldSpec / RecordKindSpec describe *what* a record kind looks like in a sheet
(label synonyms, required flags, target types, headerless column positions).
They are immutable and injected into the pipeline so tests can supply
alternate tables. ImportConfig is the runtime configuration loaded from YAML.
"""


class RecordKind(Enum):
    """Which canonical schema governs an import."""
    PAYMENT = "payment"
    INCOME = "income"


class FieldType(Enum):
    DATE = "date"
    STRING = "string"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class FieldSpec:
    """Resolution rules for one canonical field.

    synonyms are tried in order (exact label match first, then reversed
    key/value recovery). positions are 0-based column indexes consulted as
    ``EMPTY_<n>`` placeholders when the sheet has no detectable header row.
    """
    name: str
    synonyms: tuple[str, ...]
    required: bool = False
    field_type: FieldType = FieldType.STRING
    positions: tuple[int, ...] = ()

    def with_synonyms(self, extra: tuple[str, ...] | list[str]) -> FieldSpec:
        """Return a copy with extra synonyms appended (duplicates dropped)."""
        merged = list(self.synonyms)
        for label in extra:
            if label not in merged:
                merged.append(label)
        return replace(self, synonyms=tuple(merged))


@dataclass(frozen=True)
class RecordKindSpec:
    """Everything the pipeline needs to know about one RecordKind."""
    kind: RecordKind
    expected_headers: tuple[str, ...]
    fields: tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    def with_extra_synonyms(self, extra: dict[str, list[str]] | None) -> RecordKindSpec:
        if not extra:
            return self
        unknown = set(extra) - set(self.field_names)
        if unknown:
            raise KeyError(f"unknown fields for {self.kind.value}: {sorted(unknown)}")
        fields = tuple(
            f.with_synonyms(extra[f.name]) if f.name in extra else f for f in self.fields
        )
        return replace(self, fields=fields)


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for a directory import run."""
    source_directory: str  # Directory scanned for .xlsx workbooks
    output_directory: str = "./out"  # Accepted records are written here as JSON Lines
    record_kind: RecordKind = RecordKind.PAYMENT  # Default kind for unmatched files
    kind_patterns: dict[str, RecordKind] = field(default_factory=dict)  # filename glob -> kind
    header_scan_rows: int = 10
    sheet: int | str = 0  # First sheet by default
    extra_synonyms: dict[RecordKind, dict[str, list[str]]] = field(default_factory=dict)
