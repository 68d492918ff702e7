"""Domain models for the ledger sheet importer.

This package contains the configuration data (field specs per record kind),
the raw row model, the canonical records and the per-row outcome types.
"""

from .config_models import FieldSpec, FieldType, ImportConfig, RecordKind, RecordKindSpec
from .processing_result import Accepted, ImportResult, Rejected, RowOutcome
from .records import Income, Payment
from .row_data import RowData

__all__ = [
    # Configuration models
    "FieldSpec",
    "FieldType",
    "ImportConfig",
    "RecordKind",
    "RecordKindSpec",
    # Row / record models
    "RowData",
    "Payment",
    "Income",
    "Accepted",
    "Rejected",
    "RowOutcome",
    "ImportResult",
]
