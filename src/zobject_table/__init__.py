"""zobject-table - flat row-table model and wire-form conversions for ZObjects."""

from __future__ import annotations

from zobject_table.api import (
    convert_json_to_table,
    convert_table_to_json,
    flatten,
    reconstruct,
)
from zobject_table.config import SessionConfig
from zobject_table.exceptions import (
    MissingCollaboratorError,
    PreconditionError,
    ZObjectTableError,
)
from zobject_table.result import ErrorNode, SubmissionPayload
from zobject_table.schemata import (
    extract_errors,
    extract_ids,
    to_canonical,
    to_hybrid,
)
from zobject_table.session import EditSession
from zobject_table.table import ZObjectTable
from zobject_table.tree import Row, RowValue

__version__: str = "0.1.0"
__all__: list[str] = [
    "EditSession",
    "ErrorNode",
    "MissingCollaboratorError",
    "PreconditionError",
    "Row",
    "RowValue",
    "SessionConfig",
    "SubmissionPayload",
    "ZObjectTable",
    "ZObjectTableError",
    "convert_json_to_table",
    "convert_table_to_json",
    "extract_errors",
    "extract_ids",
    "flatten",
    "reconstruct",
    "to_canonical",
    "to_hybrid",
]
