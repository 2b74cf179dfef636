"""Schematic document — records, parsing, serialization, and history."""

from .models import (
    DEFAULT_SHEET_ID,
    SchematicComponent, Wire, Junction, NetLabel, SchematicDocument,
)
from .parsing import parse_document
from .serialization import document_to_dict
from .history import DocumentHistory, MAX_UNDO_DEPTH

__all__ = [
    # Models
    "DEFAULT_SHEET_ID",
    "SchematicComponent", "Wire", "Junction", "NetLabel", "SchematicDocument",
    # Parsing / Serialization
    "parse_document", "document_to_dict",
    # History
    "DocumentHistory", "MAX_UNDO_DEPTH",
]
