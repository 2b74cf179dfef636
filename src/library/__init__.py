"""Symbol library — load, validate, query, and serialize library/*.json."""

from .models import (
    BodyBox, SymbolPin, SymbolDefinition, ValidationError, LibraryResult,
)
from .loader import load_library, parse_definition, LIBRARY_DIR
from .serialization import library_to_dict, definition_to_dict

__all__ = [
    # Models
    "BodyBox", "SymbolPin", "SymbolDefinition", "ValidationError", "LibraryResult",
    # Loader
    "load_library", "parse_definition", "LIBRARY_DIR",
    # Serialization
    "library_to_dict", "definition_to_dict",
]
