"""Library serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from .models import SymbolDefinition, LibraryResult


def library_to_dict(result: LibraryResult) -> dict:
    """Serialize a LibraryResult to a JSON-safe dict."""
    return {
        "ok": result.ok,
        "definition_count": len(result.definitions),
        "definitions": [definition_to_dict(d) for d in result.definitions],
        "errors": [{"definition_id": e.definition_id, "field": e.field, "message": e.message}
                   for e in result.errors],
    }


def definition_to_dict(d: SymbolDefinition) -> dict:
    """Serialize a SymbolDefinition to the library/*.json format."""
    return {
        "id": d.id,
        "name": d.name,
        "prefix": d.prefix,
        "category": d.category,
        "description": d.description,
        "body": {
            "min_x": d.body.min_x,
            "min_y": d.body.min_y,
            "max_x": d.body.max_x,
            "max_y": d.body.max_y,
        },
        "pins": [
            {
                "number": p.number,
                "name": p.name,
                "position": list(p.position),
                "length": p.length,
                "direction": p.direction,
                "electrical_type": p.electrical_type,
            }
            for p in d.pins
        ],
    }
