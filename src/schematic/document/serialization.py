"""Document serialization — JSON conversion."""

from __future__ import annotations

from .models import SchematicDocument


def document_to_dict(doc: SchematicDocument) -> dict:
    """Serialize a SchematicDocument to a JSON-safe dict."""
    return {
        "components": [
            {
                "id": c.id,
                "library_id": c.library_id,
                "position": list(c.position),
                "rotation": c.rotation,
                "mirror": c.mirror,
                "sheet_id": c.sheet_id,
                "reference": c.reference,
                "value": c.value,
                "properties": dict(c.properties),
            }
            for c in doc.components
        ],
        "wires": [
            {
                "id": w.id,
                "points": [list(p) for p in w.points],
                "sheet_id": w.sheet_id,
                "net_id": w.net_id,
            }
            for w in doc.wires
        ],
        "junctions": [
            {
                "id": j.id,
                "position": list(j.position),
                "sheet_id": j.sheet_id,
                "net_id": j.net_id,
            }
            for j in doc.junctions
        ],
        "labels": [
            {
                "id": lb.id,
                "text": lb.text,
                "position": list(lb.position),
                "sheet_id": lb.sheet_id,
                "kind": lb.kind,
                "net_id": lb.net_id,
                "rotation": lb.rotation,
            }
            for lb in doc.labels
        ],
    }
