"""Document parsing — convert raw dicts/JSON into a SchematicDocument."""

from __future__ import annotations

from .models import (
    DEFAULT_SHEET_ID,
    SchematicComponent, Wire, Junction, NetLabel, SchematicDocument,
)


def _point(raw) -> tuple[float, float]:
    """Accept both ``[x, y]`` and ``{"x": .., "y": ..}`` point forms."""
    if isinstance(raw, dict):
        return (float(raw["x"]), float(raw["y"]))
    return (float(raw[0]), float(raw[1]))


def parse_document(data: dict) -> SchematicDocument:
    """Parse a raw dict (from a project file) into a SchematicDocument."""
    components = [
        SchematicComponent(
            id=c["id"],
            library_id=c["library_id"],
            position=_point(c["position"]),
            rotation=int(c.get("rotation", 0)) % 360,
            mirror=bool(c.get("mirror", False)),
            sheet_id=c.get("sheet_id", DEFAULT_SHEET_ID),
            reference=c.get("reference", ""),
            value=c.get("value", ""),
            properties=dict(c.get("properties", {})),
        )
        for c in data.get("components", [])
    ]

    wires = [
        Wire(
            id=w["id"],
            points=[_point(p) for p in w["points"]],
            sheet_id=w.get("sheet_id", DEFAULT_SHEET_ID),
            net_id=w.get("net_id", ""),
        )
        for w in data.get("wires", [])
    ]

    junctions = [
        Junction(
            id=j["id"],
            position=_point(j["position"]),
            sheet_id=j.get("sheet_id", DEFAULT_SHEET_ID),
            net_id=j.get("net_id", ""),
        )
        for j in data.get("junctions", [])
    ]

    labels = [
        NetLabel(
            id=lb["id"],
            text=lb.get("text", ""),
            position=_point(lb["position"]),
            sheet_id=lb.get("sheet_id", DEFAULT_SHEET_ID),
            kind=lb.get("kind", "net"),
            net_id=lb.get("net_id", ""),
            rotation=int(lb.get("rotation", 0)),
        )
        for lb in data.get("labels", [])
    ]

    return SchematicDocument(
        components=components,
        wires=wires,
        junctions=junctions,
        labels=labels,
    )
