"""Schematic test fixture — a small in-code symbol library and documents.

All coordinates are on the default 10-unit grid.

Symbols:
  - resistor:  body -10..10 x -4..4, pins "1" tip (-20, 0), "2" tip (20, 0)
  - capacitor: body -4..4 x -8..8,   pins "1" tip (-10, 0), "2" tip (10, 0)
  - gnd:       body -5..5 x 0..6,    pin "1" tip (0, -10)

A resistor at (x, y) with rotation 0 has a full box (pins + margin 2) of
(x-22, y-6)..(x+22, y+6) and a body box of (x-12, y-6)..(x+12, y+6).
"""

from __future__ import annotations

from src.library.models import BodyBox, SymbolPin, SymbolDefinition, LibraryResult
from src.schematic.document.models import (
    SchematicComponent, SchematicDocument, Wire, Junction, NetLabel,
)


def make_resistor_definition() -> SymbolDefinition:
    return SymbolDefinition(
        id="resistor",
        name="Resistor",
        body=BodyBox(-10, -4, 10, 4),
        pins=[
            SymbolPin("1", "~", (-10, 0), 10, 180),
            SymbolPin("2", "~", (10, 0), 10, 0),
        ],
        prefix="R",
    )


def make_capacitor_definition() -> SymbolDefinition:
    return SymbolDefinition(
        id="capacitor",
        name="Capacitor",
        body=BodyBox(-4, -8, 4, 8),
        pins=[
            SymbolPin("1", "~", (-4, 0), 6, 180),
            SymbolPin("2", "~", (4, 0), 6, 0),
        ],
        prefix="C",
    )


def make_gnd_definition() -> SymbolDefinition:
    return SymbolDefinition(
        id="gnd",
        name="Ground",
        body=BodyBox(-5, 0, 5, 6),
        pins=[SymbolPin("1", "GND", (0, 0), 10, 270)],
        prefix="#PWR",
    )


def make_library() -> LibraryResult:
    return LibraryResult(definitions=[
        make_resistor_definition(),
        make_capacitor_definition(),
        make_gnd_definition(),
    ])


def resistor(
    cid: str,
    x: float,
    y: float,
    *,
    rotation: int = 0,
    mirror: bool = False,
    sheet_id: str = "main",
) -> SchematicComponent:
    return SchematicComponent(
        id=cid, library_id="resistor", position=(x, y),
        rotation=rotation, mirror=mirror, sheet_id=sheet_id, reference=cid,
    )


def wire(wid: str, *points: tuple[float, float], sheet_id: str = "main") -> Wire:
    return Wire(id=wid, points=list(points), sheet_id=sheet_id, net_id=f"net_{wid}")


# ── Documents ──────────────────────────────────────────────────────


def make_facing_pins_document() -> SchematicDocument:
    """R1 and R2 on one row, pin 2 of R1 facing pin 1 of R2 five cells away."""
    return SchematicDocument(components=[
        resistor("R1", 0, 0),
        resistor("R2", 90, 0),
    ])


def make_blocked_wire_document() -> SchematicDocument:
    """R1 -- W1 -- R2 with a straight run through (50, 0)."""
    return SchematicDocument(
        components=[resistor("R1", 0, 0), resistor("R2", 100, 0)],
        wires=[wire("W1", (20, 0), (80, 0))],
    )


def make_rotation_document() -> SchematicDocument:
    """R1 touches R2 tip-on-tip at (20, 0); R3 is wired to R1 pin 1."""
    return SchematicDocument(
        components=[
            resistor("R1", 0, 0),
            resistor("R2", 40, 0),
            resistor("R3", -60, 0),
        ],
        wires=[wire("W1", (-40, 0), (-20, 0))],
    )


def make_delete_chain_document() -> SchematicDocument:
    """R1 pin 2 feeds W1 -> W2, which ends nowhere else."""
    return SchematicDocument(
        components=[resistor("R1", 0, 0)],
        wires=[
            wire("W1", (20, 0), (50, 0)),
            wire("W2", (50, 0), (50, 40)),
        ],
    )


def make_crossing_nets_document() -> SchematicDocument:
    """Two unconnected wires sharing the grid edges from x=40 to x=80."""
    return SchematicDocument(wires=[
        wire("W1", (0, 0), (100, 0)),
        wire("W2", (40, -30), (40, 0), (80, 0), (80, 30)),
    ])


def make_labelled_document() -> SchematicDocument:
    """A wire from R1 to a net label, plus a junction and a stray wire."""
    return SchematicDocument(
        components=[resistor("R1", 0, 0)],
        wires=[
            wire("W1", (20, 0), (60, 0)),
            wire("W2", (40, 0), (40, 40)),
        ],
        junctions=[Junction("J1", (40, 0))],
        labels=[NetLabel("L1", "VCC", (60, 0))],
    )


def make_two_wire_component_document() -> SchematicDocument:
    """R1 with a wire on each pin, both far ends unconnected."""
    return SchematicDocument(
        components=[resistor("R1", 0, 0)],
        wires=[
            wire("W1", (20, 0), (60, 0)),
            wire("W2", (-20, 0), (-60, 0)),
        ],
    )


def make_gnd_on_wire_document() -> SchematicDocument:
    """R1 -- W1 -- R2 with a GND whose tip (100, 0) lands on W1."""
    return SchematicDocument(
        components=[
            resistor("R1", 0, 0),
            resistor("R2", 200, 0),
            SchematicComponent(id="G1", library_id="gnd", position=(100, 10),
                               reference="#PWR1"),
        ],
        wires=[wire("W1", (20, 0), (180, 0))],
    )


def make_hemmed_overlap_document() -> SchematicDocument:
    """W2 shares edges with W1; W3 and W4 shut both one-bend escapes.

    The endpoints of W3 sit on W2's horizontal-first L and those of W4 on
    its vertical-first L, so moving W2 off W1 needs a two-bend detour.
    """
    return SchematicDocument(wires=[
        wire("W1", (0, 0), (100, 0)),
        wire("W2", (40, -30), (40, 0), (80, 0), (80, 30)),
        wire("W3", (50, -30), (70, -30)),
        wire("W4", (50, 30), (70, 30)),
    ])
