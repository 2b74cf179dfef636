"""Document dataclasses — the editable records of a schematic.

All records are plain values: numeric coordinates and opaque string ids.
Pin positions are never stored; they are derived from the component's
transform and its library definition.
"""

from __future__ import annotations

from dataclasses import dataclass, field


DEFAULT_SHEET_ID = "main"


@dataclass
class SchematicComponent:
    """A placed library instance."""

    id: str
    library_id: str
    position: tuple[float, float]
    rotation: int = 0                   # 0, 90, 180, 270
    mirror: bool = False
    sheet_id: str = DEFAULT_SHEET_ID
    reference: str = ""
    value: str = ""
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class Wire:
    """An axis-aligned polyline; only first/last points connect."""

    id: str
    points: list[tuple[float, float]]
    sheet_id: str = DEFAULT_SHEET_ID
    net_id: str = ""

    @property
    def first(self) -> tuple[float, float]:
        return self.points[0]

    @property
    def last(self) -> tuple[float, float]:
        return self.points[-1]


@dataclass
class Junction:
    id: str
    position: tuple[float, float]
    sheet_id: str = DEFAULT_SHEET_ID
    net_id: str = ""


@dataclass
class NetLabel:
    id: str
    text: str
    position: tuple[float, float]
    sheet_id: str = DEFAULT_SHEET_ID
    kind: str = "net"                   # "net" | "power" | "global"
    net_id: str = ""
    rotation: int = 0


@dataclass
class SchematicDocument:
    """The mutable aggregate every editor operation works on."""

    components: list[SchematicComponent] = field(default_factory=list)
    wires: list[Wire] = field(default_factory=list)
    junctions: list[Junction] = field(default_factory=list)
    labels: list[NetLabel] = field(default_factory=list)

    # ── Lookups ────────────────────────────────────────────────────

    def find_component(self, component_id: str) -> SchematicComponent | None:
        return next((c for c in self.components if c.id == component_id), None)

    def find_wire(self, wire_id: str) -> Wire | None:
        return next((w for w in self.wires if w.id == wire_id), None)

    def sheet_components(self, sheet_id: str) -> list[SchematicComponent]:
        return [c for c in self.components if c.sheet_id == sheet_id]

    def sheet_wires(self, sheet_id: str) -> list[Wire]:
        return [w for w in self.wires if w.sheet_id == sheet_id]

    def sheet_junctions(self, sheet_id: str) -> list[Junction]:
        return [j for j in self.junctions if j.sheet_id == sheet_id]

    def sheet_labels(self, sheet_id: str) -> list[NetLabel]:
        return [lb for lb in self.labels if lb.sheet_id == sheet_id]

    @property
    def sheet_ids(self) -> list[str]:
        """All sheets that hold at least one element, in first-seen order."""
        seen: dict[str, None] = {}
        for group in (self.components, self.wires, self.junctions, self.labels):
            for item in group:
                seen.setdefault(item.sheet_id, None)
        return list(seen)
