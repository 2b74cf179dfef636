"""Library dataclasses — typed representations of library/*.json symbols."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BodyBox:
    """Extent of a symbol's graphics in local coordinates (pins excluded)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def is_empty(self) -> bool:
        return self.max_x < self.min_x or self.max_y < self.min_y


@dataclass
class SymbolPin:
    number: str
    name: str
    position: tuple[float, float]       # local base point, on the body
    length: float
    direction: int                      # 0 | 90 | 180 | 270, 0 = +x
    electrical_type: str = "passive"

    @property
    def local_tip(self) -> tuple[float, float]:
        """Electrical contact point in local coordinates."""
        dx, dy = _UNIT_VECTORS.get(self.direction % 360, (1, 0))
        return (
            self.position[0] + dx * self.length,
            self.position[1] + dy * self.length,
        )


_UNIT_VECTORS = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


@dataclass
class SymbolDefinition:
    id: str
    name: str
    body: BodyBox
    pins: list[SymbolPin]
    prefix: str = "U"
    category: str = "misc"
    description: str = ""
    source_file: str = ""               # path of the JSON file (for error reporting)


@dataclass
class ValidationError:
    definition_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.definition_id}] {self.field}: {self.message}"


@dataclass
class LibraryResult:
    """Result of loading the library — definitions + any validation errors.

    ``get()`` is the definition resolver used by the router and editor;
    unknown ids resolve to None and the caller skips that component.
    """

    definitions: list[SymbolDefinition]
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0

    def get(self, library_id: str) -> SymbolDefinition | None:
        for d in self.definitions:
            if d.id == library_id:
                return d
        return None
