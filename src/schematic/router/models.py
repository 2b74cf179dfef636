"""Router dataclasses and configuration constants."""

from __future__ import annotations

from dataclasses import dataclass, field

from shapely.geometry import box

from src.schematic.config import SCHEMATIC_RULES


Point = tuple[float, float]
GridCell = tuple[int, int]
Edge = tuple[GridCell, GridCell]


# ── Geometry dataclasses ───────────────────────────────────────────


@dataclass(frozen=True)
class BBox:
    """Axis-aligned box in world coordinates (edges inclusive)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def overlaps(self, other: BBox) -> bool:
        """True when the two boxes share a region of non-zero area."""
        return (
            self.min_x < other.max_x and self.max_x > other.min_x
            and self.min_y < other.max_y and self.max_y > other.min_y
        )

    def inset(self, margin: float) -> BBox:
        return BBox(
            self.min_x + margin, self.min_y + margin,
            self.max_x - margin, self.max_y - margin,
        )

    def to_polygon(self):
        """Return the box as a shapely Polygon."""
        return box(self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass
class PinSegment:
    """A pin stub in world coordinates; the tip is the connection point."""

    number: str
    base: Point
    tip: Point


@dataclass
class RoutingContext:
    """Obstacles shared by every route planned against one sheet state."""

    obstacles: list[BBox]
    allowed_cells: set[GridCell] = field(default_factory=set)


# ── Router configuration ──────────────────────────────────────────
#
# Grid and tolerance rules come from the shared schematic config
# (src.schematic.config.SCHEMATIC_RULES).  Router-only knobs live here.


@dataclass
class RouterConfig:
    """All tuneable router parameters in one place.

    Physical rules (grid spacing, margins, tolerances) are read from
    ``SCHEMATIC_RULES`` so they stay in sync with the collision checks.
    """

    # ── Physical rules (from shared config) ─────────────────────
    grid_spacing: float = SCHEMATIC_RULES.grid_spacing
    component_margin: float = SCHEMATIC_RULES.component_margin
    point_tolerance: float = SCHEMATIC_RULES.point_tolerance
    empty_symbol_half_extent: float = SCHEMATIC_RULES.empty_symbol_half_extent

    # ── Router-only knobs ──────────────────────────────────────
    turn_penalty: float = 0.3            # A* cost added per direction change
    overlap_penalty: float = 500.0       # A* cost for riding a foreign-net wire edge
    search_margin_cells: int = 60        # window growth around the endpoints' bbox
    max_expansions: int = 100_000        # A* gives up after this many pops


# Module-level defaults (used when no RouterConfig is passed)
_DEFAULT_CFG = RouterConfig()

GRID_SPACING = _DEFAULT_CFG.grid_spacing
POINT_TOLERANCE = _DEFAULT_CFG.point_tolerance
