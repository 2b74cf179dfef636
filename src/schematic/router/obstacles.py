"""Obstacle builder — component boxes, pin corridors, and blocked cells.

Every planning call rebuilds its context from the current sheet state:

  obstacles       one full box (graphics + pins + margin) per component
  allowed_cells   pin tip cells, plus cells walking outward from a tip
                  while still inside the owning component's box
  blocked_cells   tips of foreign-net pins and endpoints of foreign-net
                  wires, so a route never merges two nets by accident

Components whose library definition cannot be resolved are skipped.
"""

from __future__ import annotations

import math

from shapely.geometry import LineString

from src.library.models import SymbolDefinition, LibraryResult
from src.schematic.document.models import SchematicComponent, Wire

from .grid import SchematicGrid, points_match
from .models import (
    BBox, RoutingContext, RouterConfig, Point, GridCell,
    POINT_TOLERANCE,
)
from .nets import same_net_wire_ids, point_on_wire
from .pins import local_to_world, pin_segments


_DEFAULT_CFG = RouterConfig()


# ── Component boxes ────────────────────────────────────────────────


def _local_extent(
    definition: SymbolDefinition,
    include_pins: bool,
    empty_half_extent: float,
) -> tuple[float, float, float, float]:
    xs: list[float] = []
    ys: list[float] = []
    if not definition.body.is_empty:
        xs += [definition.body.min_x, definition.body.max_x]
        ys += [definition.body.min_y, definition.body.max_y]
    if include_pins:
        for pin in definition.pins:
            for px, py in (pin.position, pin.local_tip):
                xs.append(px)
                ys.append(py)
    if not xs:
        e = empty_half_extent
        return (-e, -e, e, e)
    return (min(xs), min(ys), max(xs), max(ys))


def _world_box(
    component: SchematicComponent,
    extent: tuple[float, float, float, float],
    margin: float,
) -> BBox:
    min_x, min_y, max_x, max_y = extent
    corners = [
        local_to_world(c, component)
        for c in ((min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y))
    ]
    xs = [c[0] for c in corners]
    ys = [c[1] for c in corners]
    return BBox(
        min(xs) - margin, min(ys) - margin,
        max(xs) + margin, max(ys) + margin,
    )


def component_bbox(
    component: SchematicComponent,
    definition: SymbolDefinition,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> BBox:
    """Full box: graphics and pin stubs, padded by the component margin."""
    extent = _local_extent(definition, True, config.empty_symbol_half_extent)
    return _world_box(component, extent, config.component_margin)


def component_body_bbox(
    component: SchematicComponent,
    definition: SymbolDefinition,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> BBox:
    """Body-only box (pins excluded), padded by the component margin."""
    extent = _local_extent(definition, False, config.empty_symbol_half_extent)
    return _world_box(component, extent, config.component_margin)


# ── Routing context ────────────────────────────────────────────────


def _outward_unit(base: Point, tip: Point) -> tuple[int, int]:
    dx = tip[0] - base[0]
    dy = tip[1] - base[1]
    if abs(dx) >= abs(dy):
        return (1 if dx > 0 else -1 if dx < 0 else 0, 0)
    return (0, 1 if dy > 0 else -1)


def build_routing_context(
    components: list[SchematicComponent],
    library: LibraryResult,
    grid: SchematicGrid,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> RoutingContext:
    """Obstacle boxes and pin corridors for one sheet."""
    obstacles: list[BBox] = []
    allowed: set[GridCell] = set()

    for comp in components:
        definition = library.get(comp.library_id)
        if definition is None:
            continue
        bbox = component_bbox(comp, definition, config=config)
        obstacles.append(bbox)

        for seg in pin_segments(comp, definition):
            cell = grid.world_to_grid(seg.tip)
            allowed.add(cell)
            ux, uy = _outward_unit(seg.base, seg.tip)
            if ux == 0 and uy == 0:
                continue
            nxt = (cell[0] + ux, cell[1] + uy)
            while bbox.contains(grid.grid_to_world(nxt)):
                allowed.add(nxt)
                nxt = (nxt[0] + ux, nxt[1] + uy)

    return RoutingContext(obstacles=obstacles, allowed_cells=allowed)


def build_blocked_cells(
    components: list[SchematicComponent],
    library: LibraryResult,
    seed_points: list[Point],
    wires: list[Wire],
    grid: SchematicGrid,
    *,
    tolerance: float = POINT_TOLERANCE,
) -> set[GridCell]:
    """Cells a route between *seed_points* must not enter.

    The request's net is every wire reachable from the seed points.  Pin
    tips and wire endpoints outside that net are blocked.
    """
    net_ids = same_net_wire_ids(seed_points, wires, tolerance)
    net_wires = [w for w in wires if w.id in net_ids]

    def in_net(point: Point) -> bool:
        if any(points_match(point, s, tolerance) for s in seed_points):
            return True
        return any(point_on_wire(point, w.points, tolerance) for w in net_wires)

    blocked: set[GridCell] = set()
    for comp in components:
        definition = library.get(comp.library_id)
        if definition is None:
            continue
        for seg in pin_segments(comp, definition):
            if not in_net(seg.tip):
                blocked.add(grid.world_to_grid(seg.tip))

    for wire in wires:
        if wire.id in net_ids or len(wire.points) < 2:
            continue
        for end in (wire.first, wire.last):
            if not in_net(end):
                blocked.add(grid.world_to_grid(end))

    return blocked


def obstacle_cells(
    obstacles: list[BBox],
    grid: SchematicGrid,
    window: tuple[int, int, int, int],
) -> set[GridCell]:
    """Cells whose world point lies inside any box, clipped to *window*.

    *window* is ``(min_gx, min_gy, max_gx, max_gy)``, inclusive.
    """
    wx0, wy0, wx1, wy1 = window
    s = grid.spacing
    cells: set[GridCell] = set()
    for b in obstacles:
        gx0 = max(wx0, math.ceil(b.min_x / s))
        gx1 = min(wx1, math.floor(b.max_x / s))
        gy0 = max(wy0, math.ceil(b.min_y / s))
        gy1 = min(wy1, math.floor(b.max_y / s))
        for gx in range(gx0, gx1 + 1):
            for gy in range(gy0, gy1 + 1):
                cells.add((gx, gy))
    return cells


# ── Geometry predicates ────────────────────────────────────────────


def wire_passes_through_bbox(points: list[Point], bbox: BBox) -> bool:
    """True when any part of the polyline touches or enters the box."""
    if len(points) < 2:
        return bool(points) and bbox.contains(points[0])
    return LineString(points).intersects(bbox.to_polygon())


def segments_overlap(a0: Point, a1: Point, b0: Point, b1: Point) -> bool:
    """True when two collinear axis-aligned segments share a non-zero span."""
    eps = 1.0
    if (abs(a0[1] - a1[1]) < eps and abs(b0[1] - b1[1]) < eps
            and abs(a0[1] - b0[1]) < eps):
        lo, hi = min(a0[0], a1[0]), max(a0[0], a1[0])
        blo, bhi = min(b0[0], b1[0]), max(b0[0], b1[0])
        return lo < bhi - eps and hi > blo + eps
    if (abs(a0[0] - a1[0]) < eps and abs(b0[0] - b1[0]) < eps
            and abs(a0[0] - b0[0]) < eps):
        lo, hi = min(a0[1], a1[1]), max(a0[1], a1[1])
        blo, bhi = min(b0[1], b1[1]), max(b0[1], b1[1])
        return lo < bhi - eps and hi > blo + eps
    return False
