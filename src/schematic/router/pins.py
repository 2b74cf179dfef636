"""Pin resolution — convert library pins to world coordinates.

Handles:
  - Component transform (mirror local x → rotate → translate)
  - Pin stubs (body base → tip) and tips, the electrical contact points
  - Lookups of the pin tip shared with a given world point
"""

from __future__ import annotations

import math

from src.library.models import SymbolDefinition, LibraryResult
from src.schematic.document.models import SchematicComponent

from .grid import points_match
from .models import PinSegment, Point, POINT_TOLERANCE


# Exact (cos, sin) for the quarter turns, so grid points stay on the grid.
_QUARTER_TURNS = {0: (1, 0), 90: (0, 1), 180: (-1, 0), 270: (0, -1)}


def local_to_world(local: Point, component: SchematicComponent) -> Point:
    """Transform a symbol-local point to world coordinates."""
    lx, ly = local
    if component.mirror:
        lx = -lx
    rotation = component.rotation % 360
    if rotation in _QUARTER_TURNS:
        cos_r, sin_r = _QUARTER_TURNS[rotation]
    else:
        rad = math.radians(rotation)
        cos_r = math.cos(rad)
        sin_r = math.sin(rad)
    cx, cy = component.position
    return (
        cx + lx * cos_r - ly * sin_r,
        cy + lx * sin_r + ly * cos_r,
    )


def pin_segments(
    component: SchematicComponent,
    definition: SymbolDefinition,
) -> list[PinSegment]:
    """World-space stubs of every pin, in definition order."""
    return [
        PinSegment(
            number=pin.number,
            base=local_to_world(pin.position, component),
            tip=local_to_world(pin.local_tip, component),
        )
        for pin in definition.pins
    ]


def pin_tips(
    component: SchematicComponent,
    definition: SymbolDefinition,
) -> list[Point]:
    return [seg.tip for seg in pin_segments(component, definition)]


def sheet_pin_tips(
    components: list[SchematicComponent],
    library: LibraryResult,
    *,
    exclude_ids: set[str] | None = None,
) -> list[Point]:
    """All pin tips of resolvable components, skipping *exclude_ids*."""
    tips: list[Point] = []
    for comp in components:
        if exclude_ids and comp.id in exclude_ids:
            continue
        definition = library.get(comp.library_id)
        if definition is None:
            continue
        tips.extend(pin_tips(comp, definition))
    return tips


def is_pin_tip(
    point: Point,
    tips: list[Point],
    tol: float = POINT_TOLERANCE,
) -> bool:
    return any(points_match(point, t, tol) for t in tips)
