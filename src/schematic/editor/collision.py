"""Placement collision — components may only meet pin tip on pin tip.

Checks, cheapest first:
  1. full boxes (pins included) do not overlap → no collision
  2. body boxes overlap → collision
  3. a pin stub touches the other component's body box → collision
  4. a pin stub enters the other's tight full box (no margin) → allowed
     only when its tip lands exactly on one of the other's tips
"""

from __future__ import annotations

import logging

from shapely.geometry import LineString, Point as ShapelyPoint

from src.library.models import SymbolDefinition, LibraryResult
from src.schematic.document.models import SchematicComponent
from src.schematic.router.grid import points_match
from src.schematic.router.models import BBox, PinSegment, RouterConfig
from src.schematic.router.obstacles import component_bbox, component_body_bbox
from src.schematic.router.pins import pin_segments


log = logging.getLogger(__name__)

_DEFAULT_CFG = RouterConfig()


def _stub(seg: PinSegment):
    if seg.base == seg.tip:
        return ShapelyPoint(seg.tip)
    return LineString([seg.base, seg.tip])


def _stubs_hit(segs: list[PinSegment], target: BBox) -> bool:
    poly = target.to_polygon()
    return any(_stub(s).intersects(poly) for s in segs)


def _unmatched_entry(
    segs: list[PinSegment],
    target: BBox,
    target_tips: list,
    tol: float,
) -> bool:
    poly = target.to_polygon()
    for s in segs:
        if not _stub(s).intersects(poly):
            continue
        if not any(points_match(s.tip, t, tol) for t in target_tips):
            return True
    return False


def has_component_collision(
    a: SchematicComponent,
    a_def: SymbolDefinition,
    b: SchematicComponent,
    b_def: SymbolDefinition,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> bool:
    """True when *a* and *b* overlap anywhere but at a shared pin tip."""
    a_full = component_bbox(a, a_def, config=config)
    b_full = component_bbox(b, b_def, config=config)
    if not a_full.overlaps(b_full):
        return False

    a_body = component_body_bbox(a, a_def, config=config)
    b_body = component_body_bbox(b, b_def, config=config)
    if a_body.overlaps(b_body):
        return True

    a_segs = pin_segments(a, a_def)
    b_segs = pin_segments(b, b_def)
    if _stubs_hit(a_segs, b_body) or _stubs_hit(b_segs, a_body):
        return True

    margin = config.component_margin
    tol = config.point_tolerance
    a_tips = [s.tip for s in a_segs]
    b_tips = [s.tip for s in b_segs]
    if _unmatched_entry(a_segs, b_full.inset(margin), b_tips, tol):
        return True
    if _unmatched_entry(b_segs, a_full.inset(margin), a_tips, tol):
        return True
    return False


def find_collision(
    candidate: SchematicComponent,
    definition: SymbolDefinition,
    others: list[SchematicComponent],
    library: LibraryResult,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> str | None:
    """Id of the first same-sheet component *candidate* collides with."""
    for other in others:
        if other.id == candidate.id or other.sheet_id != candidate.sheet_id:
            continue
        other_def = library.get(other.library_id)
        if other_def is None:
            continue
        if has_component_collision(candidate, definition, other, other_def,
                                   config=config):
            log.debug("Collision: %s overlaps %s", candidate.id, other.id)
            return other.id
    return None
