"""Net-sameness oracle — which wires are electrically one net.

Connectivity is purely geometric: a wire belongs to the net of a seed
point when the point lies anywhere on its polyline, and two wires are
joined when an endpoint of either lies on the other.  Nothing is cached;
every query reflects the document passed in.
"""

from __future__ import annotations

from collections import deque

from src.schematic.document.models import Wire

from .grid import points_match
from .models import Point, POINT_TOLERANCE


def point_on_wire(
    point: Point,
    points: list[Point],
    tol: float = POINT_TOLERANCE,
) -> bool:
    """True when *point* lies on any segment of the polyline."""
    px, py = point
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        if not (min(ax, bx) - tol <= px <= max(ax, bx) + tol
                and min(ay, by) - tol <= py <= max(ay, by) + tol):
            continue
        if abs(ay - by) < tol and abs(py - ay) < tol:
            return True
        if abs(ax - bx) < tol and abs(px - ax) < tol:
            return True
        if points_match(point, (ax, ay), tol):
            return True
    return bool(points) and points_match(point, points[-1], tol)


def _touches(a: Wire, b: Wire, tol: float) -> bool:
    return (
        point_on_wire(a.first, b.points, tol)
        or point_on_wire(a.last, b.points, tol)
        or point_on_wire(b.first, a.points, tol)
        or point_on_wire(b.last, a.points, tol)
    )


def same_net_wire_ids(
    seed_points: list[Point],
    wires: list[Wire],
    tolerance: float = POINT_TOLERANCE,
) -> set[str]:
    """Ids of every wire reachable from *seed_points* (BFS over wires)."""
    live = [w for w in wires if len(w.points) >= 2]
    found: set[str] = set()
    queue: deque[Wire] = deque()

    for w in live:
        if any(point_on_wire(p, w.points, tolerance) for p in seed_points):
            found.add(w.id)
            queue.append(w)

    while queue:
        current = queue.popleft()
        for w in live:
            if w.id in found:
                continue
            if _touches(current, w, tolerance):
                found.add(w.id)
                queue.append(w)

    return found


def net_points(
    wire_ids: set[str],
    wires: list[Wire],
    seeds: list[Point] | None = None,
) -> list[Point]:
    """Every vertex spanned by a net, seed points first, without repeats."""
    out: list[Point] = []
    for p in list(seeds or []) + [p for w in wires if w.id in wire_ids for p in w.points]:
        if not any(points_match(p, q) for q in out):
            out.append(p)
    return out
