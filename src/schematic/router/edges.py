"""Occupied-edge tracking — which unit grid edges each wire covers.

An edge joins two 4-adjacent grid cells.  Keys are direction-independent
so a wire drawn left-to-right and one drawn right-to-left collide.
"""

from __future__ import annotations

from src.schematic.document.models import Wire

from .grid import SchematicGrid
from .models import Edge, GridCell, Point


def edge_key(a: GridCell, b: GridCell) -> Edge:
    return (a, b) if a <= b else (b, a)


def add_wire_edges(
    points: list[Point],
    grid: SchematicGrid,
    edges: set[Edge],
) -> set[Edge]:
    """Add every unit edge covered by the polyline to *edges* (in place)."""
    for a, b in zip(points, points[1:]):
        x, y = grid.world_to_grid(a)
        tx, ty = grid.world_to_grid(b)
        # Horizontal leg first; axis-aligned segments only have one leg.
        while x != tx:
            nx = x + (1 if tx > x else -1)
            edges.add(edge_key((x, y), (nx, y)))
            x = nx
        while y != ty:
            ny = y + (1 if ty > y else -1)
            edges.add(edge_key((x, y), (x, ny)))
            y = ny
    return edges


def wire_edge_set(points: list[Point], grid: SchematicGrid) -> set[Edge]:
    return add_wire_edges(points, grid, set())


def build_occupied_edges(wires: list[Wire], grid: SchematicGrid) -> set[Edge]:
    edges: set[Edge] = set()
    for w in wires:
        add_wire_edges(w.points, grid, edges)
    return edges


class EdgeTracker:
    """Per-wire edge sets for one sheet, updated as wires are rerouted.

    A maintenance pass seeds the tracker from its snapshot, then calls
    ``set_wire`` after each routed wire so the next request sees it.
    """

    def __init__(self, wires: list[Wire], grid: SchematicGrid) -> None:
        self.grid = grid
        self._edges: dict[str, set[Edge]] = {
            w.id: wire_edge_set(w.points, grid) for w in wires
        }

    def set_wire(self, wire_id: str, points: list[Point]) -> None:
        self._edges[wire_id] = wire_edge_set(points, self.grid)

    def remove_wire(self, wire_id: str) -> None:
        self._edges.pop(wire_id, None)

    def occupied(self, exclude_ids: set[str] | None = None) -> set[Edge]:
        """Union of the edges of every wire not in *exclude_ids*."""
        exclude = exclude_ids or set()
        out: set[Edge] = set()
        for wid, edges in self._edges.items():
            if wid not in exclude:
                out |= edges
        return out

    def edges_of(self, ids: set[str]) -> set[Edge]:
        out: set[Edge] = set()
        for wid in ids:
            out |= self._edges.get(wid, set())
        return out
