"""A* pathfinder for orthogonal schematic wires.

Supports:
  - Turn penalty to prefer fewer bends
  - Soft penalty for riding edges already used by another net's wire
  - Pin corridors (allowed cells) punched through component boxes
  - Hard-blocked cells (foreign pin tips and wire ends)
  - Straight / one-bend fast path when it is free of obstacles
"""

from __future__ import annotations

import heapq
import logging

from .edges import edge_key
from .grid import SchematicGrid
from .models import BBox, Edge, GridCell, Point, RouterConfig
from .obstacles import obstacle_cells


log = logging.getLogger(__name__)

# Manhattan directions: (dx, dy)
DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))

_DEFAULT_CFG = RouterConfig()


def fallback_path(a: Point, b: Point) -> list[Point]:
    """Straight segment if aligned, else horizontal-then-vertical."""
    if a[0] == b[0] or a[1] == b[1]:
        return [a, b]
    return [a, (b[0], a[1]), b]


def find_route(
    start: Point,
    goal: Point,
    obstacles: list[BBox],
    occupied_edges: set[Edge],
    same_net_edges: set[Edge],
    allowed_cells: set[GridCell],
    blocked_cells: set[GridCell],
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> list[Point] | None:
    """Plan a Manhattan wire from *start* to *goal*.

    Returns the corner points of the path (first and last replaced by the
    exact inputs), a single point when both ends share a cell, or None
    when no path exists inside the search window or the expansion cap is
    hit.
    """
    grid = SchematicGrid(config.grid_spacing)
    source = grid.world_to_grid(start)
    sink = grid.world_to_grid(goal)
    if source == sink:
        return [start]

    sx, sy = source
    tx, ty = sink
    margin = config.search_margin_cells
    x_lo, x_hi = min(sx, tx) - margin, max(sx, tx) + margin
    y_lo, y_hi = min(sy, ty) - margin, max(sy, ty) + margin

    impassable = obstacle_cells(obstacles, grid, (x_lo, y_lo, x_hi, y_hi))
    impassable -= allowed_cells
    impassable |= blocked_cells
    impassable.discard(source)
    impassable.discard(sink)

    penalized = occupied_edges - same_net_edges

    # Try straight / L-shaped routes first (fast path)
    l_path = _try_l_route(source, sink, impassable, penalized)
    if l_path is not None:
        return _to_world(l_path, start, goal, grid)

    # Full A* over (cell, arrival direction)
    turn_penalty = config.turn_penalty
    overlap_penalty = config.overlap_penalty
    max_expansions = config.max_expansions

    h0 = abs(sx - tx) + abs(sy - ty)
    counter = 0
    start_state = (sx, sy, -1)
    heap: list[tuple[float, int, int, int, int, int]] = [(float(h0), h0, counter, sx, sy, -1)]
    g_scores: dict[tuple[int, int, int], float] = {start_state: 0.0}
    parents: dict[tuple[int, int, int], tuple[int, int, int]] = {}
    closed: set[tuple[int, int, int]] = set()
    expansions = 0

    while heap:
        _f, _h, _cnt, cx, cy, direction = heapq.heappop(heap)
        state = (cx, cy, direction)
        if state in closed:
            continue
        closed.add(state)

        if (cx, cy) == sink:
            cells = [(cx, cy)]
            while state in parents:
                state = parents[state]
                cells.append((state[0], state[1]))
            cells.reverse()
            return _to_world(cells, start, goal, grid)

        expansions += 1
        if expansions > max_expansions:
            log.debug("Route %s -> %s: expansion cap %d hit",
                      start, goal, max_expansions)
            return None

        cur_g = g_scores[state]

        for d, (dx, dy) in enumerate(DIRS):
            nx, ny = cx + dx, cy + dy
            if not (x_lo <= nx <= x_hi and y_lo <= ny <= y_hi):
                continue
            if (nx, ny) in impassable:
                continue
            nstate = (nx, ny, d)
            if nstate in closed:
                continue

            cost = 1.0
            if direction != -1 and direction != d:
                cost += turn_penalty
            if edge_key((cx, cy), (nx, ny)) in penalized:
                cost += overlap_penalty
            tentative_g = cur_g + cost

            if tentative_g < g_scores.get(nstate, float("inf")):
                g_scores[nstate] = tentative_g
                parents[nstate] = state
                h = abs(nx - tx) + abs(ny - ty)
                counter += 1
                heapq.heappush(heap, (tentative_g + h, h, counter, nx, ny, d))

    log.debug("Route %s -> %s: search space exhausted", start, goal)
    return None


# ── Path post-processing ───────────────────────────────────────────


def _corners(cells: list[GridCell]) -> list[GridCell]:
    """Drop every cell that continues in the same direction."""
    if len(cells) <= 2:
        return list(cells)
    out = [cells[0]]
    for prev, cur, nxt in zip(cells, cells[1:], cells[2:]):
        if (cur[0] - prev[0], cur[1] - prev[1]) != (nxt[0] - cur[0], nxt[1] - cur[1]):
            out.append(cur)
    out.append(cells[-1])
    return out


def _to_world(
    cells: list[GridCell],
    start: Point,
    goal: Point,
    grid: SchematicGrid,
) -> list[Point]:
    points = [grid.grid_to_world(c) for c in _corners(cells)]
    points[0] = start
    points[-1] = goal
    return points


# ── Fast L-shaped route ────────────────────────────────────────────


def _try_l_route(
    source: GridCell,
    sink: GridCell,
    impassable: set[GridCell],
    penalized: set[Edge],
) -> list[GridCell] | None:
    """Try a straight or one-bend route.  Returns cells or None."""
    # Try horizontal-first then vertical-first
    for h_first in (True, False):
        path = _l_route(source, sink, h_first, impassable, penalized)
        if path is not None:
            return path
    return None


def _l_route(
    source: GridCell,
    sink: GridCell,
    horizontal_first: bool,
    impassable: set[GridCell],
    penalized: set[Edge],
) -> list[GridCell] | None:
    x, y = source
    tx, ty = sink
    path: list[GridCell] = [(x, y)]

    legs = ("h", "v") if horizontal_first else ("v", "h")
    for leg in legs:
        if leg == "h":
            step = 1 if tx > x else -1
            while x != tx:
                nxt = (x + step, y)
                if nxt in impassable or edge_key((x, y), nxt) in penalized:
                    return None
                path.append(nxt)
                x = nxt[0]
        else:
            step = 1 if ty > y else -1
            while y != ty:
                nxt = (x, y + step)
                if nxt in impassable or edge_key((x, y), nxt) in penalized:
                    return None
                path.append(nxt)
                y = nxt[1]

    return path
