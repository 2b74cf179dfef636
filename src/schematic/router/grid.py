"""Schematic drawing grid — conversion between world points and grid cells.

The grid is unbounded: cell (0, 0) sits on the world origin and cell
(gx, gy) on (gx * spacing, gy * spacing).  Unlike a board outline there is
nothing to clamp against, so every conversion is pure arithmetic.
"""

from __future__ import annotations

import math

from .models import GRID_SPACING, POINT_TOLERANCE, Point, GridCell


class SchematicGrid:
    """Uniform square grid used by the router and the editor."""

    def __init__(self, spacing: float = GRID_SPACING) -> None:
        if spacing <= 0:
            raise ValueError(f"Grid spacing must be positive, got {spacing}")
        self.spacing = spacing

    def __repr__(self) -> str:
        return f"SchematicGrid(spacing={self.spacing})"

    # ── Coordinate conversion ──────────────────────────────────────

    def world_to_grid(self, point: Point) -> GridCell:
        """Nearest grid cell of a world point."""
        return (
            math.floor(point[0] / self.spacing + 0.5),
            math.floor(point[1] / self.spacing + 0.5),
        )

    def grid_to_world(self, cell: GridCell) -> Point:
        return (cell[0] * self.spacing, cell[1] * self.spacing)

    # ── Snapping ───────────────────────────────────────────────────

    def snap(self, value: float) -> float:
        return math.floor(value / self.spacing + 0.5) * self.spacing

    def snap_point(self, point: Point) -> Point:
        return (self.snap(point[0]), self.snap(point[1]))


def points_match(a: Point, b: Point, tol: float = POINT_TOLERANCE) -> bool:
    """Two points are the same connection point when both axes agree."""
    return abs(a[0] - b[0]) < tol and abs(a[1] - b[1]) < tol
