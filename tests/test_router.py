"""Tests for the grid model and the A* wire router.

Validates:
  - World <-> grid conversion and snapping
  - Straight and single-bend routes in free space (corners only)
  - Detours around obstacles, pin corridors, and blocked cells
  - Overlap penalty against foreign-net edges, waived for same-net edges
  - Failure modes: enclosed start, search window, expansion cap
"""

from __future__ import annotations

import unittest

from src.schematic.router import (
    BBox, RouterConfig, SchematicGrid, points_match,
    find_route, fallback_path, wire_edge_set, wire_passes_through_bbox,
)


def _route(start, goal, obstacles=(), occupied=(), same_net=(),
           allowed=(), blocked=(), config=None):
    return find_route(
        start, goal, list(obstacles), set(occupied), set(same_net),
        set(allowed), set(blocked), config=config or RouterConfig(),
    )


def _is_manhattan(path):
    return all(a[0] == b[0] or a[1] == b[1] for a, b in zip(path, path[1:]))


class TestSchematicGrid(unittest.TestCase):

    def setUp(self):
        self.grid = SchematicGrid(10.0)

    def test_world_to_grid_rounds_to_nearest(self):
        self.assertEqual(self.grid.world_to_grid((14, -16)), (1, -2))
        self.assertEqual(self.grid.world_to_grid((30, 0)), (3, 0))

    def test_grid_to_world(self):
        self.assertEqual(self.grid.grid_to_world((3, -2)), (30, -20))

    def test_conversion_exact_on_grid(self):
        for p in [(0, 0), (-40, 70), (120, -10)]:
            self.assertEqual(self.grid.grid_to_world(self.grid.world_to_grid(p)), p)

    def test_snap(self):
        self.assertEqual(self.grid.snap(14.9), 10)
        self.assertEqual(self.grid.snap(15.1), 20)
        self.assertEqual(self.grid.snap_point((-3, 26)), (0, 30))

    def test_halves_round_up(self):
        self.assertEqual(self.grid.snap(15), 20)
        self.assertEqual(self.grid.snap(25), 30)
        self.assertEqual(self.grid.snap(-15), -10)
        self.assertEqual(self.grid.world_to_grid((35, -25)), (4, -2))

    def test_points_match(self):
        self.assertTrue(points_match((0, 0), (0.5, -0.5)))
        self.assertFalse(points_match((0, 0), (1, 0)))

    def test_rejects_non_positive_spacing(self):
        with self.assertRaises(ValueError):
            SchematicGrid(0)


class TestFreeSpaceRoutes(unittest.TestCase):

    def test_aligned_is_straight(self):
        self.assertEqual(_route((0, 0), (50, 0)), [(0, 0), (50, 0)])
        self.assertEqual(_route((0, 0), (0, -40)), [(0, 0), (0, -40)])

    def test_unaligned_has_one_bend(self):
        path = _route((0, 0), (30, 20))
        self.assertEqual(len(path), 3)
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (30, 20))
        self.assertTrue(_is_manhattan(path))

    def test_same_cell_returns_single_point(self):
        self.assertEqual(_route((0, 0), (2, 3)), [(0, 0)])

    def test_fallback_path(self):
        self.assertEqual(fallback_path((0, 0), (0, 50)), [(0, 0), (0, 50)])
        self.assertEqual(fallback_path((0, 0), (30, 20)),
                         [(0, 0), (30, 0), (30, 20)])


class TestObstacleRoutes(unittest.TestCase):

    def setUp(self):
        self.box = BBox(15, -5, 35, 5)

    def test_detours_around_box(self):
        path = _route((0, 0), (50, 0), obstacles=[self.box])
        self.assertEqual(path[0], (0, 0))
        self.assertEqual(path[-1], (50, 0))
        self.assertEqual(len(path), 4)
        self.assertTrue(_is_manhattan(path))
        self.assertFalse(wire_passes_through_bbox(path, self.box))

    def test_endpoints_inside_obstacle_are_reachable(self):
        path = _route((0, 0), (50, 0), obstacles=[BBox(-5, -5, 5, 5)])
        self.assertEqual(path, [(0, 0), (50, 0)])

    def test_allowed_cells_punch_through(self):
        path = _route((0, 0), (50, 0), obstacles=[self.box],
                      allowed=[(2, 0), (3, 0)])
        self.assertEqual(path, [(0, 0), (50, 0)])

    def test_blocked_cells_force_detour(self):
        path = _route((0, 0), (50, 0), blocked=[(3, 0)])
        self.assertEqual(len(path), 4)
        self.assertNotIn((30, 0), path)

    def test_enclosed_start_fails(self):
        ring = [(1, 0), (-1, 0), (0, 1), (0, -1)]
        self.assertIsNone(_route((0, 0), (50, 0), blocked=ring))

    def test_search_window_limits_detour(self):
        cfg = RouterConfig(search_margin_cells=0)
        self.assertIsNone(_route((0, 0), (50, 0), obstacles=[self.box], config=cfg))

    def test_expansion_cap(self):
        cfg = RouterConfig(max_expansions=5)
        self.assertIsNone(_route((0, 0), (50, 0), obstacles=[self.box], config=cfg))


class TestEdgePenalties(unittest.TestCase):

    def setUp(self):
        self.grid = SchematicGrid(10.0)
        self.foreign = wire_edge_set([(0, 0), (50, 0)], self.grid)

    def test_avoids_foreign_edges(self):
        path = _route((0, 0), (50, 0), occupied=self.foreign)
        self.assertEqual(len(path), 4)
        self.assertFalse(wire_edge_set(path, self.grid) & self.foreign)

    def test_same_net_edges_are_free(self):
        path = _route((0, 0), (50, 0), occupied=self.foreign, same_net=self.foreign)
        self.assertEqual(path, [(0, 0), (50, 0)])

    def test_crosses_foreign_wire_rather_than_fail(self):
        # A vertical wire crossing the row shares no edge with the route.
        crossing = wire_edge_set([(20, -50), (20, 50)], self.grid)
        path = _route((0, 0), (50, 0), occupied=crossing)
        self.assertEqual(path, [(0, 0), (50, 0)])

    def test_unavoidable_overlap_is_paid(self):
        cfg = RouterConfig(search_margin_cells=0)
        path = _route((0, 0), (50, 0), occupied=self.foreign, config=cfg)
        self.assertEqual(path, [(0, 0), (50, 0)])
