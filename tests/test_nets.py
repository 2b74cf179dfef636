"""Tests for the net-sameness oracle."""

from __future__ import annotations

import unittest

from src.schematic.router import same_net_wire_ids, net_points, point_on_wire
from tests.schematic_fixture import wire


class TestPointOnWire(unittest.TestCase):

    def test_interior_point(self):
        self.assertTrue(point_on_wire((25, 0), [(0, 0), (50, 0)]))

    def test_corner_and_end(self):
        pts = [(0, 0), (50, 0), (50, 40)]
        self.assertTrue(point_on_wire((50, 0), pts))
        self.assertTrue(point_on_wire((50, 40), pts))

    def test_off_wire(self):
        self.assertFalse(point_on_wire((25, 5), [(0, 0), (50, 0)]))
        self.assertFalse(point_on_wire((60, 0), [(0, 0), (50, 0)]))


class TestSameNet(unittest.TestCase):

    def setUp(self):
        self.wires = [
            wire("W1", (0, 0), (50, 0)),
            wire("W2", (25, 0), (25, 40)),      # T onto W1's interior
            wire("W3", (25, 40), (60, 40)),     # chained end-to-end
            wire("W4", (100, 100), (120, 100)),
            wire("W5", (10, -10), (10, 10)),    # crosses W1, no endpoint on it
        ]

    def test_bfs_through_t_and_chain(self):
        self.assertEqual(same_net_wire_ids([(0, 0)], self.wires), {"W1", "W2", "W3"})

    def test_crossing_is_not_a_connection(self):
        self.assertNotIn("W5", same_net_wire_ids([(0, 0)], self.wires))

    def test_seed_on_interior(self):
        self.assertEqual(same_net_wire_ids([(110, 100)], self.wires), {"W4"})

    def test_unconnected_seed(self):
        self.assertEqual(same_net_wire_ids([(500, 500)], self.wires), set())

    def test_net_points(self):
        ids = same_net_wire_ids([(60, 40)], self.wires)
        pts = net_points(ids, self.wires, [(60, 40)])
        self.assertEqual(pts[0], (60, 40))
        self.assertIn((0, 0), pts)
        self.assertIn((25, 40), pts)
        self.assertEqual(len(pts), len(set(pts)))
