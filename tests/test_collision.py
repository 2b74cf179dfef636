"""Tests for placement collision: only tip-on-tip contact is allowed."""

from __future__ import annotations

import unittest

from src.schematic.editor import has_component_collision, find_collision
from tests.schematic_fixture import make_library, make_resistor_definition, resistor


class TestHasComponentCollision(unittest.TestCase):

    def setUp(self):
        self.defn = make_resistor_definition()

    def _collides(self, a, b):
        return has_component_collision(a, self.defn, b, self.defn)

    def test_far_apart(self):
        self.assertFalse(self._collides(resistor("A", 0, 0), resistor("B", 100, 0)))

    def test_tip_on_tip_is_allowed(self):
        self.assertFalse(self._collides(resistor("A", 0, 0), resistor("B", 40, 0)))

    def test_perpendicular_tip_contact_is_allowed(self):
        b = resistor("B", 20, 20, rotation=90)
        self.assertFalse(self._collides(resistor("A", 0, 0), b))

    def test_body_overlap(self):
        self.assertTrue(self._collides(resistor("A", 0, 0), resistor("B", 10, 0)))

    def test_pin_into_body(self):
        self.assertTrue(self._collides(resistor("A", 0, 0), resistor("B", 30, 0)))

    def test_pin_overlap_without_tip_match(self):
        self.assertTrue(self._collides(resistor("A", 0, 0), resistor("B", 35, 0)))

    def test_symmetric(self):
        a, b = resistor("A", 0, 0), resistor("B", 35, 0)
        self.assertEqual(self._collides(a, b), self._collides(b, a))


class TestFindCollision(unittest.TestCase):

    def setUp(self):
        self.library = make_library()
        self.defn = make_resistor_definition()

    def test_reports_blocking_id(self):
        others = [resistor("R1", 0, 0), resistor("R2", 200, 0)]
        cand = resistor("NEW", 190, 0)
        self.assertEqual(find_collision(cand, self.defn, others, self.library), "R2")

    def test_ignores_self_and_other_sheets(self):
        others = [resistor("R1", 0, 0, sheet_id="power"), resistor("NEW", 0, 0)]
        cand = resistor("NEW", 0, 0)
        self.assertIsNone(find_collision(cand, self.defn, others, self.library))
