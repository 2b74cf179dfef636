"""Tests for the symbol library loader.

Validates:
  - The shipped library/*.json files load without errors
  - Pin tips are derived from base, length and direction
  - Broken files and invalid definitions are collected, not raised
  - Serialization round-trips a definition
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from src.library import (
    load_library, parse_definition, definition_to_dict, library_to_dict,
)


def _resistor_raw(**overrides) -> dict:
    raw = {
        "id": "r_test",
        "name": "Test resistor",
        "prefix": "R",
        "body": {"min_x": -10, "min_y": -4, "max_x": 10, "max_y": 4},
        "pins": [
            {"number": "1", "position": [-10, 0], "length": 10, "direction": 180},
            {"number": "2", "position": [10, 0], "length": 10, "direction": 0},
        ],
    }
    raw.update(overrides)
    return raw


class TestShippedLibrary(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.result = load_library()

    def test_loads_cleanly(self):
        self.assertTrue(self.result.ok, [str(e) for e in self.result.errors])

    def test_expected_symbols_present(self):
        ids = {d.id for d in self.result.definitions}
        for expected in ("resistor", "capacitor", "led", "opamp", "gnd"):
            self.assertIn(expected, ids)

    def test_resistor_tips(self):
        resistor = self.result.get("resistor")
        self.assertIsNotNone(resistor)
        tips = [p.local_tip for p in resistor.pins]
        self.assertEqual(tips, [(-20, 0), (20, 0)])

    def test_opamp_supply_tips(self):
        opamp = self.result.get("opamp")
        tips = {p.name: p.local_tip for p in opamp.pins}
        self.assertEqual(tips["V-"], (0, 30))
        self.assertEqual(tips["V+"], (0, -30))
        self.assertEqual(tips["OUT"], (30, 0))

    def test_unknown_id_resolves_to_none(self):
        self.assertIsNone(self.result.get("no_such_symbol"))

    def test_library_to_dict(self):
        d = library_to_dict(self.result)
        self.assertTrue(d["ok"])
        self.assertEqual(d["definition_count"], len(self.result.definitions))
        json.dumps(d)


class TestLoaderErrors(unittest.TestCase):

    def _load(self, files: dict[str, str]):
        with tempfile.TemporaryDirectory() as tmp:
            for name, text in files.items():
                (Path(tmp) / name).write_text(text, encoding="utf-8")
            return load_library(Path(tmp))

    def test_empty_directory(self):
        result = self._load({})
        self.assertFalse(result.ok)
        self.assertEqual(result.errors[0].field, "files")

    def test_bad_json_is_recorded(self):
        result = self._load({"bad.json": "{not json"})
        self.assertEqual(result.definitions, [])
        self.assertEqual(result.errors[0].field, "json")

    def test_missing_field_is_recorded(self):
        raw = _resistor_raw()
        del raw["body"]
        result = self._load({"r.json": json.dumps(raw)})
        self.assertEqual(result.definitions, [])
        self.assertEqual(result.errors[0].field, "parse")

    def test_duplicate_pin_numbers(self):
        raw = _resistor_raw()
        raw["pins"][1]["number"] = "1"
        result = self._load({"r.json": json.dumps(raw)})
        self.assertEqual(len(result.definitions), 1)
        self.assertTrue(any("Duplicate pin" in e.message for e in result.errors))

    def test_invalid_direction(self):
        raw = _resistor_raw()
        raw["pins"][0]["direction"] = 45
        result = self._load({"r.json": json.dumps(raw)})
        self.assertTrue(any(e.field == "pins.1.direction" for e in result.errors))

    def test_coincident_tips(self):
        raw = _resistor_raw()
        raw["pins"][1] = {"number": "2", "position": [-10, 0], "length": 10,
                          "direction": 180}
        result = self._load({"r.json": json.dumps(raw)})
        self.assertTrue(any("coincides" in e.message for e in result.errors))

    def test_duplicate_ids_across_files(self):
        text = json.dumps(_resistor_raw())
        result = self._load({"a.json": text, "b.json": text})
        self.assertTrue(any(e.field == "id" for e in result.errors))


class TestDefinitionSerialization(unittest.TestCase):

    def test_round_trip(self):
        original = parse_definition(_resistor_raw())
        restored = parse_definition(definition_to_dict(original))
        self.assertEqual(original, restored)
