"""Library loader — reads library/*.json files, parses and validates them."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import (
    BodyBox, SymbolPin, SymbolDefinition, ValidationError, LibraryResult,
)


LIBRARY_DIR = Path(__file__).resolve().parent.parent.parent / "library"

log = logging.getLogger(__name__)

VALID_DIRECTIONS = {0, 90, 180, 270}
VALID_ELECTRICAL_TYPES = {
    "input", "output", "bidirectional", "passive",
    "power_in", "power_out", "open_collector", "unspecified",
}


# ── Validation ─────────────────────────────────────────────────────

def _validate_definition(defn: SymbolDefinition) -> list[ValidationError]:
    """Run all validation checks on a single symbol definition."""
    errs: list[ValidationError] = []
    did = defn.id

    if defn.body.is_empty:
        errs.append(ValidationError(did, "body", "max must not be smaller than min"))

    numbers = [p.number for p in defn.pins]
    seen: set[str] = set()
    for num in numbers:
        if num in seen:
            errs.append(ValidationError(did, f"pins.{num}", "Duplicate pin number"))
        seen.add(num)

    for pin in defn.pins:
        if pin.direction not in VALID_DIRECTIONS:
            errs.append(ValidationError(did, f"pins.{pin.number}.direction",
                                        f"Unknown direction {pin.direction}, expected 0/90/180/270"))
        if pin.length <= 0:
            errs.append(ValidationError(did, f"pins.{pin.number}.length", "Must be > 0"))
        if pin.electrical_type not in VALID_ELECTRICAL_TYPES:
            errs.append(ValidationError(did, f"pins.{pin.number}.electrical_type",
                                        f"Unknown type '{pin.electrical_type}'"))

    # Coinciding pin tips would short two contacts
    tips: dict[tuple[float, float], str] = {}
    for pin in defn.pins:
        tip = pin.local_tip
        if tip in tips:
            errs.append(ValidationError(did, f"pins.{pin.number}",
                                        f"Tip coincides with pin {tips[tip]}"))
        tips[tip] = pin.number

    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_body(data: dict) -> BodyBox:
    return BodyBox(
        min_x=float(data["min_x"]),
        min_y=float(data["min_y"]),
        max_x=float(data["max_x"]),
        max_y=float(data["max_y"]),
    )


def _parse_pin(data: dict) -> SymbolPin:
    pos = data.get("position", [0, 0])
    return SymbolPin(
        number=str(data["number"]),
        name=data.get("name", str(data["number"])),
        position=(float(pos[0]), float(pos[1])),
        length=float(data["length"]),
        direction=int(data["direction"]),
        electrical_type=data.get("electrical_type", "passive"),
    )


def parse_definition(data: dict, source_file: str = "") -> SymbolDefinition:
    """Parse one raw JSON object into a SymbolDefinition."""
    return SymbolDefinition(
        id=data["id"],
        name=data["name"],
        body=_parse_body(data["body"]),
        pins=[_parse_pin(p) for p in data["pins"]],
        prefix=data.get("prefix", "U"),
        category=data.get("category", "misc"),
        description=data.get("description", ""),
        source_file=source_file,
    )


# ── Public API ─────────────────────────────────────────────────────

def load_library(library_dir: Path | None = None) -> LibraryResult:
    """Load all library/*.json files, parse and validate.

    Returns a LibraryResult with definitions and any validation errors.
    Definitions that fail to parse are skipped (error recorded).
    Definitions that parse but have validation issues are still included.
    """
    d = library_dir or LIBRARY_DIR
    definitions: list[SymbolDefinition] = []
    errors: list[ValidationError] = []

    json_files = sorted(d.glob("*.json"))
    if not json_files:
        errors.append(ValidationError("_library", "files", f"No .json files found in {d}"))
        return LibraryResult(definitions=definitions, errors=errors)

    for path in json_files:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            errors.append(ValidationError(
                path.stem, "json", f"Parse error: {exc}"))
            continue
        except OSError as exc:
            errors.append(ValidationError(
                path.stem, "file", f"Read error: {exc}"))
            continue

        try:
            defn = parse_definition(raw, source_file=str(path))
        except (KeyError, TypeError, ValueError) as exc:
            errors.append(ValidationError(
                raw.get("id", path.stem), "parse", f"Missing/invalid field: {exc}"))
            continue

        errors.extend(_validate_definition(defn))
        definitions.append(defn)

    id_counts: dict[str, int] = {}
    for defn in definitions:
        id_counts[defn.id] = id_counts.get(defn.id, 0) + 1
    for did, count in id_counts.items():
        if count > 1:
            errors.append(ValidationError(did, "id", f"Duplicate definition ID (appears {count} times)"))

    for err in errors:
        log.warning("Library: %s", err)
    log.info("Library: loaded %d definitions from %s (%d errors)",
             len(definitions), d, len(errors))

    return LibraryResult(definitions=definitions, errors=errors)
