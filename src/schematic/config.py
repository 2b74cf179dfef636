"""Shared geometric rules for the schematic editor core.

These values describe the drawing grid and the tolerances used when
matching wire endpoints against pin tips.  Both the **router** (which
plans wire paths on the grid) and the **editor** (which checks component
collisions and keeps wires attached to pins) derive their parameters from
this single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchematicRules:
    """Grid and matching rules for schematic sheets.

    All distances are in world units (canvas pixels at zoom 1).
    """

    grid_spacing: float = 10.0
    """Distance between two adjacent grid lines."""

    component_margin: float = 2.0
    """Padding added around symbol extents when building bounding boxes.
    Kept below half a grid step so a pin tip sitting on the symbol
    extent stays the last grid point inside the box."""

    point_tolerance: float = 1.0
    """Two points closer than this on both axes are the same point."""

    empty_symbol_half_extent: float = 20.0
    """Half size of the box assumed for symbols without graphics."""


# Module-level singleton, importable everywhere.
SCHEMATIC_RULES = SchematicRules()
