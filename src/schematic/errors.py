"""Exception taxonomy for the schematic editor core.

Editor entry points catch these and report a boolean / None result; the
connectivity maintenance passes never raise.
"""

from __future__ import annotations


class SchematicError(Exception):
    """Base class for schematic editing failures."""


class PlacementRejected(SchematicError):
    """A placement or transform would overlap another component."""

    def __init__(self, component_id: str, blocking_id: str) -> None:
        self.component_id = component_id
        self.blocking_id = blocking_id
        super().__init__(
            f"Component {component_id!r} would collide with {blocking_id!r}"
        )


class RouteNotFound(SchematicError):
    """The router found no path between two points."""

    def __init__(
        self,
        start: tuple[float, float],
        goal: tuple[float, float],
    ) -> None:
        self.start = start
        self.goal = goal
        super().__init__(f"No route from {start} to {goal}")
