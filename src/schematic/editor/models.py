"""Editor dataclasses — transform events and maintenance reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from src.schematic.router.models import Point


class TransformKind(Enum):
    PLACED = auto()
    MOVED = auto()
    ROTATED = auto()
    MIRRORED = auto()
    GROUP_MOVED = auto()
    DELETED = auto()
    ELEMENTS_DELETED = auto()
    WIRE_DRAWN = auto()


# Maintenance passes run after each kind of edit, in order:
#   1 reroute wires attached to moved pins
#   2 materialize wires for separated pin-to-pin contacts
#   3 reroute wires crossing foreign component boxes / pin stubs
#   4 separate different-net wires sharing grid edges
#   5 prune dangling wires and orphan junctions
PASSES_BY_KIND: dict[TransformKind, tuple[int, ...]] = {
    TransformKind.PLACED: (3, 4),
    TransformKind.MOVED: (1, 2, 3, 4),
    TransformKind.ROTATED: (1, 2, 3, 4),
    TransformKind.MIRRORED: (1, 2, 3, 4),
    TransformKind.GROUP_MOVED: (1, 2, 3, 4),
    TransformKind.DELETED: (5,),
    TransformKind.ELEMENTS_DELETED: (5,),
    TransformKind.WIRE_DRAWN: (4,),
}


@dataclass
class TransformRecord:
    """Pin tips of one component before and after a transform.

    Both lists follow the definition's pin order, so index *i* is the
    same pin in each.
    """

    component_id: str
    old_tips: list[Point]
    new_tips: list[Point]


@dataclass
class MaintenanceReport:
    """What a maintenance cascade changed."""

    rerouted: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    removed_wires: list[str] = field(default_factory=list)
    removed_junctions: list[str] = field(default_factory=list)
    fallbacks: int = 0

    @property
    def changed(self) -> bool:
        return bool(
            self.rerouted or self.created
            or self.removed_wires or self.removed_junctions
        )

    def merge(self, other: MaintenanceReport) -> None:
        self.rerouted += [w for w in other.rerouted if w not in self.rerouted]
        self.created += other.created
        self.removed_wires += other.removed_wires
        self.removed_junctions += other.removed_junctions
        self.fallbacks += other.fallbacks
