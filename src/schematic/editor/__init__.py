"""Editor — placement collision, connectivity maintenance, edit facade."""

from .models import (
    TransformKind, TransformRecord, MaintenanceReport, PASSES_BY_KIND,
)
from .collision import has_component_collision, find_collision
from .maintainer import (
    reroute_connected_wires, materialize_shared_pin_wires,
    reroute_blocked_wires, separate_overlapping_nets, prune_dangling_wires,
    run_maintenance, audit_sheet,
)
from .engine import SchematicEditor

__all__ = [
    # Models
    "TransformKind", "TransformRecord", "MaintenanceReport", "PASSES_BY_KIND",
    # Collision
    "has_component_collision", "find_collision",
    # Maintainer
    "reroute_connected_wires", "materialize_shared_pin_wires",
    "reroute_blocked_wires", "separate_overlapping_nets", "prune_dangling_wires",
    "run_maintenance", "audit_sheet",
    # Engine
    "SchematicEditor",
]
