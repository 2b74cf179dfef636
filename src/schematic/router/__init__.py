"""Router — orthogonal wire planning on the schematic grid.

Submodules:
  models       Geometry dataclasses and configuration constants.
  grid         World <-> grid conversion and point matching.
  pins         Component transform and world-space pin stubs.
  obstacles    Component boxes, pin corridors, blocked cells.
  edges        Occupied grid-edge tracking per wire.
  nets         Net-sameness oracle over wire geometry.
  pathfinder   A* router with turn and overlap penalties.
"""

from .models import BBox, PinSegment, RoutingContext, RouterConfig
from .grid import SchematicGrid, points_match
from .pins import local_to_world, pin_segments, pin_tips
from .obstacles import (
    component_bbox, component_body_bbox,
    build_routing_context, build_blocked_cells, obstacle_cells,
    wire_passes_through_bbox, segments_overlap,
)
from .edges import (
    edge_key, wire_edge_set, build_occupied_edges, add_wire_edges, EdgeTracker,
)
from .nets import same_net_wire_ids, net_points, point_on_wire
from .pathfinder import find_route, fallback_path

__all__ = [
    # Models
    "BBox", "PinSegment", "RoutingContext", "RouterConfig",
    # Grid
    "SchematicGrid", "points_match",
    # Pins
    "local_to_world", "pin_segments", "pin_tips",
    # Obstacles
    "component_bbox", "component_body_bbox",
    "build_routing_context", "build_blocked_cells", "obstacle_cells",
    "wire_passes_through_bbox", "segments_overlap",
    # Edges
    "edge_key", "wire_edge_set", "build_occupied_edges", "add_wire_edges",
    "EdgeTracker",
    # Nets
    "same_net_wire_ids", "net_points", "point_on_wire",
    # Pathfinder
    "find_route", "fallback_path",
]
