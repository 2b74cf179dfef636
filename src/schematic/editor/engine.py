"""Schematic editor — structural edits with automatic wire maintenance.

Every mutating call follows the same sequence:
  1. Validate (resolve ids, snap to grid, reject colliding placements).
  2. Push the current document onto the injected history.
  3. Apply the edit.
  4. Run the connectivity maintenance passes the edit kind calls for.

Rejections are raised internally as SchematicError subclasses and turned
into a None / False return at the public entry point.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable

from src.library.models import LibraryResult
from src.schematic.document.history import DocumentHistory
from src.schematic.document.models import (
    DEFAULT_SHEET_ID, SchematicComponent, SchematicDocument,
    Wire, Junction, NetLabel,
)
from src.schematic.errors import SchematicError, PlacementRejected, RouteNotFound
from src.schematic.router.edges import build_occupied_edges
from src.schematic.router.grid import SchematicGrid
from src.schematic.router.models import Point, RouterConfig
from src.schematic.router.nets import same_net_wire_ids, net_points
from src.schematic.router.obstacles import build_routing_context, build_blocked_cells
from src.schematic.router.pathfinder import find_route
from src.schematic.router.pins import pin_tips

from .collision import find_collision
from .maintainer import run_maintenance
from .models import MaintenanceReport, TransformKind, TransformRecord


log = logging.getLogger(__name__)


class SchematicEditor:
    """Editing facade over one SchematicDocument."""

    def __init__(
        self,
        document: SchematicDocument,
        library: LibraryResult,
        *,
        history: DocumentHistory | None = None,
        warn: Callable[[str], None] | None = None,
        config: RouterConfig | None = None,
        active_sheet_id: str = DEFAULT_SHEET_ID,
    ) -> None:
        self.document = document
        self.library = library
        self.history = history if history is not None else DocumentHistory()
        self.warn = warn or log.warning
        self.config = config or RouterConfig()
        self.grid = SchematicGrid(self.config.grid_spacing)
        self.active_sheet_id = active_sheet_id
        self.last_report = MaintenanceReport()

    # ── Helpers ────────────────────────────────────────────────────

    def _component(self, component_id: str) -> SchematicComponent:
        comp = self.document.find_component(component_id)
        if comp is None:
            raise SchematicError(f"Unknown component {component_id!r}")
        return comp

    def _tips(self, comp: SchematicComponent) -> list[Point]:
        definition = self.library.get(comp.library_id)
        if definition is None:
            return []
        return pin_tips(comp, definition)

    def _check_collisions(
        self,
        candidates: list[SchematicComponent],
        ignore_ids: set[str],
    ) -> None:
        others = [c for c in self.document.components if c.id not in ignore_ids]
        for cand in candidates:
            definition = self.library.get(cand.library_id)
            if definition is None:
                continue
            blocking = find_collision(cand, definition, others, self.library,
                                      config=self.config)
            if blocking is not None:
                raise PlacementRejected(cand.id, blocking)

    def _next_reference(self, prefix: str) -> str:
        used = set()
        for c in self.document.components:
            suffix = c.reference[len(prefix):]
            if c.reference.startswith(prefix) and suffix.isdigit():
                used.add(int(suffix))
        n = 1
        while n in used:
            n += 1
        return f"{prefix}{n}"

    def _transform(
        self,
        kind: TransformKind,
        candidates: list[SchematicComponent],
    ) -> None:
        """Validate, snapshot, apply, and maintain a component transform."""
        ids = {c.id for c in candidates}
        self._check_collisions(candidates, ids)

        old_tips = {cid: self._tips(self._component(cid)) for cid in ids}
        self.history.push(self.document)
        for cand in candidates:
            comp = self._component(cand.id)
            comp.position = cand.position
            comp.rotation = cand.rotation
            comp.mirror = cand.mirror
        self.route_on_transform([c.id for c in candidates], kind, old_tips)

    # ── Components ─────────────────────────────────────────────────

    def place_component(
        self,
        library_id: str,
        position: Point,
        *,
        rotation: int = 0,
        mirror: bool = False,
        reference: str = "",
        value: str = "",
        sheet_id: str | None = None,
    ) -> str | None:
        """Place a library symbol; returns its id, or None when rejected."""
        definition = self.library.get(library_id)
        if definition is None:
            log.info("Placement of unknown symbol %r ignored", library_id)
            return None

        comp = SchematicComponent(
            id=str(uuid.uuid4()),
            library_id=library_id,
            position=self.grid.snap_point(position),
            rotation=rotation % 360,
            mirror=mirror,
            sheet_id=sheet_id or self.active_sheet_id,
            reference=reference or self._next_reference(definition.prefix),
            value=value,
        )
        try:
            self._check_collisions([comp], {comp.id})
        except PlacementRejected as exc:
            log.info("Placement rejected: %s", exc)
            return None

        self.history.push(self.document)
        self.document.components.append(comp)
        self.route_on_transform([comp.id], TransformKind.PLACED, {})
        return comp.id

    def move_component(self, component_id: str, position: Point) -> bool:
        try:
            comp = self._component(component_id)
            cand = replace(comp, position=self.grid.snap_point(position))
            self._transform(TransformKind.MOVED, [cand])
        except SchematicError as exc:
            log.info("Move rejected: %s", exc)
            return False
        return True

    def rotate_component(self, component_id: str) -> bool:
        """Rotate by +90 degrees about the component origin."""
        try:
            comp = self._component(component_id)
            cand = replace(comp, rotation=(comp.rotation + 90) % 360)
            self._transform(TransformKind.ROTATED, [cand])
        except SchematicError as exc:
            log.info("Rotate rejected: %s", exc)
            return False
        return True

    def mirror_component(self, component_id: str) -> bool:
        try:
            comp = self._component(component_id)
            cand = replace(comp, mirror=not comp.mirror)
            self._transform(TransformKind.MIRRORED, [cand])
        except SchematicError as exc:
            log.info("Mirror rejected: %s", exc)
            return False
        return True

    def move_component_group(self, component_ids: list[str], delta: Point) -> bool:
        """Translate several components together by a grid-snapped delta."""
        dx, dy = self.grid.snap_point(delta)
        if dx == 0 and dy == 0:
            return True
        try:
            candidates = []
            for cid in dict.fromkeys(component_ids):
                comp = self._component(cid)
                x, y = comp.position
                candidates.append(replace(comp, position=(x + dx, y + dy)))
            if not candidates:
                return True
            self._transform(TransformKind.GROUP_MOVED, candidates)
        except SchematicError as exc:
            log.info("Group move rejected: %s", exc)
            return False
        return True

    def route_on_transform(
        self,
        component_ids: list[str],
        kind: TransformKind,
        old_tips: dict[str, list[Point]],
    ) -> MaintenanceReport:
        """Run the maintenance passes for components already transformed.

        *old_tips* maps each component id to its pin tips before the edit,
        in definition order.  Components on several sheets are maintained
        sheet by sheet.
        """
        by_sheet: dict[str, list[TransformRecord]] = {}
        for cid in component_ids:
            comp = self.document.find_component(cid)
            if comp is None:
                continue
            new = self._tips(comp)
            old = old_tips.get(cid, [])
            records = by_sheet.setdefault(comp.sheet_id, [])
            if old and len(old) == len(new):
                records.append(TransformRecord(cid, list(old), new))

        report = MaintenanceReport()
        for sheet_id, records in by_sheet.items():
            report.merge(run_maintenance(
                self.document, self.library, sheet_id, kind, records,
                config=self.config,
            ))
        self.last_report = report
        return report

    # ── Wires ──────────────────────────────────────────────────────

    def _route_polyline(self, points: list[Point], sheet_id: str) -> list[Point]:
        grid = self.grid
        components = self.document.sheet_components(sheet_id)
        wires = self.document.sheet_wires(sheet_id)
        ctx = build_routing_context(components, self.library, grid, config=self.config)
        occupied = build_occupied_edges(wires, grid)
        same_ids = same_net_wire_ids(points, wires, self.config.point_tolerance)
        same_edges = build_occupied_edges([w for w in wires if w.id in same_ids], grid)
        blocked = build_blocked_cells(
            components, self.library, points, wires, grid,
            tolerance=self.config.point_tolerance,
        )

        out: list[Point] = [points[0]]
        for a, b in zip(points, points[1:]):
            leg = find_route(a, b, ctx.obstacles, occupied, same_edges,
                             ctx.allowed_cells, blocked, config=self.config)
            if leg is None:
                raise RouteNotFound(a, b)
            out.extend(leg[1:])
        return out

    def draw_wire(self, points: list[Point], *, sheet_id: str | None = None) -> bool:
        """Route a new wire through the given points; all-or-nothing."""
        sheet_id = sheet_id or self.active_sheet_id
        snapped = [self.grid.snap_point(p) for p in points]
        if len(snapped) < 2:
            return False
        try:
            path = self._route_polyline(snapped, sheet_id)
        except RouteNotFound as exc:
            self.warn(f"Wire not possible: path is blocked ({exc})")
            return False
        if len(path) < 2:
            self.warn("Wire not possible: start and end coincide")
            return False

        self.history.push(self.document)
        wire = Wire(id=str(uuid.uuid4()), points=path, sheet_id=sheet_id,
                    net_id=str(uuid.uuid4()))
        self.document.wires.append(wire)
        log.debug("Drew wire %s with %d points", wire.id, len(path))
        self.last_report = run_maintenance(
            self.document, self.library, sheet_id, TransformKind.WIRE_DRAWN,
            config=self.config,
        )
        return True

    def add_junction(self, position: Point, *, sheet_id: str | None = None) -> str:
        self.history.push(self.document)
        junction = Junction(id=str(uuid.uuid4()),
                            position=self.grid.snap_point(position),
                            sheet_id=sheet_id or self.active_sheet_id)
        self.document.junctions.append(junction)
        return junction.id

    def add_label(
        self,
        text: str,
        position: Point,
        *,
        kind: str = "net",
        sheet_id: str | None = None,
    ) -> str:
        self.history.push(self.document)
        label = NetLabel(id=str(uuid.uuid4()), text=text,
                         position=self.grid.snap_point(position),
                         sheet_id=sheet_id or self.active_sheet_id, kind=kind)
        self.document.labels.append(label)
        return label.id

    def net_points_at(self, point: Point, *, sheet_id: str | None = None) -> list[Point]:
        """Vertices of the net touching *point*, for highlighting."""
        wires = self.document.sheet_wires(sheet_id or self.active_sheet_id)
        ids = same_net_wire_ids([point], wires, self.config.point_tolerance)
        if not ids:
            return []
        return net_points(ids, wires)

    # ── Deletion ───────────────────────────────────────────────────

    def delete_component(self, component_id: str) -> bool:
        return self.delete_elements([component_id])

    def delete_elements(self, element_ids: list[str]) -> bool:
        """Delete components, wires, junctions and labels by id, then prune."""
        doomed = set(element_ids)
        doc = self.document
        sheets: dict[str, None] = {}
        for group in (doc.components, doc.wires, doc.junctions, doc.labels):
            for item in group:
                if item.id in doomed:
                    sheets.setdefault(item.sheet_id, None)
        if not sheets:
            return False

        self.history.push(doc)
        doc.components = [c for c in doc.components if c.id not in doomed]
        doc.wires = [w for w in doc.wires if w.id not in doomed]
        doc.junctions = [j for j in doc.junctions if j.id not in doomed]
        doc.labels = [lb for lb in doc.labels if lb.id not in doomed]

        kind = (TransformKind.DELETED if len(doomed) == 1
                else TransformKind.ELEMENTS_DELETED)
        report = MaintenanceReport()
        for sheet_id in sheets:
            report.merge(run_maintenance(doc, self.library, sheet_id, kind,
                                         config=self.config))
        self.last_report = report
        return True

    # ── History ────────────────────────────────────────────────────

    def undo(self) -> bool:
        restored = self.history.undo(self.document)
        if restored is None:
            return False
        self.document = restored
        return True

    def redo(self) -> bool:
        restored = self.history.redo(self.document)
        if restored is None:
            return False
        self.document = restored
        return True
