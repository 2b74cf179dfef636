"""Connectivity maintainer — keeps wires attached and clear after edits.

Algorithm overview (passes run in this order, selected per edit kind):
  1. Reroute wires whose endpoint sat on a transformed pin's old tip.
  2. Materialize a wire for every pin-to-pin contact a transform pulled
     apart, from the vacated contact point to the pin's new tip.
  3. Reroute wires crossing a component box they are not attached to,
     or riding along a pin stub they do not end on.
  4. Reroute the later wire of every different-net pair sharing a grid
     edge (it keeps its geometry when no route exists).
  5. Prune wires with a dangling endpoint until nothing changes, then
     drop junctions no wire passes through.

Each pass reads a snapshot of the sheet taken when it starts and routes
its wires one after another: every routed wire's edges become occupied
for the next request.  Replacements are committed when the pass ends.
Passes never raise; components without a library definition are simply
left out of obstacles and pin lookups.
"""

from __future__ import annotations

import logging
import uuid

from src.library.models import LibraryResult
from src.schematic.document.models import SchematicDocument, Wire
from src.schematic.router.edges import EdgeTracker
from src.schematic.router.grid import SchematicGrid, points_match
from src.schematic.router.models import Point, RouterConfig
from src.schematic.router.nets import point_on_wire, same_net_wire_ids
from src.schematic.router.obstacles import (
    build_routing_context, build_blocked_cells, component_bbox,
    wire_passes_through_bbox, segments_overlap,
)
from src.schematic.router.pathfinder import find_route, fallback_path
from src.schematic.router.pins import pin_segments, sheet_pin_tips, is_pin_tip

from .models import (
    MaintenanceReport, TransformKind, TransformRecord, PASSES_BY_KIND,
)


log = logging.getLogger(__name__)

_DEFAULT_CFG = RouterConfig()


# ── Per-pass routing state ─────────────────────────────────────────


class _SheetPass:
    """Snapshot of one sheet plus the routing state shared by a pass."""

    def __init__(
        self,
        document: SchematicDocument,
        library: LibraryResult,
        sheet_id: str,
        config: RouterConfig,
    ) -> None:
        self.library = library
        self.config = config
        self.tol = config.point_tolerance
        self.grid = SchematicGrid(config.grid_spacing)
        self.components = document.sheet_components(sheet_id)
        self.wires = [
            Wire(w.id, list(w.points), w.sheet_id, w.net_id)
            for w in document.sheet_wires(sheet_id)
            if len(w.points) >= 2
        ]
        self.context = build_routing_context(
            self.components, library, self.grid, config=config,
        )
        self.tracker = EdgeTracker(self.wires, self.grid)

    def route(
        self,
        start: Point,
        goal: Point,
        seeds: list[Point],
        pending: set[str],
        wire_id: str | None = None,
    ) -> list[Point] | None:
        """Plan one wire; *pending* wires have not been re-placed yet.

        *wire_id* names the wire being replaced.  Its stale geometry and
        that of the pending wires take no part in deciding the net, so a
        foreign pin tip the old path ran over stays blocked.
        """
        skip = pending | {wire_id} if wire_id else set(pending)
        settled = [w for w in self.wires if w.id not in skip]
        same_net = same_net_wire_ids(seeds, settled, self.tol)
        blocked = build_blocked_cells(
            self.components, self.library, seeds, settled, self.grid,
            tolerance=self.tol,
        )
        path = find_route(
            start, goal,
            self.context.obstacles,
            self.tracker.occupied(skip),
            self.tracker.edges_of(same_net),
            self.context.allowed_cells,
            blocked,
            config=self.config,
        )
        if path is None or len(path) < 2:
            return None
        return path


def _commit(document: SchematicDocument, replacements: dict[str, list[Point]]) -> None:
    for w in document.wires:
        if w.id in replacements:
            w.points = replacements[w.id]


# ── Pass 1: wires attached to transformed pins ─────────────────────


def reroute_connected_wires(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    records: list[TransformRecord],
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    report = MaintenanceReport()
    sp = _SheetPass(document, library, sheet_id, config)
    tol = sp.tol

    moves = [
        (old, new)
        for rec in records
        for old, new in zip(rec.old_tips, rec.new_tips)
    ]

    def retarget(point: Point) -> Point | None:
        for old, new in moves:
            if points_match(point, old, tol):
                return new
        return None

    plan: list[tuple[Wire, Point, Point, list[Point]]] = []
    for wire in sp.wires:
        new_first = retarget(wire.first)
        new_last = retarget(wire.last)
        if new_first is None and new_last is None:
            continue
        start = wire.first if new_first is None else new_first
        goal = wire.last if new_last is None else new_last
        seeds = [start, goal]
        if new_first is not None:
            seeds.append(wire.first)
        if new_last is not None:
            seeds.append(wire.last)
        plan.append((wire, start, goal, seeds))

    pending = {wire.id for wire, *_ in plan}
    replacements: dict[str, list[Point]] = {}
    collapsed: set[str] = set()

    for wire, start, goal, seeds in plan:
        pending.discard(wire.id)
        if points_match(start, goal, tol):
            log.debug("Wire %s collapsed to a point, removing", wire.id)
            collapsed.add(wire.id)
            sp.tracker.remove_wire(wire.id)
            continue
        path = sp.route(start, goal, seeds, pending, wire.id)
        if path is None:
            log.debug("Wire %s: no route, using fallback", wire.id)
            path = fallback_path(start, goal)
            report.fallbacks += 1
        replacements[wire.id] = path
        sp.tracker.set_wire(wire.id, path)
        report.rerouted.append(wire.id)

    _commit(document, replacements)
    if collapsed:
        document.wires = [w for w in document.wires if w.id not in collapsed]
        report.removed_wires.extend(sorted(collapsed))
    return report


# ── Pass 2: separated pin-to-pin contacts ──────────────────────────


def materialize_shared_pin_wires(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    records: list[TransformRecord],
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    report = MaintenanceReport()
    sp = _SheetPass(document, library, sheet_id, config)
    tol = sp.tol

    moving = {rec.component_id for rec in records}
    stationary_tips = sheet_pin_tips(sp.components, library, exclude_ids=moving)
    if not stationary_tips:
        return report

    def joined(a: Point, b: Point, wires: list[Wire]) -> bool:
        for w in wires:
            if ((points_match(w.first, a, tol) and points_match(w.last, b, tol))
                    or (points_match(w.first, b, tol) and points_match(w.last, a, tol))):
                return True
        return False

    created: list[Wire] = []
    for rec in records:
        for old, new in zip(rec.old_tips, rec.new_tips):
            if not is_pin_tip(old, stationary_tips, tol):
                continue
            if points_match(old, new, tol):
                continue
            if joined(old, new, sp.wires) or joined(old, new, created):
                continue

            path = sp.route(old, new, [old, new], set())
            if path is None:
                log.debug("Contact %s -> %s: no route, using fallback", old, new)
                path = fallback_path(old, new)
                report.fallbacks += 1

            wire = Wire(id=str(uuid.uuid4()), points=path, sheet_id=sheet_id)
            sp.tracker.set_wire(wire.id, path)
            created.append(wire)
            report.created.append(wire.id)
            log.debug("Materialized wire %s for contact at %s", wire.id, old)

    document.wires.extend(created)
    return report


# ── Pass 3: wires crossing foreign components ──────────────────────


def _blocked_wire_ids(sp: _SheetPass) -> list[str]:
    tol = sp.tol
    infos = []
    for comp in sp.components:
        definition = sp.library.get(comp.library_id)
        if definition is None:
            continue
        infos.append((
            component_bbox(comp, definition, config=sp.config),
            pin_segments(comp, definition),
        ))

    def attached(wire: Wire, point: Point) -> bool:
        return points_match(wire.first, point, tol) or points_match(wire.last, point, tol)

    out: list[str] = []
    for wire in sp.wires:
        hit = False
        for bbox, segs in infos:
            if not wire_passes_through_bbox(wire.points, bbox):
                continue
            if not any(attached(wire, s.tip) for s in segs):
                hit = True
                break
        if not hit:
            hit = any(
                segments_overlap(a, b, seg.base, seg.tip)
                for _bbox, segs in infos
                for seg in segs
                if not attached(wire, seg.tip)
                for a, b in zip(wire.points, wire.points[1:])
            )
        if hit:
            out.append(wire.id)
    return out


def reroute_blocked_wires(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    report = MaintenanceReport()
    sp = _SheetPass(document, library, sheet_id, config)

    blocked_ids = _blocked_wire_ids(sp)
    if not blocked_ids:
        return report

    pending = set(blocked_ids)
    by_id = {w.id: w for w in sp.wires}
    replacements: dict[str, list[Point]] = {}

    for wid in blocked_ids:
        wire = by_id[wid]
        pending.discard(wid)
        start, goal = wire.first, wire.last
        path = sp.route(start, goal, [start, goal], pending, wid)
        if path is None:
            log.debug("Blocked wire %s: no route, using fallback", wid)
            path = fallback_path(start, goal)
            report.fallbacks += 1
        replacements[wid] = path
        sp.tracker.set_wire(wid, path)
        report.rerouted.append(wid)

    _commit(document, replacements)
    return report


# ── Pass 4: different-net wires sharing grid edges ─────────────────


def _overlapping_wire_ids(sp: _SheetPass) -> list[str]:
    """Later wire of every different-net pair sharing a grid edge."""
    wires = sp.wires
    edge_sets = {w.id: sp.tracker.edges_of({w.id}) for w in wires}
    overlap: list[str] = []
    flagged: set[str] = set()
    for i, a in enumerate(wires):
        if a.id in flagged:
            continue
        a_net = same_net_wire_ids([a.first, a.last], wires, sp.tol)
        a_edges = edge_sets[a.id]
        for b in wires[i + 1:]:
            if b.id in flagged or b.id in a_net:
                continue
            if a_edges & edge_sets[b.id]:
                flagged.add(b.id)
                overlap.append(b.id)
    return overlap


def separate_overlapping_nets(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    report = MaintenanceReport()
    sp = _SheetPass(document, library, sheet_id, config)
    wires = sp.wires
    if len(wires) < 2:
        return report

    overlap = _overlapping_wire_ids(sp)
    if not overlap:
        return report

    pending = set(overlap)
    by_id = {w.id: w for w in wires}
    replacements: dict[str, list[Point]] = {}

    for wid in overlap:
        wire = by_id[wid]
        pending.discard(wid)
        start, goal = wire.first, wire.last
        path = sp.route(start, goal, [start, goal], pending, wid)
        if path is None:
            log.debug("Overlapping wire %s: no route, keeping geometry", wid)
            continue
        replacements[wid] = path
        sp.tracker.set_wire(wid, path)
        report.rerouted.append(wid)

    _commit(document, replacements)
    return report


# ── Pass 5: dangling wires and orphan junctions ────────────────────


def _anchor_points(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
) -> list[Point]:
    """Pin tips, junctions and labels: legal wire endpoints besides wires."""
    anchors = sheet_pin_tips(document.sheet_components(sheet_id), library)
    anchors += [j.position for j in document.sheet_junctions(sheet_id)]
    anchors += [lb.position for lb in document.sheet_labels(sheet_id)]
    return anchors


def _dangling_wire_ids(live: list[Wire], anchors: list[Point], tol: float) -> set[str]:
    doomed: set[str] = set()

    def connected(point: Point, wire: Wire) -> bool:
        if any(points_match(point, p, tol) for p in anchors):
            return True
        return any(
            point_on_wire(point, other.points, tol)
            for other in live
            if other.id != wire.id and other.id not in doomed
        )

    for wire in live:
        if (len(wire.points) < 2
                or not connected(wire.first, wire)
                or not connected(wire.last, wire)):
            doomed.add(wire.id)
    return doomed


def prune_dangling_wires(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    report = MaintenanceReport()
    tol = config.point_tolerance
    anchors = _anchor_points(document, library, sheet_id)

    while True:
        live = document.sheet_wires(sheet_id)
        doomed = _dangling_wire_ids(live, anchors, tol)
        if not doomed:
            break
        log.debug("Pruning %d dangling wire(s) on sheet %s", len(doomed), sheet_id)
        document.wires = [w for w in document.wires if w.id not in doomed]
        report.removed_wires.extend(w.id for w in live if w.id in doomed)

    remaining = document.sheet_wires(sheet_id)
    orphans = {
        j.id for j in document.sheet_junctions(sheet_id)
        if not any(point_on_wire(j.position, w.points, tol) for w in remaining)
    }
    if orphans:
        document.junctions = [j for j in document.junctions if j.id not in orphans]
        report.removed_junctions.extend(sorted(orphans))
    return report


# ── Audit ──────────────────────────────────────────────────────────


def audit_sheet(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> dict[str, list[str]]:
    """Report (without fixing) what passes 3-5 would act on.

    Returns wire ids under ``"dangling"``, ``"blocked"`` and
    ``"overlapping"``.
    """
    sp = _SheetPass(document, library, sheet_id, config)
    anchors = _anchor_points(document, library, sheet_id)
    dangling = _dangling_wire_ids(document.sheet_wires(sheet_id), anchors, sp.tol)
    return {
        "dangling": [w.id for w in document.sheet_wires(sheet_id) if w.id in dangling],
        "blocked": _blocked_wire_ids(sp),
        "overlapping": _overlapping_wire_ids(sp),
    }


# ── Cascade ────────────────────────────────────────────────────────


def run_maintenance(
    document: SchematicDocument,
    library: LibraryResult,
    sheet_id: str,
    kind: TransformKind,
    records: list[TransformRecord] | None = None,
    *,
    config: RouterConfig = _DEFAULT_CFG,
) -> MaintenanceReport:
    """Run every pass the edit *kind* calls for, in order."""
    records = records or []
    report = MaintenanceReport()

    for step in PASSES_BY_KIND[kind]:
        if step == 1:
            part = reroute_connected_wires(document, library, sheet_id, records, config=config)
        elif step == 2:
            part = materialize_shared_pin_wires(document, library, sheet_id, records, config=config)
        elif step == 3:
            part = reroute_blocked_wires(document, library, sheet_id, config=config)
        elif step == 4:
            part = separate_overlapping_nets(document, library, sheet_id, config=config)
        else:
            part = prune_dangling_wires(document, library, sheet_id, config=config)
        report.merge(part)

    if report.changed:
        log.info(
            "Maintenance after %s on sheet %s: %d rerouted, %d created, "
            "%d wire(s) and %d junction(s) removed, %d fallback(s)",
            kind.name, sheet_id, len(report.rerouted), len(report.created),
            len(report.removed_wires), len(report.removed_junctions),
            report.fallbacks,
        )
    return report
