"""Snapshot-based undo/redo history for a schematic document.

The history owns two bounded stacks of JSON snapshots.  Callers push the
current document *before* every structural operation; undo/redo swap the
live document with a restored snapshot.  An instance is created by the
application and injected into the editor, so several open documents never
share stacks.
"""

from __future__ import annotations

import json
import logging

from .models import SchematicDocument
from .parsing import parse_document
from .serialization import document_to_dict


log = logging.getLogger(__name__)

MAX_UNDO_DEPTH = 50


class DocumentHistory:
    """Bounded undo/redo stacks of serialized documents."""

    def __init__(self, max_depth: int = MAX_UNDO_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self.max_depth = max_depth
        self._undo: list[str] = []
        self._redo: list[str] = []

    @staticmethod
    def _snapshot(doc: SchematicDocument) -> str:
        return json.dumps(document_to_dict(doc))

    @staticmethod
    def _restore(snap: str) -> SchematicDocument:
        return parse_document(json.loads(snap))

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def push(self, doc: SchematicDocument) -> None:
        """Record *doc* as the state to return to; clears the redo stack."""
        self._undo.append(self._snapshot(doc))
        if len(self._undo) > self.max_depth:
            self._undo.pop(0)
        self._redo.clear()

    def undo(self, current: SchematicDocument) -> SchematicDocument | None:
        """Return the previous document, or None when there is nothing to undo."""
        if not self._undo:
            return None
        self._redo.append(self._snapshot(current))
        log.debug("History: undo (%d left)", len(self._undo) - 1)
        return self._restore(self._undo.pop())

    def redo(self, current: SchematicDocument) -> SchematicDocument | None:
        """Return the next document, or None when there is nothing to redo."""
        if not self._redo:
            return None
        self._undo.append(self._snapshot(current))
        log.debug("History: redo (%d left)", len(self._redo) - 1)
        return self._restore(self._redo.pop())
