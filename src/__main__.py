"""
Schematic auto-wiring — entry point.

Usage:
    python -m src check DOC.json [--library DIR]
    python -m src repair DOC.json [--out FILE] [--library DIR]

check   reports dangling wires, wires crossing foreign components and
        different-net wires sharing grid edges, sheet by sheet.
repair  reroutes blocked and overlapping wires, prunes dangling ones, and
        writes the result (in place unless --out is given).
"""

import json
import logging
import sys
from pathlib import Path


def _option(args: list[str], name: str) -> str | None:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return None


def _usage() -> None:
    print("Usage: python -m src check DOC.json [--library DIR]")
    print("       python -m src repair DOC.json [--out FILE] [--library DIR]")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(args) < 2 or args[0] not in ("check", "repair"):
        _usage()
        return 1

    from src.library import load_library
    from src.schematic.document import parse_document, document_to_dict
    from src.schematic.editor import (
        TransformKind, audit_sheet, run_maintenance,
    )

    cmd, doc_path = args[0], Path(args[1])
    lib_dir = _option(args, "--library")
    library = load_library(Path(lib_dir) if lib_dir else None)
    for err in library.errors:
        print(f"library: {err}")

    document = parse_document(json.loads(doc_path.read_text(encoding="utf-8")))

    if cmd == "check":
        problems = 0
        for sheet_id in document.sheet_ids:
            audit = audit_sheet(document, library, sheet_id)
            for kind, ids in audit.items():
                for wid in ids:
                    print(f"{sheet_id}: {kind} wire {wid}")
                problems += len(ids)
        print(f"{problems} problem(s) found")
        return 1 if problems else 0

    for sheet_id in document.sheet_ids:
        run_maintenance(document, library, sheet_id, TransformKind.PLACED)
        run_maintenance(document, library, sheet_id, TransformKind.ELEMENTS_DELETED)

    out = Path(_option(args, "--out") or doc_path)
    out.write_text(json.dumps(document_to_dict(document), indent=2), encoding="utf-8")
    print(f"Wrote {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
