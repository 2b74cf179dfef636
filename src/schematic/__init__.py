"""Schematic editor core — document model, wire router, edit maintenance.

Subpackages:
  document   Records, parsing, serialization, undo/redo history.
  router     Grid, obstacles, occupied edges, nets, A* pathfinder.
  editor     Collision checks, maintenance passes, editor facade.
"""
