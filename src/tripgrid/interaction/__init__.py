"""
tripgrid.interaction
~~~~~~~~~~~~~~~~~~~~

Pointer gesture state machines.  Both controllers hold one explicit state
value, advance it only from their pointer handlers, and talk to the outside
world through a :class:`CalendarHost`.

* :class:`SelectionMachine`: press, drag and release on an empty cell to
  create a 15-minute-aligned span.
* :class:`DragController`: move a block or drag one of its edges, with
  optimistic updates while moving and a single commit on release.

Public API
----------
CalendarHost       Protocol of the outbound calls.
CreationRequest    Span handed to ``request_create``.
CommitRequest      Final range handed to ``request_commit_move``.
SelectionMachine   Creation gesture.
DragController     Move/resize gesture.
"""

from __future__ import annotations

from tripgrid.interaction.drag import DragController, DragMode, DragState, ResizeEdge
from tripgrid.interaction.host import CalendarHost, CommitRequest, CreationRequest
from tripgrid.interaction.selection import (
    SelectionMachine,
    SelectionPhase,
    SelectionSpan,
    SelectionState,
    normalize_span,
)

__all__ = [
    "CalendarHost",
    "CommitRequest",
    "CreationRequest",
    "DragController",
    "DragMode",
    "DragState",
    "ResizeEdge",
    "SelectionMachine",
    "SelectionPhase",
    "SelectionSpan",
    "SelectionState",
    "normalize_span",
]
