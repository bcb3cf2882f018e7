"""
tripgrid.viewport
~~~~~~~~~~~~~~~~~

Keeps the day header, the all-day band and the content grid scrolled to the
same horizontal offset, mirrors the content pane's vertical offset onto the
time ruler, and tracks which day is first on screen.

Basic usage::

    from tripgrid.viewport import Pane, ViewportSync

    sync = ViewportSync(total_days=14, listener=host)
    sync.measure(container_width=780)        # day width = (780 - 80) / 7
    sync.scroll(Pane.CONTENT, left=310)
    sync.settle()                            # → 3, host is notified
    sync.handle.page_by(1)                   # → 4
"""

from __future__ import annotations

from tripgrid.viewport.sync import (
    HORIZONTAL_PANES,
    NavigationHandle,
    Pane,
    ViewportState,
    ViewportSync,
    VisibleDayListener,
)

__all__ = [
    "HORIZONTAL_PANES",
    "NavigationHandle",
    "Pane",
    "ViewportState",
    "ViewportSync",
    "VisibleDayListener",
]
