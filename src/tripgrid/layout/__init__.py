"""
tripgrid.layout
~~~~~~~~~~~~~~~

Pure, per-render layout metadata.

* :func:`pack_columns` splits the overlapping events of one day into
  side-by-side columns, ranked per overlap cluster.
* :func:`layout_day` turns a day's events into pixel-positioned blocks.
* :func:`pack_rows` stacks multi-day accommodation bars onto the fewest rows
  of the band above the hourly grid.

Both packers are total: empty input, disjoint items and fully nested items
all yield a valid assignment.

Basic usage::

    from tripgrid.layout import pack_columns, pack_rows

    slots = pack_columns(day_events)      # {"e1": ColumnSlot(0, 2), ...}
    rows  = pack_rows(items, window)      # RowLayout(row_count=2, ...)
    rows.band_height()                    # 56.0
"""

from __future__ import annotations

from tripgrid.layout.blocks import BlockPlacement, items_for_day, layout_day
from tripgrid.layout.columns import ColumnAssignment, ColumnSlot, pack_columns
from tripgrid.layout.rows import BarPlacement, RowAssignment, RowLayout, pack_rows

__all__ = [
    "BarPlacement",
    "BlockPlacement",
    "ColumnAssignment",
    "ColumnSlot",
    "RowAssignment",
    "RowLayout",
    "items_for_day",
    "layout_day",
    "pack_columns",
    "pack_rows",
]
