"""
tripgrid.widget
~~~~~~~~~~~~~~~

:class:`CalendarView` wires the grid, the packers, the viewport and the
gesture controllers into one interactive week view.

Basic usage::

    from tripgrid.widget import CalendarView

    view = CalendarView(items, host, start=trip_start, end=trip_end)
    view.viewport.measure(container_width=780)
    frame = view.render()                 # blocks, bars, band height, ...

    view.cell_pointer_down(0, 432)        # press on empty grid at 09:00
    view.cell_pointer_move(0, 480)
    view.cell_pointer_up(0)               # host.request_create(...)
    view.cell_click(0, 480)               # trailing click, swallowed
"""

from __future__ import annotations

from tripgrid.widget.view import CalendarView, RenderedWeek, SelectionPreview

__all__ = [
    "CalendarView",
    "RenderedWeek",
    "SelectionPreview",
]
