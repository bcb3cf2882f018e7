"""
tripgrid.grid
~~~~~~~~~~~~~

The coordinate system of the day grid: which calendar days are shown, how a
pointer's vertical offset maps to a time of day, and how such times snap to
the 15-minute scheduling granularity.

Basic usage::

    from datetime import date
    from tripgrid.grid import CoordinateMapper, DayWindow, floor_to_step

    window = DayWindow.from_bounds(date(2026, 1, 1), date(2026, 1, 10))
    mapper = CoordinateMapper(window, hour_height=48)
    raw    = mapper.pixel_to_time(0, 130)           # 2026-01-01 02:42 UTC
    start  = floor_to_step(raw)                     # 2026-01-01 02:30 UTC

NumPy arrays are accepted for pixel math::

    import numpy as np
    mapper.pixel_to_minutes(np.array([0, 12, 130]))  # array([0, 15, 162])

Public API
----------
GridConfig        Frozen layout constants.
DayWindow         Ordered, contiguous run of UTC days.
CoordinateMapper  Pixel <-> time conversion for one day column.
floor_to_step     Round down to the snap boundary.
ceil_to_step      Round up to the snap boundary.
clamp_to_day      Clamp an instant into its day.
GridError         Base exception for invalid configuration.
"""

from __future__ import annotations

from tripgrid.grid._exceptions import GridError
from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.days import DayWindow, utc_date
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.grid.quantize import ceil_to_step, clamp_to_day, day_bounds, floor_to_step

__all__ = [
    "DEFAULT_CONFIG",
    "CoordinateMapper",
    "DayWindow",
    "GridConfig",
    "GridError",
    "ceil_to_step",
    "clamp_to_day",
    "day_bounds",
    "floor_to_step",
    "utc_date",
]
