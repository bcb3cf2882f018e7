from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

import numpy as np

from tripgrid.items.model import DAY, as_utc, day_start

from ._exceptions import GridError
from .days import DayWindow

ArrayLike = Union[float, "np.ndarray"]


class CoordinateMapper:
    """
    Pixel <-> time conversion for a single day column.

    The only state is the hour height and the day window used to resolve a
    column index to its calendar day.  Pixel inputs accept NumPy arrays
    wherever a scalar is accepted.
    """

    def __init__(self, window: DayWindow, hour_height: float = 48.0) -> None:
        if hour_height <= 0:
            raise GridError(f"hour_height must be positive; got {hour_height}.")
        self._window = window
        self._hour_height = float(hour_height)

    # ── pixels → time ────────────────────────────────────────────────────

    def pixel_to_minutes(self, y: ArrayLike) -> ArrayLike:
        scalar = np.ndim(y) == 0
        yy = np.asarray(y, dtype=np.float64)
        h = self._hour_height

        hour = np.floor(yy / h)
        minute = np.floor(np.mod(yy, h) / h * 60.0)
        total = (hour * 60.0 + minute).astype(np.int64)
        return int(total) if scalar else total

    def pixel_to_time(self, day_index: int, y: float) -> datetime:
        day = self._window.day_at(day_index)
        return day_start(day) + timedelta(minutes=self.pixel_to_minutes(y))

    # ── time → pixels ────────────────────────────────────────────────────

    def minutes_to_pixel(self, minutes: ArrayLike) -> ArrayLike:
        scalar = np.ndim(minutes) == 0
        px = np.asarray(minutes, dtype=np.float64) / 60.0 * self._hour_height
        return float(px) if scalar else px

    def time_to_pixel(self, instant: datetime, day: Optional[date] = None) -> float:
        """
        Offset of ``instant`` from the top of its day column.

        With ``day`` given, instants before that day clamp to 0 and instants
        after it clamp to the full day height.
        """
        t = as_utc(instant)
        if day is not None:
            lo = day_start(day)
            if t <= lo:
                return 0.0
            if t >= lo + DAY:
                return self.day_height_px
        return self.minutes_to_pixel(t.hour * 60 + t.minute)

    # ── columns ──────────────────────────────────────────────────────────

    @staticmethod
    def day_index_at(x: float, day_width: float) -> Optional[int]:
        """Column under horizontal content offset ``x``; None while unmeasured."""
        if day_width <= 0:
            return None
        return math.floor(x / day_width)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def hour_height(self) -> float:
        return self._hour_height

    @property
    def day_height_px(self) -> float:
        return 24 * self._hour_height

    @property
    def window(self) -> DayWindow:
        return self._window

    def set_window(self, window: DayWindow) -> None:
        """Re-point the mapper at ``window``; holders of the mapper follow."""
        self._window = window

    def __repr__(self) -> str:
        return f"CoordinateMapper(hour_height={self._hour_height}, window={self._window!r})"
