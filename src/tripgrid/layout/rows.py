from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

import numpy as np

from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.days import DayWindow
from tripgrid.items.model import TimedItem, split_by_kind, valid_range

logger = logging.getLogger(__name__)

BAR_INSET_PX = 2.0
BAR_TOP_OFFSET_PX = 4.0
BAR_HEIGHT_PX = 20.0

RowAssignment = dict[str, int]


def bar_days(item: TimedItem) -> Optional[tuple[date, date]]:
    """Whole UTC days covered by a span item, inclusive at both ends."""
    rng = valid_range(item)
    if rng is None:
        return None
    return rng[0].date(), rng[1].date()


@dataclass(frozen=True, slots=True)
class BarPlacement:
    item: TimedItem
    row: int
    first_day_index: int
    last_day_index: int

    @property
    def day_count(self) -> int:
        return self.last_day_index - self.first_day_index + 1

    def left_px(self, day_width: float) -> float:
        return self.first_day_index * day_width + BAR_INSET_PX

    def width_px(self, day_width: float) -> float:
        return max(0.0, self.day_count * day_width - 2 * BAR_INSET_PX)

    def top_px(self, config: Optional[GridConfig] = None) -> float:
        config = config or DEFAULT_CONFIG
        return self.row * config.row_height_px + BAR_TOP_OFFSET_PX


@dataclass(frozen=True)
class RowLayout:
    bars: list[BarPlacement] = field(default_factory=list)
    row_count: int = 0
    has_spans: bool = False

    @property
    def rows(self) -> RowAssignment:
        return {bar.item.id: bar.row for bar in self.bars}

    def band_height(self, config: Optional[GridConfig] = None) -> float:
        """Height of the row band; zero when the trip has no spans at all."""
        config = config or DEFAULT_CONFIG
        if not self.has_spans:
            return 0.0
        return max(
            config.row_band_min_px,
            self.row_count * config.row_height_px + config.row_band_padding_px,
        )


def pack_rows(items: Iterable[TimedItem], window: DayWindow) -> RowLayout:
    """
    Place multi-day bars on the fewest rows.

    Bars visible in ``window`` are taken in start order; each one goes to the
    lowest row whose last bar ended strictly before it starts, otherwise to a
    new row.  Sorting by start and reusing a freed row is optimal interval
    partitioning, so the row count equals the peak number of overlapping bars.
    """
    _, spans = split_by_kind(items)

    visible: list[tuple[TimedItem, date, date]] = []
    for item in spans:
        days = bar_days(item)
        if days is None:
            continue
        first, last = days
        if first <= window.last and last >= window.first:
            visible.append((item, first, last))
    visible.sort(key=lambda entry: entry[1])

    row_ends = np.empty(0, dtype=np.int64)
    bars: list[BarPlacement] = []
    for item, first, last in visible:
        free = np.flatnonzero(row_ends < first.toordinal())
        if free.size:
            row = int(free[0])
            row_ends[row] = last.toordinal()
        else:
            row = len(row_ends)
            row_ends = np.append(row_ends, last.toordinal())

        bars.append(
            BarPlacement(
                item=item,
                row=row,
                first_day_index=max(0, (first - window.first).days),
                last_day_index=min(len(window) - 1, (last - window.first).days),
            )
        )

    logger.debug("Packed %d of %d span items into %d rows", len(bars), len(spans), len(row_ends))
    return RowLayout(bars=bars, row_count=len(row_ends), has_spans=bool(spans))
