from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.grid.quantize import day_bounds
from tripgrid.items.model import DAY, TimedItem, split_by_kind, valid_range

from .columns import ColumnSlot, pack_columns

MINUTE = timedelta(minutes=1)


@dataclass(frozen=True, slots=True)
class BlockPlacement:
    """Where one grid event is drawn inside one day column."""

    item: TimedItem
    day_index: int
    display_start: datetime
    display_end: datetime
    top_px: float
    height_px: float
    overflow_px: float
    slot: ColumnSlot
    shows_time: bool
    has_resize_handles: bool

    @property
    def continues_before(self) -> bool:
        return self.overflow_px > 0


def items_for_day(
    items: Iterable[TimedItem], day: date
) -> list[tuple[TimedItem, datetime, datetime]]:
    """Grid events intersecting ``day`` with their range clipped to it."""
    lo, last = day_bounds(day)
    hi = lo + DAY
    events, _ = split_by_kind(items)

    clipped = []
    for item in events:
        rng = valid_range(item)
        if rng is None:
            continue
        start, end = rng
        if start < hi and end > lo:
            clipped.append((item, max(start, lo), last if end >= hi else end))
    return clipped


def layout_day(
    items: Iterable[TimedItem],
    day_index: int,
    mapper: CoordinateMapper,
    config: Optional[GridConfig] = None,
) -> list[BlockPlacement]:
    config = config or DEFAULT_CONFIG
    day = mapper.window.day_at(day_index)
    clipped = items_for_day(items, day)
    slots = pack_columns([item.with_range(s, e) for item, s, e in clipped])

    placements = []
    for item, start, end in clipped:
        minutes = (end - start) / MINUTE
        if minutes > 0:
            height = max(config.min_block_height_px, mapper.minutes_to_pixel(minutes))
        else:
            height = config.point_block_height_px
        before = (start - valid_range(item)[0]) / MINUTE

        placements.append(
            BlockPlacement(
                item=item,
                day_index=day_index,
                display_start=start,
                display_end=end,
                top_px=mapper.time_to_pixel(start),
                height_px=height,
                overflow_px=mapper.minutes_to_pixel(before),
                slot=slots[item.id],
                shows_time=height >= config.time_label_min_px,
                has_resize_handles=height >= config.resize_handle_min_px,
            )
        )
    return placements
