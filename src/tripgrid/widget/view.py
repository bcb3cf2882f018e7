from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.days import DateLike, DayWindow
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.interaction.drag import DragController, ResizeEdge
from tripgrid.interaction.host import CalendarHost, CommitRequest, CreationRequest
from tripgrid.interaction.selection import SelectionMachine, SelectionPhase
from tripgrid.items.model import TimedItem
from tripgrid.layout.blocks import BlockPlacement, layout_day
from tripgrid.layout.rows import RowLayout, pack_rows
from tripgrid.viewport.sync import NavigationHandle, Pane, ViewportSync

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionPreview:
    day_index: int
    top_px: float
    height_px: float


@dataclass(frozen=True)
class RenderedWeek:
    window: DayWindow
    blocks: tuple[tuple[BlockPlacement, ...], ...]
    rows: RowLayout
    band_height_px: float
    day_width_px: float
    disabled_days: frozenset[int]
    selection: Optional[SelectionPreview] = None


class CalendarView:
    """
    The interactive week grid.

    Owns the day window, the coordinate mapper, the viewport and both gesture
    state machines, and routes pointer input between them: a press on a block
    starts a drag, a press on empty grid starts a selection, and clicks that
    merely finish either gesture are swallowed.
    """

    def __init__(
        self,
        items: Iterable[TimedItem],
        host: CalendarHost,
        *,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        restrict: Optional[bool] = None,
        read_only: bool = False,
        mobile: bool = False,
        config: Optional[GridConfig] = None,
        today: Optional[date] = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._items = list(items)
        self._host = host
        self._today = today

        window = DayWindow.build(self._items, start, end, today)
        if restrict is None:
            restrict = window.restricts_navigation(self._config.restrict_below_days)
        self._restrict = restrict
        logger.debug("Calendar over %r, restrict=%s, read_only=%s", window, restrict, read_only)

        self.mapper = CoordinateMapper(window, self._config.hour_height_px)
        self.viewport = ViewportSync(
            len(window),
            host,
            self._config,
            restrict=restrict,
            bounded_days=len(window) if window.bounded else None,
            mobile=mobile,
        )
        self.selection = SelectionMachine(
            self.mapper, host, self._config, read_only=read_only, restrict=restrict
        )
        self.drag = DragController(
            self.mapper, self.viewport, host, self._config, read_only=read_only, restrict=restrict
        )
        self._blocks: dict[int, list[BlockPlacement]] = {}
        self.viewport.auto_scroll(self._items, self.mapper)

    # ── item snapshots ───────────────────────────────────────────────────

    @property
    def window(self) -> DayWindow:
        return self.mapper.window

    @property
    def handle(self) -> NavigationHandle:
        return self.viewport.handle

    def update_items(self, items: Iterable[TimedItem]) -> None:
        """
        Swap in the host's latest snapshot.

        Without trip bounds the window follows the earliest item, so it is
        re-derived here unless a gesture still refers to day indices of the
        current one.
        """
        self._items = list(items)
        self._blocks.clear()
        logger.debug("Item snapshot replaced with %d items", len(self._items))
        # Optimistic updates arrive mid-drag; only a settled grid re-scrolls.
        if self.drag.active:
            return
        if not self.window.bounded and self.selection.phase is not SelectionPhase.SELECTING:
            self._rebuild_window()
        self.viewport.auto_scroll(self._items, self.mapper)

    def _rebuild_window(self) -> None:
        window = DayWindow.build(self._items, today=self._today)
        if window == self.window:
            return
        logger.debug("Day window moved from %r to %r", self.window, window)
        self.mapper.set_window(window)
        self.viewport.set_total_days(len(window))

    def blocks_for(self, day_index: int) -> list[BlockPlacement]:
        if day_index not in self._blocks:
            self._blocks[day_index] = layout_day(self._items, day_index, self.mapper, self._config)
        return self._blocks[day_index]

    def block_at(
        self, day_index: int, y: float, x_fraction: Optional[float] = None
    ) -> Optional[BlockPlacement]:
        """Block under a pointer at ``y`` (and ``x_fraction`` of the cell width)."""
        hit = None
        for block in self.blocks_for(day_index):
            if not block.top_px <= y < block.top_px + block.height_px:
                continue
            slot = block.slot
            if x_fraction is not None and not slot.left <= x_fraction < slot.left + slot.width:
                continue
            hit = block
        return hit

    def is_day_disabled(self, day_index: int) -> bool:
        return not self.window.is_enabled(self.window.day_at(day_index), self._restrict)

    def render(self) -> RenderedWeek:
        window = self.window
        rows = pack_rows(self._items, window)
        preview = None
        span = self.selection.state.span
        if span is not None:
            geometry = self.selection.preview(span.day_index)
            if geometry is not None:
                preview = SelectionPreview(span.day_index, *geometry)

        return RenderedWeek(
            window=window,
            blocks=tuple(tuple(self.blocks_for(i)) for i in range(len(window))),
            rows=rows,
            band_height_px=rows.band_height(self._config),
            day_width_px=self.viewport.day_width_px,
            disabled_days=frozenset(i for i in range(len(window)) if self.is_day_disabled(i)),
            selection=preview,
        )

    # ── pointer routing ──────────────────────────────────────────────────

    def to_content(self, x: float, y: float) -> tuple[float, float]:
        """Viewport-relative pointer position to content coordinates."""
        return (
            x + self.viewport.scroll_left(Pane.CONTENT),
            y + self.viewport.scroll_top(Pane.CONTENT),
        )

    def cell_pointer_down(self, day_index: int, y: float, x_fraction: Optional[float] = None) -> bool:
        over_item = self.block_at(day_index, y, x_fraction) is not None
        return self.selection.pointer_down(
            day_index, y, over_item=over_item, drag_active=self.drag.active
        )

    def cell_pointer_move(self, day_index: int, y: float) -> None:
        self.selection.pointer_move(day_index, y)

    def cell_pointer_up(self, day_index: int) -> Optional[CreationRequest]:
        return self.selection.pointer_up(day_index)

    def cell_pointer_leave(self, day_index: int) -> None:
        self.selection.pointer_leave(day_index)

    def cell_click(self, day_index: int, y: float) -> Optional[CreationRequest]:
        if self.drag.consume_click():
            return None
        return self.selection.click(day_index, y, drag_active=self.drag.active)

    def block_pointer_down(
        self, block: BlockPlacement, x: float, y: float, edge: Optional[ResizeEdge] = None
    ) -> bool:
        return self.drag.pointer_down(block, x, y, edge)

    def block_click(self, block: BlockPlacement) -> bool:
        return self.drag.click_item(block.item)

    def pointer_move(self, x: float, y: float) -> None:
        if self.drag.active:
            self.drag.pointer_move(x, y)

    def pointer_up(self) -> Optional[CommitRequest]:
        return self.drag.pointer_up()

    def pointer_leave(self) -> Optional[CommitRequest]:
        return self.drag.pointer_leave()

    def __repr__(self) -> str:
        return (
            f"CalendarView(window={self.window!r}, items={len(self._items)}, "
            f"restrict={self._restrict}, selection={self.selection.phase.value!r}, "
            f"dragging={self.drag.active})"
        )
