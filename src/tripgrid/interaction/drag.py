from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Optional

from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.grid.quantize import ceil_to_step, floor_to_step
from tripgrid.items.model import TimedItem, day_start, valid_range
from tripgrid.layout.blocks import BlockPlacement

from .host import CalendarHost, CommitRequest

if TYPE_CHECKING:
    from tripgrid.viewport.sync import ViewportSync

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


class ResizeEdge(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"


class DragMode(enum.Enum):
    MOVING = "moving"
    RESIZING_TOP = "resizing_top"
    RESIZING_BOTTOM = "resizing_bottom"


_EDGE_MODES: dict[Optional[ResizeEdge], DragMode] = {
    None: DragMode.MOVING,
    ResizeEdge.TOP: DragMode.RESIZING_TOP,
    ResizeEdge.BOTTOM: DragMode.RESIZING_BOTTOM,
}


@dataclass(frozen=True, slots=True)
class DragState:
    item: TimedItem
    day_index: int
    mode: DragMode
    anchor_offset_px: float
    overflow_px: float
    origin_x: float
    origin_y: float
    original_start: datetime
    original_end: datetime
    start: datetime
    end: datetime
    has_moved: bool = False

    @property
    def changed(self) -> bool:
        return (self.start, self.end) != (self.original_start, self.original_end)

    @property
    def duration(self) -> timedelta:
        return self.original_end - self.original_start


class DragController:
    """
    Move and resize gestures on existing grid blocks.

    Pointer coordinates are content coordinates: offsets from the top-left of
    the scrolled day grid, scroll offsets included.  Every accepted move is
    pushed to the host as an optimistic update; the final range is committed
    once, on release.
    """

    def __init__(
        self,
        mapper: CoordinateMapper,
        viewport: "ViewportSync",
        host: CalendarHost,
        config: Optional[GridConfig] = None,
        *,
        read_only: bool = False,
        restrict: bool = False,
    ) -> None:
        self._mapper = mapper
        self._viewport = viewport
        self._host = host
        self._config = config or DEFAULT_CONFIG
        self._read_only = read_only
        self._restrict = restrict
        self._state: Optional[DragState] = None
        self._settling = False

    # ── gesture start ────────────────────────────────────────────────────

    def pointer_down(
        self,
        placement: BlockPlacement,
        x: float,
        y: float,
        edge: Optional[ResizeEdge] = None,
    ) -> bool:
        if self._read_only or self._state is not None:
            return False
        if edge is not None and not placement.has_resize_handles:
            return False
        rng = valid_range(placement.item)
        if rng is None:
            return False

        self._settling = False
        self._state = DragState(
            item=placement.item,
            day_index=placement.day_index,
            mode=_EDGE_MODES[edge],
            anchor_offset_px=y - placement.top_px,
            overflow_px=placement.overflow_px,
            origin_x=x,
            origin_y=y,
            original_start=rng[0],
            original_end=rng[1],
            start=rng[0],
            end=rng[1],
        )
        logger.debug("Drag %s started on %r", self._state.mode.value, placement.item.id)
        return True

    # ── gesture progress ─────────────────────────────────────────────────

    def pointer_move(self, x: float, y: float) -> Optional[DragState]:
        state = self._state
        if state is None:
            return None

        if not state.has_moved:
            threshold = self._config.drag_threshold_px
            if abs(x - state.origin_x) <= threshold and abs(y - state.origin_y) <= threshold:
                return state
            state = dataclasses.replace(state, has_moved=True)
            self._state = state

        if state.mode is DragMode.MOVING:
            rng = self._moved_range(state, x, y)
        else:
            rng = self._resized_range(state, y)
        if rng is None or rng == (state.start, state.end):
            return state

        self._state = dataclasses.replace(state, start=rng[0], end=rng[1])
        self._host.apply_optimistic_update(state.item.id, rng[0], rng[1])
        return self._state

    def _moved_range(
        self, state: DragState, x: float, y: float
    ) -> Optional[tuple[datetime, datetime]]:
        base = self._mapper.day_index_at(x, self._viewport.day_width_px)
        if base is None:
            return None
        minutes = self._mapper.pixel_to_minutes(y - state.anchor_offset_px - state.overflow_px)
        day_offset, minute_of_day = divmod(minutes, MINUTES_PER_DAY)

        window = self._mapper.window
        day = window.day_at(base + day_offset)
        if not window.is_enabled(day, self._restrict):
            return None
        start = day_start(day) + timedelta(minutes=minute_of_day)
        return start, start + state.duration

    def _resized_range(self, state: DragState, y: float) -> Optional[tuple[datetime, datetime]]:
        window = self._mapper.window
        if not window.is_enabled(window.day_at(state.day_index), self._restrict):
            return None
        y = min(max(y, 0.0), self._mapper.day_height_px)
        at = self._mapper.pixel_to_time(state.day_index, y)
        step = self._config.snap_minutes

        if state.mode is DragMode.RESIZING_TOP:
            start = floor_to_step(at, step)
            return (start, state.original_end) if start < state.original_end else None
        end = ceil_to_step(at, step)
        return (state.original_start, end) if end > state.original_start else None

    # ── gesture end ──────────────────────────────────────────────────────

    def pointer_up(self) -> Optional[CommitRequest]:
        return self._finish(settle=True)

    def pointer_leave(self) -> Optional[CommitRequest]:
        """Commit like a release; no click follows, so nothing is left to swallow."""
        return self._finish(settle=False)

    def _finish(self, settle: bool) -> Optional[CommitRequest]:
        state = self._state
        if state is None:
            return None
        self._state = None
        self._settling = settle and state.has_moved

        if not state.changed:
            logger.debug("Drag on %r ended without a change", state.item.id)
            return None
        commit = CommitRequest(
            item_id=state.item.id,
            start=state.start,
            end=state.end,
            previous_start=state.original_start,
            previous_end=state.original_end,
        )
        logger.debug(
            "Committing %r: %s..%s", commit.item_id, commit.start.isoformat(), commit.end.isoformat()
        )
        self._host.request_commit_move(commit)
        return commit

    # ── clicks ───────────────────────────────────────────────────────────

    def consume_click(self) -> bool:
        """True when a click belongs to a drag gesture and must be ignored."""
        if self._state is not None and self._state.has_moved:
            return True
        if self._settling:
            self._settling = False
            return True
        return False

    def click_item(self, item: TimedItem) -> bool:
        """Open details for ``item`` unless the click ends a drag."""
        if self.consume_click():
            return False
        self._host.request_open_details(item)
        return True

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def state(self) -> Optional[DragState]:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is not None

    @property
    def suppresses_clicks(self) -> bool:
        return self._settling or (self._state is not None and self._state.has_moved)

    def __repr__(self) -> str:
        mode = self._state.mode.value if self._state else None
        return f"DragController(mode={mode!r}, settling={self._settling})"
