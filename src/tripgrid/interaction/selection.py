from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.grid.quantize import ceil_to_step, clamp_to_day, floor_to_step
from tripgrid.items.model import DAY, day_start

from .host import CalendarHost, CreationRequest

logger = logging.getLogger(__name__)


class SelectionPhase(enum.Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    # Entered on commit; left by the click the same gesture generates.
    COMMITTED = "committed"


@dataclass(frozen=True, slots=True)
class SelectionSpan:
    day_index: int
    start: datetime
    current: datetime

    def ordered(self) -> tuple[datetime, datetime]:
        if self.current < self.start:
            return self.current, self.start
        return self.start, self.current


@dataclass(frozen=True, slots=True)
class SelectionState:
    phase: SelectionPhase = SelectionPhase.IDLE
    span: Optional[SelectionSpan] = None


IDLE = SelectionState()


def normalize_span(
    span: SelectionSpan, day: date, config: GridConfig = DEFAULT_CONFIG
) -> tuple[datetime, datetime]:
    """
    Ordered (start, end) of a finished selection: at least
    ``min_span_minutes`` long and not running past the end of ``day``.
    """
    start, end = span.ordered()
    min_span = timedelta(minutes=config.min_span_minutes)
    if end - start < min_span:
        end = start + min_span
    day_end = day_start(day) + DAY
    if end > day_end:
        end = day_end
        start = min(start, end - min_span)
    return start, end


class SelectionMachine:
    """
    Click-and-drag creation of a new span on one day column.

    The machine owns a single :class:`SelectionState` value and replaces it
    only from the pointer handlers below.  Pixel arguments are offsets from
    the top of the day cell.
    """

    def __init__(
        self,
        mapper: CoordinateMapper,
        host: CalendarHost,
        config: Optional[GridConfig] = None,
        *,
        read_only: bool = False,
        restrict: bool = False,
    ) -> None:
        self._mapper = mapper
        self._host = host
        self._config = config or DEFAULT_CONFIG
        self._read_only = read_only
        self._restrict = restrict
        self._state = IDLE

    # ── helpers ──────────────────────────────────────────────────────────

    def _enter(self, state: SelectionState) -> None:
        if state.phase is not self._state.phase:
            logger.debug("Selection %s -> %s", self._state.phase.value, state.phase.value)
        self._state = state

    def _usable_day(self, day_index: int) -> Optional[date]:
        window = self._mapper.window
        if not 0 <= day_index < len(window):
            return None
        day = window[day_index]
        return day if window.is_enabled(day, self._restrict) else None

    def _is_live(self, day_index: int) -> bool:
        span = self._state.span
        return (
            self._state.phase is SelectionPhase.SELECTING
            and span is not None
            and span.day_index == day_index
        )

    # ── transitions ──────────────────────────────────────────────────────

    def pointer_down(
        self,
        day_index: int,
        y: float,
        *,
        over_item: bool = False,
        drag_active: bool = False,
    ) -> bool:
        """Start selecting on an empty cell; returns whether it started."""
        if self._read_only or over_item or drag_active:
            return False
        if self._state.phase is SelectionPhase.SELECTING:
            return False
        day = self._usable_day(day_index)
        if day is None:
            return False

        raw = clamp_to_day(day, self._mapper.pixel_to_time(day_index, y))
        start = floor_to_step(raw, self._config.snap_minutes)
        self._enter(SelectionState(SelectionPhase.SELECTING, SelectionSpan(day_index, start, start)))
        return True

    def pointer_move(self, day_index: int, y: float) -> Optional[SelectionSpan]:
        if not self._is_live(day_index):
            return None
        day = self._mapper.window[day_index]
        raw = self._mapper.pixel_to_time(day_index, y)
        current = clamp_to_day(day, ceil_to_step(raw, self._config.snap_minutes))

        span = SelectionSpan(day_index, self._state.span.start, current)
        self._enter(SelectionState(SelectionPhase.SELECTING, span))
        return span

    def pointer_up(self, day_index: int) -> Optional[CreationRequest]:
        if self._state.phase is not SelectionPhase.SELECTING:
            return None
        if not self._is_live(day_index):
            logger.debug("Selection released outside its day; discarded")
            self._enter(IDLE)
            return None

        span = self._state.span
        start, end = normalize_span(span, self._mapper.window[day_index], self._config)
        request = CreationRequest(day_index=day_index, start=start, end=end)
        self._enter(SelectionState(SelectionPhase.COMMITTED))
        logger.debug("Selection committed %s..%s", start.isoformat(), end.isoformat())
        self._host.request_create(request)
        return request

    def pointer_leave(self, day_index: int) -> None:
        if self._is_live(day_index):
            logger.debug("Pointer left day %d mid-selection; discarded", day_index)
            self._enter(IDLE)

    def click(
        self,
        day_index: int,
        y: float,
        *,
        drag_active: bool = False,
    ) -> Optional[CreationRequest]:
        """
        Point creation for a plain click (or keyboard activation) on a cell.
        The click trailing a committed selection is swallowed.
        """
        if self._state.phase is SelectionPhase.COMMITTED:
            self._enter(IDLE)
            return None
        if self._state.phase is SelectionPhase.SELECTING:
            return None
        if self._read_only or drag_active or self._usable_day(day_index) is None:
            return None

        start = self._mapper.pixel_to_time(day_index, y)
        end = start + timedelta(minutes=self._config.default_event_minutes)
        request = CreationRequest(day_index=day_index, start=start, end=end)
        self._host.request_create(request)
        return request

    # ── read-only views ──────────────────────────────────────────────────

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def phase(self) -> SelectionPhase:
        return self._state.phase

    def preview(self, day_index: int) -> Optional[tuple[float, float]]:
        """(top, height) in pixels of the live selection drawn on ``day_index``."""
        if not self._is_live(day_index):
            return None
        start, end = self._state.span.ordered()
        day = self._mapper.window[day_index]
        top = self._mapper.time_to_pixel(start, day)
        bottom = self._mapper.time_to_pixel(end, day)
        return top, max(8.0, bottom - top)

    def __repr__(self) -> str:
        return f"SelectionMachine(phase={self._state.phase.value!r}, span={self._state.span!r})"
