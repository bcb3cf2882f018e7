from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Protocol

from tripgrid.grid._exceptions import GridError
from tripgrid.grid.config import DEFAULT_CONFIG, GridConfig
from tripgrid.grid.mapper import CoordinateMapper
from tripgrid.items.model import TimedItem, split_by_kind, valid_range

logger = logging.getLogger(__name__)


class Pane(enum.Enum):
    HEADER = "header"
    RULER = "ruler"
    ALL_DAY = "all_day"
    CONTENT = "content"


# Panes that scroll sideways together; the ruler only follows the content
# pane vertically.
HORIZONTAL_PANES = frozenset({Pane.HEADER, Pane.ALL_DAY, Pane.CONTENT})


class VisibleDayListener(Protocol):
    def on_visible_day_index_change(self, index: int) -> Any: ...


@dataclass(frozen=True, slots=True)
class ViewportState:
    day_width_px: float
    visible_day_count: int
    first_visible_day_index: int


@dataclass(frozen=True, slots=True)
class NavigationHandle:
    """Paging controls handed to whoever draws the previous/next buttons."""

    page_by: Callable[[int], int]
    scroll_to_index: Callable[[int], int]


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


class ViewportSync:
    """
    Shared horizontal scroll state of the calendar panes.

    Owns the day width, the horizontal offset every day-aligned pane shows,
    per-pane vertical offsets, and the index of the first visible day.
    """

    def __init__(
        self,
        total_days: int,
        listener: VisibleDayListener,
        config: Optional[GridConfig] = None,
        *,
        restrict: bool = False,
        bounded_days: Optional[int] = None,
        mobile: bool = False,
    ) -> None:
        if total_days < 1:
            raise GridError(f"total_days must be at least 1; got {total_days}.")
        self._config = config or DEFAULT_CONFIG
        self._listener = listener
        self._total_days = total_days
        self._restrict = restrict
        self._bounded_days = bounded_days
        self._mobile = mobile

        self._container_width = 0.0
        self._day_width = 0.0
        self._scroll_left = 0.0
        self._scroll_top: dict[Pane, float] = {pane: 0.0 for pane in Pane}
        self._first_visible = 0

        self.handle = NavigationHandle(page_by=self.page_by, scroll_to_index=self.scroll_to_index)

    # ── measurement ──────────────────────────────────────────────────────

    @property
    def visible_day_count(self) -> int:
        c = self._config
        return c.visible_days_mobile if self._mobile else c.visible_days

    def measure(self, container_width: float) -> float:
        """
        Recompute the day width from the container width.  Widths that leave
        no room next to the time gutter are ignored, keeping the last valid
        day width (zero before the first valid measurement).
        """
        self._container_width = container_width
        available = container_width - self._config.left_gutter_px
        if available <= 0:
            logger.debug("Ignoring unusable container width %r", container_width)
            return self._day_width
        self._day_width = available / self.visible_day_count
        self._scroll_left = self._clamp_left(self._first_visible * self._day_width)
        return self._day_width

    def set_mobile(self, mobile: bool) -> None:
        if mobile == self._mobile:
            return
        self._mobile = mobile
        self.measure(self._container_width)

    def set_total_days(self, total_days: int, bounded_days: Optional[int] = None) -> None:
        if total_days < 1:
            raise GridError(f"total_days must be at least 1; got {total_days}.")
        self._total_days = total_days
        self._bounded_days = bounded_days
        self.scroll_to_index(self._first_visible)

    # ── scrolling ────────────────────────────────────────────────────────

    def _clamp_left(self, left: float) -> float:
        hi = max(0.0, (self._total_days - self.visible_day_count) * self._day_width)
        return min(max(left, 0.0), hi)

    def scroll(self, pane: Pane, left: Optional[float] = None, top: Optional[float] = None) -> None:
        """Apply a native scroll of ``pane`` and mirror it onto its peers."""
        if left is not None and pane in HORIZONTAL_PANES:
            self._scroll_left = self._clamp_left(left)
        if top is not None:
            self._scroll_top[pane] = max(0.0, top)
            if pane is Pane.CONTENT:
                self._scroll_top[Pane.RULER] = self._scroll_top[Pane.CONTENT]

    def scroll_left(self, pane: Pane) -> float:
        return self._scroll_left if pane in HORIZONTAL_PANES else 0.0

    def scroll_top(self, pane: Pane) -> float:
        return self._scroll_top[pane]

    def wheel(
        self,
        dx: float,
        dy: float,
        shift: bool = False,
        content_height: Optional[float] = None,
        viewport_height: Optional[float] = None,
    ) -> bool:
        """
        Route a wheel gesture; returns True when it scrolled sideways.

        Sideways when there is horizontal delta, when shift is held, or when
        the content pane is already at its top/bottom edge in the wheel's
        direction.
        """
        top = self._scroll_top[Pane.CONTENT]
        at_top = top == 0 and dy < 0
        at_bottom = (
            content_height is not None
            and viewport_height is not None
            and top >= content_height - viewport_height
            and dy > 0
        )

        if dx != 0 or shift or at_top or at_bottom:
            amount = dx or (dy if shift else dy * self._config.wheel_vertical_factor)
            self._scroll_left = self._clamp_left(self._scroll_left + amount)
            return True

        new_top = top + dy
        if content_height is not None and viewport_height is not None:
            new_top = min(new_top, max(0.0, content_height - viewport_height))
        self.scroll(Pane.CONTENT, top=new_top)
        return False

    # ── day index ────────────────────────────────────────────────────────

    def settle(self) -> int:
        """Recompute the first visible day once scrolling has come to rest."""
        if self._day_width <= 0:
            return self._first_visible
        self._set_first_visible(_round_half_up(self._scroll_left / self._day_width))
        return self._first_visible

    def _set_first_visible(self, index: int) -> None:
        if index == self._first_visible:
            return
        self._first_visible = index
        logger.debug("First visible day is now %d", index)
        self._listener.on_visible_day_index_change(index)

    def bounds(self) -> tuple[int, int]:
        hi = max(0, self._total_days - self.visible_day_count)
        if self._restrict and self._bounded_days:
            last_in_range = max(0, min(self._total_days - 1, self._bounded_days - 1))
            hi = max(0, last_in_range - self.visible_day_count + 1)
        return 0, hi

    def scroll_to_index(self, index: int) -> int:
        lo, hi = self.bounds()
        clamped = max(lo, min(hi, index))
        if clamped != index:
            logger.debug("Clamped day index %d to %d", index, clamped)
        self._scroll_left = self._clamp_left(clamped * self._day_width)
        self._set_first_visible(clamped)
        return clamped

    def page_by(self, days: int) -> int:
        return self.scroll_to_index(self.settle() + days)

    def swipe(self, dx: float, dy: float) -> Optional[int]:
        """Page by one day for a horizontal swipe on the header (mobile only)."""
        if not self._mobile:
            return None
        if abs(dx) > abs(dy) and abs(dx) > self._config.swipe_threshold_px:
            return self.page_by(1 if dx < 0 else -1)
        return None

    def auto_scroll(self, items: Iterable[TimedItem], mapper: CoordinateMapper) -> Optional[float]:
        """Scroll the content pane so the earliest grid event sits near the top."""
        events, _ = split_by_kind(items)
        starts = [rng[0] for rng in map(valid_range, events) if rng is not None]
        if not starts:
            return None
        top = max(0.0, mapper.time_to_pixel(min(starts)) - self._config.auto_scroll_padding_px)
        self.scroll(Pane.CONTENT, top=top)
        return top

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def day_width_px(self) -> float:
        return self._day_width

    @property
    def first_visible_day_index(self) -> int:
        return self._first_visible

    @property
    def total_days(self) -> int:
        return self._total_days

    @property
    def state(self) -> ViewportState:
        return ViewportState(self._day_width, self.visible_day_count, self._first_visible)

    def __repr__(self) -> str:
        return (
            f"ViewportSync(day_width={self._day_width}, "
            f"visible={self.visible_day_count}, "
            f"first_visible={self._first_visible}, "
            f"total_days={self._total_days})"
        )
