from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Iterator, Optional, Union

from tripgrid.items.model import TimedItem, as_utc, valid_range

from ._exceptions import GridError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

WEEK_LENGTH = 7


def utc_date(value: DateLike) -> date:
    """Calendar day of ``value`` in UTC; naive datetimes are read as UTC."""
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class DayWindow:
    """
    Contiguous, ordered run of UTC calendar days shown by the grid.

    ``bounded`` records whether the window came from trip bounds rather than
    from the items themselves; only bounded windows can restrict navigation.
    """

    days: tuple[date, ...]
    bounded: bool = False

    def __post_init__(self) -> None:
        if not self.days:
            raise GridError("A day window needs at least one day.")
        one = timedelta(days=1)
        for prev, cur in zip(self.days, self.days[1:]):
            if cur - prev != one:
                raise GridError(f"Days must be contiguous and ascending; got {prev} then {cur}.")

    # ── construction ─────────────────────────────────────────────────────

    @classmethod
    def span(cls, first: date, count: int, bounded: bool = False) -> "DayWindow":
        return cls(tuple(first + timedelta(days=i) for i in range(max(1, count))), bounded)

    @classmethod
    def from_bounds(cls, start: DateLike, end: DateLike) -> "DayWindow":
        first, last = utc_date(start), utc_date(end)
        return cls.span(first, (last - first).days + 1, bounded=True)

    @classmethod
    def around_items(
        cls,
        items: Iterable[TimedItem],
        today: Optional[date] = None,
    ) -> "DayWindow":
        starts = [rng[0] for rng in map(valid_range, items) if rng is not None]
        if not starts:
            logger.debug("No dated items; window starts today")
        first = min(starts).date() if starts else (today or today_utc())
        return cls.span(first, WEEK_LENGTH)

    @classmethod
    def build(
        cls,
        items: Iterable[TimedItem],
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        today: Optional[date] = None,
    ) -> "DayWindow":
        if start is not None and end is not None:
            return cls.from_bounds(start, end)
        return cls.around_items(items, today)

    # ── lookup ───────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[date]:
        return iter(self.days)

    def __getitem__(self, index: int) -> date:
        return self.days[index]

    @property
    def first(self) -> date:
        return self.days[0]

    @property
    def last(self) -> date:
        return self.days[-1]

    def day_at(self, index: int) -> date:
        """Day for ``index``, extrapolated past either end of the window."""
        return self.first + timedelta(days=index)

    def index_of(self, day: DateLike) -> Optional[int]:
        offset = (utc_date(day) - self.first).days
        return offset if 0 <= offset < len(self.days) else None

    def contains(self, day: DateLike) -> bool:
        return self.index_of(day) is not None

    def restricts_navigation(self, below_days: int = WEEK_LENGTH) -> bool:
        """Short bounded trips pin navigation to the trip's own days."""
        return self.bounded and len(self.days) < below_days

    def is_enabled(self, day: DateLike, restrict: bool) -> bool:
        return not restrict or self.contains(day)

    def __repr__(self) -> str:
        return (
            f"DayWindow(first={self.first.isoformat()}, "
            f"days={len(self.days)}, bounded={self.bounded})"
        )
