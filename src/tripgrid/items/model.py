from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ItemKind(enum.Enum):
    TRAVEL = "travel"
    FOOD = "food"
    ACTIVITY = "activity"
    ACCOMMODATION = "accommodation"

    @property
    def is_span(self) -> bool:
        """True for kinds drawn as whole-day bars in the row band."""
        return _SPAN_KINDS[self]


# Every kind must appear here.
_SPAN_KINDS: dict[ItemKind, bool] = {
    ItemKind.TRAVEL: False,
    ItemKind.FOOD: False,
    ItemKind.ACTIVITY: False,
    ItemKind.ACCOMMODATION: True,
}


class AccommodationCategory(enum.Enum):
    HOTEL = "hotel"
    HOSTEL = "hostel"
    AIRBNB = "airbnb"
    RESORT = "resort"
    OTHER = "other"


KIND_COLORS: dict[ItemKind, str] = {
    ItemKind.TRAVEL: "var(--chart-1)",
    ItemKind.FOOD: "var(--chart-3)",
    ItemKind.ACTIVITY: "var(--chart-2)",
    ItemKind.ACCOMMODATION: "var(--chart-4)",
}

CATEGORY_COLORS: dict[AccommodationCategory, str] = {
    AccommodationCategory.HOTEL: "var(--chart-4)",
    AccommodationCategory.HOSTEL: "var(--chart-5)",
    AccommodationCategory.AIRBNB: "var(--chart-1)",
    AccommodationCategory.RESORT: "var(--chart-2)",
    AccommodationCategory.OTHER: "var(--chart-3)",
}


@dataclass(frozen=True, slots=True)
class TimedItem:
    """
    A start/end-bounded entry owned by the host.

    ``start``/``end`` hold whatever the host supplies; layout code skips
    items whose range does not parse (see :func:`valid_range`).
    """

    id: str
    start: Any
    end: Any
    kind: ItemKind = ItemKind.ACTIVITY
    title: str = ""
    category: Optional[AccommodationCategory] = None

    def with_range(self, start: datetime, end: datetime) -> "TimedItem":
        return dataclasses.replace(self, start=start, end=end)

    @property
    def color(self) -> str:
        if self.kind.is_span and self.category is not None:
            return CATEGORY_COLORS[self.category]
        return KIND_COLORS[self.kind]


def as_utc(value: Any) -> datetime | None:
    """Return ``value`` as an aware UTC datetime, or None when it is not one."""
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def valid_range(item: TimedItem) -> tuple[datetime, datetime] | None:
    start, end = as_utc(item.start), as_utc(item.end)
    if start is None or end is None or end < start:
        logger.debug("Skipping item %r with invalid range %r..%r", item.id, item.start, item.end)
        return None
    return start, end


def day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def epoch_us(instant: datetime) -> int:
    """Microseconds since the Unix epoch; exact, unlike ``timestamp()``."""
    return (instant - EPOCH) // timedelta(microseconds=1)


def split_by_kind(items: Iterable[TimedItem]) -> tuple[list[TimedItem], list[TimedItem]]:
    """Partition ``items`` into (grid events, row-band spans), preserving order."""
    events: list[TimedItem] = []
    spans: list[TimedItem] = []
    for item in items:
        if not isinstance(item.kind, ItemKind):
            logger.debug("Skipping item %r with unknown kind %r", item.id, item.kind)
            continue
        (spans if item.kind.is_span else events).append(item)
    return events, spans
