"""
tripgrid.items
~~~~~~~~~~~~~~

The item model the host hands to the calendar on every render.  Items are a
tagged union over :class:`ItemKind`: travel, food and activity entries are
laid out on the hourly grid, accommodation entries become whole-day bars in
the row band above it.

Basic usage::

    from datetime import datetime
    from tripgrid.items import ItemKind, TimedItem, split_by_kind

    lunch = TimedItem("e1", datetime(2026, 1, 1, 12), datetime(2026, 1, 1, 13),
                      ItemKind.FOOD, "Lunch")
    events, spans = split_by_kind([lunch])

Public API
----------
TimedItem               Immutable start/end-bounded entry.
ItemKind                Kind tag; ``is_span`` tells grid events from bars.
AccommodationCategory   Lodging sub-type used for bar colours.
split_by_kind           Exhaustive partition into events and spans.
valid_range             UTC-normalized (start, end), or None when malformed.
"""

from __future__ import annotations

from tripgrid.items.model import (
    AccommodationCategory,
    ItemKind,
    TimedItem,
    as_utc,
    split_by_kind,
    valid_range,
)

__all__ = [
    "AccommodationCategory",
    "ItemKind",
    "TimedItem",
    "as_utc",
    "split_by_kind",
    "valid_range",
]
