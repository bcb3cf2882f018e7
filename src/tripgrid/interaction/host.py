from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol

from tripgrid.items.model import ItemKind, TimedItem


@dataclass(frozen=True, slots=True)
class CreationRequest:
    """A new span the host should open its creation form with."""

    day_index: int
    start: datetime
    end: datetime
    kind: ItemKind = ItemKind.ACTIVITY

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class CommitRequest:
    """
    Final range of a moved or resized item.

    ``previous_start``/``previous_end`` hold the range the item had before
    the gesture, so a host whose store rejects the write can restore it.
    """

    item_id: str
    start: datetime
    end: datetime
    previous_start: datetime
    previous_end: datetime


class CalendarHost(Protocol):
    """
    Outbound calls made by the calendar.  Return values are ignored; an
    asynchronous host schedules its own work and never blocks a handler.
    """

    def request_create(self, request: CreationRequest) -> Any: ...

    def apply_optimistic_update(self, item_id: str, start: datetime, end: datetime) -> Any: ...

    def request_commit_move(self, commit: CommitRequest) -> Any: ...

    def request_open_details(self, item: TimedItem) -> Any: ...

    def on_visible_day_index_change(self, index: int) -> Any: ...
