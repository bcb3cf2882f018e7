"""
tests/items/test_items.py

Covers:
  - exhaustive kind tables
  - range validation and UTC normalization
  - split into grid events and row-band spans
"""

from datetime import datetime, timedelta, timezone

import pytest

from tripgrid.items import (
    AccommodationCategory,
    ItemKind,
    TimedItem,
    as_utc,
    split_by_kind,
    valid_range,
)
from tripgrid.items.model import CATEGORY_COLORS, KIND_COLORS


def at(h, day=1):
    return datetime(2026, 1, day, h, tzinfo=timezone.utc)


# ── Kind tables ───────────────────────────────────────────────────────────────

class TestKinds:

    @pytest.mark.parametrize("kind", list(ItemKind))
    def test_every_kind_has_span_flag(self, kind):
        assert isinstance(kind.is_span, bool)

    @pytest.mark.parametrize("kind", list(ItemKind))
    def test_every_kind_has_color(self, kind):
        assert kind in KIND_COLORS

    def test_every_category_has_color(self):
        assert set(CATEGORY_COLORS) == set(AccommodationCategory)

    def test_only_accommodation_is_span(self):
        assert [k for k in ItemKind if k.is_span] == [ItemKind.ACCOMMODATION]

    def test_category_color_for_spans(self):
        stay = TimedItem("s", at(0), at(0, 3), ItemKind.ACCOMMODATION,
                         category=AccommodationCategory.HOSTEL)
        assert stay.color == CATEGORY_COLORS[AccommodationCategory.HOSTEL]

    def test_kind_color_for_events(self):
        assert TimedItem("e", at(9), at(10), ItemKind.FOOD).color == KIND_COLORS[ItemKind.FOOD]


# ── Ranges ────────────────────────────────────────────────────────────────────

class TestValidRange:

    def test_valid(self):
        assert valid_range(TimedItem("e", at(9), at(10))) == (at(9), at(10))

    def test_missing_start(self):
        assert valid_range(TimedItem("e", None, at(10))) is None

    def test_not_a_datetime(self):
        assert valid_range(TimedItem("e", "09:00", at(10))) is None

    def test_end_before_start(self):
        assert valid_range(TimedItem("e", at(10), at(9))) is None

    def test_zero_length_allowed(self):
        assert valid_range(TimedItem("e", at(9), at(9))) == (at(9), at(9))

    def test_naive_read_as_utc(self):
        assert as_utc(datetime(2026, 1, 1, 9)) == at(9)

    def test_offset_converted(self):
        tz = timezone(timedelta(hours=2))
        assert as_utc(datetime(2026, 1, 1, 11, tzinfo=tz)) == at(9)

    def test_with_range_keeps_identity_fields(self):
        e = TimedItem("e", at(9), at(10), ItemKind.TRAVEL, "Train")
        moved = e.with_range(at(11), at(12))
        assert (moved.id, moved.kind, moved.title) == ("e", ItemKind.TRAVEL, "Train")
        assert (moved.start, moved.end) == (at(11), at(12))


# ── Split ─────────────────────────────────────────────────────────────────────

class TestSplitByKind:

    def test_partition(self):
        a = TimedItem("a", at(9), at(10), ItemKind.ACTIVITY)
        s = TimedItem("s", at(0), at(0, 3), ItemKind.ACCOMMODATION)
        f = TimedItem("f", at(12), at(13), ItemKind.FOOD)
        events, spans = split_by_kind([a, s, f])
        assert events == [a, f]
        assert spans == [s]

    def test_unknown_kind_skipped(self):
        odd = TimedItem("x", at(9), at(10), kind="lodging")
        assert split_by_kind([odd]) == ([], [])

    def test_empty(self):
        assert split_by_kind([]) == ([], [])
