"""
tests/grid/test_mapper.py

Covers:
  - pixel → minutes / time (scalar and NumPy array)
  - time → pixel, with day clamping
  - column lookup and the unmeasured-width short circuit
  - 15-minute quantization (floor, ceil, idempotence)
  - clamp_to_day
  - GridConfig validation
"""

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from tripgrid.grid import (
    CoordinateMapper,
    DayWindow,
    GridConfig,
    GridError,
    ceil_to_step,
    clamp_to_day,
    floor_to_step,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def window():
    return DayWindow.from_bounds(date(2026, 1, 1), date(2026, 1, 7))


@pytest.fixture
def mapper(window):
    return CoordinateMapper(window, hour_height=48)


def at(h, m=0, s=0, us=0, day=1):
    return datetime(2026, 1, day, h, m, s, us, tzinfo=timezone.utc)


# ── Pixel → time ──────────────────────────────────────────────────────────────

class TestPixelToTime:

    def test_raw_time_from_pixel(self, mapper):
        # 130 px: hour 2, remainder 34 px → minute floor(34/48*60) = 42
        assert mapper.pixel_to_time(0, 130) == at(2, 42)

    def test_selection_start_floored(self, mapper):
        assert floor_to_step(mapper.pixel_to_time(0, 130)) == at(2, 30)

    def test_top_of_day(self, mapper):
        assert mapper.pixel_to_time(0, 0) == at(0)

    def test_day_index_selects_date(self, mapper):
        assert mapper.pixel_to_time(3, 48 * 9) == at(9, day=4)

    def test_day_index_beyond_window_extrapolates(self, mapper):
        assert mapper.pixel_to_time(9, 0) == at(0, day=10)

    def test_quarter_hours(self, mapper):
        assert mapper.pixel_to_minutes(12) == 15
        assert mapper.pixel_to_minutes(36) == 45

    def test_scalar_returns_int(self, mapper):
        assert isinstance(mapper.pixel_to_minutes(130.0), int)

    def test_array_input(self, mapper):
        out = mapper.pixel_to_minutes(np.array([0, 12, 130, 48 * 23]))
        np.testing.assert_array_equal(out, [0, 15, 162, 23 * 60])

    def test_2d_array_keeps_shape(self, mapper):
        out = mapper.pixel_to_minutes(np.zeros((2, 3)))
        assert out.shape == (2, 3)

    def test_custom_hour_height(self, window):
        m = CoordinateMapper(window, hour_height=60)
        assert m.pixel_to_minutes(90) == 90

    def test_invalid_hour_height_raises(self, window):
        with pytest.raises(GridError):
            CoordinateMapper(window, hour_height=0)


# ── Time → pixel ──────────────────────────────────────────────────────────────

class TestTimeToPixel:

    def test_midnight_is_zero(self, mapper):
        assert mapper.time_to_pixel(at(0)) == 0.0

    def test_hours_and_minutes(self, mapper):
        assert mapper.time_to_pixel(at(9, 30)) == pytest.approx(9.5 * 48)

    def test_naive_datetime_read_as_utc(self, mapper):
        assert mapper.time_to_pixel(datetime(2026, 1, 1, 2)) == pytest.approx(96.0)

    def test_before_day_clamps_to_zero(self, mapper):
        assert mapper.time_to_pixel(at(22, day=1), day=date(2026, 1, 2)) == 0.0

    def test_after_day_clamps_to_full_height(self, mapper):
        assert mapper.time_to_pixel(at(1, day=3), day=date(2026, 1, 2)) == mapper.day_height_px

    def test_inside_day_unclamped(self, mapper):
        assert mapper.time_to_pixel(at(6, day=2), day=date(2026, 1, 2)) == pytest.approx(288.0)

    def test_round_trip_on_grid(self, mapper):
        t = at(14, 45)
        assert mapper.pixel_to_time(0, mapper.time_to_pixel(t)) == t

    def test_minutes_to_pixel_array(self, mapper):
        np.testing.assert_allclose(mapper.minutes_to_pixel(np.array([0, 30, 60])), [0, 24, 48])

    def test_day_height(self, mapper):
        assert mapper.day_height_px == 24 * 48


# ── Columns ───────────────────────────────────────────────────────────────────

class TestDayIndexAt:

    def test_zero_width_is_none(self):
        assert CoordinateMapper.day_index_at(250, 0) is None

    def test_floor_division(self):
        assert CoordinateMapper.day_index_at(250, 100) == 2

    def test_negative_offset(self):
        assert CoordinateMapper.day_index_at(-1, 100) == -1


# ── Quantization ──────────────────────────────────────────────────────────────

class TestQuantize:

    def test_floor(self):
        assert floor_to_step(at(9, 7)) == at(9, 0)

    def test_ceil(self):
        assert ceil_to_step(at(9, 7)) == at(9, 15)

    def test_ceil_rolls_hour(self):
        assert ceil_to_step(at(9, 50)) == at(10, 0)

    def test_ceil_rolls_day(self):
        assert ceil_to_step(at(23, 50)) == at(0, day=2)

    def test_floor_drops_seconds(self):
        assert floor_to_step(at(9, 15, 30, 5)) == at(9, 15)

    def test_ceil_counts_seconds(self):
        assert ceil_to_step(at(9, 15, 1)) == at(9, 30)

    @pytest.mark.parametrize("minute", [0, 15, 30, 45])
    def test_aligned_is_idempotent(self, minute):
        t = at(11, minute)
        assert floor_to_step(t) == t
        assert ceil_to_step(t) == t

    def test_floor_then_ceil_stable(self):
        t = floor_to_step(at(17, 22))
        assert ceil_to_step(t) == t

    def test_other_step(self):
        assert floor_to_step(at(9, 7), minutes=5) == at(9, 5)
        assert ceil_to_step(at(9, 7), minutes=30) == at(9, 30)


class TestClampToDay:

    def test_inside_unchanged(self):
        assert clamp_to_day(date(2026, 1, 1), at(12)) == at(12)

    def test_before_clamps_to_midnight(self):
        assert clamp_to_day(date(2026, 1, 2), at(23)) == at(0, day=2)

    def test_after_clamps_to_last_millisecond(self):
        out = clamp_to_day(date(2026, 1, 1), at(0, day=2))
        assert out == at(23, 59, 59, 999000)
        assert out + timedelta(milliseconds=1) == at(0, day=2)


# ── Configuration ─────────────────────────────────────────────────────────────

class TestGridConfig:

    def test_defaults(self):
        c = GridConfig()
        assert c.hour_height_px == 48
        assert c.snap_minutes == 15
        assert c.day_height_px == 1152

    def test_frozen(self):
        c = GridConfig()
        with pytest.raises(Exception):
            c.hour_height_px = 10

    def test_bad_hour_height(self):
        with pytest.raises(GridError):
            GridConfig(hour_height_px=0)

    def test_snap_must_divide_hour(self):
        with pytest.raises(GridError):
            GridConfig(snap_minutes=7)

    def test_visible_days_positive(self):
        with pytest.raises(GridError):
            GridConfig(visible_days=0)

    def test_negative_length_rejected(self):
        with pytest.raises(GridError):
            GridConfig(row_height_px=-1)

    def test_grid_error_is_value_error(self):
        assert issubclass(GridError, ValueError)
