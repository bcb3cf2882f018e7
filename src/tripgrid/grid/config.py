from __future__ import annotations

from dataclasses import dataclass, fields

from ._exceptions import GridError


@dataclass(frozen=True, slots=True)
class GridConfig:
    """
    Layout constants shared by the mapper, the packers and the gesture
    controllers.  All lengths are CSS pixels, all durations minutes.
    """

    hour_height_px: float = 48.0
    snap_minutes: int = 15
    min_span_minutes: int = 15
    default_event_minutes: int = 60

    drag_threshold_px: float = 5.0
    resize_handle_min_px: float = 30.0
    min_block_height_px: float = 24.0
    point_block_height_px: float = 18.0
    time_label_min_px: float = 40.0

    row_height_px: float = 22.0
    row_band_padding_px: float = 12.0
    row_band_min_px: float = 48.0

    left_gutter_px: float = 80.0
    auto_scroll_padding_px: float = 160.0
    visible_days: int = 7
    visible_days_mobile: int = 3
    wheel_vertical_factor: float = 0.5
    swipe_threshold_px: float = 30.0
    restrict_below_days: int = 7

    def __post_init__(self) -> None:
        if self.hour_height_px <= 0:
            raise GridError(f"hour_height_px must be positive; got {self.hour_height_px}.")
        if self.snap_minutes < 1 or 60 % self.snap_minutes:
            raise GridError(
                f"snap_minutes must be a positive divisor of 60; got {self.snap_minutes}."
            )
        if self.min_span_minutes < 1:
            raise GridError(
                f"min_span_minutes must be at least 1; got {self.min_span_minutes}."
            )
        if self.visible_days < 1 or self.visible_days_mobile < 1:
            raise GridError("Visible day counts must be at least 1.")
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise GridError(f"{f.name} must be non-negative; got {value}.")

    @property
    def day_height_px(self) -> float:
        return 24 * self.hour_height_px


DEFAULT_CONFIG = GridConfig()
