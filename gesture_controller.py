"""
knobring - Gesture handling

GestureController turns down / scroll / single-tap events into changes of
the raw value. GestureRecognizer is the thin host-side layer that builds
those events out of press / move / release.

Three policies, tried in this order for a scroll:
  drag         - first sample on the ring: follow the pointer around it
  free scroll  - first sample near the center: vertical motion changes value
  (none)       - anything else is left to the host
"""

import math
from dataclasses import dataclass
from typing import Callable, Optional

from config import InputConfig
from geometry_resolver import GeometryResolver, arc_tolerance
from logging_utils import log_event
from track_animator import RingLayout
from value_model import ValueModel


@dataclass(frozen=True)
class PointerSample:
    """Pointer position relative to the ring center (screen axes, y down)."""
    x: float
    y: float

    @property
    def distance(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Degrees counter-clockwise from 3 o'clock, y up."""
        # 0.0 - y keeps a zero offset positive, so 9 o'clock reads 180 rather than -180
        return math.degrees(math.atan2(0.0 - self.y, self.x))


class GestureController:
    def __init__(self, model: ValueModel, resolver: GeometryResolver,
                 settings: InputConfig, layout: Callable[[], Optional[RingLayout]]):
        self.model = model
        self.resolver = resolver
        self.settings = settings
        self._layout = layout

    def _resolve(self, sample: PointerSample, layout: RingLayout, arc_snap: float = 0.0) -> Optional[float]:
        return self.resolver.resolve_snapped(
            sample.distance,
            sample.angle,
            self.settings.input_thickness_factor,
            layout.outer_radius,
            layout.thickness,
            arc_snap,
        )

    def on_down(self, sample: PointerSample) -> bool:
        return True

    def on_single_tap(self, sample: PointerSample) -> bool:
        layout = self._layout()
        if not self.settings.tappable or layout is None or not self.model.mappable:
            return False
        pixels = self.settings.tap_arc_snap_px * self.settings.density
        length = self._resolve(sample, layout, arc_tolerance(pixels, layout.outer_radius))
        if length is None:
            return False
        self.model.unsnapped_value = self.model.length_to_value(length)
        log_event("DEBUG", "Gesture", "Tap", length=f"{length:.3f}")
        return True

    def on_scroll(self, down: PointerSample, current: PointerSample,
                  distance_x: float, distance_y: float) -> bool:
        """``distance_*`` is previous minus current position since the last scroll."""
        layout = self._layout()
        if layout is None or not self.model.mappable:
            return False
        if self.settings.draggable and self._resolve(down, layout) is not None:
            return self._drag(current, layout)
        if self.settings.scrollable:
            return self._free_scroll(down, distance_y, layout)
        return False

    def _drag(self, current: PointerSample, layout: RingLayout) -> bool:
        length = self._resolve(current, layout)
        if length is None:
            return False
        model = self.model
        unsnapped = model.unsnapped_length
        snapped = model.snapped_length
        progress = model.progress_length
        threshold = self.settings.drag_arc_snap_px * self.settings.density
        circumference = 2.0 * math.pi * layout.outer_radius

        for candidate in (length, length + 1.0, length - 1.0):
            if not model.min_length <= candidate <= model.max_length:
                continue
            gap = min(abs(candidate - unsnapped), abs(candidate - snapped), abs(candidate - progress))
            if gap * circumference <= threshold:
                model.unsnapped_value = model.length_to_value(candidate)
                return True
        return False

    def _free_scroll(self, down: PointerSample, distance_y: float, layout: RingLayout) -> bool:
        radius = layout.content_radius
        if radius <= 0.0 or down.distance > radius * self.settings.scroll_hold_radius_factor:
            return False
        revolution = self.model.range.revolution_value
        self.model.unsnapped_value += distance_y / radius * self.settings.scroll_factor * revolution
        return True


class GestureRecognizer:
    """Builds down / scroll / tap events from raw press / move / release."""

    def __init__(self, handler, settings: InputConfig, center: Callable[[], tuple]):
        # handler: anything with on_down / on_scroll / on_single_tap
        self.handler = handler
        self.settings = settings
        self._center = center
        self._down: Optional[PointerSample] = None
        self._last: Optional[PointerSample] = None
        self._scrolling = False

    @property
    def active(self) -> bool:
        return self._down is not None

    def _sample(self, x: float, y: float) -> PointerSample:
        cx, cy = self._center()
        return PointerSample(x - cx, y - cy)

    def press(self, x: float, y: float) -> bool:
        self._down = self._last = self._sample(x, y)
        self._scrolling = False
        return self.handler.on_down(self._down)

    def move(self, x: float, y: float) -> bool:
        if self._down is None:
            return False
        sample = self._sample(x, y)
        if not self._scrolling:
            slop = self.settings.touch_slop_px * self.settings.density
            if math.hypot(sample.x - self._down.x, sample.y - self._down.y) <= slop:
                return False
            self._scrolling = True
        previous = self._last
        self._last = sample
        return self.handler.on_scroll(self._down, sample, previous.x - sample.x, previous.y - sample.y)

    def release(self, x: float, y: float) -> bool:
        if self._down is None:
            return False
        handled = False
        if not self._scrolling:
            handled = self.handler.on_single_tap(self._sample(x, y))
        self.cancel()
        return handled

    def cancel(self) -> None:
        self._down = None
        self._last = None
        self._scrolling = False
