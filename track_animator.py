"""
knobring - Track animator

One TrackAnimator per revolution. Each frame it receives a snapshot of the
engine state and eases its thickness, radius and colors toward targets
derived from the track's order (depth relative to the active revolution).
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from providers import ColorProvider, FactorProvider, Rgba
from smoothing import (
    AnimatedColor,
    AnimatedScalar,
    RADIUS_FACTOR_SNAP_THRESHOLD,
    THICKNESS_FACTOR_SNAP_THRESHOLD,
)

# Future tracks closer than this (in revolutions) to the visible end collapse
MIN_COLLAPSING_TRACK_LENGTH = 1.0 / 4.0


@dataclass(frozen=True)
class TrackInputs:
    """Everything a track reads during one frame."""
    progress_length: float
    track_length: float
    min_length: float
    smoothness: float
    track_count: int
    thickness_factors: FactorProvider
    radius_factors: FactorProvider
    background_colors: ColorProvider
    foreground_colors: ColorProvider


@dataclass(frozen=True)
class RingLayout:
    """Screen placement of the ring, in widget pixels."""
    center_x: float
    center_y: float
    outer_radius: float
    thickness: float
    start_angle: float     # Degrees, counter-clockwise from 3 o'clock
    content_radius: float  # Radius of the square content area


@dataclass(frozen=True)
class DrawCall:
    """One stroke for the renderer.

    Angles are screen degrees, clockwise from 3 o'clock (y grows downward).
    For ``kind == "point"`` the sweep is 0 and ``point`` holds the position.
    """
    kind: str
    bounds: Tuple[float, float, float, float]   # left, top, right, bottom
    start_angle: float
    sweep_angle: float
    stroke_width: float
    color: Rgba
    point: Optional[Tuple[float, float]] = None


def track_order(progress_length: float, index: int) -> int:
    return math.floor(progress_length) - index


class TrackAnimator:
    def __init__(self, index: int):
        self.index = index
        self.thickness_factor = AnimatedScalar(0.0, THICKNESS_FACTOR_SNAP_THRESHOLD)
        self.radius_factor = AnimatedScalar(1.0, RADIUS_FACTOR_SNAP_THRESHOLD)
        self.background_color = AnimatedColor()
        self.foreground_color = AnimatedColor()

    def order(self, inputs: TrackInputs) -> int:
        return track_order(inputs.progress_length, self.index)

    def targets(self, inputs: TrackInputs) -> Tuple[float, float, Rgba, Rgba]:
        """Return (thickness factor, radius factor, background, foreground)."""
        order = self.order(inputs)
        positive_order = max(order, 0)
        count = inputs.track_count
        if order < 0 and inputs.track_length - self.index < MIN_COLLAPSING_TRACK_LENGTH:
            thickness = 0.0
        else:
            thickness = inputs.thickness_factors.provide(self.index, positive_order, count)
        radius = inputs.radius_factors.provide(self.index, positive_order, count)
        background = inputs.background_colors.provide(self.index, positive_order, count)
        foreground = inputs.foreground_colors.provide(self.index, positive_order, count)
        return thickness, radius, background, foreground

    def update(self, elapsed: float, inputs: TrackInputs) -> bool:
        """Advance one frame. Returns True when anything visible changed."""
        thickness, radius, background, foreground = self.targets(inputs)
        s = inputs.smoothness
        changed = self.thickness_factor.advance(thickness, elapsed, s, 0.0, 1.0)
        changed |= self.radius_factor.advance(radius, elapsed, s, 0.0, 1.0)
        changed |= self.background_color.advance(background, elapsed, s)
        changed |= self.foreground_color.advance(foreground, elapsed, s)
        return changed

    def finish(self, inputs: TrackInputs) -> bool:
        thickness, radius, background, foreground = self.targets(inputs)
        changed = self.thickness_factor.finish(thickness, 0.0, 1.0)
        changed |= self.radius_factor.finish(radius, 0.0, 1.0)
        changed |= self.background_color.finish(background)
        changed |= self.foreground_color.finish(foreground)
        return changed

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def sweep(self, length: float, min_length: float) -> float:
        """Sweep in degrees covered by this track for a given length."""
        if self.index == 0:
            return (min(length, 1.0) - min_length) * 360.0
        return min(length - self.index, 1.0) * 360.0

    def arc_start(self, layout: RingLayout, min_length: float) -> float:
        offset = min_length * 360.0 if self.index == 0 else 0.0
        return -layout.start_angle + offset

    def draw_calls(self, inputs: TrackInputs, layout: RingLayout) -> List[DrawCall]:
        factor = self.thickness_factor.current
        if factor <= 0.0:
            return []
        r = layout.outer_radius * self.radius_factor.current
        cx, cy = layout.center_x, layout.center_y
        bounds = (cx - r, cy - r, cx + r, cy + r)
        width = layout.thickness * factor
        start = self.arc_start(layout, inputs.min_length)

        calls = []
        for length, color in ((inputs.track_length, self.background_color.rgba),
                              (inputs.progress_length, self.foreground_color.rgba)):
            if color[3] <= 0:
                continue
            sweep = self.sweep(length, inputs.min_length)
            if sweep > 0.0:
                calls.append(DrawCall("arc", bounds, start, sweep, width, color))
            else:
                # Nothing to sweep yet; still mark where the track begins
                rad = math.radians(start)
                point = (cx + math.cos(rad) * r, cy + math.sin(rad) * r)
                calls.append(DrawCall("point", bounds, start, 0.0, width, color, point))
        return calls
