"""
knobring - Smoothing primitives

Frame-rate independent exponential approach toward a target, plus the
small animated value holders every moving part of the knob is built on.
"""

import math
from typing import Optional, Tuple

# User-facing smoothness (0..1) is scaled by this before reaching smooth()
GLOBAL_SMOOTHNESS_FACTOR = 1.0 / 4.0

LENGTH_SNAP_THRESHOLD = 1.0 / 500.0
THICKNESS_FACTOR_SNAP_THRESHOLD = 1.0 / 1000.0
RADIUS_FACTOR_SNAP_THRESHOLD = 1.0 / 1000.0
COLOR_SNAP_THRESHOLD = 2.0          # out of 255

Rgba = Tuple[int, int, int, int]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def smooth(current: float, target: float, smoothness: float, elapsed: float) -> float:
    """Move ``current`` toward ``target`` after ``elapsed`` seconds.

    ``smoothness`` is the fraction of the remaining distance still left after
    one second: 0 jumps straight to the target, values >= 1 never move.
    """
    if smoothness <= 0.0:
        return target
    if smoothness >= 1.0 or elapsed <= 0.0:
        return current
    k = -math.log(smoothness)
    return target + (current - target) * math.exp(-k * elapsed)


def snap(value: float, target: float, epsilon: float) -> float:
    """Return ``target`` once ``value`` is closer than ``epsilon`` to it."""
    if abs(value - target) < epsilon:
        return target
    return value


class AnimatedScalar:
    """A float that chases a target, snapping once it is close enough."""

    def __init__(self, current: float, epsilon: float):
        self.current = float(current)
        self.target = float(current)
        self.epsilon = epsilon

    def advance(self, target: float, elapsed: float, smoothness: float,
                minimum: Optional[float] = None, maximum: Optional[float] = None) -> bool:
        """Advance one frame. Returns True when ``current`` changed."""
        before = self.current
        self.target = float(target)
        value = smooth(before, self.target, smoothness * GLOBAL_SMOOTHNESS_FACTOR, elapsed)
        value = snap(value, self.target, self.epsilon)
        self.current = self._bound(value, minimum, maximum)
        return self.current != before

    def finish(self, target: Optional[float] = None,
               minimum: Optional[float] = None, maximum: Optional[float] = None) -> bool:
        before = self.current
        if target is not None:
            self.target = float(target)
        self.current = self._bound(self.target, minimum, maximum)
        return self.current != before

    @staticmethod
    def _bound(value: float, minimum: Optional[float], maximum: Optional[float]) -> float:
        if minimum is not None:
            value = max(minimum, value)
        if maximum is not None:
            value = min(maximum, value)
        return value

    def __repr__(self) -> str:
        return f"AnimatedScalar(current={self.current!r}, target={self.target!r})"


class AnimatedColor:
    """RGBA color whose four channels are smoothed independently."""

    def __init__(self, rgba: Rgba = (0, 0, 0, 0)):
        self._channels = [AnimatedScalar(c, COLOR_SNAP_THRESHOLD) for c in rgba]

    @property
    def rgba(self) -> Rgba:
        r, g, b, a = (int(math.floor(c.current + 0.5)) for c in self._channels)
        return r, g, b, a

    @property
    def alpha(self) -> int:
        return self.rgba[3]

    def advance(self, target: Rgba, elapsed: float, smoothness: float) -> bool:
        before = self.rgba
        for channel, value in zip(self._channels, target):
            channel.advance(value, elapsed, smoothness, 0.0, 255.0)
        return self.rgba != before

    def finish(self, target: Rgba) -> bool:
        before = self.rgba
        for channel, value in zip(self._channels, target):
            channel.finish(value, 0.0, 255.0)
        return self.rgba != before
