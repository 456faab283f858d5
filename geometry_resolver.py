"""
knobring - Geometry resolver

Maps a pointer position, given as distance from the ring center and a
math-convention angle (degrees, counter-clockwise from 3 o'clock, y up),
to a length on the ring.

A bare angle cannot tell revolution 0 from revolution 1, so the result is
anchored on the revolution the raw value currently sits in.
"""

import math
from typing import Optional

from value_model import ValueModel


def normalize_angle(angle: float) -> float:
    """Wrap degrees into [0, 360)."""
    wrapped = angle % 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def arc_tolerance(pixels: float, outer_radius: float) -> float:
    """Convert a distance along the ring into length units."""
    if outer_radius <= 0.0:
        return 0.0
    return pixels / (2.0 * math.pi * outer_radius)


class GeometryResolver:
    def __init__(self, model: ValueModel, start_angle: float = -90.0, clockwise: bool = True):
        self.model = model
        self.start_angle = start_angle
        self.clockwise = clockwise

    def fractional_revolution(self, angle: float) -> float:
        """Position within one revolution, in [0, 1)."""
        if self.clockwise:
            turned = self.start_angle - angle
        else:
            turned = angle - self.start_angle
        return normalize_angle(turned) / 360.0

    def resolve(self, distance: float, angle: float, thickness_factor: float,
                outer_radius: float, thickness: float) -> Optional[float]:
        """Length under the pointer, or None when it misses the ring or the range."""
        if outer_radius <= 0.0 or not self.model.mappable:
            return None
        if abs(outer_radius - distance) > thickness / 2.0 * thickness_factor:
            return None

        model = self.model
        anchor = max(math.floor(model.unsnapped_length), 0)
        length = self.fractional_revolution(angle) + anchor
        if length > model.max_length:
            length -= 1.0
        if length < model.min_length:
            return None
        return length

    def resolve_snapped(self, distance: float, angle: float, thickness_factor: float,
                        outer_radius: float, thickness: float, arc_snap: float) -> Optional[float]:
        """Like :meth:`resolve`, but lets a point just across a revolution
        boundary land in the revolution next to the current value."""
        length = self.resolve(distance, angle, thickness_factor, outer_radius, thickness)
        if length is None or arc_snap <= 0.0:
            return length

        model = self.model
        current = model.unsnapped_length
        candidates = [c for c in (length, length + 1.0, length - 1.0)
                      if model.min_length <= c <= model.max_length]
        if not candidates:
            return length
        nearest = min(candidates, key=lambda c: abs(c - current))
        if abs(nearest - current) <= arc_snap:
            return nearest
        return length
