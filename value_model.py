"""
knobring - Value model

Owns the domain range, the raw (unsnapped) value and the two animated
lengths the rings are drawn from. A "length" is the value expressed in
revolutions since ``start_value``: 0 starts the first revolution, 1 the
second, and so on.
"""

import math
from dataclasses import dataclass

from config import MAX_REVOLUTION_COUNT
from smoothing import AnimatedScalar, LENGTH_SNAP_THRESHOLD, clamp


class KnobConfigurationError(ValueError):
    """Range settings that no track layout can represent."""

    def __init__(self, parameter: str, message: str):
        super().__init__(message)
        self.parameter = parameter


@dataclass
class ValueRange:
    start_value: float = 0.0
    min_value: float = 0.0
    max_value: float = 300.0
    revolution_value: float = 100.0


class ValueModel:
    def __init__(self, value_range: ValueRange | None = None, value: float = 50.0, snap: float = 0.0):
        self.range = value_range if value_range is not None else ValueRange()
        self.unsnapped_value = float(value)
        self.snap = float(snap)
        # A bad revolution size is reported by validate() on the first tick
        valid = self.mappable
        start_length = self.value_to_length(self.clamped_value) if valid else 0.0
        self.progress = AnimatedScalar(start_length, LENGTH_SNAP_THRESHOLD)
        track_length = self._target_track_length(start_length) if valid else 0.0
        self.track = AnimatedScalar(track_length, LENGTH_SNAP_THRESHOLD)

    # ------------------------------------------------------------------
    # Length mapping
    # ------------------------------------------------------------------

    @property
    def mappable(self) -> bool:
        """False while the revolution size cannot map values to lengths."""
        return self.range.revolution_value > 0

    def value_to_length(self, value: float) -> float:
        return (value - self.range.start_value) / self.range.revolution_value

    def length_to_value(self, length: float) -> float:
        return length * self.range.revolution_value + self.range.start_value

    @property
    def min_length(self) -> float:
        return self.value_to_length(self.range.min_value)

    @property
    def max_length(self) -> float:
        return self.value_to_length(self.range.max_value)

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @property
    def clamped_value(self) -> float:
        return clamp(self.unsnapped_value, self.range.min_value, self.range.max_value)

    @property
    def value(self) -> float:
        """Displayed value: clamped, and quantized to ``snap`` when set."""
        if self.snap > 0.0:
            start = self.range.start_value
            ticks = math.floor((self.unsnapped_value - start) / self.snap + 0.5)
            return clamp(ticks * self.snap + start, self.range.min_value, self.range.max_value)
        return self.clamped_value

    @value.setter
    def value(self, value: float) -> None:
        self.unsnapped_value = float(value)

    @property
    def unsnapped_length(self) -> float:
        return self.value_to_length(self.unsnapped_value)

    @property
    def snapped_length(self) -> float:
        return self.value_to_length(self.value)

    @property
    def progress_length(self) -> float:
        return self.progress.current

    @property
    def track_length(self) -> float:
        return self.track.current

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        r = self.range
        if r.min_value > r.max_value:
            raise KnobConfigurationError("min_value", "'min_value' cannot be greater than 'max_value'")
        if r.start_value > r.min_value:
            raise KnobConfigurationError("start_value", "'start_value' cannot be greater than 'min_value'")
        if r.revolution_value <= 0:
            raise KnobConfigurationError("revolution_value", "'revolution_value' must be positive")
        if (r.max_value - r.start_value) / r.revolution_value > MAX_REVOLUTION_COUNT:
            raise KnobConfigurationError(
                "max_value", f"Revolution count cannot be greater than {MAX_REVOLUTION_COUNT}")
        if self.min_length >= 1.0:
            raise KnobConfigurationError("min_value", "'min_value' does not fall inside the first revolution")

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def _target_track_length(self, target_progress: float) -> float:
        target = max(math.ceil(target_progress), 1.0)
        return clamp(target, self.progress.current, self.max_length)

    def update(self, elapsed: float, progress_smoothness: float, track_length_smoothness: float) -> bool:
        """Advance both lengths one frame. Returns True when either moved."""
        self.unsnapped_value = self.clamped_value
        target_progress = self.value_to_length(self.unsnapped_value)
        changed = self.progress.advance(target_progress, elapsed, progress_smoothness,
                                        self.min_length, self.max_length)
        changed |= self.track.advance(self._target_track_length(target_progress), elapsed,
                                      track_length_smoothness, self.progress.current, self.max_length)
        return changed

    def finish_value_smoothing(self) -> bool:
        if not self.mappable:
            return False
        self.unsnapped_value = self.clamped_value
        return self.progress.finish(self.value_to_length(self.unsnapped_value),
                                    self.min_length, self.max_length)

    def finish_track_smoothing(self) -> bool:
        if not self.mappable:
            return False
        target = self._target_track_length(self.value_to_length(self.clamped_value))
        return self.track.finish(target, self.progress.current, self.max_length)
