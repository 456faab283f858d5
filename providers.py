"""
knobring - Provider strategies

Small pluggable objects the engine asks for per-track factors and colors,
and the text formatters used for the center label and tick captions.
Every provider takes the track index and its order; the indexing mode
decides which of the two drives the lookup.
"""

import colorsys
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Protocol, Sequence, Tuple

import numpy as np

from config import IndexingMode

Rgba = Tuple[int, int, int, int]
Interpolator = Callable[[float], float]


def linear(progress: float) -> float:
    return progress


# ---------------------------------------------------------------------------
# Color helpers
# ---------------------------------------------------------------------------

def _round_half_up(x):
    return np.floor(np.asarray(x, dtype=float) + 0.5)


def hsv(hue: float, saturation: float, value: float, alpha: float = 1.0) -> Rgba:
    """Build an 8-bit RGBA tuple from hue in degrees and s/v/a in 0..1."""
    r, g, b = colorsys.hsv_to_rgb((hue % 360.0) / 360.0, saturation, value)
    return tuple(int(c) for c in _round_half_up(np.array([r, g, b, alpha]) * 255.0))


def to_hsv(rgba: Rgba) -> Tuple[float, float, float, float]:
    """Inverse of :func:`hsv`: hue in degrees, s/v/a in 0..1."""
    r, g, b, a = (c / 255.0 for c in rgba)
    h, s, v = colorsys.rgb_to_hsv(r, g, b)
    return h * 360.0, s, v, a


def parse_color(text: str) -> Rgba:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""
    digits = text.strip().lstrip('#')
    if len(digits) not in (6, 8):
        raise ValueError(f"Expected #RRGGBB or #RRGGBBAA, got {text!r}")
    if len(digits) == 6:
        digits += "ff"
    r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    return r, g, b, a


def format_color(rgba: Rgba) -> str:
    return "#" + "".join(f"{int(c):02x}" for c in rgba)


def lerp_color(start: Rgba, end: Rgba, progress: float) -> Rgba:
    """Linear interpolation in RGB space, per channel."""
    a = np.asarray(start, dtype=float)
    b = np.asarray(end, dtype=float)
    mixed = np.clip(_round_half_up(a + (b - a) * progress), 0, 255)
    return tuple(int(c) for c in mixed)


def _index(mode: IndexingMode, track: int, order: int) -> int:
    return order if mode == IndexingMode.BY_ORDER else track


def _curve_progress(interpolator: Interpolator, mode: IndexingMode,
                    track: int, order: int, track_count: int) -> float:
    return interpolator(_index(mode, track, order) / max(track_count - 1, 1))


def _from_list_clamped(items: Sequence, mode: IndexingMode, track: int, order: int):
    index = int(np.clip(_index(mode, track, order), 0, len(items) - 1))
    return items[index]


# ---------------------------------------------------------------------------
# Factor
# ---------------------------------------------------------------------------

class FactorProvider(Protocol):
    def provide(self, track: int, order: int, track_count: int) -> float: ...


@dataclass
class ConstantFactorProvider:
    factor: float = 0.5

    def provide(self, track: int, order: int, track_count: int) -> float:
        return self.factor


@dataclass
class ListFactorProvider:
    factors: List[float] = field(default_factory=lambda: [1.0])
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    def __post_init__(self):
        if not self.factors:
            raise ValueError("ListFactorProvider needs at least one factor")

    def provide(self, track: int, order: int, track_count: int) -> float:
        return _from_list_clamped(self.factors, self.indexing_mode, track, order)


@dataclass
class BackoffFactorProvider:
    """Geometric falloff: ``backoff ** index``."""
    backoff: float = 0.9
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    def provide(self, track: int, order: int, track_count: int) -> float:
        return float(self.backoff ** _index(self.indexing_mode, track, order))


@dataclass
class CurveFactorProvider:
    start: float = 0.0
    end: float = 1.0
    interpolator: Interpolator = linear
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    def provide(self, track: int, order: int, track_count: int) -> float:
        progress = _curve_progress(self.interpolator, self.indexing_mode, track, order, track_count)
        return float(np.interp(progress, [0.0, 1.0], [self.start, self.end]))


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------

class ColorProvider(Protocol):
    def provide(self, track: int, order: int, track_count: int) -> Rgba: ...


@dataclass
class ConstantColorProvider:
    color: Rgba = (0, 0, 0, 255)

    def provide(self, track: int, order: int, track_count: int) -> Rgba:
        return self.color


@dataclass
class ListColorProvider:
    colors: List[Rgba] = field(default_factory=lambda: [(0, 0, 0, 255)])
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    def __post_init__(self):
        if not self.colors:
            raise ValueError("ListColorProvider needs at least one color")

    def provide(self, track: int, order: int, track_count: int) -> Rgba:
        return _from_list_clamped(self.colors, self.indexing_mode, track, order)


@dataclass
class RGBCurveColorProvider:
    start: Rgba = (0, 0, 0, 255)
    end: Rgba = (255, 255, 255, 255)
    interpolator: Interpolator = linear
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    def provide(self, track: int, order: int, track_count: int) -> Rgba:
        progress = _curve_progress(self.interpolator, self.indexing_mode, track, order, track_count)
        return lerp_color(self.start, self.end, progress)


@dataclass
class HSVCurveColorProvider:
    """Interpolates hue, saturation, value and alpha independently."""
    from_hue: float = 0.0
    from_saturation: float = 0.0
    from_value: float = 0.0
    from_alpha: float = 1.0
    to_hue: float = 0.0
    to_saturation: float = 0.0
    to_value: float = 1.0
    to_alpha: float = 1.0
    interpolator: Interpolator = linear
    indexing_mode: IndexingMode = IndexingMode.BY_ORDER

    @classmethod
    def between(cls, start: Rgba, end: Rgba,
                indexing_mode: IndexingMode = IndexingMode.BY_ORDER) -> "HSVCurveColorProvider":
        fh, fs, fv, fa = to_hsv(start)
        th, ts, tv, ta = to_hsv(end)
        return cls(fh, fs, fv, fa, th, ts, tv, ta, indexing_mode=indexing_mode)

    def provide(self, track: int, order: int, track_count: int) -> Rgba:
        progress = _curve_progress(self.interpolator, self.indexing_mode, track, order, track_count)
        start = np.array([self.from_hue, self.from_saturation, self.from_value, self.from_alpha])
        end = np.array([self.to_hue, self.to_saturation, self.to_value, self.to_alpha])
        h, s, v, a = start + (end - start) * progress
        return hsv(h, s, v, a)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def _format_decimal(value: float, decimal_places: int) -> str:
    quantum = Decimal(1).scaleb(-decimal_places)
    return str(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def _percentage(value: float, view) -> str:
    # Relative to the range start, not the minimum
    span = view.max_value - view.start_value
    ratio = (value - view.start_value) / span if span else 0.0
    return f"{int(_round_half_up(ratio * 100.0))}%"


@dataclass
class ValueTickTextProvider:
    decimal_places: int = 0
    prefix: str = ""
    suffix: str = ""

    def provide(self, track: int, tick: int, value: float, view) -> str:
        return f"{self.prefix}{_format_decimal(value, self.decimal_places)}{self.suffix}"


class PercentageTickTextProvider:
    def provide(self, track: int, tick: int, value: float, view) -> str:
        return _percentage(value, view)


@dataclass
class ListTickTextProvider:
    ticks: List[str] = field(default_factory=list)
    ticks_per_track: int = 0
    continue_across_tracks: bool = True   # Tick numbering carries on from the previous track

    def provide(self, track: int, tick: int, value: float, view) -> str:
        if self.continue_across_tracks:
            return self.ticks[tick + self.ticks_per_track * track]
        return self.ticks[tick]


@dataclass
class ValueLabelProvider:
    decimal_places: int = 0
    prefix: str = ""
    suffix: str = ""

    def provide(self, value: float, view) -> str:
        return f"{self.prefix}{_format_decimal(value, self.decimal_places)}{self.suffix}"


class PercentageLabelProvider:
    def provide(self, value: float, view) -> str:
        return _percentage(value, view)
