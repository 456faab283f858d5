# knobring Configuration
# All default values and constants

from dataclasses import dataclass, field, is_dataclass
from enum import IntEnum

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1
MAX_REVOLUTION_COUNT = 3            # Tracks drawn, one per revolution


class IndexingMode(IntEnum):
    """How a provider picks its entry for a track"""
    BY_TRACK = 1       # Revolution index (0 = innermost/earliest)
    BY_ORDER = 2       # Depth relative to the active revolution


@dataclass
class RangeConfig:
    """Domain value range"""
    min_value: float = 0.0
    max_value: float = 300.0
    start_value: float = 0.0          # Value at the very start of the first revolution
    revolution_value: float = 100.0   # Value covered by one full revolution
    snap: float = 0.0                 # Displayed value quantum (0 = no snapping)
    value: float = 50.0


@dataclass
class AppearanceConfig:
    """Ring layout and colors"""
    thickness: float = 20.0           # Track stroke width (px)
    start_angle: float = -90.0        # Degrees, counter-clockwise from 3 o'clock
    clockwise: bool = True
    radius_backoff: float = 0.9       # Radius shrink per revolution depth (0.7-1.0)
    thickness_backoff: float = 0.9    # Thickness shrink per revolution depth (0.7-1.0)
    track_color: str = "#1a1a1aff"    # Background track color (#RRGGBB[AA])
    progress_color_from: str = "#30bfbfff"  # Foreground color of the active revolution
    progress_color_to: str = "#407580ff"    # Foreground color of the deepest revolution
    progress_indexing: IndexingMode = IndexingMode.BY_ORDER


@dataclass
class InputConfig:
    """Pointer interaction"""
    scrollable: bool = True
    tappable: bool = True
    draggable: bool = True
    input_thickness_factor: float = 3.0   # Hit band = thickness/2 * this (1.0-3.0)
    tap_arc_snap_px: float = 30.0         # Tap revolution snap tolerance along the ring
    drag_arc_snap_px: float = 60.0        # Max jump accepted from one drag sample
    scroll_hold_radius_factor: float = 0.5  # Free scroll only starts within this fraction of the radius
    scroll_factor: float = 0.5            # Revolutions per radius of vertical drag
    touch_slop_px: float = 8.0            # Movement before a press turns into a drag
    density: float = 1.0                  # Device pixel ratio applied to px tolerances


@dataclass
class SmoothingConfig:
    """Animation smoothness (0 = instant, 1 = frozen)"""
    progress: float = 0.4
    track_layout: float = 0.4
    track_length: float = 0.4
    frame_interval_ms: int = 16       # ~60 FPS


@dataclass
class LabelConfig:
    """Center label formatting"""
    percentage: bool = False
    decimal_places: int = 0           # 0-4
    prefix: str = ""
    suffix: str = ""


@dataclass
class KnobConfig:
    """Master configuration"""
    version: int = 1                  # Schema version for persisted configs
    range: RangeConfig = field(default_factory=RangeConfig)
    appearance: AppearanceConfig = field(default_factory=AppearanceConfig)
    input: InputConfig = field(default_factory=InputConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    label: LabelConfig = field(default_factory=LabelConfig)
    log_level: str = "INFO"           # Logging level (DEBUG/INFO/WARNING/ERROR)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored; IntEnum fields are coerced when possible."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current) and isinstance(value, dict):
            apply_dict_to_dataclass(current, value)
            continue

        if isinstance(current, IntEnum):
            try:
                setattr(target, key, current.__class__(value))
            except ValueError:
                log_event("WARNING", "Config",
                          f"Could not convert {key} to {current.__class__.__name__}, keeping default")
            continue

        setattr(target, key, value)


def _clamped_float(obj, name: str, default: float, low: float, high: float) -> None:
    try:
        value = float(getattr(obj, name, default))
    except (TypeError, ValueError):
        value = default
    setattr(obj, name, max(low, min(high, value)))


def migrate_config(config: KnobConfig, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Adds defaults for newly introduced fields and bumps version."""
    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0

    if version < 1:
        # Unversioned files predate snapping and density-aware tolerances
        if getattr(config.range, 'snap', None) is None:
            config.range.snap = 0.0
        if getattr(config.input, 'density', None) in (None, 0):
            config.input.density = 1.0
        if getattr(config.range, 'revolution_value', None) in (None, 0):
            config.range.revolution_value = 100.0

    if getattr(config, 'log_level', None) is None:
        config.log_level = "INFO"

    # Always clamp the user-facing ranges
    _clamped_float(config.appearance, 'radius_backoff', 0.9, 0.7, 1.0)
    _clamped_float(config.appearance, 'thickness_backoff', 0.9, 0.7, 1.0)
    _clamped_float(config.input, 'input_thickness_factor', 3.0, 1.0, 3.0)
    _clamped_float(config.smoothing, 'progress', 0.4, 0.0, 1.0)
    _clamped_float(config.smoothing, 'track_layout', 0.4, 0.0, 1.0)
    _clamped_float(config.smoothing, 'track_length', 0.4, 0.0, 1.0)
    _clamped_float(config.range, 'snap', 0.0, 0.0, float('inf'))

    try:
        places = int(getattr(config.label, 'decimal_places', 0))
    except (TypeError, ValueError):
        places = 0
    config.label.decimal_places = max(0, min(4, places))

    config.version = CURRENT_CONFIG_VERSION


# Default config instance
DEFAULT_CONFIG = KnobConfig()
