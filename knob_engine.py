"""
knobring - Knob engine

Ties the value model, the per-revolution track animators, the geometry
resolver and the gesture controller together. The host feeds it clock
ticks, pointer events and its content rectangle; the engine tells the host
when to redraw and hands back the draw calls for the current frame.

Frame order: validate -> value model -> tracks (reading this frame's
lengths) -> redraw/value callbacks.
"""

from typing import Callable, List, Optional

from config import MAX_REVOLUTION_COUNT, KnobConfig
from geometry_resolver import GeometryResolver
from gesture_controller import GestureController, PointerSample
from logging_utils import log_event
from providers import (
    BackoffFactorProvider,
    ConstantColorProvider,
    HSVCurveColorProvider,
    PercentageLabelProvider,
    ValueLabelProvider,
    parse_color,
)
from track_animator import DrawCall, RingLayout, TrackAnimator, TrackInputs
from value_model import KnobConfigurationError, ValueModel


class _Setting:
    """Engine attribute stored in a config section; writing it redraws."""

    def __init__(self, section: str, field: str = ""):
        self.section = section
        self.field = field
        self.name = ""

    def __set_name__(self, owner, name):
        self.name = name
        self.field = self.field or name

    def __get__(self, engine, owner=None):
        if engine is None:
            return self
        return getattr(getattr(engine.config, self.section), self.field)

    def __set__(self, engine, value):
        setattr(getattr(engine.config, self.section), self.field, value)
        engine._setting_changed(self.name)


class KnobEngine:
    # Range (the value model reads config.range directly)
    min_value = _Setting("range")
    max_value = _Setting("range")
    start_value = _Setting("range")
    revolution_value = _Setting("range")
    snap = _Setting("range")
    # Appearance
    thickness = _Setting("appearance")
    start_angle = _Setting("appearance")
    clockwise = _Setting("appearance")
    radius_backoff = _Setting("appearance")
    thickness_backoff = _Setting("appearance")
    # Input
    scrollable = _Setting("input")
    tappable = _Setting("input")
    draggable = _Setting("input")
    input_thickness_factor = _Setting("input")
    # Smoothing
    progress_smoothness = _Setting("smoothing", "progress")
    track_layout_smoothness = _Setting("smoothing", "track_layout")
    track_length_smoothness = _Setting("smoothing", "track_length")

    def __init__(self, config: Optional[KnobConfig] = None,
                 on_invalidate: Optional[Callable[[], None]] = None,
                 on_value_changed: Optional[Callable[[float], None]] = None):
        self.config = config if config is not None else KnobConfig()
        self.on_invalidate = on_invalidate
        self.on_value_changed = on_value_changed

        rng = self.config.range
        appearance = self.config.appearance
        self.model = ValueModel(rng, rng.value, rng.snap)
        self.resolver = GeometryResolver(self.model, appearance.start_angle, appearance.clockwise)
        self.gestures = GestureController(self.model, self.resolver, self.config.input, self.layout)

        self.thickness_factors = BackoffFactorProvider(appearance.thickness_backoff)
        self.radius_factors = BackoffFactorProvider(appearance.radius_backoff)
        self.background_colors = ConstantColorProvider(parse_color(appearance.track_color))
        self.foreground_colors = HSVCurveColorProvider.between(
            parse_color(appearance.progress_color_from),
            parse_color(appearance.progress_color_to),
            appearance.progress_indexing,
        )
        self.label_provider = self._make_label_provider()

        self.tracks = [TrackAnimator(i) for i in range(MAX_REVOLUTION_COUNT)]
        self._content: Optional[tuple] = None
        self._clock = None
        self._last_value = self.model.value

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _make_label_provider(self):
        label = self.config.label
        if label.percentage:
            return PercentageLabelProvider()
        return ValueLabelProvider(label.decimal_places, label.prefix, label.suffix)

    def _setting_changed(self, name: str) -> None:
        appearance = self.config.appearance
        if name == "snap":
            self.model.snap = float(self.config.range.snap)
        elif name in ("start_angle", "clockwise"):
            self.resolver.start_angle = appearance.start_angle
            self.resolver.clockwise = appearance.clockwise
        elif name == "thickness_backoff" and isinstance(self.thickness_factors, BackoffFactorProvider):
            self.thickness_factors.backoff = appearance.thickness_backoff
        elif name == "radius_backoff" and isinstance(self.radius_factors, BackoffFactorProvider):
            self.radius_factors.backoff = appearance.radius_backoff
        self._invalidate()

    @property
    def value(self) -> float:
        """Displayed (snapped) value."""
        return self.model.value

    @value.setter
    def value(self, value: float) -> None:
        self.model.value = value
        self._invalidate()

    @property
    def unsnapped_value(self) -> float:
        return self.model.unsnapped_value

    @property
    def track_color(self) -> str:
        return self.config.appearance.track_color

    @track_color.setter
    def track_color(self, color: str) -> None:
        self.background_colors = ConstantColorProvider(parse_color(color))
        self.config.appearance.track_color = color
        self._invalidate()

    def set_progress_colors(self, start: str, end: str) -> None:
        appearance = self.config.appearance
        self.foreground_colors = HSVCurveColorProvider.between(
            parse_color(start), parse_color(end), appearance.progress_indexing)
        appearance.progress_color_from = start
        appearance.progress_color_to = end
        self._invalidate()

    def set_smoothness(self, progress: Optional[float] = None, track_layout: Optional[float] = None,
                       track_length: Optional[float] = None) -> None:
        smoothing = self.config.smoothing
        if progress is not None:
            smoothing.progress = progress
        if track_layout is not None:
            smoothing.track_layout = track_layout
        if track_length is not None:
            smoothing.track_length = track_length
        self._invalidate()

    def set_label_format(self, *, percentage: bool = False, decimal_places: int = 0,
                         prefix: str = "", suffix: str = "") -> None:
        label = self.config.label
        label.percentage = percentage
        label.decimal_places = decimal_places
        label.prefix = prefix
        label.suffix = suffix
        self.label_provider = self._make_label_provider()
        self._invalidate()

    def label_text(self) -> str:
        return self.label_provider.provide(self.value, self)

    def sync_config(self) -> KnobConfig:
        """Write the live value back into the config (for persistence)."""
        self.config.range.value = self.model.clamped_value
        return self.config

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def set_content_rect(self, left: float, top: float, width: float, height: float) -> None:
        self._content = (float(left), float(top), max(float(width), 0.0), max(float(height), 0.0))
        self._invalidate()

    def layout(self) -> Optional[RingLayout]:
        """Current ring placement, or None while there is no usable area."""
        if self._content is None:
            return None
        left, top, width, height = self._content
        radius = min(width, height) / 2.0
        if radius <= 0.0:
            return None
        thickness = self.config.appearance.thickness
        return RingLayout(
            center_x=left + width / 2.0,
            center_y=top + height / 2.0,
            outer_radius=(2.0 * radius - thickness) / 2.0,
            thickness=thickness,
            start_angle=self.config.appearance.start_angle,
            content_radius=radius,
        )

    def center(self) -> tuple:
        layout = self.layout()
        if layout is None:
            return 0.0, 0.0
        return layout.center_x, layout.center_y

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def track_inputs(self) -> TrackInputs:
        return TrackInputs(
            progress_length=self.model.progress_length,
            track_length=self.model.track_length,
            min_length=self.model.min_length,
            smoothness=self.config.smoothing.track_layout,
            track_count=len(self.tracks),
            thickness_factors=self.thickness_factors,
            radius_factors=self.radius_factors,
            background_colors=self.background_colors,
            foreground_colors=self.foreground_colors,
        )

    def tick(self, elapsed: float) -> None:
        try:
            self.model.validate()
        except KnobConfigurationError as exc:
            log_event("ERROR", "Engine", f"Invalid configuration: {exc}", parameter=exc.parameter)
            self.stop()
            raise

        smoothing = self.config.smoothing
        changed = self.model.update(elapsed, smoothing.progress, smoothing.track_length)
        inputs = self.track_inputs()
        for track in self.tracks:
            changed |= track.update(elapsed, inputs)
        if changed:
            self._invalidate()
        self._notify_value()

    def start(self, clock) -> None:
        if self._clock is not None and self._clock is not clock:
            self.stop()
        self._clock = clock
        clock.add_listener(self.tick)
        clock.start()

    def stop(self) -> None:
        clock = self._clock
        if clock is None:
            return
        self._clock = None
        clock.remove_listener(self.tick)
        clock.stop()

    @property
    def running(self) -> bool:
        return self._clock is not None

    def finish_value_smoothing(self) -> None:
        if self.model.finish_value_smoothing():
            self._invalidate()

    def finish_track_smoothing(self) -> None:
        if self.model.finish_track_smoothing():
            self._invalidate()

    def finish_layout_smoothing(self) -> None:
        if not self.model.mappable:
            return
        inputs = self.track_inputs()
        changed = False
        for track in self.tracks:
            changed |= track.finish(inputs)
        if changed:
            self._invalidate()

    def finish_smoothing(self) -> None:
        self.finish_value_smoothing()
        self.finish_track_smoothing()
        self.finish_layout_smoothing()
        self._notify_value()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def draw_calls(self) -> List[DrawCall]:
        layout = self.layout()
        if layout is None or layout.outer_radius <= 0.0 or not self.model.mappable:
            return []
        inputs = self.track_inputs()
        calls: List[DrawCall] = []
        for track in self.tracks:
            calls.extend(track.draw_calls(inputs, layout))
        return calls

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def on_down(self, sample: PointerSample) -> bool:
        return self.gestures.on_down(sample)

    def on_scroll(self, down: PointerSample, current: PointerSample,
                  distance_x: float, distance_y: float) -> bool:
        return self._handled(self.gestures.on_scroll(down, current, distance_x, distance_y))

    def on_single_tap(self, sample: PointerSample) -> bool:
        return self._handled(self.gestures.on_single_tap(sample))

    def _handled(self, handled: bool) -> bool:
        if handled:
            self._invalidate()
        return handled

    # ------------------------------------------------------------------

    def _invalidate(self) -> None:
        if self.on_invalidate is not None:
            self.on_invalidate()

    def _notify_value(self) -> None:
        value = self.model.value
        if value != self._last_value:
            self._last_value = value
            if self.on_value_changed is not None:
                self.on_value_changed(value)
