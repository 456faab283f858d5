from config import KnobConfig


def _require_window_attr(window, attr_name: str):
    try:
        return getattr(window, attr_name)
    except AttributeError as exc:
        raise AttributeError(
            f"persist_runtime_ui_to_config missing required control: {attr_name}"
        ) from exc


def persist_runtime_ui_to_config(window, config: KnobConfig) -> None:
    """Copy selected runtime UI control values into config on shutdown."""
    knob_view = _require_window_attr(window, "knob_view")
    snap_slider = _require_window_attr(window, "snap_slider")
    progress_smoothness_slider = _require_window_attr(window, "progress_smoothness_slider")
    layout_smoothness_slider = _require_window_attr(window, "layout_smoothness_slider")
    length_smoothness_slider = _require_window_attr(window, "length_smoothness_slider")
    tappable_checkbox = _require_window_attr(window, "tappable_checkbox")
    draggable_checkbox = _require_window_attr(window, "draggable_checkbox")
    scrollable_checkbox = _require_window_attr(window, "scrollable_checkbox")
    percentage_checkbox = _require_window_attr(window, "percentage_checkbox")

    knob_view.engine.sync_config()
    config.range.snap = snap_slider.value()

    config.smoothing.progress = progress_smoothness_slider.value()
    config.smoothing.track_layout = layout_smoothness_slider.value()
    config.smoothing.track_length = length_smoothness_slider.value()

    config.input.tappable = tappable_checkbox.isChecked()
    config.input.draggable = draggable_checkbox.isChecked()
    config.input.scrollable = scrollable_checkbox.isChecked()

    config.label.percentage = percentage_checkbox.isChecked()
