"""
knobring - Demo window

A multi-revolution knob with a few live controls for snapping, smoothing
and input modes. Settings are restored on start and saved on close.
"""

import sys

from PyQt6.QtWidgets import (
    QApplication, QCheckBox, QGroupBox, QHBoxLayout, QLabel, QMainWindow,
    QSlider, QVBoxLayout, QWidget,
)
from PyQt6.QtCore import Qt, pyqtSignal
from typing import Optional

from close_persist_wiring import persist_runtime_ui_to_config
from config import KnobConfig
from config_persistence import load_config, save_config
from knob_widget import KnobView
from logging_utils import log_event, set_log_level
from providers import PercentageTickTextProvider


class ControlSlider(QWidget):
    """Horizontal slider over 0..maximum with a live readout."""

    valueChanged = pyqtSignal(float)

    def __init__(self, name: str, maximum: float, value: float, decimals: int = 2, parent=None):
        super().__init__(parent)
        self._scale = 10 ** decimals
        self._decimals = decimals

        self._slider = QSlider(Qt.Orientation.Horizontal)
        self._slider.setRange(0, round(maximum * self._scale))
        self._slider.setValue(round(value * self._scale))
        self._slider.valueChanged.connect(self._on_steps)
        self._readout = QLabel(f"{value:.{decimals}f}")
        self._readout.setMinimumWidth(40)
        self._readout.setStyleSheet("color: #0af;")

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(QLabel(name))
        row.addWidget(self._slider, 1)
        row.addWidget(self._readout)

    def _on_steps(self, steps: int):
        value = steps / self._scale
        self._readout.setText(f"{value:.{self._decimals}f}")
        self.valueChanged.emit(value)

    def value(self) -> float:
        return self._slider.value() / self._scale


class KnobDemoWindow(QMainWindow):
    """Main application window"""

    def __init__(self, config: Optional[KnobConfig] = None, config_path=None):
        super().__init__()
        self.setWindowTitle("knobring")
        self.setMinimumSize(360, 480)
        self.resize(520, 720)
        self.setStyleSheet("QMainWindow, QWidget { background-color: #202020; color: #ddd; }")

        self._config_path = config_path
        self.config = config if config is not None else load_config(config_path)
        set_log_level(self.config.log_level)

        self._setup_ui()
        self._update_value_label(self.knob_view.value())

    def _setup_ui(self):
        """Build the user interface"""
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setSpacing(10)

        self.knob_view = KnobView(self.config)
        self.knob_view.setContentsMargins(16, 16, 16, 16)
        self.knob_view.valueChanged.connect(self._update_value_label)
        main_layout.addWidget(self.knob_view, stretch=1)

        self.value_label = QLabel()
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.value_label.setStyleSheet("color: #0af; font-size: 28px; font-weight: bold;")
        main_layout.addWidget(self.value_label)

        engine = self.knob_view.engine
        percent = PercentageTickTextProvider()
        self.range_label = QLabel(
            f"{percent.provide(0, 0, engine.min_value, engine)} - "
            f"{percent.provide(0, 0, engine.max_value, engine)}"
        )
        self.range_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.range_label.setStyleSheet("color: #888;")
        main_layout.addWidget(self.range_label)

        main_layout.addWidget(self._create_controls_panel())

    def _create_controls_panel(self) -> QGroupBox:
        smoothing = self.config.smoothing
        group = QGroupBox("Controls")
        layout = QVBoxLayout(group)

        self.snap_slider = ControlSlider("Snap", 50.0, self.config.range.snap, decimals=0)
        self.snap_slider.valueChanged.connect(self._on_snap_changed)
        self.progress_smoothness_slider = ControlSlider("Progress smooth", 1.0, smoothing.progress)
        self.progress_smoothness_slider.valueChanged.connect(
            lambda v: self.knob_view.engine.set_smoothness(progress=v))
        self.layout_smoothness_slider = ControlSlider("Layout smooth", 1.0, smoothing.track_layout)
        self.layout_smoothness_slider.valueChanged.connect(
            lambda v: self.knob_view.engine.set_smoothness(track_layout=v))
        self.length_smoothness_slider = ControlSlider("Length smooth", 1.0, smoothing.track_length)
        self.length_smoothness_slider.valueChanged.connect(
            lambda v: self.knob_view.engine.set_smoothness(track_length=v))
        for slider in (self.snap_slider, self.progress_smoothness_slider,
                       self.layout_smoothness_slider, self.length_smoothness_slider):
            layout.addWidget(slider)

        toggles = QHBoxLayout()
        self.tappable_checkbox = self._toggle("Tap", "tappable", toggles)
        self.draggable_checkbox = self._toggle("Drag", "draggable", toggles)
        self.scrollable_checkbox = self._toggle("Scroll", "scrollable", toggles)
        self.percentage_checkbox = QCheckBox("Percent")
        self.percentage_checkbox.setChecked(self.config.label.percentage)
        self.percentage_checkbox.toggled.connect(self._on_percentage_toggled)
        toggles.addWidget(self.percentage_checkbox)
        layout.addLayout(toggles)
        return group

    def _toggle(self, text: str, attr: str, row: QHBoxLayout) -> QCheckBox:
        checkbox = QCheckBox(text)
        checkbox.setChecked(getattr(self.config.input, attr))
        checkbox.toggled.connect(lambda checked: setattr(self.knob_view.engine, attr, checked))
        row.addWidget(checkbox)
        return checkbox

    def _on_snap_changed(self, value: float):
        self.knob_view.engine.snap = value
        self._update_value_label(self.knob_view.value())

    def _on_percentage_toggled(self, checked: bool):
        label = self.config.label
        self.knob_view.engine.set_label_format(
            percentage=checked,
            decimal_places=label.decimal_places,
            prefix=label.prefix,
            suffix=label.suffix,
        )
        self._update_value_label(self.knob_view.value())

    def _update_value_label(self, _value: float):
        self.value_label.setText(self.knob_view.labelText())

    def closeEvent(self, event):
        """Persist settings on close"""
        self.knob_view.engine.stop()
        persist_runtime_ui_to_config(self, self.config)
        save_config(self.config, self._config_path)
        event.accept()


def main():
    """Main entry point - backup if not launched via run.py"""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')
    window = KnobDemoWindow()
    window.show()
    log_event("INFO", "App", "Demo window shown")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
