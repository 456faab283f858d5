"""
knobring - Qt host widget

KnobView owns a KnobEngine and an AnimationClock, forwards mouse input to
the gesture layer and paints the engine's draw calls. The clock only runs
while the widget is shown.
"""

from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QPainter, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from animation_clock import AnimationClock
from config import KnobConfig
from gesture_controller import GestureRecognizer
from knob_engine import KnobEngine
from logging_utils import log_event
from track_animator import DrawCall


def _qt_angle(degrees: float) -> int:
    """Screen degrees (clockwise) to Qt's counter-clockwise 1/16ths."""
    return int(round(-degrees * 16.0))


class KnobView(QWidget):
    """Multi-revolution knob"""

    valueChanged = pyqtSignal(float)

    def __init__(self, config: Optional[KnobConfig] = None, parent=None):
        super().__init__(parent)
        self.engine = KnobEngine(config, on_invalidate=self.update, on_value_changed=self.valueChanged.emit)
        self.clock = AnimationClock(self.engine.config.smoothing.frame_interval_ms, self)
        self.recognizer = GestureRecognizer(self.engine, self.engine.config.input, self.engine.center)
        self.setMinimumSize(64, 64)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def value(self) -> float:
        return self.engine.value

    def setValue(self, value: float):
        self.engine.value = value

    def labelText(self) -> str:
        return self.engine.label_text()

    def finishSmoothing(self):
        self.engine.finish_smoothing()

    # Lifecycle ---------------------------------------------------------

    def showEvent(self, event):
        super().showEvent(event)
        self.engine.start(self.clock)
        log_event("DEBUG", "View", "Animation started")

    def hideEvent(self, event):
        self.engine.stop()
        log_event("DEBUG", "View", "Animation stopped")
        super().hideEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        rect = self.contentsRect()
        self.engine.set_content_rect(rect.x(), rect.y(), rect.width(), rect.height())

    # Painting ----------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        for call in self.engine.draw_calls():
            self._draw(painter, call)
        painter.end()

    @staticmethod
    def _draw(painter: QPainter, call: DrawCall):
        pen = QPen(QColor(*call.color), call.stroke_width, Qt.PenStyle.SolidLine,
                   Qt.PenCapStyle.RoundCap, Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        if call.kind == "arc":
            left, top, right, bottom = call.bounds
            painter.drawArc(QRectF(left, top, right - left, bottom - top),
                            _qt_angle(call.start_angle), _qt_angle(call.sweep_angle))
        else:
            painter.drawPoint(QPointF(*call.point))

    # Input -------------------------------------------------------------

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.recognizer.press(pos.x(), pos.y())
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.position()
        if not self.recognizer.move(pos.x(), pos.y()):
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.recognizer.release(pos.x(), pos.y())
        event.accept()
