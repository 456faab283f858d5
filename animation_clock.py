"""
knobring - Animation clock

Per-frame driver. A QTimer fires on the GUI thread; each tick hands the
elapsed seconds since the previous tick to every listener, in the order
they subscribed.
"""

import time
from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, QTimer

from logging_utils import log_event

TickListener = Callable[[float], None]


class AnimationClock(QObject):
    def __init__(self, interval_ms: int = 16, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._listeners: List[TickListener] = []
        self._last_time: Optional[float] = None
        self._timer = QTimer(self)
        self._timer.setInterval(int(interval_ms))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    def add_listener(self, listener: TickListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> None:
        if self._timer.isActive():
            return
        self._last_time = time.perf_counter()
        self._timer.start()
        log_event("DEBUG", "Clock", "Started", interval_ms=self.interval_ms)

    def stop(self) -> None:
        if not self._timer.isActive():
            return
        self._timer.stop()
        self._last_time = None
        log_event("DEBUG", "Clock", "Stopped")

    def advance(self, elapsed: float) -> None:
        """Deliver one tick of ``elapsed`` seconds to every listener."""
        for listener in list(self._listeners):
            listener(elapsed)

    def _on_timeout(self) -> None:
        now = time.perf_counter()
        elapsed = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        self.advance(elapsed)
