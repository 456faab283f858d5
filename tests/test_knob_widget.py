import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PyQt6.QtWidgets import QApplication
except ImportError:  # Qt not installed in this environment
    QApplication = None

from config import KnobConfig

if QApplication is not None:
    from animation_clock import AnimationClock
    from knob_widget import KnobView, _qt_angle
    from main import ControlSlider


def _app():
    return QApplication.instance() or QApplication([])


@unittest.skipIf(QApplication is None, "PyQt6 not available")
class TestAnimationClock(unittest.TestCase):
    def setUp(self):
        self.app = _app()

    def test_listeners_called_in_subscription_order(self):
        clock = AnimationClock(16)
        calls = []
        first = lambda dt: calls.append(("a", dt))
        second = lambda dt: calls.append(("b", dt))
        clock.add_listener(first)
        clock.add_listener(second)
        clock.add_listener(first)
        clock.advance(0.5)
        self.assertEqual(calls, [("a", 0.5), ("b", 0.5)])

        clock.remove_listener(first)
        clock.advance(0.25)
        self.assertEqual(calls[-1], ("b", 0.25))

    def test_start_stop(self):
        clock = AnimationClock(20)
        self.assertEqual(clock.interval_ms, 20)
        self.assertFalse(clock.is_running)
        clock.start()
        self.assertTrue(clock.is_running)
        clock.stop()
        self.assertFalse(clock.is_running)


@unittest.skipIf(QApplication is None, "PyQt6 not available")
class TestKnobView(unittest.TestCase):
    def setUp(self):
        self.app = _app()

    def test_qt_angle(self):
        self.assertEqual(_qt_angle(90.0), -1440)
        self.assertEqual(_qt_angle(-45.0), 720)

    def test_value_and_label(self):
        view = KnobView(KnobConfig())
        received = []
        view.valueChanged.connect(received.append)
        view.setValue(250.0)
        view.finishSmoothing()
        self.assertEqual(view.value(), 250.0)
        self.assertEqual(view.labelText(), "250")
        self.assertEqual(received, [250.0])

    def test_visibility_drives_clock(self):
        view = KnobView(KnobConfig())
        view.resize(200, 200)
        view.show()
        self.assertTrue(view.engine.running)
        self.assertTrue(view.clock.is_running)
        view.hide()
        self.assertFalse(view.engine.running)
        self.assertFalse(view.clock.is_running)

    def test_resize_sets_layout_and_paints(self):
        view = KnobView(KnobConfig())
        view.resize(200, 200)
        view.show()
        layout = view.engine.layout()
        self.assertIsNotNone(layout)
        rect = view.contentsRect()
        side = min(rect.width(), rect.height())
        self.assertAlmostEqual(layout.outer_radius, (side - 20.0) / 2.0)
        view.finishSmoothing()
        view.grab()
        view.hide()


@unittest.skipIf(QApplication is None, "PyQt6 not available")
class TestControlSlider(unittest.TestCase):
    def setUp(self):
        self.app = _app()

    def test_steps_map_to_decimals(self):
        slider = ControlSlider("Progress smooth", 1.0, 0.4)
        self.assertAlmostEqual(slider.value(), 0.4)
        received = []
        slider.valueChanged.connect(received.append)
        slider._slider.setValue(75)
        self.assertEqual(received, [0.75])
        self.assertEqual(slider._readout.text(), "0.75")

    def test_whole_number_slider(self):
        slider = ControlSlider("Snap", 50.0, 10.0, decimals=0)
        self.assertEqual(slider.value(), 10.0)
        self.assertEqual(slider._readout.text(), "10")


if __name__ == "__main__":
    unittest.main()
