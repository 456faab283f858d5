import unittest

from close_persist_wiring import persist_runtime_ui_to_config
from config import KnobConfig
from knob_engine import KnobEngine


class _Value:
    def __init__(self, value):
        self._value = value

    def value(self):
        return self._value


class _Check:
    def __init__(self, checked):
        self._checked = checked

    def isChecked(self):
        return self._checked


class _KnobViewStub:
    def __init__(self, config):
        self.engine = KnobEngine(config)


class _WindowStub:
    def __init__(self, config):
        self.knob_view = _KnobViewStub(config)
        self.snap_slider = _Value(5.0)
        self.progress_smoothness_slider = _Value(0.1)
        self.layout_smoothness_slider = _Value(0.2)
        self.length_smoothness_slider = _Value(0.3)
        self.tappable_checkbox = _Check(False)
        self.draggable_checkbox = _Check(True)
        self.scrollable_checkbox = _Check(False)
        self.percentage_checkbox = _Check(True)


class TestClosePersistWiring(unittest.TestCase):
    def test_persist_runtime_ui_to_config(self):
        cfg = KnobConfig()
        window = _WindowStub(cfg)
        window.knob_view.engine.value = 275.0

        persist_runtime_ui_to_config(window, cfg)

        self.assertEqual(cfg.range.value, 275.0)
        self.assertEqual(cfg.range.snap, 5.0)

        self.assertAlmostEqual(cfg.smoothing.progress, 0.1, places=6)
        self.assertAlmostEqual(cfg.smoothing.track_layout, 0.2, places=6)
        self.assertAlmostEqual(cfg.smoothing.track_length, 0.3, places=6)

        self.assertFalse(cfg.input.tappable)
        self.assertTrue(cfg.input.draggable)
        self.assertFalse(cfg.input.scrollable)

        self.assertTrue(cfg.label.percentage)

    def test_missing_control_is_reported(self):
        window = _WindowStub(KnobConfig())
        del window.snap_slider

        with self.assertRaises(AttributeError) as ctx:
            persist_runtime_ui_to_config(window, KnobConfig())
        self.assertIn("snap_slider", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
