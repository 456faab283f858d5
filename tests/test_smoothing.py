import unittest

from smoothing import (
    AnimatedColor,
    AnimatedScalar,
    LENGTH_SNAP_THRESHOLD,
    clamp,
    smooth,
    snap,
)


class TestSmooth(unittest.TestCase):
    def test_zero_smoothness_jumps_to_target(self):
        self.assertEqual(smooth(0.0, 10.0, 0.0, 0.016), 10.0)

    def test_full_smoothness_or_no_time_keeps_current(self):
        self.assertEqual(smooth(0.0, 10.0, 1.0, 1.0), 0.0)
        self.assertEqual(smooth(3.0, 10.0, 0.5, 0.0), 3.0)

    def test_smoothness_is_fraction_left_after_one_second(self):
        self.assertAlmostEqual(smooth(0.0, 10.0, 0.5, 1.0), 5.0, places=9)

    def test_frame_rate_independent(self):
        one_step = smooth(0.0, 10.0, 0.3, 0.1)
        value = 0.0
        for _ in range(10):
            value = smooth(value, 10.0, 0.3, 0.01)
        self.assertAlmostEqual(value, one_step, places=9)

    def test_snap(self):
        self.assertEqual(snap(9.999, 10.0, 0.002), 10.0)
        self.assertEqual(snap(9.9, 10.0, 0.002), 9.9)

    def test_clamp(self):
        self.assertEqual(clamp(5, 0, 3), 3)
        self.assertEqual(clamp(-1, 0, 3), 0)


class TestAnimatedScalar(unittest.TestCase):
    def test_advance_reports_change(self):
        s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
        self.assertTrue(s.advance(1.0, 0.016, 0.0))
        self.assertEqual(s.current, 1.0)
        self.assertFalse(s.advance(1.0, 0.016, 0.0))

    def test_converges_and_snaps_exactly(self):
        s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
        for _ in range(2000):
            s.advance(2.5, 0.016, 0.4)
        self.assertEqual(s.current, 2.5)

    def test_moves_monotonically_toward_target(self):
        s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
        previous = s.current
        for _ in range(20):
            s.advance(1.0, 0.016, 0.4)
            self.assertGreaterEqual(s.current, previous)
            self.assertLessEqual(s.current, 1.0)
            previous = s.current

    def test_distance_strictly_shrinks_until_snapped(self):
        for target in (1.0, -2.5):
            s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
            distance = abs(s.current - target)
            for _ in range(5000):
                s.advance(target, 0.016, 0.4)
                new_distance = abs(s.current - target)
                self.assertLess(new_distance, distance)
                distance = new_distance
                if s.current == target:
                    break
            self.assertEqual(s.current, target)

    def test_bounds_applied_after_smoothing(self):
        s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
        s.advance(5.0, 0.016, 0.0, minimum=0.0, maximum=2.0)
        self.assertEqual(s.current, 2.0)

    def test_finish(self):
        s = AnimatedScalar(0.0, LENGTH_SNAP_THRESHOLD)
        s.advance(1.0, 0.016, 0.9)
        self.assertTrue(s.finish())
        self.assertEqual(s.current, 1.0)
        self.assertTrue(s.finish(3.0, maximum=2.0))
        self.assertEqual(s.current, 2.0)


class TestAnimatedColor(unittest.TestCase):
    def test_starts_transparent(self):
        self.assertEqual(AnimatedColor().rgba, (0, 0, 0, 0))

    def test_instant_advance_and_finish(self):
        color = AnimatedColor()
        self.assertTrue(color.advance((10, 20, 30, 255), 0.016, 0.0))
        self.assertEqual(color.rgba, (10, 20, 30, 255))
        self.assertTrue(color.finish((200, 100, 50, 128)))
        self.assertEqual(color.rgba, (200, 100, 50, 128))
        self.assertEqual(color.alpha, 128)

    def test_partial_advance_stays_between(self):
        color = AnimatedColor((0, 0, 0, 0))
        color.advance((255, 255, 255, 255), 0.016, 0.4)
        r, g, b, a = color.rgba
        self.assertTrue(0 < a < 255)
        self.assertEqual(r, g)


if __name__ == "__main__":
    unittest.main()
