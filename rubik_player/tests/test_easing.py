# rubik_player/tests/test_easing.py
import unittest

from rubik_player.anim.easing import ease_out_cubic, turn_angle


class TestEasing(unittest.TestCase):
    def test_endpoints(self):
        self.assertEqual(ease_out_cubic(0.0), 0.0)
        self.assertEqual(ease_out_cubic(1.0), 1.0)

    def test_fast_start(self):
        # ease-out: a mitad de tiempo ya recorrió más de la mitad
        self.assertAlmostEqual(ease_out_cubic(0.5), 0.875)

    def test_monotonic(self):
        values = [ease_out_cubic(i / 20) for i in range(21)]
        self.assertEqual(values, sorted(values))

    def test_turn_angle_in_progress(self):
        angle, finished = turn_angle(-90.0, 150.0, 300.0)
        self.assertFalse(finished)
        self.assertAlmostEqual(angle, -90.0 * 0.875)

    def test_turn_angle_snaps_to_target(self):
        self.assertEqual(turn_angle(180.0, 300.0, 300.0), (180.0, True))
        self.assertEqual(turn_angle(180.0, 999.0, 300.0), (180.0, True))

    def test_zero_duration_finishes_at_once(self):
        self.assertEqual(turn_angle(90.0, 0.0, 0.0), (90.0, True))


if __name__ == "__main__":
    unittest.main()
