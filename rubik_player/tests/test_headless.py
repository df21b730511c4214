# rubik_player/tests/test_headless.py
import unittest

from rubik_player.core import CubeModel
from rubik_player.logic.moves import Move
from rubik_player.render.headless import HeadlessVisual


class TestHeadlessVisual(unittest.TestCase):
    def test_finish_applies_move_then_calls_back(self):
        v = HeadlessVisual(auto_finish=False)
        seen = []
        v.animate(Move("R"), 300.0, lambda: seen.append(v.snapshot()))
        self.assertTrue(v.busy)

        self.assertTrue(v.finish_current())
        expected = CubeModel()
        expected.apply_move(Move("R"))
        self.assertEqual(seen, [expected.to_hashable()])
        self.assertFalse(v.finish_current())

    def test_synchronize_interrupts_and_confirms(self):
        v = HeadlessVisual(auto_finish=False)
        seen = []
        v.animate(Move("U"), 300.0, lambda: seen.append(1))
        v.synchronize(CubeModel())
        self.assertEqual(seen, [1])
        self.assertTrue(v.displayed.is_solved())
        self.assertFalse(v.busy)

    def test_nothing_is_applied_after_dispose(self):
        v = HeadlessVisual(auto_finish=False)
        seen = []
        v.animate(Move("R"), 300.0, lambda: seen.append("R"))
        v.dispose_visuals()

        self.assertFalse(v.finish_current())
        self.assertTrue(v.displayed.is_solved())
        self.assertEqual(seen, [])

        v.animate(Move("U"), 300.0, lambda: seen.append("U"))
        self.assertEqual(seen, ["U"])
        self.assertTrue(v.displayed.is_solved())
        self.assertEqual([m for m, _ in v.animated], [Move("R")])


if __name__ == "__main__":
    unittest.main()
