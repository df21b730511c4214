# rubik_player/tests/test_animation_queue.py
import unittest

from rubik_player.anim.animation_queue import AnimationQueue
from rubik_player.logic.moves import Move
from rubik_player.render.headless import HeadlessVisual


class FakeScheduler:
    """Guarda los callbacks programados para dispararlos a mano."""

    def __init__(self):
        self.calls = []

    def __call__(self, ms, fn):
        self.calls.append((ms, fn))

    def fire_all(self):
        calls, self.calls = self.calls, []
        for _, fn in calls:
            fn()


class TestAnimationQueue(unittest.TestCase):
    def setUp(self):
        self.visual = HeadlessVisual(auto_finish=False)
        self.queue = AnimationQueue(self.visual)

    def test_one_turn_in_flight_fifo(self):
        t1 = self.queue.animate(Move("R"))
        t2 = self.queue.animate(Move("U"))
        t3 = self.queue.animate(Move("F"))

        self.assertEqual([m for m, _ in self.visual.animated], [Move("R")])
        self.assertEqual(self.queue.pending, 2)
        self.assertTrue(self.queue.is_animating)

        self.visual.finish_current()
        self.assertTrue(t1.done)
        self.assertFalse(t2.done)
        self.assertEqual([m for m, _ in self.visual.animated], [Move("R"), Move("U")])

        self.visual.finish_current()
        self.visual.finish_current()
        self.assertTrue(t2.done and t3.done)
        self.assertFalse(self.queue.is_animating)
        self.assertEqual([m for m, _ in self.visual.animated], [Move("R"), Move("U"), Move("F")])

    def test_done_callbacks_run_in_order(self):
        seen = []
        for face in "RUF":
            self.queue.animate(Move(face)).add_done_callback(lambda f=face: seen.append(f))
        while self.visual.finish_current():
            pass
        self.assertEqual(seen, ["R", "U", "F"])

    def test_callback_on_finished_turn_runs_at_once(self):
        visual = HeadlessVisual()
        queue = AnimationQueue(visual)
        turn = queue.animate(Move("D"))
        self.assertTrue(turn.done)
        seen = []
        turn.add_done_callback(lambda: seen.append(1))
        self.assertEqual(seen, [1])

    def test_request_from_completion_keeps_order(self):
        visual = HeadlessVisual()
        queue = AnimationQueue(visual)
        queue.animate(Move("R")).add_done_callback(lambda: queue.animate(Move("L")))
        queue.animate(Move("U"))
        self.assertEqual([m for m, _ in visual.animated], [Move("R"), Move("L"), Move("U")])

    def test_duration_uses_speed_at_start(self):
        self.queue.set_speed(2)
        self.queue.set_speed(0.5)
        self.queue.animate(Move("R"))
        self.assertEqual(self.visual.durations, [600.0])

    def test_speed_change_does_not_affect_turn_in_flight(self):
        t1 = self.queue.animate(Move("R"))
        self.queue.animate(Move("U"))
        self.queue.set_speed(3)
        self.assertEqual(t1.duration_ms, 300.0)
        self.visual.finish_current()
        self.assertEqual(self.visual.durations, [300.0, 100.0])

    def test_invalid_speed_is_ignored(self):
        self.queue.set_speed(2)
        with self.assertLogs("rubik_player.anim.animation_queue", level="WARNING"):
            self.queue.set_speed(0)
        self.queue.set_speed(-1)
        self.assertEqual(self.queue.speed, 2)
        self.assertEqual(self.queue.duration_ms, 150.0)

    def test_clear_queue_keeps_turn_in_flight(self):
        t1 = self.queue.animate(Move("R"))
        t2 = self.queue.animate(Move("U"))
        self.queue.clear_queue()
        self.assertEqual(self.queue.pending, 0)
        self.assertTrue(self.queue.is_animating)

        self.visual.finish_current()
        self.assertTrue(t1.done)
        # el pedido descartado nunca se completa
        self.assertFalse(t2.done)
        self.assertFalse(self.queue.is_animating)
        self.assertEqual(len(self.visual.animated), 1)

    def test_watchdog_forces_completion(self):
        scheduler = FakeScheduler()
        queue = AnimationQueue(self.visual, schedule=scheduler, watchdog_ms=1000)
        t1 = queue.animate(Move("R"))
        queue.animate(Move("U"))
        self.assertEqual(scheduler.calls[0][0], 1300)

        with self.assertLogs("rubik_player.anim.animation_queue", level="WARNING"):
            scheduler.fire_all()
        self.assertTrue(t1.done)
        self.assertEqual([m for m, _ in self.visual.animated], [Move("R"), Move("U")])

    def test_watchdog_after_normal_finish_is_ignored(self):
        scheduler = FakeScheduler()
        queue = AnimationQueue(self.visual, schedule=scheduler, watchdog_ms=1000)
        queue.animate(Move("R"))
        t2 = queue.animate(Move("U"))
        self.visual.finish_current()

        # solo el watchdog del primer giro sigue pendiente de disparar
        first_watchdog = scheduler.calls[0][1]
        first_watchdog()
        self.assertFalse(t2.done)
        self.assertTrue(queue.is_animating)

    def test_dispose(self):
        t1 = self.queue.animate(Move("R"))
        self.queue.animate(Move("U"))
        self.queue.dispose()
        self.assertFalse(self.queue.is_animating)

        self.visual.finish_current()
        self.assertFalse(t1.done)
        self.assertFalse(self.queue.animate(Move("F")).done)
        self.assertEqual(len(self.visual.animated), 1)


if __name__ == "__main__":
    unittest.main()
