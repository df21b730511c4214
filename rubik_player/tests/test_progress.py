# rubik_player/tests/test_progress.py
import json
import tempfile
import unittest
from pathlib import Path

from rubik_player import config
from rubik_player.app.progress import ProgressTracker


class TestProgressTracker(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "progress.json"
        self.tracker = ProgressTracker(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_means_no_progress(self):
        self.assertFalse(self.tracker.is_completed("oll-27"))
        self.assertEqual(self.tracker.get_progress(["oll-27", "pll-t"]), 0.0)

    def test_set_and_unset(self):
        self.tracker.set_completed("oll-27", True)
        self.assertTrue(self.tracker.is_completed("oll-27"))

        self.tracker.set_completed("oll-27", False)
        self.assertFalse(self.tracker.is_completed("oll-27"))

    def test_stored_under_namespaced_key(self):
        self.tracker.set_completed("pll-t", True)
        blob = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(blob, {config.PROGRESS_STORAGE_KEY: {"pll-t": True}})

    def test_persists_across_instances(self):
        self.tracker.set_completed("pll-t", True)
        self.assertTrue(ProgressTracker(self.path).is_completed("pll-t"))

    def test_counts_and_fraction(self):
        self.tracker.set_completed("a", True)
        self.tracker.set_completed("b", True)
        self.tracker.set_completed("zzz", True)
        ids = ["a", "b", "c", "d"]
        self.assertEqual(self.tracker.count_completed(ids), 2)
        self.assertAlmostEqual(self.tracker.get_progress(ids), 0.5)
        self.assertEqual(self.tracker.get_progress([]), 0.0)

    def test_corrupt_file_reads_as_empty(self):
        self.path.write_text("{no es json", encoding="utf-8")
        with self.assertLogs("rubik_player.app.progress", level="WARNING"):
            self.assertFalse(self.tracker.is_completed("a"))

        # y se puede volver a escribir encima
        self.tracker.set_completed("a", True)
        self.assertTrue(self.tracker.is_completed("a"))

    def test_unexpected_shape_reads_as_empty(self):
        self.path.write_text(json.dumps({config.PROGRESS_STORAGE_KEY: [1, 2]}), encoding="utf-8")
        self.assertEqual(self.tracker.count_completed(["1", "2"]), 0)

    def test_write_failure_is_logged(self):
        # el directorio padre es un archivo: no se puede crear
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("", encoding="utf-8")
        tracker = ProgressTracker(blocker / "progress.json")
        with self.assertLogs("rubik_player.app.progress", level="WARNING"):
            tracker.set_completed("a", True)
        self.assertFalse(tracker.is_completed("a"))


if __name__ == "__main__":
    unittest.main()
