# rubik_player/tests/test_catalog.py
import json
import tempfile
import unittest
from pathlib import Path

from rubik_player.app.catalog import AlgorithmEntry, filter_by_tier, load_catalog
from rubik_player.core import CubeModel


class TestCatalog(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "algs.json"

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, data):
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def test_packaged_catalog(self):
        entries = load_catalog()
        ids = [e.id for e in entries]
        self.assertIn("oll-27", ids)
        self.assertIn("pll-t", ids)
        self.assertEqual(len(ids), len(set(ids)))

    def test_packaged_algorithms_solve_their_setup(self):
        for entry in [e for e in load_catalog() if e.setup]:
            with self.subTest(id=entry.id):
                c = CubeModel()
                c.apply_sequence(entry.setup)
                c.apply_sequence(entry.algorithm)
                self.assertTrue(c.is_solved())

    def test_missing_setup_uses_inverse(self):
        self._write([{"id": "x", "name": "X", "algorithm": "R U2 F'"}])
        (entry,) = load_catalog(self.path)
        self.assertEqual(entry.setup, "F U2 R'")
        self.assertEqual(entry.tier, "beginner")

    def test_explicit_empty_setup_is_kept(self):
        self._write([{"id": "x", "algorithm": "R U R' U'", "setup": ""}])
        (entry,) = load_catalog(self.path)
        self.assertEqual(entry.setup, "")
        self.assertEqual(entry.name, "x")

    def test_invalid_entries_are_skipped(self):
        self._write([{"id": "a", "algorithm": "R"}, {"name": "sin id", "algorithm": "U"}, {"id": "b"}, 42])
        self.assertEqual([e.id for e in load_catalog(self.path)], ["a"])

    def test_unreadable_file(self):
        with self.assertLogs("rubik_player.app.catalog", level="WARNING"):
            self.assertEqual(load_catalog(self.path), [])

        self.path.write_text("[no es json", encoding="utf-8")
        with self.assertLogs("rubik_player.app.catalog", level="WARNING"):
            self.assertEqual(load_catalog(self.path), [])

    def test_filter_by_tier(self):
        entries = [
            AlgorithmEntry("a", "A", "R", tier="beginner"),
            AlgorithmEntry("b", "B", "U", tier="full"),
            AlgorithmEntry("c", "C", "F"),
        ]
        self.assertEqual([e.id for e in filter_by_tier(entries, "beginner")], ["a", "c"])
        self.assertEqual([e.id for e in filter_by_tier(entries, "full")], ["a", "b", "c"])

    def test_packaged_tiers(self):
        entries = load_catalog()
        self.assertLess(len(filter_by_tier(entries, "beginner")), len(filter_by_tier(entries, "full")))

    def test_unexpected_shape(self):
        self._write({"id": "a"})
        with self.assertLogs("rubik_player.app.catalog", level="WARNING"):
            self.assertEqual(load_catalog(self.path), [])


if __name__ == "__main__":
    unittest.main()
