import unittest
from unittest.mock import MagicMock

from tabletracker import NotTrackedError, TrackedTable, ipairs, pairs, track


class TestPairs(unittest.TestCase):
    """Unit tests for pairs() over a tracked table."""

    def setUp(self):
        self.raw = {"name": "hero", "stats": {"hp": 10}, "bag": {1: {"item": "key"}}}
        self.on_change = MagicMock()
        self.state = track(self.raw, self.on_change)

    def test_pairs_visits_every_key(self):
        keys = [key for key, _ in pairs(self.state)]
        self.assertEqual(sorted(keys), sorted(self.raw))

    def test_pairs_yields_scalars_verbatim(self):
        values = dict(pairs(self.state))
        self.assertEqual(values["name"], "hero")

    def test_pairs_yields_pathed_views_for_tables(self):
        """Nested tables come back as live views with the right path."""
        values = dict(pairs(self.state))
        stats = values["stats"]
        self.assertIsInstance(stats, TrackedTable)
        self.assertEqual(stats.path, ("stats",))
        stats["hp"] = 3
        self.on_change.assert_called_once_with(("stats", "hp"), 10, 3, self.raw["stats"])

    def test_pairs_on_nested_view_extends_path(self):
        bag = self.state["bag"]
        (index, slot), = list(pairs(bag))
        self.assertEqual(index, 1)
        self.assertEqual(slot.path, ("bag", 1))
        slot["item"] = "map"
        self.assertEqual(self.on_change.call_args.args[0], ("bag", 1, "item"))

    def test_pairs_allows_clearing_during_iteration(self):
        """Removing keys while iterating neither fails nor revisits them."""
        visited = []
        for key, _ in pairs(self.state):
            visited.append(key)
            self.state[key] = None
        self.assertEqual(sorted(visited), sorted(["name", "stats", "bag"]))
        self.assertEqual(self.raw, {})

    def test_pairs_skips_keys_removed_ahead(self):
        raw = {1: "a", 2: "b", 3: "c"}
        items = track(raw, MagicMock())
        visited = []
        for key, value in pairs(items):
            visited.append(value)
            if key == 1:
                items[3] = None
        self.assertEqual(visited, ["a", "b"])

    def test_pairs_requires_tracked_table_eagerly(self):
        """The check happens at call time, not on the first next()."""
        with self.assertRaises(NotTrackedError):
            pairs(self.raw)


class TestIpairs(unittest.TestCase):
    """Unit tests for ipairs() over an array-style tracked table."""

    def setUp(self):
        self.raw = {1: "a", 2: {"x": 1}, 3: "c", 5: "e", "tag": "t"}
        self.on_change = MagicMock()
        self.items = track(self.raw, self.on_change)

    def test_ipairs_stops_at_first_gap(self):
        indices = [index for index, _ in ipairs(self.items)]
        self.assertEqual(indices, [1, 2, 3])

    def test_ipairs_yields_views_for_tables(self):
        values = dict(ipairs(self.items))
        self.assertEqual(values[1], "a")
        self.assertIsInstance(values[2], TrackedTable)
        self.assertEqual(values[2].path, (2,))
        values[2]["x"] = 2
        self.on_change.assert_called_once_with((2, "x"), 1, 2, self.raw[2])

    def test_ipairs_on_empty_table(self):
        self.assertEqual(list(ipairs(track({}, MagicMock()))), [])

    def test_ipairs_sees_writes_made_during_iteration(self):
        seen = []
        for index, value in ipairs(self.items):
            seen.append(value if not isinstance(value, TrackedTable) else "table")
            if index == 3:
                self.items[4] = "d"
        self.assertEqual(seen, ["a", "table", "c", "d", "e"])

    def test_ipairs_requires_tracked_table_eagerly(self):
        with self.assertRaises(NotTrackedError):
            ipairs({1: "a"})


if __name__ == '__main__':
    unittest.main()
