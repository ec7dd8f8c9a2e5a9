import unittest
from unittest.mock import MagicMock

from tabletracker import InvalidPathError, NotATableError, TrackedTable, deep_update, track
from tabletracker.paths import extend_path, to_path


class TestPathHelpers(unittest.TestCase):
    """Unit tests for building paths."""

    def test_to_path(self):
        self.assertEqual(to_path(None), ())
        self.assertEqual(to_path(["a", 1]), ("a", 1))

    def test_to_path_rejects_strings_and_scalars(self):
        """A string is one key, not a sequence of characters, so it is refused."""
        for bad in ("ab", b"ab", 5):
            with self.subTest(path=bad):
                with self.assertRaises(InvalidPathError):
                    to_path(bad)
        self.assertEqual(to_path(("ab",)), ("ab",))

    def test_extend_path_leaves_base_untouched(self):
        base = ("a",)
        extended = extend_path(base, "b")
        self.assertEqual(extended, ("a", "b"))
        self.assertEqual(base, ("a",))


class TestDeepUpdate(unittest.TestCase):
    """Unit tests for deep_update()."""

    def test_creates_missing_levels(self):
        data = {}
        deep_update(data, ["a", "b", "c"], 5)
        self.assertEqual(data, {"a": {"b": {"c": 5}}})

    def test_tracked_table_gets_no_notifications(self):
        """deep_update writes raw storage and never fires the callback."""
        raw = {}
        on_change = MagicMock()
        state = track(raw, on_change)
        deep_update(state, ["a", "b", "c"], 5)
        self.assertEqual(raw, {"a": {"b": {"c": 5}}})
        on_change.assert_not_called()

    def test_overwrites_scalars_on_the_way(self):
        data = {"a": 1}
        deep_update(data, ("a", "b", "c"), 5)
        self.assertEqual(data, {"a": {"b": {"c": 5}}})

        data = {"a": {"b": "leaf", "keep": True}}
        deep_update(data, ("a", "b", "c"), 5)
        self.assertEqual(data, {"a": {"b": {"c": 5}, "keep": True}})

    def test_descends_into_existing_tables(self):
        inner = {"b": {"x": 1}}
        data = {"a": inner}
        deep_update(data, ["a", "b", "y"], 2)
        self.assertIs(data["a"], inner)
        self.assertEqual(inner, {"b": {"x": 1, "y": 2}})

    def test_single_key_path(self):
        data = {"a": 1}
        deep_update(data, ["a"], 2)
        self.assertEqual(data, {"a": 2})

    def test_value_is_unwrapped(self):
        """Views and tables are stored as plain copies."""
        source = track({"x": {"y": 1}}, MagicMock())
        data = {}
        deep_update(data, ["copy"], source["x"])
        self.assertEqual(data, {"copy": {"y": 1}})
        self.assertNotIsInstance(data["copy"], TrackedTable)

    def test_none_removes_final_key(self):
        data = {"a": {"b": 1, "c": 2}}
        deep_update(data, ["a", "b"], None)
        self.assertEqual(data, {"a": {"c": 2}})

    def test_rejects_empty_or_malformed_path(self):
        with self.assertRaises(InvalidPathError):
            deep_update({}, [], 1)
        with self.assertRaises(InvalidPathError):
            deep_update({}, "abc", 1)
        with self.assertRaises(ValueError):
            deep_update({}, 5, 1)

    def test_rejects_non_table(self):
        with self.assertRaises(NotATableError):
            deep_update([1, 2], [1], 1)


if __name__ == '__main__':
    unittest.main()
