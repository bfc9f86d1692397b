#!/usr/bin/env python3
"""
Tests for the shared sorted stream protocol: pushback, filters, iteration.
"""

import unittest
from kvstreams import (
    RecordStream,
    ComparisonStream,
    PushbackError,
    RewindError,
)


class TestPushback(unittest.TestCase):
    """Test the one-level pushback slot."""

    def setUp(self):
        """Set up a small stream."""
        self.stream = RecordStream([("a", 1), ("b", 2), ("c", 3)])

    def test_pull_pushback_pull_round_trip(self):
        """A pushed back record is delivered again, then the stream moves on."""
        first = self.stream.pull()
        self.stream.pushback()
        again = self.stream.pull()
        following = self.stream.pull()

        self.assertEqual(first, ("a", 1))
        self.assertEqual(again, ("a", 1))
        self.assertEqual(following, ("b", 2))

    def test_second_pushback_fails(self):
        """Only one level of pushback is allowed."""
        self.stream.pull()
        self.stream.pushback()

        with self.assertRaises(PushbackError):
            self.stream.pushback()

        # The first pushback is still intact
        self.assertEqual(self.stream.pull(), ("a", 1))

    def test_pushback_allowed_again_after_pull(self):
        """Pushback works again once the pending record was pulled."""
        self.stream.pull()
        self.stream.pushback()
        self.stream.pull()
        self.stream.pushback()
        self.assertTrue(self.stream.pending)
        self.assertEqual(self.stream.pull(), ("a", 1))
        self.assertFalse(self.stream.pending)

    def test_at_end_accounts_for_pending_record(self):
        """A stream is not at its end while a record is pushed back."""
        stream = RecordStream([("only", 1)])
        self.assertFalse(stream.at_end())

        self.assertEqual(stream.pull(), ("only", 1))
        self.assertTrue(stream.at_end())

        stream.pushback()
        self.assertFalse(stream.at_end())

        self.assertEqual(stream.pull(), ("only", 1))
        self.assertTrue(stream.at_end())
        self.assertIsNone(stream.pull())

    def test_rewind_drops_pending_record(self):
        """Rewinding restarts the stream and clears the pushback slot."""
        self.stream.pull()
        self.stream.pull()
        self.stream.pushback()

        self.stream.rewind()

        self.assertFalse(self.stream.pending)
        self.assertEqual(list(self.stream), [("a", 1), ("b", 2), ("c", 3)])


class TestFilters(unittest.TestCase):
    """Test filtering during bulk iteration."""

    def test_filters_apply_to_iteration(self):
        """Records failing any predicate are dropped."""
        stream = RecordStream([(i, str(i)) for i in range(10)])
        stream.add_filter(lambda k, v: k % 2 == 0).add_filter(lambda k, v: v != "4")

        self.assertEqual(list(stream), [(0, "0"), (2, "2"), (6, "6"), (8, "8")])

    def test_filters_do_not_apply_to_pull(self):
        """pull returns raw records regardless of filters."""
        stream = RecordStream([(1, "x"), (2, "y")])
        stream.filters.append(lambda k, v: False)

        self.assertEqual(stream.pull(), (1, "x"))
        self.assertEqual(list(stream), [])

    def test_filtered_iterate_visits_records(self):
        """filtered_iterate calls the visitor with key and value."""
        stream = RecordStream([("k1", "v1"), ("k2", "v2"), ("k3", "v3")])
        stream.add_filter(lambda k, v: k != "k2")

        seen = []
        stream.filtered_iterate(lambda k, v: seen.append((k, v)))

        self.assertEqual(seen, [("k1", "v1"), ("k3", "v3")])
        self.assertTrue(stream.at_end())

    def test_iteration_includes_pushed_back_record(self):
        """A pending record is part of the following iteration."""
        stream = RecordStream([(1, "a"), (2, "b")])
        stream.pull()
        stream.pull()
        stream.pushback()

        self.assertEqual(list(stream), [(2, "b")])


class TestRecordStream(unittest.TestCase):
    """Test the in-memory leaf stream."""

    def test_callable_source_can_be_rewound(self):
        """A callable source is called again on rewind."""
        stream = RecordStream(lambda: iter([("a", 1), ("b", 2)]))
        self.assertEqual(list(stream), [("a", 1), ("b", 2)])
        self.assertEqual(list(stream.rewind()), [("a", 1), ("b", 2)])

    def test_one_shot_iterator_cannot_be_rewound(self):
        """A consumed generator can't be repositioned."""
        stream = RecordStream(iter([("a", 1)]))
        list(stream)

        with self.assertRaises(RewindError):
            stream.rewind()

    def test_invalid_source(self):
        """Non-iterable sources are rejected."""
        with self.assertRaises(TypeError):
            RecordStream(42)

    def test_diff_against_builds_comparison(self):
        """diff_against pairs self (left) with the other stream (right)."""
        left = RecordStream([("a", 1)])
        right = RecordStream([("b", 2)])

        comparison = left.diff_against(right)

        self.assertIsInstance(comparison, ComparisonStream)
        self.assertIs(comparison.left, left)
        self.assertIs(comparison.right, right)

    def test_repr_names_source(self):
        """The diagnostic string mentions the class."""
        self.assertIn("RecordStream", repr(RecordStream([])))


if __name__ == "__main__":
    unittest.main()
