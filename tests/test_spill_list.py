#!/usr/bin/env python3
"""
Tests for SpillList spillover to disk.
"""

import os
import shutil
import tempfile
import unittest
from unittest import mock
from kvstreams import SpillList, StreamsConfig, MultiStream, RecordStream


class TestSpillList(unittest.TestCase):
    """Test SpillList functionality."""

    def setUp(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()
        self.config = StreamsConfig.get_instance()
        self.saved_interval = self.config.pressure_check_interval

    def tearDown(self):
        """Clean up test environment."""
        StreamsConfig.set_defaults(pressure_check_interval=self.saved_interval)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_stays_in_memory_below_threshold(self):
        """Small containers never touch the disk."""
        values = SpillList(threshold=10, storage_path=self.temp_dir)
        values.extend(range(10))

        self.assertFalse(values.spilled)
        self.assertEqual(len(values), 10)
        self.assertEqual(os.listdir(self.temp_dir), [])

    def test_automatic_spillover(self):
        """Passing the threshold writes values out, in order."""
        values = SpillList(threshold=5, storage_path=self.temp_dir)
        for i in range(23):
            values.append(f"value_{i}")

        self.assertTrue(values.spilled)
        self.assertLessEqual(len(values._hot_data), values.threshold)
        self.assertEqual(len(values), 23)
        self.assertEqual(list(values), [f"value_{i}" for i in range(23)])
        values.close()

    def test_indexing_across_spill_boundary(self):
        """Indexes and slices reach both spilled and in-memory values."""
        values = SpillList(threshold=4, storage_path=self.temp_dir)
        values.extend(range(12))

        self.assertEqual(values[0], 0)
        self.assertEqual(values[5], 5)
        self.assertEqual(values[-1], 11)
        self.assertEqual(values[3:7], [3, 4, 5, 6])
        self.assertIn(7, values)

        with self.assertRaises(IndexError):
            values[12]
        values.close()

    def test_equality_with_sequences(self):
        """A SpillList equals any sequence holding the same values."""
        values = SpillList(threshold=2, storage_path=self.temp_dir)
        values.extend(["a", "b", "c"])

        self.assertEqual(values, ["a", "b", "c"])
        self.assertEqual(["a", "b", "c"], values)
        self.assertNotEqual(values, ["a", "b"])
        self.assertNotEqual(values, "abc")
        values.close()

    def test_close_removes_spill_file(self):
        """Closing drops the values and the file."""
        with SpillList(threshold=1, storage_path=self.temp_dir) as values:
            values.extend([1, 2, 3])
            self.assertEqual(len(os.listdir(self.temp_dir)), 1)

        self.assertEqual(len(values), 0)
        self.assertEqual(os.listdir(self.temp_dir), [])

    def test_forced_spill(self):
        """spill_to_disk writes out everything held in memory."""
        values = SpillList(threshold=100, storage_path=self.temp_dir)
        values.extend([1, 2, 3])
        values.spill_to_disk()

        self.assertTrue(values.spilled)
        self.assertEqual(values._hot_data, [])
        self.assertEqual(list(values), [1, 2, 3])
        values.close()

    def test_spills_under_memory_pressure(self):
        """Memory pressure forces a spill before the threshold is reached."""
        StreamsConfig.set_defaults(pressure_check_interval=5)
        values = SpillList(threshold=1000, storage_path=self.temp_dir)

        with mock.patch.object(StreamsConfig, 'under_memory_pressure', return_value=True):
            values.extend(range(5))

        self.assertTrue(values.spilled)
        self.assertEqual(list(values), [0, 1, 2, 3, 4])
        values.close()

    def test_invalid_threshold(self):
        """A threshold below one is rejected."""
        with self.assertRaises(ValueError):
            SpillList(threshold=0)

    def test_as_merge_container(self):
        """SpillList works as the aggregation container of a merge."""
        containers = []

        def factory():
            container = SpillList(threshold=2, storage_path=self.temp_dir)
            containers.append(container)
            return container

        streams = [RecordStream([("k", n)]) for n in range(5)]
        key, values = MultiStream(*streams, container_factory=factory).pull()

        self.assertEqual(key, "k")
        self.assertTrue(values.spilled)
        self.assertEqual(list(values), [0, 1, 2, 3, 4])

        for container in containers:
            container.close()


if __name__ == "__main__":
    unittest.main()
