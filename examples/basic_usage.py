#!/usr/bin/env python3
"""
Basic usage examples for kvstreams.
"""

import io
import logging
import random

from kvstreams import (
    TextStream,
    RecordStream,
    UniqueStream,
    FoldedStream,
    MultiStream,
    SpillList,
    StreamsConfig,
    Reporter,
)


def example_text_stream():
    """Example: Read whitespace-delimited records."""
    print("\n=== TextStream Example ===")

    source = io.StringIO("alpha 1 2\nbeta 3\ngamma\n")
    for key, value in TextStream(source):
        print(f"{key!r:10} {value!r}")


def example_unique_and_folded():
    """Example: Regroup duplicate keys."""
    print("\n=== Unique / Folded Example ===")

    records = [("a", 1), ("a", 2), ("b", 3), ("c", 4), ("c", 5)]
    print(f"Unique: {list(UniqueStream(RecordStream(records)))}")
    print(f"Folded: {list(FoldedStream(RecordStream(records)))}")


def example_merge():
    """Example: Merge several sorted runs."""
    print("\n=== MultiStream Example ===")

    runs = [
        sorted((random.randint(1, 20), f"run{n}") for _ in range(5))
        for n in range(3)
    ]
    merged = MultiStream(*(RecordStream(run) for run in runs))
    for key, values in merged:
        print(f"{key:3} {values}")


def example_reconcile():
    """Example: Compare two inventories and report the differences."""
    print("\n=== Reconciliation Example ===")

    expected = io.StringIO(
        "pkg-001 sha1-aaa\n"
        "pkg-002 sha1-bbb\n"
        "pkg-004 sha1-ddd\n"
    )
    actual = io.StringIO(
        "pkg-001 sha1-aaa\n"
        "pkg-002 sha1-XXX\n"
        "pkg-003 sha1-ccc\n"
    )

    with Reporter("Inventory Check", "expected against actual") as report:
        comparison = TextStream(expected).diff_against(TextStream(actual))
        for key, want, got in comparison:
            if got is None:
                report.error(f"{key} is missing")
            elif want is None:
                report.warning(f"{key} was not expected")
            elif want != got:
                report.error(f"{key} changed from {want} to {got}")

        report.done()
        report.write()


def example_spilling_groups():
    """Example: Fold a huge group without holding it in memory."""
    print("\n=== SpillList Example ===")

    StreamsConfig.set_defaults(spill_threshold=1000)
    records = RecordStream(lambda: (("hot-key", i) for i in range(10_000)))

    with SpillList() as values:
        folded = FoldedStream(records, container_factory=lambda: values)
        key, group = folded.pull()
        print(f"{key}: {len(group)} values, spilled to disk: {group.spilled}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    example_text_stream()
    example_unique_and_folded()
    example_merge()
    example_reconcile()
    example_spilling_groups()
