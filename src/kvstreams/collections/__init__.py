"""Containers for aggregating stream values."""

from kvstreams.collections.spill_list import SpillList

__all__ = [
    "SpillList",
]
