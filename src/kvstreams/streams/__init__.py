"""Composable pull-based streams over sorted key/value records."""

from kvstreams.streams.base import (
    SortedStream,
    Scalar,
    FieldList,
)
from kvstreams.streams.records import RecordStream
from kvstreams.streams.text import TextStream, open_text_stream
from kvstreams.streams.decorators import UniqueStream, FoldedStream
from kvstreams.streams.merge import MultiStream
from kvstreams.streams.compare import Comparison, ComparisonStream

__all__ = [
    "SortedStream",
    "Scalar",
    "FieldList",
    "RecordStream",
    "TextStream",
    "open_text_stream",
    "UniqueStream",
    "FoldedStream",
    "MultiStream",
    "Comparison",
    "ComparisonStream",
]
