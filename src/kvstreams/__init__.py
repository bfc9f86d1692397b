"""
kvstreams: composable streams over sorted key/value records.

Sorted sources are read one record at a time and combined with unique,
fold, k-way merge and pairwise comparison streams, so two large sorted
inventories can be reconciled without loading either into memory.
"""

from kvstreams.config import StreamsConfig, SectionConfig
from kvstreams.errors import (
    KVStreamsError,
    StreamError,
    PushbackError,
    RewindError,
    ConfigError,
)
from kvstreams.streams import (
    SortedStream,
    Scalar,
    FieldList,
    RecordStream,
    TextStream,
    open_text_stream,
    UniqueStream,
    FoldedStream,
    MultiStream,
    Comparison,
    ComparisonStream,
)
from kvstreams.collections import SpillList
from kvstreams.report import Reporter

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "StreamsConfig",
    "SectionConfig",
    "KVStreamsError",
    "StreamError",
    "PushbackError",
    "RewindError",
    "ConfigError",
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
    "SpillList",
    "Reporter",
]
