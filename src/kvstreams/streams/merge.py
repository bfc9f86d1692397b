"""
K-way merge of sorted streams.
"""

from typing import Any, Callable, List, Optional, Tuple

from kvstreams.streams.base import Record, SortedStream


class MultiStream(SortedStream):
    """
    Merge any number of sorted streams into one.

    Each record of the merged stream pairs a key with a container holding
    the values found for that key across the inputs, in input order. One
    record is pulled from every input per read; inputs whose key is not the
    smallest get their record pushed back for the next read, so at most one
    record per input is ever held.
    """

    def __init__(self, *streams: SortedStream, container_factory: Callable[[], Any] = list):
        """
        Initialize the merge.

        Args:
            *streams: Sorted streams to merge, at least one
            container_factory: Callable returning an empty container with
                ``append``; used to collect the values for each key
        """
        if not streams:
            raise ValueError("MultiStream needs at least one stream to merge")

        super().__init__()
        self.streams: Tuple[SortedStream, ...] = streams
        self.container_factory = container_factory

    def __repr__(self) -> str:
        wrapped = ', '.join(repr(stream) for stream in self.streams)
        return f"<{self.__class__.__name__} wrapping {wrapped}>"

    def _exhausted(self) -> bool:
        return all(stream.at_end() for stream in self.streams)

    def _rewind(self) -> None:
        for stream in self.streams:
            stream.rewind()

    def read(self) -> Optional[Record]:
        scorecard: List[Tuple[SortedStream, Any, Any]] = []

        for stream in self.streams:
            record = stream.pull()
            if record is not None and record[0] is not None:
                scorecard.append((stream, record[0], record[1]))

        if not scorecard:
            return None

        key = min(k for _, k, _ in scorecard)
        values = self.container_factory()

        for stream, k, v in scorecard:
            if k == key:
                values.append(v)
            else:
                stream.pushback()

        return key, values
