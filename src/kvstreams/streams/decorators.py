"""
Streams that wrap a single sorted stream and regroup its records by key.
"""

from typing import Any, Callable, Optional

from kvstreams.streams.base import Record, SortedStream


class UniqueStream(SortedStream):
    """
    Drop records whose key repeats the previous one.

    When several adjacent records share a key, the first is returned and
    the rest are discarded. The wrapped stream must be sorted.
    """

    def __init__(self, stream: SortedStream):
        super().__init__()
        self.stream = stream

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} wrapping {self.stream!r}>"

    def _exhausted(self) -> bool:
        return self.stream.at_end()

    def _rewind(self) -> None:
        self.stream.rewind()

    def read(self) -> Optional[Record]:
        upcoming = self.stream.pull()
        if upcoming is None:
            return None

        while True:
            next_record = self.stream.pull()

            if next_record is None:
                return upcoming

            if next_record[0] != upcoming[0]:
                self.stream.pushback()
                return upcoming


class FoldedStream(SortedStream):
    """
    Fold the values of adjacent records with equal keys into one container.

    Values are always returned in a container built by ``container_factory``
    (a ``list`` unless told otherwise), even for a key that occurs once.
    The container must support ``append``.
    """

    def __init__(self, stream: SortedStream, container_factory: Callable[[], Any] = list):
        super().__init__()
        self.stream = stream
        self.container_factory = container_factory

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} folding {self.stream!r}>"

    def _exhausted(self) -> bool:
        return self.stream.at_end()

    def _rewind(self) -> None:
        self.stream.rewind()

    def read(self) -> Optional[Record]:
        upcoming = self.stream.pull()
        if upcoming is None:
            return None

        key = upcoming[0]
        values = self.container_factory()
        values.append(upcoming[1])

        while True:
            next_record = self.stream.pull()

            if next_record is None:
                return key, values

            if next_record[0] == key:
                values.append(next_record[1])
            else:
                self.stream.pushback()
                return key, values
