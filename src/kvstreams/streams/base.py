"""
The sorted stream contract.

A sorted stream is a pull-based sequence of ``(key, value)`` records whose
keys never decrease. Concrete streams provide ``read``, ``_exhausted`` and
``_rewind``; ``SortedStream`` layers one level of pushback, filtering and
bulk iteration on top.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Tuple

from kvstreams.errors import PushbackError

if TYPE_CHECKING:
    from kvstreams.streams.compare import ComparisonStream

Record = Tuple[Any, Any]
Predicate = Callable[[Any, Any], bool]


class Scalar(str):
    """A record value made of exactly one field."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Scalar({str.__repr__(self)})"


class FieldList(list):
    """A record value made of two or more fields, in line order."""

    def __repr__(self) -> str:
        return f"FieldList({list.__repr__(self)})"


class SortedStream(ABC):
    """
    Base class for streams of key/value records sorted by ascending key.

    Subclasses implement:

        read        - return the next (key, value) record, or None at end
        _exhausted  - true when the source has no more raw records
        _rewind     - reposition the source at its start

    and get, from this class:

        pull              - next record, honouring a pending pushback
        pushback          - re-deliver the last pulled record on the next pull
        at_end            - no raw records left and nothing pushed back
        rewind            - reset to the start, dropping any pushback
        filters           - predicates applied by bulk iteration only
        filtered_iterate  - visit every record that passes the filters
        diff_against      - pair this stream with another for comparison
    """

    def __init__(self):
        self.filters: List[Predicate] = []
        self._last: Optional[Record] = None
        self._pending = False

    # Implemented by concrete streams

    @abstractmethod
    def read(self) -> Optional[Record]:
        """Consume and return the next raw record, or None."""
        pass

    @abstractmethod
    def _exhausted(self) -> bool:
        """True when the underlying source has nothing left to read."""
        pass

    @abstractmethod
    def _rewind(self) -> None:
        """Reposition the underlying source at its start."""
        pass

    # Shared protocol

    @property
    def pending(self) -> bool:
        """True while a pushed back record waits for the next pull."""
        return self._pending

    def at_end(self) -> bool:
        return not self._pending and self._exhausted()

    def rewind(self) -> 'SortedStream':
        """Reset iteration to the start and return the stream."""
        self._rewind()
        self._pending = False
        self._last = None
        return self

    def pull(self) -> Optional[Record]:
        """
        Return the next record.

        A pending pushback is delivered first. At the end of the stream
        the result is None, and ``read`` is not called.
        """
        if self._pending:
            self._pending = False
            return self._last
        if self.at_end():
            return None
        self._last = self.read()
        return self._last

    def pushback(self) -> None:
        """
        Push the last pulled record back onto the stream.

        Raises:
            PushbackError: a pushback is already pending. Only one level
                is supported.
        """
        if self._pending:
            raise PushbackError(f"cannot push back twice in a row on {self!r}")
        self._pending = True

    def add_filter(self, predicate: Predicate) -> 'SortedStream':
        """Append a ``(key, value) -> bool`` filter and return the stream."""
        self.filters.append(predicate)
        return self

    def _passes_filters(self, record: Optional[Record]) -> bool:
        if record is None or record[0] is None:
            return False
        key, value = record
        return all(predicate(key, value) for predicate in self.filters)

    def __iter__(self) -> Iterator[Record]:
        """Pull records until the end, yielding those that pass the filters."""
        while not self.at_end():
            record = self.pull()
            if self._passes_filters(record):
                yield record

    def filtered_iterate(self, visit: Callable[[Any, Any], Any]) -> None:
        """Call ``visit(key, value)`` for every record that passes the filters."""
        for key, value in self:
            visit(key, value)

    def diff_against(self, other: 'SortedStream') -> 'ComparisonStream':
        """Return a comparison of this stream (left) against ``other`` (right)."""
        from kvstreams.streams.compare import ComparisonStream
        return ComparisonStream(self, other)
