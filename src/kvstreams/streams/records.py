"""
Leaf stream over records that are already in Python.
"""

import reprlib
from collections.abc import Iterator as IteratorABC
from typing import Any, Callable, Iterable, Iterator, Optional, Union

from kvstreams.errors import RewindError
from kvstreams.streams.base import Record, SortedStream

_EMPTY = object()
_END = object()


class RecordStream(SortedStream):
    """
    Stream ``(key, value)`` records from an iterable.

    The source is a re-iterable collection, or a callable returning a fresh
    iterator each time it is called; either can be rewound. A bare iterator
    (a generator, say) is accepted too but can only be walked once.
    """

    def __init__(self, source: Union[Iterable[Record], Callable[[], Iterator[Record]]]):
        super().__init__()
        if isinstance(source, IteratorABC):
            self._one_shot = True
            self._source = lambda: source
        elif callable(source):
            self._one_shot = False
            self._source = source
        elif hasattr(source, '__iter__'):
            self._one_shot = False
            self._source = lambda: iter(source)
        else:
            raise TypeError("Source must be iterable or callable")

        self._description = reprlib.repr(source)
        self._iterator: Optional[Iterator[Record]] = None
        self._lookahead: Any = _EMPTY

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} from {self._description}>"

    def _peek(self) -> Any:
        if self._iterator is None:
            self._iterator = self._source()
        if self._lookahead is _EMPTY:
            self._lookahead = next(self._iterator, _END)
        return self._lookahead

    def _exhausted(self) -> bool:
        return self._peek() is _END

    def _rewind(self) -> None:
        if self._one_shot and self._iterator is not None:
            raise RewindError(f"Stream {self._description} can't be rewound: its iterator has been consumed")
        self._iterator = None
        self._lookahead = _EMPTY

    def read(self) -> Optional[Record]:
        if self._exhausted():
            return None
        record, self._lookahead = self._lookahead, _EMPTY
        if record is None:
            return None
        key, value = record
        return key, value
