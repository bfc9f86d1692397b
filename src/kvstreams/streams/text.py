"""
Leaf stream reading whitespace-delimited records from text.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from kvstreams.errors import RewindError
from kvstreams.streams.base import FieldList, Record, Scalar, SortedStream

logger = logging.getLogger(__name__)


class TextStream(SortedStream):
    """
    Stream records from an already-open text source, one record per line.

    Fields are separated by runs of whitespace. The first field is the key;
    the rest make up the value, which is None when there are no more
    fields, a ``Scalar`` when there is one, and a ``FieldList`` when there
    are two or more. Lines are expected to share the same number of fields
    but mismatches are passed through untouched.

    The source must support ``readline``, ``seek`` and ``closed``. The
    caller owns it and is responsible for closing it.
    """

    def __init__(self, source: IO[str]):
        super().__init__()
        self._source = source
        self._lookahead: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} from io {self._source!r}>"

    def _peek(self) -> str:
        if self._lookahead is None:
            self._lookahead = self._source.readline()
        return self._lookahead

    def _exhausted(self) -> bool:
        return self._peek() == ''

    def _rewind(self) -> None:
        if self._source.closed:
            raise RewindError(f"Stream {self._source!r} can't be rewound: it has been closed")
        self._source.seek(0)
        self._lookahead = None
        logger.debug("Rewound %r", self)

    def read(self) -> Optional[Record]:
        if self._exhausted():
            return None

        line, self._lookahead = self._lookahead, None
        fields = line.split()

        # A blank line reads as end of source
        if not fields:
            return None

        key, *rest = fields
        if not rest:
            value = None
        elif len(rest) == 1:
            value = Scalar(rest[0])
        else:
            value = FieldList(rest)

        return key, value


@contextmanager
def open_text_stream(path: Union[str, Path], encoding: str = 'utf-8') -> Iterator[TextStream]:
    """
    Open ``path`` and yield a ``TextStream`` over it.

    The file is closed on every exit path, after which the stream can no
    longer be rewound.
    """
    with open(Path(path), 'r', encoding=encoding) as f:
        yield TextStream(f)
