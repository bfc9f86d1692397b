"""
Pairwise comparison (full outer join) of two sorted streams.
"""

from typing import Any, Callable, Iterator, NamedTuple, Optional, Tuple

from kvstreams.streams.base import SortedStream


class Comparison(NamedTuple):
    """One step of a comparison: a key and its value on each side, None where absent."""
    key: Any
    left: Any
    right: Any

    @property
    def only_left(self) -> bool:
        return self.left is not None and self.right is None

    @property
    def only_right(self) -> bool:
        return self.left is None and self.right is not None

    @property
    def in_both(self) -> bool:
        return self.left is not None and self.right is not None


class ComparisonStream:
    """
    Walk two sorted streams side by side.

    Every key is reported once, as:

        key in both streams       - (key, left_value, right_value)
        key only in the left one  - (key, left_value, None)
        key only in the right one - (key, None, right_value)

    Both inputs must have unique, ascending keys; wrap them in a
    ``UniqueStream`` or ``FoldedStream`` first if they might not. Duplicate
    keys give an unspecified interleaving, but every step still consumes
    at least one record so the walk always ends.
    """

    def __init__(self, left: SortedStream, right: SortedStream):
        self.left = left
        self.right = right

    @property
    def streams(self) -> Tuple[SortedStream, SortedStream]:
        return self.left, self.right

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} comparing stream {self.left!r} with {self.right!r}>"

    def at_end(self) -> bool:
        return self.left.at_end() and self.right.at_end()

    def rewind(self) -> 'ComparisonStream':
        self.left.rewind()
        self.right.rewind()
        return self

    def get(self) -> Optional[Comparison]:
        """Return the next comparison, or None when both sides are done."""
        if self.at_end():
            return None

        left = self.left.pull()
        right = self.right.pull()

        k1, v1 = left if left is not None else (None, None)
        k2, v2 = right if right is not None else (None, None)

        if k1 is None and k2 is None:
            return None
        if k2 is None:
            return Comparison(k1, v1, None)
        if k1 is None:
            return Comparison(k2, None, v2)
        if k1 < k2:
            self.right.pushback()
            return Comparison(k1, v1, None)
        if k1 > k2:
            self.left.pushback()
            return Comparison(k2, None, v2)
        return Comparison(k1, v1, v2)

    def __iter__(self) -> Iterator[Comparison]:
        while not self.at_end():
            comparison = self.get()
            if comparison is not None:
                yield comparison

    def each(self, visit: Callable[[Any, Any, Any], Any]) -> None:
        """Call ``visit(key, left, right)`` for every comparison."""
        for key, left, right in self:
            visit(key, left, right)
