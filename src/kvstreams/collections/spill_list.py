"""
SpillList: an append-only sequence that spills to disk past a threshold.
"""

import os
import pickle
import logging
import tempfile
from itertools import islice
from collections.abc import Sequence
from typing import Any, Iterable, Iterator, List, Optional, Union

from kvstreams.config import config

logger = logging.getLogger(__name__)


class SpillList(Sequence):
    """
    An ordered container for aggregated values that may not fit in memory.

    Values are appended in memory until there are more than ``threshold``
    of them, or until the system reports memory pressure, at which point
    the in-memory values are written in order to a temporary file. Reading
    back (iteration, indexing, comparison) always yields values in append
    order. Use it as the ``container_factory`` of a ``FoldedStream`` or
    ``MultiStream`` when a single key can gather a huge group.
    """

    def __init__(self, threshold: Optional[int] = None, storage_path: Optional[str] = None):
        """
        Initialize SpillList.

        Args:
            threshold: Number of items to keep in memory (None for the configured default)
            storage_path: Directory for the spill file (None for the configured default)
        """
        self.threshold = config.spill_threshold if threshold is None else int(threshold)
        if self.threshold < 1:
            raise ValueError(f"SpillList threshold must be at least 1, got {self.threshold}")
        self.storage_path = storage_path or config.external_storage_path

        self._hot_data: List[Any] = []
        self._cold_count = 0
        self._cold_storage: Optional[str] = None
        self._appends_since_check = 0

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__} len={len(self)} "
                f"in_memory={len(self._hot_data)} spilled={self._cold_count}>")

    def __len__(self) -> int:
        return self._cold_count + len(self._hot_data)

    def __getitem__(self, index: Union[int, slice]) -> Any:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]

        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("SpillList index out of range")

        if index >= self._cold_count:
            return self._hot_data[index - self._cold_count]
        cold = self._iter_cold()
        try:
            return next(islice(cold, index, None))
        finally:
            cold.close()

    def __iter__(self) -> Iterator[Any]:
        yield from self._iter_cold()
        yield from self._hot_data

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Sequence) or isinstance(other, (str, bytes)):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None

    @property
    def spilled(self) -> bool:
        """True once any value has been written to disk."""
        return self._cold_count > 0

    def append(self, value: Any) -> None:
        """Append a value, spilling to disk if needed."""
        self._hot_data.append(value)
        self._appends_since_check += 1

        if len(self._hot_data) > self.threshold:
            self._spill_to_disk()
        elif self._appends_since_check >= config.pressure_check_interval:
            self._appends_since_check = 0
            if config.under_memory_pressure():
                self._spill_to_disk()

    def extend(self, iterable: Iterable[Any]) -> None:
        """Append every value from iterable."""
        for item in iterable:
            self.append(item)

    def spill_to_disk(self) -> None:
        """Force every in-memory value out to disk."""
        self._spill_to_disk()

    def _spill_to_disk(self) -> None:
        if not self._hot_data:
            return

        if self._cold_storage is None:
            os.makedirs(self.storage_path, exist_ok=True)
            fd, self._cold_storage = tempfile.mkstemp(suffix='.spill', dir=self.storage_path)
            os.close(fd)

        with open(self._cold_storage, 'ab') as f:
            for item in self._hot_data:
                pickle.dump(item, f)

        logger.debug("Spilled %d values to %s", len(self._hot_data), self._cold_storage)
        self._cold_count += len(self._hot_data)
        self._hot_data = []
        self._appends_since_check = 0

    def _iter_cold(self) -> Iterator[Any]:
        if self._cold_storage is None:
            return
        with open(self._cold_storage, 'rb') as f:
            for _ in range(self._cold_count):
                yield pickle.load(f)

    def close(self) -> None:
        """Drop all values and remove the spill file."""
        self._hot_data = []
        self._cold_count = 0
        if self._cold_storage and os.path.exists(self._cold_storage):
            os.unlink(self._cold_storage)
        self._cold_storage = None

    def __enter__(self) -> 'SpillList':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __del__(self):
        """Clean up temporary files."""
        storage = getattr(self, '_cold_storage', None)
        if storage and os.path.exists(storage):
            try:
                os.unlink(storage)
            except OSError:
                pass
