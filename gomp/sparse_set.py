"""A sparse set mapping integer keys to densely packed values."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from gomp.chunk_array import ChunkArray
from gomp.chunk_map import ChunkMap

T = TypeVar("T")

_MISSING = object()


class SparseSet(Generic[T]):
    """Values packed densely, found through a sparse key-to-position map."""

    def __init__(self) -> None:
        self._sparse: ChunkMap[int] = ChunkMap(5, 10)
        self._dense_data: ChunkArray[T] = ChunkArray(5, 10)
        self._dense_index: ChunkArray[int] = ChunkArray(5, 10)

    def set(self, key: int, data: T) -> T:
        """Store ``data`` under ``key``, replacing any value already there."""
        pos = self._sparse.get(key, _MISSING)
        if pos is not _MISSING:
            return self._dense_data.set(pos, data)
        index = self._dense_data.append(data)
        self._dense_index.append(key)
        self._sparse.set(key, index)
        return data

    def get(self, key: int, default: T | None = None) -> T | None:
        """Return the value stored under ``key`` or ``default``."""
        pos = self._sparse.get(key, _MISSING)
        if pos is _MISSING:
            return default
        try:
            return self._dense_data.get(pos)
        except IndexError:
            return default

    def __contains__(self, key: object) -> bool:
        return key in self._sparse

    def _with_keys(self, entries) -> Iterator[tuple[int, T]]:
        for position, value in entries:
            try:
                key = self._dense_index.get(position.global_index)
            except IndexError:
                continue
            yield key, value

    def all(self) -> Iterator[tuple[int, T]]:
        """Yield ``(key, value)`` pairs, most recently packed first."""
        return self._with_keys(self._dense_data.all())

    def all_parallel(self) -> Iterator[tuple[int, T]]:
        """Yield ``(key, value)`` pairs in worker-split order."""
        return self._with_keys(self._dense_data.all_parallel())

    def all_data(self) -> Iterator[T]:
        """Yield every value, most recently packed first."""
        for _, value in self._dense_data.all():
            yield value

    def all_data_parallel(self) -> Iterator[T]:
        """Yield every value in worker-split order."""
        return self._dense_data.all_data_parallel()

    def soft_delete(self, key: int) -> None:
        """Remove ``key``, moving the last packed value into its place."""
        data_index = self._sparse.get(key, _MISSING)
        if data_index is _MISSING:
            return
        try:
            last_dense, back_key = self._dense_index.last()
        except IndexError:
            return
        self._dense_data.swap(last_dense, data_index)
        self._dense_index.swap(last_dense, data_index)
        self._sparse.swap_data(back_key, key)
        self._sparse.delete(key)
        self._dense_data.soft_reduce()
        self._dense_index.soft_reduce()

    def clean(self) -> None:
        """Release storage left behind by deletions."""
        self._dense_data.clean()
        self._dense_index.clean()

    def __len__(self) -> int:
        return len(self._dense_data)