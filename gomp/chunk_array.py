"""A growable array stored in chunks whose capacity doubles."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, TypeVar

from gomp.intlog import fast_int_log2

T = TypeVar("T")


@dataclass(frozen=True)
class ChunkArrayIndex:
    """Position of an element: its slot within a chunk, the chunk's first index and the chunk number."""

    local: int
    global_offset: int
    page: int

    @property
    def global_index(self) -> int:
        """Flat index of the element in the whole array."""
        return self.global_offset + self.local


@dataclass
class _Chunk:
    start: int
    capacity: int
    data: list[Any] = field(default_factory=list)
    size: int = 0


class ChunkArray(Generic[T]):
    """Append-only array whose chunk ``i`` holds ``2**i << chunk_power`` elements.

    Elements never move between chunks, so a flat index maps to its chunk
    with an integer logarithm.
    """

    def __init__(self, buffer_capacity_power: int, chunk_capacity_power: int) -> None:
        if buffer_capacity_power < 0 or chunk_capacity_power < 0:
            raise ValueError("capacity powers must not be negative")
        self.initial_buffer_capacity = 1 << buffer_capacity_power
        self._chunk_power = chunk_capacity_power
        self._chunks: list[_Chunk] = [self._make_chunk(0)]
        self._current = 0
        self._size = 0
        self.parallel_count = (os.cpu_count() or 2) // 2

    def _make_chunk(self, page: int) -> _Chunk:
        return _Chunk(
            start=((1 << page) - 1) << self._chunk_power,
            capacity=1 << (self._chunk_power + page),
        )

    def _page_id(self, index: int) -> int:
        return fast_int_log2((index >> self._chunk_power) + 1)

    def _locate(self, index: int) -> tuple[_Chunk, int]:
        if not 0 <= index < self._size:
            raise IndexError(f"chunk array index {index} out of range")
        chunk = self._chunks[self._page_id(index)]
        return chunk, index - chunk.start

    def __len__(self) -> int:
        return self._size

    def get(self, index: int) -> T:
        """Return the element at ``index``."""
        chunk, local = self._locate(index)
        return chunk.data[local]

    def set(self, index: int, value: T) -> T:
        """Replace the element at ``index`` and return the stored value."""
        chunk, local = self._locate(index)
        chunk.data[local] = value
        return value

    def append(self, value: T) -> int:
        """Add ``value`` at the end and return its index."""
        chunk = self._chunks[self._current]
        if chunk.size >= chunk.capacity:
            self._current += 1
            if self._current == len(self._chunks):
                self._chunks.append(self._make_chunk(self._current))
            chunk = self._chunks[self._current]
        if chunk.size < len(chunk.data):
            chunk.data[chunk.size] = value
        else:
            chunk.data.append(value)
        chunk.size += 1
        index = self._size
        self._size += 1
        return index

    def soft_reduce(self) -> None:
        """Drop the last element without releasing its slot."""
        if self._size == 0:
            raise IndexError("soft_reduce on an empty chunk array")
        while self._chunks[self._current].size == 0:
            self._current -= 1
        self._chunks[self._current].size -= 1
        self._size -= 1

    def clean(self) -> None:
        """Release slots beyond the live elements of every chunk."""
        for chunk in self._chunks:
            del chunk.data[chunk.size :]

    def copy(self, from_index: int, to_index: int) -> None:
        """Overwrite the element at ``to_index`` with the one at ``from_index``."""
        self.set(to_index, self.get(from_index))

    def swap(self, i: int, j: int) -> None:
        """Exchange the elements at ``i`` and ``j``."""
        first, first_local = self._locate(i)
        second, second_local = self._locate(j)
        first.data[first_local], second.data[second_local] = (
            second.data[second_local],
            first.data[first_local],
        )

    def last(self) -> tuple[int, T]:
        """Return the index and value of the last element."""
        if self._size == 0:
            raise IndexError("last on an empty chunk array")
        index = self._size - 1
        return index, self.get(index)

    def all(self) -> Iterator[tuple[ChunkArrayIndex, T]]:
        """Yield every element with its position, from the last element to the first."""
        for page in range(self._current, -1, -1):
            chunk = self._chunks[page]
            for local in range(chunk.size - 1, -1, -1):
                if local >= len(chunk.data) or local >= chunk.size:
                    continue
                yield ChunkArrayIndex(local, chunk.start, page), chunk.data[local]

    def _segments(self) -> Iterator[tuple[int, _Chunk, range]]:
        depth = max(self.parallel_count.bit_length() - 1, 0)
        for page in range(self._current, -1, -1):
            chunk = self._chunks[page]
            if depth:
                order = range(chunk.size)
                depth -= 1
            else:
                order = range(chunk.size - 1, -1, -1)
            yield page, chunk, order

    def all_parallel(self) -> Iterator[tuple[ChunkArrayIndex, T]]:
        """Yield every element with its position in worker-split order.

        The largest chunks are walked forwards, as they would be divided
        among ``parallel_count`` workers; the rest are walked backwards.
        """
        for page, chunk, order in self._segments():
            for local in order:
                if local >= len(chunk.data) or local >= chunk.size:
                    continue
                yield ChunkArrayIndex(local, chunk.start, page), chunk.data[local]

    def all_data_parallel(self) -> Iterator[T]:
        """Yield every element in the same order as :meth:`all_parallel`."""
        for _, value in self.all_parallel():
            yield value