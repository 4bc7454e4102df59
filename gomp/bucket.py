"""A fixed-capacity storage block with a soft size."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class Bucket(Generic[T]):
    """Contiguous storage whose live length can shrink without releasing slots."""

    def __init__(self, size: int, bucket_id: int = 0) -> None:
        if size < 0:
            raise ValueError("bucket size must not be negative")
        self.bucket_id = bucket_id
        self._capacity = size
        self._data: list[T] = []
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        return iter(self._data[: self._size])

    def cap_left(self) -> int:
        """Return how many more slots fit before the capacity is exceeded."""
        return self._capacity - len(self._data)

    def _grow_capacity(self) -> None:
        self._capacity = max(self._capacity, len(self._data))

    def append(self, value: T) -> int:
        """Store ``value`` after the live elements and return its index."""
        index = self._size
        if index >= len(self._data):
            self._data.append(value)
            self._grow_capacity()
        else:
            self._data[index] = value
        self._size += 1
        return index

    def get(self, index: int) -> T:
        """Return the stored slot at ``index``, live or not."""
        if not 0 <= index < len(self._data):
            raise IndexError(f"bucket index {index} out of range")
        return self._data[index]

    def exists(self, index: int) -> bool:
        """Return whether ``index`` is within the live elements."""
        return 0 <= index < self._size

    def set(self, index: int, value: T, empty_value: T) -> T:
        """Store ``value`` at ``index``, padding with ``empty_value``; the size becomes index + 1."""
        if index < 0:
            raise IndexError(f"bucket index {index} out of range")
        missing = index + 1 - len(self._data)
        if missing > 0:
            self._data.extend([empty_value] * missing)
            self._grow_capacity()
        self._data[index] = value
        self._size = index + 1
        return value

    def swap(self, i: int, j: int) -> None:
        """Exchange the slots at ``i`` and ``j``."""
        if i == j:
            return
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def soft_reduce(self) -> None:
        """Drop the last live element without releasing its slot."""
        if self._size == 0:
            raise IndexError("soft_reduce on an empty bucket")
        self._size -= 1

    def clean(self) -> None:
        """Release slots beyond the live elements."""
        self._data = self._data[: self._size]