"""A growable collection split into equally sized buckets."""

from __future__ import annotations

from typing import Generic, TypeVar

from gomp.bucket import Bucket

T = TypeVar("T")


class Collection(Generic[T]):
    """Values addressed by a flat index, stored in buckets of a fixed size."""

    def __init__(self, buckets: int, bucket_size: int, default_value: T) -> None:
        if bucket_size <= 0:
            raise ValueError("bucket size must be positive")
        self._initial_buckets = buckets
        self._bucket_size = bucket_size
        self._default = default_value
        self._buckets: list[Bucket[T]] = [Bucket(bucket_size, 0)]
        self._last = self._buckets[0]
        self._count = 0

    def _locate(self, index: int) -> tuple[int, int]:
        if index < self._bucket_size:
            return 0, index
        return divmod(index, self._bucket_size)

    def get(self, index: int) -> T:
        """Return the value at ``index`` or the default when it is not live."""
        bucket_id, pos = self._locate(index)
        if bucket_id >= len(self._buckets):
            return self._default
        bucket = self._buckets[bucket_id]
        if not bucket.exists(pos):
            return self._default
        return bucket.get(pos)

    def exists(self, index: int) -> bool:
        """Return whether ``index`` holds a live value."""
        bucket_id, pos = self._locate(index)
        if bucket_id >= len(self._buckets):
            return False
        return self._buckets[bucket_id].exists(pos)

    def last(self) -> tuple[int, T]:
        """Return the position within the last bucket and the value stored there."""
        pos = len(self._last) - 1
        if pos < 0:
            raise IndexError("last bucket is empty")
        return pos, self._last.get(pos)

    def set(self, index: int, value: T) -> T:
        """Store ``value`` at ``index``, adding buckets as needed."""
        bucket_id, pos = self._locate(index)
        if bucket_id >= len(self._buckets):
            self._extend(bucket_id - (len(self._buckets) - 1))
        stored = self._buckets[bucket_id].set(pos, value, self._default)
        self._count += 1
        return stored

    def append(self, value: T) -> int:
        """Add ``value`` to the last bucket and return its flat index."""
        if self._last.cap_left() < 1:
            self._extend(1)
        self._count += 1
        pos = self._last.append(value)
        return pos + self._bucket_size * self._last.bucket_id

    def soft_reduce(self) -> None:
        """Drop the last live value of the last non-empty bucket."""
        for bucket in reversed(self._buckets):
            self._last = bucket
            if len(bucket):
                break
        self._last.soft_reduce()
        self._count -= 1

    def swap(self, i: int, j: int) -> None:
        """Exchange values within a bucket; across buckets each slot is rewritten in place."""
        i_bucket, i_pos = self._locate(i)
        j_bucket, j_pos = self._locate(j)
        if i_bucket == j_bucket:
            self._buckets[i_bucket].swap(i_pos, j_pos)
            return
        first = self._buckets[i_bucket]
        second = self._buckets[j_bucket]
        first.set(i_pos, first.get(i_pos), self._default)
        second.set(j_pos, second.get(j_pos), self._default)

    def clean(self) -> None:
        """Release unused slots in every bucket."""
        for bucket in self._buckets:
            bucket.clean()

    def __len__(self) -> int:
        return self._count

    def _extend(self, count: int) -> None:
        start = len(self._buckets)
        self._buckets.extend(Bucket(0) for _ in range(count - 1))
        self._last = Bucket(self._bucket_size, start + count - 1)
        self._buckets.append(self._last)