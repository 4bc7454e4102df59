"""A sparse integer-keyed map stored in pages that double in size."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from gomp.intlog import fast_int_log2

T = TypeVar("T")


@dataclass
class _Page:
    start: int
    values: list[Any] = field(default_factory=list)
    present: bytearray = field(default_factory=bytearray)


class ChunkMap(Generic[T]):
    """Map from non-negative ints to values; page ``i`` holds ``2**i << chunk_power`` keys."""

    def __init__(self, buffer_capacity_power: int, chunk_capacity_power: int) -> None:
        if buffer_capacity_power < 0 or chunk_capacity_power < 0:
            raise ValueError("capacity powers must not be negative")
        self._buffer_power = buffer_capacity_power
        self._chunk_power = chunk_capacity_power
        self._pages: list[_Page] = [
            self._new_page(i) for i in range(1 << buffer_capacity_power)
        ]

    def _new_page(self, page_id: int) -> _Page:
        return _Page(start=((1 << page_id) - 1) << self._chunk_power)

    def _page_id(self, index: int) -> int:
        return fast_int_log2((index >> self._chunk_power) + 1)

    def _find(self, index: int) -> tuple[_Page, int] | None:
        if index < 0:
            return None
        page_id = self._page_id(index)
        if page_id >= len(self._pages):
            return None
        page = self._pages[page_id]
        local = index - page.start
        if local >= len(page.values):
            return None
        return page, local

    def get(self, index: int, default: T | None = None) -> T | None:
        """Return the value at ``index`` or ``default`` when absent."""
        found = self._find(index)
        if found is None:
            return default
        page, local = found
        return page.values[local] if page.present[local] else default

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, int):
            return False
        found = self._find(index)
        return found is not None and bool(found[0].present[found[1]])

    def swap_data(self, i: int, j: int) -> None:
        """Exchange the stored values at ``i`` and ``j``, leaving presence untouched."""
        first = self._find(i)
        second = self._find(j)
        if first is None or second is None:
            raise IndexError("out of range")
        (p1, l1), (p2, l2) = first, second
        p1.values[l1], p2.values[l2] = p2.values[l2], p1.values[l1]

    def set(self, index: int, value: T) -> None:
        """Store ``value`` at ``index``, allocating pages as needed."""
        if index < 0:
            raise IndexError(f"index {index} must not be negative")
        page_id = self._page_id(index)
        last = len(self._pages) - 1
        if page_id > last:
            delta = page_id - last
            growth = 1 << self._buffer_power
            if delta < growth:
                self._buffer_power += 1
            else:
                growth = delta
            self._pages.extend(self._new_page(last + 1 + i) for i in range(growth))
        page = self._pages[page_id]
        local = index - page.start
        if local >= len(page.values):
            size = 1 << (self._chunk_power + page_id)
            page.values = [None] * size
            page.present = bytearray(size)
        page.values[local] = value
        page.present[local] = 1

    def delete(self, index: int) -> None:
        """Mark ``index`` as absent; unknown indices are ignored."""
        found = self._find(index)
        if found is not None:
            page, local = found
            page.present[local] = 0