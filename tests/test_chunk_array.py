from dataclasses import dataclass

import pytest

from gomp.chunk_array import ChunkArray, ChunkArrayIndex

BUFFER_SIZE = 3
CHUNK_CAPACITY = 10


@dataclass
class _Inner:
    id: int = 0


@dataclass
class _Struct:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: _Inner | None = None


def _filled(count, power=2):
    arr = ChunkArray(1, power)
    for n in range(count):
        arr.append(n)
    return arr


def test_append_returns_sequential_indices():
    arr = ChunkArray(BUFFER_SIZE, CHUNK_CAPACITY)
    indices = [arr.append(n * 10) for n in range(5)]
    assert indices == [0, 1, 2, 3, 4]
    assert len(arr) == 5
    assert arr.get(3) == 30


def test_get_across_chunk_boundaries():
    arr = _filled(30)
    assert [arr.get(n) for n in range(30)] == list(range(30))


def test_get_out_of_range_raises():
    arr = _filled(3)
    with pytest.raises(IndexError):
        arr.get(3)


def test_set_replaces_and_rejects_out_of_range():
    arr = _filled(10)
    assert arr.set(7, "seven") == "seven"
    assert arr.get(7) == "seven"
    with pytest.raises(IndexError):
        arr.set(10, "ten")


def test_delete_all_then_clean_leaves_empty():
    inner = _Inner(0)
    arr = ChunkArray(BUFFER_SIZE, CHUNK_CAPACITY)
    count = 5000
    for _ in range(count):
        arr.append(_Struct(float(count), float(count * 2), float(count * 3), inner))
    for _ in range(count):
        arr.soft_reduce()
    arr.clean()
    assert len(arr) == 0
    assert list(arr.all()) == []


def test_soft_reduce_on_empty_raises():
    arr = ChunkArray(1, 2)
    with pytest.raises(IndexError):
        arr.soft_reduce()


def test_soft_reduce_across_chunks_then_append():
    arr = _filled(13)
    for _ in range(10):
        arr.soft_reduce()
    arr.clean()
    assert len(arr) == 3
    for n in range(20):
        arr.append(100 + n)
    assert len(arr) == 23
    assert [arr.get(n) for n in range(3)] == [0, 1, 2]
    assert [arr.get(n) for n in range(3, 23)] == [100 + n for n in range(20)]


def test_update_through_all():
    inner = _Inner(0)
    arr = ChunkArray(BUFFER_SIZE, CHUNK_CAPACITY)
    for n in range(3000):
        arr.append(_Struct(float(n), float(n * 2), float(n * 3), inner))
    for _, item in arr.all():
        item.x = 0
        item.y = 0
        item.z = 0
    assert all(
        (arr.get(n).x, arr.get(n).y, arr.get(n).z) == (0, 0, 0) for n in range(3000)
    )


def test_append_many():
    arr = ChunkArray(BUFFER_SIZE, CHUNK_CAPACITY)
    for _ in range(100_000):
        arr.append(_Struct(1.0, 4.0, 9.0))
    assert len(arr) == 100_000
    assert arr.get(99_999) == _Struct(1.0, 4.0, 9.0)


def test_all_parallel_covers_every_element():
    arr = _filled(30)
    arr.parallel_count = 4
    entries = list(arr.all_parallel())
    assert sorted(value for _, value in entries) == list(range(30))
    assert all(pos.global_index == value for pos, value in entries)


def test_all_parallel_single_worker_matches_all():
    arr = _filled(30)
    arr.parallel_count = 1
    assert list(arr.all_parallel()) == list(arr.all())


def test_all_data_parallel_values():
    arr = _filled(25)
    arr.parallel_count = 8
    assert sorted(arr.all_data_parallel()) == list(range(25))


def test_all_parallel_skips_reduced_elements():
    arr = _filled(20)
    arr.parallel_count = 4
    arr.soft_reduce()
    arr.soft_reduce()
    assert sorted(arr.all_data_parallel()) == list(range(18))


def test_last():
    arr = _filled(9)
    assert arr.last() == (8, 8)
    with pytest.raises(IndexError):
        ChunkArray(1, 2).last()


def test_copy_and_swap():
    arr = _filled(10)
    arr.copy(1, 8)
    assert arr.get(8) == 1
    arr.swap(0, 9)
    assert (arr.get(0), arr.get(9)) == (9, 0)


def test_negative_powers_rejected():
    with pytest.raises(ValueError):
        ChunkArray(-1, 2)