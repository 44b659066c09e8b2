import random

import pytest

from succinctpy.darray import DArray


def _check(v):
    d1 = DArray(v)
    d0 = DArray(v, select_ones=False)
    rank1 = 0
    rank0 = 0
    for i, bit in enumerate(v):
        if bit:
            assert d1.select(rank1) == i
            rank1 += 1
        else:
            assert d0.select(rank0) == i
            rank0 += 1
    assert len(d1) == rank1
    assert len(d0) == rank0


N = 10000


def test_random():
    rng = random.Random(42)
    _check([rng.random() < 0.5 for _ in range(N)])


def test_empty():
    _check([])
    assert len(DArray([])) == 0


def test_singleton():
    v = [False] * N
    v[37] = True
    _check(v)
    assert DArray(v).select(0) == 37


def test_full():
    _check([True] * N)


def test_sparse():
    rng = random.Random(42)
    big_n = (1 << 16) * 4
    v = [False] * big_n
    cur = 0
    while cur < big_n:
        v[cur] = True
        cur += rng.randrange(1024)
    _check(v)


def test_zero_select_ignores_padding():
    d0 = DArray([True] * 3, select_ones=False)
    assert len(d0) == 0
    d0 = DArray([False] * 70, select_ones=False)
    assert len(d0) == 70
    assert d0.select(69) == 69


def test_select_out_of_range():
    d1 = DArray([True, False, True])
    assert d1.select(1) == 2
    with pytest.raises(IndexError):
        d1.select(2)
    with pytest.raises(IndexError):
        d1.select(-1)