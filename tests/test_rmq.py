import random
from itertools import accumulate

import pytest

from succinctpy.bp_vector import BpVector
from succinctpy.rmq import excess_rmq


def random_bp(rng, n):
    """Random balanced sequence of n/2 pairs, as booleans."""
    pairs = n // 2
    bits = []
    opened = closed = 0
    while closed < pairs:
        depth = opened - closed
        if opened < pairs and (depth == 0 or rng.random() < 0.5):
            bits.append(True)
            opened += 1
        else:
            bits.append(False)
            closed += 1
    return bits


def random_binary_tree(rng, n):
    """Balanced parentheses of a random binary tree with about n/2 nodes."""
    nodes = max(1, n // 2)
    bits = []
    stack = [nodes]
    while stack:
        item = stack.pop()
        if item is None:
            bits.append(False)
            continue
        bits.append(True)
        rest = item - 1
        left = rng.randint(0, rest)
        stack.append(None)
        if rest - left:
            stack.append(rest - left)
        if left:
            stack.append(left)
    return bits


def bp_path(n):
    half = n // 2
    return [True] * half + [False] * half


def check_rmq(bits, rng):
    bp = BpVector(bits)
    n = len(bits)
    prefix = [0] + list(accumulate(1 if bit else -1 for bit in bits))
    starts = [1, 8, 64, 8192, n] + [rng.randrange(n) for _ in range(10)]
    step = max(1, n // 200)
    checked = 0
    for a in starts:
        if a > n:
            continue
        assert excess_rmq(bp, a, a) == (a, prefix[a])
        min_exc = prefix[a]
        min_idx = a
        for b in range(a + 1, n):
            if prefix[b] < min_exc:
                min_exc = prefix[b]
                min_idx = b
            if (b - a) % step == 0 or b % 64 in (0, 1, 63) or b == n - 1:
                assert excess_rmq(bp, a, b) == (min_idx, min_exc), (a, b)
                checked += 1
    return checked


def test_pinned_values():
    bp = BpVector("(()())")
    assert excess_rmq(bp, 1, 5) == (1, 1)
    assert excess_rmq(bp, 2, 5) == (3, 1)
    assert excess_rmq(bp, 2, 6) == (6, 0)
    assert excess_rmq(bp, 0, 6) == (0, 0)
    assert excess_rmq(bp, 4, 4) == (4, 2)


def test_empty_vector():
    bp = BpVector([])
    assert excess_rmq(bp, 0, 0) == (0, 0)


def test_invalid_ranges():
    bp = BpVector("()()")
    with pytest.raises(IndexError):
        excess_rmq(bp, 3, 2)
    with pytest.raises(IndexError):
        excess_rmq(bp, 0, 5)
    with pytest.raises(IndexError):
        excess_rmq(bp, -1, 2)


def test_full_range_ends_at_zero():
    rng = random.Random(7)
    bits = random_bp(rng, 3000)
    bp = BpVector(bits)
    idx, exc = excess_rmq(bp, 1, len(bits))
    assert exc == 0
    assert bp.excess(idx) == 0


def test_random_parentheses():
    rng = random.Random(42)
    assert check_rmq(random_bp(rng, 40000), rng) > 0


@pytest.mark.parametrize("size", [2, 4, 512, 514, 8190, 8192, 8194, 16384, 16386, 40000])
def test_random_binary_tree(size):
    rng = random.Random(size)
    assert check_rmq(random_binary_tree(rng, size), rng) > 0


@pytest.mark.parametrize("size", [2, 4, 512, 514, 8190, 8192, 8194, 16384, 16386])
@pytest.mark.parametrize("iterations", [1, 2, 3])
def test_nested_parentheses(size, iterations):
    rng = random.Random(size * 10 + iterations)
    bits = bp_path(size) * iterations
    assert check_rmq(bits, rng) > 0