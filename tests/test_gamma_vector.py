import random

import pytest

from succinctpy.gamma_vector import GammaVector


def _random_vector(size, seed=42):
    rng = random.Random(seed)
    values = []
    for _ in range(size):
        low_bit = rng.getrandbits(1)
        if rng.random() < 1 / 3:
            values.append(low_bit)
        else:
            values.append((rng.getrandbits(31) << 1) | low_bit)
    return values


TEST_SIZE = 12345


def test_random_access():
    values = _random_vector(TEST_SIZE)
    vector = GammaVector(values)
    assert len(vector) == len(values)
    assert [vector[i] for i in range(len(values))] == values


def test_iteration():
    values = _random_vector(TEST_SIZE)
    vector = GammaVector(values)
    assert list(vector) == values


def test_iter_from_random_starts():
    values = _random_vector(TEST_SIZE)
    vector = GammaVector(values)
    rng = random.Random(42)
    pos = 0
    while pos < len(vector):
        assert next(vector.iter_from(pos)) == values[pos]
        pos += 1
        pos += rng.randrange(len(vector) - pos + 1)


def test_iter_from_tail():
    values = _random_vector(500, seed=3)
    vector = GammaVector(values)
    assert list(vector.iter_from(250)) == values[250:]
    assert list(vector.iter_from(len(values))) == []


def test_empty():
    vector = GammaVector([])
    assert len(vector) == 0
    assert list(vector) == []
    with pytest.raises(IndexError):
        vector[0]


def test_extreme_values():
    values = [0, (1 << 64) - 2, 1, (1 << 63) - 1, 1 << 63, 0]
    vector = GammaVector(values)
    assert [vector[i] for i in range(len(values))] == values
    assert list(vector) == values


def test_negative_index():
    values = [5, 6, 7]
    vector = GammaVector(values)
    assert vector[-1] == 7
    assert vector[-3] == 5
    with pytest.raises(IndexError):
        vector[-4]
    with pytest.raises(IndexError):
        vector[3]


def test_invalid_values():
    with pytest.raises(ValueError):
        GammaVector([(1 << 64) - 1])
    with pytest.raises(ValueError):
        GammaVector([-1])


def test_iter_from_out_of_range():
    vector = GammaVector([1, 2])
    with pytest.raises(IndexError):
        vector.iter_from(3)
    with pytest.raises(IndexError):
        vector.iter_from(-1)