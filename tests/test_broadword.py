import random

import pytest

from succinctpy import broadword as bw

INTS = [
    (1 << 64) - 1, 1 << 63, 1, 1, 1, 3, 5, 7, 0xFFF, 0xF0F, 1,
    0xFFFFFF, 0x123456, 1 << 63, (1 << 64) - 1,
]
INT_MSBS = [63, 63, 0, 0, 0, 1, 2, 2, 11, 11, 0, 23, 20, 63, 63]


def _random_words(n=200):
    rng = random.Random(42)
    return [rng.getrandbits(64) for _ in range(n)]


def test_msb_of_source_ints():
    assert [bw.msb(i) for i in INTS] == INT_MSBS


def test_msb_and_lsb_of_zero():
    assert bw.msb(0) is None
    assert bw.lsb(0) is None


def test_lsb_of_single_bits_and_mixed():
    for k in range(64):
        assert bw.lsb(1 << k) == k
        assert bw.msb(1 << k) == k
    assert bw.lsb(0b101000) == 3


def test_bit_position_single_bit():
    for k in range(64):
        assert bw.bit_position(1 << k) == k


def test_bit_position_rejects_multiple_bits():
    with pytest.raises(ValueError):
        bw.bit_position(3)


def test_popcount_matches_bit_count():
    for word in INTS + _random_words():
        assert bw.popcount(word) == bin(word).count("1")


def test_byte_counts_pinned():
    assert bw.byte_counts(0x0F0300FF) == 0x04020008


def test_bytes_sum_of_byte_counts():
    assert bw.bytes_sum(bw.byte_counts((1 << 64) - 1)) == 64
    assert bw.bytes_sum(0) == 0


def test_reverse_bytes_pinned():
    assert bw.reverse_bytes(0x0102030405060708) == 0x0807060504030201


def test_reverse_bits_single_bit():
    assert bw.reverse_bits(1) == 1 << 63


def test_reverse_is_involution():
    for word in _random_words():
        assert bw.reverse_bits(bw.reverse_bits(word)) == word
        assert bw.reverse_bytes(bw.reverse_bytes(word)) == word


def test_select_in_word_invariant():
    for word in _random_words(50) + INTS:
        ones = bw.popcount(word)
        previous = -1
        for k in range(ones):
            pos = bw.select_in_word(word, k)
            assert (word >> pos) & 1 == 1
            assert bw.popcount(word & ((1 << pos) - 1)) == k
            assert pos > previous
            previous = pos


def test_select_in_word_out_of_range():
    with pytest.raises(ValueError):
        bw.select_in_word(0b1011, 3)


def test_leq_step_8():
    x = 3 * bw.ONES_STEP_8
    y = 5 * bw.ONES_STEP_8
    assert bw.leq_step_8(x, y) == bw.ONES_STEP_8
    assert bw.leq_step_8(y, x) == 0
    assert bw.leq_step_8(x, x) == bw.ONES_STEP_8


def test_uleq_step_8_full_bytes():
    high = 0xFF * bw.ONES_STEP_8
    assert bw.uleq_step_8(bw.MSBS_STEP_8, high) == bw.ONES_STEP_8
    assert bw.uleq_step_8(high, bw.MSBS_STEP_8) == 0


def test_zcompare_step_8():
    assert bw.zcompare_step_8(0xFF000100) == 0x01000100
    assert bw.zcompare_step_8(0) == 0


def test_uleq_step_9():
    x = 3 * bw.ONES_STEP_9
    y = 5 * bw.ONES_STEP_9
    assert bw.uleq_step_9(x, y) == bw.ONES_STEP_9
    assert bw.uleq_step_9(y, x) == 0


def test_same_msb():
    assert bw.same_msb(4, 5)
    assert not bw.same_msb(4, 8)