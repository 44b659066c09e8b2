"""Broadword (SWAR) operations on 64-bit words stored as Python integers."""

MASK_64 = (1 << 64) - 1

ONES_STEP_4 = 0x1111111111111111
ONES_STEP_8 = 0x0101010101010101
ONES_STEP_9 = sum(1 << (9 * i) for i in range(7))
MSBS_STEP_8 = 0x80 * ONES_STEP_8
MSBS_STEP_9 = 0x100 * ONES_STEP_9
INCR_STEP_8 = sum((1 << i) << (8 * i) for i in range(8))
INV_COUNT_STEP_9 = sum((7 - i) << (9 * i) for i in range(7))

MAGIC_MASK_1 = 0x5555555555555555
MAGIC_MASK_2 = 0x3333333333333333
MAGIC_MASK_3 = 0x0F0F0F0F0F0F0F0F
MAGIC_MASK_4 = 0x00FF00FF00FF00FF
MAGIC_MASK_5 = 0x0000FFFF0000FFFF
MAGIC_MASK_6 = 0x00000000FFFFFFFF

_DEBRUIJN_64 = 0x07EDD5E59A4E28C2
_DEBRUIJN_64_MAPPING = (
    63, 0, 58, 1, 59, 47, 53, 2,
    60, 39, 48, 27, 54, 33, 42, 3,
    61, 51, 37, 40, 49, 18, 28, 20,
    55, 30, 34, 11, 43, 14, 22, 4,
    62, 57, 46, 52, 38, 26, 32, 41,
    50, 36, 17, 19, 29, 10, 13, 21,
    56, 45, 25, 31, 35, 16, 9, 12,
    44, 24, 15, 8, 23, 7, 6, 5,
)

# For each byte value, the positions of its set bits in increasing order.
_SELECT_IN_BYTE = tuple(
    tuple(i for i in range(8) if (byte >> i) & 1) for byte in range(256)
)


def leq_step_8(x, y):
    """Per byte (7-bit values), 1 where the byte of x is <= the byte of y."""
    diff = ((y | MSBS_STEP_8) - (x & ~MSBS_STEP_8 & MASK_64)) & MASK_64
    return ((diff ^ (x ^ y)) & MSBS_STEP_8) >> 7


def uleq_step_8(x, y):
    """Per unsigned byte, 1 where the byte of x is <= the byte of y."""
    diff = ((y | MSBS_STEP_8) - (x & ~MSBS_STEP_8 & MASK_64)) & MASK_64
    return (((diff ^ (x ^ y)) ^ (x & ~y & MASK_64)) & MSBS_STEP_8) >> 7


def zcompare_step_8(x):
    """Per byte, 1 where the byte of x is non-zero."""
    return ((x | (((x | MSBS_STEP_8) - ONES_STEP_8) & MASK_64)) & MSBS_STEP_8) >> 7


def uleq_step_9(x, y):
    """Per 9-bit field (seven fields), 1 where the field of x is <= that of y."""
    diff = ((y | MSBS_STEP_9) - (x & ~MSBS_STEP_9 & MASK_64)) & MASK_64
    return (((diff | (x ^ y)) ^ (x & ~y & MASK_64)) & MSBS_STEP_9) >> 8


def byte_counts(x):
    """Number of set bits of each byte, stored in that byte."""
    x = (x - ((x & (0xA * ONES_STEP_4)) >> 1)) & MASK_64
    x = (x & (3 * ONES_STEP_4)) + ((x >> 2) & (3 * ONES_STEP_4))
    return (x + (x >> 4)) & (0x0F * ONES_STEP_8)


def bytes_sum(x):
    """Sum of the eight bytes of x (assuming it does not overflow a byte)."""
    return ((x * ONES_STEP_8) & MASK_64) >> 56


def popcount(x):
    """Number of set bits in a 64-bit word."""
    return bytes_sum(byte_counts(x & MASK_64))


def reverse_bytes(x):
    """Reverse the order of the eight bytes of x."""
    x = ((x >> 8) & MAGIC_MASK_4) | ((x & MAGIC_MASK_4) << 8)
    x = ((x >> 16) & MAGIC_MASK_5) | ((x & MAGIC_MASK_5) << 16)
    x = (x >> 32) | ((x << 32) & MASK_64)
    return x & MASK_64


def reverse_bits(x):
    """Reverse the order of the 64 bits of x."""
    x = ((x >> 1) & MAGIC_MASK_1) | ((x & MAGIC_MASK_1) << 1)
    x = ((x >> 2) & MAGIC_MASK_2) | ((x & MAGIC_MASK_2) << 2)
    x = ((x >> 4) & MAGIC_MASK_3) | ((x & MAGIC_MASK_3) << 4)
    return reverse_bytes(x)


def select_in_word(x, k):
    """Position of the k-th (0-based) set bit of x."""
    if not 0 <= k < popcount(x):
        raise ValueError(f"rank {k} out of range for word {x:#x}")
    byte_sums = (byte_counts(x) * ONES_STEP_8) & MASK_64
    k_step_8 = k * ONES_STEP_8
    geq_k_step_8 = ((k_step_8 | MSBS_STEP_8) - byte_sums) & MSBS_STEP_8
    place = popcount(geq_k_step_8) * 8
    byte_rank = k - ((((byte_sums << 8) & MASK_64) >> place) & 0xFF)
    return place + _SELECT_IN_BYTE[(x >> place) & 0xFF][byte_rank]


def same_msb(x, y):
    """True if x and y have the same most significant bit."""
    return (x ^ y) <= (x & y)


def bit_position(x):
    """Position of the single set bit of x."""
    if popcount(x) != 1:
        raise ValueError(f"word {x:#x} does not have exactly one bit set")
    return _DEBRUIJN_64_MAPPING[((x * _DEBRUIJN_64) & MASK_64) >> 58]


def msb(x):
    """Position of the most significant set bit of x, or None if x is zero."""
    x &= MASK_64
    if not x:
        return None
    return x.bit_length() - 1


def lsb(x):
    """Position of the least significant set bit of x, or None if x is zero."""
    x &= MASK_64
    if not x:
        return None
    return bit_position(x & -x)