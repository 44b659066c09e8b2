"""Elias-Fano representation of a monotone sequence of integers."""

from .broadword import msb
from .darray import DArray, _BitBuilder


class EliasFanoBuilder:
    """Collects a non-decreasing sequence of at most m values in [0, n]."""

    def __init__(self, n, m):
        if n < 0 or m < 0:
            raise ValueError("universe and count must be non-negative")
        self.n = n
        self.m = m
        self._pos = 0
        self._last = 0
        self.l = msb(n // m) if m and n // m else 0
        self._high_bits = _BitBuilder((m + 1) + (n >> self.l) + 1)
        self._low_bits = _BitBuilder()

    def push_back(self, i):
        """Append the next value of the sequence."""
        if i < self._last or i > self.n:
            raise ValueError(f"value {i} breaks the order or exceeds {self.n}")
        if self._pos >= self.m:
            raise ValueError(f"more than {self.m} values pushed")
        self._last = i
        if self.l:
            self._low_bits.append_bits(i & ((1 << self.l) - 1), self.l)
        self._high_bits.set((i >> self.l) + self._pos)
        self._pos += 1


class EliasFano:
    """Compressed sorted sequence supporting select, rank and membership."""

    def __init__(self, builder, with_rank_index=True):
        self._size = builder.n
        self._l = builder.l
        self._high = builder._high_bits.build()
        self._high_d1 = DArray(self._high)
        self._high_d0 = DArray(self._high, select_ones=False) if with_rank_index else None
        self._low = builder._low_bits.build()

    @classmethod
    def from_bits(cls, bits, size=None, with_rank_index=True):
        """Encode the positions of the set bits of a bit sequence."""
        bits = [bool(bit) for bit in bits]
        if size is None:
            size = len(bits)
        elif len(bits) > size:
            raise ValueError(f"{len(bits)} bits given for a size of {size}")
        positions = [i for i, bit in enumerate(bits) if bit]
        builder = EliasFanoBuilder(size, len(positions))
        for pos in positions:
            builder.push_back(pos)
        return cls(builder, with_rank_index)

    def __len__(self):
        return self._size

    def num_ones(self):
        """Number of values stored."""
        return len(self._high_d1)

    def _rank_start(self, pos):
        if self._high_d0 is None:
            raise ValueError("operation needs the rank index")
        h_rank = pos >> self._l
        h_pos = self._high_d0.select(h_rank)
        return h_pos, h_pos - h_rank, pos & ((1 << self._l) - 1)

    def __getitem__(self, pos):
        if not 0 <= pos < self._size:
            raise IndexError(f"position {pos} out of range")
        h_pos, rank, l_pos = self._rank_start(pos)
        while h_pos > 0 and self._high[h_pos - 1]:
            rank -= 1
            h_pos -= 1
            low = self._low.get_bits(rank * self._l, self._l)
            if low == l_pos:
                return True
            if low < l_pos:
                return False
        return False

    def select(self, n):
        """The n-th (0-based) value."""
        return ((self._high_d1.select(n) - n) << self._l) | self._low.get_bits(
            n * self._l, self._l
        )

    def rank(self, pos):
        """Number of values smaller than pos."""
        if not 0 <= pos <= self._size:
            raise IndexError(f"position {pos} out of range")
        if self._high_d0 is None:
            raise ValueError("operation needs the rank index")
        if pos == self._size:
            return self.num_ones()
        h_pos, rank, l_pos = self._rank_start(pos)
        while (
            h_pos > 0
            and self._high[h_pos - 1]
            and self._low.get_bits((rank - 1) * self._l, self._l) >= l_pos
        ):
            rank -= 1
            h_pos -= 1
        return rank

    def predecessor1(self, pos):
        """Largest value <= pos."""
        return self.select(self.rank(pos + 1) - 1)

    def successor1(self, pos):
        """Smallest value >= pos."""
        return self.select(self.rank(pos))

    def delta(self, n):
        """select(n) - select(n - 1), or select(0) when n is 0."""
        high_val = self._high_d1.select(n)
        low_val = self._low.get_bits(n * self._l, self._l)
        if not n:
            return (high_val << self._l) | low_val
        gap = high_val - self._high.predecessor1(high_val - 1) - 1
        return (gap << self._l) + low_val - self._low.get_bits((n - 1) * self._l, self._l)

    def select_range(self, n):
        """The pair (select(n), select(n + 1))."""
        if not 0 <= n or n + 1 >= self.num_ones():
            raise IndexError(f"range index {n} out of range")
        high_b = self._high_d1.select(n)
        low_b = self._low.get_bits(n * self._l, self._l)
        high_e = self._high.successor1(high_b + 1)
        low_e = self._low.get_bits((n + 1) * self._l, self._l)
        return (
            ((high_b - n) << self._l) | low_b,
            ((high_e - n - 1) << self._l) | low_e,
        )

    def iter_from(self, i=0):
        """Iterate over the values from the i-th one to the end."""
        ones = self.num_ones()
        if not 0 <= i <= ones:
            raise IndexError(f"start index {i} out of range")
        return self._iter(i, ones)

    def _iter(self, i, ones):
        if i == ones:
            return
        highs = self._high.iter_ones(self._high_d1.select(i))
        for n, high in zip(range(i, ones), highs):
            yield ((high - n) << self._l) | self._low.get_bits(n * self._l, self._l)