"""Random-access vector of unsigned integers stored with gamma codes."""

import operator

from .broadword import lsb, msb
from .darray import DArray, _BitBuilder

_MAX_VALUE = (1 << 64) - 2


class GammaVector:
    """Immutable sequence of integers in [0, 2**64 - 2], gamma coded.

    The unary parts are kept as gaps between ones in a bit vector indexed
    for select; the binary parts are concatenated in a second bit vector.
    """

    def __init__(self, values=()):
        high = _BitBuilder()
        low = _BitBuilder()
        high.append1()
        for value in values:
            if not 0 <= value <= _MAX_VALUE:
                raise ValueError(f"value {value} out of range")
            shifted = value + 1
            length = msb(shifted)
            low.append_bits(shifted ^ (1 << length), length)
            high.append1(length)
        self._high_bits = high.build()
        self._high = DArray(self._high_bits)
        self._low = low.build()

    def __len__(self):
        return len(self._high) - 1

    def __getitem__(self, idx):
        idx = operator.index(idx)
        size = len(self)
        if idx < 0:
            idx += size
        if not 0 <= idx < size:
            raise IndexError("gamma vector index out of range")
        pos = self._high.select(idx)
        length = lsb(self._high_bits.get_word(pos + 1))
        return ((1 << length) | self._low.get_bits(pos - idx, length)) - 1

    def __iter__(self):
        return self.iter_from(0)

    def iter_from(self, idx):
        """Iterate over the values from index idx to the end."""
        size = len(self)
        if not 0 <= idx <= size:
            raise IndexError(f"start index {idx} out of range")
        return self._iter(idx, size)

    def _iter(self, idx, size):
        pos = self._high.select(idx)
        low_pos = pos - idx
        highs = self._high_bits.iter_ones(pos + 1)
        for _, next_pos in zip(range(size - idx), highs):
            length = next_pos - pos - 1
            pos = next_pos
            chunk = self._low.get_bits(low_pos, length)
            low_pos += length
            yield (chunk | (1 << length)) - 1