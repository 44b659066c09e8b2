"""Constant-time select over the set (or unset) bits of a bit vector."""

from .broadword import MASK_64, popcount, select_in_word
from .util import ceil_div


class _BitVector:
    """Immutable sequence of bits packed into 64-bit little-endian words."""

    __slots__ = ("words", "size")

    def __init__(self, words=(), size=0):
        self.words = list(words)
        self.size = size

    @classmethod
    def from_bits(cls, bits):
        words = []
        current = 0
        size = 0
        for bit in bits:
            if bit:
                current |= 1 << (size % 64)
            size += 1
            if size % 64 == 0:
                words.append(current)
                current = 0
        if size % 64:
            words.append(current)
        return cls(words, size)

    def __len__(self):
        return self.size

    def __getitem__(self, pos):
        if not 0 <= pos < self.size:
            raise IndexError(f"bit position {pos} out of range")
        word, offset = divmod(pos, 64)
        return bool((self.words[word] >> offset) & 1)

    def get_bits(self, pos, length):
        """The `length` bits (at most 64) starting at `pos`, as an integer."""
        if not length:
            return 0
        word, offset = divmod(pos, 64)
        value = self.words[word] >> offset
        if offset + length > 64:
            value |= self.words[word + 1] << (64 - offset)
        return value & ((1 << length) - 1)

    def get_word(self, pos):
        """The 64 bits starting at `pos`, zero-padded past the end."""
        word, offset = divmod(pos, 64)
        if word >= len(self.words):
            return 0
        value = self.words[word] >> offset
        if offset and word + 1 < len(self.words):
            value |= self.words[word + 1] << (64 - offset)
        return value & MASK_64

    def iter_ones(self, start=0):
        """Yield the positions of the set bits at or after `start`."""
        word_idx, offset = divmod(start, 64)
        words = self.words
        if word_idx >= len(words):
            return
        word = words[word_idx] & (MASK_64 << offset) & MASK_64
        while True:
            while word:
                low = word & -word
                pos = word_idx * 64 + low.bit_length() - 1
                if pos >= self.size:
                    return
                yield pos
                word ^= low
            word_idx += 1
            if word_idx >= len(words):
                return
            word = words[word_idx]

    def successor1(self, pos):
        """Position of the first set bit at or after `pos`."""
        found = next(self.iter_ones(pos), None)
        if found is None:
            raise ValueError(f"no set bit at or after {pos}")
        return found

    def predecessor1(self, pos):
        """Position of the last set bit at or before `pos`."""
        pos = min(pos, self.size - 1)
        if pos < 0:
            raise ValueError("no set bit before the start")
        word_idx, offset = divmod(pos, 64)
        word = self.words[word_idx] & ((1 << (offset + 1)) - 1)
        while not word:
            word_idx -= 1
            if word_idx < 0:
                raise ValueError(f"no set bit at or before {pos}")
            word = self.words[word_idx]
        return word_idx * 64 + word.bit_length() - 1


class _BitBuilder:
    """Growable bit sequence used while building the succinct structures."""

    __slots__ = ("words", "size")

    def __init__(self, size=0):
        self.size = size
        self.words = [0] * ceil_div(size, 64)

    def _grow(self, new_size):
        missing = ceil_div(new_size, 64) - len(self.words)
        if missing > 0:
            self.words.extend([0] * missing)

    def set(self, pos, bit=True):
        word, offset = divmod(pos, 64)
        if bit:
            self.words[word] |= 1 << offset
        else:
            self.words[word] &= ~(1 << offset) & MASK_64

    def append_bits(self, value, length):
        if not length:
            return
        value &= (1 << length) - 1
        self._grow(self.size + length)
        word, offset = divmod(self.size, 64)
        self.words[word] |= (value << offset) & MASK_64
        if offset + length > 64:
            self.words[word + 1] |= value >> (64 - offset)
        self.size += length

    def append1(self, zeros=0):
        """Append `zeros` unset bits followed by one set bit."""
        self.size += zeros
        self._grow(self.size + 1)
        self.set(self.size)
        self.size += 1

    def build(self):
        return _BitVector(self.words, self.size)


class DArray:
    """Select index over the ones (or the zeros) of a bit vector.

    Positions are grouped into blocks of BLOCK_SIZE; dense blocks store the
    offsets of every SUBBLOCK_SIZE-th position, sparse blocks store all of
    their positions explicitly.
    """

    BLOCK_SIZE = 1024
    SUBBLOCK_SIZE = 32
    MAX_IN_BLOCK_DISTANCE = 1 << 16

    def __init__(self, bits, select_ones=True):
        self._bits = bits if isinstance(bits, _BitVector) else _BitVector.from_bits(bits)
        self._select_ones = bool(select_ones)
        self._block_inventory = []
        self._subblock_inventory = []
        self._overflow_positions = []
        self._positions = 0

        block = []
        for pos in self._iter_positions():
            block.append(pos)
            self._positions += 1
            if len(block) == self.BLOCK_SIZE:
                self._flush(block)
                block = []
        if block:
            self._flush(block)

    def _word(self, idx):
        word = self._bits.words[idx]
        return word if self._select_ones else ~word & MASK_64

    def _iter_positions(self):
        size = self._bits.size
        for word_idx, raw in enumerate(self._bits.words):
            word = raw if self._select_ones else ~raw & MASK_64
            base = word_idx * 64
            while word:
                low = word & -word
                pos = base + low.bit_length() - 1
                if pos >= size:
                    return
                yield pos
                word ^= low

    def _flush(self, block):
        first = block[0]
        subblock_heads = block[::self.SUBBLOCK_SIZE]
        if block[-1] - first < self.MAX_IN_BLOCK_DISTANCE:
            self._block_inventory.append(first)
            self._subblock_inventory.extend(pos - first for pos in subblock_heads)
        else:
            self._block_inventory.append(-len(self._overflow_positions) - 1)
            self._overflow_positions.extend(block)
            self._subblock_inventory.extend([0xFFFF] * len(subblock_heads))

    def __len__(self):
        return self._positions

    def select(self, idx):
        """Position of the idx-th (0-based) selected bit."""
        if not 0 <= idx < self._positions:
            raise IndexError(f"select index {idx} out of range")
        block_pos = self._block_inventory[idx // self.BLOCK_SIZE]
        if block_pos < 0:
            return self._overflow_positions[-block_pos - 1 + idx % self.BLOCK_SIZE]

        start_pos = block_pos + self._subblock_inventory[idx // self.SUBBLOCK_SIZE]
        remainder = idx % self.SUBBLOCK_SIZE
        if not remainder:
            return start_pos

        word_idx, word_shift = divmod(start_pos, 64)
        word = self._word(word_idx) & (MASK_64 << word_shift) & MASK_64
        while True:
            count = popcount(word)
            if remainder < count:
                break
            remainder -= count
            word_idx += 1
            word = self._word(word_idx)
        return 64 * word_idx + select_in_word(word, remainder)