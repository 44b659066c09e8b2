"""Balanced-parentheses bit vector with matching-parenthesis search."""

from .broadword import MASK_64, popcount
from .util import ceil_div

BP_BLOCK_SIZE = 4
SUPERBLOCK_SIZE = 32


def _build_tables():
    fwd_exc, fwd_min, fwd_min_idx, fwd_pos = [], [], [], []
    bwd_min, bwd_pos = [], []
    for c in range(256):
        positions = [0] * 9
        excess = 0
        lowest = 0
        lowest_idx = 0
        for i in range(8):
            if (c >> i) & 1:
                excess += 1
            else:
                excess -= 1
                if excess < 0 and positions[-excess] == 0:
                    positions[-excess] = i + 1
            if -excess > lowest:
                lowest = -excess
                lowest_idx = i + 1
        fwd_exc.append(excess)
        fwd_min.append(lowest)
        fwd_min_idx.append(lowest_idx)
        fwd_pos.append(tuple(positions))

        positions = [0] * 9
        excess = 0
        highest = 0
        for i in range(8):
            if (c << i) & 0x80:
                excess += 1
                if excess > 0 and positions[excess] == 0:
                    positions[excess] = i + 1
            else:
                excess -= 1
            highest = max(highest, excess)
        bwd_min.append(highest)
        bwd_pos.append(tuple(positions))
    return (
        tuple(fwd_exc),
        tuple(fwd_min),
        tuple(fwd_min_idx),
        tuple(fwd_pos),
        tuple(bwd_min),
        tuple(bwd_pos),
    )


# Per byte (bits read from the least significant): net excess, deepest
# descent below the start, bit index + 1 where it is first reached, and for
# each depth k the bit index + 1 where the excess first reaches -k.
# The backward tables read bits from the most significant one.
_FWD_EXC, _FWD_MIN, _FWD_MIN_IDX, _FWD_POS, _BWD_MIN, _BWD_POS = _build_tables()


def _find_close_in_word(word, excess):
    """Bit offset where the running excess first drops by `excess`, or None."""
    for i in range(8):
        byte = (word >> (8 * i)) & 0xFF
        if excess <= _FWD_MIN[byte]:
            return 8 * i + _FWD_POS[byte][excess] - 1
        excess += _FWD_EXC[byte]
    return None


def _find_open_in_word(word, excess):
    """Bit offset, scanning backwards, where the excess first rises by `excess`."""
    for i in range(8):
        byte = (word >> (56 - 8 * i)) & 0xFF
        if excess <= _BWD_MIN[byte]:
            return 64 - (8 * i + _BWD_POS[byte][excess])
        excess -= _FWD_EXC[byte]
    return None


def _parse(bits):
    if isinstance(bits, str):
        for char in bits:
            if char not in "()":
                raise ValueError(f"unexpected character {char!r} in parentheses")
        return [char == "(" for char in bits]
    return [bool(bit) for bit in bits]


class BpVector:
    """Sequence of parentheses (1 = open, 0 = close) with a range-min tree.

    Blocks of BP_BLOCK_SIZE words store their minimum excess relative to the
    enclosing superblock; a binary tree over the superblocks stores absolute
    minima, so that matching parentheses are found without a linear scan.
    """

    BP_BLOCK_SIZE = BP_BLOCK_SIZE
    SUPERBLOCK_SIZE = SUPERBLOCK_SIZE

    def __init__(self, bits=()):
        values = _parse(bits)
        self._size = len(values)
        words = []
        for start in range(0, self._size, 64):
            word = 0
            for offset, bit in enumerate(values[start:start + 64]):
                if bit:
                    word |= 1 << offset
            words.append(word)
        self._words = words
        self._ranks = [0]
        for word in words:
            self._ranks.append(self._ranks[-1] + popcount(word))
        self._build_min_tree()

    def __len__(self):
        return self._size

    def __getitem__(self, pos):
        if not 0 <= pos < self._size:
            raise IndexError(f"position {pos} out of range")
        word, offset = divmod(pos, 64)
        return bool((self._words[word] >> offset) & 1)

    def rank(self, pos):
        """Number of open parentheses before pos."""
        if not 0 <= pos <= self._size:
            raise IndexError(f"position {pos} out of range")
        word, offset = divmod(pos, 64)
        result = self._ranks[word]
        if offset:
            result += popcount(self._words[word] & ((1 << offset) - 1))
        return result

    def excess(self, pos):
        """Opens minus closes before pos."""
        return 2 * self.rank(pos) - pos

    def _word(self, idx):
        return self._words[idx] if idx < len(self._words) else 0

    def _checked(self, pos):
        if pos >= self._size:
            raise ValueError("parenthesis has no match")
        return pos

    def find_close(self, pos):
        """Position of the parenthesis closing the one opened at pos."""
        if not self[pos]:
            raise ValueError(f"no open parenthesis at {pos}")
        word_pos, shift = divmod(pos + 1, 64)
        shifted = self._word(word_pos) >> shift
        padded = shifted | ((MASK_64 << (64 - shift)) & MASK_64 if shift else 0)

        found = _find_close_in_word(padded, 1)
        if found is not None:
            return self._checked(found + pos + 1)

        block, sub_block = divmod(word_pos, BP_BLOCK_SIZE)
        block_offset = block * BP_BLOCK_SIZE
        local_rank = popcount(padded) - shift
        local_excess = 2 * local_rank - (64 - shift)
        found = self._find_close_in_block(block_offset, local_excess + 1, sub_block + 1)
        if found is not None:
            return self._checked(found)

        pos_excess = self.excess(pos)
        found_block = self._search_min_tree(True, block + 1, pos_excess)
        found_excess = self._get_block_excess(found_block)
        found = self._find_close_in_block(
            found_block * BP_BLOCK_SIZE, found_excess - pos_excess, 0
        )
        if found is None:
            raise ValueError("parenthesis has no match")
        return self._checked(found)

    def find_open(self, pos):
        """Position of the nearest open parenthesis before pos whose match is at or after pos.

        For a closing parenthesis this is its match.
        """
        if not 0 <= pos < self._size:
            raise IndexError(f"position {pos} out of range")
        if pos == 0:
            raise ValueError("parenthesis has no match")
        word_pos, length = divmod(pos, 64)
        shifted = (self._words[word_pos] << (64 - length)) & MASK_64 if length else 0

        found = _find_open_in_word(shifted, 1)
        if found is not None:
            return found + pos - 64

        block, sub_block = divmod(word_pos, BP_BLOCK_SIZE)
        block_offset = block * BP_BLOCK_SIZE
        local_excess = -(2 * popcount(shifted) - length)
        found = self._find_open_in_block(block_offset, local_excess + 1, sub_block)
        if found is not None:
            return found

        if block == 0:
            raise ValueError("parenthesis has no match")
        pos_excess = self.excess(pos) - 1
        found_block = self._search_min_tree(False, block - 1, pos_excess)
        found_excess = self._get_block_excess(found_block + 1)
        found = self._find_open_in_block(
            found_block * BP_BLOCK_SIZE, found_excess - pos_excess, BP_BLOCK_SIZE
        )
        if found is None:
            raise ValueError("parenthesis has no match")
        return found

    def enclose(self, pos):
        """Position of the open parenthesis enclosing the one opened at pos."""
        if not self[pos]:
            raise ValueError(f"no open parenthesis at {pos}")
        return self.find_open(pos)

    def _find_close_in_block(self, block_offset, excess, start):
        if excess > (BP_BLOCK_SIZE - start) * 64:
            return None
        for sub_block in range(block_offset + start, block_offset + BP_BLOCK_SIZE):
            if sub_block >= len(self._words):
                break
            word = self._words[sub_block]
            if excess <= 64:
                found = _find_close_in_word(word, excess)
                if found is not None:
                    return found + sub_block * 64
            excess += 2 * popcount(word) - 64
        return None

    def _find_open_in_block(self, block_offset, excess, start):
        if excess > start * 64:
            return None
        for sub_block in range(block_offset + start - 1, block_offset - 1, -1):
            word = self._words[sub_block]
            if excess <= 64:
                found = _find_open_in_word(word, excess)
                if found is not None:
                    return found + sub_block * 64
            excess -= 2 * popcount(word) - 64
        return None

    def _get_block_excess(self, block):
        sub_block = block * BP_BLOCK_SIZE
        return 2 * self._ranks[sub_block] - sub_block * 64

    def _in_node_range(self, node, excess):
        tree = self._superblock_excess_min
        return 0 <= node < len(tree) and excess >= tree[node]

    def _search_block_in_superblock(self, forward, block, excess):
        superblock = block // SUPERBLOCK_SIZE
        first = superblock * SUPERBLOCK_SIZE
        if forward:
            blocks = range(
                block, min(first + SUPERBLOCK_SIZE, len(self._block_excess_min))
            )
        else:
            blocks = range(block, first - 1, -1)
        if not blocks:
            return None
        base = self._get_block_excess(first)
        for cur in blocks:
            if excess >= base + self._block_excess_min[cur]:
                return cur
        return None

    def _search_min_tree(self, forward, block, excess):
        found = self._search_block_in_superblock(forward, block, excess)
        if found is not None:
            return found

        direction = 1 if forward else 0
        node = self._internal_nodes + block // SUPERBLOCK_SIZE
        while True:
            if (node & 1) != direction:
                sibling = node + 1 if forward else node - 1
                if self._in_node_range(sibling, excess):
                    node = sibling
                    break
            node //= 2
            if node == 0:
                raise ValueError("parenthesis has no match")

        while node < self._internal_nodes:
            child = node * 2 + (1 - direction)
            if self._in_node_range(child, excess):
                node = child
                continue
            child = child + 1 if forward else child - 1
            if not self._in_node_range(child, excess):
                raise ValueError("parenthesis has no match")
            node = child

        superblock = node - self._internal_nodes
        start = superblock * SUPERBLOCK_SIZE + (1 - direction) * (SUPERBLOCK_SIZE - 1)
        found = self._search_block_in_superblock(forward, start, excess)
        if found is None:
            raise ValueError("parenthesis has no match")
        return found

    def _build_min_tree(self):
        self._block_excess_min = []
        self._superblock_excess_min = []
        self._internal_nodes = 0
        size = self._size
        if not size:
            return

        words = self._words
        block_mins = []
        cur_block_min = 0
        cur_excess = 0
        words_per_superblock = BP_BLOCK_SIZE * SUPERBLOCK_SIZE
        last = len(words) - 1
        for idx, word in enumerate(words):
            if idx % BP_BLOCK_SIZE == 0:
                if idx % words_per_superblock == 0:
                    cur_excess = 0
                if idx:
                    block_mins.append(cur_block_min)
                    cur_block_min = cur_excess
            n_bits = size % 64 if idx == last and size % 64 else 64
            full_bytes = n_bits // 8
            for b in range(full_bytes):
                byte = (word >> (8 * b)) & 0xFF
                cur_block_min = min(cur_block_min, cur_excess - _FWD_MIN[byte])
                cur_excess += _FWD_EXC[byte]
            for i in range(full_bytes * 8, n_bits):
                cur_excess += 1 if (word >> i) & 1 else -1
                cur_block_min = min(cur_block_min, cur_excess)
        block_mins.append(cur_block_min)
        self._block_excess_min = block_mins

        n_blocks = ceil_div(len(words), BP_BLOCK_SIZE)
        n_superblocks = ceil_div(n_blocks, SUPERBLOCK_SIZE)
        leaves = 1
        while leaves < n_superblocks:
            leaves <<= 1
        self._internal_nodes = leaves
        tree = [size] * (leaves + n_superblocks)

        for superblock in range(n_superblocks):
            first = superblock * SUPERBLOCK_SIZE
            base = self._get_block_excess(first)
            tree[leaves + superblock] = min(
                [size]
                + [
                    base + block_mins[block]
                    for block in range(first, min(first + SUPERBLOCK_SIZE, n_blocks))
                ]
            )

        for node in range(len(tree) - 1, 1, -1):
            parent = node // 2
            tree[parent] = min(tree[parent], tree[node])
        self._superblock_excess_min = tree