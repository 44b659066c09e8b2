"""Range-minimum queries over the excess of a balanced-parentheses vector."""

from .bp_vector import _FWD_EXC, _FWD_MIN, _FWD_MIN_IDX, BP_BLOCK_SIZE, SUPERBLOCK_SIZE
from .broadword import MASK_64


class _Scan:
    """Running excess and leftmost minimum found so far."""

    __slots__ = ("exc", "min_exc", "min_idx")

    def __init__(self, exc, idx):
        self.exc = exc
        self.min_exc = exc
        self.min_idx = idx

    def word(self, word, word_start):
        """Consume 64 bits; positions considered are word_start + 1 .. + 64."""
        exc = self.exc
        min_byte_exc = self.min_exc
        min_byte = 0
        for i in range(8):
            byte = (word >> (8 * i)) & 0xFF
            cur_min = exc - _FWD_MIN[byte]
            if cur_min < min_byte_exc:
                min_byte_exc = cur_min
                min_byte = i
            exc += _FWD_EXC[byte]
        self.exc = exc
        if min_byte_exc < self.min_exc:
            self.min_exc = min_byte_exc
            shift = 8 * min_byte
            self.min_idx = word_start + shift + _FWD_MIN_IDX[(word >> shift) & 0xFF]

    def words(self, words, start, end):
        """Consume the whole words in [start, end), all inside one block."""
        for idx in range(start, end):
            self.word(words[idx], idx * 64)


def _min_in_superblock(bp, block_start, block_end, best_exc, best_idx):
    """Leftmost block in [block_start, block_end) whose minimum beats best_exc."""
    if block_start == block_end:
        return best_exc, best_idx
    superblock = block_start // SUPERBLOCK_SIZE
    base = bp._get_block_excess(superblock * SUPERBLOCK_SIZE)
    mins = bp._block_excess_min
    for block in range(block_start, block_end):
        candidate = base + mins[block]
        if candidate < best_exc:
            best_exc = candidate
            best_idx = block
    return best_exc, best_idx


def _find_min_superblock(bp, start, end, best_exc, best_idx):
    """Leftmost superblock in [start, end) whose minimum beats best_exc."""
    if start == end:
        return best_exc, best_idx

    tree = bp._superblock_excess_min
    internal = bp._internal_nodes
    sentinel = len(bp)

    def value(node):
        return tree[node] if node < len(tree) else sentinel

    node = internal + start
    span = start
    node_min = value(node)
    node_min_idx = node

    if end - start == 1:
        return node_min, start

    height = 0
    while True:
        if node == 0:
            raise ValueError("corrupt range-min tree")
        if node & 1 == 0:
            right = node + 1
            span += 1 << height
            if span < end and value(right) < node_min:
                node_min = value(right)
                node_min_idx = right
            if span >= end - 1:
                node += 1
                break
        node //= 2
        height += 1

    while span > end - 1:
        height -= 1
        left = node * 2
        right_span = 1 << height
        if span - right_span >= end - 1:
            span -= right_span
            node = left
        else:
            if value(left) < node_min:
                node_min = value(left)
                node_min_idx = left
            node = left + 1

    if span < end and value(node) < node_min:
        node_min = value(node)
        node_min_idx = node

    if node_min < best_exc:
        node = node_min_idx
        while node < internal:
            node *= 2
            if value(node + 1) < value(node):
                node += 1
        return node_min, node - internal
    return best_exc, best_idx


def excess_rmq(bp, a, b):
    """Leftmost position in [a, b] of minimum excess, with that excess.

    Returns a pair (position, excess).
    """
    if not 0 <= a <= b <= len(bp):
        raise IndexError(f"invalid range [{a}, {b}] for length {len(bp)}")

    scan = _Scan(bp.excess(a), a)
    if a == b:
        return scan.min_idx, scan.min_exc

    words = bp._words
    range_len = b - a
    word_a_idx = a // 64
    word_b_idx = (b - 1) // 64

    shift_a = a % 64
    shifted_a = words[word_a_idx] >> shift_a
    sub_len_a = min(64 - shift_a, range_len)
    padded_a = shifted_a if sub_len_a == 64 else (shifted_a | (MASK_64 << sub_len_a)) & MASK_64
    scan.word(padded_a, a)

    if word_a_idx == word_b_idx:
        return scan.min_idx, scan.min_exc

    block_a = word_a_idx // BP_BLOCK_SIZE
    block_b = word_b_idx // BP_BLOCK_SIZE

    scan.exc -= 64 - sub_len_a  # drop the padding ones

    if block_a == block_b:
        scan.words(words, word_a_idx + 1, word_b_idx)
    else:
        scan.words(words, word_a_idx + 1, (block_a + 1) * BP_BLOCK_SIZE)

        block_min_exc = scan.min_exc
        block_min_idx = None
        superblock_a = (block_a + 1) // SUPERBLOCK_SIZE
        superblock_b = block_b // SUPERBLOCK_SIZE

        if superblock_a == superblock_b:
            block_min_exc, block_min_idx = _min_in_superblock(
                bp, block_a + 1, block_b, block_min_exc, block_min_idx
            )
        else:
            block_min_exc, block_min_idx = _min_in_superblock(
                bp, block_a + 1, (superblock_a + 1) * SUPERBLOCK_SIZE,
                block_min_exc, block_min_idx,
            )
            super_min_exc, super_min_idx = _find_min_superblock(
                bp, superblock_a + 1, superblock_b, scan.min_exc, None
            )
            if super_min_exc < scan.min_exc:
                block_min_exc, block_min_idx = _min_in_superblock(
                    bp, super_min_idx * SUPERBLOCK_SIZE,
                    (super_min_idx + 1) * SUPERBLOCK_SIZE,
                    block_min_exc, block_min_idx,
                )
            block_min_exc, block_min_idx = _min_in_superblock(
                bp, superblock_b * SUPERBLOCK_SIZE, block_b,
                block_min_exc, block_min_idx,
            )

        if block_min_exc < scan.min_exc:
            scan.exc = bp._get_block_excess(block_min_idx)
            scan.words(
                words, block_min_idx * BP_BLOCK_SIZE, (block_min_idx + 1) * BP_BLOCK_SIZE
            )

        scan.exc = bp._get_block_excess(block_b)
        scan.words(words, block_b * BP_BLOCK_SIZE, word_b_idx)

    word_b = words[word_b_idx]
    offset_b = b % 64
    padded_b = word_b if offset_b == 0 else (word_b | (MASK_64 << offset_b)) & MASK_64
    scan.word(padded_b, word_b_idx * 64)

    return scan.min_idx, scan.min_exc