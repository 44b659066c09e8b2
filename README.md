# succinctpy

Compact, queryable representations of bit sequences and integer lists,
written in pure Python with no runtime dependencies. Bits are packed into
64-bit words held as Python integers, and the structures answer select,
rank and navigation queries on them.

## Modules

- `succinctpy.broadword`: bit tricks on 64-bit words: `popcount`,
  `byte_counts`, `bytes_sum`, `select_in_word`, `bit_position`, `msb`,
  `lsb` (both return `None` for zero), `same_msb`, `reverse_bits`,
  `reverse_bytes`, and the bytewise comparisons `leq_step_8`,
  `uleq_step_8`, `uleq_step_9` and `zcompare_step_8`.
- `succinctpy.darray`: `DArray(bits, select_ones=True)`, a select
  directory over the ones (or, with `select_ones=False`, the zeros) of a
  sequence of bits. `select(idx)` gives the position of the `idx`-th
  selected bit; `len()` gives how many there are.
- `succinctpy.elias_fano`: `EliasFanoBuilder(n, m)` collects a
  non-decreasing sequence of at most `m` values in `[0, n]` through
  `push_back`; `EliasFano(builder, with_rank_index=True)` encodes it.
  `EliasFano.from_bits(bits, size=None, with_rank_index=True)` encodes the
  positions of the set bits of a bit sequence. Queries: `select`, `rank`,
  `predecessor1`, `successor1`, `delta`, `select_range`, `num_ones`,
  membership through indexing, `len()` (the universe size) and
  `iter_from(i)`. `rank`, indexing and the queries built on them need the
  rank index.
- `succinctpy.gamma_vector`: `GammaVector(values)`, an immutable
  random-access list of integers in `[0, 2**64 - 2]` stored as gamma
  codes. Supports indexing (including negative indices), `len()`,
  iteration and `iter_from(idx)`.
- `succinctpy.bp_vector`: `BpVector(bits)`, a balanced-parentheses
  vector built from a string of `(` and `)` or from an iterable of bits
  (`1` opens, `0` closes). Supports indexing, `len()`, `rank`, `excess`,
  `find_close`, `find_open` and `enclose`.
- `succinctpy.rmq`: `excess_rmq(bp, a, b)` returns `(position, excess)`
  for the leftmost position of minimum excess in `[a, b]` of a `BpVector`.
- `succinctpy.mapper`: binary serialisation of objects whose class
  declares `MAPPED_FIELDS`, a sequence of `(attribute, spec)` pairs where a
  spec is a struct code (`"Q"`), a vector of them (`"Q[]"`) or a nested
  mappable class. `freeze(obj, path)` writes to a path or binary stream,
  `load(obj, data)` fills an object from bytes, a memoryview or an mmap,
  `size_of` and `size_tree_of` report sizes, and `SizeNode.dump` prints a
  size tree. `MapFlags` holds the flags `load` accepts.
- `succinctpy.util`: `read_lines`, `buffer_lines`, `mmap_lines`,
  `open_file` (raises `InputError`), `trim_newline_chars`, the zig-zag
  mapping `int2nat`/`nat2int`, and `ceil_div`.

## Example

```python
from succinctpy.bp_vector import BpVector
from succinctpy.broadword import msb, popcount
from succinctpy.darray import DArray
from succinctpy.gamma_vector import GammaVector
from succinctpy.rmq import excess_rmq
from succinctpy.util import int2nat, nat2int

assert popcount(0b1011) == 3
assert msb(0x8000) == 15
assert nat2int(int2nat(-5)) == -5

assert DArray([1, 0, 1, 1]).select(1) == 2

gv = GammaVector([3, 0, 7])
assert gv[2] == 7 and list(gv) == [3, 0, 7]

bp = BpVector("(()())")
assert bp.find_close(0) == 5
assert bp.find_open(5) == 0
assert excess_rmq(bp, 1, 5) == (1, 1)
```

A position or index outside the valid range raises an exception rather
than returning a sentinel value.

## What it does not do

- The structures in this package (`DArray`, `EliasFano`, `GammaVector`,
  `BpVector`) do not declare `MAPPED_FIELDS`, so `mapper` cannot save
  them to disk; it serves your own classes that declare their fields.
- There is no public rank/select bit vector class, no compressed list
  built on Elias-Fano and no top-k query structure.
- There is no command-line tool.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```