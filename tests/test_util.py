import io

import pytest

from succinctpy import util


def test_trim_newline_chars_str_and_bytes():
    assert util.trim_newline_chars("abc\r\n\n") == "abc"
    assert util.trim_newline_chars(b"abc\n") == b"abc"
    assert util.trim_newline_chars("a\nb") == "a\nb"


def test_read_lines_keeps_newlines():
    source = io.StringIO("a\nb\r\nc")
    assert list(util.read_lines(source)) == ["a\n", "b\r\n", "c"]


def test_read_lines_trimmed():
    source = io.StringIO("a\nb\r\nc")
    assert list(util.read_lines(source, True)) == ["a", "b", "c"]


def test_buffer_lines_bytes():
    assert list(util.buffer_lines(b"a\r\nb\n\nc")) == [b"a", b"b", b"", b"c"]


def test_buffer_lines_trailing_newline_and_empty():
    assert list(util.buffer_lines("x\n")) == ["x"]
    assert list(util.buffer_lines(b"")) == []


def test_mmap_lines_round_trip(tmp_path):
    path = tmp_path / "lines.txt"
    lines = [b"first", b"second", b"", b"last"]
    path.write_bytes(b"first\r\nsecond\n\nlast\n")
    assert list(util.mmap_lines(path)) == lines


def test_mmap_lines_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert list(util.mmap_lines(path)) == []


def test_open_file_round_trip(tmp_path):
    path = tmp_path / "data.bin"
    with util.open_file(path, "wb") as handle:
        handle.write(b"payload")
    with util.open_file(path) as handle:
        assert handle.read() == b"payload"


def test_open_file_missing_raises(tmp_path):
    with pytest.raises(util.InputError, match="Unable to open file"):
        util.open_file(tmp_path / "missing.bin")


def test_int2nat_pinned():
    assert [util.int2nat(x) for x in (0, -1, 1)] == [0, 1, 2]


def test_int2nat_round_trip():
    values = list(range(-1000, 1001))
    nats = [util.int2nat(x) for x in values]
    assert all(n >= 0 for n in nats)
    assert len(set(nats)) == len(values)
    assert [util.nat2int(n) for n in nats] == values


def test_ceil_div_invariant():
    for dividend in range(0, 200):
        for divisor in range(1, 17):
            q = util.ceil_div(dividend, divisor)
            assert q * divisor >= dividend
            assert (q - 1) * divisor < dividend or q == 0


def test_ceil_div_zero_divisor():
    with pytest.raises(ZeroDivisionError):
        util.ceil_div(5, 0)