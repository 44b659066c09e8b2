"""Line reading helpers, zig-zag integer mapping and small arithmetic helpers."""

import mmap
import os
import sys


class InputError(ValueError):
    """Raised when input cannot be read or is malformed."""


def trim_newline_chars(s):
    """Strip trailing carriage returns and newlines from a str or bytes."""
    return s.rstrip("\r\n" if isinstance(s, str) else b"\r\n")


def read_lines(file=None, trim_newline=False):
    """Yield the lines of a file object (standard input by default)."""
    source = sys.stdin if file is None else file
    for line in source:
        yield trim_newline_chars(line) if trim_newline else line


def buffer_lines(buffer):
    """Yield the lines of a str or bytes-like buffer without line terminators.

    Lines end at '\\n'; a single '\\r' before it is dropped. A final newline
    does not produce an empty trailing line.
    """
    if isinstance(buffer, str):
        newline, carriage = "\n", "\r"
    else:
        newline, carriage = b"\n", b"\r"
    end = len(buffer)
    pos = 0
    while pos < end:
        idx = buffer.find(newline, pos)
        if idx == -1:
            idx = end
        line = buffer[pos:idx]
        if line.endswith(carriage):
            line = line[:-1]
        yield line
        pos = idx + 1


def mmap_lines(filename):
    """Yield the lines of a file, as bytes, reading it through a memory map."""
    with open(filename, "rb") as handle:
        if os.fstat(handle.fileno()).st_size == 0:
            return
        with mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
            yield from buffer_lines(mapped)


def open_file(name, mode="rb"):
    """Open a file, raising InputError if it cannot be opened."""
    try:
        return open(name, mode)
    except OSError as exc:
        raise InputError(f"Unable to open file '{name}'.") from exc


def int2nat(x):
    """Map a signed integer to a natural number (zig-zag encoding)."""
    return -2 * x - 1 if x < 0 else 2 * x


def nat2int(n):
    """Inverse of int2nat."""
    return -((n + 1) // 2) if n % 2 else n // 2


def ceil_div(dividend, divisor):
    """Integer division rounding up."""
    return (dividend + divisor - 1) // divisor