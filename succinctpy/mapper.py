"""Binary freezing and loading of objects that declare their mapped fields.

A mappable class has a class attribute ``MAPPED_FIELDS``: a sequence of
``(attribute, spec)`` pairs. A spec is a struct code such as ``"Q"`` for a
scalar, that code followed by ``"[]"`` for a vector of scalars, or a mappable
class for a nested object. All values are stored little-endian; a vector is
its 64-bit length followed by its elements.
"""

import enum
import functools
import struct
import sys
from dataclasses import dataclass, field

_SCALAR_CODES = frozenset("bBhHiIlLqQefd?")
_U64 = struct.Struct("<Q")


class MapFlags(enum.IntFlag):
    """Flags accepted by load."""

    NONE = 0
    WARMUP = 1


class _Kind(enum.Enum):
    SCALAR = enum.auto()
    VECTOR = enum.auto()
    OBJECT = enum.auto()


@dataclass
class SizeNode:
    """Size, in bytes, of a mapped component and of its parts."""

    name: str = ""
    size: int = 0
    children: list = field(default_factory=list)

    def dump(self, stream=None, depth=0):
        """Write the tree as indented 'name: size' lines."""
        out = sys.stderr if stream is None else stream
        out.write(f"{' ' * (depth * 4)}{self.name}: {self.size}\n")
        for child in self.children:
            child.dump(out, depth + 1)


@functools.lru_cache(maxsize=None)
def _scalar(code):
    if len(code) != 1 or code not in _SCALAR_CODES:
        raise ValueError(f"unsupported scalar code {code!r}")
    return struct.Struct("<" + code)


def _classify(spec):
    if isinstance(spec, str):
        if spec.endswith("[]"):
            code = spec[:-2]
            _scalar(code)
            return _Kind.VECTOR, code
        _scalar(spec)
        return _Kind.SCALAR, spec
    if isinstance(spec, type):
        return _Kind.OBJECT, spec
    raise TypeError(f"invalid field spec {spec!r}")


def _fields(obj):
    fields = getattr(type(obj), "MAPPED_FIELDS", None)
    if fields is None:
        raise TypeError(f"{type(obj).__name__} does not declare MAPPED_FIELDS")
    return fields


def _freeze_parts(obj):
    for attr, spec in _fields(obj):
        kind, info = _classify(spec)
        value = getattr(obj, attr)
        if kind is _Kind.SCALAR:
            yield _scalar(info).pack(value)
        elif kind is _Kind.VECTOR:
            values = list(value)
            yield _U64.pack(len(values))
            yield struct.pack(f"<{len(values)}{info}", *values)
        else:
            yield from _freeze_parts(value)


def freeze(obj, path, flags=0, name="<TOP>"):
    """Write obj to a path or binary stream; return the number of bytes written."""
    data = b"".join([_U64.pack(int(flags)), *_freeze_parts(obj)])
    if hasattr(path, "write"):
        path.write(data)
    else:
        with open(path, "wb") as handle:
            handle.write(data)
    return len(data)


def _load_fields(obj, view, offset):
    for attr, spec in _fields(obj):
        kind, info = _classify(spec)
        if kind is _Kind.SCALAR:
            layout = _scalar(info)
            (value,) = layout.unpack_from(view, offset)
            offset += layout.size
            setattr(obj, attr, value)
        elif kind is _Kind.VECTOR:
            (count,) = _U64.unpack_from(view, offset)
            offset += _U64.size
            nbytes = count * _scalar(info).size
            if offset + nbytes > len(view):
                raise ValueError("mapped data is truncated")
            setattr(obj, attr, list(struct.unpack_from(f"<{count}{info}", view, offset)))
            offset += nbytes
        else:
            child = getattr(obj, attr, None)
            if child is None:
                child = info()
                setattr(obj, attr, child)
            offset = _load_fields(child, view, offset)
    return offset


def load(obj, data, flags=0, name="<TOP>"):
    """Fill obj from frozen bytes (bytes, memoryview or mmap); return bytes read.

    Values are always copied out of the buffer, so MapFlags.WARMUP needs no
    extra pass.
    """
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    try:
        _U64.unpack_from(view, 0)
        return _load_fields(obj, view, _U64.size)
    except struct.error as exc:
        raise ValueError("mapped data is truncated") from exc


def _size(obj, node):
    total = 0
    for attr, spec in _fields(obj):
        kind, info = _classify(spec)
        if kind is _Kind.SCALAR:
            total += _scalar(info).size
        elif kind is _Kind.VECTOR:
            vector_size = _U64.size + len(getattr(obj, attr)) * _scalar(info).size
            total += vector_size
            if node is not None:
                node.children.append(SizeNode(attr, vector_size))
        else:
            child_node = SizeNode(attr) if node is not None else None
            child_size = _size(getattr(obj, attr), child_node)
            total += child_size
            if child_node is not None:
                child_node.size = child_size
                node.children.append(child_node)
    return total


def size_of(obj):
    """Number of bytes obj occupies when frozen, excluding the flags header."""
    return _size(obj, None)


def size_tree_of(obj, name="<TOP>"):
    """Tree of the sizes of obj and of its vectors and nested objects."""
    root = SizeNode(name)
    root.size = _size(obj, root)
    return root