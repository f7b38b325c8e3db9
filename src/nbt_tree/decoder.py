# src/nbt_tree/decoder.py
"""
Recursive-descent NBT decoder.

Framing (big-endian throughout):

  named tag   := u8 tag_id, string name, payload
  string      := u16 length, UTF-8 bytes
  byte/short/int/long   := i8 / i16 / i32 / i64
  float/double          := IEEE754 f32 / f64
  byte/int/long array   := i32 length, length * element
  list        := u8 elem_type, i32 length, length * payload(elem_type)
  compound    := (named tag)* , u8 0

The root must be a compound. A compound that repeats a key keeps the key in
its first position and holds the last value read for it.
"""

from __future__ import annotations

import logging
import struct
from typing import Callable, Dict, Optional

from .errors import DecodeError
from .schema import (
    ByteArrayTag,
    ByteTag,
    CompoundTag,
    DoubleTag,
    FloatTag,
    IntArrayTag,
    IntTag,
    ListTag,
    LongArrayTag,
    LongTag,
    ShortTag,
    StringTag,
    TagType,
    TreeNode,
)


log = logging.getLogger(__name__)

# Two Python frames per nesting level; stays under the default recursion limit.
MAX_DEPTH = 256


class _Reader:
    """Cursor over an in-memory byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if size < 0 or end > len(self.data):
            raise DecodeError(
                f"Unexpected end of input: wanted {size} bytes, "
                f"{len(self.data) - self.offset} left",
                self.offset,
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def unpack(self, fmt: str):
        size = struct.calcsize(fmt)
        start = self.offset
        self.take(size)
        return struct.unpack_from(fmt, self.data, start)

    def u8(self) -> int:
        return self.unpack(">B")[0]

    def length(self) -> int:
        start = self.offset
        (n,) = self.unpack(">i")
        if n < 0:
            raise DecodeError(f"Negative length {n}", start)
        return n

    def string(self) -> str:
        (n,) = self.unpack(">H")
        return self.take(n).decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Payload readers
# ---------------------------------------------------------------------------

_SCALARS = {
    TagType.BYTE: (">b", ByteTag),
    TagType.SHORT: (">h", ShortTag),
    TagType.INT: (">i", IntTag),
    TagType.LONG: (">q", LongTag),
    TagType.FLOAT: (">f", FloatTag),
    TagType.DOUBLE: (">d", DoubleTag),
}


def _read_byte_array(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    n = r.length()
    return ByteArrayTag(value=bytes(r.take(n)), name=name)


def _read_int_array(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    n = r.length()
    return IntArrayTag(values=list(r.unpack(f">{n}i")), name=name)


def _read_long_array(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    n = r.length()
    return LongArrayTag(values=list(r.unpack(f">{n}q")), name=name)


def _read_string(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    return StringTag(value=r.string(), name=name)


def _read_list(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    start = r.offset
    elem_type = r.u8()
    n = r.length()
    if elem_type not in _KNOWN_TAG_IDS:
        raise DecodeError(f"Unknown list element tag id {elem_type}", start)
    # End items carry no payload, so their count is not bounded by the input.
    if elem_type == TagType.END and n > 0:
        raise DecodeError(f"List of TAG_End declares {n} items", start)
    # Every other payload is at least one byte long.
    remaining = len(r.data) - r.offset
    if n > remaining:
        raise DecodeError(
            f"Unexpected end of input: list declares {n} items, {remaining} bytes left",
            start,
        )
    items = [_read_payload(r, elem_type, None, depth + 1) for _ in range(n)]
    return ListTag(elem_type=elem_type, items=items, name=name)


def _read_compound(r: _Reader, name: Optional[str], depth: int) -> TreeNode:
    entries: Dict[str, TreeNode] = {}
    while True:
        start = r.offset
        tag_id = r.u8()
        if tag_id == TagType.END:
            break
        if tag_id not in _KNOWN_TAG_IDS:
            raise DecodeError(f"Unknown tag id {tag_id}", start)
        key = r.string()
        if key in entries:
            log.debug("Duplicate compound key %r at offset %d; last value wins", key, start)
        entries[key] = _read_payload(r, tag_id, key, depth + 1)
    return CompoundTag(entries=entries, name=name)


_KNOWN_TAG_IDS = frozenset(int(t) for t in TagType)

_PAYLOAD_READERS: Dict[int, Callable[[_Reader, Optional[str], int], TreeNode]] = {
    TagType.BYTE_ARRAY: _read_byte_array,
    TagType.STRING: _read_string,
    TagType.LIST: _read_list,
    TagType.COMPOUND: _read_compound,
    TagType.INT_ARRAY: _read_int_array,
    TagType.LONG_ARRAY: _read_long_array,
}


def _read_payload(r: _Reader, tag_id: int, name: Optional[str], depth: int) -> TreeNode:
    if depth > MAX_DEPTH:
        raise DecodeError(f"Tag nesting deeper than {MAX_DEPTH}", r.offset)

    scalar = _SCALARS.get(tag_id)
    if scalar is not None:
        fmt, cls = scalar
        return cls(value=r.unpack(fmt)[0], name=name)

    reader = _PAYLOAD_READERS.get(tag_id)
    if reader is None:
        raise DecodeError(f"Unknown tag id {tag_id}", r.offset)
    return reader(r, name, depth)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode(data: bytes) -> CompoundTag:
    """
    Decode a complete NBT document whose root is a named compound.

    Raises DecodeError on a non-compound root, an unknown tag id, or
    truncated input. Bytes after the root's End tag are ignored.
    """
    r = _Reader(data)
    root_id = r.u8()
    if root_id != TagType.COMPOUND:
        raise DecodeError(f"Root must be TAG_Compound, got tag id {root_id}", 0)

    name = r.string()
    root = _read_compound(r, name, 0)

    trailing = len(data) - r.offset
    if trailing:
        log.debug("Ignoring %d trailing bytes after root compound", trailing)
    return root  # type: ignore[return-value]


__all__ = ["decode", "MAX_DEPTH"]
