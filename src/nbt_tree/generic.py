# src/nbt_tree/generic.py
"""
Lower the typed NBT tree into plain JSON-shaped Python values.

  Compound  -> dict (with "_name" first when the node is named)
  List      -> {"_list": [...], "_elemType": <declared tag id>}
  ByteArray -> base64 text
  Int/LongArray -> list[int]
  scalars   -> int / float / str

No I/O; the result is what waypoints.json is rendered from and what the
record extractor walks.
"""

from __future__ import annotations

import base64
import math
import struct
from typing import Any, Dict, List, Union

from .schema import (
    ByteArrayTag,
    CompoundTag,
    EndTag,
    FloatTag,
    IntArrayTag,
    ListTag,
    LongArrayTag,
    TreeNode,
)


GenericValue = Union[None, bool, int, float, str, Dict[str, Any], List[Any]]

NAME_KEY = "_name"
LIST_KEY = "_list"
ELEM_TYPE_KEY = "_elemType"
SYNTHETIC_KEYS = frozenset({NAME_KEY, ELEM_TYPE_KEY})


def _shortest_float32(value: float) -> float:
    """
    Shortest decimal that reads back as the same 32-bit float, so 0.1f
    exports as 0.1 rather than 0.10000000149011612.
    """
    if not math.isfinite(value):
        return value
    target = struct.pack(">f", value)
    for digits in range(1, 10):
        candidate = float(f"{value:.{digits}g}")
        try:
            if struct.pack(">f", candidate) == target:
                return candidate
        except OverflowError:
            break
    return value


def to_generic(node: TreeNode) -> GenericValue:
    """Convert one typed node (and everything under it) to a generic value."""
    if isinstance(node, CompoundTag):
        out: Dict[str, Any] = {}
        if node.name is not None:
            out[NAME_KEY] = node.name
        for key, child in node.entries.items():
            out[key] = to_generic(child)
        return out

    if isinstance(node, ListTag):
        return {
            LIST_KEY: [to_generic(item) for item in node.items],
            ELEM_TYPE_KEY: node.elem_type,
        }

    if isinstance(node, ByteArrayTag):
        return base64.b64encode(node.value).decode("ascii")

    if isinstance(node, (IntArrayTag, LongArrayTag)):
        return list(node.values)

    if isinstance(node, EndTag):
        return None

    if isinstance(node, FloatTag):
        return _shortest_float32(node.value)

    return node.value


__all__ = [
    "GenericValue",
    "to_generic",
    "NAME_KEY",
    "LIST_KEY",
    "ELEM_TYPE_KEY",
    "SYNTHETIC_KEYS",
]
