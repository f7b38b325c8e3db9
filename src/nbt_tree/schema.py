# src/nbt_tree/schema.py
"""
Typed NBT tree.

One frozen dataclass per tag kind. Every node may carry a `name`:
  - the root compound carries the name stored in the file (often "")
  - every child of a compound carries its key
  - elements of a list are unnamed (name is None)

Compound entries live in a plain dict, so insertion order is the order the
tags appeared in the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Dict, List, Optional, Union


class TagType(IntEnum):
    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EndTag:
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.END


@dataclass(frozen=True)
class ByteTag:
    value: int
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.BYTE


@dataclass(frozen=True)
class ShortTag:
    value: int
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.SHORT


@dataclass(frozen=True)
class IntTag:
    value: int
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.INT


@dataclass(frozen=True)
class LongTag:
    value: int
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.LONG


@dataclass(frozen=True)
class FloatTag:
    value: float
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.FLOAT


@dataclass(frozen=True)
class DoubleTag:
    value: float
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.DOUBLE


@dataclass(frozen=True)
class StringTag:
    value: str
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.STRING


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ByteArrayTag:
    value: bytes
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.BYTE_ARRAY


@dataclass(frozen=True)
class IntArrayTag:
    values: List[int] = field(default_factory=list)
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.INT_ARRAY


@dataclass(frozen=True)
class LongArrayTag:
    values: List[int] = field(default_factory=list)
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.LONG_ARRAY


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ListTag:
    """Homogeneous list; every item was decoded as `elem_type`."""

    elem_type: int
    items: List["TreeNode"] = field(default_factory=list)
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.LIST


@dataclass(frozen=True)
class CompoundTag:
    """Ordered name -> node mapping."""

    entries: Dict[str, "TreeNode"] = field(default_factory=dict)
    name: Optional[str] = None

    tag_type: ClassVar[TagType] = TagType.COMPOUND

    def get(self, key: str) -> Optional["TreeNode"]:
        return self.entries.get(key)

    def get_compound(self, key: str) -> Optional["CompoundTag"]:
        """Return the child `key` only if it is a compound."""
        child = self.entries.get(key)
        return child if isinstance(child, CompoundTag) else None

    def get_string(self, key: str) -> Optional[str]:
        """Return the child `key` only if it is a string tag."""
        child = self.entries.get(key)
        return child.value if isinstance(child, StringTag) else None

    def get_number(self, key: str) -> Optional[Union[int, float]]:
        """Return the child `key` only if it is a numeric scalar tag."""
        child = self.entries.get(key)
        if isinstance(child, NUMERIC_TAGS):
            return child.value
        return None


TreeNode = Union[
    EndTag,
    ByteTag,
    ShortTag,
    IntTag,
    LongTag,
    FloatTag,
    DoubleTag,
    ByteArrayTag,
    StringTag,
    ListTag,
    CompoundTag,
    IntArrayTag,
    LongArrayTag,
]

NUMERIC_TAGS = (ByteTag, ShortTag, IntTag, LongTag, FloatTag, DoubleTag)


__all__ = [
    "TagType",
    "EndTag",
    "ByteTag",
    "ShortTag",
    "IntTag",
    "LongTag",
    "FloatTag",
    "DoubleTag",
    "StringTag",
    "ByteArrayTag",
    "IntArrayTag",
    "LongArrayTag",
    "ListTag",
    "CompoundTag",
    "TreeNode",
    "NUMERIC_TAGS",
]
