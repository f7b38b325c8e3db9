"""
nbt_tree

Reads JourneyMap's WaypointData.dat: strips the compression envelope,
decodes the NBT tree and lowers it into plain JSON-shaped values.
"""

from .errors import (
    WaypointDumpError,
    ContainerFormatError,
    DecompressionError,
    DecodeError,
)
from .schema import TagType, TreeNode, CompoundTag, ListTag, StringTag
from .container import ContainerFormat, detect_format, decompress, load_possibly_compressed
from .decoder import decode
from .generic import GenericValue, to_generic

__all__ = [
    "WaypointDumpError",
    "ContainerFormatError",
    "DecompressionError",
    "DecodeError",
    "TagType",
    "TreeNode",
    "CompoundTag",
    "ListTag",
    "StringTag",
    "ContainerFormat",
    "detect_format",
    "decompress",
    "load_possibly_compressed",
    "decode",
    "GenericValue",
    "to_generic",
]
