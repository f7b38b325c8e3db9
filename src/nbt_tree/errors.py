# src/nbt_tree/errors.py
"""
Error taxonomy for reading WaypointData.dat.

  - ContainerFormatError: the outer envelope is unusable (zip without a
    matching entry, corrupt gzip/zip). Fatal.
  - DecompressionError: zlib inflate failed. The container layer catches
    this and falls back to treating the input as raw NBT.
  - DecodeError: the NBT stream itself is malformed (wrong root tag,
    unknown tag id, truncated input). Fatal.
"""

from __future__ import annotations

from typing import Optional


class WaypointDumpError(Exception):
    """Base class for all errors raised while reading a waypoint store."""


class ContainerFormatError(WaypointDumpError):
    """Raised when the compression envelope cannot yield an NBT payload."""


class DecompressionError(WaypointDumpError):
    """Raised when a zlib/deflate stream cannot be inflated."""


class DecodeError(WaypointDumpError):
    """
    Raised when the NBT byte stream does not follow the tag grammar.

    `offset` is the byte position where decoding stopped, when known.
    """

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)


__all__ = [
    "WaypointDumpError",
    "ContainerFormatError",
    "DecompressionError",
    "DecodeError",
]
