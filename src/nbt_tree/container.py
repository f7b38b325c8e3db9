# src/nbt_tree/container.py
"""
Strip the compression envelope around a WaypointData.dat payload.

Detection looks at magic bytes only (never the file extension):

  1F 8B      -> gzip
  'P' 'K'    -> zip; first entry named WaypointData.dat or ending in .dat
  78 ..      -> zlib; if inflate fails, fall through to raw
  otherwise  -> raw NBT, returned unchanged
"""

from __future__ import annotations

import gzip
import io
import logging
import zipfile
import zlib
from enum import Enum
from pathlib import Path

from .errors import ContainerFormatError, DecompressionError


log = logging.getLogger(__name__)

DEFAULT_DATA_FILENAME = "WaypointData.dat"
DEFAULT_DATA_EXTENSION = ".dat"

HEADER_PEEK = 12


class ContainerFormat(str, Enum):
    RAW = "raw"
    GZIP = "gzip"
    ZIP = "zip"
    ZLIB = "zlib"


def _hex(head: bytes) -> str:
    return " ".join(f"{b:02X}" for b in head) if head else "(none)"


def detect_format(data: bytes) -> ContainerFormat:
    """Classify the envelope from the leading bytes."""
    head = data[:HEADER_PEEK]
    if head[:2] == b"\x1f\x8b":
        return ContainerFormat.GZIP
    if head[:2] == b"PK":
        return ContainerFormat.ZIP
    if head[:1] == b"\x78":
        return ContainerFormat.ZLIB
    return ContainerFormat.RAW


# ---------------------------------------------------------------------------
# Per-format helpers
# ---------------------------------------------------------------------------


def _gunzip(data: bytes) -> bytes:
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise ContainerFormatError(f"Corrupt gzip stream: {exc}") from exc


def _inflate(data: bytes) -> bytes:
    """Inflate a zlib stream; bytes after the end of the stream are ignored."""
    inflater = zlib.decompressobj()
    try:
        out = inflater.decompress(data) + inflater.flush()
    except zlib.error as exc:
        raise DecompressionError(f"zlib inflate failed: {exc}") from exc
    if not inflater.eof:
        raise DecompressionError("zlib stream ended before its end marker")
    return out


def _unzip_entry(data: bytes, filename: str, extension: str) -> bytes:
    """
    Return the first entry (central directory order) that is named `filename`
    or ends with `extension`.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for info in archive.infolist():
                log.debug("ZIP entry: %s", info.filename)
                if info.filename == filename or info.filename.endswith(extension):
                    return archive.read(info)
    except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
        raise ContainerFormatError(f"Corrupt zip archive: {exc}") from exc
    raise ContainerFormatError(f"ZIP did not contain {filename}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decompress(
    data: bytes,
    *,
    data_filename: str = DEFAULT_DATA_FILENAME,
    data_extension: str = DEFAULT_DATA_EXTENSION,
) -> bytes:
    """
    Return the fully decompressed NBT bytes held in `data`.

    Raises ContainerFormatError for a zip without a matching entry or a
    corrupt gzip/zip envelope. A failed zlib inflate is not an error; the
    input is then treated as raw NBT.
    """
    log.debug("First bytes: %s", _hex(data[:HEADER_PEEK]))
    fmt = detect_format(data)

    if fmt is ContainerFormat.GZIP:
        log.debug("Detected GZIP")
        return _gunzip(data)

    if fmt is ContainerFormat.ZIP:
        log.debug("Detected ZIP")
        return _unzip_entry(data, data_filename, data_extension)

    if fmt is ContainerFormat.ZLIB:
        log.debug("Detected ZLIB/DEFLATE (0x78 ??)")
        try:
            return _inflate(data)
        except DecompressionError as exc:
            log.warning("Inflater failed, falling back to raw. Error: %s", exc)

    log.debug("Treating as raw NBT")
    return bytes(data)


def load_possibly_compressed(
    path: Path,
    *,
    data_filename: str = DEFAULT_DATA_FILENAME,
    data_extension: str = DEFAULT_DATA_EXTENSION,
) -> bytes:
    """Read `path` and strip any compression envelope."""
    data = Path(path).read_bytes()
    return decompress(data, data_filename=data_filename, data_extension=data_extension)


__all__ = [
    "ContainerFormat",
    "detect_format",
    "decompress",
    "load_possibly_compressed",
    "DEFAULT_DATA_FILENAME",
    "DEFAULT_DATA_EXTENSION",
]
