# tests/test_container.py
"""
Tests for nbt_tree.container: magic-byte detection and envelope stripping.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from nbt_tree.container import (
    ContainerFormat,
    decompress,
    detect_format,
    load_possibly_compressed,
)
from nbt_tree.errors import ContainerFormatError
from tests.fakes.nbt_builder import encode, gzipped, zipped, zlibbed


PAYLOAD = encode({"waypoints": {"w1": {"name": "Home", "x": 1, "y": 2, "z": 3}}})


def test_detect_format_uses_magic_bytes_only() -> None:
    assert detect_format(gzipped(PAYLOAD)) is ContainerFormat.GZIP
    assert detect_format(zipped({"WaypointData.dat": PAYLOAD})) is ContainerFormat.ZIP
    assert detect_format(zlibbed(PAYLOAD)) is ContainerFormat.ZLIB
    assert detect_format(PAYLOAD) is ContainerFormat.RAW
    assert detect_format(b"") is ContainerFormat.RAW


@pytest.mark.parametrize(
    "wrap",
    [
        lambda b: b,
        gzipped,
        zlibbed,
        lambda b: zipped({"WaypointData.dat": b}),
    ],
    ids=["raw", "gzip", "zlib", "zip"],
)
def test_decompress_recovers_payload_for_every_format(wrap) -> None:
    assert decompress(wrap(PAYLOAD)) == PAYLOAD


def test_zip_picks_first_matching_entry_in_directory_order() -> None:
    first = encode({"marker": "first"})
    second = encode({"marker": "second"})
    archive = zipped(
        {
            "readme.txt": b"not nbt",
            "backup/old.dat": first,
            "WaypointData.dat": second,
        }
    )

    # "backup/old.dat" ends with .dat and comes first.
    assert decompress(archive) == first


def test_zip_honours_custom_filename_and_extension() -> None:
    archive = zipped({"notes.txt": b"x", "store.nbt": PAYLOAD})

    assert decompress(archive, data_filename="store.nbt", data_extension=".nbt") == PAYLOAD


def test_zip_without_matching_entry_is_fatal() -> None:
    archive = zipped({"readme.txt": b"hello"})

    with pytest.raises(ContainerFormatError, match="WaypointData.dat"):
        decompress(archive)


def test_corrupt_zip_is_fatal() -> None:
    with pytest.raises(ContainerFormatError):
        decompress(b"PK\x03\x04garbage-not-a-zip")


def test_corrupt_gzip_is_fatal() -> None:
    with pytest.raises(ContainerFormatError):
        decompress(b"\x1f\x8b\x08\x00broken")


def test_failed_zlib_inflate_falls_back_to_raw(caplog) -> None:
    data = b"\x78\x00not-a-zlib-stream"

    with caplog.at_level(logging.WARNING, logger="nbt_tree.container"):
        out = decompress(data)

    assert out == data
    assert any("falling back to raw" in r.message for r in caplog.records)


def test_truncated_zlib_stream_falls_back_to_raw() -> None:
    data = zlibbed(PAYLOAD)[:-6]

    assert decompress(data) == data


def test_load_possibly_compressed_ignores_extension(tmp_path: Path) -> None:
    # gzip content behind a misleading .zip suffix
    path = tmp_path / "WaypointData.zip"
    path.write_bytes(gzipped(PAYLOAD))

    assert load_possibly_compressed(path) == PAYLOAD
