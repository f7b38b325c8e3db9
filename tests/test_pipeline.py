# tests/test_pipeline.py
"""
End-to-end tests for app.pipeline.run_dump.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.pipeline import (
    COMMANDS_FILENAME,
    CSV_FILENAME,
    JSON_FILENAME,
    build_artifacts,
    run_dump,
)
from env.schema import DumpConfig
from nbt_tree.errors import ContainerFormatError, DecodeError
from tests.fakes.nbt_builder import encode, gzipped, zipped


STORE = {
    "groups": {
        "waystones": {"name": "Waystones"},
        "journeymap_death": {"name": "Deaths"},
    },
    "waypoints": {
        "w1": {
            "name": "Stone",
            "groupId": "waystones",
            "x": 200,
            "y": 64,
            "z": 300,
            "color": 255,
        },
        "w2": {"name": "Grave", "groupId": "journeymap_death", "x": 1, "y": 2, "z": 3},
    },
}


def test_run_dump_writes_all_three_artifacts(tmp_path: Path) -> None:
    source = tmp_path / "WaypointData.dat"
    source.write_bytes(gzipped(encode(STORE)))
    out_dir = tmp_path / "export"

    result = run_dump(source, out_dir, DumpConfig())

    assert result.json_path == out_dir / JSON_FILENAME
    assert result.csv_path == out_dir / CSV_FILENAME
    assert result.commands_path == out_dir / COMMANDS_FILENAME
    assert result.record_count == 2
    assert result.command_count == 1
    assert result.group_counts == {"Waystones": 1}

    # JSON is valid and carries the synthetic keys
    tree = json.loads(result.json_path.read_text(encoding="utf-8"))
    assert tree["_name"] == ""
    assert tree["waypoints"]["w1"]["name"] == "Stone"

    csv_lines = result.csv_path.read_text(encoding="utf-8").splitlines()
    assert csv_lines[0].startswith("guid,name,groupId")
    assert csv_lines[1] == "w1,Stone,waystones,,200,64,300,,,255,,"
    assert len(csv_lines) == 3

    assert result.commands_path.read_text(encoding="utf-8") == (
        "# Group: Waystones\n"
        "\n"
        'waypoint create "[Waystones] Stone" minecraft:overworld 200 61 299 dark_blue\n'
        "\n"
    )


def test_unrecognized_structure_skips_csv(tmp_path: Path) -> None:
    source = tmp_path / "WaypointData.dat"
    source.write_bytes(encode({"version": 3, "settings": {"theme": "dark"}}))
    out_dir = tmp_path / "export"

    result = run_dump(source, out_dir)

    assert result.csv_path is None
    assert result.record_count == 0
    assert not (out_dir / CSV_FILENAME).exists()
    assert (out_dir / JSON_FILENAME).exists()
    assert (out_dir / COMMANDS_FILENAME).read_text(encoding="utf-8") == ""


def test_zip_input_uses_configured_entry(tmp_path: Path) -> None:
    source = tmp_path / "backup.zip"
    source.write_bytes(zipped({"readme.txt": b"hi", "WaypointData.dat": encode(STORE)}))

    result = run_dump(source, tmp_path / "out")

    assert result.command_count == 1


@pytest.mark.parametrize(
    "payload, error",
    [
        (encode(STORE)[:-4], DecodeError),
        (b"\x08\x00\x00\x00\x01a", DecodeError),
        (zipped({"notes.txt": b"x"}), ContainerFormatError),
    ],
    ids=["truncated", "non-compound-root", "zip-without-data"],
)
def test_failures_write_nothing(tmp_path: Path, payload: bytes, error) -> None:
    source = tmp_path / "WaypointData.dat"
    source.write_bytes(payload)
    out_dir = tmp_path / "export"

    with pytest.raises(error):
        run_dump(source, out_dir)

    assert not out_dir.exists()


def test_build_artifacts_is_pure() -> None:
    data = encode(STORE)

    first = build_artifacts(data, DumpConfig())
    second = build_artifacts(data, DumpConfig())

    assert first.generic == second.generic
    assert first.records == second.records
    assert first.commands == second.commands
    assert first.command_count == 1


def test_raw_store_with_group_nested_waypoint_end_to_end(tmp_path: Path) -> None:
    source = tmp_path / "WaypointData.dat"
    source.write_bytes(
        encode(
            {
                "groups": {
                    "waystones": {
                        "name": "Waystones",
                        "waypoints": {
                            "w1": {"name": "Stone", "x": 200, "y": 64, "z": 300, "color": 255},
                        },
                    }
                }
            }
        )
    )
    out_dir = tmp_path / "export"

    result = run_dump(source, out_dir, DumpConfig())

    assert (out_dir / COMMANDS_FILENAME).read_text(encoding="utf-8") == (
        "# Group: Waystones\n"
        "\n"
        'waypoint create "[Waystones] Stone" minecraft:overworld 200 61 299 dark_blue\n'
        "\n"
    )
    # grouped extraction picks the same waypoint for the CSV
    assert result.record_count == 1
    assert (out_dir / CSV_FILENAME).read_text(encoding="utf-8").splitlines()[1] == (
        "w1,Stone,Waystones,,200,64,300,,,255,,"
    )
