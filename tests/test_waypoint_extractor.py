# tests/test_waypoint_extractor.py
"""
Tests for waypoints.extractor.

Covers each strategy on its own, the order in which the chain tries them,
and the alias lookups used to flatten one waypoint.
"""

from __future__ import annotations

import logging

from env.schema import DumpConfig
from nbt_tree.decoder import decode
from nbt_tree.generic import to_generic
from tests.fakes.nbt_builder import encode
from waypoints.extractor import (
    extract_grouped,
    extract_heuristic,
    extract_records,
    extract_root_level,
    flatten_waypoint,
    looks_like_waypoint,
)
from waypoints.schema import WaypointRecord


CONFIG = DumpConfig()


def test_flatten_waypoint_resolves_aliases() -> None:
    wp = {
        "uuid": "abc",
        "label": "Base",
        "grp": "farm",
        "dim": "minecraft:the_nether",
        "pos": {"x": 1, "y": 2, "z": 3},
        "isEnabled": 1,
        "save": 0,
        "colour": 255,
        "marker": "diamond",
        "desc": "hello",
    }

    record = flatten_waypoint(wp, "Global")

    assert record == WaypointRecord(
        guid="abc",
        name="Base",
        group_id="farm",
        primary_dimension="minecraft:the_nether",
        x=1,
        y=2,
        z=3,
        enabled=1,
        persistent=0,
        color=255,
        icon_key="diamond",
        note="hello",
    )


def test_flatten_waypoint_prefers_first_alias_and_direct_coords() -> None:
    wp = {"id": "second", "guid": "first", "x": 10, "pos": {"x": 1, "y": 2, "z": 3}}

    record = flatten_waypoint(wp, "Global")

    assert record.guid == "first"
    # x present directly; y/z filled from pos
    assert (record.x, record.y, record.z) == (10, 2, 3)
    assert record.group_id == "Global"
    assert record.name is None
    assert record.note is None


def test_looks_like_waypoint() -> None:
    assert looks_like_waypoint({"x": 0, "y": 0, "z": 0})
    assert looks_like_waypoint({"pos": {"x": 0, "y": 0, "z": 0}})
    assert not looks_like_waypoint({"x": 0, "y": 0})
    assert not looks_like_waypoint({"pos": {"x": 0}})
    assert not looks_like_waypoint([1, 2, 3])


def test_grouped_strategy_injects_group_id_from_group_object() -> None:
    tree = {
        "groups": {
            "g1": {
                "id": "farm",
                "waypoints": {
                    "w1": {"name": "Wheat", "x": 1, "y": 2, "z": 3},
                    "w2": {"name": "Carrot", "groupId": "explicit", "x": 4, "y": 5, "z": 6},
                },
            },
            "g2": {
                "wps": {"w3": {"name": "Cave", "x": 7, "y": 8, "z": 9}},
            },
        }
    }

    records = extract_grouped(tree, CONFIG)

    assert [r.name for r in records] == ["Wheat", "Carrot", "Cave"]
    assert [r.group_id for r in records] == ["farm", "explicit", "g2"]
    # guid falls back to the waypoint map key
    assert [r.guid for r in records] == ["w1", "w2", "w3"]


def test_grouped_strategy_on_decoded_tree_uses_group_name() -> None:
    data = encode(
        {
            "groups": {
                "waystones": {
                    "name": "Waystones",
                    "waypoints": {"w1": {"name": "Stone", "x": 200, "y": 64, "z": 300}},
                }
            }
        }
    )
    records = extract_records(to_generic(decode(data)), CONFIG)

    assert len(records) == 1
    assert records[0].group_id == "Waystones"
    assert records[0].guid == "w1"
    assert (records[0].x, records[0].y, records[0].z) == (200, 64, 300)


def test_root_level_strategy() -> None:
    tree = {
        "waypoints": {
            "a": {"name": "A", "x": 1, "y": 1, "z": 1},
            "b": "not a waypoint",
            "c": {"guid": "own-guid", "name": "C", "pos": {"x": 2, "y": 2, "z": 2}},
        }
    }

    records = extract_root_level(tree, CONFIG)

    assert [r.guid for r in records] == ["a", "own-guid"]
    assert all(r.group_id == "Global" for r in records)


def test_grouped_wins_over_root_level() -> None:
    tree = {
        "groups": {"g": {"waypoints": {"w": {"name": "grouped", "x": 0, "y": 0, "z": 0}}}},
        "waypoints": {"r": {"name": "root", "x": 0, "y": 0, "z": 0}},
    }

    assert [r.name for r in extract_records(tree, CONFIG)] == ["grouped"]


def test_falls_through_to_root_level_when_groups_have_no_waypoints() -> None:
    tree = {
        "groups": {"g": {"name": "Empty"}},
        "waypoints": {"r": {"name": "root", "x": 0, "y": 0, "z": 0}},
    }

    assert [r.name for r in extract_records(tree, CONFIG)] == ["root"]


def test_heuristic_finds_nested_mapping_of_four_waypoints() -> None:
    data = encode(
        {
            "meta": {"version": 3},
            "store": {
                "data": {
                    "a": {"name": "A", "x": 1, "y": 2, "z": 3},
                    "b": {"name": "B", "x": 4, "y": 5, "z": 6},
                    "c": {"name": "C", "pos": {"x": 7, "y": 8, "z": 9}},
                    "d": {"name": "D", "x": 10, "y": 11, "z": 12},
                }
            },
        }
    )
    tree = to_generic(decode(data))

    assert extract_grouped(tree, CONFIG) == []
    assert extract_root_level(tree, CONFIG) == []

    records = extract_records(tree, CONFIG)

    assert [r.name for r in records] == ["A", "B", "C", "D"]
    assert (records[2].x, records[2].y, records[2].z) == (7, 8, 9)


def test_heuristic_scans_lists() -> None:
    tree = {
        "outer": {
            "_list": [
                {"x": 1, "y": 1, "z": 1},
                {"x": 2, "y": 2, "z": 2},
                {"other": True},
            ],
            "_elemType": 10,
        }
    }

    records = extract_heuristic(tree, CONFIG)

    assert len(records) == 3
    assert records[0].x == 1
    assert records[2].x is None


def test_heuristic_needs_at_least_half_matching() -> None:
    tree = {
        "bucket": {
            "a": {"x": 1, "y": 1, "z": 1},
            "b": {"q": 1},
            "c": {"q": 2},
            "d": {"q": 3},
            "e": {"q": 4},
        }
    }

    assert extract_heuristic(tree, CONFIG) == []


def test_heuristic_first_container_in_bfs_order_wins() -> None:
    tree = {
        "deep": {"deeper": {"p": {"x": 9, "y": 9, "z": 9, "name": "deep"}}},
        "shallow": {"p": {"x": 1, "y": 1, "z": 1, "name": "shallow"}},
    }

    assert [r.name for r in extract_heuristic(tree, CONFIG)] == ["shallow"]


def test_no_structure_yields_empty_list_and_warning(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="waypoints.extractor"):
        records = extract_records({"foo": 1, "bar": {"baz": "x"}}, CONFIG)

    assert records == []
    assert any("No waypoint structure" in r.message for r in caplog.records)


def test_non_mapping_tree_is_wrapped() -> None:
    records = extract_records([{"x": 1, "y": 2, "z": 3}], CONFIG)

    assert len(records) == 1
    assert records[0].y == 2


def test_extraction_is_deterministic() -> None:
    tree = {"waypoints": {k: {"name": k, "x": 0, "y": 0, "z": 0} for k in "qwerty"}}

    first = extract_records(tree, CONFIG)
    second = extract_records(tree, CONFIG)

    assert first == second
    assert [r.name for r in first] == list("qwerty")


def test_custom_default_group_id() -> None:
    tree = {"waypoints": {"a": {"x": 0, "y": 0, "z": 0}}}

    records = extract_records(tree, DumpConfig(default_group_id="Misc"))

    assert records[0].group_id == "Misc"
