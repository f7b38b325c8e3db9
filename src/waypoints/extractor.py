# src/waypoints/extractor.py
"""
Flatten the generic waypoint tree into WaypointRecords.

JourneyMap has stored waypoints in several shapes over the years, so
extraction is a chain of strategies tried in order; the first one that
yields any records wins:

  1. grouped      groups -> <group> -> waypoints|wps|points|entries -> <id>
  2. root_level   waypoints|wps|points|entries -> <id>   (at the root)
  3. heuristic    breadth-first search for the first container whose
                  children mostly look like waypoints (have x/y/z)

Every strategy is a pure function of the tree and the config.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Dict, List, Optional, Sequence

from env.schema import DumpConfig
from nbt_tree.generic import SYNTHETIC_KEYS, GenericValue

from .schema import WaypointRecord


log = logging.getLogger(__name__)

_MISSING = object()

WAYPOINT_MAP_KEYS = ("waypoints", "wps", "points", "entries")
GROUP_ID_KEYS = ("id", "groupId", "name", "label", "key")

GUID_KEYS = ("guid", "id", "uuid", "key")
NAME_KEYS = ("name", "label", "title")
WAYPOINT_GROUP_KEYS = ("groupId", "group", "grp")
DIMENSION_KEYS = ("primaryDimension", "dimension", "dim", "primaryDim")
ENABLED_KEYS = ("enabled", "isEnabled")
PERSISTENT_KEYS = ("persistent", "isPersistent", "save")
COLOR_KEYS = ("color", "colour", "rgb")
ICON_KEYS = ("iconKey", "icon", "marker")
NOTE_KEYS = ("note", "description", "desc")


Strategy = Callable[[Dict[str, Any], DumpConfig], List[WaypointRecord]]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------


def first_present(mapping: Dict[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    """
    Return the value of the first key in `keys` that exists in `mapping`.

    A present key wins even when its value is None.
    """
    for key in keys:
        if key in mapping:
            return mapping[key]
    return default


def looks_like_waypoint(value: Any) -> bool:
    """True for mappings with x/y/z directly or under a `pos` mapping."""
    if not isinstance(value, dict):
        return False
    if "x" in value and "y" in value and "z" in value:
        return True
    pos = value.get("pos")
    return isinstance(pos, dict) and "x" in pos and "y" in pos and "z" in pos


def flatten_waypoint(wp: Dict[str, Any], default_group_id: Optional[str]) -> WaypointRecord:
    """
    Build a WaypointRecord from one waypoint mapping.

    Coordinates come from x/y/z; any that are missing are taken from `pos`.
    A missing group id becomes `default_group_id` (which may be None when
    the caller wants to fill it in itself).
    """
    x, y, z = wp.get("x"), wp.get("y"), wp.get("z")
    if x is None or y is None or z is None:
        pos = wp.get("pos")
        if isinstance(pos, dict):
            x = pos.get("x") if x is None else x
            y = pos.get("y") if y is None else y
            z = pos.get("z") if z is None else z

    return WaypointRecord(
        guid=first_present(wp, GUID_KEYS),
        name=first_present(wp, NAME_KEYS),
        group_id=first_present(wp, WAYPOINT_GROUP_KEYS, default_group_id),
        primary_dimension=first_present(wp, DIMENSION_KEYS),
        x=x,
        y=y,
        z=z,
        enabled=first_present(wp, ENABLED_KEYS),
        persistent=first_present(wp, PERSISTENT_KEYS),
        color=first_present(wp, COLOR_KEYS),
        icon_key=first_present(wp, ICON_KEYS),
        note=first_present(wp, NOTE_KEYS),
    )


def _flatten_waypoint_map(
    wps: Dict[str, Any],
    default_group_id: Optional[str],
) -> List[WaypointRecord]:
    """Flatten every mapping value; the map key stands in for a missing guid."""
    records: List[WaypointRecord] = []
    for key, value in wps.items():
        if key in SYNTHETIC_KEYS or not isinstance(value, dict):
            continue
        record = flatten_waypoint(value, default_group_id)
        if record.guid is None:
            record.guid = str(key)
        records.append(record)
    return records


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def extract_grouped(tree: Dict[str, Any], config: DumpConfig) -> List[WaypointRecord]:
    groups = tree.get("groups")
    if not isinstance(groups, dict):
        return []

    records: List[WaypointRecord] = []
    group_count = 0
    for group_key, group in groups.items():
        if group_key in SYNTHETIC_KEYS or not isinstance(group, dict):
            continue
        group_count += 1

        wps = first_present(group, WAYPOINT_MAP_KEYS)
        if not isinstance(wps, dict):
            continue

        group_id = first_present(group, GROUP_ID_KEYS, _MISSING)
        if group_id is _MISSING or group_id is None:
            group_id = str(group_key) if group_key is not None else config.default_group_id

        for record in _flatten_waypoint_map(wps, None):
            if record.group_id is None:
                record.group_id = group_id
            records.append(record)

    log.debug("groups found: %d, waypoints found: %d", group_count, len(records))
    return records


def extract_root_level(tree: Dict[str, Any], config: DumpConfig) -> List[WaypointRecord]:
    wps = first_present(tree, WAYPOINT_MAP_KEYS)
    if not isinstance(wps, dict):
        return []
    records = _flatten_waypoint_map(wps, config.default_group_id)
    log.debug("root-level waypoints found: %d", len(records))
    return records


def _candidates(node: Any) -> Optional[List[Dict[str, Any]]]:
    """
    Children of `node` that could be waypoints, or None if `node` cannot be a
    waypoint container.

    A mapping only qualifies when all of its (non-synthetic) values are
    mappings; a sequence contributes its mapping items.
    """
    if isinstance(node, dict):
        values = [v for k, v in node.items() if k not in SYNTHETIC_KEYS]
        if values and all(isinstance(v, dict) for v in values):
            return values
        return None
    if isinstance(node, list):
        return [v for v in node if isinstance(v, dict)]
    return None


def extract_heuristic(tree: Dict[str, Any], config: DumpConfig) -> List[WaypointRecord]:
    queue: deque = deque([tree])
    while queue:
        node = queue.popleft()

        candidates = _candidates(node)
        if candidates:
            hits = sum(1 for c in candidates if looks_like_waypoint(c))
            if hits >= max(1, len(candidates) // 2):
                records = [flatten_waypoint(c, config.default_group_id) for c in candidates]
                log.debug("heuristic waypoint container hit: %d rows", len(records))
                return records

        children = node.values() if isinstance(node, dict) else node
        for child in children:
            if isinstance(child, (dict, list)):
                queue.append(child)
    return []


STRATEGIES: List[Strategy] = [
    extract_grouped,
    extract_root_level,
    extract_heuristic,
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_records(
    tree: GenericValue,
    config: Optional[DumpConfig] = None,
    strategies: Optional[Sequence[Strategy]] = None,
) -> List[WaypointRecord]:
    """
    Run the strategy chain over a generic tree and return the first
    non-empty result (or [] if nothing looks like a waypoint).
    """
    config = config or DumpConfig()
    top = tree if isinstance(tree, dict) else {"root": tree}

    for strategy in strategies or STRATEGIES:
        records = strategy(top, config)
        if records:
            log.debug("%s extracted %d records", strategy.__name__, len(records))
            return records

    log.warning("No waypoint structure recognized; CSV will not be generated.")
    return []


__all__ = [
    "STRATEGIES",
    "extract_records",
    "extract_grouped",
    "extract_root_level",
    "extract_heuristic",
    "flatten_waypoint",
    "looks_like_waypoint",
    "first_present",
]
