# src/waypoints/commands.py
"""
Build `/waypoint create` commands from the typed NBT tree.

Works on the typed tree rather than the generic view so numeric tags (e.g.
packed RGB ints) keep their raw type.

Output is an ordered mapping:

  raw group display name -> sorted list of command lines

with groups in the order their first waypoint was seen.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterator, List, Optional, Tuple

from env.schema import DumpConfig
from nbt_tree.schema import CompoundTag

from .colors import FALLBACK_COLOR, map_color
from .schema import GroupInfo
from .text import escape_quotes, title_case


log = logging.getLogger(__name__)

DEFAULT_NAME = "Unnamed"
DEFAULT_X, DEFAULT_Y, DEFAULT_Z = 0, 64, 0


# ---------------------------------------------------------------------------
# Tree lookups
# ---------------------------------------------------------------------------


def collect_groups(root: CompoundTag) -> Dict[str, GroupInfo]:
    """group id -> GroupInfo, from root.groups; blank names fall back to the id."""
    groups: Dict[str, GroupInfo] = {}
    groups_tag = root.get_compound("groups")
    if groups_tag is None:
        return groups

    for group_id, group in groups_tag.entries.items():
        name = group.get_string("name") if isinstance(group, CompoundTag) else None
        groups[group_id] = GroupInfo(group_id=group_id, display_name=name or group_id)
    return groups


def iter_waypoints(root: CompoundTag) -> Iterator[Tuple[str, CompoundTag, Optional[str]]]:
    """
    Yield (waypoint key, waypoint compound, implied group id).

    Waypoints under root.waypoints come first and imply no group. Waypoints
    nested inside a group (groups.<id>.waypoints) follow, implying that group.
    """
    wps = root.get_compound("waypoints")
    if wps is not None:
        for key, wp in wps.entries.items():
            if isinstance(wp, CompoundTag):
                yield key, wp, None
            else:
                log.debug("Skipping non-compound waypoint entry %r", key)

    groups_tag = root.get_compound("groups")
    if groups_tag is None:
        return
    for group_id, group in groups_tag.entries.items():
        nested = group.get_compound("waypoints") if isinstance(group, CompoundTag) else None
        if nested is None:
            continue
        for key, wp in nested.entries.items():
            if isinstance(wp, CompoundTag):
                yield key, wp, group_id


def _as_int(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def resolve_coord(wp: CompoundTag, key: str, default: int) -> int:
    """Numeric `key` on the waypoint, else pos.`key`, else `default`."""
    direct = _as_int(wp.get_number(key))
    if direct is not None:
        return direct
    pos = wp.get_compound("pos")
    if pos is not None:
        nested = _as_int(pos.get_number(key))
        if nested is not None:
            return nested
    return default


def offset_coordinates(
    title_group: str,
    x: int,
    y: int,
    z: int,
    config: DumpConfig,
) -> Tuple[int, int, int]:
    """Apply the configured Y/Z offsets when the group is the offset group."""
    if title_group.lower() == config.offset_group.lower():
        return x, y + config.y_offset, z + config.z_offset
    return x, y, z


def display_name(name: str, title_group: str) -> str:
    """Keep an existing "[Prefix] ..." name, else prefix with the group."""
    if name.startswith("[") and "]" in name:
        return escape_quotes(name)
    return escape_quotes(f"[{title_group}] {name}")


def format_command(
    label: str,
    dimension: str,
    x: int,
    y: int,
    z: int,
    color: str,
    player: str = "",
) -> str:
    cmd = f'waypoint create "{label}" {dimension} {x} {y} {z} {color}'
    if player:
        cmd += f" {player}"
    return cmd


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_command(
    wp: CompoundTag,
    groups: Dict[str, GroupInfo],
    config: DumpConfig,
    implied_group_id: Optional[str] = None,
) -> Optional[Tuple[str, str]]:
    """
    Return (raw group display name, command line) for one waypoint, or None
    when the waypoint belongs to a system group.
    """
    group_id = wp.get_string("groupId") or implied_group_id or config.default_group_id
    if group_id in config.system_groups:
        return None

    info = groups.get(group_id)
    group_name = info.display_name if info is not None else config.default_group_id
    title_group = title_case(group_name)

    name = wp.get_string("name") or DEFAULT_NAME

    x, y, z = offset_coordinates(
        title_group,
        resolve_coord(wp, "x", DEFAULT_X),
        resolve_coord(wp, "y", DEFAULT_Y),
        resolve_coord(wp, "z", DEFAULT_Z),
        config,
    )

    dimension = wp.get_string("primaryDimension") or config.default_dimension

    color_tag = wp.get("color")
    if color_tag is None:
        color = FALLBACK_COLOR
    else:
        # Only scalar tags carry a `value`; lists/compounds/arrays map to white.
        color = map_color(getattr(color_tag, "value", None), config.palette)

    line = format_command(
        display_name(name, title_group),
        dimension,
        x,
        y,
        z,
        color,
        config.player,
    )
    return group_name, line


def build_commands(root: CompoundTag, config: Optional[DumpConfig] = None) -> Dict[str, List[str]]:
    """Build every command, grouped by group display name and sorted per group."""
    config = config or DumpConfig()
    groups = collect_groups(root)

    by_group: Dict[str, List[str]] = {}
    skipped = 0
    for key, wp, implied_group in iter_waypoints(root):
        built = build_command(wp, groups, config, implied_group)
        if built is None:
            skipped += 1
            continue
        group_name, line = built
        by_group.setdefault(group_name, []).append(line)

    for lines in by_group.values():
        lines.sort()

    total = sum(len(lines) for lines in by_group.values())
    log.debug(
        "Built %d commands across %d groups (%d system-group waypoints skipped)",
        total,
        len(by_group),
        skipped,
    )
    return by_group


def render_commands(by_group: Dict[str, List[str]]) -> str:
    """
    Render grouped commands as create_waypoints.txt text:

      # Group: <name>
      <blank>
      <commands...>
      <blank>
    """
    out: List[str] = []
    for group_name, lines in by_group.items():
        out.append(f"# Group: {group_name}")
        out.append("")
        out.extend(lines)
        out.append("")
    return "".join(line + "\n" for line in out)


__all__ = [
    "collect_groups",
    "iter_waypoints",
    "resolve_coord",
    "offset_coordinates",
    "display_name",
    "format_command",
    "build_command",
    "build_commands",
    "render_commands",
]
