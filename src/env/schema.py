# DumpConfig and the default color palette
# src/env/schema.py

from dataclasses import dataclass
from typing import FrozenSet, Tuple


# Named colors accepted by `/waypoint create`, in declaration order.
# Nearest-color ties resolve to the earlier entry.
ColorPalette = Tuple[Tuple[str, int], ...]

DEFAULT_PALETTE: ColorPalette = (
    ("black", 0x000000),
    ("dark_blue", 0x0000AA),
    ("dark_green", 0x00AA00),
    ("dark_aqua", 0x00AAAA),
    ("dark_red", 0xAA0000),
    ("dark_purple", 0xAA00AA),
    ("gold", 0xFFAA00),
    ("gray", 0xAAAAAA),
    ("dark_gray", 0x555555),
    ("blue", 0x5555FF),
    ("green", 0x55FF55),
    ("aqua", 0x55FFFF),
    ("red", 0xFF5555),
    ("light_purple", 0xFF55FF),
    ("yellow", 0xFFFF55),
    ("white", 0xFFFFFF),
)

DEFAULT_SYSTEM_GROUPS: FrozenSet[str] = frozenset(
    {
        "journeymap_temp",
        "journeymap_death",
        "journeymap_all",
        "journeymap_default",
    }
)


@dataclass(frozen=True)
class DumpConfig:
    """Everything the dump pipeline can be tuned with."""
    player: str = ""                        # appended to each command; "" = whoever runs it
    default_group_id: str = "Global"        # group for waypoints without one
    y_offset: int = -3                      # applied to the Waystones group only
    z_offset: int = -1                      # applied to the Waystones group only
    system_groups: FrozenSet[str] = DEFAULT_SYSTEM_GROUPS
    palette: ColorPalette = DEFAULT_PALETTE
    data_filename: str = "WaypointData.dat"  # zip entry to look for
    data_extension: str = ".dat"             # ...or any entry with this suffix
    default_dimension: str = "minecraft:overworld"
    offset_group: str = "waystones"          # compared case-insensitively
