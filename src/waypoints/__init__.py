"""
waypoints

Derives the human-facing views of a decoded waypoint store:

  - extractor: generic tree -> WaypointRecord rows (waypoints.csv)
  - commands:  typed tree   -> grouped `/waypoint create` lines
  - colors / text: nearest palette color, title casing
"""

from .schema import WaypointRecord, GroupInfo, CSV_HEADER
from .text import title_case
from .colors import nearest_color, map_color
from .extractor import extract_records, STRATEGIES
from .commands import build_commands, render_commands, collect_groups

__all__ = [
    "WaypointRecord",
    "GroupInfo",
    "CSV_HEADER",
    "title_case",
    "nearest_color",
    "map_color",
    "extract_records",
    "STRATEGIES",
    "build_commands",
    "render_commands",
    "collect_groups",
]
