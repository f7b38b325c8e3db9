# src/waypoints/schema.py
"""
Row and group types shared by the extractor, the command builder and the
CSV writer.

WaypointRecord fields are snake_case; EXPORT_NAMES maps them to the
camelCase column names JourneyMap itself uses.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class WaypointRecord:
    """
    One flattened waypoint, as written to waypoints.csv.

    Every field is optional: the store's schema drifts between JourneyMap
    versions, so whatever could not be found stays None.

    Field order is the CSV column order; EXPORT_NAMES gives the column
    header used for each field.
    """
    guid: Optional[Any] = None
    name: Optional[Any] = None
    group_id: Optional[Any] = None
    primary_dimension: Optional[Any] = None
    x: Optional[Any] = None
    y: Optional[Any] = None
    z: Optional[Any] = None
    enabled: Optional[Any] = None
    persistent: Optional[Any] = None
    color: Optional[Any] = None
    icon_key: Optional[Any] = None
    note: Optional[Any] = None

    def to_row(self) -> Dict[str, Any]:
        """Return {column header: value} in column order."""
        return {
            EXPORT_NAMES[f.name]: getattr(self, f.name)
            for f in fields(self)
        }


EXPORT_NAMES: Dict[str, str] = {
    "guid": "guid",
    "name": "name",
    "group_id": "groupId",
    "primary_dimension": "primaryDimension",
    "x": "x",
    "y": "y",
    "z": "z",
    "enabled": "enabled",
    "persistent": "persistent",
    "color": "color",
    "icon_key": "iconKey",
    "note": "note",
}

CSV_HEADER = tuple(EXPORT_NAMES[f.name] for f in fields(WaypointRecord))


@dataclass(frozen=True)
class GroupInfo:
    """A waypoint group id and the name shown to players."""
    group_id: str
    display_name: str
