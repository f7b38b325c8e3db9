# src/export/writers.py
"""
Render and write the three dump artifacts:

  waypoints.json        generic tree, 2-space indented
  waypoints.csv         WaypointRecord rows (skipped when there are none)
  create_waypoints.txt  grouped /waypoint create commands

Each file is written to a temporary sibling and moved into place, so a
reader never sees a half-written artifact.
"""

from __future__ import annotations

import csv
import io
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from waypoints.commands import render_commands
from waypoints.schema import CSV_HEADER, WaypointRecord


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def escape_json_string(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def _render_value(value: Any, indent: int, out: List[str]) -> None:
    if value is None:
        out.append("null")
    elif isinstance(value, bool):
        out.append("true" if value else "false")
    elif isinstance(value, float) and not math.isfinite(value):
        # JSON has no NaN or Infinity
        out.append("null")
    elif isinstance(value, (int, float)):
        out.append(repr(value))
    elif isinstance(value, str):
        out.append(f'"{escape_json_string(value)}"')
    elif isinstance(value, dict):
        out.append("{\n")
        items = list(value.items())
        for i, (key, child) in enumerate(items):
            out.append(" " * (indent + 2))
            out.append(f'"{escape_json_string(str(key))}": ')
            _render_value(child, indent + 2, out)
            if i < len(items) - 1:
                out.append(",")
            out.append("\n")
        out.append(" " * indent + "}")
    elif isinstance(value, (list, tuple)):
        out.append("[\n")
        for i, child in enumerate(value):
            out.append(" " * (indent + 2))
            _render_value(child, indent + 2, out)
            if i < len(value) - 1:
                out.append(",")
            out.append("\n")
        out.append(" " * indent + "]")
    else:
        out.append(f'"{escape_json_string(str(value))}"')


def render_json(value: Any) -> str:
    """
    Render a generic tree the way waypoints.json is laid out: every container
    opens on its own line, children are indented by two spaces, and key order
    is preserved. Strings escape only backslash, quote, CR and LF. NaN and
    infinities are written as null.
    """
    out: List[str] = []
    _render_value(value, 0, out)
    out.append("\n")
    return "".join(out)


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_csv(records: Sequence[WaypointRecord]) -> str:
    """Header row plus one row per record; cells quoted only when needed."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    for record in records:
        row = record.to_row()
        writer.writerow([_csv_cell(row[h]) for h in CSV_HEADER])
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def write_text_atomic(path: Path, text: str) -> Path:
    """Write UTF-8 `text` to `path` via a temp file in the same directory."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path


def write_json(path: Path, tree: Any) -> Path:
    return write_text_atomic(path, render_json(tree))


def write_csv(path: Path, records: Sequence[WaypointRecord]) -> Optional[Path]:
    """Write the CSV, or nothing at all (returning None) when there are no records."""
    if not records:
        return None
    return write_text_atomic(path, render_csv(records))


def write_commands(path: Path, by_group: Dict[str, List[str]]) -> Path:
    return write_text_atomic(path, render_commands(by_group))
