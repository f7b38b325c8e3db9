from __future__ import annotations

import re
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import ColorPalette, DumpConfig


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG_PATH = CONFIG_ROOT / "waypoint_dump.yaml"

_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{6})$")
_KNOWN_KEYS = {f.name for f in fields(DumpConfig)}


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file and return its top-level mapping."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _parse_palette(raw: Any, path: Path) -> ColorPalette:
    """
    Accept a mapping of color name -> "#RRGGBB" | int.

    YAML mappings keep file order, which becomes the tie-break order.
    """
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"'palette' in {path} must be a non-empty mapping of name -> color")

    palette = []
    for name, value in raw.items():
        if isinstance(value, bool):
            raise ValueError(f"Invalid color for '{name}' in {path}: {value!r}")
        if isinstance(value, int):
            rgb = value & 0xFFFFFF
        elif isinstance(value, str) and _HEX_COLOR.match(value.strip()):
            rgb = int(_HEX_COLOR.match(value.strip()).group(1), 16)
        else:
            raise ValueError(f"Invalid color for '{name}' in {path}: {value!r}")
        palette.append((str(name).strip().lower(), rgb))
    return tuple(palette)


def _coerce(cfg: Dict[str, Any], path: Path) -> Dict[str, Any]:
    """Turn raw YAML values into DumpConfig field values."""
    unknown = set(cfg) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown keys in {path}: {sorted(unknown)}")

    out: Dict[str, Any] = {}
    for key, value in cfg.items():
        if key in ("y_offset", "z_offset"):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"'{key}' in {path} must be an integer, got {value!r}")
            out[key] = value
        elif key == "system_groups":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"'system_groups' in {path} must be a list of strings")
            out[key] = frozenset(value)
        elif key == "palette":
            out[key] = _parse_palette(value, path)
        else:
            # player may legitimately be blank / null
            out[key] = "" if value is None else str(value)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_dump_config(path: Optional[Path] = None) -> DumpConfig:
    """
    Return the DumpConfig described by a YAML file.

    File shape:

      dump:
        player: ""
        default_group_id: "Global"
        y_offset: -3
        z_offset: -1
        system_groups: [journeymap_temp, ...]
        palette:
          black: "#000000"
          ...

    Every key is optional. With no explicit path, config/waypoint_dump.yaml
    is used when present and built-in defaults otherwise. An explicit path
    that does not exist raises FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return DumpConfig()
        path = DEFAULT_CONFIG_PATH

    path = Path(path)
    raw = _load_yaml(path)
    section = raw.get("dump", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'dump' in {path} must be a mapping, got {type(section)}")

    return replace(DumpConfig(), **_coerce(section, path))


__all__ = [
    "load_dump_config",
    "DEFAULT_CONFIG_PATH",
]
