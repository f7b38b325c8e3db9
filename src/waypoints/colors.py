# src/waypoints/colors.py
"""
Map arbitrary stored colors onto the named colors `/waypoint create` accepts.

Accepted inputs, in order of preference:
  - a palette name ("Dark Blue", "dark_blue")
  - "#RRGGBB"
  - a decimal integer in a string ("16711680")
  - a number (int or float; packed ARGB/RGB)

Alpha is masked off before matching. Anything else maps to "white".
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from env.schema import ColorPalette, DEFAULT_PALETTE


FALLBACK_COLOR = "white"

_HEX_RGB = re.compile(r"#[0-9A-Fa-f]{6}")
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def split_rgb(rgb: int) -> tuple[int, int, int]:
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def nearest_color(r: int, g: int, b: int, palette: ColorPalette = DEFAULT_PALETTE) -> str:
    """
    Return the palette name closest to (r, g, b) by squared Euclidean
    distance. The first entry wins on ties.
    """
    best_name = FALLBACK_COLOR
    best_dist: Optional[int] = None
    for name, value in palette:
        pr, pg, pb = split_rgb(value)
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if best_dist is None or dist < best_dist:
            best_dist = dist
            best_name = name
    return best_name


def nearest_color_rgb(rgb: int, palette: ColorPalette = DEFAULT_PALETTE) -> str:
    return nearest_color(*split_rgb(rgb & 0xFFFFFF), palette=palette)


def normalize_color_name(text: str, palette: ColorPalette = DEFAULT_PALETTE) -> Optional[str]:
    """Return the palette name `text` spells, or None."""
    candidate = text.strip().lower().replace(" ", "_")
    for name, _ in palette:
        if name == candidate:
            return name
    return None


def map_color(value: Any, palette: ColorPalette = DEFAULT_PALETTE) -> str:
    """Resolve a raw stored color value to a palette name."""
    if value is None or isinstance(value, bool):
        return FALLBACK_COLOR

    if isinstance(value, str):
        named = normalize_color_name(value, palette)
        if named is not None:
            return named
        if _HEX_RGB.fullmatch(value):
            return nearest_color_rgb(int(value[1:], 16), palette)
        if _DECIMAL.fullmatch(value):
            return nearest_color_rgb(int(value), palette)
        return FALLBACK_COLOR

    if isinstance(value, int):
        return nearest_color_rgb(value, palette)

    if isinstance(value, float):
        if not math.isfinite(value):
            return FALLBACK_COLOR
        return nearest_color_rgb(int(value), palette)

    return FALLBACK_COLOR


__all__ = [
    "FALLBACK_COLOR",
    "nearest_color",
    "nearest_color_rgb",
    "normalize_color_name",
    "map_color",
]
