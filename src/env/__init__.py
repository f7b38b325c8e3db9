"""
env

Configuration for the waypoint dump: the DumpConfig dataclass and its YAML
loader.
"""

from .schema import DumpConfig, ColorPalette, DEFAULT_PALETTE, DEFAULT_SYSTEM_GROUPS
from .loader import load_dump_config, DEFAULT_CONFIG_PATH

__all__ = [
    "DumpConfig",
    "ColorPalette",
    "DEFAULT_PALETTE",
    "DEFAULT_SYSTEM_GROUPS",
    "load_dump_config",
    "DEFAULT_CONFIG_PATH",
]
