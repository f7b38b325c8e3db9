"""
export

Renders dump artifacts (JSON tree, CSV rows, command text) and writes them
atomically.
"""

from .writers import (
    render_json,
    render_csv,
    write_text_atomic,
    write_json,
    write_csv,
    write_commands,
)

__all__ = [
    "render_json",
    "render_csv",
    "write_text_atomic",
    "write_json",
    "write_csv",
    "write_commands",
]
