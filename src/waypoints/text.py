# src/waypoints/text.py
"""
String helpers for command labels: group title casing and quote escaping.
"""


def _is_boundary(ch: str) -> bool:
    return ch.isspace() or ch in "_-"


def title_case(text: str) -> str:
    """
    Capitalize the first letter after each word boundary, lower-case the rest.

    Boundaries are whitespace, "_" and "-"; they are kept as-is:

      "waystones"         -> "Waystones"
      "my group"          -> "My Group"
      "underground-bases" -> "Underground-Bases"
      "journeymap_default"-> "Journeymap_Default"
    """
    if not text:
        return text

    out = []
    capitalize_next = True
    for ch in text:
        if _is_boundary(ch):
            out.append(ch)
            capitalize_next = True
        elif capitalize_next:
            out.append(ch.upper())
            capitalize_next = False
        else:
            out.append(ch.lower())
    return "".join(out)


def escape_quotes(text: str) -> str:
    """Escape double quotes for use inside a quoted command argument."""
    return text.replace('"', '\\"')
