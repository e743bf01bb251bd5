import re

DEFAULT_COLOR = 7

# Exact stroke spellings for the seven basic DXF colours; black and white share 7.
_BASIC_COLORS = {
    1: ("red", "#ff0000", "#f00", "rgb(255,0,0)"),
    2: ("yellow", "#ffff00", "#ff0", "rgb(255,255,0)"),
    3: ("green", "#00ff00", "#0f0", "rgb(0,255,0)"),
    4: ("cyan", "#00ffff", "#0ff", "rgb(0,255,255)"),
    5: ("blue", "#0000ff", "#00f", "rgb(0,0,255)"),
    6: ("magenta", "#ff00ff", "#f0f", "rgb(255,0,255)"),
    7: (
        "white", "#ffffff", "#fff", "rgb(255,255,255)",
        "black", "#000000", "#000", "rgb(0,0,0)",
    ),
}

COLOR_MAP = {
    spelling: code
    for code, spellings in _BASIC_COLORS.items()
    for spelling in spellings
}

_HEX6_RE = re.compile(r"^#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$")


def _nearest_basic_color(r: int, g: int, b: int) -> int:
    if r > 200 and g < 100 and b < 100:
        return 1
    if r > 200 and g > 200 and b < 100:
        return 2
    if r < 100 and g > 200 and b < 100:
        return 3
    if r < 100 and g > 200 and b > 200:
        return 4
    if r < 100 and g < 100 and b > 200:
        return 5
    if r > 200 and g < 100 and b > 200:
        return 6
    return DEFAULT_COLOR


def color_code_from_stroke(stroke: str) -> int:
    normalized = re.sub(r"\s+", "", (stroke or "").lower())

    if normalized in COLOR_MAP:
        return COLOR_MAP[normalized]

    match = _HEX6_RE.match(normalized)
    if match:
        r, g, b = (int(part, 16) for part in match.groups())
        return _nearest_basic_color(r, g, b)

    return DEFAULT_COLOR


def layer_for_stroke(stroke):
    """Return ``(color_code, layer_name)`` for an optional stroke attribute."""
    if stroke is None:
        return DEFAULT_COLOR, "0"
    color = color_code_from_stroke(stroke)
    return color, f"COLOR_{color}"
