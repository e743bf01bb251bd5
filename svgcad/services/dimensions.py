from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging
import re
import xml.etree.ElementTree as ET

from svgcad.services.errors import SvgParseError
from svgcad.services.svg_document import parse_svg

logger = logging.getLogger(__name__)

DEFAULT_PAGE_WIDTH = 595.0  # A4, points
DEFAULT_PAGE_HEIGHT = 842.0

UNIT_TO_POINTS = {
    "mm": 2.83465,
    "cm": 28.3465,
    "in": 72.0,
    "pt": 1.0,
}

_LENGTH_RE = re.compile(r"^([\d.]+)(mm|cm|in|pt)?$")
_LEADING_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_leading_float(value: Optional[str]) -> Optional[float]:
    """Parse the numeric prefix of ``value`` ("12px" -> 12.0), None if absent."""
    if value is None:
        return None
    match = _LEADING_NUMBER_RE.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def convert_to_points(value: str) -> Optional[float]:
    match = _LENGTH_RE.match(value.strip())
    if not match:
        return parse_leading_float(value)
    try:
        number = float(match.group(1))
    except ValueError:
        return parse_leading_float(value)
    return number * UNIT_TO_POINTS[match.group(2) or "pt"]


def parse_view_box(value: Optional[str]):
    if not value:
        return None
    tokens = [token for token in re.split(r"[\s,]+", value.strip()) if token]
    if len(tokens) < 4:
        return None
    try:
        return tuple(float(token) for token in tokens[:4])
    except ValueError:
        return None


@dataclass(frozen=True)
class SvgDimensions:
    width: float
    height: float
    view_box_x: float = 0.0
    view_box_y: float = 0.0
    view_box_width: float = 0.0
    view_box_height: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    has_view_box: bool = False
    real_min_x: float = 0.0
    real_min_y: float = 0.0
    real_max_x: float = 0.0
    real_max_y: float = 0.0


def dimensions_from_root(root: ET.Element) -> SvgDimensions:
    raw_width = root.get("width")
    raw_height = root.get("height")
    width = convert_to_points(raw_width) if raw_width else None
    height = convert_to_points(raw_height) if raw_height else None

    view_box = parse_view_box(root.get("viewBox"))
    if view_box is not None:
        vb_x, vb_y, vb_w, vb_h = view_box
        # Without an explicit size the viewBox is rendered 1:1.
        width = width or vb_w or DEFAULT_PAGE_WIDTH
        height = height or vb_h or DEFAULT_PAGE_HEIGHT
        dims = SvgDimensions(
            width=width,
            height=height,
            view_box_x=vb_x,
            view_box_y=vb_y,
            view_box_width=vb_w,
            view_box_height=vb_h,
            scale_x=width / vb_w if vb_w else 1.0,
            scale_y=height / vb_h if vb_h else 1.0,
            has_view_box=True,
            real_min_x=vb_x,
            real_min_y=vb_y,
            real_max_x=vb_x + vb_w,
            real_max_y=vb_y + vb_h,
        )
    else:
        width = width or DEFAULT_PAGE_WIDTH
        height = height or DEFAULT_PAGE_HEIGHT
        dims = SvgDimensions(
            width=width,
            height=height,
            real_max_x=width,
            real_max_y=height,
        )

    logger.debug(
        "SVG dimensions %sx%s pt, viewBox=%s, scale=%.4fx%.4f",
        dims.width,
        dims.height,
        view_box,
        dims.scale_x,
        dims.scale_y,
        extra={"dimensions": dims},
    )
    return dims


def analyze_svg_dimensions(svg_text: str) -> SvgDimensions:
    return dimensions_from_root(parse_svg(svg_text))


def get_svg_dimensions(svg_text: str):
    """Content size in points for page layout; falls back to A4 on bad input."""
    try:
        root = parse_svg(svg_text)
    except SvgParseError:
        logger.warning("Could not read SVG size, using A4", exc_info=True)
        return DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT

    raw_width = root.get("width")
    raw_height = root.get("height")
    width = convert_to_points(raw_width) if raw_width else None
    height = convert_to_points(raw_height) if raw_height else None

    if not width or not height:
        view_box = parse_view_box(root.get("viewBox"))
        if view_box is not None:
            width, height = view_box[2], view_box[3]

    return width or DEFAULT_PAGE_WIDTH, height or DEFAULT_PAGE_HEIGHT
