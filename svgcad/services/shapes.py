from __future__ import annotations

from typing import List, Optional
import logging
import math
import xml.etree.ElementTree as ET

from svgcad.services.arcs import convert_arc_to_dxf, ellipse_points, native_arc, polyline_to_lines
from svgcad.services.colors import layer_for_stroke
from svgcad.services.config import DEFAULT_CONFIG, ConverterConfig
from svgcad.services.dimensions import parse_leading_float
from svgcad.services.dxf_writer import DxfCircle, DxfEntity, DxfLine
from svgcad.services.geometry import distance, signed_quarter_sweep
from svgcad.services.path_data import ArcTo, ClosePath, LineTo, MoveTo, parse_path_data
from svgcad.services.transforms import TransformContext, transform_coordinates

logger = logging.getLogger(__name__)

# (name, corner-center offsets, start angle, end angle); angles are DXF-space
# degrees, walked clockwise like the rectangle outline itself. Each pair is a
# clockwise quarter turn, so it is written as the counter-clockwise ARC
# 90-180, 0-90, 270-360, 180-270; wrapping start to end counter-clockwise
# instead (180 -> 450) would draw a 270 degree arc.
ROUNDED_CORNERS = (
    ("top_left", (0, 0), 180.0, 90.0),
    ("top_right", (1, 0), 90.0, 0.0),
    ("bottom_right", (1, 1), 0.0, 270.0),
    ("bottom_left", (0, 1), 270.0, 180.0),
)


def number_attr(element: ET.Element, name: str, default: float = 0.0) -> float:
    value = parse_leading_float(element.get(name))
    return default if value is None else value


def _line(start, end, color: int, layer: str) -> DxfLine:
    return DxfLine(start[0], start[1], end[0], end[1], layer, color)


def convert_line_to_dxf(element: ET.Element, ctx: TransformContext,
                        log: logging.Logger = logger) -> List[DxfEntity]:
    x1 = number_attr(element, "x1")
    y1 = number_attr(element, "y1")
    x2 = number_attr(element, "x2")
    y2 = number_attr(element, "y2")
    color, layer = layer_for_stroke(element.get("stroke"))

    start = transform_coordinates(x1, y1, ctx)
    end = transform_coordinates(x2, y2, ctx)
    log.debug(
        "line (%s,%s)->(%s,%s) mapped to %s->%s",
        x1, y1, x2, y2, start, end,
        extra={"element": "line", "color": color},
    )
    return [_line(start, end, color, layer)]


def convert_circle_to_dxf(element: ET.Element, ctx: TransformContext,
                          log: logging.Logger = logger) -> List[DxfEntity]:
    cx = number_attr(element, "cx")
    cy = number_attr(element, "cy")
    r = number_attr(element, "r")
    color, layer = layer_for_stroke(element.get("stroke"))

    if r <= 0:
        log.debug("Skipping circle with radius %s", r, extra={"element": "circle"})
        return []

    center = transform_coordinates(cx, cy, ctx)
    radius = r * ctx.circle_scale
    log.debug(
        "circle (%s,%s) r=%s mapped to %s r=%s",
        cx, cy, r, center, radius,
        extra={"element": "circle", "color": color},
    )
    return [DxfCircle(center[0], center[1], radius, layer, color)]


def convert_rect_to_dxf(element: ET.Element, ctx: TransformContext,
                        config: ConverterConfig = DEFAULT_CONFIG,
                        log: logging.Logger = logger) -> List[DxfEntity]:
    x = number_attr(element, "x")
    y = number_attr(element, "y")
    width = number_attr(element, "width")
    height = number_attr(element, "height")
    rx = number_attr(element, "rx")
    ry = number_attr(element, "ry")
    color, layer = layer_for_stroke(element.get("stroke"))

    if width <= 0 or height <= 0:
        log.debug("Skipping rect of size %sx%s", width, height, extra={"element": "rect"})
        return []

    if rx > 0 or ry > 0:
        return convert_rounded_rect_to_dxf(
            x, y, width, height, rx, ry, ctx, color, layer, config=config, log=log
        )

    top_left = transform_coordinates(x, y, ctx)
    top_right = transform_coordinates(x + width, y, ctx)
    bottom_right = transform_coordinates(x + width, y + height, ctx)
    bottom_left = transform_coordinates(x, y + height, ctx)

    return [
        _line(top_left, top_right, color, layer),
        _line(top_right, bottom_right, color, layer),
        _line(bottom_right, bottom_left, color, layer),
        _line(bottom_left, top_left, color, layer),
    ]


def _corner_entities(center, rx: float, ry: float, start: float, end: float,
                     ctx: TransformContext, color: int, layer: str,
                     config: ConverterConfig) -> List[DxfEntity]:
    # DXF y-up angles become negated parameters in SVG's y-down space.
    sweep = signed_quarter_sweep(start, end)
    theta1 = math.radians(-start)
    dtheta = math.radians(-sweep)

    if abs(rx - ry) < config.circular_tolerance:
        arc_start = (center[0] + rx * math.cos(theta1), center[1] + rx * math.sin(theta1))
        arc_end = (
            center[0] + rx * math.cos(theta1 + dtheta),
            center[1] + rx * math.sin(theta1 + dtheta),
        )
        sweep_flag = 1 if dtheta > 0 else 0
        return [native_arc(center, arc_start, arc_end, rx, sweep_flag, ctx, color, layer)]

    points = ellipse_points(center[0], center[1], rx, ry, 0.0, theta1, dtheta, config.corner_segments)
    return polyline_to_lines(points, ctx, config.segment_min_length, color, layer)


def convert_rounded_rect_to_dxf(x: float, y: float, width: float, height: float,
                                rx: float, ry: float, ctx: TransformContext,
                                color: int = 7, layer: str = "0",
                                config: ConverterConfig = DEFAULT_CONFIG,
                                log: logging.Logger = logger) -> List[DxfEntity]:
    if ry <= 0:
        ry = rx
    if rx <= 0:
        rx = ry
    rx = min(rx, width / 2)
    ry = min(ry, height / 2)

    entities: List[DxfEntity] = []

    def edge(x1, y1, x2, y2):
        entities.append(_line(
            transform_coordinates(x1, y1, ctx),
            transform_coordinates(x2, y2, ctx),
            color,
            layer,
        ))

    if width > 2 * rx:
        edge(x + rx, y, x + width - rx, y)
    if height > 2 * ry:
        edge(x + width, y + ry, x + width, y + height - ry)
    if width > 2 * rx:
        edge(x + width - rx, y + height, x + rx, y + height)
    if height > 2 * ry:
        edge(x, y + height - ry, x, y + ry)

    for name, (fx, fy), start, end in ROUNDED_CORNERS:
        center = (
            x + rx + fx * (width - 2 * rx),
            y + ry + fy * (height - 2 * ry),
        )
        corner = _corner_entities(center, rx, ry, start, end, ctx, color, layer, config)
        log.debug(
            "%s corner: %d entities",
            name,
            len(corner),
            extra={"element": "rect", "corner": name, "entities": len(corner)},
        )
        entities.extend(corner)

    return entities


def _segment_line(start, end, ctx, min_length, color, layer) -> Optional[DxfLine]:
    line_start = transform_coordinates(start[0], start[1], ctx)
    line_end = transform_coordinates(end[0], end[1], ctx)
    if distance(line_start, line_end) > min_length:
        return _line(line_start, line_end, color, layer)
    return None


def convert_path_to_dxf(element: ET.Element, ctx: TransformContext,
                        config: ConverterConfig = DEFAULT_CONFIG,
                        log: logging.Logger = logger) -> List[DxfEntity]:
    d = element.get("d")
    if not d:
        return []

    color, layer = layer_for_stroke(element.get("stroke"))
    entities: List[DxfEntity] = []
    current_x = current_y = 0.0
    start_x = start_y = 0.0

    for command in parse_path_data(d):
        if isinstance(command, MoveTo):
            current_x, current_y = command.x, command.y
            start_x, start_y = current_x, current_y

        elif isinstance(command, LineTo):
            line = _segment_line(
                (current_x, current_y), (command.x, command.y), ctx, config.line_min_length, color, layer
            )
            if line is not None:
                entities.append(line)
            current_x, current_y = command.x, command.y

        elif isinstance(command, ArcTo):
            entities.extend(convert_arc_to_dxf(
                current_x, current_y,
                command.x, command.y,
                command.rx, command.ry,
                command.x_axis_rotation,
                command.large_arc_flag,
                command.sweep_flag,
                ctx,
                color,
                layer,
                config=config,
            ))
            current_x, current_y = command.x, command.y

        elif isinstance(command, ClosePath):
            if (current_x, current_y) != (start_x, start_y):
                line = _segment_line(
                    (current_x, current_y), (start_x, start_y), ctx, config.line_min_length, color, layer
                )
                if line is not None:
                    entities.append(line)
            current_x, current_y = start_x, start_y

    log.debug("path %.60s: %d entities", d, len(entities), extra={"element": "path", "entities": len(entities)})
    return entities
