"""SVG elliptical arcs to DXF.

Circular arcs become native ARC entities. Elliptical arcs, and circular arcs
whose center cannot be solved, are sampled into LINE segments through the
one ellipse sampler in this module (also used for elliptical rect corners).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional
import logging
import math

from svgcad.services.config import DEFAULT_CONFIG, ConverterConfig
from svgcad.services.dxf_writer import DxfArc, DxfEntity, DxfLine
from svgcad.services.geometry import Point, angle_degrees, distance, normalize_degrees
from svgcad.services.transforms import TransformContext, transform_coordinates

logger = logging.getLogger(__name__)

COINCIDENT_EPS = 0.001
# Radius inflation when the chord is longer than the diameter; dividing by
# 1.999 instead of 2 keeps the square root below strictly positive.
OVERSIZED_CHORD_DIVISOR = 1.999


class ArcCenter(NamedTuple):
    cx: float
    cy: float
    radius: float


@dataclass(frozen=True)
class ArcCenterParams:
    cx: float
    cy: float
    rx: float
    ry: float
    theta1: float
    dtheta: float
    phi: float


def calculate_arc_center(x1, y1, x2, y2, r, large_arc_flag, sweep_flag) -> Optional[ArcCenter]:
    """Center of the circle of radius ``r`` through both endpoints.

    Of the two candidate centers, the one on the left of the chord is taken
    when the flags differ, the one on the right when they match, as in the
    SVG arc implementation notes. Returns None for coincident endpoints.
    """
    dx = x2 - x1
    dy = y2 - y1
    d = math.hypot(dx, dy)
    if d < COINCIDENT_EPS:
        logger.debug("Arc endpoints coincide (d=%s)", d, extra={"chord": d})
        return None

    radius = abs(r)
    if d > 2 * radius:
        adjusted = d / OVERSIZED_CHORD_DIVISOR
        logger.debug("Arc radius adjusted %s -> %s", radius, adjusted, extra={"chord": d})
        radius = adjusted

    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2
    h = math.sqrt(max(0.0, radius * radius - (d / 2) * (d / 2)))
    ux = -dy / d
    uy = dx / d

    if large_arc_flag != sweep_flag:
        return ArcCenter(mx + h * ux, my + h * uy, radius)
    return ArcCenter(mx - h * ux, my - h * uy, radius)


def svg_arc_to_center(x1, y1, x2, y2, rx, ry, phi, large_arc_flag, sweep_flag) -> Optional[ArcCenterParams]:
    """Endpoint to center parametrization (SVG 1.1, appendix F.6.5)."""
    phi = math.radians(phi)
    rx = abs(rx)
    ry = abs(ry)

    if abs(x1 - x2) < COINCIDENT_EPS and abs(y1 - y2) < COINCIDENT_EPS:
        return None
    if rx == 0 or ry == 0:
        return None

    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    x1p = cos_phi * (x1 - x2) / 2 + sin_phi * (y1 - y2) / 2
    y1p = -sin_phi * (x1 - x2) / 2 + cos_phi * (y1 - y2) / 2

    lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
    if lam > 1:
        rx *= math.sqrt(lam)
        ry *= math.sqrt(lam)

    sign = -1 if large_arc_flag == sweep_flag else 1
    numerator = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
    denominator = rx * rx * y1p * y1p + ry * ry * x1p * x1p
    coeff = sign * math.sqrt(max(0.0, numerator / denominator))

    cxp = coeff * rx * y1p / ry
    cyp = -coeff * ry * x1p / rx
    cx = cos_phi * cxp - sin_phi * cyp + (x1 + x2) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (y1 + y2) / 2

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    dtheta = theta2 - theta1
    if sweep_flag == 0 and dtheta > 0:
        dtheta -= 2 * math.pi
    elif sweep_flag == 1 and dtheta < 0:
        dtheta += 2 * math.pi

    return ArcCenterParams(cx, cy, rx, ry, theta1, dtheta, phi)


def segment_count(dtheta: float, rx: float, ry: float, minimum: int, units_per_segment: float,
                  maximum: Optional[int] = None) -> int:
    wanted = abs(dtheta) * max(rx, ry) / units_per_segment
    # "not <=" also catches inf and nan from huge radii
    if maximum is not None and not wanted <= maximum:
        logger.debug(
            "Arc segment count capped %s -> %d",
            wanted,
            maximum,
            extra={"segments": wanted, "cap": maximum},
        )
        return max(minimum, maximum)
    return max(minimum, math.ceil(wanted))


def ellipse_points(cx, cy, rx, ry, phi, theta1, dtheta, segments) -> List[Point]:
    """``segments + 1`` evenly spaced points along an ellipse arc (radians)."""
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)
    points = []
    for i in range(segments + 1):
        angle = theta1 + dtheta * i / segments
        ex = rx * math.cos(angle)
        ey = ry * math.sin(angle)
        points.append((cx + ex * cos_phi - ey * sin_phi, cy + ex * sin_phi + ey * cos_phi))
    return points


def polyline_to_lines(points, ctx: TransformContext, min_length: float, color: int, layer: str) -> List[DxfLine]:
    """Map SVG-space points and join them, dropping segments not longer than ``min_length``."""
    mapped = [transform_coordinates(x, y, ctx) for x, y in points]
    lines = []
    for start, end in zip(mapped, mapped[1:]):
        if distance(start, end) > min_length:
            lines.append(DxfLine(start[0], start[1], end[0], end[1], layer, color))
    return lines


def directed_sweep_angles(start: float, end: float, sweep_flag: int):
    """Extend ``end`` by a turn so it lies in the sweep direction.

    ``sweep_flag`` 0 runs counter-clockwise (``end`` >= ``start``), 1 clockwise.
    """
    if sweep_flag == 0:
        if end < start:
            end += 360.0
    elif end > start:
        end -= 360.0
    return start, end


def dxf_arc_angles(start: float, end: float, sweep_flag: int):
    """Group 50/51 values for a directed sweep; DXF arcs always run counter-clockwise."""
    start, end = directed_sweep_angles(start, end, sweep_flag)
    if end < start:
        start, end = end, start
    span = end - start
    start = normalize_degrees(start)
    return start, start + span


def native_arc(center: Point, start: Point, end: Point, radius: float, sweep_flag: int,
               ctx: TransformContext, color: int = 7, layer: str = "0") -> DxfArc:
    """ARC entity for a circular arc given in SVG space.

    ``sweep_flag`` has SVG meaning (1 = positive angle direction in SVG
    space). The mapper flips Y, which turns that direction clockwise in DXF
    unless the transform itself mirrors.
    """
    c = transform_coordinates(center[0], center[1], ctx)
    s = transform_coordinates(start[0], start[1], ctx)
    e = transform_coordinates(end[0], end[1], ctx)

    start_angle = angle_degrees(c[0], c[1], s[0], s[1])
    end_angle = angle_degrees(c[0], c[1], e[0], e[1])

    mirrored = ctx.matrix.determinant < 0
    dxf_sweep = (1 - sweep_flag) if mirrored else sweep_flag
    start_angle, end_angle = dxf_arc_angles(start_angle, end_angle, dxf_sweep)

    return DxfArc(c[0], c[1], radius * ctx.transform_scale, start_angle, end_angle, layer, color)


def _chord_line(start_x, start_y, end_x, end_y, ctx, min_length, color, layer) -> List[DxfEntity]:
    return list(polyline_to_lines([(start_x, start_y), (end_x, end_y)], ctx, min_length, color, layer))


def approximate_arc_with_lines(start_x, start_y, end_x, end_y, rx, ry, x_axis_rotation,
                               large_arc_flag, sweep_flag, ctx: TransformContext,
                               segments: int = 96, color: int = 7, layer: str = "0",
                               config: ConverterConfig = DEFAULT_CONFIG) -> List[DxfEntity]:
    params = svg_arc_to_center(
        start_x, start_y, end_x, end_y, rx, ry, x_axis_rotation, large_arc_flag, sweep_flag
    )
    if params is None:
        logger.debug(
            "Arc parameters unsolvable, using chord",
            extra={"start": (start_x, start_y), "end": (end_x, end_y)},
        )
        return _chord_line(start_x, start_y, end_x, end_y, ctx, config.segment_min_length, color, layer)

    count = segment_count(
        params.dtheta, params.rx, params.ry, segments, config.arc_units_per_segment,
        maximum=config.arc_max_segments,
    )
    points = ellipse_points(
        params.cx, params.cy, params.rx, params.ry, params.phi, params.theta1, params.dtheta, count
    )
    lines = polyline_to_lines(points, ctx, config.segment_min_length, color, layer)
    logger.debug(
        "Arc approximated with %d of %d segments",
        len(lines),
        count,
        extra={"segments": count, "entities": len(lines)},
    )
    return lines


def convert_arc_to_dxf(start_x, start_y, end_x, end_y, rx, ry, x_axis_rotation,
                       large_arc_flag, sweep_flag, ctx: TransformContext,
                       color: int = 7, layer: str = "0",
                       config: ConverterConfig = DEFAULT_CONFIG) -> List[DxfEntity]:
    if abs(rx - ry) < config.circular_tolerance:
        center = calculate_arc_center(
            start_x, start_y, end_x, end_y, rx, large_arc_flag, sweep_flag
        )
        if center is not None:
            return [native_arc(
                (center.cx, center.cy),
                (start_x, start_y),
                (end_x, end_y),
                center.radius,
                sweep_flag,
                ctx,
                color,
                layer,
            )]

    return approximate_arc_with_lines(
        start_x, start_y, end_x, end_y, rx, ry, x_axis_rotation,
        large_arc_flag, sweep_flag, ctx,
        segments=config.arc_min_segments, color=color, layer=layer, config=config,
    )
