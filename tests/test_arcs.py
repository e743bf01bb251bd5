import logging
import math

import pytest

from svgcad.services.arcs import (
    OVERSIZED_CHORD_DIVISOR,
    approximate_arc_with_lines,
    calculate_arc_center,
    convert_arc_to_dxf,
    directed_sweep_angles,
    dxf_arc_angles,
    segment_count,
    svg_arc_to_center,
)
from svgcad.services.config import ConverterConfig
from svgcad.services.dxf_writer import DxfArc, DxfLine
from svgcad.services.geometry import Affine, distance
from svgcad.services.transforms import TransformContext


@pytest.mark.parametrize("large_arc, sweep", [(0, 0), (0, 1), (1, 0), (1, 1)])
@pytest.mark.parametrize("end", [(6, 8), (3, 4)])
def test_center_is_equidistant_from_endpoints(large_arc, sweep, end):
    center = calculate_arc_center(0, 0, end[0], end[1], 5, large_arc, sweep)
    assert center.radius == 5
    assert distance((center.cx, center.cy), (0, 0)) == pytest.approx(5)
    assert distance((center.cx, center.cy), end) == pytest.approx(5)


def test_oversized_chord_inflates_radius():
    center = calculate_arc_center(0, 0, 10, 0, 2, 0, 1)
    assert center.radius == pytest.approx(10 / OVERSIZED_CHORD_DIVISOR)
    assert center.cx == pytest.approx(5)


def test_coincident_endpoints_have_no_center():
    assert calculate_arc_center(1, 1, 1.0001, 1, 5, 0, 1) is None


@pytest.mark.parametrize(
    "large_arc, sweep, expected_cy",
    [(0, 1, 8.660254), (1, 0, 8.660254), (0, 0, -8.660254), (1, 1, -8.660254)],
)
def test_center_side_follows_flags(large_arc, sweep, expected_cy):
    center = calculate_arc_center(0, 0, 10, 0, 10, large_arc, sweep)
    assert center.cx == pytest.approx(5)
    assert center.cy == pytest.approx(expected_cy, abs=1e-6)


@pytest.mark.parametrize("sweep, dtheta", [(1, math.pi), (0, -math.pi)])
def test_svg_arc_to_center_semicircle(sweep, dtheta):
    params = svg_arc_to_center(0, 0, 10, 0, 5, 5, 0, 0, sweep)
    assert (params.cx, params.cy) == pytest.approx((5, 0))
    assert abs(params.theta1) == pytest.approx(math.pi)
    assert params.dtheta == pytest.approx(dtheta)


def test_svg_arc_to_center_scales_up_small_radii():
    params = svg_arc_to_center(0, 0, 10, 0, 1, 2, 0, 0, 1)
    assert params.rx == pytest.approx(5)
    assert params.ry == pytest.approx(10)


def test_svg_arc_to_center_degenerate():
    assert svg_arc_to_center(0, 0, 10, 0, 0, 5, 0, 0, 1) is None
    assert svg_arc_to_center(3, 3, 3, 3, 5, 5, 0, 0, 1) is None


def test_segment_count():
    assert segment_count(math.pi, 5, 5, 64, 2) == 64
    assert segment_count(math.pi, 200, 200, 64, 2) == 315
    assert segment_count(math.pi, 200, 200, 64, 2, maximum=4096) == 315


def test_segment_count_is_capped():
    assert segment_count(math.pi, 1e9, 1, 64, 2, maximum=4096) == 4096
    assert segment_count(math.pi, math.inf, 1, 64, 2, maximum=4096) == 4096
    assert segment_count(math.pi, 1e9, 1, 64, 2, maximum=32) == 64


def test_directed_sweep_angles():
    assert directed_sweep_angles(350, 10, 0) == (350, 370)
    assert directed_sweep_angles(10, 350, 1) == (10, -10)
    assert directed_sweep_angles(10, 350, 0) == (10, 350)


@pytest.mark.parametrize(
    "start, end, sweep, expected",
    [
        (180, 90, 1, (90, 180)),
        (180, 0, 1, (0, 180)),
        (0, 270, 1, (270, 360)),
        (10, 350, 0, (10, 350)),
        (350, 10, 0, (350, 370)),
    ],
)
def test_dxf_arc_angles_run_counter_clockwise(start, end, sweep, expected):
    assert dxf_arc_angles(start, end, sweep) == pytest.approx(expected)


def test_circular_arc_becomes_native_arc():
    ctx = TransformContext(max_y=100)
    assert convert_arc_to_dxf(0, 0, 10, 0, 5, 5, 0, 0, 1, ctx) == [
        DxfArc(5, 100, 5, 0, 180)
    ]
    assert convert_arc_to_dxf(0, 0, 10, 0, 5, 5, 0, 0, 0, ctx) == [
        DxfArc(5, 100, 5, 180, 360)
    ]


def test_mirrored_transform_inverts_arc_direction():
    ctx = TransformContext(matrix=Affine.from_scale_translate(1, -1), max_y=0)
    assert convert_arc_to_dxf(0, 0, 10, 0, 5, 5, 0, 0, 1, ctx) == [
        DxfArc(5, 0, 5, 180, 360)
    ]


def test_arc_radius_follows_transform_scale():
    ctx = TransformContext(matrix=Affine.from_scale_translate(2, 2), max_y=100)
    (arc,) = convert_arc_to_dxf(0, 0, 10, 0, 5, 5, 0, 0, 1, ctx)
    assert arc.radius == 10
    assert (arc.cx, arc.cy) == (10, 100)


def test_coincident_arc_emits_nothing():
    ctx = TransformContext(max_y=100)
    assert convert_arc_to_dxf(5, 5, 5, 5, 5, 5, 0, 0, 1, ctx) == []


def test_elliptical_arc_becomes_chained_lines():
    ctx = TransformContext(max_y=100)
    lines = convert_arc_to_dxf(0, 0, 20, 0, 10, 5, 0, 0, 1, ctx, color=3, layer="COLOR_3")
    assert len(lines) == 64
    assert all(isinstance(line, DxfLine) for line in lines)
    assert all(line.layer == "COLOR_3" and line.color == 3 for line in lines)
    assert (lines[0].x1, lines[0].y1) == pytest.approx((0, 100))
    assert (lines[-1].x2, lines[-1].y2) == pytest.approx((20, 100))
    for previous, following in zip(lines, lines[1:]):
        assert (previous.x2, previous.y2) == (following.x1, following.y1)


def test_long_arcs_get_more_segments():
    ctx = TransformContext(max_y=0)
    lines = approximate_arc_with_lines(0, 0, 400, 0, 200, 200, 0, 0, 1, ctx, segments=64)
    assert len(lines) == 315


def test_huge_radius_arc_stays_within_segment_cap(caplog):
    caplog.set_level(logging.DEBUG, logger="svgcad.services.arcs")
    ctx = TransformContext(max_y=0)
    lines = approximate_arc_with_lines(0, 0, 10, 0, 1e9, 1, 0, 1, 1, ctx)
    assert 0 < len(lines) <= 4096
    (capped,) = [r for r in caplog.records if getattr(r, "cap", None) == 4096]
    assert capped.segments > 4096


def test_segment_cap_is_configurable():
    ctx = TransformContext(max_y=0)
    config = ConverterConfig(arc_max_segments=100)
    lines = convert_arc_to_dxf(0, 0, 10, 0, 1e6, 1, 0, 1, 1, ctx, config=config)
    assert 0 < len(lines) <= 100


def test_elliptical_segments_below_minimum_are_dropped():
    ctx = TransformContext(max_y=0)
    # each of the 64 chords is about 0.0005 long
    assert approximate_arc_with_lines(0, 0, 0.02, 0, 0.01, 0.005, 0, 0, 1, ctx) == []

    config = ConverterConfig(segment_min_length=0.0001)
    kept = approximate_arc_with_lines(0, 0, 0.02, 0, 0.01, 0.005, 0, 0, 1, ctx, config=config)
    assert len(kept) == 64
