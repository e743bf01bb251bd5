import pytest

from svgcad.services.dimensions import (
    analyze_svg_dimensions,
    convert_to_points,
    get_svg_dimensions,
    parse_leading_float,
)
from svgcad.services.errors import SvgParseError


@pytest.mark.parametrize(
    "value, expected",
    [("10mm", 28.3465), ("2cm", 56.693), ("1in", 72), ("12pt", 12), ("12", 12), ("100px", 100)],
)
def test_convert_to_points(value, expected):
    assert convert_to_points(value) == pytest.approx(expected)


def test_convert_to_points_without_number():
    assert convert_to_points("abc") is None


def test_parse_leading_float():
    assert parse_leading_float(" -2.5e1px") == -25
    assert parse_leading_float(None) is None
    assert parse_leading_float("px") is None


def test_no_view_box_uses_height_for_flip():
    dims = analyze_svg_dimensions('<svg width="100" height="50"/>')
    assert not dims.has_view_box
    assert (dims.width, dims.height) == (100, 50)
    assert dims.real_max_y == 50
    assert (dims.scale_x, dims.scale_y) == (1, 1)


def test_view_box_without_size_renders_one_to_one():
    dims = analyze_svg_dimensions('<svg viewBox="0 0 200 100"/>')
    assert dims.has_view_box
    assert (dims.width, dims.height) == (200, 100)
    assert (dims.scale_x, dims.scale_y) == (1, 1)
    assert dims.real_max_y == 100


def test_view_box_scale():
    dims = analyze_svg_dimensions('<svg width="400" height="200" viewBox="0 0 200 100"/>')
    assert (dims.scale_x, dims.scale_y) == (2, 2)


def test_comma_separated_view_box():
    dims = analyze_svg_dimensions('<svg viewBox="10,20,200,100"/>')
    assert (dims.view_box_x, dims.view_box_y) == (10, 20)
    assert dims.view_box_width == 200
    assert dims.real_max_y == 120


def test_short_view_box_is_ignored():
    dims = analyze_svg_dimensions('<svg width="50" height="50" viewBox="0 0 200"/>')
    assert not dims.has_view_box


def test_defaults_to_a4():
    dims = analyze_svg_dimensions("<svg/>")
    assert (dims.width, dims.height) == (595, 842)
    assert dims.real_max_y == 842


def test_malformed_svg_raises():
    with pytest.raises(SvgParseError):
        analyze_svg_dimensions("<svg")


def test_get_svg_dimensions():
    assert get_svg_dimensions('<svg width="10mm" height="1in"/>') == pytest.approx((28.3465, 72))
    assert get_svg_dimensions('<svg viewBox="0 0 300 150"/>') == (300, 150)


def test_get_svg_dimensions_falls_back_on_bad_input():
    assert get_svg_dimensions("not xml") == (595, 842)
