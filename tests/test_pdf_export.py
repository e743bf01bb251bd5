import xml.etree.ElementTree as ET

import pytest

from svgcad.services.config import ConverterConfig
from svgcad.services.errors import SvgParseError
from svgcad.services.pdf_export import build_page_svg, convert_svg_to_pdf, page_size


def test_page_is_content_plus_margins():
    page_svg, width, height = build_page_svg('<svg width="100" height="50"><rect width="10" height="10"/></svg>', 20)
    assert (width, height) == (140, 90)

    page = ET.fromstring(page_svg)
    assert page.tag == "svg"
    assert float(page.get("width")) == 140
    assert [float(v) for v in page.get("viewBox").split()] == [0, 0, 140, 90]
    (inner,) = list(page)
    assert float(inner.get("x")) == 20
    assert float(inner.get("y")) == 20
    assert float(inner.get("width")) == 100
    assert inner.find("rect") is not None


def test_page_size_converts_units():
    width, height, page_width, page_height = page_size('<svg width="10mm" height="10mm"/>', 20)
    assert width == pytest.approx(28.3465)
    assert page_width == pytest.approx(68.3465)
    assert page_height == pytest.approx(68.3465)


def test_namespaced_drawing_keeps_namespace():
    page_svg, _, _ = build_page_svg('<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>')
    page = ET.fromstring(page_svg)
    assert page.tag == "{http://www.w3.org/2000/svg}svg"
    assert list(page)[0].tag == "{http://www.w3.org/2000/svg}svg"


def test_convert_passes_page_to_renderer(tmp_path, monkeypatch):
    rendered = {}

    def fake_render(svg_bytes, output_path):
        rendered["svg"] = svg_bytes
        output_path.write_bytes(b"%PDF-1.4")

    monkeypatch.setattr("svgcad.services.pdf_export._svg2pdf", fake_render)
    target = tmp_path / "out.pdf"
    result = convert_svg_to_pdf('<svg width="100" height="50"/>', target, ConverterConfig(pdf_margin=5))

    assert result == target
    assert target.read_bytes() == b"%PDF-1.4"
    page = ET.fromstring(rendered["svg"])
    assert float(page.get("width")) == 110


def test_convert_rejects_malformed_svg(tmp_path):
    with pytest.raises(SvgParseError):
        convert_svg_to_pdf("<svg", tmp_path / "out.pdf")
