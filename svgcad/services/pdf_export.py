from __future__ import annotations

from pathlib import Path
from typing import Tuple
import logging
import xml.etree.ElementTree as ET

from svgcad.services.config import DEFAULT_CONFIG, ConverterConfig
from svgcad.services.dimensions import get_svg_dimensions
from svgcad.services.errors import SvgConversionError
from svgcad.services.svg_document import SVG_NAMESPACE, parse_svg

logger = logging.getLogger(__name__)

ET.register_namespace("", SVG_NAMESPACE)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")


def _svg2pdf(svg_bytes: bytes, output_path: Path) -> None:
    try:
        import cairosvg
    except (ImportError, OSError) as exc:
        raise SvgConversionError("PDF renderer is not available", error=str(exc)) from exc

    # dpi=72 makes one SVG user unit one PDF point.
    cairosvg.svg2pdf(bytestring=svg_bytes, write_to=str(output_path), dpi=72)


def page_size(svg_text: str, margin: float) -> Tuple[float, float, float, float]:
    width, height = get_svg_dimensions(svg_text)
    return width, height, width + 2 * margin, height + 2 * margin


def build_page_svg(svg_text: str, margin: float = DEFAULT_CONFIG.pdf_margin) -> Tuple[str, float, float]:
    """Wrap the drawing in a page-sized SVG that offsets it by ``margin``."""
    root = parse_svg(svg_text)
    width, height, page_width, page_height = page_size(svg_text, margin)

    root.set("x", str(margin))
    root.set("y", str(margin))
    root.set("width", str(width))
    root.set("height", str(height))
    # Keep the wrapper in the same namespace as the drawing.
    tag = "svg" if root.tag == "svg" else f"{{{SVG_NAMESPACE}}}svg"
    page = ET.Element(tag, {
        "width": str(page_width),
        "height": str(page_height),
        "viewBox": f"0 0 {page_width} {page_height}",
    })
    page.append(root)
    return ET.tostring(page, encoding="unicode"), page_width, page_height


def convert_svg_to_pdf(svg_text: str, output_path: Path, config: ConverterConfig = DEFAULT_CONFIG) -> Path:
    page_svg, page_width, page_height = build_page_svg(svg_text, config.pdf_margin)
    logger.info(
        "Rendering PDF page %sx%s pt to %s",
        page_width,
        page_height,
        output_path,
        extra={"page": (page_width, page_height)},
    )
    _svg2pdf(page_svg.encode("utf-8"), output_path)
    return output_path
