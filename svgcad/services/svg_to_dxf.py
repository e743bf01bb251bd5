# ---------------------------
# SVG -> DXF (AutoCAD R12, ASCII)
# Supported:
# - line, circle, rect (rounded corners too), path (M/L/A/Z)
# - group transforms: scale / translate (rotate parsed, ignored)
# - stroke colour -> COLOR_<n> layer
# ---------------------------
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple
import logging
import math
import sys
import xml.etree.ElementTree as ET

from svgcad.services.config import ConverterConfig, load_converter_config
from svgcad.services.dimensions import dimensions_from_root
from svgcad.services.dxf_writer import DxfEntity, build_dxf_document
from svgcad.services.errors import SvgConversionError
from svgcad.services.shapes import (
    convert_circle_to_dxf,
    convert_line_to_dxf,
    convert_path_to_dxf,
    convert_rect_to_dxf,
    number_attr,
)
from svgcad.services.svg_document import local_name, parse_svg
from svgcad.services.transforms import TransformContext

logger = logging.getLogger(__name__)

# Output is grouped by element kind in this order, not interleaved by source order.
SHAPE_ORDER = ("line", "circle", "rect", "path")


def iter_drawables(root: ET.Element, ctx: TransformContext) -> Iterator[Tuple[str, ET.Element, TransformContext]]:
    """Depth-first walk yielding drawable elements with their own context.

    The root's transform is not applied; every other element folds its own
    ``transform`` into a fresh copy of the parent context.
    """
    stack = [(child, ctx) for child in reversed(list(root))]
    while stack:
        element, parent_ctx = stack.pop()
        name = local_name(element.tag)
        if not name:
            continue
        element_ctx = parent_ctx.descend(element.get("transform"))
        if name in SHAPE_ORDER:
            yield name, element, element_ctx
            continue
        stack.extend((child, element_ctx) for child in reversed(list(element)))


def _raw_line_length(element: ET.Element) -> float:
    return math.hypot(
        number_attr(element, "x2") - number_attr(element, "x1"),
        number_attr(element, "y2") - number_attr(element, "y1"),
    )


def svg_to_dxf_entities(svg_text: str, config: Optional[ConverterConfig] = None,
                        log: logging.Logger = logger) -> List[DxfEntity]:
    config = config or load_converter_config()
    root = parse_svg(svg_text)
    dims = dimensions_from_root(root)
    base_ctx = TransformContext.from_dimensions(dims, composition=config.composition)

    grouped: Dict[str, List[DxfEntity]] = {name: [] for name in SHAPE_ORDER}
    found: Dict[str, int] = {name: 0 for name in SHAPE_ORDER}

    for name, element, ctx in iter_drawables(root, base_ctx):
        found[name] += 1
        if name == "line":
            if _raw_line_length(element) > config.line_min_length:
                grouped[name].extend(convert_line_to_dxf(element, ctx, log=log))
        elif name == "circle":
            grouped[name].extend(convert_circle_to_dxf(element, ctx, log=log))
        elif name == "rect":
            grouped[name].extend(convert_rect_to_dxf(element, ctx, config=config, log=log))
        else:
            grouped[name].extend(convert_path_to_dxf(element, ctx, config=config, log=log))

    entities: List[DxfEntity] = []
    for name in SHAPE_ORDER:
        entities.extend(grouped[name])

    log.info(
        "Converted %s elements into %d DXF entities",
        ", ".join(f"{found[name]} {name}" for name in SHAPE_ORDER),
        len(entities),
        extra={"elements": found, "entities": len(entities)},
    )
    return entities


def convert_svg_to_dxf(svg_text: str, config: Optional[ConverterConfig] = None,
                       log: logging.Logger = logger) -> str:
    return build_dxf_document(svg_to_dxf_entities(svg_text, config=config, log=log))


def convert_file(svg_path: Path, dxf_path: Path, config: Optional[ConverterConfig] = None) -> int:
    svg_text = svg_path.read_text(encoding="utf-8")
    entities = svg_to_dxf_entities(svg_text, config=config)
    dxf_path.write_text(build_dxf_document(entities), encoding="utf-8")
    return len(entities)


# ---------------------------
# CLI
# ---------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (1, 2):
        print("Usage: svgcad-convert input.svg [output.dxf]")
        return 1

    svg = Path(args[0])
    dxf = Path(args[1]) if len(args) == 2 else svg.with_name(f"{svg.name}.dxf")

    if not svg.exists():
        print(f"Input file '{svg}' not found")
        return 1

    try:
        count = convert_file(svg, dxf)
    except SvgConversionError as exc:
        print(f"Conversion failed: {exc}")
        return 1

    print(f"OK: {dxf} ({count} entities)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
