import xml.etree.ElementTree as ET

from svgcad.services.errors import SvgParseError

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def local_name(tag) -> str:
    # Comments and processing instructions carry a callable tag.
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def parse_svg(svg_text: str) -> ET.Element:
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as exc:
        raise SvgParseError("SVG could not be parsed", error=str(exc)) from exc

    if local_name(root.tag) != "svg":
        raise SvgParseError(
            "SVG could not be parsed",
            error=f"root element is <{local_name(root.tag)}>, expected <svg>",
        )
    return root
