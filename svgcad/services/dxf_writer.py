"""Minimal AutoCAD R12 (AC1009) writer for LINE, ARC and CIRCLE entities.

Entities are immutable records; a document is assembled once from a list of
them. Every value is emitted as a group-code / value line pair.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Union

ACAD_VERSION = "AC1009"
COLOR_LAYER_COUNT = 7


def _format_number(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def color_layer_name(color: int) -> str:
    return f"COLOR_{color}"


@dataclass(frozen=True)
class DxfLine:
    x1: float
    y1: float
    x2: float
    y2: float
    layer: str = "0"
    color: int = 7

    kind = "LINE"

    def group_codes(self) -> List[str]:
        return [
            "0", "LINE",
            "8", self.layer,
            "62", str(self.color),
            "10", _format_number(self.x1),
            "20", _format_number(self.y1),
            "30", "0",
            "11", _format_number(self.x2),
            "21", _format_number(self.y2),
            "31", "0",
        ]


@dataclass(frozen=True)
class DxfArc:
    cx: float
    cy: float
    radius: float
    start_angle: float
    end_angle: float
    layer: str = "0"
    color: int = 7

    kind = "ARC"

    def group_codes(self) -> List[str]:
        return [
            "0", "ARC",
            "8", self.layer,
            "62", str(self.color),
            "10", _format_number(self.cx),
            "20", _format_number(self.cy),
            "30", "0",
            "40", _format_number(self.radius),
            "50", _format_number(self.start_angle),
            "51", _format_number(self.end_angle),
        ]


@dataclass(frozen=True)
class DxfCircle:
    cx: float
    cy: float
    radius: float
    layer: str = "0"
    color: int = 7

    kind = "CIRCLE"

    def group_codes(self) -> List[str]:
        return [
            "0", "CIRCLE",
            "8", self.layer,
            "62", str(self.color),
            "10", _format_number(self.cx),
            "20", _format_number(self.cy),
            "30", "0",
            "40", _format_number(self.radius),
        ]


DxfEntity = Union[DxfLine, DxfArc, DxfCircle]


def _emit_header(lines: List[str]) -> None:
    lines.extend([
        "0", "SECTION", "2", "HEADER",
        "9", "$ACADVER", "1", ACAD_VERSION,
        "0", "ENDSEC",
    ])


def _layer_record(name: str, color: int) -> List[str]:
    return ["0", "LAYER", "2", name, "70", "0", "62", str(color), "6", "CONTINUOUS"]


def _emit_tables(lines: List[str]) -> None:
    layers = [("0", 7)] + [
        (color_layer_name(color), color)
        for color in range(1, COLOR_LAYER_COUNT + 1)
    ]
    lines.extend(["0", "SECTION", "2", "TABLES", "0", "TABLE", "2", "LAYER", "70", str(len(layers))])
    for name, color in layers:
        lines.extend(_layer_record(name, color))
    lines.extend(["0", "ENDTAB", "0", "ENDSEC"])


def write_entities(lines: List[str], entities: Iterable[DxfEntity]) -> None:
    for entity in entities:
        lines.extend(entity.group_codes())


def build_dxf_document(entities: Iterable[DxfEntity]) -> str:
    lines: List[str] = []
    _emit_header(lines)
    _emit_tables(lines)
    lines.extend(["0", "SECTION", "2", "ENTITIES"])
    write_entities(lines, entities)
    lines.extend(["0", "ENDSEC", "0", "EOF"])
    return "\n".join(lines) + "\n"
