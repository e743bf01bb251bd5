from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os

from svgcad.domain_store import BASE_DIR

logger = logging.getLogger(__name__)

COMPOSITION_MODES = ("matrix", "accumulate")

_JSON_KEYS = {
    "composition": "composition",
    "lineMinLength": "line_min_length",
    "segmentMinLength": "segment_min_length",
    "circularTolerance": "circular_tolerance",
    "arcMinSegments": "arc_min_segments",
    "arcMaxSegments": "arc_max_segments",
    "cornerSegments": "corner_segments",
    "arcUnitsPerSegment": "arc_units_per_segment",
    "pdfMargin": "pdf_margin",
}


@dataclass(frozen=True)
class ConverterConfig:
    composition: str = "matrix"
    line_min_length: float = 0.01
    segment_min_length: float = 0.001
    circular_tolerance: float = 0.1
    arc_min_segments: int = 64
    arc_max_segments: int = 4096
    corner_segments: int = 64
    arc_units_per_segment: float = 2.0
    pdf_margin: float = 20.0

    def __post_init__(self) -> None:
        if self.composition not in COMPOSITION_MODES:
            raise ValueError(
                f"Unknown composition mode '{self.composition}' "
                f"(expected one of {', '.join(COMPOSITION_MODES)})"
            )
        if self.arc_min_segments < 1 or self.corner_segments < 1:
            raise ValueError("Segment counts must be >= 1")
        if self.arc_max_segments < self.arc_min_segments:
            raise ValueError("arcMaxSegments must be >= arcMinSegments")
        if self.arc_units_per_segment <= 0:
            raise ValueError("arcUnitsPerSegment must be > 0")


DEFAULT_CONFIG = ConverterConfig()


def config_from_dict(raw: Dict[str, Any]) -> ConverterConfig:
    types = {f.name: f.type for f in fields(ConverterConfig)}
    values: Dict[str, Any] = {}
    for json_key, attr in _JSON_KEYS.items():
        if json_key not in raw:
            continue
        value = raw[json_key]
        try:
            if types[attr] == "int":
                values[attr] = int(value)
            elif types[attr] == "float":
                values[attr] = float(value)
            else:
                values[attr] = str(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for '{json_key}': {value!r}") from exc
    return ConverterConfig(**values)


def load_converter_config(path: Optional[Path] = None) -> ConverterConfig:
    if path is None:
        config_path = os.getenv("SVGCAD_CONFIG_PATH")
        if not config_path:
            return DEFAULT_CONFIG
        path = BASE_DIR / config_path

    if not path.exists() or not path.is_file():
        logger.info("Converter config %s not found, using defaults", path)
        return DEFAULT_CONFIG

    with path.open("r", encoding="utf-8") as config_file:
        raw = json.load(config_file)

    if not isinstance(raw, dict):
        raise ValueError(f"Converter config {path} must be a JSON object")

    return config_from_dict(raw)
