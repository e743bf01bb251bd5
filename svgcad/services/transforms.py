"""Transform attribute parsing and the SVG -> DXF coordinate mapper.

Every element gets its own ``TransformContext``: the parent's context with
the element's ``transform`` attribute folded in. Contexts are frozen, so
siblings never see each other's transforms.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging
import math
import re

from svgcad.services.dimensions import SvgDimensions
from svgcad.services.geometry import Affine, Point

logger = logging.getLogger(__name__)

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_SEP = r"\s*[,\s]\s*"

_SCALE_RE = re.compile(rf"scale\(\s*({_NUMBER})(?:{_SEP}({_NUMBER}))?\s*\)")
_TRANSLATE_RE = re.compile(rf"translate\(\s*({_NUMBER})(?:{_SEP}({_NUMBER}))?\s*\)")
_ROTATE_RE = re.compile(
    rf"rotate\(\s*({_NUMBER})(?:{_SEP}({_NUMBER}){_SEP}({_NUMBER}))?\s*\)"
)


@dataclass(frozen=True)
class ParsedTransform:
    scale: Tuple[float, float] = (1.0, 1.0)
    translate_x: float = 0.0
    translate_y: float = 0.0
    rotate: float = 0.0
    rotate_center: Optional[Tuple[float, float]] = None

    def to_affine(self) -> Affine:
        # rotate() is not part of the matrix
        return Affine.from_scale_translate(
            self.scale[0], self.scale[1], self.translate_x, self.translate_y
        )


IDENTITY_TRANSFORM = ParsedTransform()


def parse_transform(text: Optional[str]) -> ParsedTransform:
    if not text:
        return IDENTITY_TRANSFORM

    scale = (1.0, 1.0)
    scale_match = _SCALE_RE.search(text)
    if scale_match:
        sx = float(scale_match.group(1))
        sy = float(scale_match.group(2)) if scale_match.group(2) is not None else sx
        scale = (sx, sy)

    translate_x = translate_y = 0.0
    translate_match = _TRANSLATE_RE.search(text)
    if translate_match:
        translate_x = float(translate_match.group(1))
        if translate_match.group(2) is not None:
            translate_y = float(translate_match.group(2))

    rotate = 0.0
    rotate_center = None
    rotate_match = _ROTATE_RE.search(text)
    if rotate_match:
        rotate = float(rotate_match.group(1))
        if rotate_match.group(2) is not None:
            rotate_center = (float(rotate_match.group(2)), float(rotate_match.group(3)))
        if rotate:
            logger.debug(
                "rotate(%s) parsed but not applied",
                rotate,
                extra={"transform": text, "rotate": rotate},
            )

    return ParsedTransform(scale, translate_x, translate_y, rotate, rotate_center)


@dataclass(frozen=True)
class TransformContext:
    matrix: Affine = Affine()
    max_y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    view_box_x: float = 0.0
    view_box_y: float = 0.0
    view_box_width: float = 0.0
    view_box_height: float = 0.0
    has_view_box: bool = False
    view_box_scale_x: float = 1.0
    view_box_scale_y: float = 1.0
    composition: str = "matrix"

    @classmethod
    def from_dimensions(cls, dims: SvgDimensions, composition: str = "matrix") -> "TransformContext":
        return cls(
            max_y=dims.real_max_y,
            width=dims.width,
            height=dims.height,
            view_box_x=dims.view_box_x,
            view_box_y=dims.view_box_y,
            view_box_width=dims.view_box_width,
            view_box_height=dims.view_box_height,
            has_view_box=dims.has_view_box,
            view_box_scale_x=dims.scale_x,
            view_box_scale_y=dims.scale_y,
            composition=composition,
        )

    @property
    def scale(self) -> Tuple[float, float]:
        return self.matrix.scale

    @property
    def translate_x(self) -> float:
        return self.matrix.e

    @property
    def translate_y(self) -> float:
        return self.matrix.f

    def descend(self, transform_text: Optional[str]) -> "TransformContext":
        """Context for a child carrying ``transform_text``."""
        if not transform_text:
            return self
        parsed = parse_transform(transform_text)
        if self.composition == "accumulate":
            m = self.matrix
            matrix = Affine.from_scale_translate(
                m.a * parsed.scale[0],
                m.d * parsed.scale[1],
                m.e + parsed.translate_x,
                m.f + parsed.translate_y,
            )
        else:
            matrix = self.matrix @ parsed.to_affine()
        return replace(self, matrix=matrix)

    @property
    def transform_scale(self) -> float:
        return self.matrix.mean_scale

    @property
    def circle_scale(self) -> float:
        """Radius factor for circles: viewBox scale times transform scale."""
        scale = self.transform_scale
        if self.has_view_box:
            scale *= math.sqrt(abs(self.view_box_scale_x * self.view_box_scale_y))
        return scale

    @property
    def flip_y(self) -> float:
        if self.has_view_box:
            return self.view_box_y + self.view_box_height
        return self.max_y


def transform_coordinates(x: float, y: float, ctx: TransformContext) -> Point:
    tx, ty = ctx.matrix.apply(x, y)
    if ctx.has_view_box:
        tx += ctx.view_box_x
        ty += ctx.view_box_y
    return tx, ctx.flip_y - ty
