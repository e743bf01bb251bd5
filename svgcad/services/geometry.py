from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math

Point = Tuple[float, float]


@dataclass(frozen=True)
class Affine:
    """2x3 affine matrix mapping (x, y) -> (a*x + c*y + e, b*x + d*y + f)."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> "Affine":
        return cls()

    @classmethod
    def from_scale_translate(cls, sx: float, sy: float, tx: float = 0.0, ty: float = 0.0) -> "Affine":
        return cls(sx, 0.0, 0.0, sy, tx, ty)

    def __matmul__(self, other: "Affine") -> "Affine":
        # self applied after other
        return Affine(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, x: float, y: float) -> Point:
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    @property
    def scale(self) -> Tuple[float, float]:
        return self.a, self.d

    @property
    def translate(self) -> Tuple[float, float]:
        return self.e, self.f

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def mean_scale(self) -> float:
        """Geometric mean of the axis scales, used for radii under non-uniform scale."""
        return math.sqrt(abs(self.determinant))


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def normalize_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    angle = math.fmod(angle, 360.0)
    if angle < 0:
        angle += 360.0
    if angle >= 360.0:
        angle -= 360.0
    return angle


def angle_degrees(cx: float, cy: float, x: float, y: float) -> float:
    # Rounded so that -1e-14 reads as 0 rather than wrapping to 360.
    return normalize_degrees(round(math.degrees(math.atan2(y - cy, x - cx)), 9))


def signed_quarter_sweep(start: float, end: float) -> float:
    """Shortest signed sweep in degrees from ``start`` to ``end``.

    A sweep that collapses to (almost) nothing is read as a clockwise
    quarter turn, which is what every rounded-rect corner is.
    """
    diff = end - start
    while diff > 180.0:
        diff -= 360.0
    while diff < -180.0:
        diff += 360.0
    if abs(diff) < math.degrees(0.1):
        diff = -90.0
    return diff
