"""Point and triangle value types shared by the builders, validator and codecs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

epsilon = 1e-6

Vec3 = Tuple[float, float, float]


def _f32(value: float) -> float:
    return float(np.float32(value))


@dataclass(frozen=True, eq=False)
class Point3:
    """Immutable XYZ point stored at single precision.

    Equality is tolerant: two points compare equal when every component
    differs by less than ``epsilon``.
    """

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'x', _f32(self.x))
        object.__setattr__(self, 'y', _f32(self.y))
        object.__setattr__(self, 'z', _f32(self.z))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point3):
            return NotImplemented
        return (abs(self.x - other.x) < epsilon and
                abs(self.y - other.y) < epsilon and
                abs(self.z - other.z) < epsilon)

    def __hash__(self) -> int:
        return hash(quantize(self))

    def __add__(self, other: "Point3") -> "Point3":
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point3") -> "Point3":
        return Point3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> "Point3":
        return Point3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Point3":
        return Point3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> "Point3":
        return Point3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Point3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "Point3":
        """Return the unit vector, or the zero vector for zero length input.

        Non-finite components propagate into the result.
        """

        length = self.length
        if length == 0.0:
            return ZERO
        return Point3(self.x / length, self.y / length, self.z / length)

    def as_tuple(self) -> Vec3:
        return self.x, self.y, self.z

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)


ZERO = Point3(0.0, 0.0, 0.0)


def cross(a: Point3, b: Point3) -> Point3:
    return Point3(a.y * b.z - a.z * b.y,
                  a.z * b.x - a.x * b.z,
                  a.x * b.y - a.y * b.x)


def dot(a: Point3, b: Point3) -> float:
    return a.x * b.x + a.y * b.y + a.z * b.z


def quantize(p: Point3, resolution: float = 1000.0) -> tuple:
    """Return an integer key with coordinates rounded to ``1/resolution``.

    Points with a NaN or infinite component are keyed by their raw
    coordinates.
    """

    if not p.is_finite():
        return p.as_tuple()
    return (int(round(p.x * resolution)),
            int(round(p.y * resolution)),
            int(round(p.z * resolution)))


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle with a fixed winding order.

    The unit normal follows the right-hand rule over ``(v1, v2, v3)``.  A
    collapsed triangle gets the zero vector as its normal; the validator
    reports such faces, construction never fails.
    """

    v1: Point3
    v2: Point3
    v3: Point3
    normal: Optional[Point3] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.normal is None:
            object.__setattr__(self, 'normal', triangle_normal(self.v1, self.v2, self.v3))

    @property
    def vertices(self) -> Tuple[Point3, Point3, Point3]:
        return self.v1, self.v2, self.v3

    def flip(self) -> "Triangle":
        """Return a new triangle with reversed winding."""

        return Triangle(self.v3, self.v2, self.v1)


def triangle_normal(v1: Point3, v2: Point3, v3: Point3) -> Point3:
    """Return ``normalize(cross(v2 - v1, v3 - v1))``."""

    return cross(v2 - v1, v3 - v1).normalized()


def triangle_area(v1: Point3, v2: Point3, v3: Point3) -> float:
    """Return the area of a triangle."""

    # computed in double precision so tiny faces are not rounded to zero
    ax, ay, az = v2.x - v1.x, v2.y - v1.y, v2.z - v1.z
    bx, by, bz = v3.x - v1.x, v3.y - v1.y, v3.z - v1.z
    cx = ay * bz - az * by
    cy = az * bx - ax * bz
    cz = ax * by - ay * bx
    return 0.5 * math.sqrt(cx * cx + cy * cy + cz * cz)


def triangle_centroid(v1: Point3, v2: Point3, v3: Point3) -> Point3:
    """Return the centroid of a triangle."""

    return Point3((v1.x + v2.x + v3.x) / 3.0,
                  (v1.y + v2.y + v3.y) / 3.0,
                  (v1.z + v2.z + v3.z) / 3.0)


__all__ = [
    "Point3",
    "Triangle",
    "Vec3",
    "ZERO",
    "epsilon",
    "cross",
    "dot",
    "quantize",
    "triangle_normal",
    "triangle_area",
    "triangle_centroid",
]
