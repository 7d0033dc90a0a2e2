"""Closed 2D outlines for each coaster shape.

Every generator returns a counter-clockwise list of ``(x, y)`` tuples
centred on the origin.  Output is deterministic: downstream builders
index profile points by position.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

from coastercad.geom_util import Profile
from coastercad.settings import CoasterSpec, ShapeKind


def generate_circle(radius: float, segments: int) -> Profile:
    """Return ``segments`` points on the circle; no points for ``segments < 1``."""

    return [(radius * math.cos(2 * math.pi * i / segments),
             radius * math.sin(2 * math.pi * i / segments))
            for i in range(segments)]


def generate_square(size: float) -> Profile:
    half = size / 2.0
    return [(-half, -half), (half, -half), (half, half), (-half, half)]


def generate_polygon(radius: float, sides: int) -> Profile:
    """Regular polygon sampled like a circle with a ``-pi/2`` phase.

    The phase keeps a vertex on the y axis, so hexagons and octagons have
    vertices at both ``+y`` and ``-y`` and sit symmetrically about both
    axes.
    """

    if sides < 1:
        return []
    offset = -math.pi / 2.0
    return [(radius * math.cos(offset + 2 * math.pi * i / sides),
             radius * math.sin(offset + 2 * math.pi * i / sides))
            for i in range(sides)]


def generate_hexagon(radius: float) -> Profile:
    return generate_polygon(radius, 6)


def generate_octagon(radius: float) -> Profile:
    return generate_polygon(radius, 8)


def generate_rounded_square(size: float, corner_radius: float, segments_per_corner: int) -> Profile:
    """Square with quarter-circle corners.

    Each corner arc has ``segments_per_corner + 1`` samples, so adjacent
    arcs share no points and the straight sides appear as the gaps
    between them.

    Fewer than one segment per corner yields an empty profile, as
    for circles and polygons.
    """

    if segments_per_corner < 1:
        return []
    half = size / 2.0
    r = min(corner_radius, half - 1.0)
    corners = (
        (half - r, half - r, 0.0),
        (-half + r, half - r, math.pi / 2.0),
        (-half + r, -half + r, math.pi),
        (half - r, -half + r, 3.0 * math.pi / 2.0),
    )

    points: Profile = []
    for cx, cy, start in corners:
        for i in range(segments_per_corner + 1):
            angle = start + (math.pi / 2.0) * i / segments_per_corner
            points.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return points


_PROFILE_BUILDERS: Dict[ShapeKind, Callable[[CoasterSpec], Profile]] = {
    ShapeKind.CIRCLE: lambda s: generate_circle(s.diameter / 2.0, s.curve_resolution * 4),
    ShapeKind.SQUARE: lambda s: generate_square(s.diameter),
    ShapeKind.HEXAGON: lambda s: generate_hexagon(s.diameter / 2.0),
    ShapeKind.OCTAGON: lambda s: generate_octagon(s.diameter / 2.0),
    ShapeKind.ROUNDED_SQUARE: lambda s: generate_rounded_square(
        s.diameter, s.corner_radius, s.curve_resolution),
    ShapeKind.CUSTOM_POLYGON: lambda s: generate_polygon(s.diameter / 2.0, s.polygon_sides),
}

_missing = set(ShapeKind) - set(_PROFILE_BUILDERS)
if _missing:  # pragma: no cover - guards against adding a shape without a builder
    raise RuntimeError(f"no profile builder for {sorted(m.name for m in _missing)}")


def generate_profile(spec: CoasterSpec) -> Profile:
    """Return the outline for ``spec.shape``.

    Circles use ``curve_resolution * 4`` segments, rounded squares use
    ``curve_resolution`` segments per corner.
    """

    return _PROFILE_BUILDERS[spec.shape](spec)


__all__ = [
    'generate_circle',
    'generate_square',
    'generate_polygon',
    'generate_hexagon',
    'generate_octagon',
    'generate_rounded_square',
    'generate_profile',
]
