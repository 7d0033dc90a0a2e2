"""Small closed or open solids appended as overlay geometry.

These primitives append triangles to a plain list; the callers decide
where the list ends up (a :class:`~coastercad.mesh.Mesh` or a pattern
layer).  None of them cut anything out of the coaster body: a "recess"
is only the shell of walls and floor of the pocket.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from coastercad.geom_util import Point2D
from coastercad.geometry_utils import Point3, Triangle

STUB_SIDES = 8
STUB_RADIUS = 1.0
STUB_HEIGHT = 0.5


def add_stub(triangles: List[Triangle], x: float, y: float,
             radius: float = STUB_RADIUS, height: float = STUB_HEIGHT,
             sides: int = STUB_SIDES) -> None:
    """Faceted cone hanging below ``z = 0`` at ``(x, y)``.

    Each side contributes one cap triangle at ``z = 0`` and one facet to
    the apex at ``z = -height``.
    """

    center = Point3(x, y, 0.0)
    tip = Point3(x, y, -height)
    for i in range(sides):
        a1 = 2 * math.pi * i / sides
        a2 = 2 * math.pi * (i + 1) / sides
        p1 = Point3(x + radius * math.cos(a1), y + radius * math.sin(a1), 0.0)
        p2 = Point3(x + radius * math.cos(a2), y + radius * math.sin(a2), 0.0)
        triangles.append(Triangle(center, p1, p2))
        triangles.append(Triangle(tip, p2, p1))


def add_groove(triangles: List[Triangle], x1: float, y1: float, x2: float, y2: float,
               width: float, depth: float, top_z: float) -> None:
    """Rectangular channel from ``(x1, y1)`` to ``(x2, y2)``.

    The two rails sit ``width / 2`` either side of the segment.  Floor,
    two long walls and two end walls span ``top_z - depth .. top_z``.
    Segments shorter than 0.001 emit nothing.
    """

    dx = x2 - x1
    dy = y2 - y1
    length = math.sqrt(dx * dx + dy * dy)
    if length < 0.001:
        return

    px = -dy / length * width / 2.0
    py = dx / length * width / 2.0
    bottom_z = top_z - depth

    corners = ((x1 + px, y1 + py), (x1 - px, y1 - py), (x2 - px, y2 - py), (x2 + px, y2 + py))
    top = [Point3(cx, cy, top_z) for cx, cy in corners]
    bot = [Point3(cx, cy, bottom_z) for cx, cy in corners]

    triangles.append(Triangle(bot[0], bot[2], bot[1]))
    triangles.append(Triangle(bot[0], bot[3], bot[2]))

    for i in range(4):
        j = (i + 1) % 4
        triangles.append(Triangle(top[i], top[j], bot[j]))
        triangles.append(Triangle(top[i], bot[j], bot[i]))


def add_circular_groove(triangles: List[Triangle], cx: float, cy: float, radius: float,
                        width: float, depth: float, top_z: float, segments: int = 32) -> None:
    """Annular channel of the given centre-line radius."""

    bottom_z = top_z - depth
    r_in = radius - width / 2.0
    r_out = radius + width / 2.0

    for i in range(segments):
        a1 = 2 * math.pi * i / segments
        a2 = 2 * math.pi * (i + 1) / segments
        c1, s1 = math.cos(a1), math.sin(a1)
        c2, s2 = math.cos(a2), math.sin(a2)

        in1 = Point3(cx + r_in * c1, cy + r_in * s1, top_z)
        in2 = Point3(cx + r_in * c2, cy + r_in * s2, top_z)
        in1b = Point3(cx + r_in * c1, cy + r_in * s1, bottom_z)
        in2b = Point3(cx + r_in * c2, cy + r_in * s2, bottom_z)
        out1 = Point3(cx + r_out * c1, cy + r_out * s1, top_z)
        out2 = Point3(cx + r_out * c2, cy + r_out * s2, top_z)
        out1b = Point3(cx + r_out * c1, cy + r_out * s1, bottom_z)
        out2b = Point3(cx + r_out * c2, cy + r_out * s2, bottom_z)

        # floor
        triangles.append(Triangle(in1b, in2b, out2b))
        triangles.append(Triangle(in1b, out2b, out1b))
        # inner wall
        triangles.append(Triangle(in1, in1b, in2b))
        triangles.append(Triangle(in1, in2b, in2))
        # outer wall
        triangles.append(Triangle(out1, out2b, out1b))
        triangles.append(Triangle(out1, out2, out2b))


def add_hexagon_recess(triangles: List[Triangle], cx: float, cy: float, radius: float,
                       depth: float, base_z: float) -> None:
    """Hexagonal pocket: floor at ``base_z - depth`` plus six walls."""

    sides = 6
    bottom_z = base_z - depth
    pts = [(cx + radius * math.cos(2 * math.pi * i / sides),
            cy + radius * math.sin(2 * math.pi * i / sides)) for i in range(sides)]

    center = Point3(cx, cy, bottom_z)
    for i in range(sides):
        p1 = pts[i]
        p2 = pts[(i + 1) % sides]
        triangles.append(Triangle(center,
                                  Point3(p2[0], p2[1], bottom_z),
                                  Point3(p1[0], p1[1], bottom_z)))

    for i in range(sides):
        p1 = pts[i]
        p2 = pts[(i + 1) % sides]
        triangles.append(Triangle(Point3(p1[0], p1[1], base_z),
                                  Point3(p2[0], p2[1], base_z),
                                  Point3(p2[0], p2[1], bottom_z)))
        triangles.append(Triangle(Point3(p1[0], p1[1], base_z),
                                  Point3(p2[0], p2[1], bottom_z),
                                  Point3(p1[0], p1[1], bottom_z)))


def add_box(triangles: List[Triangle], corners: Sequence[Point2D],
            bottom_z: float, top_z: float) -> None:
    """Extrude a counter-clockwise quad between two heights (12 triangles)."""

    top = [Point3(x, y, top_z) for x, y in corners]
    bot = [Point3(x, y, bottom_z) for x, y in corners]

    triangles.append(Triangle(top[0], top[1], top[2]))
    triangles.append(Triangle(top[0], top[2], top[3]))

    triangles.append(Triangle(bot[0], bot[2], bot[1]))
    triangles.append(Triangle(bot[0], bot[3], bot[2]))

    for i in range(4):
        j = (i + 1) % 4
        triangles.append(Triangle(top[i], bot[i], bot[j]))
        triangles.append(Triangle(top[i], bot[j], top[j]))


__all__ = [
    'STUB_SIDES',
    'STUB_RADIUS',
    'STUB_HEIGHT',
    'add_stub',
    'add_groove',
    'add_circular_groove',
    'add_hexagon_recess',
    'add_box',
]
