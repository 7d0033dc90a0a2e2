"""Append-only triangle container produced by the builder pipeline."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

from coastercad.geometry_utils import ZERO, Point3, Triangle

BoundingBox = Tuple[Point3, Point3]


class Mesh:
    """Ordered sequence of triangles.

    No vertex or triangle deduplication happens here; the 3MF writer does
    its own vertex sharing.  Consumers read triangles through
    :attr:`triangles` or by iterating the mesh.
    """

    def __init__(self, triangles: Optional[Iterable[Triangle]] = None) -> None:
        self._triangles = list(triangles) if triangles is not None else []

    def __len__(self) -> int:
        return len(self._triangles)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self._triangles)

    def __repr__(self) -> str:
        return f"Mesh({len(self._triangles)} triangles)"

    @property
    def triangles(self) -> Tuple[Triangle, ...]:
        return tuple(self._triangles)

    @property
    def triangle_count(self) -> int:
        return len(self._triangles)

    def add_triangle(self, v1, v2: Optional[Point3] = None, v3: Optional[Point3] = None) -> None:
        """Append a :class:`Triangle`, or build one from three vertices."""

        if isinstance(v1, Triangle):
            self._triangles.append(v1)
        else:
            self._triangles.append(Triangle(v1, v2, v3))

    def add_triangles(self, triangles: Iterable[Triangle]) -> None:
        self._triangles.extend(triangles)

    def add_quad(self, v1: Point3, v2: Point3, v3: Point3, v4: Point3) -> None:
        """Split the quad ``v1..v4`` along the ``v1``-``v3`` diagonal."""

        self._triangles.append(Triangle(v1, v2, v3))
        self._triangles.append(Triangle(v1, v3, v4))

    def merge(self, other: "Mesh") -> None:
        self._triangles.extend(other._triangles)

    def bounding_box(self) -> BoundingBox:
        """Return ``(min, max)`` corners; an empty mesh yields the origin twice."""

        if not self._triangles:
            return ZERO, ZERO

        xs = []
        ys = []
        zs = []
        for tri in self._triangles:
            for v in (tri.v1, tri.v2, tri.v3):
                xs.append(v.x)
                ys.append(v.y)
                zs.append(v.z)
        return Point3(min(xs), min(ys), min(zs)), Point3(max(xs), max(ys), max(zs))

    def translate(self, offset: Point3) -> "Mesh":
        return Mesh(Triangle(t.v1 + offset, t.v2 + offset, t.v3 + offset)
                    for t in self._triangles)

    def center_at_origin(self) -> "Mesh":
        """Return a copy centred on the origin in X and Y."""

        lo, hi = self.bounding_box()
        return self.translate(Point3(-(lo.x + hi.x) / 2.0, -(lo.y + hi.y) / 2.0, 0.0))


__all__ = ["Mesh", "BoundingBox"]
