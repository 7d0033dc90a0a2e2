"""Structural health checks for generated meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from coastercad.geometry_utils import Point3, triangle_area
from coastercad.mesh import BoundingBox, Mesh

DEGENERATE_AREA = 1e-10


@dataclass
class ValidationResult:
    """Outcome of :func:`validate_mesh`.

    Only ``errors`` affect validity; warnings are informational.
    ``bounding_box`` is ``None`` when the mesh was empty.
    """

    triangle_count: int = 0
    bounding_box: Optional[BoundingBox] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def size(self) -> Point3:
        if self.bounding_box is None:
            return Point3(0.0, 0.0, 0.0)
        lo, hi = self.bounding_box
        return hi - lo

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def summary(self) -> str:
        size = self.size
        lines = [
            f"Validation Result: {'Valid' if self.is_valid else 'Invalid'}",
            f"Triangle Count: {self.triangle_count}",
        ]
        if self.bounding_box is not None:
            lo, hi = self.bounding_box
            lines.append(f"Bounding Box: ({lo.x:.2f}, {lo.y:.2f}, {lo.z:.2f}) to "
                         f"({hi.x:.2f}, {hi.y:.2f}, {hi.z:.2f})")
        lines.append(f"Size: {size.x:.2f} x {size.y:.2f} x {size.z:.2f} mm")
        if self.errors:
            lines.append("Errors:")
            lines.extend(f"  - {e}" for e in self.errors)
        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  - {w}" for w in self.warnings)
        return "\n".join(lines)


def validate_mesh(mesh: Mesh) -> ValidationResult:
    """Check ``mesh`` for emptiness, collapsed faces, broken normals and NaN or
    infinite coordinates."""

    result = ValidationResult()
    if mesh.triangle_count == 0:
        result.add_error("Mesh has no triangles.")
        return result

    degenerate = 0
    bad_normals = 0
    non_finite = 0
    for tri in mesh:
        if not all(v.is_finite() for v in tri.vertices):
            non_finite += 1
        if triangle_area(tri.v1, tri.v2, tri.v3) < DEGENERATE_AREA:
            degenerate += 1
        if not all(math.isfinite(c) for c in tri.normal):
            bad_normals += 1

    if degenerate:
        result.add_warning(f"Mesh contains {degenerate} degenerate triangles (zero area).")
    if bad_normals:
        result.add_warning(f"Mesh contains {bad_normals} triangles with invalid normals.")
    if non_finite:
        result.add_warning(f"Mesh contains {non_finite} triangles with non-finite coordinates.")

    result.triangle_count = mesh.triangle_count
    result.bounding_box = mesh.bounding_box()
    return result


__all__ = ['ValidationResult', 'validate_mesh', 'DEGENERATE_AREA']
