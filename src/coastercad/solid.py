"""Coaster body assembly.

:class:`SolidMeshBuilder` runs the fixed pipeline

    profile -> base cap -> top (flat or relief) -> side walls
            -> edge treatment -> non-slip stubs

and returns a fresh :class:`~coastercad.mesh.Mesh` per call.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from coastercad.geom_util import Profile, offset_profile
from coastercad.geometry_utils import Point3
from coastercad.mesh import Mesh
from coastercad.patterns import non_slip_dots
from coastercad.profiles import generate_profile
from coastercad.relief import HeightField, ReliefSurfaceBuilder, Resampler
from coastercad.settings import CoasterSpec, EdgeStyle

RIM_WIDTH = 2.0
RIM_MAX_HEIGHT = 2.0
NON_SLIP_SPACING = 15.0


def add_base_cap(mesh: Mesh, profile: Profile) -> None:
    """Fan from the origin at ``z = 0``, wound so normals face ``-z``."""

    center = Point3(0.0, 0.0, 0.0)
    n = len(profile)
    for i in range(n):
        x1, y1 = profile[i]
        x2, y2 = profile[(i + 1) % n]
        mesh.add_triangle(center, Point3(x2, y2, 0.0), Point3(x1, y1, 0.0))


def add_top_cap(mesh: Mesh, profile: Profile, height: float) -> None:
    """Fan from ``(0, 0, height)``, wound so normals face ``+z``."""

    center = Point3(0.0, 0.0, height)
    n = len(profile)
    for i in range(n):
        x1, y1 = profile[i]
        x2, y2 = profile[(i + 1) % n]
        mesh.add_triangle(center, Point3(x1, y1, height), Point3(x2, y2, height))


def add_side_walls(mesh: Mesh, profile: Profile, height: float) -> None:
    n = len(profile)
    for i in range(n):
        x1, y1 = profile[i]
        x2, y2 = profile[(i + 1) % n]
        b1 = Point3(x1, y1, 0.0)
        b2 = Point3(x2, y2, 0.0)
        t1 = Point3(x1, y1, height)
        t2 = Point3(x2, y2, height)
        mesh.add_triangle(b1, b2, t2)
        mesh.add_triangle(b1, t2, t1)


def add_raised_rim(mesh: Mesh, profile: Profile, spec: CoasterSpec) -> None:
    """Sloped ring from an inset copy of the outline up to the outer edge.

    The inner edge stays at ``total_height``; the outer edge is lifted by
    ``min(2, total_height - base_thickness)``.
    """

    rim_height = min(RIM_MAX_HEIGHT, spec.total_height - spec.base_thickness)
    top_z = spec.total_height
    inner = offset_profile(profile, RIM_WIDTH)

    n = len(profile)
    for i in range(n):
        ox1, oy1 = profile[i]
        ox2, oy2 = profile[(i + 1) % n]
        ix1, iy1 = inner[i]
        ix2, iy2 = inner[(i + 1) % n]
        mesh.add_quad(Point3(ix1, iy1, top_z),
                      Point3(ox1, oy1, top_z + rim_height),
                      Point3(ox2, oy2, top_z + rim_height),
                      Point3(ix2, iy2, top_z))


def _no_edge_treatment(mesh: Mesh, profile: Profile, spec: CoasterSpec) -> None:
    pass


# BEVELED and ROUNDED leave the walls untouched.
EDGE_TREATMENTS: Dict[EdgeStyle, Callable[[Mesh, Profile, CoasterSpec], None]] = {
    EdgeStyle.FLAT: _no_edge_treatment,
    EdgeStyle.BEVELED: _no_edge_treatment,
    EdgeStyle.ROUNDED: _no_edge_treatment,
    EdgeStyle.RAISED_RIM: add_raised_rim,
}

_missing = set(EdgeStyle) - set(EDGE_TREATMENTS)
if _missing:  # pragma: no cover
    raise RuntimeError(f"no edge treatment for {sorted(m.name for m in _missing)}")


class SolidMeshBuilder:
    """Build the coaster body for a :class:`CoasterSpec`.

    ``resampler`` is handed to the relief builder when a height field is
    supplied; ``None`` selects nearest-neighbour sampling.
    """

    def __init__(self, resampler: Optional[Resampler] = None) -> None:
        self.resampler = resampler

    def build(self, spec: CoasterSpec, height_field: Optional[HeightField] = None,
              profile: Optional[Profile] = None) -> Mesh:
        spec.validate()
        if profile is None:
            profile = generate_profile(spec)

        mesh = Mesh()
        add_base_cap(mesh, profile)

        if height_field is not None:
            relief = ReliefSurfaceBuilder(self.resampler)
            mesh.add_triangles(relief.build(profile, spec, height_field))
        else:
            add_top_cap(mesh, profile, spec.total_height)

        add_side_walls(mesh, profile, spec.total_height)
        EDGE_TREATMENTS[spec.edge_style](mesh, profile, spec)

        if spec.add_non_slip_bottom:
            mesh.add_triangles(non_slip_dots(profile, spacing=NON_SLIP_SPACING))

        return mesh


def build_solid(spec: CoasterSpec, height_field: Optional[HeightField] = None) -> Mesh:
    """Convenience wrapper around :meth:`SolidMeshBuilder.build`."""

    return SolidMeshBuilder().build(spec, height_field)


__all__ = [
    'RIM_WIDTH',
    'NON_SLIP_SPACING',
    'EDGE_TREATMENTS',
    'SolidMeshBuilder',
    'build_solid',
    'add_base_cap',
    'add_top_cap',
    'add_side_walls',
    'add_raised_rim',
]
