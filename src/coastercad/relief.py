"""Height-field driven top surface.

A :class:`HeightField` is a 2D array of floats nominally in ``[0, 1]``.
Row ``0`` is the minimum-y edge of the coaster, column ``0`` the
minimum-x edge.  The relief builder lays a regular grid over the
profile's bounding box and asks a :class:`Resampler` for the height at
each grid vertex, so the interpolation scheme can change without
touching the mesh assembly.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from coastercad.geom_util import Profile, point_in_profile, profile_bounds
from coastercad.geometry_utils import Point3, Triangle
from coastercad.settings import CoasterSpec


class HeightField:
    """Immutable grid of heights stored as a ``(height, width)`` array."""

    def __init__(self, data) -> None:
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 2 or arr.size == 0:
            raise ValueError(f"height field must be a non-empty 2D array, got shape {arr.shape}")
        arr.setflags(write=False)
        self._data = arr

    @classmethod
    def flat(cls, width: int, height: int, value: float = 0.0) -> "HeightField":
        return cls(np.full((height, width), value, dtype=np.float64))

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def shape(self):
        return self._data.shape

    def __getitem__(self, index):
        return self._data[index]

    def __repr__(self) -> str:
        return f"HeightField({self.width}x{self.height})"


class Resampler:
    """Map fractional grid coordinates onto height field samples.

    ``fx`` and ``fy`` run from 0 at the minimum edge to 1 at the maximum
    edge of the field.  Subclasses implement :meth:`sample_grid`.
    """

    def sample_grid(self, field: HeightField, fx: np.ndarray, fy: np.ndarray) -> np.ndarray:
        """Return an array of shape ``(len(fy), len(fx))``."""

        raise NotImplementedError

    def sample(self, field: HeightField, fx: float, fy: float) -> float:
        return float(self.sample_grid(field, np.array([fx]), np.array([fy]))[0, 0])


class NearestResampler(Resampler):
    """Nearest sample, index ``round(fraction * (dim - 1))`` rounding halves up."""

    @staticmethod
    def indices(fractions: np.ndarray, dim: int) -> np.ndarray:
        idx = np.floor(fractions * (dim - 1) + 0.5).astype(np.int64)
        return np.clip(idx, 0, dim - 1)

    def sample_grid(self, field, fx, fy):
        cols = self.indices(np.asarray(fx, dtype=np.float64), field.width)
        rows = self.indices(np.asarray(fy, dtype=np.float64), field.height)
        return field.data[np.ix_(rows, cols)]


class BilinearResampler(Resampler):
    """Linear blend of the four surrounding samples."""

    @staticmethod
    def _split(fractions: np.ndarray, dim: int):
        pos = np.clip(fractions * (dim - 1), 0.0, dim - 1)
        lo = np.floor(pos).astype(np.int64)
        hi = np.minimum(lo + 1, dim - 1)
        return lo, hi, pos - lo

    def sample_grid(self, field, fx, fy):
        x0, x1, tx = self._split(np.asarray(fx, dtype=np.float64), field.width)
        y0, y1, ty = self._split(np.asarray(fy, dtype=np.float64), field.height)
        d = field.data
        top = d[np.ix_(y0, x0)] * (1 - tx) + d[np.ix_(y0, x1)] * tx
        bottom = d[np.ix_(y1, x0)] * (1 - tx) + d[np.ix_(y1, x1)] * tx
        return top * (1 - ty)[:, None] + bottom * ty[:, None]


class ReliefSurfaceBuilder:
    """Triangulate a height field over a profile.

    The grid has ``max(width, height) + 1`` vertices per side spanning the
    profile's bounding box.  Vertices outside the profile sit flush at
    ``base_thickness``.  Each cell splits into two triangles, and a
    triangle is kept only when its centroid lies inside the profile, so
    the boundary is stair-stepped rather than clipped.
    """

    def __init__(self, resampler: Optional[Resampler] = None) -> None:
        self.resampler = resampler or NearestResampler()

    def vertex_grid(self, profile: Profile, spec: CoasterSpec,
                    field: HeightField) -> List[List[Point3]]:
        """Return grid vertices indexed ``[iy][ix]``."""

        min_x, max_x, min_y, max_y = profile_bounds(profile)
        resolution = max(field.width, field.height)
        cell_x = (max_x - min_x) / resolution
        cell_y = (max_y - min_y) / resolution

        fractions = np.arange(resolution + 1, dtype=np.float64) / resolution
        samples = self.resampler.sample_grid(field, fractions, fractions)

        relief = samples * spec.relief_depth
        if spec.invert_relief:
            relief = spec.relief_depth - relief
        heights = spec.base_thickness + relief

        grid: List[List[Point3]] = []
        for iy in range(resolution + 1):
            y = min_y + iy * cell_y
            row: List[Point3] = []
            for ix in range(resolution + 1):
                x = min_x + ix * cell_x
                if point_in_profile(x, y, profile):
                    z = float(heights[iy, ix])
                else:
                    z = spec.base_thickness
                row.append(Point3(x, y, z))
            grid.append(row)
        return grid

    def build(self, profile: Profile, spec: CoasterSpec, field: HeightField) -> List[Triangle]:
        grid = self.vertex_grid(profile, spec, field)
        resolution = len(grid) - 1

        triangles: List[Triangle] = []
        for iy in range(resolution):
            lower = grid[iy]
            upper = grid[iy + 1]
            for ix in range(resolution):
                v00 = lower[ix]
                v10 = lower[ix + 1]
                v01 = upper[ix]
                v11 = upper[ix + 1]
                if _centroid_inside((v00, v10, v11), profile):
                    triangles.append(Triangle(v00, v10, v11))
                if _centroid_inside((v00, v11, v01), profile):
                    triangles.append(Triangle(v00, v11, v01))
        return triangles


def _centroid_inside(vertices: Sequence[Point3], profile: Profile) -> bool:
    cx = (vertices[0].x + vertices[1].x + vertices[2].x) / 3.0
    cy = (vertices[0].y + vertices[1].y + vertices[2].y) / 3.0
    return point_in_profile(cx, cy, profile)


__all__ = [
    'HeightField',
    'Resampler',
    'NearestResampler',
    'BilinearResampler',
    'ReliefSurfaceBuilder',
]
