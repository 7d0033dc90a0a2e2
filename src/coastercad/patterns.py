"""Decorative and functional pattern layers.

Every generator returns a list of triangles meant to be merged into the
coaster mesh.  Nothing is subtracted from the body: recesses are loose
shells of walls and floor, and overlapping or self-intersecting output
is expected.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List

from coastercad.geom_util import (Profile, grid_samples, point_in_profile,
                                  profile_bbox_center, profile_bounds, profile_centroid)
from coastercad.geometry_utils import Triangle
from coastercad.primitives import (STUB_HEIGHT, STUB_RADIUS, add_circular_groove, add_groove,
                                   add_hexagon_recess, add_stub)
from coastercad.settings import AdvancedSettings, BasePattern, SurfacePattern

DOT_SPACING = 15.0
CIRCLE_SEGMENTS = 32
HEX_FILL = 0.8
DRAINAGE_REACH = 0.8


def honeycomb(profile: Profile, cell_size: float, depth: float, base_z: float) -> List[Triangle]:
    """Staggered grid of hexagonal recesses.

    Rows are ``1.5 * hex_height`` apart and odd rows start
    ``0.75 * hex_width`` to the right.  Each accepted centre gets a
    recess of radius ``0.8 * cell_size / 2``.
    """

    min_x, max_x, min_y, max_y = profile_bounds(profile)
    hex_radius = cell_size / 2.0
    hex_height = hex_radius * math.sqrt(3.0)
    hex_width = hex_radius * 2.0

    triangles: List[Triangle] = []
    for row, y in enumerate(grid_samples(min_y, max_y, hex_height * 1.5, inclusive=True)):
        start_x = min_x + hex_width * 0.75 if row % 2 == 1 else min_x
        for x in grid_samples(start_x, max_x, hex_width * 1.5, inclusive=True):
            if point_in_profile(x, y, profile):
                add_hexagon_recess(triangles, x, y, hex_radius * HEX_FILL, depth, base_z)
    return triangles


def grid(profile: Profile, spacing: float, line_width: float, depth: float,
         base_z: float) -> List[Triangle]:
    """Dashed horizontal and vertical grooves every ``spacing`` units.

    Each dash is ``line_width`` long with an equal gap, and is only kept
    when both of its endpoints are inside the profile.
    """

    min_x, max_x, min_y, max_y = profile_bounds(profile)
    triangles: List[Triangle] = []

    for y in grid_samples(min_y + spacing, max_y, spacing):
        for x in grid_samples(min_x, max_x - line_width, line_width * 2):
            if point_in_profile(x, y, profile) and point_in_profile(x + line_width, y, profile):
                add_groove(triangles, x, y, x + line_width, y, line_width, depth, base_z)

    for x in grid_samples(min_x + spacing, max_x, spacing):
        for y in grid_samples(min_y, max_y - line_width, line_width * 2):
            if point_in_profile(x, y, profile) and point_in_profile(x, y + line_width, profile):
                add_groove(triangles, x, y, x, y + line_width, line_width, depth, base_z)

    return triangles


def concentric_circles(profile: Profile, spacing: float, groove_width: float, depth: float,
                       base_z: float) -> List[Triangle]:
    """Circular grooves around the bounding-box centre, ``spacing`` apart."""

    min_x, max_x, min_y, max_y = profile_bounds(profile)
    cx, cy = profile_bbox_center(profile)
    max_radius = min(max_x - cx, max_y - cy)

    triangles: List[Triangle] = []
    for radius in grid_samples(spacing, max_radius, spacing):
        add_circular_groove(triangles, cx, cy, radius, groove_width, depth, base_z, CIRCLE_SEGMENTS)
    return triangles


def drainage_grooves(profile: Profile, count: int, width: float, depth: float,
                     top_z: float) -> List[Triangle]:
    """``count`` straight grooves radiating from the profile centroid.

    Each groove runs to ``0.8`` of the smaller bounding-box half extent.
    """

    min_x, max_x, min_y, max_y = profile_bounds(profile)
    cx, cy = profile_centroid(profile)
    reach = min((max_x - min_x) / 2.0, (max_y - min_y) / 2.0) * DRAINAGE_REACH

    triangles: List[Triangle] = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        add_groove(triangles, cx, cy, cx + reach * math.cos(angle), cy + reach * math.sin(angle),
                   width, depth, top_z)
    return triangles


def non_slip_dots(profile: Profile, radius: float = STUB_RADIUS, height: float = STUB_HEIGHT,
                  spacing: float = DOT_SPACING) -> List[Triangle]:
    """Downward stubs on a grid inset one ``spacing`` from the bounding box."""

    min_x, max_x, min_y, max_y = profile_bounds(profile)
    triangles: List[Triangle] = []
    for x in grid_samples(min_x + spacing, max_x - spacing, spacing):
        for y in grid_samples(min_y + spacing, max_y - spacing, spacing):
            if point_in_profile(x, y, profile):
                add_stub(triangles, x, y, radius, height)
    return triangles


def _no_pattern(profile: Profile, advanced: AdvancedSettings) -> List[Triangle]:
    return []


_BASE_PATTERNS: Dict[BasePattern, Callable[[Profile, AdvancedSettings], List[Triangle]]] = {
    BasePattern.SOLID: _no_pattern,
    BasePattern.HONEYCOMB: lambda p, a: honeycomb(
        p, a.honeycomb_cell_size, a.base_pattern_depth, a.base_pattern_depth),
    BasePattern.GRID: lambda p, a: grid(
        p, a.grid_spacing, a.groove_width, a.base_pattern_depth, a.base_pattern_depth),
    BasePattern.CONCENTRIC_CIRCLES: lambda p, a: concentric_circles(
        p, a.grid_spacing, a.groove_width, a.base_pattern_depth, a.base_pattern_depth),
    BasePattern.DOTS: lambda p, a: non_slip_dots(p),
}

_SURFACE_PATTERNS: Dict[SurfacePattern, Callable[[Profile, AdvancedSettings, float], List[Triangle]]] = {
    SurfacePattern.NONE: lambda p, a, z: [],
    SurfacePattern.DRAINAGE_GROOVES: lambda p, a, z: drainage_grooves(
        p, a.drainage_groove_count, a.groove_width, a.drainage_groove_depth, z),
}

_missing = (set(BasePattern) - set(_BASE_PATTERNS)) | (set(SurfacePattern) - set(_SURFACE_PATTERNS))
if _missing:  # pragma: no cover
    raise RuntimeError(f"no pattern generator for {sorted(m.name for m in _missing)}")


def generate_base_pattern(profile: Profile, advanced: AdvancedSettings) -> List[Triangle]:
    """Pattern for the underside.

    Recess shells hang from ``z = base_pattern_depth`` down to the bottom
    plane; ``DOTS`` protrude below it.
    """

    return _BASE_PATTERNS[advanced.base_pattern](profile, advanced)


def generate_surface_pattern(profile: Profile, advanced: AdvancedSettings,
                             top_z: float) -> List[Triangle]:
    return _SURFACE_PATTERNS[advanced.surface_pattern](profile, advanced, top_z)


__all__ = [
    'honeycomb',
    'grid',
    'concentric_circles',
    'drainage_grooves',
    'non_slip_dots',
    'generate_base_pattern',
    'generate_surface_pattern',
]
